"""Cognate practice queue: rule intro, typed answers, multiple choice, false-cognate warnings."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from speedrun.curriculum.loader import CognateRule, FalseCognate
from speedrun.curriculum.repository import Curriculum
from speedrun.engine.distractors import generate_cognate_options
from speedrun.engine.exercises import (
    Exercise,
    FalseCognateWarning,
    MultipleChoice,
    RuleIntro,
    TypeAnswer,
)
from speedrun.engine.shuffle import resolve_rng, shuffled

RICH_RULE_EXAMPLES = 6


def false_cognate_position(queue_length: int, false_cognate_count: int) -> int:
    return min(queue_length, max(2, queue_length // (false_cognate_count + 1)))


def build_cognate_exercises(
    rules: Sequence[CognateRule],
    false_cognates: Sequence[FalseCognate],
    all_rules: Sequence[CognateRule],
    rng: Optional[random.Random] = None,
) -> list[Exercise]:
    """Build the per-rule sequence, then splice in the false-cognate warnings.

    Rules with at least six examples get three typed and three multiple-choice
    items from disjoint examples; smaller rules get two of each, reusing the
    typed examples for multiple choice when there aren't four to split.
    """
    rng = resolve_rng(rng)
    queue: list[Exercise] = []

    for rule in rules:
        queue.append(RuleIntro(id=f"intro-{rule.id}", rule=rule))

        examples = shuffled(rule.examples, rng)
        per_type = 3 if len(examples) >= RICH_RULE_EXAMPLES else 2
        typed = examples[:per_type]
        if len(examples) >= per_type * 2:
            chosen = examples[per_type : per_type * 2]
        else:
            chosen = examples[:per_type]

        for ex in typed:
            queue.append(TypeAnswer(
                id=f"type-{rule.id}-{ex.english}",
                english=ex.english,
                correct_spanish=ex.spanish,
                rule=rule,
            ))

        for ex in chosen:
            options = generate_cognate_options(ex.spanish, all_rules, ex.english, rng)
            correct_index = options.index(ex.spanish) if ex.spanish in options else 0
            queue.append(MultipleChoice(
                id=f"mc-{rule.id}-{ex.english}",
                english=ex.english,
                options=tuple(options),
                correct_index=correct_index,
                rule=rule,
            ))

    if not false_cognates:
        return queue

    # Every warning targets the index computed from the pre-insertion length,
    # so later warnings land ahead of earlier ones
    position = false_cognate_position(len(queue), len(false_cognates))
    for fc in false_cognates:
        queue.insert(position, FalseCognateWarning(id=f"fc-{fc.id}", false_cognate=fc))
    return queue


def build_cognate_queue(
    curriculum: Curriculum, day: int, rng: Optional[random.Random] = None
) -> list[Exercise]:
    return build_cognate_exercises(
        curriculum.rules_for_day(day),
        curriculum.false_cognates_for_day(day),
        curriculum.rules_up_to_day(day),
        rng,
    )
