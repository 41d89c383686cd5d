"""Mixed end-of-day quiz."""

from __future__ import annotations

import random
from typing import Optional

from speedrun.curriculum.loader import PERSONS
from speedrun.curriculum.repository import Curriculum
from speedrun.engine.distractors import DISTRACTOR_COUNT, generate_frame_distractors
from speedrun.engine.exercises import Exercise, FrameFill, TypeAnswer, VerbQuiz, VocabChoice
from speedrun.engine.shuffle import resolve_rng, shuffled

QUIZ_SIZE = 15
VOCAB_ITEMS = 5
COGNATE_ITEMS = 3
FRAME_ITEMS = 3
VERB_ITEMS = 4
REVIEW_VERBS = 2


def _vocab_items(curriculum: Curriculum, day: int, rng: random.Random) -> list[Exercise]:
    day_vocab = curriculum.words_for_day(day)
    all_vocab = curriculum.words_up_to_day(day)
    items: list[Exercise] = []

    for word in shuffled(day_vocab, rng)[:VOCAB_ITEMS]:
        distractors = shuffled(
            [w.english for w in day_vocab if w.id != word.id], rng
        )[:DISTRACTOR_COUNT]

        if len(distractors) < DISTRACTOR_COUNT:
            extra = shuffled(
                [w.english for w in all_vocab if w.id != word.id and w.english not in distractors],
                rng,
            )
            distractors += extra[: DISTRACTOR_COUNT - len(distractors)]

        options = shuffled([word.english, *distractors[:DISTRACTOR_COUNT]], rng)
        items.append(VocabChoice(
            id=f"vocab-{word.id}",
            word=word,
            options=tuple(options),
            correct_index=options.index(word.english),
        ))
    return items


def _cognate_items(curriculum: Curriculum, day: int, rng: random.Random) -> list[Exercise]:
    items: list[Exercise] = []
    for rule in shuffled(curriculum.rules_for_day(day), rng)[:COGNATE_ITEMS]:
        if not rule.examples:
            continue
        example = rng.choice(rule.examples)
        items.append(TypeAnswer(
            id=f"cognate-{rule.id}",
            english=example.english,
            correct_spanish=example.spanish,
            rule=rule,
        ))
    return items


def _frame_items(curriculum: Curriculum, day: int, rng: random.Random) -> list[Exercise]:
    all_vocab = curriculum.words_up_to_day(day)
    items: list[Exercise] = []
    for frame in shuffled(curriculum.frames_for_day(day), rng)[:FRAME_ITEMS]:
        compatible = curriculum.compatible_words(frame, day)
        if not compatible:
            continue
        correct_word = rng.choice(compatible)
        distractors = generate_frame_distractors(frame, correct_word, compatible, all_vocab, rng)
        items.append(FrameFill(
            id=f"frame-{frame.id}",
            frame=frame,
            correct_word=correct_word,
            distractors=tuple(distractors),
        ))
    return items


def _verb_items(curriculum: Curriculum, day: int, rng: random.Random) -> list[Exercise]:
    day_verbs = curriculum.verbs_for_day(day)
    review_verbs = curriculum.verbs_up_to_day(day - 1) if day > 2 else []
    pool = shuffled([*day_verbs, *shuffled(review_verbs, rng)[:REVIEW_VERBS]], rng)[:VERB_ITEMS]

    items: list[Exercise] = []
    for verb in pool:
        person = rng.choice(PERSONS)
        items.append(VerbQuiz(id=f"verb-{verb.id}-{person.value}", verb=verb, person=person))
    return items


def build_quiz_queue(
    curriculum: Curriculum,
    day: int,
    unlocked: bool,
    rng: Optional[random.Random] = None,
) -> list[Exercise]:
    """Up to QUIZ_SIZE mixed items; empty while the quiz is locked.

    Unlocking is decided by the caller (see ProgressStore.can_take_quiz).
    """
    if not unlocked:
        return []

    rng = resolve_rng(rng)
    items = (
        _vocab_items(curriculum, day, rng)
        + _cognate_items(curriculum, day, rng)
        + _frame_items(curriculum, day, rng)
        + _verb_items(curriculum, day, rng)
    )
    return shuffled(items, rng)[:QUIZ_SIZE]
