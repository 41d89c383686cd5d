"""Verb conjugation practice queue (from day 2 onward)."""

from __future__ import annotations

import random
from typing import Optional, Union

from speedrun.curriculum.loader import PERSONS
from speedrun.curriculum.repository import Curriculum
from speedrun.engine.exercises import VerbDisplay, VerbQuiz
from speedrun.engine.shuffle import resolve_rng, shuffled

TARGET_EXERCISES = 14
FIRST_VERB_DAY = 2

VerbExercise = Union[VerbDisplay, VerbQuiz]


def build_verb_queue(
    curriculum: Curriculum, day: int, rng: Optional[random.Random] = None
) -> list[VerbExercise]:
    """Study cards for the day's verbs, then quizzes padded out to TARGET_EXERCISES.

    Padding order: one quiz per new verb, shuffled review verbs from earlier
    days, then round-robin extra quizzes on the day's verbs.
    """
    if day < FIRST_VERB_DAY:
        return []

    rng = resolve_rng(rng)
    day_verbs = curriculum.verbs_for_day(day)
    review_verbs = curriculum.verbs_up_to_day(day - 1)

    items: list[VerbExercise] = [VerbDisplay(id=f"display-{v.id}", verb=v) for v in day_verbs]

    for verb in day_verbs:
        items.append(VerbQuiz(id=f"quiz-new-{verb.id}", verb=verb, person=rng.choice(PERSONS)))

    for verb in shuffled(review_verbs, rng):
        if len(items) >= TARGET_EXERCISES:
            break
        items.append(VerbQuiz(id=f"quiz-review-{verb.id}", verb=verb, person=rng.choice(PERSONS)))

    extra = 0
    while len(items) < TARGET_EXERCISES and day_verbs:
        verb = day_verbs[extra % len(day_verbs)]
        person = PERSONS[extra % len(PERSONS)]
        items.append(VerbQuiz(id=f"quiz-extra-{verb.id}-{extra}", verb=verb, person=person))
        extra += 1
        if extra > TARGET_EXERCISES:
            break

    return items[:TARGET_EXERCISES]
