"""Single entry point over the four queue builders."""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional

from speedrun.curriculum.repository import Curriculum
from speedrun.engine.cognate_queue import build_cognate_queue
from speedrun.engine.exercises import Exercise
from speedrun.engine.frame_queue import build_frame_queue
from speedrun.engine.quiz_queue import build_quiz_queue
from speedrun.engine.verb_queue import build_verb_queue


class QueueKind(str, Enum):
    COGNATES = "cognates"
    FRAMES = "frames"
    QUIZ = "quiz"
    VERBS = "verbs"


def build_queue(
    kind: QueueKind,
    curriculum: Curriculum,
    day: int,
    rng: Optional[random.Random] = None,
    quiz_unlocked: bool = False,
) -> list[Exercise]:
    kind = QueueKind(kind)
    if kind == QueueKind.COGNATES:
        return build_cognate_queue(curriculum, day, rng)
    if kind == QueueKind.FRAMES:
        return list(build_frame_queue(curriculum, day, rng))
    if kind == QueueKind.QUIZ:
        return build_quiz_queue(curriculum, day, quiz_unlocked, rng)
    return list(build_verb_queue(curriculum, day, rng))
