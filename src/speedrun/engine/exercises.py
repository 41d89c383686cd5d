"""Exercise items produced by the queue builders.

Each kind of item is its own frozen dataclass; ``Exercise`` is the closed
union of them. Code that consumes items dispatches on the concrete class and
raises ``TypeError`` for anything outside the union.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

from speedrun.curriculum.loader import (
    CognateRule,
    FalseCognate,
    Person,
    SentenceFrame,
    VerbEntry,
    VocabWord,
)


class ExerciseKind(str, Enum):
    RULE_INTRO = "rule-intro"
    TYPE_ANSWER = "type-answer"
    MULTIPLE_CHOICE = "multiple-choice"
    FALSE_COGNATE = "false-cognate"
    FRAME_FILL = "frame-fill"
    VERB_DISPLAY = "verb-display"
    VERB_QUIZ = "verb-quiz"
    VOCAB_CHOICE = "vocab-multiple-choice"


@dataclass(frozen=True)
class RuleIntro:
    kind: ClassVar[ExerciseKind] = ExerciseKind.RULE_INTRO
    id: str
    rule: CognateRule


@dataclass(frozen=True)
class TypeAnswer:
    kind: ClassVar[ExerciseKind] = ExerciseKind.TYPE_ANSWER
    id: str
    english: str
    correct_spanish: str
    rule: CognateRule


@dataclass(frozen=True)
class MultipleChoice:
    kind: ClassVar[ExerciseKind] = ExerciseKind.MULTIPLE_CHOICE
    id: str
    english: str
    options: tuple[str, ...]
    correct_index: int
    rule: CognateRule


@dataclass(frozen=True)
class FalseCognateWarning:
    kind: ClassVar[ExerciseKind] = ExerciseKind.FALSE_COGNATE
    id: str
    false_cognate: FalseCognate


@dataclass(frozen=True)
class FrameFill:
    kind: ClassVar[ExerciseKind] = ExerciseKind.FRAME_FILL
    id: str
    frame: SentenceFrame
    correct_word: VocabWord
    distractors: tuple[VocabWord, ...]


@dataclass(frozen=True)
class VerbDisplay:
    kind: ClassVar[ExerciseKind] = ExerciseKind.VERB_DISPLAY
    id: str
    verb: VerbEntry


@dataclass(frozen=True)
class VerbQuiz:
    kind: ClassVar[ExerciseKind] = ExerciseKind.VERB_QUIZ
    id: str
    verb: VerbEntry
    person: Person

    @property
    def expected(self) -> str:
        return self.verb.conjugations.for_person(self.person)


@dataclass(frozen=True)
class VocabChoice:
    kind: ClassVar[ExerciseKind] = ExerciseKind.VOCAB_CHOICE
    id: str
    word: VocabWord
    options: tuple[str, ...]
    correct_index: int


Exercise = Union[
    RuleIntro,
    TypeAnswer,
    MultipleChoice,
    FalseCognateWarning,
    FrameFill,
    VerbDisplay,
    VerbQuiz,
    VocabChoice,
]

EXERCISE_TYPES = (
    RuleIntro,
    TypeAnswer,
    MultipleChoice,
    FalseCognateWarning,
    FrameFill,
    VerbDisplay,
    VerbQuiz,
    VocabChoice,
)


def _plain_dict(pairs: list[tuple]) -> dict:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in pairs}


def exercise_to_dict(item: Exercise) -> dict:
    """JSON-friendly form of an item, tagged with its kind."""
    if not isinstance(item, EXERCISE_TYPES):
        raise TypeError(f"Not an exercise item: {item!r}")
    return {"kind": item.kind.value, **asdict(item, dict_factory=_plain_dict)}


def correct_answer(item: Exercise) -> Optional[str]:
    """The answer text for graded items, None for study cards."""
    if isinstance(item, (RuleIntro, VerbDisplay, FalseCognateWarning)):
        return None
    if isinstance(item, TypeAnswer):
        return item.correct_spanish
    if isinstance(item, (MultipleChoice, VocabChoice)):
        return item.options[item.correct_index]
    if isinstance(item, FrameFill):
        return item.correct_word.spanish
    if isinstance(item, VerbQuiz):
        return item.expected
    raise TypeError(f"Unknown exercise item: {item!r}")
