"""YAML curriculum parser for Spanish Speedrun."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

BLANK = "___"
DATA_DIR = Path(__file__).parent / "data"


class WordCategory(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PRONOUN = "pronoun"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    DETERMINER = "determiner"
    NUMBER = "number"
    PHRASE = "phrase"
    QUESTION = "question"
    INTERJECTION = "interjection"


class SlotType(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    INFINITIVE = "infinitive"
    NAME = "name"
    ANY = "any"


class Person(str, Enum):
    YO = "yo"
    TU = "tú"
    EL = "él"


PERSONS: tuple[Person, ...] = (Person.YO, Person.TU, Person.EL)


@dataclass(frozen=True)
class VocabWord:
    id: str
    spanish: str
    english: str
    category: WordCategory
    day: int


@dataclass(frozen=True)
class CognateExample:
    english: str
    spanish: str


@dataclass(frozen=True)
class CognateRule:
    id: str
    english_suffix: str  # may carry a leading hyphen, e.g. "-tion"
    spanish_suffix: str
    description: str
    examples: tuple[CognateExample, ...]
    day: int


@dataclass(frozen=True)
class FalseCognate:
    id: str
    spanish: str
    looks_like: str
    actual_meaning: str
    day: int


@dataclass(frozen=True)
class SentenceFrame:
    id: str
    template: str  # contains exactly one BLANK
    english: str
    tier: int
    day: int
    slot_type: SlotType
    compatible_vocab_ids: tuple[str, ...] = ()

    def fill(self, word: str) -> str:
        return self.template.replace(BLANK, word, 1)


@dataclass(frozen=True)
class VerbConjugations:
    yo: str
    tu: str
    el: str

    def for_person(self, person: Person) -> str:
        return {Person.YO: self.yo, Person.TU: self.tu, Person.EL: self.el}[person]


@dataclass(frozen=True)
class VerbEntry:
    id: str
    infinitive: str
    english: str
    day: int
    is_regular: bool
    conjugations: VerbConjugations


@dataclass(frozen=True)
class DayPlan:
    day: int
    title: str
    subtitle: str
    focus_areas: tuple[str, ...] = ()
    exercise_types: tuple[str, ...] = ()
    new_word_count: int = 0


@dataclass
class CurriculumData:
    words: list[VocabWord] = field(default_factory=list)
    rules: list[CognateRule] = field(default_factory=list)
    false_cognates: list[FalseCognate] = field(default_factory=list)
    frames: list[SentenceFrame] = field(default_factory=list)
    verbs: list[VerbEntry] = field(default_factory=list)
    days: list[DayPlan] = field(default_factory=list)


def _read_yaml(path: Path):
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _parse_word(raw: dict) -> VocabWord:
    return VocabWord(
        id=raw["id"],
        spanish=raw["spanish"],
        english=raw["english"],
        category=WordCategory(raw["category"]),
        day=int(raw["day"]),
    )


def _parse_rule(raw: dict) -> CognateRule:
    return CognateRule(
        id=raw["id"],
        english_suffix=raw["english_suffix"],
        spanish_suffix=raw["spanish_suffix"],
        description=raw.get("description", ""),
        examples=tuple(
            CognateExample(english=ex["english"], spanish=ex["spanish"])
            for ex in raw.get("examples") or []
        ),
        day=int(raw["day"]),
    )


def _parse_false_cognate(raw: dict) -> FalseCognate:
    return FalseCognate(
        id=raw["id"],
        spanish=raw["spanish"],
        looks_like=raw["looks_like"],
        actual_meaning=raw["actual_meaning"],
        day=int(raw["day"]),
    )


def _parse_frame(raw: dict) -> SentenceFrame:
    template = raw["template"]
    if template.count(BLANK) != 1:
        raise ValueError(
            f"Frame {raw.get('id')!r} must contain exactly one {BLANK!r} blank: {template!r}"
        )
    return SentenceFrame(
        id=raw["id"],
        template=template,
        english=raw["english"],
        tier=int(raw.get("tier", 1)),
        day=int(raw["day"]),
        slot_type=SlotType(raw.get("slot_type", "any")),
        compatible_vocab_ids=tuple(raw.get("compatible_vocab_ids") or []),
    )


def _parse_verb(raw: dict) -> VerbEntry:
    conj = raw["conjugations"]
    return VerbEntry(
        id=raw["id"],
        infinitive=raw["infinitive"],
        english=raw["english"],
        day=int(raw["day"]),
        is_regular=bool(raw.get("is_regular", False)),
        conjugations=VerbConjugations(yo=conj["yo"], tu=conj["tú"], el=conj["él"]),
    )


def _parse_day(raw: dict) -> DayPlan:
    return DayPlan(
        day=int(raw["day"]),
        title=raw["title"],
        subtitle=raw.get("subtitle", ""),
        focus_areas=tuple(raw.get("focus_areas") or []),
        exercise_types=tuple(raw.get("exercise_types") or []),
        new_word_count=int(raw.get("new_word_count", 0)),
    )


def load_curriculum_data(data_dir: Optional[Path] = None) -> CurriculumData:
    """Load every curriculum YAML file from a data directory.

    Expects vocabulary.yaml, cognates.yaml (with ``rules`` and
    ``false_cognates`` keys), frames.yaml, verbs.yaml and days.yaml.
    """
    data_dir = data_dir or DATA_DIR

    cognates = _read_yaml(data_dir / "cognates.yaml") or {}
    data = CurriculumData(
        words=[_parse_word(r) for r in _read_yaml(data_dir / "vocabulary.yaml") or []],
        rules=[_parse_rule(r) for r in cognates.get("rules") or []],
        false_cognates=[_parse_false_cognate(r) for r in cognates.get("false_cognates") or []],
        frames=[_parse_frame(r) for r in _read_yaml(data_dir / "frames.yaml") or []],
        verbs=[_parse_verb(r) for r in _read_yaml(data_dir / "verbs.yaml") or []],
        days=[_parse_day(r) for r in _read_yaml(data_dir / "days.yaml") or []],
    )
    logger.debug(
        "Loaded curriculum from %s: %d words, %d rules, %d frames, %d verbs",
        data_dir, len(data.words), len(data.rules), len(data.frames), len(data.verbs),
    )
    return data
