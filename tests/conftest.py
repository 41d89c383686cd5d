"""Shared fixtures for Spanish Speedrun tests."""

from __future__ import annotations

import random

import pytest
import yaml

from speedrun.curriculum.loader import (
    CognateExample,
    CognateRule,
    DayPlan,
    FalseCognate,
    SentenceFrame,
    SlotType,
    VerbConjugations,
    VerbEntry,
    VocabWord,
    WordCategory,
)
from speedrun.curriculum.repository import Curriculum
from speedrun.state.cards import CardStore
from speedrun.state.progress import ProgressStore


class StubRandom(random.Random):
    """Deterministic stand-in: shuffles leave order alone, choice takes the first element."""

    def shuffle(self, x) -> None:
        pass

    def choice(self, seq):
        return seq[0]


def make_word(id: str, day: int = 1, english: str = None, category=WordCategory.NOUN) -> VocabWord:
    return VocabWord(
        id=id,
        spanish=f"spa-{id}",
        english=english or f"eng-{id}",
        category=category,
        day=day,
    )


def make_rule(id: str, example_count: int, day: int = 1, **overrides) -> CognateRule:
    fields = dict(
        id=id,
        english_suffix="-tion",
        spanish_suffix="-ción",
        description=f"rule {id}",
        examples=tuple(
            CognateExample(english=f"eng{i}", spanish=f"spa{i}") for i in range(example_count)
        ),
        day=day,
    )
    fields.update(overrides)
    return CognateRule(**fields)


def make_false_cognate(id: str, day: int = 1) -> FalseCognate:
    return FalseCognate(
        id=id,
        spanish=f"falso-{id}",
        looks_like=f"false-{id}",
        actual_meaning=f"meaning-{id}",
        day=day,
    )


def make_frame(
    id: str, compatible_vocab_ids=(), day: int = 1, slot_type=SlotType.NOUN
) -> SentenceFrame:
    return SentenceFrame(
        id=id,
        template="Esto es ___",
        english="This is blank",
        tier=1,
        day=day,
        slot_type=slot_type,
        compatible_vocab_ids=tuple(compatible_vocab_ids),
    )


def make_verb(id: str, day: int = 2) -> VerbEntry:
    return VerbEntry(
        id=id,
        infinitive=f"inf_{id}",
        english=f"en_{id}",
        day=day,
        is_regular=True,
        conjugations=VerbConjugations(yo=f"yo_{id}", tu=f"tu_{id}", el=f"el_{id}"),
    )


@pytest.fixture
def rng():
    return StubRandom()


@pytest.fixture
def small_curriculum():
    """One day of everything, plus a couple of earlier words and verbs."""
    words = [
        make_word("v1", english="cat"),
        make_word("v2", english="dog"),
        make_word("v3", english="fish"),
        make_word("v4", english="bird"),
        make_word("v5", english="frog"),
        make_word("v6", english="bear"),
        make_word("v7", day=0, english="lion"),
        make_word("v8", day=0, english="wolf"),
        make_word("v9", day=0, english="deer"),
    ]
    rules = [
        make_rule("r1", 1, examples=(CognateExample("nation", "nación"),)),
        make_rule("r2", 1, examples=(CognateExample("station", "estación"),)),
        make_rule("r3", 1, examples=(CognateExample("action", "acción"),)),
        make_rule("r4", 1, examples=(CognateExample("motion", "moción"),)),
    ]
    frames = [
        make_frame("f1", ["v1", "v2"]),
        make_frame("f2", ["v3"]),
        make_frame("f3", ["v4", "v5"]),
    ]
    verbs = [make_verb(f"vb{i}", day=1) for i in range(1, 6)]
    days = [DayPlan(day=1, title="Survival", subtitle="First words")]
    return Curriculum(words=words, rules=rules, frames=frames, verbs=verbs, days=days)


@pytest.fixture
def progress_store(tmp_path):
    return ProgressStore(db_path=tmp_path / "data" / "progress.db")


@pytest.fixture
def card_store(tmp_path):
    return CardStore(db_path=tmp_path / "data" / "cards.db")


@pytest.fixture
def curriculum_dir(tmp_path):
    """Create a minimal curriculum data directory for loader tests."""
    data_dir = tmp_path / "curriculum"
    data_dir.mkdir()

    files = {
        "vocabulary.yaml": [
            {"id": "v-agua", "spanish": "agua", "english": "water", "category": "noun", "day": 1},
            {"id": "v-casa", "spanish": "casa", "english": "house", "category": "noun", "day": 2},
            {"id": "v-grande", "spanish": "grande", "english": "big", "category": "adjective", "day": 2},
        ],
        "cognates.yaml": {
            "rules": [
                {
                    "id": "cr-tion",
                    "english_suffix": "-tion",
                    "spanish_suffix": "-ción",
                    "description": "-tion becomes -ción",
                    "examples": [{"english": "nation", "spanish": "nación"}],
                    "day": 1,
                },
            ],
            "false_cognates": [
                {
                    "id": "fc-embarazada",
                    "spanish": "embarazada",
                    "looks_like": "embarrassed",
                    "actual_meaning": "pregnant",
                    "day": 1,
                },
            ],
        },
        "frames.yaml": [
            {
                "id": "sf-necesito",
                "template": "Necesito ___",
                "english": "I need ___",
                "tier": 1,
                "day": 1,
                "slot_type": "noun",
            },
        ],
        "verbs.yaml": [
            {
                "id": "verb-ser",
                "infinitive": "ser",
                "english": "to be",
                "day": 2,
                "is_regular": False,
                "conjugations": {"yo": "soy", "tú": "eres", "él": "es"},
            },
        ],
        "days.yaml": [
            {"day": 1, "title": "Survival", "subtitle": "First words", "new_word_count": 1},
            {"day": 2, "title": "Getting around", "subtitle": "Places", "new_word_count": 2},
        ],
    }
    for name, content in files.items():
        with open(data_dir / name, "w", encoding="utf-8") as f:
            yaml.safe_dump(content, f, allow_unicode=True)

    return data_dir
