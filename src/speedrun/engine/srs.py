"""Spaced-repetition scheduling, compressed for a 10-day program.

A modified SM-2: the first four passing reviews walk a fixed ladder of short
intervals (1 min, 10 min, 1 hr, 4 hr); after that the interval grows by the
card's ease factor, capped at three days.

Quality scale:
    0 = complete blackout
    1 = incorrect, but recognized answer
    2 = incorrect, but easy to recall once shown
    3 = correct with serious difficulty
    4 = correct with some hesitation
    5 = perfect response

The flashcard UI only uses two of these: "Still learning" -> 1, "I knew it" -> 4.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

INITIAL_INTERVALS = [60, 600, 3600, 14400]
MAX_INTERVAL = 3 * 24 * 3600
MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5
MAX_REVIEW_PER_SESSION = 30
LEARNED_REPETITIONS = len(INITIAL_INTERVALS)

QUALITY_STILL_LEARNING = 1
QUALITY_KNEW_IT = 4


class CardType(str, Enum):
    VOCAB = "vocab"
    COGNATE = "cognate"
    FRAME = "frame"
    VERB = "verb"


@dataclass(frozen=True)
class SrsCard:
    id: str
    type: CardType
    front: str
    back: str
    source_id: str
    interval: int  # seconds
    ease_factor: float
    repetitions: int
    due_at: int  # epoch ms; 0 means never scheduled
    last_reviewed_at: Optional[int] = None

    @property
    def is_new(self) -> bool:
        return self.repetitions == 0 and self.due_at == 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "front": self.front,
            "back": self.back,
            "source_id": self.source_id,
            "interval": self.interval,
            "ease_factor": self.ease_factor,
            "repetitions": self.repetitions,
            "due_at": self.due_at,
            "last_reviewed_at": self.last_reviewed_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SrsCard":
        return cls(
            id=data["id"],
            type=CardType(data["type"]),
            front=data["front"],
            back=data["back"],
            source_id=data["source_id"],
            interval=int(data["interval"]),
            ease_factor=float(data["ease_factor"]),
            repetitions=int(data["repetitions"]),
            due_at=int(data["due_at"]),
            last_reviewed_at=data.get("last_reviewed_at"),
        )


@dataclass(frozen=True)
class NewCard:
    """What a caller needs to register a card; scheduling fields are filled in."""
    id: str
    type: CardType
    front: str
    back: str
    source_id: str


@dataclass
class ReviewSession:
    session_cards: list[SrsCard]
    total_due: int


def now_ms() -> int:
    return int(time.time() * 1000)


def card_id(card_type: CardType, source_id: str) -> str:
    return f"{card_type.value}-{source_id}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def create_card(
    id: str,
    type: CardType,
    front: str,
    back: str,
    source_id: str,
) -> SrsCard:
    return SrsCard(
        id=id,
        type=type,
        front=front,
        back=back,
        source_id=source_id,
        interval=INITIAL_INTERVALS[0],
        ease_factor=DEFAULT_EASE_FACTOR,
        repetitions=0,
        due_at=0,  # immediately due
    )


def review_card(card: SrsCard, quality: int, now: Optional[int] = None) -> SrsCard:
    """Return the card rescheduled after a review of the given quality (0-5)."""
    now = now_ms() if now is None else now

    if quality < 3:
        # Failed: back to the first rung; ease is left alone
        return replace(
            card,
            interval=INITIAL_INTERVALS[0],
            repetitions=0,
            due_at=now + INITIAL_INTERVALS[0] * 1000,
            last_reviewed_at=now,
        )

    repetitions = card.repetitions + 1
    if repetitions <= len(INITIAL_INTERVALS):
        interval = INITIAL_INTERVALS[repetitions - 1]
    else:
        interval = _round_half_up(card.interval * card.ease_factor)
    interval = min(interval, MAX_INTERVAL)

    miss = 5 - quality
    ease_factor = max(
        MIN_EASE_FACTOR,
        card.ease_factor + (0.1 - miss * (0.08 + miss * 0.02)),
    )

    return replace(
        card,
        interval=interval,
        ease_factor=ease_factor,
        repetitions=repetitions,
        due_at=now + interval * 1000,
        last_reviewed_at=now,
    )


def is_due(card: SrsCard, now: Optional[int] = None) -> bool:
    now = now_ms() if now is None else now
    return now >= card.due_at


def get_due_cards(cards: Iterable[SrsCard], now: Optional[int] = None) -> list[SrsCard]:
    """Due cards, most overdue first."""
    now = now_ms() if now is None else now
    return sorted((c for c in cards if is_due(c, now)), key=lambda c: c.due_at)


def get_new_cards(cards: Iterable[SrsCard]) -> list[SrsCard]:
    return [c for c in cards if c.is_new]


def build_review_session(
    cards: Iterable[SrsCard],
    limit: int = MAX_REVIEW_PER_SESSION,
    now: Optional[int] = None,
) -> ReviewSession:
    all_due = get_due_cards(cards, now)
    return ReviewSession(session_cards=all_due[:limit], total_due=len(all_due))


class SrsDeck:
    """In-memory owner of the card map.

    The map is replaced wholesale on every mutation, so a snapshot taken via
    ``cards`` is never changed behind the caller's back.
    """

    def __init__(self, cards: Optional[dict[str, SrsCard]] = None):
        self._cards: dict[str, SrsCard] = dict(cards or {})

    @property
    def cards(self) -> dict[str, SrsCard]:
        return self._cards

    def get(self, card_id: str) -> Optional[SrsCard]:
        return self._cards.get(card_id)

    def __contains__(self, card_id: str) -> bool:
        return card_id in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def add_card(self, new: NewCard) -> SrsCard:
        card = create_card(new.id, new.type, new.front, new.back, new.source_id)
        self._cards = {**self._cards, card.id: card}
        return card

    def add_if_not_exists(self, new: NewCard) -> SrsCard:
        existing = self._cards.get(new.id)
        if existing is not None:
            return existing
        return self.add_card(new)

    def add_many_if_not_exist(self, new_cards: Iterable[NewCard]) -> int:
        """Register cards in one batch; returns how many were actually added."""
        to_add: dict[str, SrsCard] = {}
        for new in new_cards:
            if new.id not in self._cards and new.id not in to_add:
                to_add[new.id] = create_card(new.id, new.type, new.front, new.back, new.source_id)
        if to_add:
            self._cards = {**self._cards, **to_add}
        return len(to_add)

    def review(self, card_id: str, quality: int, now: Optional[int] = None) -> Optional[SrsCard]:
        card = self._cards.get(card_id)
        if card is None:
            return None
        reviewed = review_card(card, quality, now)
        self._cards = {**self._cards, card_id: reviewed}
        return reviewed

    def due_cards(self, now: Optional[int] = None) -> list[SrsCard]:
        return get_due_cards(self._cards.values(), now)

    def new_cards(self) -> list[SrsCard]:
        return get_new_cards(self._cards.values())

    def due_count(self, now: Optional[int] = None) -> int:
        return len(self.due_cards(now))

    def review_session(
        self, limit: int = MAX_REVIEW_PER_SESSION, now: Optional[int] = None
    ) -> ReviewSession:
        return build_review_session(self._cards.values(), limit, now)

    def cards_by_type(self, card_type: CardType) -> list[SrsCard]:
        return [c for c in self._cards.values() if c.type == card_type]

    def total_reviews(self) -> int:
        return sum(c.repetitions for c in self._cards.values())

    def total_cards(self) -> int:
        return len(self._cards)

    def learned_count(self) -> int:
        return sum(1 for c in self._cards.values() if c.repetitions >= LEARNED_REPETITIONS)

    def reset(self) -> None:
        self._cards = {}
