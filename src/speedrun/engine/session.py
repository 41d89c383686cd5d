"""Session state machine: present → answer → advance, with a running tally."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from speedrun.curriculum.loader import VocabWord
from speedrun.engine.exercises import (
    EXERCISE_TYPES,
    Exercise,
    FalseCognateWarning,
    FrameFill,
    MultipleChoice,
    RuleIntro,
    TypeAnswer,
    VerbDisplay,
    VerbQuiz,
    VocabChoice,
)
from speedrun.engine.normalizer import choices_match, conjugation_matches, typed_answer_matches
from speedrun.engine.srs import (
    MAX_REVIEW_PER_SESSION,
    CardType,
    NewCard,
    SrsCard,
    SrsDeck,
    card_id,
    get_due_cards,
)

MAX_NEW_PER_SESSION = 15
PASSING_QUALITY = 3

STUDY_TYPES = (RuleIntro, VerbDisplay, FalseCognateWarning)


class SessionState(str, Enum):
    INTRO = "intro"
    ACTIVE = "active"
    REVIEW = "review"
    COMPLETE = "complete"


@dataclass
class SessionResult:
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    new_cards: int = 0
    review_cards: int = 0

    def tally(self, correct: bool) -> None:
        self.total += 1
        if correct:
            self.correct += 1
        else:
            self.incorrect += 1

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "correct": self.correct,
            "incorrect": self.incorrect,
            "new_cards": self.new_cards,
            "review_cards": self.review_cards,
        }


CompletionCallback = Callable[[SessionResult], None]


def compute_score(result: SessionResult) -> int:
    """Percentage of correct answers, rounded half up; 0 for an empty session."""
    if result.total <= 0:
        return 0
    return int(math.floor(result.correct / result.total * 100 + 0.5))


def _choice_matches(options: Sequence[str], correct_index: int, response: Union[str, int]) -> bool:
    if isinstance(response, int) and not isinstance(response, bool):
        return response == correct_index
    return choices_match(str(response), options[correct_index])


def check_answer(item: Exercise, response: Union[str, int]) -> Optional[bool]:
    """Grade a response against an item. Study cards are ungraded and return None."""
    if isinstance(item, STUDY_TYPES):
        return None
    if isinstance(item, TypeAnswer):
        return typed_answer_matches(str(response), item.correct_spanish)
    if isinstance(item, (MultipleChoice, VocabChoice)):
        return _choice_matches(item.options, item.correct_index, response)
    if isinstance(item, FrameFill):
        response = str(response)
        return response == item.correct_word.id or choices_match(response, item.correct_word.spanish)
    if isinstance(item, VerbQuiz):
        return conjugation_matches(str(response), item.expected)
    raise TypeError(f"Unknown exercise item: {item!r}")


class ExerciseSession:
    """Walks a queue of exercise items and keeps the score."""

    def __init__(self, items: Sequence[Exercise], on_complete: Optional[CompletionCallback] = None):
        for item in items:
            if not isinstance(item, EXERCISE_TYPES):
                raise TypeError(f"Unknown exercise item: {item!r}")
        self.items = list(items)
        self.on_complete = on_complete
        self.restart()

    def restart(self) -> None:
        self.index = 0
        self.is_showing_answer = False
        self.result = SessionResult()
        self._present()

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def current(self) -> Optional[Exercise]:
        if self.state == SessionState.COMPLETE:
            return None
        if 0 <= self.index < len(self.items):
            return self.items[self.index]
        return None

    @property
    def is_complete(self) -> bool:
        return self.state == SessionState.COMPLETE

    def show_answer(self) -> None:
        """Reveal the answer to a graded item; it still needs grading to advance."""
        if self.state == SessionState.ACTIVE:
            self.is_showing_answer = True
            self.state = SessionState.REVIEW

    def record_answer(self, correct: bool) -> None:
        if self.is_complete:
            return
        self.result.tally(correct)
        self._advance()

    def answer(self, response: Union[str, int]) -> Optional[bool]:
        """Grade the current item and move on. Returns None for study cards."""
        item = self.current
        if item is None:
            return None
        correct = check_answer(item, response)
        if correct is None:
            self.next()
        else:
            self.record_answer(correct)
        return correct

    def next(self) -> None:
        """Advance without grading (study cards, warnings)."""
        if self.is_complete:
            return
        self._advance()

    def _advance(self) -> None:
        self.is_showing_answer = False
        if self.index + 1 >= len(self.items):
            self.state = SessionState.COMPLETE
            if self.on_complete is not None:
                self.on_complete(self.result)
        else:
            self.index += 1
            self._present()

    def _present(self) -> None:
        if not self.items:
            self.state = SessionState.COMPLETE
        elif isinstance(self.items[self.index], STUDY_TYPES):
            self.state = SessionState.INTRO
        else:
            self.state = SessionState.ACTIVE


class VocabSession:
    """Flashcard session over the vocabulary deck: new words first, then due reviews."""

    def __init__(
        self,
        deck: SrsDeck,
        new_words: Sequence[VocabWord],
        now: Optional[int] = None,
        max_new: int = MAX_NEW_PER_SESSION,
        max_review: int = MAX_REVIEW_PER_SESSION,
        on_complete: Optional[CompletionCallback] = None,
    ):
        self.deck = deck
        self.new_words = list(new_words)
        self.max_new = max_new
        self.max_review = max_review
        self.on_complete = on_complete
        self.restart(now)

    def restart(self, now: Optional[int] = None) -> None:
        self.deck.add_many_if_not_exist(
            NewCard(
                id=card_id(CardType.VOCAB, w.id),
                type=CardType.VOCAB,
                front=w.spanish,
                back=w.english,
                source_id=w.id,
            )
            for w in self.new_words
        )

        new_ids = []
        for word in self.new_words[: self.max_new]:
            card = self.deck.get(card_id(CardType.VOCAB, word.id))
            if card is not None and card.repetitions == 0:
                new_ids.append(card.id)

        queued = set(new_ids)
        due_ids = [
            c.id for c in get_due_cards(self.deck.cards.values(), now) if c.id not in queued
        ][: self.max_review]

        self.queue: list[str] = new_ids + due_ids
        self.index = 0
        self.result = SessionResult(new_cards=len(new_ids), review_cards=len(due_ids))

    @property
    def total(self) -> int:
        return len(self.queue)

    @property
    def is_complete(self) -> bool:
        return self.index >= len(self.queue)

    @property
    def current(self) -> Optional[SrsCard]:
        if self.is_complete:
            return None
        return self.deck.get(self.queue[self.index])

    def answer(self, quality: int, now: Optional[int] = None) -> Optional[SrsCard]:
        """Review the current card and advance. Returns the rescheduled card."""
        if self.is_complete:
            return None
        reviewed = self.deck.review(self.queue[self.index], quality, now)
        self.result.tally(quality >= PASSING_QUALITY)
        self.index += 1
        if self.is_complete and self.on_complete is not None:
            self.on_complete(self.result)
        return reviewed


def build_vocab_session(
    deck: SrsDeck,
    new_words: Sequence[VocabWord],
    now: Optional[int] = None,
    max_new: int = MAX_NEW_PER_SESSION,
    max_review: int = MAX_REVIEW_PER_SESSION,
    on_complete: Optional[CompletionCallback] = None,
) -> VocabSession:
    return VocabSession(deck, new_words, now, max_new, max_review, on_complete)
