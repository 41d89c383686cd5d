"""Server handler: dispatches JSON-lines requests to engine components."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from speedrun.config.settings import Settings
from speedrun.curriculum.loader import DayPlan
from speedrun.curriculum.repository import load_curriculum
from speedrun.engine.exercises import exercise_to_dict
from speedrun.engine.queues import QueueKind, build_queue
from speedrun.engine.session import VocabSession, build_vocab_session, compute_score
from speedrun.engine.srs import CardType, SrsCard, SrsDeck
from speedrun.state.cards import CardStore
from speedrun.state.progress import ExerciseType, ProgressStore

from .protocol import Notification

logger = logging.getLogger(__name__)

MIN_QUALITY = 0
MAX_QUALITY = 5


def _day_to_dict(plan: DayPlan) -> dict:
    return {
        "day": plan.day,
        "title": plan.title,
        "subtitle": plan.subtitle,
        "focusAreas": list(plan.focus_areas),
        "exerciseTypes": list(plan.exercise_types),
        "newWordCount": plan.new_word_count,
    }


def _card_to_dict(card: Optional[SrsCard]) -> Optional[dict]:
    return card.to_dict() if card is not None else None


def _quality(params: dict) -> int:
    quality = params["quality"]
    if not isinstance(quality, int) or isinstance(quality, bool):
        raise ValueError(f"Quality must be an integer, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"Quality {quality} out of range {MIN_QUALITY}..{MAX_QUALITY}")
    return quality


class ServerHandler:
    """Routes incoming requests to engine methods and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)

        self.curriculum = load_curriculum(self.settings.curriculum_dir)
        self.progress = ProgressStore(
            db_path=self.settings.progress_db,
            threshold=self.settings.session.completion_threshold,
        )
        self.card_store = CardStore(db_path=self.settings.cards_db)
        self.deck = SrsDeck(self.card_store.load())
        self.rng = self.settings.rng()

        self._vocab_session: Optional[VocabSession] = None
        self._vocab_day: Optional[int] = None

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params", {})

        handler_map = {
            "listDays": self._list_days,
            "getDay": self._get_day,
            "buildQueue": self._build_queue,
            "startVocabSession": self._start_vocab_session,
            "answerCard": self._answer_card,
            "reviewCard": self._review_card,
            "getReviewSession": self._get_review_session,
            "getStats": self._get_stats,
            "recordAttempt": self._record_attempt,
            "resetProgress": self._reset_progress,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return await handler(params)

    def _day(self, params: dict) -> DayPlan:
        day = params["day"]
        plan = self.curriculum.day_plan(day)
        if plan is None:
            raise ValueError(f"Unknown day: {day}")
        return plan

    def _save_deck(self) -> None:
        self.card_store.save(self.deck.cards)

    async def _list_days(self, params: dict) -> dict:
        return {
            "days": [
                {
                    **_day_to_dict(plan),
                    "completionPercent": self.progress.day_completion_percent(plan.day),
                    "canTakeQuiz": self.progress.can_take_quiz(plan.day),
                }
                for plan in self.curriculum.all_days()
            ]
        }

    async def _get_day(self, params: dict) -> dict:
        plan = self._day(params)
        day = plan.day
        progress = self.progress.get_day_progress(day)
        return {
            **_day_to_dict(plan),
            "wordCount": len(self.curriculum.words_for_day(day)),
            "ruleCount": len(self.curriculum.rules_for_day(day)),
            "falseCognateCount": len(self.curriculum.false_cognates_for_day(day)),
            "falseCognatesSoFar": len(self.curriculum.false_cognates_up_to_day(day)),
            "frameCount": len(self.curriculum.frames_for_day(day)),
            "verbCount": len(self.curriculum.verbs_for_day(day)),
            "progress": {t.value: c.to_dict() for t, c in progress.items()},
            "completionPercent": self.progress.day_completion_percent(day),
            "canTakeQuiz": self.progress.can_take_quiz(day),
        }

    async def _build_queue(self, params: dict) -> dict:
        plan = self._day(params)
        try:
            kind = QueueKind(params["kind"])
        except ValueError:
            raise ValueError(f"Unknown exercise kind: {params['kind']}") from None

        rng = random.Random(params["seed"]) if "seed" in params else self.rng
        unlocked = self.progress.can_take_quiz(plan.day)
        items = build_queue(kind, self.curriculum, plan.day, rng, quiz_unlocked=unlocked)
        result = {
            "kind": kind.value,
            "day": plan.day,
            "items": [exercise_to_dict(item) for item in items],
        }
        if kind == QueueKind.QUIZ:
            result["locked"] = not unlocked
        return result

    def _vocab_state(self) -> dict:
        session = self._vocab_session
        return {
            "day": self._vocab_day,
            "index": session.index,
            "total": session.total,
            "isComplete": session.is_complete,
            "card": _card_to_dict(session.current),
            "result": session.result.to_dict(),
        }

    async def _start_vocab_session(self, params: dict) -> dict:
        plan = self._day(params)
        self._vocab_day = plan.day
        self._vocab_session = build_vocab_session(
            self.deck,
            self.curriculum.words_for_day(plan.day),
            now=params.get("now"),
            max_new=self.settings.session.max_new,
            max_review=self.settings.session.max_review,
        )
        self._save_deck()
        return self._vocab_state()

    async def _answer_card(self, params: dict) -> dict:
        if self._vocab_session is None:
            raise ValueError("No vocabulary session started")
        if self._vocab_session.is_complete:
            raise ValueError("Vocabulary session is already complete")

        quality = _quality(params)
        self._vocab_session.answer(quality, now=params.get("now"))
        self._save_deck()

        state = self._vocab_state()
        if self._vocab_session.is_complete:
            score = compute_score(self._vocab_session.result)
            self.progress.record_attempt(self._vocab_day, ExerciseType.VOCAB, score)
            state["score"] = score
            self._write_notification(
                Notification("sessionComplete", {"day": self._vocab_day, "score": score})
            )
        return state

    async def _review_card(self, params: dict) -> dict:
        card_id = params["cardId"]
        quality = _quality(params)
        if card_id not in self.deck:
            raise ValueError(f"Unknown card: {card_id}")
        card = self.deck.review(card_id, quality, now=params.get("now"))
        self._save_deck()
        return {"card": _card_to_dict(card)}

    async def _get_review_session(self, params: dict) -> dict:
        limit = params.get("limit", self.settings.session.max_review)
        session = self.deck.review_session(limit=limit, now=params.get("now"))
        return {
            "cards": [c.to_dict() for c in session.session_cards],
            "totalDue": session.total_due,
        }

    async def _get_stats(self, params: dict) -> dict:
        now = params.get("now")
        return {
            "totalCards": self.deck.total_cards(),
            "learnedCount": self.deck.learned_count(),
            "totalReviews": self.deck.total_reviews(),
            "dueCount": self.deck.due_count(now),
            "cardsByType": {t.value: len(self.deck.cards_by_type(t)) for t in CardType},
            "days": [
                {
                    "day": plan.day,
                    "completionPercent": self.progress.day_completion_percent(plan.day),
                    "isComplete": self.progress.is_day_complete(plan.day),
                }
                for plan in self.curriculum.all_days()
            ],
        }

    async def _record_attempt(self, params: dict) -> dict:
        plan = self._day(params)
        try:
            exercise_type = ExerciseType(params["type"])
        except ValueError:
            raise ValueError(f"Unknown exercise type: {params['type']}") from None
        score = params["score"]
        if not isinstance(score, int) or not 0 <= score <= 100:
            raise ValueError(f"Score must be an integer 0..100, got {score!r}")

        completion = self.progress.record_attempt(plan.day, exercise_type, score)
        return {
            "completion": completion.to_dict(),
            "completionPercent": self.progress.day_completion_percent(plan.day),
            "canTakeQuiz": self.progress.can_take_quiz(plan.day),
        }

    async def _reset_progress(self, params: dict) -> dict:
        self.progress.reset()
        self.deck.reset()
        self.card_store.reset()
        self._vocab_session = None
        self._vocab_day = None
        logger.info("All progress and cards reset")
        return {"reset": True}
