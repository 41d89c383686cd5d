"""SQLite-backed progress tracking for Spanish Speedrun."""

from __future__ import annotations

import logging
import math
import sqlite3
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from speedrun.engine.srs import now_ms

logger = logging.getLogger(__name__)

COMPLETION_THRESHOLD = 60


class ExerciseType(str, Enum):
    VOCAB = "vocab"
    COGNATES = "cognates"
    FRAMES = "frames"
    VERBS = "verbs"
    QUIZ = "quiz"


@dataclass
class ExerciseCompletion:
    day: int
    type: ExerciseType
    best_score: int
    attempts: int
    completed: bool
    last_attempt_at: int

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "type": self.type.value,
            "best_score": self.best_score,
            "attempts": self.attempts,
            "completed": self.completed,
            "last_attempt_at": self.last_attempt_at,
        }


def _types_for_day(day: int) -> list[ExerciseType]:
    # No verbs on day 1
    if day == 1:
        return [t for t in ExerciseType if t != ExerciseType.VERBS]
    return list(ExerciseType)


def _quiz_prerequisites(day: int) -> list[ExerciseType]:
    types = [ExerciseType.VOCAB, ExerciseType.COGNATES, ExerciseType.FRAMES]
    if day >= 2:
        types.append(ExerciseType.VERBS)
    return types


class ProgressStore:
    def __init__(self, db_path: Optional[Path] = None, threshold: int = COMPLETION_THRESHOLD):
        self.db_path = db_path or (Path.home() / ".speedrun" / "progress.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.threshold = threshold
        self._init_db()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS progress (
                    day INTEGER NOT NULL,
                    exercise_type TEXT NOT NULL,
                    best_score INTEGER DEFAULT 0,
                    attempts INTEGER DEFAULT 0,
                    completed INTEGER DEFAULT 0,
                    last_attempt_at INTEGER NOT NULL,
                    PRIMARY KEY (day, exercise_type)
                )
            """)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get_completion(self, day: int, type: ExerciseType) -> Optional[ExerciseCompletion]:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT * FROM progress WHERE day = ? AND exercise_type = ?",
                (day, ExerciseType(type).value),
            ).fetchone()
        if not row:
            return None
        return ExerciseCompletion(
            day=row[0],
            type=ExerciseType(row[1]),
            best_score=row[2],
            attempts=row[3],
            completed=bool(row[4]),
            last_attempt_at=row[5],
        )

    def record_attempt(
        self, day: int, type: ExerciseType, score: int, now: Optional[int] = None
    ) -> ExerciseCompletion:
        type = ExerciseType(type)
        existing = self.get_completion(day, type)
        completion = ExerciseCompletion(
            day=day,
            type=type,
            best_score=max(score, existing.best_score if existing else 0),
            attempts=(existing.attempts if existing else 0) + 1,
            completed=score >= self.threshold or (existing.completed if existing else False),
            last_attempt_at=now_ms() if now is None else now,
        )
        with self._conn() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO progress
                   (day, exercise_type, best_score, attempts, completed, last_attempt_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    completion.day,
                    completion.type.value,
                    completion.best_score,
                    completion.attempts,
                    int(completion.completed),
                    completion.last_attempt_at,
                ),
            )
        logger.debug("Day %d %s: scored %d (best %d)", day, type.value, score, completion.best_score)
        return completion

    def get_day_progress(self, day: int) -> dict[ExerciseType, ExerciseCompletion]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT * FROM progress WHERE day = ?",
                (day,),
            ).fetchall()
        return {
            ExerciseType(r[1]): ExerciseCompletion(
                day=r[0], type=ExerciseType(r[1]), best_score=r[2],
                attempts=r[3], completed=bool(r[4]), last_attempt_at=r[5],
            )
            for r in rows
        }

    def is_exercise_complete(self, day: int, type: ExerciseType) -> bool:
        completion = self.get_completion(day, type)
        return completion.completed if completion else False

    def exercise_score(self, day: int, type: ExerciseType) -> int:
        completion = self.get_completion(day, type)
        return completion.best_score if completion else 0

    def day_completion_percent(self, day: int) -> int:
        progress = self.get_day_progress(day)
        if not progress:
            return 0
        valid_types = _types_for_day(day)
        completed = sum(1 for t in valid_types if t in progress and progress[t].completed)
        return int(math.floor(completed / len(valid_types) * 100 + 0.5))

    def is_day_complete(self, day: int) -> bool:
        return self.day_completion_percent(day) == 100

    def can_take_quiz(self, day: int) -> bool:
        """The quiz unlocks once each practice type of the day has a passing best score."""
        return all(
            self.exercise_score(day, t) >= self.threshold for t in _quiz_prerequisites(day)
        )

    def reset(self) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM progress")
        logger.info("Progress reset")
