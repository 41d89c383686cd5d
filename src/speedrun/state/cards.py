"""SQLite persistence for the spaced-repetition card map."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from speedrun.engine.srs import CardType, SrsCard

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id", "type", "front", "back", "source_id", "interval",
    "ease_factor", "repetitions", "due_at", "last_reviewed_at",
)


class CardStore:
    """Saves and restores the whole card map; there is no per-card update path."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or (Path.home() / ".speedrun" / "cards.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS cards (
                    id TEXT PRIMARY KEY,
                    type TEXT NOT NULL,
                    front TEXT NOT NULL,
                    back TEXT NOT NULL,
                    source_id TEXT NOT NULL,
                    interval INTEGER NOT NULL,
                    ease_factor REAL NOT NULL,
                    repetitions INTEGER NOT NULL,
                    due_at INTEGER NOT NULL,
                    last_reviewed_at INTEGER
                )
            """)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def load(self) -> dict[str, SrsCard]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT {', '.join(_COLUMNS)} FROM cards").fetchall()
        cards = {}
        for r in rows:
            card = SrsCard(
                id=r[0], type=CardType(r[1]), front=r[2], back=r[3], source_id=r[4],
                interval=r[5], ease_factor=r[6], repetitions=r[7], due_at=r[8],
                last_reviewed_at=r[9],
            )
            cards[card.id] = card
        return cards

    def save(self, cards: dict[str, SrsCard]) -> None:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._conn() as conn:
            conn.execute("DELETE FROM cards")
            conn.executemany(
                f"INSERT INTO cards ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                [
                    (
                        c.id, c.type.value, c.front, c.back, c.source_id, c.interval,
                        c.ease_factor, c.repetitions, c.due_at, c.last_reviewed_at,
                    )
                    for c in cards.values()
                ],
            )
        logger.debug("Saved %d cards to %s", len(cards), self.db_path)

    def reset(self) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM cards")
