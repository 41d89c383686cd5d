"""Configuration model for Spanish Speedrun."""

from __future__ import annotations

import os
import random
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from speedrun.engine.srs import MAX_REVIEW_PER_SESSION
from speedrun.state.progress import COMPLETION_THRESHOLD

SEED_ENV = "SPEEDRUN_SEED"


class SessionConfig(BaseModel):
    max_new: int = 15
    max_review: int = MAX_REVIEW_PER_SESSION
    completion_threshold: int = COMPLETION_THRESHOLD


class Settings(BaseModel):
    session: SessionConfig = Field(default_factory=SessionConfig)
    data_dir: Path = Path.home() / ".speedrun"
    curriculum_dir: Optional[Path] = Field(default=None)
    seed: Optional[int] = Field(default=None)

    def get_seed(self) -> Optional[int]:
        env = os.environ.get(SEED_ENV)
        if env:
            return int(env)
        return self.seed

    def rng(self) -> random.Random:
        """Random source for queue building; seeded when a seed is configured."""
        return random.Random(self.get_seed())

    @property
    def progress_db(self) -> Path:
        return self.data_dir / "progress.db"

    @property
    def cards_db(self) -> Path:
        return self.data_dir / "cards.db"

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        config_path = config_path or (Path.home() / ".speedrun" / "config.yaml")
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
