"""Random-source helpers shared by the queue builders."""

from __future__ import annotations

import random
from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def resolve_rng(rng: Optional[random.Random] = None) -> random.Random:
    return rng if rng is not None else random.Random()


def shuffled(items: Iterable[T], rng: random.Random) -> list[T]:
    """Return a shuffled copy; the input is never mutated."""
    result = list(items)
    rng.shuffle(result)
    return result
