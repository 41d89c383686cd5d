"""Sentence-frame practice queue."""

from __future__ import annotations

import random
from typing import Optional

from speedrun.curriculum.repository import Curriculum
from speedrun.engine.distractors import generate_frame_distractors
from speedrun.engine.exercises import FrameFill
from speedrun.engine.shuffle import resolve_rng, shuffled

MAX_REPEATS_PER_FRAME = 3


def build_frame_queue(
    curriculum: Curriculum, day: int, rng: Optional[random.Random] = None
) -> list[FrameFill]:
    """Interleave every usable frame of the day over MAX_REPEATS_PER_FRAME rounds.

    Each round is a fresh shuffle. A round never opens with the frame that
    closed the previous one, unless the day has a single frame.
    """
    rng = resolve_rng(rng)
    frames = curriculum.frames_for_day(day)
    if not frames:
        return []

    all_vocab = curriculum.words_up_to_day(day)
    compatible_by_frame = {f.id: curriculum.compatible_words(f, day) for f in frames}
    usable = [f for f in frames if compatible_by_frame[f.id]]
    if not usable:
        return []

    items: list[FrameFill] = []
    used_words: dict[str, set[str]] = {f.id: set() for f in usable}
    base_order = shuffled(usable, rng)

    for round_num in range(MAX_REPEATS_PER_FRAME):
        order = shuffled(base_order, rng)
        if items and order[0].id == items[-1].frame.id:
            swap_idx = 1 if len(order) > 1 else 0
            order[0], order[swap_idx] = order[swap_idx], order[0]

        for frame in order:
            compatible = compatible_by_frame[frame.id]
            unused = [w for w in compatible if w.id not in used_words[frame.id]]
            correct_word = rng.choice(unused) if unused else rng.choice(compatible)
            used_words[frame.id].add(correct_word.id)

            distractors = generate_frame_distractors(frame, correct_word, compatible, all_vocab, rng)
            items.append(FrameFill(
                id=f"frame-{frame.id}-{round_num}-{len(items)}",
                frame=frame,
                correct_word=correct_word,
                distractors=tuple(distractors),
            ))

    return items
