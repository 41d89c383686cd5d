"""Plausible wrong answers for multiple-choice exercises."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from speedrun.curriculum.loader import CognateRule, FalseCognate, SentenceFrame, VocabWord
from speedrun.engine.shuffle import resolve_rng, shuffled

DISTRACTOR_COUNT = 3

# Tried in order when forcing a wrong rule onto an English word
COMMON_ENGLISH_SUFFIXES = ["tion", "sion", "ment", "ous", "ble", "al", "ive", "ty", "ence", "ance"]


def _strip_hyphen(suffix: str) -> str:
    return suffix[1:] if suffix.startswith("-") else suffix


def apply_rule(english_word: str, rule: CognateRule) -> str:
    """Transform an English word with a cognate rule; unchanged if the suffix doesn't match."""
    lower = english_word.lower()
    eng_suffix = _strip_hyphen(rule.english_suffix).lower()
    if not eng_suffix or not lower.endswith(eng_suffix):
        return english_word
    return lower[: -len(eng_suffix)] + _strip_hyphen(rule.spanish_suffix)


def matches_rule(english_word: str, rule: CognateRule) -> bool:
    return english_word.lower().endswith(_strip_hyphen(rule.english_suffix).lower())


def is_false_cognate(
    spanish_word: str, false_cognates: Sequence[FalseCognate]
) -> Optional[FalseCognate]:
    target = spanish_word.lower()
    for fc in false_cognates:
        if fc.spanish.lower() == target:
            return fc
    return None


def _apply_wrong_rule(word: str, rule: CognateRule) -> Optional[str]:
    for suffix in COMMON_ENGLISH_SUFFIXES:
        if word.endswith(suffix):
            return word[: -len(suffix)] + _strip_hyphen(rule.spanish_suffix)
    return None


def _mangle(correct: str) -> list[str]:
    return [
        correct[:-1] + "e",
        correct[:-2] + "ar",
        correct + "s",
        correct[:-1] + "a",
    ]


def generate_cognate_options(
    correct_spanish: str,
    rules: Sequence[CognateRule],
    english_word: str,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Three wrong answers plus the correct one, shuffled.

    Wrong answers come first from forcing other rules' Spanish suffixes onto
    the word, then from mechanical mangling of the correct answer.
    """
    rng = resolve_rng(rng)
    lower = english_word.lower()
    distractors: list[str] = []

    for rule in rules:
        if len(distractors) >= DISTRACTOR_COUNT:
            break
        if matches_rule(lower, rule):
            continue
        wrong = _apply_wrong_rule(lower, rule)
        if wrong and wrong != correct_spanish and wrong not in distractors:
            distractors.append(wrong)

    for option in _mangle(correct_spanish):
        if len(distractors) >= DISTRACTOR_COUNT:
            break
        if option and option != correct_spanish and option not in distractors:
            distractors.append(option)

    return shuffled([*distractors, correct_spanish], rng)


def generate_frame_distractors(
    frame: SentenceFrame,
    correct_word: VocabWord,
    compatible: Sequence[VocabWord],
    all_vocab: Sequence[VocabWord],
    rng: Optional[random.Random] = None,
) -> list[VocabWord]:
    """Up to three words that should not fill the frame's blank.

    Words outside the frame's explicit compatible list are preferred; other
    compatible words only top up a short pool. Fewer than three is acceptable.
    """
    rng = resolve_rng(rng)
    compatible_ids = set(frame.compatible_vocab_ids)
    non_compatible = [
        w for w in all_vocab if w.id not in compatible_ids and w.id != correct_word.id
    ]

    if len(non_compatible) >= DISTRACTOR_COUNT:
        return shuffled(non_compatible, rng)[:DISTRACTOR_COUNT]

    # Slot-type frames have no explicit ids, so a word can sit in both pools
    taken = {w.id for w in non_compatible}
    fallback = [w for w in compatible if w.id != correct_word.id and w.id not in taken]
    picked = shuffled(non_compatible, rng)
    picked += shuffled(fallback, rng)[: DISTRACTOR_COUNT - len(picked)]
    return shuffled(picked, rng)
