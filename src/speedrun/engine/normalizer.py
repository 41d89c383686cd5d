"""Answer normalization for comparison."""

from __future__ import annotations

import re

TYPO_TOLERANCE = 1


def normalize_text(text: str) -> str:
    """Normalize text for comparison: strip, collapse whitespace, lowercase."""
    text = text.strip()
    text = re.sub(r"\s+", " ", text)
    return text.lower()


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def typed_answer_matches(guess: str, correct: str, tolerance: int = TYPO_TOLERANCE) -> bool:
    """Check a typed cognate answer, forgiving a single typo."""
    guess = normalize_text(guess)
    if not guess:
        return False
    return levenshtein(guess, normalize_text(correct)) <= tolerance


def conjugation_matches(guess: str, correct: str) -> bool:
    """Conjugations must be exact; accents count."""
    return normalize_text(guess) == normalize_text(correct)


def choices_match(guess: str, correct: str) -> bool:
    """Check if a multiple-choice guess matches the correct option text."""
    return normalize_text(guess) == normalize_text(correct)
