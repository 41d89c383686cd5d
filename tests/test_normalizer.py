"""Tests for answer normalization."""

from speedrun.engine.normalizer import (
    choices_match,
    conjugation_matches,
    levenshtein,
    normalize_text,
    typed_answer_matches,
)


class TestNormalizeText:
    def test_strips_and_lowercases(self):
        assert normalize_text("  Nación  ") == "nación"

    def test_collapses_whitespace(self):
        assert normalize_text("la   cuenta\tpor favor") == "la cuenta por favor"


class TestLevenshtein:
    def test_identical(self):
        assert levenshtein("nación", "nación") == 0

    def test_single_edits(self):
        assert levenshtein("nacion", "nación") == 1
        assert levenshtein("nación", "nacións") == 1
        assert levenshtein("nación", "nació") == 1

    def test_empty(self):
        assert levenshtein("", "abc") == 3


class TestTypedAnswer:
    def test_exact(self):
        assert typed_answer_matches("Nación", "nación")

    def test_one_typo_allowed(self):
        assert typed_answer_matches("nacion", "nación")

    def test_two_typos_rejected(self):
        assert not typed_answer_matches("nasion", "nación")

    def test_blank_rejected(self):
        assert not typed_answer_matches("   ", "a")


class TestConjugation:
    def test_exact_only(self):
        assert conjugation_matches(" Soy ", "soy")
        assert not conjugation_matches("esta", "está")


class TestChoices:
    def test_case_insensitive(self):
        assert choices_match("Water ", "water")
        assert not choices_match("wate", "water")
