"""Tests for cognate rule helpers and distractor generation."""

from __future__ import annotations

from conftest import make_false_cognate, make_frame, make_rule, make_word

from speedrun.curriculum.loader import CognateRule
from speedrun.engine.distractors import (
    apply_rule,
    generate_cognate_options,
    generate_frame_distractors,
    is_false_cognate,
    matches_rule,
)


def _rule(id: str, english_suffix: str, spanish_suffix: str) -> CognateRule:
    return make_rule(id, 0, english_suffix=english_suffix, spanish_suffix=spanish_suffix)


TION = _rule("cr-tion", "-tion", "-ción")
TY = _rule("cr-ty", "-ty", "-dad")
OUS = _rule("cr-ous", "-ous", "-oso")


class TestApplyRule:
    def test_transforms_matching_word(self):
        assert apply_rule("nation", TION) == "nación"
        assert apply_rule("city", TY) == "cidad"

    def test_lowercases(self):
        assert apply_rule("Nation", TION) == "nación"

    def test_non_matching_word_unchanged(self):
        assert apply_rule("table", TION) == "table"

    def test_matches_rule(self):
        assert matches_rule("Famous", OUS)
        assert not matches_rule("famous", TION)


class TestIsFalseCognate:
    def test_case_insensitive(self):
        fc = make_false_cognate("x")
        assert is_false_cognate("FALSO-X", [fc]) == fc

    def test_not_found(self):
        assert is_false_cognate("agua", [make_false_cognate("x")]) is None


class TestCognateOptions:
    def test_four_unique_options_with_correct(self, rng):
        options = generate_cognate_options("nación", [TION, TY, OUS], "nation", rng)
        assert len(options) == 4
        assert len(set(options)) == 4
        assert options.count("nación") == 1

    def test_wrong_rules_first_then_mangles(self, rng):
        options = generate_cognate_options("nación", [TION, TY, OUS], "nation", rng)
        # The matching rule is skipped; other rules force their suffix on
        assert options == ["nadad", "naoso", "nacióe", "nación"]

    def test_mangles_only_when_no_rule_applies(self, rng):
        options = generate_cognate_options("spa0", [TION], "eng0", rng)
        assert options == ["spae", "spar", "spa0s", "spa0"]


class TestFrameDistractors:
    def test_three_non_compatible_when_enough(self, rng):
        correct = make_word("w1")
        vocab = [correct, make_word("d1"), make_word("d2"), make_word("d3")]
        distractors = generate_frame_distractors(make_frame("f1", ["w1"]), correct, [correct], vocab, rng)
        assert [d.id for d in distractors] == ["d1", "d2", "d3"]

    def test_falls_back_to_compatible(self, rng):
        words = [make_word(f"w{i}") for i in range(1, 5)]
        frame = make_frame("f1", [w.id for w in words])
        distractors = generate_frame_distractors(frame, words[0], words, words, rng)
        assert [d.id for d in distractors] == ["w2", "w3", "w4"]

    def test_mixes_non_compatible_and_fallback(self, rng):
        correct, w2, w3, d1 = make_word("w1"), make_word("w2"), make_word("w3"), make_word("d1")
        frame = make_frame("f1", ["w1", "w2", "w3"])
        distractors = generate_frame_distractors(frame, correct, [correct, w2, w3], [correct, w2, w3, d1], rng)
        assert [d.id for d in distractors] == ["d1", "w2", "w3"]

    def test_never_includes_correct_word(self, rng):
        correct = make_word("w1")
        vocab = [correct, make_word("d1"), make_word("d2"), make_word("d3")]
        distractors = generate_frame_distractors(make_frame("f1", ["w1"]), correct, [correct], vocab, rng)
        assert all(d.id != correct.id for d in distractors)

    def test_empty_when_nothing_available(self, rng):
        correct = make_word("w1")
        assert generate_frame_distractors(make_frame("f1", ["w1"]), correct, [correct], [correct], rng) == []

    def test_slot_frame_has_no_duplicates(self, rng):
        # No explicit ids: every other word is both non-compatible and compatible
        words = [make_word(f"w{i}") for i in range(1, 4)]
        frame = make_frame("f1", [])
        distractors = generate_frame_distractors(frame, words[0], words, words, rng)
        assert [d.id for d in distractors] == ["w2", "w3"]
