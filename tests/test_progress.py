"""Tests for the SQLite progress store and quiz unlock."""

from __future__ import annotations

from speedrun.state.progress import COMPLETION_THRESHOLD, ExerciseType, ProgressStore


class TestRecordAttempt:
    def test_first_attempt(self, progress_store):
        c = progress_store.record_attempt(1, ExerciseType.VOCAB, 80, now=1234)
        assert c.best_score == 80
        assert c.attempts == 1
        assert c.completed
        assert c.last_attempt_at == 1234

    def test_best_score_kept(self, progress_store):
        progress_store.record_attempt(1, ExerciseType.VOCAB, 80)
        c = progress_store.record_attempt(1, ExerciseType.VOCAB, 40)
        assert c.best_score == 80
        assert c.attempts == 2

    def test_completed_is_sticky(self, progress_store):
        progress_store.record_attempt(1, ExerciseType.FRAMES, COMPLETION_THRESHOLD)
        progress_store.record_attempt(1, ExerciseType.FRAMES, 10)
        assert progress_store.is_exercise_complete(1, ExerciseType.FRAMES)

    def test_below_threshold_not_complete(self, progress_store):
        progress_store.record_attempt(1, ExerciseType.FRAMES, COMPLETION_THRESHOLD - 1)
        assert not progress_store.is_exercise_complete(1, ExerciseType.FRAMES)

    def test_accepts_plain_strings(self, progress_store):
        progress_store.record_attempt(2, "verbs", 70)
        assert progress_store.exercise_score(2, ExerciseType.VERBS) == 70

    def test_unknown_is_empty(self, progress_store):
        assert progress_store.get_completion(3, ExerciseType.QUIZ) is None
        assert progress_store.exercise_score(3, ExerciseType.QUIZ) == 0
        assert not progress_store.is_exercise_complete(3, ExerciseType.QUIZ)

    def test_persists_across_instances(self, tmp_path):
        db = tmp_path / "progress.db"
        ProgressStore(db_path=db).record_attempt(1, ExerciseType.VOCAB, 90)
        assert ProgressStore(db_path=db).exercise_score(1, ExerciseType.VOCAB) == 90


class TestDayCompletion:
    def test_no_progress(self, progress_store):
        assert progress_store.day_completion_percent(1) == 0

    def test_day_one_excludes_verbs(self, progress_store):
        progress_store.record_attempt(1, ExerciseType.VOCAB, 100)
        assert progress_store.day_completion_percent(1) == 25
        for t in (ExerciseType.COGNATES, ExerciseType.FRAMES, ExerciseType.QUIZ):
            progress_store.record_attempt(1, t, 100)
        assert progress_store.day_completion_percent(1) == 100
        assert progress_store.is_day_complete(1)

    def test_later_days_use_five_types(self, progress_store):
        progress_store.record_attempt(2, ExerciseType.VOCAB, 100)
        progress_store.record_attempt(2, ExerciseType.VERBS, 100)
        assert progress_store.day_completion_percent(2) == 40
        assert not progress_store.is_day_complete(2)

    def test_failed_attempt_counts_nothing(self, progress_store):
        progress_store.record_attempt(1, ExerciseType.VOCAB, 20)
        assert progress_store.day_completion_percent(1) == 0


class TestQuizUnlock:
    def test_day_one_needs_three_types(self, progress_store):
        for t in (ExerciseType.VOCAB, ExerciseType.COGNATES):
            progress_store.record_attempt(1, t, 60)
        assert not progress_store.can_take_quiz(1)
        progress_store.record_attempt(1, ExerciseType.FRAMES, 60)
        assert progress_store.can_take_quiz(1)

    def test_day_two_also_needs_verbs(self, progress_store):
        for t in (ExerciseType.VOCAB, ExerciseType.COGNATES, ExerciseType.FRAMES):
            progress_store.record_attempt(2, t, 100)
        assert not progress_store.can_take_quiz(2)
        progress_store.record_attempt(2, ExerciseType.VERBS, 59)
        assert not progress_store.can_take_quiz(2)
        progress_store.record_attempt(2, ExerciseType.VERBS, 60)
        assert progress_store.can_take_quiz(2)

    def test_custom_threshold(self, tmp_path):
        store = ProgressStore(db_path=tmp_path / "p.db", threshold=90)
        for t in (ExerciseType.VOCAB, ExerciseType.COGNATES, ExerciseType.FRAMES):
            store.record_attempt(1, t, 80)
        assert not store.can_take_quiz(1)


class TestReset:
    def test_reset_clears_everything(self, progress_store):
        progress_store.record_attempt(1, ExerciseType.VOCAB, 100)
        progress_store.reset()
        assert progress_store.get_day_progress(1) == {}
