"""Day-scoped curriculum queries."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from speedrun.curriculum.loader import (
    CognateRule,
    CurriculumData,
    DayPlan,
    FalseCognate,
    SentenceFrame,
    SlotType,
    VerbEntry,
    VocabWord,
    WordCategory,
    load_curriculum_data,
)

# Slot type -> word category used when a frame lists no explicit words.
# NAME has no vocabulary counterpart.
SLOT_CATEGORIES: dict[SlotType, Optional[WordCategory]] = {
    SlotType.NOUN: WordCategory.NOUN,
    SlotType.VERB: WordCategory.VERB,
    SlotType.ADJECTIVE: WordCategory.ADJECTIVE,
    SlotType.INFINITIVE: WordCategory.VERB,
    SlotType.NAME: None,
}


class Curriculum:
    """Read-only access to the curriculum, filtered by the day items are introduced."""

    def __init__(
        self,
        words: Iterable[VocabWord] = (),
        rules: Iterable[CognateRule] = (),
        false_cognates: Iterable[FalseCognate] = (),
        frames: Iterable[SentenceFrame] = (),
        verbs: Iterable[VerbEntry] = (),
        days: Iterable[DayPlan] = (),
    ):
        self._words = list(words)
        self._rules = list(rules)
        self._false_cognates = list(false_cognates)
        self._frames = list(frames)
        self._verbs = list(verbs)
        self._days = list(days)

    @classmethod
    def from_data(cls, data: CurriculumData) -> "Curriculum":
        return cls(
            words=data.words,
            rules=data.rules,
            false_cognates=data.false_cognates,
            frames=data.frames,
            verbs=data.verbs,
            days=data.days,
        )

    # --- Vocabulary ---

    def words_for_day(self, day: int) -> list[VocabWord]:
        return [w for w in self._words if w.day == day]

    def words_up_to_day(self, day: int) -> list[VocabWord]:
        return [w for w in self._words if w.day <= day]

    def all_words(self) -> list[VocabWord]:
        return list(self._words)

    # --- Cognates ---

    def rules_for_day(self, day: int) -> list[CognateRule]:
        return [r for r in self._rules if r.day == day]

    def rules_up_to_day(self, day: int) -> list[CognateRule]:
        return [r for r in self._rules if r.day <= day]

    def false_cognates_for_day(self, day: int) -> list[FalseCognate]:
        return [fc for fc in self._false_cognates if fc.day == day]

    def false_cognates_up_to_day(self, day: int) -> list[FalseCognate]:
        return [fc for fc in self._false_cognates if fc.day <= day]

    # --- Frames ---

    def frames_for_day(self, day: int) -> list[SentenceFrame]:
        return [f for f in self._frames if f.day == day]

    def frames_up_to_day(self, day: int) -> list[SentenceFrame]:
        return [f for f in self._frames if f.day <= day]

    def compatible_words(self, frame: SentenceFrame, day: int) -> list[VocabWord]:
        """Words that can fill the frame's blank, limited to what's been taught up to `day`.

        Explicit ``compatible_vocab_ids`` win; otherwise the slot type is
        matched against word categories.
        """
        available = self.words_up_to_day(day)

        if frame.compatible_vocab_ids:
            ids = set(frame.compatible_vocab_ids)
            return [w for w in available if w.id in ids]

        if frame.slot_type == SlotType.ANY:
            return available
        category = SLOT_CATEGORIES.get(frame.slot_type)
        if category is None:
            return []
        return [w for w in available if w.category == category]

    # --- Verbs ---

    def verbs_for_day(self, day: int) -> list[VerbEntry]:
        return [v for v in self._verbs if v.day == day]

    def verbs_up_to_day(self, day: int) -> list[VerbEntry]:
        return [v for v in self._verbs if v.day <= day]

    # --- Day plans ---

    def day_plan(self, day: int) -> Optional[DayPlan]:
        for plan in self._days:
            if plan.day == day:
                return plan
        return None

    def all_days(self) -> list[DayPlan]:
        return list(self._days)


def load_curriculum(data_dir: Optional[Path] = None) -> Curriculum:
    """Load the bundled curriculum, or one from `data_dir`."""
    return Curriculum.from_data(load_curriculum_data(data_dir))
