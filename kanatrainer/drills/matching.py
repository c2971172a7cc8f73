from __future__ import annotations

"""Matching game: pair each source character with its target form."""

import random
from typing import Callable, Dict, List, Optional, Set, Tuple

from .base_drill import BaseSession, QuestionBreakdown
from ..app.explain import trace as xtrace
from ..config.config import MATCH_MODES
from ..errors import SessionValidationError
from ..kana.characters import Character
from ..util.randomness import shuffle


class MatchingSession(BaseSession):
    """Select a source character, then attempt it against a target slot.

    Matching is by character id, never by romaji text: じ and ぢ share
    "ji" but are different targets.
    """

    kind = "match"
    modes = MATCH_MODES

    def __init__(
        self,
        *,
        target_order: str = "random",
        on_complete: Optional[Callable[[BaseSession], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(on_complete=on_complete, rng=rng)
        if target_order not in ("random", "sequential"):
            raise ValueError(f"Unknown target order: {target_order}")
        self.target_ordering = target_order
        self.presentation_order: List[Character] = []
        self.target_order: List[Character] = []
        self.matched: Set[str] = set()
        self.selected: Optional[str] = None
        self.attempts: List[Tuple[str, str, bool]] = []
        self._ids: Set[str] = set()
        self._by_id: Dict[str, Character] = {}
        self._first_attempt: Dict[str, Tuple[str, bool]] = {}

    def _setup(self, pool: List[Character]) -> None:
        self.presentation_order = shuffle(pool, self._rng)
        if self.target_ordering == "sequential":
            self.target_order = list(pool)
        else:
            self.target_order = shuffle(pool, self._rng)
        self.matched = set()
        self.selected = None
        self.attempts = []
        self._by_id = {c.id: c for c in pool}
        self._ids = set(self._by_id)
        self._first_attempt = {}

    def _teardown(self) -> None:
        self.presentation_order = []
        self.target_order = []
        self.matched = set()
        self.selected = None
        self.attempts = []
        self._by_id = {}
        self._ids = set()
        self._first_attempt = {}

    # --- forms ---

    @property
    def source_script(self) -> str:
        return (self.mode or MATCH_MODES[0]).split("-", 1)[0]

    @property
    def target_script(self) -> str:
        return (self.mode or MATCH_MODES[0]).split("-", 1)[1]

    def source_form(self, character: Character) -> str:
        return self._form(character, self.source_script)

    def target_form(self, character: Character) -> str:
        return self._form(character, self.target_script)

    def display_character(self, character: Character) -> str:
        return self.target_form(character)

    # --- operations ---

    def select(self, char_id: str) -> None:
        self._require_active("select")
        if char_id not in self._ids:
            raise SessionValidationError(f"Character '{char_id}' is not in this session")
        if char_id in self.matched:
            return
        self.selected = char_id

    def attempt_match(self, target_id: str) -> Optional[bool]:
        """Try the pending selection against `target_id`.

        Returns True on a match, False on a miss, None when nothing is selected.
        """
        self._require_active("attempt a match")
        if target_id not in self._ids:
            raise SessionValidationError(f"Target '{target_id}' is not in this session")
        if self.selected is None:
            return None

        source_id = self.selected
        is_correct = source_id == target_id
        self.attempts.append((source_id, target_id, is_correct))
        self._first_attempt.setdefault(source_id, (target_id, is_correct))
        self.selected = None
        if is_correct:
            self.matched.add(source_id)
            self.correct_count += 1
            xtrace("matched", {"id": source_id})
        else:
            self.incorrect_count += 1
            xtrace("missed", {"selected": source_id, "target": target_id})

        if len(self.matched) == len(self.pool):
            self._complete()
        return is_correct

    def is_complete(self) -> bool:
        return bool(self.pool) and len(self.matched) == len(self.pool)

    def remaining(self) -> List[Character]:
        """Unmatched characters in presentation order."""
        return [c for c in self.presentation_order if c.id not in self.matched]

    def progress_percent(self) -> float:
        if not self.pool:
            return 0.0
        return len(self.matched) / len(self.pool) * 100

    # --- results ---

    def question_breakdown(self) -> List[QuestionBreakdown]:
        rows: List[QuestionBreakdown] = []
        for ch in self.presentation_order:
            target_id, ok = self._first_attempt.get(ch.id, (ch.id, True))
            rows.append(
                QuestionBreakdown(
                    character=self.display_character(ch),
                    correct=ok,
                    user_answer=self._by_id[target_id].romaji,
                    correct_answer=ch.romaji,
                )
            )
        return rows

    def result_counts(self) -> Tuple[int, int, int]:
        total = len(self.pool)
        first_try = sum(1 for _t, ok in self._first_attempt.values() if ok)
        return total, first_try, total - first_try
