from __future__ import annotations

"""Base session abstractions: lifecycle, pool selection and completion.

A practice session moves NOT_STARTED -> ACTIVE -> COMPLETE. `stop()` returns
it to NOT_STARTED from any state and discards the pool and counters.
Completion is a single transition that notifies exactly one handler.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..errors import SessionValidationError
from ..kana.characters import (
    Character,
    basic_characters,
    dakuon_characters,
    display_form,
    get_character,
)
from ..util.randomness import take_random


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETE = "complete"


CHARACTER_SETS = ("basic", "dakuon", "all", "custom", "selection")


@dataclass(frozen=True)
class CharacterSetPolicy:
    """How the practice pool is drawn from the catalogs.

    - basic / dakuon / all: the whole catalog(s), basic first
    - custom: `basic_count` random basic + `dakuon_count` random dakuon
    - selection: exactly the characters named in `character_ids`
    """

    kind: str = "basic"
    basic_count: int = 10
    dakuon_count: int = 5
    min_practice_size: int = 5
    character_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class QuestionBreakdown:
    """One per-question line of a finished session, as shown to the user."""

    character: str
    correct: bool
    user_answer: str
    correct_answer: str


def build_pool(policy: CharacterSetPolicy, rng: Optional[random.Random] = None) -> List[Character]:
    """Return the practice pool for `policy`.

    Raises SessionValidationError when the pool would be empty or smaller
    than `policy.min_practice_size`.
    """
    basic = basic_characters()
    dakuon = dakuon_characters()

    if policy.kind == "basic":
        pool = list(basic)
    elif policy.kind == "dakuon":
        pool = list(dakuon)
    elif policy.kind == "all":
        pool = list(basic) + list(dakuon)
    elif policy.kind == "custom":
        if policy.basic_count < 0 or policy.dakuon_count < 0:
            raise SessionValidationError("Character counts must not be negative")
        # Counts beyond a catalog's size take the whole catalog
        n_basic = min(policy.basic_count, len(basic))
        n_dakuon = min(policy.dakuon_count, len(dakuon))
        if n_basic + n_dakuon < policy.min_practice_size:
            raise SessionValidationError(
                f"Please select at least {policy.min_practice_size} total characters "
                f"(got {n_basic + n_dakuon})"
            )
        pool = take_random(basic, n_basic, rng) + take_random(dakuon, n_dakuon, rng)
    elif policy.kind == "selection":
        pool = []
        seen = set()
        for cid in policy.character_ids:
            try:
                ch = get_character(cid)
            except KeyError as e:
                raise SessionValidationError(str(e.args[0])) from None
            if ch.id not in seen:
                seen.add(ch.id)
                pool.append(ch)
    else:
        raise SessionValidationError(f"Unknown character set: {policy.kind}")

    if not pool:
        raise SessionValidationError("Practice pool is empty")
    if len(pool) < policy.min_practice_size:
        raise SessionValidationError(
            f"Please select at least {policy.min_practice_size} total characters (got {len(pool)})"
        )
    return pool


class BaseSession:
    """Abstract base for practice sessions.

    Subclasses set `kind` and `modes`, build their per-session structures in
    `_setup`, and call `_complete()` once their completion condition holds.
    """

    kind = "base"
    modes: Tuple[str, ...] = ()

    def __init__(
        self,
        *,
        on_complete: Optional[Callable[["BaseSession"], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng
        self._on_complete = on_complete
        self.state = SessionState.NOT_STARTED
        self.policy: Optional[CharacterSetPolicy] = None
        self.mode: Optional[str] = None
        self.pool: List[Character] = []
        self.correct_count = 0
        self.incorrect_count = 0
        self.elapsed = 0
        self._completion_fired = False

    # --- lifecycle ---

    def set_completion_handler(self, handler: Callable[["BaseSession"], None]) -> None:
        """Register the single on-complete subscriber."""
        if self._on_complete is not None and self._on_complete is not handler:
            raise ValueError("A completion handler is already registered")
        self._on_complete = handler

    def start(self, policy: CharacterSetPolicy, mode: str) -> None:
        if mode not in self.modes:
            raise SessionValidationError(f"Unsupported mode for {self.kind}: {mode}")
        # Build before touching state so a rejected start changes nothing
        pool = build_pool(policy, self._rng)
        self.policy = policy
        self.mode = mode
        self.pool = pool
        self.correct_count = 0
        self.incorrect_count = 0
        self.elapsed = 0
        self._completion_fired = False
        self._setup(pool)
        self.state = SessionState.ACTIVE
        xtrace(
            "session_started",
            {"kind": self.kind, "mode": mode, "set": policy.kind, "size": len(pool)},
        )

    def stop(self) -> None:
        self.state = SessionState.NOT_STARTED
        self.policy = None
        self.mode = None
        self.pool = []
        self.correct_count = 0
        self.incorrect_count = 0
        self.elapsed = 0
        self._completion_fired = False
        self._teardown()

    def tick(self) -> None:
        if self.state is SessionState.ACTIVE:
            self.elapsed += 1

    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def is_complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    # --- hooks ---

    def _setup(self, pool: List[Character]) -> None:
        raise NotImplementedError

    def _teardown(self) -> None:
        raise NotImplementedError

    def display_character(self, character: Character) -> str:
        """Form of `character` recorded in results for this session's mode."""
        raise NotImplementedError

    def question_breakdown(self) -> List[QuestionBreakdown]:
        raise NotImplementedError

    def result_counts(self) -> Tuple[int, int, int]:
        """(total_questions, correct_answers, wrong_answers) for the result record."""
        raise NotImplementedError

    # --- helpers ---

    def _require_active(self, operation: str) -> None:
        if self.state is not SessionState.ACTIVE:
            raise SessionValidationError(f"Cannot {operation}: session is {self.state.value}")

    def _form(self, character: Character, script: str) -> str:
        return display_form(character, script)

    def _complete(self) -> None:
        if self._completion_fired:
            return
        self.state = SessionState.COMPLETE
        self._completion_fired = True
        xtrace(
            "session_completed",
            {
                "kind": self.kind,
                "correct": self.correct_count,
                "incorrect": self.incorrect_count,
                "elapsed": self.elapsed,
            },
        )
        if self._on_complete is not None:
            self._on_complete(self)
