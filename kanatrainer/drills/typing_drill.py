from __future__ import annotations

"""Typing game: type the romaji for the shown kana."""

import random
from typing import Callable, Optional

from .base_drill import BaseSession
from .question import QuestionSession
from ..config.config import TYPING_MODES


def normalize_romaji(value: str) -> str:
    """Trim surrounding whitespace and case-fold."""
    return value.strip().casefold()


class TypingSession(QuestionSession):
    kind = "typing"
    modes = TYPING_MODES

    def __init__(
        self,
        *,
        on_complete: Optional[Callable[[BaseSession], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(normalize=normalize_romaji, on_complete=on_complete, rng=rng)
