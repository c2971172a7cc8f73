from __future__ import annotations

"""Multiple-choice quiz: pick the romaji for the shown kana."""

import random
from typing import Callable, Optional

from .base_drill import BaseSession
from .question import AnswerOutcome, QuestionSession, QuestionUnit
from ..config.config import QUIZ_MODES
from ..errors import SessionValidationError
from ..kana.characters import Character, all_characters
from ..util.randomness import shuffle


class QuizSession(QuestionSession):
    """Each question offers the correct romaji plus random distractors.

    Distractors come from every other character (excluded by id), so a
    shared romaji such as "ji" can appear twice; either copy is correct.
    """

    kind = "quiz"
    modes = QUIZ_MODES

    def __init__(
        self,
        *,
        options_count: int = 5,
        on_complete: Optional[Callable[[BaseSession], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(on_complete=on_complete, rng=rng)
        if options_count < 2:
            raise ValueError("options_count must be at least 2")
        self.options_count = options_count

    def _build_unit(self, character: Character) -> QuestionUnit:
        others = [c.romaji for c in all_characters() if c.id != character.id]
        wrong = shuffle(others, self._rng)[: self.options_count - 1]
        options = tuple(shuffle([character.romaji] + wrong, self._rng))
        return QuestionUnit(
            character=character,
            prompt=self.display_character(character),
            expected=character.romaji,
            options=options,
        )

    def answer_option(self, index: int) -> AnswerOutcome:
        """Answer the current question with the option at `index` (0-based)."""
        unit = self.current()
        if unit is None:
            self._require_active("answer")
            raise SessionValidationError("No question to answer")
        if not 0 <= index < len(unit.options):
            raise SessionValidationError(f"Option {index + 1} is out of range (1-{len(unit.options)})")
        return self.answer(unit.options[index])
