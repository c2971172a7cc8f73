from __future__ import annotations

"""Generic question/answer session driving the quiz and typing game.

A session is an ordered tuple of question units. Each answer is judged by
the session's predicate, recorded, and advances the cursor; the session
completes when the cursor reaches the end.
"""

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .base_drill import BaseSession, QuestionBreakdown, SessionState
from ..app.explain import trace as xtrace
from ..errors import SessionValidationError
from ..kana.characters import Character
from ..util.randomness import shuffle


@dataclass(frozen=True)
class QuestionUnit:
    character: Character
    prompt: str
    expected: str
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnswerOutcome:
    index: int
    correct: bool
    given: str
    expected: str


AnswerPredicate = Callable[[QuestionUnit, str], bool]


def exact_match(unit: QuestionUnit, answer: str) -> bool:
    return answer == unit.expected


class QuestionSession(BaseSession):
    """Sequence of question units judged by an answer predicate.

    `normalize` is applied to the raw answer before the predicate sees it and
    before it is recorded.
    """

    kind = "question"

    def __init__(
        self,
        *,
        predicate: AnswerPredicate = exact_match,
        normalize: Optional[Callable[[str], str]] = None,
        on_complete: Optional[Callable[[BaseSession], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(on_complete=on_complete, rng=rng)
        self._predicate = predicate
        self._normalize = normalize
        self.units: Tuple[QuestionUnit, ...] = ()
        self.cursor = 0
        self.answers: List[AnswerOutcome] = []

    def _setup(self, pool: List[Character]) -> None:
        self.units = tuple(self._build_unit(c) for c in shuffle(pool, self._rng))
        self.cursor = 0
        self.answers = []

    def _teardown(self) -> None:
        self.units = ()
        self.cursor = 0
        self.answers = []

    def _build_unit(self, character: Character) -> QuestionUnit:
        return QuestionUnit(
            character=character,
            prompt=self.display_character(character),
            expected=character.romaji,
        )

    def display_character(self, character: Character) -> str:
        return self._form(character, self.mode or "hiragana")

    def current(self) -> Optional[QuestionUnit]:
        if self.state is not SessionState.ACTIVE or self.cursor >= len(self.units):
            return None
        return self.units[self.cursor]

    def answer(self, value: str) -> AnswerOutcome:
        self._require_active("answer")
        if value is None or not str(value).strip():
            raise SessionValidationError("Please enter an answer first")
        unit = self.units[self.cursor]
        given = self._normalize(value) if self._normalize is not None else value
        is_correct = bool(self._predicate(unit, given))
        outcome = AnswerOutcome(index=self.cursor, correct=is_correct, given=given, expected=unit.expected)
        self.answers.append(outcome)
        if is_correct:
            self.correct_count += 1
        else:
            self.incorrect_count += 1
        self.cursor += 1
        xtrace(
            "answered",
            {"index": outcome.index, "answer": given, "truth": unit.expected, "correct": is_correct},
        )
        if self.cursor == len(self.units):
            self._complete()
        return outcome

    @property
    def total_questions(self) -> int:
        return len(self.units)

    def question_breakdown(self) -> List[QuestionBreakdown]:
        rows: List[QuestionBreakdown] = []
        for unit, outcome in zip(self.units, self.answers):
            rows.append(
                QuestionBreakdown(
                    character=unit.prompt,
                    correct=outcome.correct,
                    user_answer=outcome.given,
                    correct_answer=unit.expected,
                )
            )
        return rows

    def result_counts(self) -> Tuple[int, int, int]:
        return len(self.units), self.correct_count, self.incorrect_count
