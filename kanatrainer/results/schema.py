from __future__ import annotations

"""Pydantic models for persisted session results.

Serialized with camelCase aliases (`characterSet`, `totalQuestions`, ...)
under the `date` key for the timestamp, the layout of the `quizResults`
history array.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QuestionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    character: str
    correct: bool
    user_answer: str = Field(default="", alias="userAnswer")
    correct_answer: str = Field(alias="correctAnswer")


class ResultRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    timestamp: datetime = Field(alias="date")
    mode: str
    character_set: str = Field(alias="characterSet")
    total_questions: int = Field(ge=0, alias="totalQuestions")
    correct_answers: int = Field(ge=0, alias="correctAnswers")
    wrong_answers: int = Field(ge=0, alias="wrongAnswers")
    questions: List[QuestionOutcome] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _answers_le_total(self) -> "ResultRecord":
        if self.correct_answers + self.wrong_answers > self.total_questions:
            raise ValueError("correctAnswers + wrongAnswers must be <= totalQuestions")
        return self

    def to_json_dict(self) -> dict:
        """Plain JSON-ready dict with the persisted (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)
