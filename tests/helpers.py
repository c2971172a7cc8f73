"""Shared builders for result records."""

from datetime import datetime, timezone

from kanatrainer.results.schema import QuestionOutcome, ResultRecord


def make_record(rid, answers, *, when=None, mode="hiragana", character_set="basic"):
    """`answers` is a list of (character, correct, romaji) tuples."""
    questions = [
        QuestionOutcome(character=ch, correct=ok, user_answer=romaji if ok else "x", correct_answer=romaji)
        for ch, ok, romaji in answers
    ]
    correct = sum(1 for _c, ok, _r in answers if ok)
    return ResultRecord(
        id=rid,
        timestamp=when or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        mode=mode,
        character_set=character_set,
        total_questions=len(answers),
        correct_answers=correct,
        wrong_answers=len(answers) - correct,
        questions=questions,
    )
