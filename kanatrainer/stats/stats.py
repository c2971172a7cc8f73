from __future__ import annotations

"""Accuracy statistics over the result history.

All values are recomputed from the full list of records on each call;
nothing is maintained incrementally.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from ..results.schema import ResultRecord

TIMEFRAME_DAYS = {"week": 7, "month": 30}


@dataclass(frozen=True)
class CharacterStat:
    character: str
    total_attempts: int
    correct_attempts: int
    wrong_attempts: int
    accuracy: float


@dataclass(frozen=True)
class OverallStats:
    total_sessions: int
    total_questions: int
    total_correct: int
    average_accuracy: float


def aggregate(records: Iterable[ResultRecord]) -> List[CharacterStat]:
    """Per displayed character: attempts, correct/wrong counts and accuracy (%).

    Sorted by total attempts, most practised first; ties keep first-seen order.
    """
    counts: Dict[str, List[int]] = {}
    for rec in records:
        for q in rec.questions:
            bucket = counts.setdefault(q.character, [0, 0])
            bucket[0] += 1
            bucket[1] += 1 if q.correct else 0

    out = [
        CharacterStat(
            character=char,
            total_attempts=total,
            correct_attempts=correct,
            wrong_attempts=total - correct,
            accuracy=correct / total * 100,
        )
        for char, (total, correct) in counts.items()
    ]
    out.sort(key=lambda s: s.total_attempts, reverse=True)
    return out


def filter_by_timeframe(
    records: Sequence[ResultRecord],
    timeframe: str,
    now: Optional[datetime] = None,
) -> List[ResultRecord]:
    """Keep records from the last 7 (`week`) or 30 (`month`) days; `all` keeps everything."""
    if timeframe == "all":
        return list(records)
    if timeframe not in TIMEFRAME_DAYS:
        raise ValueError(f"Unknown timeframe: {timeframe}")
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=TIMEFRAME_DAYS[timeframe])
    return [r for r in records if r.timestamp >= cutoff]


def overall_stats(records: Sequence[ResultRecord]) -> OverallStats:
    """Session count, question totals and mean per-session accuracy (%)."""
    if not records:
        return OverallStats(total_sessions=0, total_questions=0, total_correct=0, average_accuracy=0.0)
    per_session = [
        (r.correct_answers / r.total_questions * 100) if r.total_questions else 0.0 for r in records
    ]
    return OverallStats(
        total_sessions=len(records),
        total_questions=sum(r.total_questions for r in records),
        total_correct=sum(r.correct_answers for r in records),
        average_accuracy=sum(per_session) / len(per_session),
    )


def weakest(stats: Sequence[CharacterStat], limit: int = 5) -> List[CharacterStat]:
    """Lowest accuracy first; more attempts wins a tie."""
    ranked = sorted(stats, key=lambda s: (s.accuracy, -s.total_attempts))
    return ranked[: max(0, limit)]


def format_summary(records: Sequence[ResultRecord], top: int = 10) -> str:
    """Return a human-readable summary of the history."""
    overall = overall_stats(records)
    lines = [
        f"Sessions: {overall.total_sessions}",
        f"Questions: {overall.total_correct}/{overall.total_questions} correct",
        f"Average accuracy: {overall.average_accuracy:.1f}%",
    ]
    per_char = aggregate(records)
    if per_char:
        lines.append("")
        lines.append("Most practised:")
        for s in per_char[:top]:
            lines.append(
                f"  {s.character}: {s.correct_attempts}/{s.total_attempts} ({s.accuracy:.1f}%)"
            )
        weak = [s for s in weakest(per_char, limit=top) if s.wrong_attempts > 0]
        if weak:
            lines.append("")
            lines.append("Needs practice:")
            for s in weak:
                lines.append(f"  {s.character}: {s.accuracy:.1f}% ({s.wrong_attempts} wrong)")
    return "\n".join(lines)
