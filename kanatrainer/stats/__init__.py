from .stats import (
    CharacterStat,
    OverallStats,
    aggregate,
    filter_by_timeframe,
    format_summary,
    overall_stats,
    weakest,
)

__all__ = [
    "CharacterStat",
    "OverallStats",
    "aggregate",
    "filter_by_timeframe",
    "format_summary",
    "overall_stats",
    "weakest",
]
