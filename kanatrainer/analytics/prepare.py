from __future__ import annotations

"""Flatten result records into a per-question DataFrame."""

from typing import Iterable

import pandas as pd

from ..results.schema import ResultRecord

DTYPES = {
    "session_id": "string",
    "timestamp": pd.DatetimeTZDtype(tz="UTC"),
    "mode": "category",
    "character_set": "category",
    "character": "string",
    "correct": "bool",
}


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def records_to_frame(records: Iterable[ResultRecord]) -> pd.DataFrame:
    """One row per question outcome, sorted by (timestamp, session_id).

    Columns: session_id, timestamp, mode, character_set, character, correct.
    """
    rows = [
        {
            "session_id": rec.id,
            "timestamp": rec.timestamp,
            "mode": rec.mode,
            "character_set": rec.character_set,
            "character": q.character,
            "correct": q.correct,
        }
        for rec in records
        for q in rec.questions
    ]
    if not rows:
        return _empty_df()
    df = pd.DataFrame(rows)
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    df = df.astype({k: v for k, v in DTYPES.items() if k != "timestamp"})
    return df.sort_values(["timestamp", "session_id"], kind="stable").reset_index(drop=True)
