from __future__ import annotations

"""Grouped accuracy tables over the per-question frame."""

import numpy as np
import pandas as pd


def _with_accuracy(g: pd.DataFrame) -> pd.DataFrame:
    total = g["total"].to_numpy(dtype="float64")
    correct = g["correct"].to_numpy(dtype="float64")
    g["wrong"] = (g["total"] - g["correct"]).astype("int64")
    g["accuracy"] = np.where(total > 0, correct / np.where(total > 0, total, 1.0) * 100.0, 0.0)
    return g


def character_accuracy(df: pd.DataFrame) -> pd.DataFrame:
    """Per character: total, correct, wrong, accuracy (%), most attempts first.

    Matches `stats.aggregate` for the same records.
    """
    g = (
        df.groupby("character", sort=False, observed=True)["correct"]
        .agg(total="size", correct="sum")
        .reset_index()
    )
    g["total"] = g["total"].astype("int64")
    g["correct"] = g["correct"].astype("int64")
    g = _with_accuracy(g)
    return g.sort_values("total", ascending=False, kind="stable").reset_index(drop=True)


def daily_accuracy(df: pd.DataFrame) -> pd.DataFrame:
    """Per UTC calendar day: questions answered, correct, accuracy (%)."""
    day = df["timestamp"].dt.floor("D")
    g = (
        df.assign(day=day)
        .groupby("day", observed=True)["correct"]
        .agg(total="size", correct="sum")
        .reset_index()
    )
    g["total"] = g["total"].astype("int64")
    g["correct"] = g["correct"].astype("int64")
    return _with_accuracy(g).sort_values("day").reset_index(drop=True)
