import json
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pandas as pd

from kanatrainer.analytics import (
    character_accuracy,
    daily_accuracy,
    export_ndjson,
    export_parquet,
    records_to_frame,
)
from kanatrainer.stats.stats import aggregate
from tests.helpers import make_record

DAY1 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


class AnalyticsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            make_record("b", [("か", False, "ka"), ("あ", True, "a")], when=DAY1 + timedelta(hours=2)),
            make_record("a", [("あ", True, "a")], when=DAY1),
            make_record("c", [("あ", False, "a"), ("い", True, "i")], when=DAY1 + timedelta(days=1)),
        ]

    def test_frame_has_one_row_per_question(self) -> None:
        df = records_to_frame(self.records)
        self.assertEqual(len(df), 5)
        self.assertEqual(
            list(df.columns), ["session_id", "timestamp", "mode", "character_set", "character", "correct"]
        )
        self.assertEqual(df["session_id"].tolist()[0], "a")
        self.assertEqual(str(df["timestamp"].dt.tz), "UTC")

    def test_empty_frame_keeps_columns(self) -> None:
        df = records_to_frame([])
        self.assertTrue(df.empty)
        self.assertIn("character", df.columns)

    def test_character_accuracy_agrees_with_aggregate(self) -> None:
        table = character_accuracy(records_to_frame(self.records))
        got = {
            row.character: (int(row.total), int(row.correct), int(row.wrong), float(row.accuracy))
            for row in table.itertuples()
        }
        expected = {
            s.character: (s.total_attempts, s.correct_attempts, s.wrong_attempts, s.accuracy)
            for s in aggregate(self.records)
        }
        self.assertEqual(set(got), set(expected))
        for ch, values in expected.items():
            self.assertEqual(got[ch][:3], values[:3])
            self.assertAlmostEqual(got[ch][3], values[3])
        self.assertEqual(table["character"].iloc[0], "あ")

    def test_daily_accuracy(self) -> None:
        daily = daily_accuracy(records_to_frame(self.records))
        self.assertEqual(daily["total"].tolist(), [3, 2])
        self.assertEqual(daily["correct"].tolist(), [2, 1])
        self.assertAlmostEqual(float(daily["accuracy"].iloc[1]), 50.0)

    def test_exports(self) -> None:
        df = records_to_frame(self.records)
        with tempfile.TemporaryDirectory() as tmp:
            pq = Path(tmp) / "out" / "results.parquet"
            export_parquet(df, pq)
            back = pd.read_parquet(pq)
            self.assertEqual(len(back), 5)
            self.assertEqual(back["character"].tolist(), df["character"].tolist())

            nd = Path(tmp) / "results.ndjson"
            export_ndjson(df, nd)
            lines = nd.read_text(encoding="utf-8").splitlines()
            self.assertEqual(len(lines), 5)
            self.assertEqual(json.loads(lines[0])["character"], "あ")


if __name__ == "__main__":
    unittest.main()
