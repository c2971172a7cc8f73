import unittest
from datetime import datetime, timedelta, timezone

from kanatrainer.stats.stats import (
    CharacterStat,
    aggregate,
    filter_by_timeframe,
    format_summary,
    overall_stats,
    weakest,
)
from tests.helpers import make_record

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


class AggregateTests(unittest.TestCase):
    def test_same_character_across_two_records(self) -> None:
        records = [
            make_record("1", [("あ", True, "a")]),
            make_record("2", [("あ", False, "a")]),
        ]
        self.assertEqual(
            aggregate(records),
            [CharacterStat(character="あ", total_attempts=2, correct_attempts=1, wrong_attempts=1, accuracy=50.0)],
        )

    def test_sorted_by_attempts_with_stable_ties(self) -> None:
        records = [
            make_record("1", [("か", True, "ka"), ("あ", True, "a"), ("い", False, "i")]),
            make_record("2", [("あ", False, "a"), ("い", True, "i")]),
            make_record("3", [("あ", True, "a")]),
        ]
        stats = aggregate(records)
        self.assertEqual([s.character for s in stats], ["あ", "い", "か"])
        self.assertEqual(stats[0].total_attempts, 3)
        self.assertAlmostEqual(stats[0].accuracy, 200 / 3)
        for s in stats:
            self.assertEqual(s.correct_attempts + s.wrong_attempts, s.total_attempts)

    def test_scripts_are_tracked_separately(self) -> None:
        records = [make_record("1", [("あ", True, "a"), ("ア", False, "a")])]
        self.assertEqual({s.character for s in aggregate(records)}, {"あ", "ア"})

    def test_empty_history(self) -> None:
        self.assertEqual(aggregate([]), [])


class TimeframeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            make_record("old", [("あ", True, "a")], when=NOW - timedelta(days=40)),
            make_record("month", [("あ", True, "a")], when=NOW - timedelta(days=20)),
            make_record("week", [("あ", True, "a")], when=NOW - timedelta(days=2)),
            make_record("edge", [("あ", True, "a")], when=NOW - timedelta(days=7)),
        ]

    def _ids(self, timeframe, now=NOW):
        return [r.id for r in filter_by_timeframe(self.records, timeframe, now=now)]

    def test_windows(self) -> None:
        self.assertEqual(self._ids("all"), ["old", "month", "week", "edge"])
        self.assertEqual(self._ids("month"), ["month", "week", "edge"])
        self.assertEqual(self._ids("week"), ["week", "edge"])

    def test_naive_now_is_treated_as_utc(self) -> None:
        self.assertEqual(self._ids("week", now=NOW.replace(tzinfo=None)), ["week", "edge"])

    def test_unknown_timeframe(self) -> None:
        with self.assertRaises(ValueError):
            filter_by_timeframe(self.records, "year", now=NOW)


class OverallTests(unittest.TestCase):
    def test_mean_of_session_accuracies(self) -> None:
        records = [
            make_record("1", [("あ", True, "a"), ("い", True, "i")]),
            make_record("2", [("あ", False, "a"), ("い", True, "i"), ("う", False, "u"), ("え", False, "e")]),
        ]
        o = overall_stats(records)
        self.assertEqual((o.total_sessions, o.total_questions, o.total_correct), (2, 6, 3))
        self.assertAlmostEqual(o.average_accuracy, 62.5)

    def test_empty(self) -> None:
        o = overall_stats([])
        self.assertEqual((o.total_sessions, o.average_accuracy), (0, 0.0))


class SummaryTests(unittest.TestCase):
    def test_weakest_prefers_low_accuracy_then_more_attempts(self) -> None:
        stats = [
            CharacterStat("a", 4, 4, 0, 100.0),
            CharacterStat("b", 2, 0, 2, 0.0),
            CharacterStat("c", 5, 0, 5, 0.0),
            CharacterStat("d", 4, 2, 2, 50.0),
        ]
        self.assertEqual([s.character for s in weakest(stats, limit=3)], ["c", "b", "d"])
        self.assertEqual(weakest(stats, limit=0), [])

    def test_format_summary(self) -> None:
        records = [
            make_record("1", [("あ", True, "a"), ("い", False, "i")]),
            make_record("2", [("あ", True, "a")]),
        ]
        text = format_summary(records, top=5)
        self.assertIn("Sessions: 2", text)
        self.assertIn("Questions: 2/3 correct", text)
        self.assertIn("Average accuracy: 75.0%", text)
        self.assertIn("  あ: 2/2 (100.0%)", text)
        self.assertIn("Needs practice:", text)
        self.assertIn("  い: 0.0% (1 wrong)", text)

    def test_format_summary_without_history(self) -> None:
        text = format_summary([])
        self.assertIn("Sessions: 0", text)
        self.assertNotIn("Most practised:", text)


if __name__ == "__main__":
    unittest.main()
