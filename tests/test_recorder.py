import io
import json
import random
import unittest
from contextlib import redirect_stdout
from datetime import datetime, timezone

from kanatrainer.drills.base_drill import CharacterSetPolicy
from kanatrainer.drills.matching import MatchingSession
from kanatrainer.drills.typing_drill import TypingSession
from kanatrainer.errors import PersistenceError, SessionValidationError, StoreError
from kanatrainer.results.recorder import HISTORY_KEY, ResultRecorder
from kanatrainer.results.schema import ResultRecord
from kanatrainer.stats.stats import aggregate
from kanatrainer.storage.store import MemoryStore

FIXED = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


def _selection(*ids: str) -> CharacterSetPolicy:
    return CharacterSetPolicy(kind="selection", character_ids=tuple(ids), min_practice_size=1)


class _BrokenStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


def _finished_typing(answers) -> TypingSession:
    s = TypingSession(rng=random.Random(0))
    s.start(_selection(*answers.keys()), "hiragana")
    while s.is_active():
        unit = s.current()
        s.answer(answers[unit.character.id])
    return s


class RecorderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.recorder = ResultRecorder(self.store, clock=lambda: FIXED)

    def test_finalize_snapshots_counts(self) -> None:
        session = _finished_typing({"a": "a", "i": "e", "u": "u"})
        rec = self.recorder.finalize(session)
        self.assertEqual((rec.total_questions, rec.correct_answers, rec.wrong_answers), (3, 2, 1))
        self.assertEqual(rec.mode, "hiragana")
        self.assertEqual(rec.character_set, "selection")
        self.assertEqual(rec.timestamp, FIXED)
        wrong = [q for q in rec.questions if not q.correct]
        self.assertEqual(len(wrong), 1)
        self.assertEqual((wrong[0].character, wrong[0].user_answer, wrong[0].correct_answer), ("い", "e", "i"))

    def test_finalize_requires_completion(self) -> None:
        s = TypingSession()
        s.start(_selection("a", "i"), "hiragana")
        s.answer("a")
        with self.assertRaises(SessionValidationError):
            self.recorder.finalize(s)

    def test_record_persists_camel_case_entry(self) -> None:
        rec = self.recorder.record(_finished_typing({"ka": "ka"}))
        raw = json.loads(self.store.get(HISTORY_KEY))
        self.assertEqual(len(raw), 1)
        entry = raw[0]
        self.assertEqual(entry["id"], rec.id)
        for key in ("date", "mode", "characterSet", "totalQuestions", "correctAnswers", "wrongAnswers"):
            self.assertIn(key, entry)
        self.assertEqual(entry["questions"][0], {
            "character": "か", "correct": True, "userAnswer": "ka", "correctAnswer": "ka",
        })
        self.assertIs(self.recorder.last_record, rec)
        self.assertIsNone(self.recorder.last_error)

    def test_round_trip_keeps_counts(self) -> None:
        rec = self.recorder.record(_finished_typing({"a": "a", "ka": "no"}))
        (loaded,) = self.recorder.load_history()
        self.assertEqual(loaded, rec)
        self.assertEqual(
            (loaded.total_questions, loaded.correct_answers, loaded.wrong_answers),
            (rec.total_questions, rec.correct_answers, rec.wrong_answers),
        )

    def test_completion_handler_records_exactly_once(self) -> None:
        s = TypingSession(on_complete=self.recorder.record, rng=random.Random(1))
        s.start(_selection("a", "i"), "hiragana")
        s.answer("a")
        s.answer("i")
        with self.assertRaises(SessionValidationError):
            s.answer("u")
        self.assertEqual(len(self.recorder.load_history()), 1)

    def test_matching_record_counts_first_attempts(self) -> None:
        s = MatchingSession(on_complete=self.recorder.record, rng=random.Random(2))
        s.start(_selection("a", "i", "u"), "romaji-hiragana")
        s.select("i")
        s.attempt_match("u")
        for cid in ("a", "i", "u"):
            s.select(cid)
            s.attempt_match(cid)
        (rec,) = self.recorder.load_history()
        self.assertEqual((rec.total_questions, rec.correct_answers, rec.wrong_answers), (3, 2, 1))
        self.assertEqual(rec.mode, "romaji-hiragana")

    def test_store_failure_is_reported_not_raised(self) -> None:
        recorder = ResultRecorder(_BrokenStore(), clock=lambda: FIXED)
        s = _finished_typing({"a": "a"})
        buf = io.StringIO()
        with redirect_stdout(buf):
            rec = recorder.record(s)
            ok = recorder.persist(rec)
        self.assertFalse(ok)
        self.assertIsInstance(recorder.last_error, PersistenceError)
        self.assertIsInstance(recorder.last_error.cause, OSError)
        self.assertIn("[WARN]", buf.getvalue())
        self.assertTrue(s.is_complete())

    def test_loads_entries_written_in_the_history_format(self) -> None:
        entry = {
            "id": "1717000000000",
            "date": "2024-05-29T16:26:40.000Z",
            "mode": "katakana",
            "characterSet": "custom",
            "totalQuestions": 2,
            "correctAnswers": 1,
            "wrongAnswers": 1,
            "questions": [
                {"character": "ア", "correct": True, "userAnswer": "a", "correctAnswer": "a"},
                {"character": "カ", "correct": False, "userAnswer": "ga", "correctAnswer": "ka"},
            ],
        }
        store = MemoryStore({HISTORY_KEY: json.dumps([entry])})
        (rec,) = ResultRecorder(store).load_history()
        self.assertEqual(rec.timestamp, datetime(2024, 5, 29, 16, 26, 40, tzinfo=timezone.utc))
        self.assertEqual([s.character for s in aggregate([rec])], ["ア", "カ"])

    def test_invalid_entries_are_skipped(self) -> None:
        good = self.recorder.finalize(_finished_typing({"a": "a"})).to_json_dict()
        bad = dict(good, correctAnswers=5)
        store = MemoryStore({HISTORY_KEY: json.dumps([bad, {"id": "x"}, good])})
        buf = io.StringIO()
        with redirect_stdout(buf):
            records = ResultRecorder(store).load_history()
        self.assertEqual([r.id for r in records], [good["id"]])
        self.assertEqual(buf.getvalue().count("Skipping invalid result entry"), 2)

    def test_corrupt_history_raises(self) -> None:
        store = MemoryStore({HISTORY_KEY: "{oops"})
        with self.assertRaises(StoreError):
            ResultRecorder(store).load_history()

    def test_clear_history(self) -> None:
        self.recorder.record(_finished_typing({"a": "a"}))
        self.recorder.clear_history()
        self.assertEqual(self.recorder.load_history(), [])

    def test_schema_rejects_inconsistent_counts(self) -> None:
        with self.assertRaises(ValueError):
            ResultRecord(
                id="x", date=FIXED, mode="hiragana", characterSet="basic",
                totalQuestions=1, correctAnswers=1, wrongAnswers=1,
            )


if __name__ == "__main__":
    unittest.main()
