import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from kanatrainer.config.config import default_mode, load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_packaged_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["session"]["kind"], "match")
        self.assertEqual(cfg["session"]["character_set"], "basic")
        self.assertEqual(cfg["session"]["min_practice_size"], 5)
        self.assertEqual(cfg["quiz"]["options_count"], 5)
        self.assertEqual(cfg["quiz"]["advance_delay_ms"], 1500)
        self.assertEqual(cfg["stats"]["history_key"], "quizResults")

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["typing"]["advance_delay_ms"], 1500)
        self.assertEqual(cfg["stats"]["timeframe"], "all")
        self.assertIsNone(cfg["session"]["mode"])

    def test_unknown_values_fall_back_with_warning(self) -> None:
        raw = {
            "session": {"kind": "flashcards", "character_set": "kanji", "target_order": "zigzag", "basic_count": -3},
            "quiz": {"options_count": 1},
            "stats": {"timeframe": "decade", "top": "many"},
        }
        buf = io.StringIO()
        with redirect_stdout(buf):
            cfg = validate_config(raw)
        self.assertEqual(cfg["session"]["kind"], "match")
        self.assertEqual(cfg["session"]["character_set"], "basic")
        self.assertEqual(cfg["session"]["target_order"], "random")
        self.assertEqual(cfg["session"]["basic_count"], 10)
        self.assertEqual(cfg["quiz"]["options_count"], 2)
        self.assertEqual(cfg["stats"]["timeframe"], "all")
        self.assertEqual(cfg["stats"]["top"], 10)
        self.assertGreaterEqual(buf.getvalue().count("WARNING:"), 7)

    def test_mode_checked_against_kind(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            cfg = validate_config({"session": {"kind": "quiz", "mode": "both"}})
        self.assertEqual(cfg["session"]["mode"], "hiragana")
        cfg = validate_config({"session": {"kind": "typing", "mode": "both"}})
        self.assertEqual(cfg["session"]["mode"], "both")

    def test_yaml_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yml"
            path.write_text("session:\n  kind: typing\n  characters: [a, i]\n", encoding="utf-8")
            cfg = validate_config(load_config(str(path)))
        self.assertEqual(cfg["session"]["kind"], "typing")
        self.assertEqual(cfg["session"]["characters"], ["a", "i"])

    def test_missing_file_exits(self) -> None:
        with self.assertRaises(SystemExit):
            load_config("/nonexistent/kanatrainer.yml")

    def test_default_mode(self) -> None:
        self.assertEqual(default_mode("match"), "romaji-hiragana")
        self.assertEqual(default_mode("typing"), "hiragana")


if __name__ == "__main__":
    unittest.main()
