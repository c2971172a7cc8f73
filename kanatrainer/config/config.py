from __future__ import annotations

"""Configuration loading and validation for KanaTrainer.

This module loads YAML configuration, applies defaults, and validates
that enumerations and counts are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml


ALLOWED_KINDS = {"match", "quiz", "typing"}
ALLOWED_CHARACTER_SETS = {"basic", "dakuon", "all", "custom", "selection"}
ALLOWED_TARGET_ORDERS = {"random", "sequential"}
ALLOWED_TIMEFRAMES = {"all", "week", "month"}

MATCH_MODES = ("romaji-hiragana", "romaji-katakana", "hiragana-katakana")
QUIZ_MODES = ("hiragana", "katakana")
TYPING_MODES = ("hiragana", "katakana", "both")

MODES_BY_KIND = {
    "match": MATCH_MODES,
    "quiz": QUIZ_MODES,
    "typing": TYPING_MODES,
}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _non_negative_int(section: Dict[str, Any], key: str, default: int) -> None:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError):
        print(f"WARNING: Invalid {key} '{section.get(key)}', using {default}.")
        value = default
    if value < 0:
        print(f"WARNING: Negative {key} '{value}', using {default}.")
        value = default
    section[key] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown enum values are replaced by their default with a printed warning.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("session", {})
    cfg.setdefault("quiz", {})
    cfg.setdefault("typing", {})
    cfg.setdefault("stats", {})

    session = cfg["session"]
    quiz = cfg["quiz"]
    typing = cfg["typing"]
    stats = cfg["stats"]

    session.setdefault("kind", "match")
    session.setdefault("mode", None)
    session.setdefault("character_set", "basic")
    session.setdefault("basic_count", 10)
    session.setdefault("dakuon_count", 5)
    session.setdefault("min_practice_size", 5)
    session.setdefault("target_order", "random")
    session.setdefault("characters", [])

    quiz.setdefault("options_count", 5)
    quiz.setdefault("advance_delay_ms", 1500)

    typing.setdefault("advance_delay_ms", 1500)

    stats.setdefault("store_path", "./kana_results.json")
    stats.setdefault("history_key", "quizResults")
    stats.setdefault("timeframe", "all")
    stats.setdefault("show_per_question_feedback", True)
    stats.setdefault("top", 10)

    # Enum validations
    kind = session.get("kind")
    if kind not in ALLOWED_KINDS:
        print(f"WARNING: Unsupported session kind '{kind}', using 'match'.")
        session["kind"] = "match"

    mode = session.get("mode")
    if mode is not None and mode not in MODES_BY_KIND[session["kind"]]:
        fallback = MODES_BY_KIND[session["kind"]][0]
        print(f"WARNING: Unsupported mode '{mode}' for {session['kind']}, using '{fallback}'.")
        session["mode"] = fallback

    char_set = session.get("character_set")
    if char_set not in ALLOWED_CHARACTER_SETS:
        print(f"WARNING: Unsupported character_set '{char_set}', using 'basic'.")
        session["character_set"] = "basic"

    target_order = session.get("target_order")
    if target_order not in ALLOWED_TARGET_ORDERS:
        print(f"WARNING: Unsupported target_order '{target_order}', using 'random'.")
        session["target_order"] = "random"

    timeframe = stats.get("timeframe")
    if timeframe not in ALLOWED_TIMEFRAMES:
        print(f"WARNING: Unsupported timeframe '{timeframe}', using 'all'.")
        stats["timeframe"] = "all"

    _non_negative_int(session, "basic_count", 10)
    _non_negative_int(session, "dakuon_count", 5)
    _non_negative_int(session, "min_practice_size", 5)
    _non_negative_int(quiz, "advance_delay_ms", 1500)
    _non_negative_int(typing, "advance_delay_ms", 1500)
    _non_negative_int(stats, "top", 10)

    # A quiz needs the answer plus at least one distractor
    _non_negative_int(quiz, "options_count", 5)
    if quiz["options_count"] < 2:
        print(f"WARNING: options_count '{quiz['options_count']}' too small, using 2.")
        quiz["options_count"] = 2

    return cfg


def default_mode(kind: str) -> str:
    return MODES_BY_KIND[kind][0]
