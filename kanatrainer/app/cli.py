from __future__ import annotations

"""CLI for KanaTrainer using SessionManager and the session registry."""

import argparse
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..analytics import character_accuracy, export_ndjson, export_parquet, records_to_frame
from ..config.config import ALLOWED_CHARACTER_SETS, ALLOWED_TIMEFRAMES, load_config, validate_config
from ..errors import SessionValidationError, StoreError
from ..kana.characters import basic_characters, dakuon_characters
from ..results.recorder import ResultRecorder
from ..stats.stats import filter_by_timeframe, format_summary
from ..storage.store import JsonFileStore
from ..util.randomness import seed_if_needed

from .drill_registry import list_drills
from .session_manager import SessionManager


def _build_ui(
    *, input_fn: Optional[Callable[[str], str]] = None, output_fn: Callable[[str], None] = print
) -> Dict[str, Any]:
    def ask(prompt: str) -> str:
        try:
            return (input_fn or input)(prompt)
        except EOFError:
            return ":q"

    def inform(msg: str) -> None:
        output_fn(msg)

    def sleep_ms(ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000.0)

    return {"ask": ask, "inform": inform, "sleep_ms": sleep_ms}


def _load_cfg(args: argparse.Namespace) -> Dict[str, Any]:
    cfg = validate_config(load_config(getattr(args, "config", None)))
    store_path = getattr(args, "store", None)
    if store_path:
        cfg["stats"]["store_path"] = store_path
    return cfg


def _recorder(cfg: Dict[str, Any]) -> ResultRecorder:
    stats_cfg = cfg["stats"]
    return ResultRecorder(JsonFileStore(stats_cfg["store_path"]), key=stats_cfg["history_key"])


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--store", default=None, help="Path to the results store (JSON)")


def _parse_chars(value: str | None) -> List[str] | None:
    if not value:
        return None
    return [c.strip() for c in value.split(",") if c.strip()]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="kanatrainer")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-sets")

    rp = sub.add_parser("run")
    _add_common(rp)
    rp.add_argument("--kind", choices=["match", "quiz", "typing"], default=None)
    rp.add_argument("--preset", default="default")
    rp.add_argument("--mode", default=None, help="e.g. romaji-hiragana (match), hiragana, katakana, both (typing)")
    rp.add_argument("--set", dest="character_set", choices=sorted(ALLOWED_CHARACTER_SETS), default=None)
    rp.add_argument("--basic-count", dest="basic_count", type=int, default=None)
    rp.add_argument("--dakuon-count", dest="dakuon_count", type=int, default=None)
    rp.add_argument("--chars", default=None, help="Comma-separated character ids, e.g. a,i,u")
    rp.add_argument("--min-size", dest="min_practice_size", type=int, default=None,
                    help="Smallest pool a session may start with")
    rp.add_argument("--sequential", dest="target_order", action="store_const", const="sequential", default=None,
                    help="Keep the matching targets in catalog order")
    rp.add_argument("--no-delay", dest="no_delay", action="store_true", help="Advance immediately after each answer")
    rp.add_argument("--explain", action="store_true")

    sp = sub.add_parser("stats")
    _add_common(sp)
    sp.add_argument("--timeframe", choices=sorted(ALLOWED_TIMEFRAMES), default=None)
    sp.add_argument("--top", type=int, default=None)

    xp = sub.add_parser("reset-stats")
    _add_common(xp)
    xp.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    ep = sub.add_parser("export")
    _add_common(ep)
    ep.add_argument("--out", required=True)
    ep.add_argument("--format", choices=["parquet", "ndjson"], default="parquet")
    ep.add_argument("--by-character", dest="by_character", action="store_true",
                    help="Export per-character accuracy instead of per-question rows")

    args = p.parse_args(argv)

    if args.cmd == "list-sets":
        print(f"basic: {len(basic_characters())} characters")
        print(f"dakuon: {len(dakuon_characters())} characters")
        print(f"all: {len(basic_characters()) + len(dakuon_characters())} characters")
        for m in list_drills():
            print(f"{m.id}: {m.name} - {m.description} | modes: {', '.join(m.modes)} | presets: {', '.join(m.presets.keys())}")
        return 0

    if args.cmd == "run":
        seed_if_needed()
        if args.explain:
            from .explain import enable as explain_enable
            explain_enable(True)
        cfg = _load_cfg(args)
        kind = args.kind or cfg["session"]["kind"]

        overrides: Dict[str, Any] = {
            "mode": args.mode,
            "character_set": args.character_set,
            "basic_count": args.basic_count,
            "dakuon_count": args.dakuon_count,
            "target_order": args.target_order,
            "min_practice_size": args.min_practice_size,
        }
        chars = _parse_chars(args.chars)
        if chars:
            overrides["character_set"] = "selection"
            overrides["characters"] = chars
        if args.no_delay:
            overrides["advance_delay_ms"] = 0

        sm = SessionManager(cfg)
        try:
            sm.start_session(kind, args.preset, overrides)
        except (SessionValidationError, KeyError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2

        summary = sm.run(_build_ui())
        print("\nSession Summary:")
        if summary.get("completed"):
            print(f"Score: {summary['correct']}/{summary['total']} in {summary['elapsed']}s")
            if not summary.get("saved", False):
                print("[WARN] Result could not be saved.")
        else:
            print("Session stopped; nothing recorded.")
        return 0

    if args.cmd == "stats":
        cfg = _load_cfg(args)
        timeframe = args.timeframe or cfg["stats"]["timeframe"]
        top = args.top if args.top is not None else int(cfg["stats"]["top"])
        try:
            records = _recorder(cfg).load_history()
        except (OSError, StoreError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        records = filter_by_timeframe(records, timeframe)
        print(f"Statistics ({timeframe}):")
        print(format_summary(records, top=top))
        return 0

    if args.cmd == "reset-stats":
        cfg = _load_cfg(args)
        if not args.yes:
            answer = input("Reset all statistics? This cannot be undone. [y/N]: ")
            if answer.strip().lower() not in ("y", "yes"):
                print("Cancelled.")
                return 0
        _recorder(cfg).clear_history()
        print("Statistics reset.")
        return 0

    if args.cmd == "export":
        cfg = _load_cfg(args)
        try:
            records = _recorder(cfg).load_history()
        except (OSError, StoreError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        df = records_to_frame(records)
        if args.by_character:
            df = character_accuracy(df)
        out = Path(args.out)
        if args.format == "parquet":
            export_parquet(df, out)
        else:
            export_ndjson(df, out)
        print(f"Wrote {len(df)} rows to {out}")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
