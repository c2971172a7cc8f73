from __future__ import annotations

"""Explain Mode: opt-in one-line traces of session milestones.

`--explain` turns it on. Sessions report start, each match or answer and
completion; the recorder reports whether the result was saved. Lines look like

    [EXPLAIN] matched :: {"id":"ka"}
"""

import json
from typing import Any, Callable, Dict, Optional

_ENABLED = False
_sink: Callable[[str], None] = print


def enable(flag: bool = True, sink: Optional[Callable[[str], None]] = None) -> None:
    """Switch tracing on or off; `sink` replaces `print` as the line writer."""
    global _ENABLED, _sink
    _ENABLED = bool(flag)
    _sink = sink or print


def enabled() -> bool:
    return _ENABLED


def format_event(event: str, payload: Optional[Dict[str, Any]] = None) -> str:
    if not payload:
        return f"[EXPLAIN] {event}"
    try:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return f"[EXPLAIN] {event}"
    return f"[EXPLAIN] {event} :: {body}"


def trace(event: str, payload: Optional[Dict[str, Any]] = None) -> None:
    if _ENABLED:
        _sink(format_event(event, payload))
