from __future__ import annotations

"""Session kind registry and metadata.

Expose metadata for each practice kind and construct sessions via a
simple factory.
"""

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..config.config import MATCH_MODES, QUIZ_MODES, TYPING_MODES
from ..drills.base_drill import BaseSession
from ..drills.matching import MatchingSession
from ..drills.quiz import QuizSession
from ..drills.typing_drill import TypingSession


@dataclass(frozen=True)
class DrillMeta:
    id: str
    name: str
    description: str
    modes: Tuple[str, ...]
    presets: Dict[str, Dict[str, Any]]


def _match_meta() -> DrillMeta:
    from .presets import MATCH_PRESETS

    return DrillMeta(
        id="match",
        name="Matching Game",
        description="Pair each character with its counterpart in the other script.",
        modes=MATCH_MODES,
        presets=MATCH_PRESETS,
    )


def _quiz_meta() -> DrillMeta:
    from .presets import QUIZ_PRESETS

    return DrillMeta(
        id="quiz",
        name="Multiple-Choice Quiz",
        description="Pick the romaji for the shown kana.",
        modes=QUIZ_MODES,
        presets=QUIZ_PRESETS,
    )


def _typing_meta() -> DrillMeta:
    from .presets import TYPING_PRESETS

    return DrillMeta(
        id="typing",
        name="Typing Game",
        description="Type the romaji for the shown kana.",
        modes=TYPING_MODES,
        presets=TYPING_PRESETS,
    )


def list_drills() -> List[DrillMeta]:
    return [_match_meta(), _quiz_meta(), _typing_meta()]


def get_drill(drill_id: str) -> DrillMeta:
    for m in list_drills():
        if m.id == drill_id:
            return m
    raise KeyError(f"Unknown session kind: {drill_id}")


def make_drill(
    drill_id: str,
    *,
    params: Dict[str, Any],
    on_complete: Optional[Callable[[BaseSession], None]] = None,
    rng: Optional[random.Random] = None,
) -> BaseSession:
    """Factory that builds the session for `drill_id` from merged params."""
    if drill_id == "match":
        return MatchingSession(
            target_order=str(params.get("target_order", "random")),
            on_complete=on_complete,
            rng=rng,
        )
    if drill_id == "quiz":
        return QuizSession(
            options_count=int(params.get("options_count", 5)),
            on_complete=on_complete,
            rng=rng,
        )
    if drill_id == "typing":
        return TypingSession(on_complete=on_complete, rng=rng)
    raise KeyError(f"Unknown session kind: {drill_id}")
