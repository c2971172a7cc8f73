from __future__ import annotations

"""Session Manager: orchestrates sessions, result recording and UI loops.

Front-end agnostic: the run loops talk to the user only through the `ui`
callbacks (`ask`, `inform`, `sleep_ms`), so the CLI and tests can drive the
same code.
"""

import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from ..config.config import default_mode
from ..drills.base_drill import BaseSession, CharacterSetPolicy
from ..drills.matching import MatchingSession
from ..drills.question import QuestionSession
from ..drills.quiz import QuizSession
from ..errors import SessionValidationError
from ..results.recorder import ResultRecorder
from ..storage.store import JsonFileStore, KeyValueStore
from .drill_registry import get_drill, make_drill
from .explain import trace as xtrace

QUIT = ":q"


@dataclass(frozen=True)
class SessionContext:
    started_at: datetime
    kind: str
    mode: str
    preset: str
    policy: CharacterSetPolicy
    params: Dict[str, Any] = field(default_factory=dict)


class TickClock:
    """Feeds whole elapsed seconds into `session.tick()` from a monotonic clock.

    Called before each prompt and again after each reply, so a single-threaded
    loop can keep `elapsed` current without a timer thread.
    """

    def __init__(self, monotonic: Callable[[], float] = time.monotonic) -> None:
        self._monotonic = monotonic
        self._last: Optional[float] = None

    def reset(self) -> None:
        self._last = self._monotonic()

    def catch_up(self, session: BaseSession) -> int:
        now = self._monotonic()
        if self._last is None:
            self._last = now
            return 0
        whole = int(now - self._last)
        for _ in range(whole):
            session.tick()
        self._last += whole
        return whole


def policy_from_params(params: Dict[str, Any]) -> CharacterSetPolicy:
    return CharacterSetPolicy(
        kind=str(params.get("character_set", "basic")),
        basic_count=int(params.get("basic_count", 10)),
        dakuon_count=int(params.get("dakuon_count", 5)),
        min_practice_size=int(params.get("min_practice_size", 5)),
        character_ids=tuple(params.get("characters") or ()),
    )


class SessionManager:
    def __init__(
        self,
        cfg: Dict[str, Any],
        store: Optional[KeyValueStore] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cfg = cfg
        stats_cfg = cfg.get("stats", {})
        if store is None:
            store = JsonFileStore(stats_cfg.get("store_path", "./kana_results.json"))
        self.recorder = ResultRecorder(store, key=stats_cfg.get("history_key", "quizResults"), clock=clock)
        self.ctx: Optional[SessionContext] = None
        self.session: Optional[BaseSession] = None
        self._rng = rng
        self._ticks = TickClock(monotonic)

    def resolve_params(self, kind: str, preset: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # config session section -> kind section -> preset -> CLI overrides
        dm = get_drill(kind)
        if preset not in dm.presets:
            raise KeyError(f"Unknown preset '{preset}' for {kind}")
        base = dict(self.cfg.get("session", {}))
        base.update(self.cfg.get(kind, {}) or {})
        params = {**base, **dm.presets[preset]}
        params.update({k: v for k, v in (overrides or {}).items() if v is not None})
        if not params.get("mode"):
            params["mode"] = default_mode(kind)
        return params

    def start_session(self, kind: str, preset: str = "default", overrides: Optional[Dict[str, Any]] = None) -> BaseSession:
        params = self.resolve_params(kind, preset, overrides)
        policy = policy_from_params(params)
        session = make_drill(kind, params=params, on_complete=self.recorder.record, rng=self._rng)
        # Raises SessionValidationError before any manager state changes
        session.start(policy, str(params["mode"]))
        self.recorder.last_record = None
        self.recorder.last_error = None
        self.session = session
        self.ctx = SessionContext(
            started_at=datetime.now(timezone.utc),
            kind=kind,
            mode=str(params["mode"]),
            preset=preset,
            policy=policy,
            params=params,
        )
        self._ticks.reset()
        return session

    def stop(self) -> None:
        if self.session is not None:
            self.session.stop()
            xtrace("session_stopped", {"kind": self.ctx.kind if self.ctx else None})

    def run(self, ui: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
        assert self.ctx is not None and self.session is not None
        if isinstance(self.session, MatchingSession):
            completed = self._run_matching(self.session, ui)
        elif isinstance(self.session, QuestionSession):
            completed = self._run_questions(self.session, ui)
        else:
            raise TypeError(f"Unsupported session type: {type(self.session).__name__}")
        return self._summary(completed)

    # --- loops ---

    def _run_matching(self, session: MatchingSession, ui: Dict[str, Callable[..., Any]]) -> bool:
        ask = ui["ask"]
        inform = ui["inform"]
        targets = list(session.target_order)
        while session.is_active():
            self._ticks.catch_up(session)
            sources = session.remaining()
            inform(
                f"Matched {len(session.matched)}/{len(session.pool)} "
                f"({session.progress_percent():.0f}%) | {session.elapsed}s"
            )
            inform("Source: " + "  ".join(f"{i}:{session.source_form(c)}" for i, c in enumerate(sources, 1)))
            inform(
                "Target: "
                + "  ".join(
                    f"{i}:{'✓' if c.id in session.matched else session.target_form(c)}"
                    for i, c in enumerate(targets, 1)
                )
            )
            raw = ask(f"Pick 'source target' numbers ({QUIT} to quit): ").strip()
            # count answer time while the session is still active
            self._ticks.catch_up(session)
            if raw == QUIT:
                self.stop()
                return False
            parts = raw.split()
            if len(parts) != 2 or not all(p.isdigit() for p in parts):
                inform("Enter two numbers, e.g. '3 7'.")
                continue
            si, ti = int(parts[0]), int(parts[1])
            if not (1 <= si <= len(sources) and 1 <= ti <= len(targets)):
                inform("Number out of range.")
                continue
            session.select(sources[si - 1].id)
            if session.attempt_match(targets[ti - 1].id):
                inform("Correct match!")
            else:
                inform("Try again!")
        return session.is_complete()

    def _run_questions(self, session: QuestionSession, ui: Dict[str, Callable[..., Any]]) -> bool:
        ask = ui["ask"]
        inform = ui["inform"]
        sleep_ms = ui.get("sleep_ms", lambda _ms: None)
        delay = int(self.ctx.params.get("advance_delay_ms", 1500)) if self.ctx else 0
        show_feedback = bool(self.cfg.get("stats", {}).get("show_per_question_feedback", True))
        is_quiz = isinstance(session, QuizSession)

        while session.is_active():
            self._ticks.catch_up(session)
            unit = session.current()
            if unit is None:
                break
            inform(f"Q{session.cursor + 1}/{session.total_questions}: {unit.prompt}")
            if is_quiz:
                inform("  ".join(f"{i}) {opt}" for i, opt in enumerate(unit.options, 1)))
                prompt = f"Choose 1-{len(unit.options)} ({QUIT} to quit): "
            else:
                prompt = f"Type the romaji ({QUIT} to quit): "
            raw = ask(prompt)
            self._ticks.catch_up(session)
            if raw.strip() == QUIT:
                self.stop()
                return False
            try:
                if is_quiz:
                    choice = raw.strip()
                    if not choice.isdigit():
                        inform("Please select an answer first!")
                        continue
                    outcome = session.answer_option(int(choice) - 1)
                else:
                    outcome = session.answer(raw)
            except SessionValidationError as e:
                inform(str(e))
                continue
            if show_feedback:
                if outcome.correct:
                    inform("Correct answer!")
                else:
                    inform(f'Wrong! The correct answer is "{outcome.expected}"')
            # Pause before showing the next question
            if session.is_active():
                sleep_ms(delay)
        return session.is_complete()

    def _summary(self, completed: bool) -> Dict[str, Any]:
        assert self.ctx is not None and self.session is not None
        rec = self.recorder.last_record if completed else None
        summary: Dict[str, Any] = {
            "kind": self.ctx.kind,
            "mode": self.ctx.mode,
            "character_set": self.ctx.policy.kind,
            "completed": completed,
            "started_at": self.ctx.started_at.isoformat(),
        }
        if rec is not None:
            summary.update(
                {
                    "total": rec.total_questions,
                    "correct": rec.correct_answers,
                    "wrong": rec.wrong_answers,
                    "elapsed": self.session.elapsed,
                    "record_id": rec.id,
                    "saved": self.recorder.last_error is None,
                }
            )
        return summary
