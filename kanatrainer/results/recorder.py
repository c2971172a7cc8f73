from __future__ import annotations

"""Result Recorder: snapshot completed sessions and append them to history.

`record()` is the completion handler wired into a session; a session fires
it exactly once, so each completed session yields one history entry. Store
failures are reported through the return value and `last_error` and never
touch the session.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from .schema import QuestionOutcome, ResultRecord
from ..app.explain import trace as xtrace
from ..drills.base_drill import BaseSession
from ..errors import PersistenceError, SessionValidationError, StoreError
from ..storage.store import KeyValueStore

HISTORY_KEY = "quizResults"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResultRecorder:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = HISTORY_KEY,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.key = key
        self._clock = clock or _utcnow
        self.last_record: Optional[ResultRecord] = None
        self.last_error: Optional[PersistenceError] = None

    def finalize(self, session: BaseSession) -> ResultRecord:
        """Build the immutable result record for a completed session."""
        if not session.is_complete() or session.policy is None or session.mode is None:
            raise SessionValidationError("Only a completed session can be finalized")
        total, correct, wrong = session.result_counts()
        questions = [
            QuestionOutcome(
                character=row.character,
                correct=row.correct,
                user_answer=row.user_answer,
                correct_answer=row.correct_answer,
            )
            for row in session.question_breakdown()
        ]
        return ResultRecord(
            id=str(uuid4()),
            timestamp=self._clock(),
            mode=session.mode,
            character_set=session.policy.kind,
            total_questions=total,
            correct_answers=correct,
            wrong_answers=wrong,
            questions=questions,
        )

    def persist(self, record: ResultRecord) -> bool:
        """Append `record` to the history key. Returns False if the store failed."""
        try:
            self.store.append(self.key, record.to_json_dict())
        except (OSError, StoreError, TypeError, ValueError) as e:
            self.last_error = PersistenceError(f"Failed to save result {record.id}: {e}", cause=e)
            print(f"[WARN] {self.last_error}")
            xtrace("result_persist_failed", {"id": record.id, "error": str(e)})
            return False
        self.last_error = None
        xtrace("result_persisted", {"id": record.id, "key": self.key})
        return True

    def record(self, session: BaseSession) -> ResultRecord:
        """Finalize and persist; the single on-complete subscriber of a session."""
        rec = self.finalize(session)
        self.last_record = rec
        self.persist(rec)
        return rec

    def load_history(self) -> List[ResultRecord]:
        """Parse the history array, skipping entries that fail validation."""
        records: List[ResultRecord] = []
        for i, raw in enumerate(self.store.get_list(self.key)):
            try:
                records.append(ResultRecord.model_validate(raw))
            except ValidationError as e:
                print(f"[WARN] Skipping invalid result entry #{i}: {e.error_count()} error(s)")
        return records

    def clear_history(self) -> None:
        self.store.clear(self.key)
