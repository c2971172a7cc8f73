from __future__ import annotations

"""Exception types shared across sessions, storage and results."""


class KanaTrainerError(Exception):
    """Base class for all KanaTrainer errors."""


class SessionValidationError(KanaTrainerError, ValueError):
    """A session operation was rejected; the session keeps its prior state."""


class StoreError(KanaTrainerError):
    """Stored data could not be read or decoded."""


class PersistenceError(KanaTrainerError):
    """A result record could not be written to the history store."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
