from .recorder import HISTORY_KEY, ResultRecorder
from .schema import QuestionOutcome, ResultRecord

__all__ = [
    "HISTORY_KEY",
    "ResultRecorder",
    "QuestionOutcome",
    "ResultRecord",
]
