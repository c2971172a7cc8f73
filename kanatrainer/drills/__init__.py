"""Practice sessions: matching game, multiple-choice quiz and typing game."""

from .base_drill import CharacterSetPolicy, SessionState, build_pool  # noqa: F401
from .matching import MatchingSession  # noqa: F401
from .question import AnswerOutcome, QuestionSession, QuestionUnit  # noqa: F401
from .quiz import QuizSession  # noqa: F401
from .typing_drill import TypingSession, normalize_romaji  # noqa: F401
