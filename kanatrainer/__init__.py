"""KanaTrainer package initialization.

Practice sessions for Hiragana and Katakana: matching game, multiple-choice
quiz and typing game, with results persisted for accuracy statistics.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
