from __future__ import annotations

"""Curated human-friendly parameter presets per session kind.

Presets help users select sensible defaults quickly without many flags.
"""

MATCH_PRESETS = {
    "beginner": {
        "character_set": "custom",
        "basic_count": 10,
        "dakuon_count": 0,
        "target_order": "sequential",
    },
    # config values apply as-is
    "default": {},
    "full": {
        "character_set": "all",
        "target_order": "random",
    },
}

QUIZ_PRESETS = {
    "beginner": {
        "character_set": "custom",
        "basic_count": 10,
        "dakuon_count": 0,
        "options_count": 3,
    },
    # config values apply as-is
    "default": {},
    "full": {
        "character_set": "all",
        "options_count": 5,
    },
}

TYPING_PRESETS = {
    "beginner": {
        "character_set": "custom",
        "basic_count": 10,
        "dakuon_count": 0,
    },
    # config values apply as-is
    "default": {},
    "full": {
        "character_set": "all",
        "mode": "both",
    },
}
