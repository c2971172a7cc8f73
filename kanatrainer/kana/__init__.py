"""Kana character catalogs."""

from .characters import (  # noqa: F401
    Character,
    all_characters,
    basic_characters,
    dakuon_characters,
    display_form,
    extended_characters,
    get_character,
)
