from __future__ import annotations

"""Kana catalogs: basic gojuon and voiced/semi-voiced (dakuon) characters.

Each entry pairs a unique id with its romaji and both script forms. The
catalogs are tuples; copy before shuffling or slicing into a pool.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Character:
    id: str
    romaji: str
    hiragana: str
    katakana: str


SCRIPTS = ("hiragana", "katakana", "romaji", "both")


def _c(id: str, romaji: str, hiragana: str, katakana: str) -> Character:
    return Character(id=id, romaji=romaji, hiragana=hiragana, katakana=katakana)


BASIC_CHARACTERS: Tuple[Character, ...] = (
    # Vowels
    _c("a", "a", "あ", "ア"),
    _c("i", "i", "い", "イ"),
    _c("u", "u", "う", "ウ"),
    _c("e", "e", "え", "エ"),
    _c("o", "o", "お", "オ"),
    # K
    _c("ka", "ka", "か", "カ"),
    _c("ki", "ki", "き", "キ"),
    _c("ku", "ku", "く", "ク"),
    _c("ke", "ke", "け", "ケ"),
    _c("ko", "ko", "こ", "コ"),
    # S
    _c("sa", "sa", "さ", "サ"),
    _c("shi", "shi", "し", "シ"),
    _c("su", "su", "す", "ス"),
    _c("se", "se", "せ", "セ"),
    _c("so", "so", "そ", "ソ"),
    # T
    _c("ta", "ta", "た", "タ"),
    _c("chi", "chi", "ち", "チ"),
    _c("tsu", "tsu", "つ", "ツ"),
    _c("te", "te", "て", "テ"),
    _c("to", "to", "と", "ト"),
    # N
    _c("na", "na", "な", "ナ"),
    _c("ni", "ni", "に", "ニ"),
    _c("nu", "nu", "ぬ", "ヌ"),
    _c("ne", "ne", "ね", "ネ"),
    _c("no", "no", "の", "ノ"),
    # H
    _c("ha", "ha", "は", "ハ"),
    _c("hi", "hi", "ひ", "ヒ"),
    _c("fu", "fu", "ふ", "フ"),
    _c("he", "he", "へ", "ヘ"),
    _c("ho", "ho", "ほ", "ホ"),
    # M
    _c("ma", "ma", "ま", "マ"),
    _c("mi", "mi", "み", "ミ"),
    _c("mu", "mu", "む", "ム"),
    _c("me", "me", "め", "メ"),
    _c("mo", "mo", "も", "モ"),
    # Y
    _c("ya", "ya", "や", "ヤ"),
    _c("yu", "yu", "ゆ", "ユ"),
    _c("yo", "yo", "よ", "ヨ"),
    # R
    _c("ra", "ra", "ら", "ラ"),
    _c("ri", "ri", "り", "リ"),
    _c("ru", "ru", "る", "ル"),
    _c("re", "re", "れ", "レ"),
    _c("ro", "ro", "ろ", "ロ"),
    # W
    _c("wa", "wa", "わ", "ワ"),
    _c("wo", "wo", "を", "ヲ"),
    # Syllabic n
    _c("n", "n", "ん", "ン"),
)

# ぢ/づ romanize to "ji"/"zu" like じ/ず; only their ids differ.
DAKUON_CHARACTERS: Tuple[Character, ...] = (
    # G
    _c("ga", "ga", "が", "ガ"),
    _c("gi", "gi", "ぎ", "ギ"),
    _c("gu", "gu", "ぐ", "グ"),
    _c("ge", "ge", "げ", "ゲ"),
    _c("go", "go", "ご", "ゴ"),
    # Z
    _c("za", "za", "ざ", "ザ"),
    _c("ji", "ji", "じ", "ジ"),
    _c("zu", "zu", "ず", "ズ"),
    _c("ze", "ze", "ぜ", "ゼ"),
    _c("zo", "zo", "ぞ", "ゾ"),
    # D
    _c("da", "da", "だ", "ダ"),
    _c("di", "ji", "ぢ", "ヂ"),
    _c("du", "zu", "づ", "ヅ"),
    _c("de", "de", "で", "デ"),
    _c("do", "do", "ど", "ド"),
    # B
    _c("ba", "ba", "ば", "バ"),
    _c("bi", "bi", "び", "ビ"),
    _c("bu", "bu", "ぶ", "ブ"),
    _c("be", "be", "べ", "ベ"),
    _c("bo", "bo", "ぼ", "ボ"),
    # P
    _c("pa", "pa", "ぱ", "パ"),
    _c("pi", "pi", "ぴ", "ピ"),
    _c("pu", "pu", "ぷ", "プ"),
    _c("pe", "pe", "ぺ", "ペ"),
    _c("po", "po", "ぽ", "ポ"),
)

_BY_ID: Dict[str, Character] = {c.id: c for c in BASIC_CHARACTERS + DAKUON_CHARACTERS}


def basic_characters() -> Tuple[Character, ...]:
    return BASIC_CHARACTERS


def dakuon_characters() -> Tuple[Character, ...]:
    return DAKUON_CHARACTERS


# The dakuon set is the "extended" catalog.
extended_characters = dakuon_characters


def all_characters() -> Tuple[Character, ...]:
    return BASIC_CHARACTERS + DAKUON_CHARACTERS


def get_character(char_id: str) -> Character:
    """Look up a character by id across both catalogs."""
    try:
        return _BY_ID[char_id]
    except KeyError:
        raise KeyError(f"Unknown character id: {char_id}") from None


def display_form(character: Character, script: str) -> str:
    """Return the form of `character` shown for a script name.

    `both` renders hiragana and katakana together, e.g. "あ/ア".
    """
    if script == "hiragana":
        return character.hiragana
    if script == "katakana":
        return character.katakana
    if script == "romaji":
        return character.romaji
    if script == "both":
        return f"{character.hiragana}/{character.katakana}"
    raise ValueError(f"Unknown script: {script}")
