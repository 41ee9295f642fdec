"""
Title normalization for comparing anime titles.

normalize() runs a fixed pipeline of text rewrites until the output stops
changing, so normalize(normalize(x)) == normalize(x). It never raises; the
worst case is an empty string.
"""
import logging
import re
import unicodedata
from typing import Callable, List
from unidecode import unidecode

logger = logging.getLogger(__name__)

MAX_ROUNDS = 8

_SYMBOLS = str.maketrans({
    "@": "a",
    "×": "x",
    "✕": "x",
    "✖": "x",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
})

_ZERO_AS_O = re.compile(r"(?<=[a-z])0(?=[a-z])")

_ROMAN_NUMERALS = {
    "xiii": "13", "xii": "12", "xi": "11", "x": "10", "ix": "9", "viii": "8",
    "vii": "7", "vi": "6", "v": "5", "iv": "4", "iii": "3", "ii": "2",
}
_ROMAN = re.compile(r"\b(" + "|".join(_ROMAN_NUMERALS) + r")\b")

_ORDINAL = re.compile(r"\b(\d+)(?:st|nd|rd|th)\b")
_SEASON_WORD = re.compile(r"\b(?:season|cour|series)\s*(\d+)\b")
_SEASON_SHORT = re.compile(r"\bs(\d{1,2})\b")

_TAG = re.compile(r"\((?:tv|ova|ona|oad|oav|specials?|\d+)\)")
_STOP_WORDS = frozenset({
    "the", "a", "an", "episode", "ep", "ep.", "tv", "ova", "ona", "season", "cour", "part",
})
_WORD_ALIASES = {"oad": "ova", "oav": "ova"}


def _fold_unicode(text: str) -> str:
    return unicodedata.normalize("NFKC", text).casefold()


def _transliterate(text: str) -> str:
    text = text.translate(_SYMBOLS)
    text = _ZERO_AS_O.sub("o", text)
    # Latin letters with diacritics and ligatures only; other scripts stay as written
    return "".join(
        unidecode(ch).lower() if ord(ch) > 127 and unicodedata.name(ch, "").startswith("LATIN") else ch
        for ch in text
    )


def _roman_numerals(text: str) -> str:
    return _ROMAN.sub(lambda m: _ROMAN_NUMERALS[m.group(1)], text)


def _ordinals(text: str) -> str:
    return _ORDINAL.sub(r"\1", text)


def _season_keywords(text: str) -> str:
    text = _SEASON_WORD.sub(r"\1", text)
    return _SEASON_SHORT.sub(r"\1", text)


def _stop_words(text: str) -> str:
    text = _TAG.sub(" ", text)
    text = text.replace("&", " and ")
    words = [_WORD_ALIASES.get(word, word) for word in text.split()]
    return " ".join(word for word in words if word not in _STOP_WORDS)


def _erase_punctuation(text: str) -> str:
    return "".join(ch for ch in text if ch.isalnum() or ch.isspace())


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


NORMALIZE_STEPS: List[Callable[[str], str]] = [
    _fold_unicode,
    _transliterate,
    _roman_numerals,
    _ordinals,
    _season_keywords,
    _stop_words,
    _erase_punctuation,
    _collapse_whitespace,
]


def _normalize_once(text: str) -> str:
    for step in NORMALIZE_STEPS:
        text = step(text)
    return text


def normalize(text: str) -> str:
    """
    Canonicalize a title for comparison.

    Args:
        text (str): Any title text.

    Returns:
        str: Lowercase, punctuation-free, whitespace-collapsed title.

    Example:
        >>> normalize("Sousou no Frieren: 2nd Season")
        'sousou no frieren 2'
    """
    if not text:
        return ""
    current = text
    for _ in range(MAX_ROUNDS):
        result = _normalize_once(current)
        if result == current:
            break
        current = result
    else:
        logger.debug(f"Normalization of {text!r} did not settle after {MAX_ROUNDS} rounds")
    return current
