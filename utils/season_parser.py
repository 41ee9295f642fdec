"""
Season number extraction, using the same ordered-strategy layout as the
episode parser.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

_SHORT = re.compile(r"^S(\d{1,2})$", re.IGNORECASE | re.ASCII)
_WORD = re.compile(r"^(?:Season|Saison)\s+(\d{1,2})$", re.IGNORECASE | re.ASCII)
_ROMAN = re.compile(r"^(?:Season|Saison)\s+([IVXL]+)$", re.IGNORECASE)
_ORDINAL = re.compile(r"^(\d{1,2})(?:st|nd|rd|th)\s+Season$", re.IGNORECASE | re.ASCII)
_JAPANESE = re.compile(r"^第?(\d{1,2})期$")

_ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50}


@dataclass
class SeasonMatch:
    number: int
    text: str
    strategy: str


def roman_to_int(text: str) -> Optional[int]:
    """
    Convert a roman numeral made of I, V, X and L (subtractive notation).

    Returns:
        Optional[int]: The value, or None if the text has other characters.
    """
    total = 0
    previous = 0
    for ch in reversed(text.upper()):
        value = _ROMAN_VALUES.get(ch)
        if value is None:
            return None
        if value < previous:
            total -= value
        else:
            total += value
            previous = value
    return total or None


def _match_short(text: str) -> Optional[SeasonMatch]:
    match = _SHORT.match(text)
    return SeasonMatch(int(match.group(1)), match.group(1), "short") if match else None


def _match_word(text: str) -> Optional[SeasonMatch]:
    match = _WORD.match(text)
    return SeasonMatch(int(match.group(1)), match.group(1), "word") if match else None


def _match_roman(text: str) -> Optional[SeasonMatch]:
    match = _ROMAN.match(text)
    if not match:
        return None
    number = roman_to_int(match.group(1))
    if number is None:
        return None
    return SeasonMatch(number, match.group(1), "roman")


def _match_ordinal(text: str) -> Optional[SeasonMatch]:
    match = _ORDINAL.match(text)
    return SeasonMatch(int(match.group(1)), match.group(1), "ordinal") if match else None


def _match_japanese(text: str) -> Optional[SeasonMatch]:
    match = _JAPANESE.match(text)
    return SeasonMatch(int(match.group(1)), match.group(1), "japanese") if match else None


SeasonStrategy = Callable[[str], Optional[SeasonMatch]]

SEASON_STRATEGIES: List[Tuple[str, SeasonStrategy]] = [
    ("short", _match_short),
    ("word", _match_word),
    ("roman", _match_roman),
    ("ordinal", _match_ordinal),
    ("japanese", _match_japanese),
]


def extract_season(text: str) -> Optional[SeasonMatch]:
    """
    Run the season strategy cascade.

    Args:
        text (str): A token such as "S2" or "第2期", or two tokens joined
            with a space such as "Season II" or "2nd Season".

    Returns:
        Optional[SeasonMatch]: The first strategy's match, or None.
    """
    text = text.strip()
    for name, strategy in SEASON_STRATEGIES:
        result = strategy(text)
        if result is not None:
            logger.debug(f"Season strategy '{name}' matched {text!r} -> {result.number}")
            return result
    return None
