"""
Episode number extraction.

Two entry points:

- parse_episode_number(): lenient numeric reading of a single token
  ("12v2" -> 12, "12.5" -> 12, "01-03" -> 1).
- extract_episode(): a cascade of pattern strategies tried from most to
  least specific. Each strategy is a plain function taking the token text
  and returning an EpisodeMatch or None; EPISODE_STRATEGIES fixes the order.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

MAX_EPISODE = 1999
YEAR_RANGE = (1950, 2050)

_DIGITS = re.compile(r"\d+", re.ASCII)
_VERSION_SUFFIX = re.compile(r"[vV]\d+$")
_RANGE_SPLIT = re.compile(r"\s*[-~]\s*")

_COMBINED_SXE = re.compile(r"^S(\d{1,2})E(\d{1,4})(?:v(\d))?$", re.IGNORECASE | re.ASCII)
_COMBINED_X = re.compile(r"^(\d{1,2})[xX](\d{1,4})$", re.ASCII)
_PREFIXED = re.compile(r"^(?:EP\.?|E|EPS|EPISODE|#)\s*(\d{1,4})(?:v(\d))?$", re.IGNORECASE | re.ASCII)
_VERSIONED = re.compile(r"^(\d{1,4})[vV](\d)$", re.ASCII)
_FRACTIONAL = re.compile(r"^(\d{1,4})\.5$", re.ASCII)
_RANGE = re.compile(r"^(\d{1,4})\s*[-~]\s*(\d{1,4})$", re.ASCII)
_JAPANESE = re.compile(r"^第(\d{1,4})[話集]$")
_PARTIAL = re.compile(r"^(\d{1,4})[a-cA-C]$", re.ASCII)
_VOLUME = re.compile(r"^(?:Vol\.?\s*\d+\s+)?(?:EP\.?\s*)?(\d{1,4})(?:v(\d))?$", re.IGNORECASE | re.ASCII)
_PLAIN = re.compile(r"^(\d{1,4})$", re.ASCII)


@dataclass
class EpisodeMatch:
    """
    Episode found by one of the cascade strategies.

    Attributes:
        number (int): Episode number (first episode for ranges).
        text (str): Episode text as written, e.g. "05", "12v2" or "01-13".
        strategy (str): Name of the strategy that matched.
        season (Optional[int]): Season, for combined forms like S01E05.
        version (Optional[int]): Release version from a vN suffix.
        end (Optional[int]): Last episode for ranges.
    """
    number: int
    text: str
    strategy: str
    season: Optional[int] = None
    version: Optional[int] = None
    end: Optional[int] = None

    @property
    def is_plain(self) -> bool:
        return self.strategy == "plain"


def is_year_like(text: str) -> bool:
    """True for four-digit numbers between 1950 and 2050."""
    if len(text) != 4 or not _DIGITS.fullmatch(text):
        return False
    return YEAR_RANGE[0] <= int(text) <= YEAR_RANGE[1]


def _bounded(value: str) -> Optional[int]:
    number = int(value)
    if number > MAX_EPISODE:
        return None
    return number


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def parse_episode_number(text: str) -> Optional[int]:
    """
    Read an episode number from a single token.

    Args:
        text (str): Token text such as "05", "12v2", "12.5" or "01-03".

    Returns:
        Optional[int]: Episode number, or None for non-numeric text,
        year-like values ("2024") and anything above 1999.
    """
    candidate = _VERSION_SUFFIX.sub("", text.strip())
    candidate = candidate.split(".", 1)[0]
    candidate = _RANGE_SPLIT.split(candidate, 1)[0]
    if not _DIGITS.fullmatch(candidate):
        return None
    if len(candidate) == 4 and candidate[:2] in ("19", "20"):
        return None
    return _bounded(candidate)


def _match_combined(text: str) -> Optional[EpisodeMatch]:
    match = _COMBINED_SXE.match(text)
    if match:
        season, episode, version = match.groups()
    else:
        match = _COMBINED_X.match(text)
        if not match:
            return None
        season, episode = match.groups()
        version = None
    number = _bounded(episode)
    if number is None:
        return None
    return EpisodeMatch(number, text, "combined", season=int(season), version=_optional_int(version))


def _match_prefixed(text: str) -> Optional[EpisodeMatch]:
    match = _PREFIXED.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "prefixed", version=_optional_int(match.group(2)))


def _match_versioned(text: str) -> Optional[EpisodeMatch]:
    match = _VERSIONED.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "versioned", version=int(match.group(2)))


def _match_fractional(text: str) -> Optional[EpisodeMatch]:
    match = _FRACTIONAL.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "fractional")


def _match_range(text: str) -> Optional[EpisodeMatch]:
    match = _RANGE.match(text)
    if not match:
        return None
    start, end = _bounded(match.group(1)), _bounded(match.group(2))
    if start is None or end is None or start >= end:
        return None
    return EpisodeMatch(start, text, "range", end=end)


def _match_japanese(text: str) -> Optional[EpisodeMatch]:
    match = _JAPANESE.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "japanese")


def _match_partial(text: str) -> Optional[EpisodeMatch]:
    match = _PARTIAL.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "partial")


def _match_volume(text: str) -> Optional[EpisodeMatch]:
    if "vol" not in text.lower():
        return None
    match = _VOLUME.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "volume", version=_optional_int(match.group(2)))


def _match_plain(text: str) -> Optional[EpisodeMatch]:
    match = _PLAIN.match(text)
    if not match:
        return None
    number = _bounded(match.group(1))
    if number is None:
        return None
    return EpisodeMatch(number, text, "plain")


EpisodeStrategy = Callable[[str], Optional[EpisodeMatch]]

EPISODE_STRATEGIES: List[Tuple[str, EpisodeStrategy]] = [
    ("combined", _match_combined),
    ("prefixed", _match_prefixed),
    ("versioned", _match_versioned),
    ("fractional", _match_fractional),
    ("range", _match_range),
    ("japanese", _match_japanese),
    ("partial", _match_partial),
    ("volume", _match_volume),
    ("plain", _match_plain),
]


def extract_episode(text: str) -> Optional[EpisodeMatch]:
    """
    Run the episode strategy cascade over a piece of text.

    Args:
        text (str): Token text, or several tokens joined with spaces.

    Returns:
        Optional[EpisodeMatch]: The first strategy's match, or None.
    """
    text = text.strip()
    if not text or is_year_like(text):
        return None
    for name, strategy in EPISODE_STRATEGIES:
        result = strategy(text)
        if result is not None:
            logger.debug(f"Episode strategy '{name}' matched {text!r} -> {result.number}")
            return result
    return None
