"""
Filename parsing utilities for extracting anime release metadata.

The parser tokenizes a filename and then runs a fixed sequence of passes
over the tokens. Every token carries a claim slot; once a pass claims a
token no later pass looks at it, and every Elements field is
first-match-wins.
"""
import logging
import re
from dataclasses import replace
from typing import Callable, Iterator, List, Optional, Tuple

from models.elements import Elements
from models.token import ClaimTag, Token, TokenKind
from utils.episode_parser import EpisodeMatch, extract_episode, is_year_like, parse_episode_number
from utils.keywords import KeywordEntry, KeywordKind, lookup, lookup_contextual
from utils.season_parser import extract_season
from utils.tokenizer import split_words, tokenize

logger = logging.getLogger(__name__)

_CHECKSUM = re.compile(r"^[0-9A-Fa-f]{8}$")
_RESOLUTION_DIMENSIONS = re.compile(r"^\d{3,4}[xX×](\d{3,4})$")
_RESOLUTION_LINES = re.compile(r"^\d{3,4}[pPiI]$")
_YEAR = re.compile(r"^\d{4}$", re.ASCII)
_NUMERIC = re.compile(r"^\d+(?:\.\d+)?(?:[vV]\d)?$", re.ASCII)
_VERSION = re.compile(r"[vV](\d)$")

# Keyword kind -> (Elements field, accumulates)
_KEYWORD_FIELDS = {
    KeywordKind.VIDEO_CODEC: ("video_codec", False),
    KeywordKind.AUDIO_CODEC: ("audio_codec", False),
    KeywordKind.RESOLUTION: ("resolution", False),
    KeywordKind.SOURCE: ("source", False),
    KeywordKind.STREAMING_SOURCE: ("streaming_source", False),
    KeywordKind.EPISODE_TYPE: ("anime_type", False),
    KeywordKind.FILE_EXTENSION: ("file_extension", False),
    KeywordKind.RELEASE_VERSION: ("release_version", False),
    KeywordKind.VIDEO_TERM: ("video_term", True),
    KeywordKind.VIDEO_COLOR_DEPTH: ("video_term", True),
    KeywordKind.VIDEO_DYNAMIC_RANGE: ("video_term", True),
    KeywordKind.VIDEO_FRAME_RATE: ("video_term", True),
    KeywordKind.AUDIO_TERM: ("audio_term", True),
    KeywordKind.AUDIO_CHANNELS: ("audio_term", True),
    KeywordKind.LANGUAGE: ("language", True),
    KeywordKind.SUBTITLES: ("subtitles", True),
    KeywordKind.RELEASE_INFO: ("release_info", True),
    KeywordKind.DEVICE_COMPAT: ("device_compat", True),
}

# Prefix keyword kind -> (text field, number field)
_PREFIX_FIELDS = {
    KeywordKind.VOLUME: ("volume", "volume_number"),
    KeywordKind.PART: ("part", "part_number"),
}


def parse_resolution(text: str) -> Optional[str]:
    """
    Read a resolution token.

    Args:
        text (str): Token text such as "1920x1080" or "720p".

    Returns:
        Optional[str]: "1080p" style resolution, or None.
    """
    match = _RESOLUTION_DIMENSIONS.match(text)
    if match:
        return f"{int(match.group(1))}p"
    if _RESOLUTION_LINES.match(text):
        return text.lower()
    return None


def apply_keyword(elements: Elements, entry: KeywordEntry, text: str) -> bool:
    """
    Store a keyword in the matching Elements field.

    Args:
        elements (Elements): Parse result being built.
        entry (KeywordEntry): Keyword classification.
        text (str): Keyword text as written.

    Returns:
        bool: True if the keyword kind maps to a field.
    """
    target = _KEYWORD_FIELDS.get(entry.kind)
    if target is None:
        return False
    field, accumulates = target
    if accumulates:
        elements.add(field, text)
    elif entry.kind == KeywordKind.RELEASE_VERSION:
        elements.set_first(field, text[1:])
    elif entry.kind == KeywordKind.FILE_EXTENSION:
        elements.set_first(field, text.lower())
    else:
        elements.set_first(field, text)
    return True


class _TokenArena:
    """Tokens plus a parallel list of claims."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.claims: List[Optional[ClaimTag]] = [None] * len(tokens)
        self.episode_index: Optional[int] = None

    def is_free(self, index: int) -> bool:
        return self.claims[index] is None

    def claim(self, index: int, tag: ClaimTag) -> None:
        logger.debug(f"Token {index} {self.tokens[index].text!r} claimed as {tag.value}")
        self.claims[index] = tag

    def unclaimed(self, kind: Optional[TokenKind] = None) -> Iterator[Tuple[int, Token]]:
        for index, token in enumerate(self.tokens):
            if self.claims[index] is None and (kind is None or token.kind == kind):
                yield index, token

    def next_content(self, index: int) -> Optional[int]:
        """Index of the next non-delimiter token after index."""
        for following in range(index + 1, len(self.tokens)):
            if not self.tokens[following].is_delimiter:
                return following
        return None

    def free_word(self, index: Optional[int]) -> bool:
        """True for an unclaimed free-text token that is not a lone dash."""
        if index is None or not self.is_free(index):
            return False
        token = self.tokens[index]
        return token.is_free_text and not token.is_dash


def _set_episode(elements: Elements, match: EpisodeMatch) -> None:
    elements.set_first("episode", match.text)
    elements.set_first("episode_number", match.number)
    if match.season is not None and elements.season_number is None:
        elements.set_first("season", str(match.season))
        elements.set_first("season_number", match.season)
    if match.version is not None:
        elements.set_first("release_version", str(match.version))


# ────────────────────────────────────────────────
# PASSES
# ────────────────────────────────────────────────

def _pass_bracketed_keywords(arena: _TokenArena, elements: Elements) -> None:
    for index, token in list(arena.unclaimed(TokenKind.BRACKETED)):
        text = token.text.strip()
        entry = lookup_contextual(text, enclosed=True)
        if entry is not None and not entry.is_prefix and apply_keyword(elements, entry, text):
            arena.claim(index, ClaimTag.KEYWORD)
            continue
        resolution = parse_resolution(text)
        if resolution is not None:
            elements.set_first("resolution", resolution)
            arena.claim(index, ClaimTag.KEYWORD)
            continue

        # "(BD 1080p FLAC)": classify word by word, claim when most words are known
        words = split_words(text)
        if len(words) < 2:
            continue
        known = []
        for word in words:
            word_entry = lookup_contextual(word, enclosed=True)
            if word_entry is not None and not word_entry.is_prefix and word_entry.kind in _KEYWORD_FIELDS:
                known.append((word_entry, word))
            elif parse_resolution(word) is not None:
                known.append((None, word))
        if len(known) * 2 > len(words):
            for word_entry, word in known:
                if word_entry is None:
                    elements.set_first("resolution", parse_resolution(word))
                else:
                    apply_keyword(elements, word_entry, word)
            arena.claim(index, ClaimTag.KEYWORD)


def _pass_release_group(arena: _TokenArena, elements: Elements) -> None:
    for index, token in enumerate(arena.tokens):
        if token.is_free_text and not token.is_dash:
            return
        if not token.is_bracketed or not arena.is_free(index):
            continue
        text = token.text.strip()
        if _CHECKSUM.match(text) or lookup(text) is not None:
            continue
        elements.set_first("release_group", text)
        arena.claim(index, ClaimTag.RELEASE_GROUP)
        return


def _pass_checksum(arena: _TokenArena, elements: Elements) -> None:
    for index, token in arena.unclaimed(TokenKind.BRACKETED):
        if _CHECKSUM.match(token.text):
            elements.set_first("checksum", token.text)
            arena.claim(index, ClaimTag.CHECKSUM)
            return


def _pass_free_text_keywords(arena: _TokenArena, elements: Elements) -> None:
    # Two-word keywords first ("Dual Audio", "Dolby Vision")
    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        following = arena.next_content(index)
        if not arena.free_word(index) or not arena.free_word(following):
            continue
        pair = f"{token.text} {arena.tokens[following].text}"
        entry = lookup_contextual(pair, enclosed=False)
        if entry is not None and not entry.is_prefix and apply_keyword(elements, entry, pair):
            arena.claim(index, ClaimTag.KEYWORD)
            arena.claim(following, ClaimTag.KEYWORD)

    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        if token.is_dash:
            continue
        entry = lookup_contextual(token.text, enclosed=False)
        if entry is not None and not entry.is_prefix and apply_keyword(elements, entry, token.text):
            arena.claim(index, ClaimTag.KEYWORD)


def _pass_resolution(arena: _TokenArena, elements: Elements) -> None:
    if elements.resolution is not None:
        return
    for index, token in arena.unclaimed():
        if token.is_delimiter:
            continue
        resolution = parse_resolution(token.text)
        if resolution is not None:
            elements.set_first("resolution", resolution)
            arena.claim(index, ClaimTag.RESOLUTION)
            return


def _as_year(text: str) -> Optional[int]:
    if _YEAR.match(text) and is_year_like(text):
        return int(text)
    return None


def _pass_year(arena: _TokenArena, elements: Elements) -> None:
    for index, token in arena.unclaimed(TokenKind.BRACKETED):
        year = _as_year(token.text.strip())
        if year is not None:
            elements.set_first("year", year)
            arena.claim(index, ClaimTag.YEAR)
            return

    seen_text = False
    for index, token in arena.unclaimed(TokenKind.FREE_TEXT):
        if token.is_dash:
            continue
        year = _as_year(token.text)
        if year is not None and seen_text:
            elements.set_first("year", year)
            arena.claim(index, ClaimTag.YEAR)
            return
        if year is None:
            seen_text = True


def _pass_season(arena: _TokenArena, elements: Elements) -> None:
    for index, token in arena.unclaimed(TokenKind.FREE_TEXT):
        match = extract_season(token.text)
        if match is not None:
            elements.set_first("season", match.text)
            elements.set_first("season_number", match.number)
            arena.claim(index, ClaimTag.SEASON)
            return

    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        following = arena.next_content(index)
        if not arena.free_word(index) or not arena.free_word(following):
            continue
        match = extract_season(f"{token.text} {arena.tokens[following].text}")
        if match is not None:
            elements.set_first("season", match.text)
            elements.set_first("season_number", match.number)
            arena.claim(index, ClaimTag.SEASON)
            arena.claim(following, ClaimTag.SEASON)
            return


def _pass_volume_and_part(arena: _TokenArena, elements: Elements) -> None:
    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        entry = lookup(token.text)
        if entry is None or entry.kind not in _PREFIX_FIELDS:
            continue
        following = arena.next_content(index)
        if not arena.free_word(following):
            continue
        number_text = arena.tokens[following].text
        if not number_text.isdigit():
            continue
        text_field, number_field = _PREFIX_FIELDS[entry.kind]
        if elements.set_first(text_field, number_text):
            elements.set_first(number_field, int(number_text))
            arena.claim(index, ClaimTag.VOLUME)
            arena.claim(following, ClaimTag.VOLUME)


# Episode strategies, tried in order by _pass_episode

def _episode_after_dash(arena: _TokenArena, elements: Elements) -> bool:
    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        if not token.is_dash:
            continue
        following = arena.next_content(index)
        if following is None or arena.tokens[following].is_bracketed or not arena.free_word(following):
            continue
        match = extract_episode(arena.tokens[following].text)
        if match is not None:
            _set_episode(elements, match)
            arena.claim(index, ClaimTag.DASH)
            arena.claim(following, ClaimTag.EPISODE)
            arena.episode_index = following
            return True
    return False


def _episode_after_prefix(arena: _TokenArena, elements: Elements) -> bool:
    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        entry = lookup(token.text)
        if entry is None or entry.kind != KeywordKind.EPISODE:
            continue
        following = arena.next_content(index)
        if not arena.free_word(following):
            continue
        number_text = arena.tokens[following].text
        match = extract_episode(f"EP{number_text}")
        if match is not None:
            _set_episode(elements, replace(match, text=number_text))
            arena.claim(index, ClaimTag.EPISODE_PREFIX)
            arena.claim(following, ClaimTag.EPISODE)
            arena.episode_index = following
            return True
    return False


def _episode_patterned(arena: _TokenArena, elements: Elements) -> bool:
    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        if token.is_dash:
            continue
        match = extract_episode(token.text)
        if match is not None and not match.is_plain:
            _set_episode(elements, match)
            arena.claim(index, ClaimTag.EPISODE)
            arena.episode_index = index
            return True
    return False


def _number_match(text: str, number: int) -> EpisodeMatch:
    version = _VERSION.search(text)
    return EpisodeMatch(
        number,
        text,
        "number",
        version=int(version.group(1)) if version else None,
    )


def _episode_standalone_number(arena: _TokenArena, elements: Elements) -> bool:
    seen_text = False
    for index, token in list(arena.unclaimed(TokenKind.FREE_TEXT)):
        if token.is_dash:
            continue
        if not _NUMERIC.match(token.text):
            seen_text = True
            continue
        if not seen_text:
            continue
        number = parse_episode_number(token.text)
        if number is not None:
            _set_episode(elements, _number_match(token.text, number))
            arena.claim(index, ClaimTag.EPISODE)
            arena.episode_index = index
            return True
    return False


def _episode_bracketed(arena: _TokenArena, elements: Elements) -> bool:
    for index, token in list(arena.unclaimed(TokenKind.BRACKETED)):
        text = token.text.strip()
        number = parse_episode_number(text)
        if number is None:
            continue
        match = extract_episode(text) or _number_match(text, number)
        _set_episode(elements, match)
        arena.claim(index, ClaimTag.EPISODE)
        arena.episode_index = index
        return True
    return False


EpisodeStrategy = Callable[[_TokenArena, Elements], bool]

EPISODE_STRATEGIES: List[EpisodeStrategy] = [
    _episode_after_dash,
    _episode_after_prefix,
    _episode_patterned,
    _episode_standalone_number,
    _episode_bracketed,
]


def _pass_episode(arena: _TokenArena, elements: Elements) -> None:
    for strategy in EPISODE_STRATEGIES:
        if strategy(arena, elements):
            logger.debug(f"Episode found by {strategy.__name__}: {elements.episode}")
            return


def _collect_run(arena: _TokenArena, start: int) -> Optional[str]:
    """
    Join the first run of unclaimed free text at or after start.

    Leading dashes, claimed tokens and brackets are skipped until the run
    starts; afterwards any of them ends it.
    """
    parts: List[str] = []
    started = False
    for index in range(start, len(arena.tokens)):
        token = arena.tokens[index]
        if token.is_delimiter:
            if started:
                parts.append(" ")
            continue
        if token.is_free_text and arena.is_free(index) and not token.is_dash:
            parts.append(token.text)
            started = True
        elif started:
            break
    text = " ".join("".join(parts).split())
    return text or None


def _pass_title(arena: _TokenArena, elements: Elements) -> None:
    title = _collect_run(arena, 0)
    if title is not None:
        elements.set_first("title", title)


def _pass_episode_title(arena: _TokenArena, elements: Elements) -> None:
    if arena.episode_index is None:
        return
    episode_title = _collect_run(arena, arena.episode_index + 1)
    if episode_title is not None and episode_title != elements.title:
        elements.set_first("episode_title", episode_title)


ParsePass = Callable[[_TokenArena, Elements], None]

PARSE_PASSES: List[ParsePass] = [
    _pass_bracketed_keywords,
    _pass_release_group,
    _pass_checksum,
    _pass_free_text_keywords,
    _pass_resolution,
    _pass_year,
    _pass_season,
    _pass_volume_and_part,
    _pass_episode,
    _pass_title,
    _pass_episode_title,
]


def parse_filename(filename: str) -> Elements:
    """
    Extract release metadata from an anime filename.

    Args:
        filename (str): Raw filename (e.g., "[SubsPlease] Sousou no Frieren - 05 (1080p) [ABCD1234].mkv").

    Returns:
        Elements: Parsed metadata. Unrecognized parts are simply left unset.
    """
    logger.debug(f"Parsing filename: {filename}")
    tokens, extension = tokenize(filename)
    elements = Elements()
    if extension is not None:
        elements.file_extension = extension

    arena = _TokenArena(tokens)
    for parse_pass in PARSE_PASSES:
        parse_pass(arena, elements)

    logger.debug(f"Parsed {filename!r}: {elements.to_dict()}")
    return elements
