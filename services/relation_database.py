"""
Episode relation rules: redirect episode numbers between entries.

Rule files use the anime-relations text format:

    ::rules
    # comment
    - 41380|43367|116242:13-24 -> 44881|43883|127366:1-12
    - 37450|41004|101280:1-? -> ~|~|~:1-?!

Each side is "MAL|Kitsu|AniList:episodes". An ID slot is a number, "?" for
unknown, or "~" (destination only) for "same as source". Episodes are "N",
"N-M", "N-?" or "?". A trailing "!" also adds the reverse, self-mapping rule.
"""
import logging
import os
import re
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from models.anime import AnimeIds
from models.relation import EPISODE_CEILING, EpisodeRange, EpisodeRedirect, RelationRule

logger = logging.getLogger(__name__)

EMBEDDED_RULES_PATH = os.path.join(os.path.dirname(__file__), "data", "anime_relations.txt")

_SECTION_PREFIX = "::"
_RULES_SECTION = "::rules"
_IGNORED_PREFIXES = ("- version:", "- last_modified:")
_NUMBER = re.compile(r"^\d+$", re.ASCII)

_UNKNOWN = "?"
_SAME_AS_SOURCE = "~"


class RelationErrorCode(str, Enum):
    MISSING_ARROW = "missing_arrow"
    MISSING_COLON = "missing_colon"
    ID_COUNT = "id_count"
    INVALID_ID = "invalid_id"
    INVALID_EPISODE = "invalid_episode"
    TILDE_IN_SOURCE = "tilde_in_source"


class RelationParseError(ValueError):
    """
    A rule line could not be parsed.

    Attributes:
        line (str): The offending line.
        error_code (RelationErrorCode): What was wrong with it.
        line_number (Optional[int]): 1-based line number, when known.
    """

    def __init__(self, message: str, line: str, error_code: RelationErrorCode, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.error_code = error_code
        self.line_number = line_number

    def __str__(self) -> str:
        location = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{location}{self.message}: {self.line!r}"


def _parse_ids(text: str, line: str, source: Optional[AnimeIds] = None) -> AnimeIds:
    slots = text.split("|")
    if len(slots) != 3:
        raise RelationParseError("expected 3 pipe-separated IDs", line, RelationErrorCode.ID_COUNT)

    values = []
    for position, slot in enumerate(slots):
        slot = slot.strip()
        if slot == _UNKNOWN:
            values.append(None)
        elif slot == _SAME_AS_SOURCE:
            if source is None:
                raise RelationParseError("'~' is only allowed on the destination side", line, RelationErrorCode.TILDE_IN_SOURCE)
            values.append((source.mal, source.kitsu, source.anilist)[position])
        elif _NUMBER.match(slot):
            values.append(int(slot))
        else:
            raise RelationParseError(f"invalid ID {slot!r}", line, RelationErrorCode.INVALID_ID)
    return AnimeIds(mal=values[0], kitsu=values[1], anilist=values[2])


def _parse_episodes(text: str, line: str) -> EpisodeRange:
    text = text.strip()
    if text == _UNKNOWN:
        return EpisodeRange(start=0, end=EPISODE_CEILING)

    start_text, dash, end_text = text.partition("-")
    if not _NUMBER.match(start_text):
        raise RelationParseError(f"invalid start episode {start_text!r}", line, RelationErrorCode.INVALID_EPISODE)
    start = int(start_text)
    if not dash:
        return EpisodeRange(start=start, end=start)
    if end_text == _UNKNOWN:
        return EpisodeRange(start=start, end=EPISODE_CEILING)
    if not _NUMBER.match(end_text) or int(end_text) < start:
        raise RelationParseError(f"invalid end episode {end_text!r}", line, RelationErrorCode.INVALID_EPISODE)
    return EpisodeRange(start=start, end=int(end_text))


def _split_side(text: str, line: str) -> Tuple[str, str]:
    ids, colon, episodes = text.strip().rpartition(":")
    if not colon:
        raise RelationParseError("missing ':' between IDs and episodes", line, RelationErrorCode.MISSING_COLON)
    return ids, episodes


def parse_rule(line: str) -> List[RelationRule]:
    """
    Parse one rule line (with or without the leading "- ").

    Args:
        line (str): Rule text.

    Returns:
        List[RelationRule]: One rule, or two for a bidirectional "!" rule.

    Raises:
        RelationParseError: If the line is malformed.
    """
    body = line.strip()
    if body.startswith("- "):
        body = body[2:].strip()

    bidirectional = body.endswith("!")
    if bidirectional:
        body = body[:-1].rstrip()

    left, arrow, right = body.partition(" -> ")
    if not arrow:
        raise RelationParseError("missing ' -> '", line, RelationErrorCode.MISSING_ARROW)

    source_ids_text, source_episodes_text = _split_side(left, line)
    dest_ids_text, dest_episodes_text = _split_side(right, line)

    source = _parse_ids(source_ids_text, line)
    source_episodes = _parse_episodes(source_episodes_text, line)
    destination = _parse_ids(dest_ids_text, line, source=source)
    destination_episodes = _parse_episodes(dest_episodes_text, line)

    rules = [RelationRule(
        source=source,
        source_episodes=source_episodes,
        destination=destination,
        destination_episodes=destination_episodes,
    )]
    if bidirectional:
        rules.append(RelationRule(
            source=destination,
            source_episodes=destination_episodes,
            destination=destination,
            destination_episodes=destination_episodes,
        ))
    return rules


class RelationDatabase:
    """
    Indexed, read-only set of episode relation rules.

    Rules are kept in file order and indexed by source MAL, Kitsu and
    AniList ID. Use parse(), from_file() or embedded() to build one.
    """

    def __init__(self, rules: Optional[Iterable[RelationRule]] = None):
        self.rules: List[RelationRule] = []
        self.errors: List[RelationParseError] = []
        self._indexes: Dict[str, Dict[int, List[RelationRule]]] = {"mal": {}, "kitsu": {}, "anilist": {}}
        for rule in rules or []:
            self._add(rule)

    def _add(self, rule: RelationRule) -> None:
        self.rules.append(rule)
        for service, index in self._indexes.items():
            source_id = rule.source.get(service)
            if source_id is not None:
                index.setdefault(source_id, []).append(rule)

    @classmethod
    def parse(cls, text: str, strict: bool = True) -> "RelationDatabase":
        """
        Parse rule text.

        Args:
            text (str): Contents of a rules file.
            strict (bool): Raise on the first bad line. When False, bad lines
                are logged, kept in `errors` and skipped.

        Returns:
            RelationDatabase: The parsed rules.

        Raises:
            RelationParseError: On a malformed rule line when strict.
        """
        database = cls()
        in_rules = False
        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith(_SECTION_PREFIX):
                in_rules = line == _RULES_SECTION
                continue
            if not in_rules or line.startswith(_IGNORED_PREFIXES) or not line.startswith("- "):
                continue
            try:
                for rule in parse_rule(line):
                    database._add(rule)
            except RelationParseError as e:
                e.line_number = line_number
                if strict:
                    raise
                logger.warning(f"Skipping relation rule on line {line_number}: {e}")
                database.errors.append(e)

        logger.debug(f"Parsed {len(database.rules)} relation rules ({len(database.errors)} skipped)")
        return database

    @classmethod
    def from_file(cls, path: Union[str, Path], strict: bool = False) -> "RelationDatabase":
        """Parse a rules file. User files are parsed leniently by default."""
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        logger.info(f"Loading relation rules from {path}")
        return cls.parse(text, strict=strict)

    @classmethod
    def embedded(cls) -> "RelationDatabase":
        """
        Load the rules shipped with the package.

        Raises:
            RelationParseError: If the packaged rules file is corrupt.
        """
        return cls.from_file(EMBEDDED_RULES_PATH, strict=True)

    def merge(self, other: "RelationDatabase") -> "RelationDatabase":
        """
        Return a new database with this database's rules followed by other's.

        Earlier rules win on lookup, so merge user rules first to let them
        take precedence.
        """
        merged = RelationDatabase(self.rules + other.rules)
        merged.errors = self.errors + other.errors
        return merged

    def _redirect(self, service: str, anime_id: int, episode: int) -> Optional[EpisodeRedirect]:
        for rule in self._indexes[service].get(anime_id, []):
            redirect = rule.redirect(episode)
            if redirect is not None:
                logger.debug(f"{service} {anime_id} episode {episode} -> {redirect.destination}:{redirect.episode}")
                return redirect
        return None

    def redirect_mal(self, mal_id: int, episode: int) -> Optional[EpisodeRedirect]:
        """
        Redirect an episode of a MyAnimeList entry.

        Args:
            mal_id (int): Source MAL ID.
            episode (int): Source episode number.

        Returns:
            Optional[EpisodeRedirect]: From the first rule (file order) whose
            source range contains the episode, or None.
        """
        return self._redirect("mal", mal_id, episode)

    def redirect_kitsu(self, kitsu_id: int, episode: int) -> Optional[EpisodeRedirect]:
        return self._redirect("kitsu", kitsu_id, episode)

    def redirect_anilist(self, anilist_id: int, episode: int) -> Optional[EpisodeRedirect]:
        return self._redirect("anilist", anilist_id, episode)

    def redirect(self, service: str, anime_id: int, episode: int) -> Optional[EpisodeRedirect]:
        """
        Redirect by service name ("mal", "kitsu" or "anilist").

        Raises:
            ValueError: If the service name is unknown.
        """
        service = service.lower()
        if service not in self._indexes:
            raise ValueError(f"Unknown service: {service}")
        return self._redirect(service, anime_id, episode)

    @property
    def rule_count(self) -> int:
        return len(self.rules)

    def __len__(self) -> int:
        return len(self.rules)
