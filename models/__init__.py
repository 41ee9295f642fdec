"""
Models package for AniRecog.

This package contains Pydantic-based models for tokens, parsed filename elements,
catalog entries, match results, episode relations and stream definitions.
"""

from .token import Token, TokenKind, ClaimTag
from .elements import Elements
from .anime import Anime, AnimeIds, AnimeTitleSet
from .match_result import MatchResult, MatchKind, MatchMethod, CacheStats
from .relation import EpisodeRange, RelationRule, EpisodeRedirect, EPISODE_CEILING
from .stream import StreamDefinition, StreamMatch

__all__ = [
    "Token", "TokenKind", "ClaimTag",
    "Elements",
    "Anime", "AnimeIds", "AnimeTitleSet",
    "MatchResult", "MatchKind", "MatchMethod", "CacheStats",
    "EpisodeRange", "RelationRule", "EpisodeRedirect", "EPISODE_CEILING",
    "StreamDefinition", "StreamMatch",
]
