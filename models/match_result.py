"""
Title matching and recognition cache result models.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.anime import Anime


class MatchKind(str, Enum):
    MATCHED = "matched"
    FUZZY = "fuzzy"
    NO_MATCH = "no_match"


class MatchMethod(str, Enum):
    """Matcher pass that produced a result."""
    EXACT = "exact"
    NORMALIZED = "normalized"
    FUZZY = "fuzzy"


class MatchResult(BaseModel):
    """
    Outcome of matching a title against catalog candidates.

    Use the matched(), fuzzy() and no_match() constructors rather than
    building instances by hand.

    Attributes:
        kind (MatchKind): Matched, fuzzy or no match.
        anime (Optional[Anime]): Matched anime (None for no match).
        confidence (Optional[float]): 1.0 for exact/normalized matches, score ratio for fuzzy ones.
        method (Optional[MatchMethod]): Matcher pass that produced the result.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    kind: MatchKind = Field(..., description="Result kind")
    anime: Optional[Anime] = Field(None, description="Matched anime")
    confidence: Optional[float] = Field(None, ge=0.0, description="Match confidence")
    method: Optional[MatchMethod] = Field(None, description="Matcher pass that produced the result")

    @classmethod
    def matched(cls, anime: Anime, method: MatchMethod = MatchMethod.EXACT) -> "MatchResult":
        return cls(kind=MatchKind.MATCHED, anime=anime, confidence=1.0, method=method)

    @classmethod
    def fuzzy(cls, anime: Anime, confidence: float) -> "MatchResult":
        return cls(kind=MatchKind.FUZZY, anime=anime, confidence=confidence, method=MatchMethod.FUZZY)

    @classmethod
    def no_match(cls) -> "MatchResult":
        return cls(kind=MatchKind.NO_MATCH)

    @property
    def is_match(self) -> bool:
        return self.kind != MatchKind.NO_MATCH


class CacheStats(BaseModel):
    """Counters exposed by the recognition cache."""

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    entries_indexed: int = Field(0, ge=0, description="Candidates seen on the last catalog fetch")
    lru_size: int = Field(0, ge=0, description="Current number of cached queries")
    hits_exact: int = Field(0, ge=0, description="Misses resolved by exact match")
    hits_normalized: int = Field(0, ge=0, description="Misses resolved by normalized match")
    hits_fuzzy: int = Field(0, ge=0, description="Misses resolved by fuzzy match")
    hits_lru: int = Field(0, ge=0, description="Queries answered from the LRU")
    misses: int = Field(0, ge=0, description="Queries that matched nothing")
