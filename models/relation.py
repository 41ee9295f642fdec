"""
Episode relation models: episode ranges, redirect rules and redirect results.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator

from models.anime import AnimeIds

# Open-ended ranges ("N-?" and "?") end at this ceiling.
EPISODE_CEILING = 2 ** 32 - 1


class EpisodeRange(BaseModel):
    """Inclusive range of episode numbers."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    start: int = Field(..., ge=0, description="First episode")
    end: int = Field(..., ge=0, description="Last episode (inclusive)")

    @model_validator(mode="after")
    def _check_order(self) -> "EpisodeRange":
        if self.end < self.start:
            raise ValueError(f"episode range end {self.end} is before start {self.start}")
        return self

    @property
    def is_open_ended(self) -> bool:
        return self.end == EPISODE_CEILING

    def contains(self, episode: int) -> bool:
        return self.start <= episode <= self.end

    def __str__(self) -> str:
        if self.is_open_ended:
            return "?" if self.start == 0 else f"{self.start}-?"
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


class RelationRule(BaseModel):
    """
    Maps a source episode range of one entry onto a destination range of another.

    Attributes:
        source (AnimeIds): Source IDs (any slot may be absent).
        source_episodes (EpisodeRange): Inclusive source range.
        destination (AnimeIds): Destination IDs, "~" slots already resolved.
        destination_episodes (EpisodeRange): Inclusive destination range.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    source: AnimeIds
    source_episodes: EpisodeRange
    destination: AnimeIds
    destination_episodes: EpisodeRange

    def redirect(self, episode: int) -> Optional["EpisodeRedirect"]:
        """
        Translate an episode through this rule.

        Returns:
            Optional[EpisodeRedirect]: None if the episode is outside the source range.
        """
        if not self.source_episodes.contains(episode):
            return None
        return EpisodeRedirect(
            destination=self.destination,
            episode=self.destination_episodes.start + (episode - self.source_episodes.start),
        )

    def __str__(self) -> str:
        return f"{self.source}:{self.source_episodes} -> {self.destination}:{self.destination_episodes}"


class EpisodeRedirect(BaseModel):
    """Destination IDs and the translated episode number."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    destination: AnimeIds
    episode: int = Field(..., ge=0)

    @property
    def mal(self) -> Optional[int]:
        return self.destination.mal
