"""
Anime catalog models for AniRecog: cross-service IDs, title variants and catalog entries.
"""
import logging
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

logger = logging.getLogger(__name__)


class AnimeIds(BaseModel):
    """
    Identifiers of one anime on the three tracking services.

    Attributes:
        mal (Optional[int]): MyAnimeList ID.
        kitsu (Optional[int]): Kitsu ID.
        anilist (Optional[int]): AniList ID.
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        extra='forbid'
    )

    mal: Optional[int] = Field(None, ge=0, description="MyAnimeList ID")
    kitsu: Optional[int] = Field(None, ge=0, description="Kitsu ID")
    anilist: Optional[int] = Field(None, ge=0, description="AniList ID")

    def get(self, service: str) -> Optional[int]:
        """
        Return the ID for a service name ("mal", "kitsu" or "anilist").

        Raises:
            ValueError: If the service name is unknown.
        """
        service = service.lower()
        if service not in ("mal", "kitsu", "anilist"):
            raise ValueError(f"Unknown service: {service}")
        return getattr(self, service)

    def __str__(self) -> str:
        return "|".join("?" if v is None else str(v) for v in (self.mal, self.kitsu, self.anilist))


class AnimeTitleSet(BaseModel):
    """Title of an anime in romaji, English and native script."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        extra='forbid'
    )

    romaji: Optional[str] = Field(None, description="Romanized Japanese title")
    english: Optional[str] = Field(None, description="English title")
    native: Optional[str] = Field(None, description="Title in native script")

    def preferred(self) -> str:
        """
        Return the display title.

        Returns:
            str: romaji, else english, else native, else "Unknown".
        """
        return self.romaji or self.english or self.native or "Unknown"


class Anime(BaseModel):
    """
    A catalog entry.

    Attributes:
        id (int): Local catalog ID.
        ids (AnimeIds): Tracking service IDs.
        title (AnimeTitleSet): Title variants.
        synonyms (List[str]): Alternative titles.
        episodes (Optional[int]): Episode count, if known.
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        extra='forbid'
    )

    id: int = Field(..., ge=0, description="Local catalog ID")
    ids: AnimeIds = Field(default_factory=AnimeIds, description="Tracking service IDs")
    title: AnimeTitleSet = Field(default_factory=AnimeTitleSet, description="Title variants")
    synonyms: List[str] = Field(default_factory=list, description="Alternative titles")
    episodes: Optional[int] = Field(None, ge=0, description="Episode count")

    def all_titles(self) -> List[str]:
        """
        List every non-empty title variant: romaji, english, native, then synonyms.
        """
        variants = [self.title.romaji, self.title.english, self.title.native, *self.synonyms]
        return [v for v in variants if v]

    def __str__(self) -> str:
        return self.title.preferred()
