"""
Elements model for AniRecog, the structured result of parsing a release filename.
"""
import logging
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, ConfigDict

logger = logging.getLogger(__name__)

LIST_FIELDS = (
    "release_info",
    "language",
    "subtitles",
    "video_term",
    "audio_term",
    "device_compat",
)


class Elements(BaseModel):
    """
    Metadata extracted from an anime release filename.

    Every scalar field is optional and every collection defaults to empty.
    Scalar fields follow first-match-wins: once set by a parser pass they are
    never overwritten (see set_first()).

    Attributes:
        title (Optional[str]): Anime title.
        episode (Optional[str]): Episode text as written (e.g. "05", "01-13").
        episode_number (Optional[int]): Numeric episode.
        release_group (Optional[str]): Fansub or release group.
        resolution (Optional[str]): Video resolution such as "1080p".
        video_codec (Optional[str]): Video codec keyword.
        audio_codec (Optional[str]): Audio codec keyword.
        season (Optional[str]): Season text as written.
        season_number (Optional[int]): Numeric season.
        checksum (Optional[str]): 8-digit hexadecimal CRC32.
        source (Optional[str]): Media source (BD, WEB-DL, ...).
        year (Optional[int]): Release year.
        episode_title (Optional[str]): Episode title after the episode number.
        part (Optional[str]): Part text.
        part_number (Optional[int]): Numeric part.
        volume (Optional[str]): Volume text.
        volume_number (Optional[int]): Numeric volume.
        release_version (Optional[str]): Release revision, "2" for a v2 release.
        anime_type (Optional[str]): OVA, Movie, Special, ...
        streaming_source (Optional[str]): Streaming service tag.
        file_extension (Optional[str]): Stripped video extension.
        release_info, language, subtitles, video_term, audio_term, device_compat (List[str]): Accumulated keywords.
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        extra='forbid'
    )

    title: Optional[str] = Field(None, description="Anime title")
    episode: Optional[str] = Field(None, description="Episode text as written")
    episode_number: Optional[int] = Field(None, ge=0, le=1999, description="Numeric episode")
    release_group: Optional[str] = Field(None, description="Release group")
    resolution: Optional[str] = Field(None, description="Video resolution")
    video_codec: Optional[str] = Field(None, description="Video codec")
    audio_codec: Optional[str] = Field(None, description="Audio codec")
    season: Optional[str] = Field(None, description="Season text as written")
    season_number: Optional[int] = Field(None, ge=0, description="Numeric season")
    checksum: Optional[str] = Field(None, description="CRC32 checksum")
    source: Optional[str] = Field(None, description="Media source")
    year: Optional[int] = Field(None, ge=1950, le=2050, description="Release year")
    episode_title: Optional[str] = Field(None, description="Episode title")
    part: Optional[str] = Field(None, description="Part text")
    part_number: Optional[int] = Field(None, ge=0, description="Numeric part")
    volume: Optional[str] = Field(None, description="Volume text")
    volume_number: Optional[int] = Field(None, ge=0, description="Numeric volume")
    release_version: Optional[str] = Field(None, description="Release revision")
    anime_type: Optional[str] = Field(None, description="Anime type such as OVA or Movie")
    streaming_source: Optional[str] = Field(None, description="Streaming service")
    file_extension: Optional[str] = Field(None, description="Video file extension")
    release_info: List[str] = Field(default_factory=list, description="Release info keywords")
    language: List[str] = Field(default_factory=list, description="Audio languages")
    subtitles: List[str] = Field(default_factory=list, description="Subtitle keywords")
    video_term: List[str] = Field(default_factory=list, description="Other video keywords")
    audio_term: List[str] = Field(default_factory=list, description="Other audio keywords")
    device_compat: List[str] = Field(default_factory=list, description="Device compatibility keywords")

    def set_first(self, field: str, value: Any) -> bool:
        """
        Set a scalar field only if it has not been set yet.

        Args:
            field (str): Field name.
            value (Any): New value.

        Returns:
            bool: True if the field was set, False if it already held a value.
        """
        if getattr(self, field) is not None:
            logger.debug(f"Keeping existing {field}={getattr(self, field)!r}, ignoring {value!r}")
            return False
        setattr(self, field, value)
        return True

    def add(self, field: str, value: str) -> None:
        """Append a value to one of the keyword list fields."""
        if field not in LIST_FIELDS:
            raise ValueError(f"{field} is not a list field")
        getattr(self, field).append(value)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a dict, omitting unset scalars and empty lists."""
        return self.model_dump(exclude_defaults=True)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_defaults=True)
