"""
End-to-end recognition of a release name: parse the filename, recognize the
parsed title against the catalog, then redirect the episode through the
relation rules.
"""
import logging
from typing import Optional
from pydantic import BaseModel, ConfigDict

from models.elements import Elements
from models.match_result import MatchResult
from models.relation import EpisodeRedirect
from services.catalog_implementations.catalog_interface import CatalogInterface
from services.recognition_cache import RecognitionCache
from services.relation_database import RelationDatabase
from utils.filename_parser import parse_filename

logger = logging.getLogger(__name__)


class RecognitionOutcome(BaseModel):
    """Everything learned about one release name."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    elements: Elements
    match: MatchResult
    redirect: Optional[EpisodeRedirect] = None

    @property
    def episode(self) -> Optional[int]:
        """Episode number after redirection, falling back to the parsed one."""
        if self.redirect is not None:
            return self.redirect.episode
        return self.elements.episode_number


def recognize_release(
    name: str,
    cache: RecognitionCache,
    catalog: CatalogInterface,
    relations: Optional[RelationDatabase] = None,
    service: str = "mal",
) -> RecognitionOutcome:
    """
    Parse and recognize a release filename.

    Args:
        name (str): Release filename or torrent title.
        cache (RecognitionCache): Cache used to recognize the parsed title.
        catalog (CatalogInterface): Catalog consulted on cache misses.
        relations (Optional[RelationDatabase]): Rules for episode redirection.
        service (str): Which ID of the matched anime to redirect by.

    Returns:
        RecognitionOutcome: Parsed elements, match result and optional redirect.
    """
    elements = parse_filename(name)
    match = cache.recognize(elements.title or "", catalog)

    redirect = None
    if relations is not None and match.is_match and elements.episode_number is not None:
        anime_id = match.anime.ids.get(service)
        if anime_id is not None:
            redirect = relations.redirect(service, anime_id, elements.episode_number)
        else:
            logger.debug(f"{match.anime} has no {service} ID, skipping episode redirection")

    logger.info(f"Recognized {name!r} as {match.kind.value} ({match.anime if match.anime else 'no anime'})")
    return RecognitionOutcome(elements=elements, match=match, redirect=redirect)
