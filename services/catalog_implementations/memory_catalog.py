import logging
from typing import Iterable, List, Optional
from models.anime import Anime
from services.catalog_implementations.catalog_interface import CatalogInterface

logger = logging.getLogger(__name__)


class MemoryCatalog(CatalogInterface):
    """
    List-backed catalog.

    Args:
        anime (Optional[Iterable[Anime]]): Initial entries, kept in order.
    """

    def __init__(self, anime: Optional[Iterable[Anime]] = None):
        self._anime: List[Anime] = list(anime or [])
        logger.debug(f"MemoryCatalog initialized with {len(self._anime)} entries")

    def all_anime(self) -> List[Anime]:
        return list(self._anime)

    def add(self, anime: Anime) -> None:
        """Append an entry."""
        self._anime.append(anime)
        logger.debug(f"Added {anime} to memory catalog")
