from abc import ABC, abstractmethod
from typing import List, Optional
import logging
from models.anime import Anime

logger = logging.getLogger(__name__)


class CatalogInterface(ABC):
    """
    Abstract base class for anime catalog providers.

    The recognition cache asks the catalog for all candidates on every miss,
    so implementations should return entries in a stable priority order.

    Methods:
        all_anime(): Return every catalog entry.
        get_by_id(anime_id): Return one entry by local ID.
        get_by_mal_id(mal_id): Return one entry by MyAnimeList ID.
    """

    @abstractmethod
    def all_anime(self) -> List[Anime]:
        """Return every catalog entry."""
        pass

    def get_by_id(self, anime_id: int) -> Optional[Anime]:
        """Return the entry with the given local ID, or None."""
        for anime in self.all_anime():
            if anime.id == anime_id:
                return anime
        return None

    def get_by_mal_id(self, mal_id: int) -> Optional[Anime]:
        """Return the entry with the given MyAnimeList ID, or None."""
        for anime in self.all_anime():
            if anime.ids.mal == mal_id:
                return anime
        return None

    def __len__(self) -> int:
        return len(self.all_anime())
