"""
LRU-memoized title recognition.

The cache is keyed by the raw query string. It is never invalidated
automatically: a caller that knows the catalog changed calls invalidate().
Instances are not thread-safe and are meant to have a single owner.
"""
import logging
from collections import OrderedDict
from models.match_result import CacheStats, MatchMethod, MatchResult
from services.catalog_implementations.catalog_interface import CatalogInterface
from services.title_matcher import FUZZY_THRESHOLD, match_title

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 64


class RecognitionCache:
    """
    Memoizes match_title() results per query.

    Attributes:
        capacity (int): Maximum number of cached queries.
        threshold (float): Fuzzy confidence threshold passed to the matcher.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, threshold: float = FUZZY_THRESHOLD):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.threshold = threshold
        self._entries: "OrderedDict[str, MatchResult]" = OrderedDict()
        self._stats = CacheStats()

    def recognize(self, title: str, catalog: CatalogInterface) -> MatchResult:
        """
        Recognize a title, consulting the LRU before the catalog.

        Args:
            title (str): Raw title query.
            catalog (CatalogInterface): Source of candidates on a cache miss.

        Returns:
            MatchResult: The cached or freshly computed result.
        """
        if not title:
            return MatchResult.no_match()

        cached = self._entries.get(title)
        if cached is not None:
            self._entries.move_to_end(title)
            self._stats.hits_lru += 1
            logger.debug(f"LRU hit for {title!r}")
            return cached

        candidates = catalog.all_anime()
        result = match_title(title, candidates, threshold=self.threshold)
        self._record(result)

        if len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted {evicted!r} from recognition cache")
        self._entries[title] = result
        self._stats.entries_indexed = len(candidates)
        self._stats.lru_size = len(self._entries)
        return result

    def _record(self, result: MatchResult) -> None:
        if result.method == MatchMethod.EXACT:
            self._stats.hits_exact += 1
        elif result.method == MatchMethod.NORMALIZED:
            self._stats.hits_normalized += 1
        elif result.method == MatchMethod.FUZZY:
            self._stats.hits_fuzzy += 1
        else:
            self._stats.misses += 1

    def stats(self) -> CacheStats:
        """Return a snapshot of the cache counters."""
        return self._stats.model_copy()

    def invalidate(self) -> None:
        """Drop every cached result and reset the counters."""
        logger.info(f"Invalidating recognition cache ({len(self._entries)} entries)")
        self._entries.clear()
        self._stats = CacheStats()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, title: str) -> bool:
        return title in self._entries
