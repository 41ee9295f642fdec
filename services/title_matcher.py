"""
Title matching against catalog candidates.

Three passes, first hit wins:
1. exact equality of the raw query with any title variant,
2. equality after normalize() on both sides,
3. fuzzy subsequence scoring (fzy) relative to the query's self-score.
   A title only scores when every query character appears in it in order.
"""
import logging
from typing import List, Optional, Sequence
from pfzy.score import fzy_scorer

from models.anime import Anime
from models.match_result import MatchMethod, MatchResult
from utils.title_normalizer import normalize

logger = logging.getLogger(__name__)

FUZZY_THRESHOLD = 0.6


def fuzzy_score(query: str, choice: str) -> Optional[float]:
    """
    Score a normalized query against a normalized title.

    Returns:
        Optional[float]: The fzy score, or None when the query's characters
        do not appear in the title in order.
    """
    if not query or not choice:
        return None
    score, _ = fzy_scorer(query, choice)
    if score == float("-inf"):
        return None
    return score


def self_score(query: str) -> float:
    """Score of a query against itself, floored at 1."""
    if not query:
        return 1.0
    # fzy reports identical strings as +inf; one trailing gap keeps the score finite
    score = fuzzy_score(query, f"{query} ")
    return max(score if score is not None else 0.0, 1.0)


def _normalized_titles(candidates: Sequence[Anime]) -> List[List[str]]:
    return [[t for t in (normalize(title) for title in anime.all_titles()) if t] for anime in candidates]


def match_title(query: str, candidates: Sequence[Anime], threshold: float = FUZZY_THRESHOLD) -> MatchResult:
    """
    Find the catalog entry a title refers to.

    Args:
        query (str): Title as extracted from a filename or player.
        candidates (Sequence[Anime]): Catalog entries, in priority order.
        threshold (float): Minimum fuzzy confidence to accept.

    Returns:
        MatchResult: Matched (exact or normalized), Fuzzy with its confidence, or NoMatch.
    """
    if not query or not candidates:
        return MatchResult.no_match()

    for anime in candidates:
        if query in anime.all_titles():
            logger.debug(f"Exact match for {query!r}: {anime}")
            return MatchResult.matched(anime, MatchMethod.EXACT)

    normalized_query = normalize(query)
    if not normalized_query:
        logger.debug(f"Query {query!r} normalizes to nothing, no match")
        return MatchResult.no_match()

    normalized = _normalized_titles(candidates)
    for anime, titles in zip(candidates, normalized):
        if normalized_query in titles:
            logger.debug(f"Normalized match for {query!r}: {anime}")
            return MatchResult.matched(anime, MatchMethod.NORMALIZED)

    best_anime = None
    best_score = None
    for anime, titles in zip(candidates, normalized):
        scores = [s for s in (fuzzy_score(normalized_query, title) for title in titles) if s is not None]
        if not scores:
            continue
        score = max(scores)
        if best_score is None or score > best_score:
            best_anime, best_score = anime, score

    if best_anime is None:
        logger.debug(f"No title contains the characters of {query!r} in order")
        return MatchResult.no_match()

    confidence = best_score / self_score(normalized_query)
    if confidence >= threshold:
        logger.debug(f"Fuzzy match for {query!r}: {best_anime} (confidence {confidence:.3f})")
        return MatchResult.fuzzy(best_anime, confidence)

    logger.debug(f"No match for {query!r} (best confidence {confidence:.3f})")
    return MatchResult.no_match()
