import pytest
from models.anime import Anime, AnimeTitleSet
from models.match_result import MatchKind, MatchMethod
from services.title_matcher import fuzzy_score, match_title, self_score


def test_exact_match(sample_anime, frieren):
    result = match_title("Sousou no Frieren", sample_anime)
    assert result.kind == MatchKind.MATCHED
    assert result.method == MatchMethod.EXACT
    assert result.anime == frieren
    assert result.confidence == 1.0


def test_exact_match_on_synonym(sample_anime, attack_on_titan):
    result = match_title("AoT", sample_anime)
    assert result.method == MatchMethod.EXACT
    assert result.anime == attack_on_titan


@pytest.mark.parametrize("query", ["sousou no frieren", "SOUSOU NO FRIEREN!", "Sousou  no  Frieren (TV)"])
def test_normalized_match(sample_anime, frieren, query):
    result = match_title(query, sample_anime)
    assert result.kind == MatchKind.MATCHED
    assert result.method == MatchMethod.NORMALIZED
    assert result.anime == frieren


def test_fuzzy_match(sample_anime, frieren):
    result = match_title("Sousou Frieren", sample_anime)
    assert result.kind == MatchKind.FUZZY
    assert result.method == MatchMethod.FUZZY
    assert result.anime == frieren
    assert 0.6 <= result.confidence < 1.0


def test_fuzzy_confidence_never_exceeds_exact(sample_anime):
    exact = match_title("Shingeki no Kyojin", sample_anime)
    paraphrase = match_title("Shingeki no Kyojn", sample_anime)
    assert paraphrase.is_match
    assert paraphrase.confidence <= exact.confidence


def test_threshold_rejects_weak_matches(sample_anime):
    result = match_title("Sousou Frieren", sample_anime, threshold=1.0)
    assert result.kind == MatchKind.NO_MATCH


def test_no_match(sample_anime):
    result = match_title("zzzz qqqq", sample_anime)
    assert result.kind == MatchKind.NO_MATCH
    assert result.anime is None
    assert not result.is_match


@pytest.mark.parametrize("query", ["", "The", "!!!"])
def test_degenerate_queries(sample_anime, query):
    assert match_title(query, sample_anime).kind == MatchKind.NO_MATCH


def test_empty_candidates():
    assert match_title("Sousou no Frieren", []).kind == MatchKind.NO_MATCH


def test_every_title_matches_its_own_entry(sample_anime):
    for anime in sample_anime:
        for title in anime.all_titles():
            result = match_title(title, [anime])
            assert result.is_match
            assert result.anime == anime


def test_earlier_candidate_wins_ties():
    first = Anime(id=1, title=AnimeTitleSet(romaji="Same Title"))
    second = Anime(id=2, title=AnimeTitleSet(romaji="Same Title"))
    assert match_title("Same Title", [first, second]).anime == first
    assert match_title("same title", [first, second]).anime == first


def test_fuzzy_score_handles_empty_strings():
    assert fuzzy_score("", "title") is None
    assert fuzzy_score("title", "") is None


def test_fuzzy_score_requires_characters_in_order():
    assert fuzzy_score("sousou frieren", "sousou no frieren") is not None
    assert fuzzy_score("frieren sousou", "sousou no frieren") is None
    assert fuzzy_score("zzz frieren", "sousou no frieren") is None


def test_contiguous_match_outscores_scattered_match():
    assert fuzzy_score("frieren", "sousou no frieren") > fuzzy_score("frieren", "f r i e r e n")


@pytest.mark.parametrize("query", ["zzz Frieren", "Nerieirf", "Kyojin Shingeki"])
def test_query_out_of_order_is_no_match(sample_anime, query):
    assert match_title(query, sample_anime).kind == MatchKind.NO_MATCH


def test_self_score_is_finite_and_floored():
    assert self_score("") == 1.0
    assert self_score("a") == 1.0
    assert 1.0 < self_score("sousou frieren") < float("inf")
