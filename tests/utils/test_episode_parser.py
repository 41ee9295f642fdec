import pytest
from utils.episode_parser import EPISODE_STRATEGIES, extract_episode, is_year_like, parse_episode_number


@pytest.mark.parametrize("text,expected", [
    ("05", 5),
    ("12v2", 12),
    ("12.5", 12),
    ("01-03", 1),
    ("1999", None),
    ("2024", None),
    ("2500", None),
    ("abc", None),
    ("", None),
])
def test_parse_episode_number(text, expected):
    assert parse_episode_number(text) == expected


@pytest.mark.parametrize("text,expected", [
    ("1950", True),
    ("2050", True),
    ("2051", False),
    ("1080", False),
    ("20a4", False),
])
def test_is_year_like(text, expected):
    assert is_year_like(text) is expected


@pytest.mark.parametrize("text,number,strategy", [
    ("S01E05", 5, "combined"),
    ("01x05", 5, "combined"),
    ("EP05", 5, "prefixed"),
    ("E05", 5, "prefixed"),
    ("#05", 5, "prefixed"),
    ("Episode 12", 12, "prefixed"),
    ("05v2", 5, "versioned"),
    ("07.5", 7, "fractional"),
    ("01-13", 1, "range"),
    ("第05話", 5, "japanese"),
    ("4a", 4, "partial"),
    ("Vol.3 EP05", 5, "volume"),
    ("05", 5, "plain"),
])
def test_extract_episode_strategies(text, number, strategy):
    match = extract_episode(text)
    assert match is not None
    assert match.number == number
    assert match.strategy == strategy


def test_combined_forms_carry_season():
    assert extract_episode("S02E11").season == 2
    assert extract_episode("3x04").season == 3


def test_versions_are_reported():
    assert extract_episode("05v2").version == 2
    assert extract_episode("S01E05v3").version == 3


def test_range_reports_both_ends():
    match = extract_episode("01-13")
    assert match.text == "01-13"
    assert match.end == 13


def test_backwards_range_is_rejected():
    assert extract_episode("13-01") is None


@pytest.mark.parametrize("text", ["2024", "S01E2000", "Title", "", "   "])
def test_extract_episode_rejects(text):
    assert extract_episode(text) is None


def test_only_plain_strategy_is_plain():
    assert extract_episode("05").is_plain
    assert not extract_episode("EP05").is_plain


def test_strategy_order_is_most_specific_first():
    names = [name for name, _ in EPISODE_STRATEGIES]
    assert names[0] == "combined"
    assert names[-1] == "plain"


@pytest.mark.parametrize("text", ["12v2", "S01E05", "EP05", "07.5", "01-13", "第05話", "05"])
def test_match_keeps_text_as_written(text):
    assert extract_episode(text).text == text
