import pytest
from utils.season_parser import extract_season, roman_to_int


@pytest.mark.parametrize("text,number,strategy", [
    ("S2", 2, "short"),
    ("s02", 2, "short"),
    ("Season 2", 2, "word"),
    ("Saison 3", 3, "word"),
    ("Season II", 2, "roman"),
    ("Season IV", 4, "roman"),
    ("2nd Season", 2, "ordinal"),
    ("3rd season", 3, "ordinal"),
    ("第2期", 2, "japanese"),
    ("2期", 2, "japanese"),
])
def test_extract_season(text, number, strategy):
    match = extract_season(text)
    assert match is not None
    assert match.number == number
    assert match.strategy == strategy


@pytest.mark.parametrize("text", ["Title", "Season", "S2E05", "Season ABC", ""])
def test_extract_season_rejects(text):
    assert extract_season(text) is None


@pytest.mark.parametrize("text,expected", [
    ("I", 1),
    ("IV", 4),
    ("ix", 9),
    ("XIV", 14),
    ("XL", 40),
    ("ABC", None),
    ("", None),
])
def test_roman_to_int(text, expected):
    assert roman_to_int(text) == expected
