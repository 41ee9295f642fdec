import pytest
from utils.title_normalizer import normalize


@pytest.mark.parametrize("title,expected", [
    ("Sousou no Frieren: 2nd Season", "sousou no frieren 2"),
    ("Attack on Titan Season 2", "attack on titan 2"),
    ("Shingeki no Kyojin S2", "shingeki no kyojin 2"),
    ("Mob Psycho 100 II", "mob psycho 100 2"),
    ("The Promised Neverland", "promised neverland"),
    ("Love & Peace", "love and peace"),
    ("Title (TV)", "title"),
    ("K-On!", "kon"),
    ("L0ve Live", "love live"),
    ("Pokémon", "pokemon"),
    ("Ｆｕｌｌ Metal", "full metal"),
    ("  Spaced   Out  ", "spaced out"),
    ("Title OAD", "title"),
])
def test_normalize_examples(title, expected):
    assert normalize(title) == expected


def test_multiplication_sign_reads_as_x():
    assert normalize("Spy × Family") == normalize("Spy x Family")


def test_native_script_is_preserved():
    assert normalize("葬送のフリーレン") == "葬送のフリーレン"


@pytest.mark.parametrize("title", [
    "Sousou no Frieren: 2nd Season",
    "(II)",
    "a.",
    "S-2",
    "The Ⅲ",
    "Kaguya-sama wa Kokurasetai? Ultra Romantic",
    "Re:Zero kara Hajimeru Isekai Seikatsu",
    "Spy × Family",
    "Season 2 (TV)",
    "!!!",
    "ⅩⅢ Season",
])
def test_normalize_is_idempotent(title):
    once = normalize(title)
    assert normalize(once) == once


@pytest.mark.parametrize("title", ["", "!!!", "The", "\u0000﻿"])
def test_degenerate_input_never_raises(title):
    assert isinstance(normalize(title), str)


def test_punctuation_only_normalizes_to_empty():
    assert normalize("!!!") == ""
    assert normalize("") == ""
