import pytest
from models.token import TokenKind
from utils.tokenizer import render_tokens, split_words, strip_extension, tokenize


def _kinds_and_texts(tokens):
    return [(t.kind, t.text) for t in tokens]


def test_tokenize_basic_filename():
    tokens, ext = tokenize("[Group] Title - 01.mkv")
    assert ext == "mkv"
    assert [t.text for t in tokens] == ["Group", " ", "Title", " ", "-", " ", "01"]
    assert tokens[0].kind == TokenKind.BRACKETED
    assert tokens[0].enclosure == "[]"
    assert tokens[4].is_dash


def test_delimiter_runs_collapse():
    tokens, _ = tokenize("A__.. B")
    assert _kinds_and_texts(tokens) == [
        (TokenKind.FREE_TEXT, "A"),
        (TokenKind.DELIMITER, " "),
        (TokenKind.FREE_TEXT, "B"),
    ]


def test_unterminated_bracket_runs_to_end():
    tokens, _ = tokenize("[Group Title")
    assert _kinds_and_texts(tokens) == [(TokenKind.BRACKETED, "Group Title")]


def test_empty_brackets_are_dropped():
    tokens, _ = tokenize("[]Title")
    assert _kinds_and_texts(tokens) == [(TokenKind.FREE_TEXT, "Title")]


def test_brackets_do_not_nest():
    tokens, _ = tokenize("[A(B]C)")
    assert _kinds_and_texts(tokens) == [
        (TokenKind.BRACKETED, "A(B"),
        (TokenKind.FREE_TEXT, "C)"),
    ]


def test_only_matching_closer_ends_group():
    tokens, _ = tokenize("[A)B]")
    assert _kinds_and_texts(tokens) == [(TokenKind.BRACKETED, "A)B")]


def test_cjk_brackets():
    tokens, _ = tokenize("【Group】Title")
    assert tokens[0].kind == TokenKind.BRACKETED
    assert tokens[0].text == "Group"
    assert tokens[0].enclosure == "【】"
    assert tokens[1].text == "Title"


def test_ideographic_space_is_a_delimiter():
    tokens, _ = tokenize("葬送の　フリーレン")
    assert [t.text for t in tokens] == ["葬送の", " ", "フリーレン"]


@pytest.mark.parametrize("filename,word", [
    ("Title 07.5", "07.5"),
    ("Title AAC 5.1", "5.1"),
    ("Title 23.976fps", "23.976fps"),
])
def test_decimal_numbers_stay_whole(filename, word):
    tokens, _ = tokenize(filename)
    assert word in [t.text for t in tokens]


def test_dot_between_episode_and_resolution_splits():
    tokens, _ = tokenize("Show.01.720p")
    assert [t.text for t in tokens if not t.is_delimiter] == ["Show", "01", "720p"]


def test_long_number_after_dot_splits():
    tokens, _ = tokenize("S01E05.1080p")
    assert [t.text for t in tokens if not t.is_delimiter] == ["S01E05", "1080p"]


def test_dashes_inside_words_are_kept():
    tokens, _ = tokenize("Erai-raws WEB-DL")
    assert [t.text for t in tokens if not t.is_delimiter] == ["Erai-raws", "WEB-DL"]


def test_extension_is_case_insensitive():
    assert strip_extension("Title.MKV") == ("Title", "mkv")


def test_non_video_extension_is_kept():
    tokens, ext = tokenize("notes.txt")
    assert ext is None
    assert [t.text for t in tokens] == ["notes", " ", "txt"]


def test_dot_only_name_has_no_extension():
    assert strip_extension(".mkv") == (".mkv", None)


def test_empty_input():
    assert tokenize("") == ([], None)


@pytest.mark.parametrize("filename", [
    "[SubsPlease] Sousou no Frieren - 05 (1080p) [ABCD1234]",
    "Show.Name.S01E05.1080p.WEB-DL.x264",
    "【Group】Title 第05話",
    "[Group Title",
    "[A(B]C)",
    "Title_-_07.5__v2",
    "Title()Name",
    "A[]B{}C",
])
def test_render_round_trip(filename):
    tokens, _ = tokenize(filename)
    rendered = render_tokens(tokens)
    assert tokenize(rendered)[0] == tokens


def test_render_keeps_words_split_by_empty_bracket():
    tokens, _ = tokenize("Title()Name")
    assert [t.text for t in tokens] == ["Title", "Name"]
    assert render_tokens(tokens) == "Title[]Name"


@pytest.mark.parametrize("filename", ["Title.ts", "Title.mov", "Title.rmvb"])
def test_only_listed_video_extensions_are_stripped(filename):
    assert strip_extension(filename)[1] is None


def test_split_words_keeps_decimals():
    assert split_words("BD 1080p AAC 2.0") == ["BD", "1080p", "AAC", "2.0"]
