import logging
import pytest
from models.relation import EPISODE_CEILING
from services.relation_database import (
    RelationDatabase,
    RelationErrorCode,
    RelationParseError,
    parse_rule,
)


def _rules(*lines):
    return "::rules\n" + "\n".join(f"- {line}" for line in lines) + "\n"


# ────────────────────────────────────────────────
# REDIRECTS
# ────────────────────────────────────────────────

def test_split_cour_redirect(relations):
    redirect = relations.redirect_mal(41380, 13)
    assert redirect.mal == 44881
    assert redirect.episode == 1
    assert relations.redirect_mal(41380, 24).episode == 12


def test_episode_outside_range(relations):
    assert relations.redirect_mal(41380, 12) is None
    assert relations.redirect_mal(41380, 25) is None


def test_unknown_id(relations):
    assert relations.redirect_mal(1, 1) is None


def test_single_episode_rule(relations):
    redirect = relations.redirect_mal(6682, 13)
    assert redirect.mal == 7739
    assert redirect.episode == 1
    assert relations.redirect_mal(6682, 14) is None


def test_redirect_by_other_services(relations):
    assert relations.redirect_kitsu(43367, 13).destination.kitsu == 43883
    assert relations.redirect_anilist(116242, 20).episode == 8


def test_redirect_by_service_name(relations):
    assert relations.redirect("MAL", 41380, 13).episode == 1
    with pytest.raises(ValueError):
        relations.redirect("tvdb", 41380, 13)


def test_first_rule_in_file_order_wins():
    database = RelationDatabase.parse(_rules(
        "1|?|?:1-12 -> 2|?|?:1-12",
        "1|?|?:1-24 -> 3|?|?:1-24",
    ))
    assert database.redirect_mal(1, 5).mal == 2
    assert database.redirect_mal(1, 13).mal == 3


# ────────────────────────────────────────────────
# RULE SYNTAX
# ────────────────────────────────────────────────

def test_bidirectional_rule_adds_self_mapping():
    rules = parse_rule("- 41380|43367|116242:13-24 -> 44881|43883|127366:1-12!")
    assert len(rules) == 2
    reverse = rules[1]
    assert reverse.source == rules[0].destination
    assert reverse.destination == rules[0].destination
    assert reverse.source_episodes == reverse.destination_episodes

    database = RelationDatabase(rules)
    assert database.redirect_mal(44881, 5).mal == 44881
    assert database.redirect_mal(44881, 5).episode == 5


def test_tilde_copies_source_ids():
    rule = parse_rule("10001|10002|10003:13 -> ~|~|~:1")[0]
    assert rule.destination == rule.source


def test_unknown_ids_are_not_indexed():
    database = RelationDatabase.parse(_rules("10001|?|10003:1-12 -> 20001|?|20003:1-12"))
    assert database.rules[0].source.kitsu is None
    assert database.redirect_mal(10001, 3).episode == 3
    assert database.redirect_anilist(10003, 3) is not None


def test_open_ended_ranges():
    database = RelationDatabase.parse(_rules("1|2|3:13-? -> 4|5|6:1-?"))
    rule = database.rules[0]
    assert rule.source_episodes.end == EPISODE_CEILING
    assert rule.source_episodes.is_open_ended
    assert database.redirect_mal(1, 100).episode == 88


def test_unknown_episode_range_starts_at_zero():
    database = RelationDatabase.parse(_rules("1|?|?:? -> 2|?|?:1-?"))
    assert database.redirect_mal(1, 5).episode == 6


def test_only_rules_section_is_read():
    text = (
        "::meta\n"
        "- version: 1.2.3\n"
        "- 1|2|3:1 -> 4|5|6:1\n"
        "::rules\n"
        "# a comment\n"
        "\n"
        "- 7|8|9:1 -> 10|11|12:1\n"
        "not a rule line\n"
    )
    database = RelationDatabase.parse(text)
    assert database.rule_count == 1
    assert database.redirect_mal(1, 1) is None
    assert database.redirect_mal(7, 1).mal == 10


def test_empty_text():
    database = RelationDatabase.parse("")
    assert len(database) == 0
    assert database.errors == []


# ────────────────────────────────────────────────
# ERRORS
# ────────────────────────────────────────────────

@pytest.mark.parametrize("line,code", [
    ("1|2|3:1 4|5|6:1", RelationErrorCode.MISSING_ARROW),
    ("1|2|3 -> 4|5|6:1", RelationErrorCode.MISSING_COLON),
    ("1|2:1 -> 3|4|5:1", RelationErrorCode.ID_COUNT),
    ("a|2|3:1 -> 4|5|6:1", RelationErrorCode.INVALID_ID),
    ("1|2|3:x -> 4|5|6:1", RelationErrorCode.INVALID_EPISODE),
    ("1|2|3:5-3 -> 4|5|6:1", RelationErrorCode.INVALID_EPISODE),
    ("~|2|3:1 -> 4|5|6:1", RelationErrorCode.TILDE_IN_SOURCE),
])
def test_strict_parse_errors(line, code):
    with pytest.raises(RelationParseError) as exc_info:
        RelationDatabase.parse(_rules(line))
    error = exc_info.value
    assert error.error_code == code
    assert error.line_number == 2
    assert "line 2" in str(error)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_rule("nonsense")


def test_lenient_parse_skips_bad_lines(caplog):
    text = _rules(
        "1|2|3:1 -> 4|5|6:1",
        "broken line",
        "7|8|9:1 -> 10|11|12:1",
    )
    with caplog.at_level(logging.WARNING):
        database = RelationDatabase.parse(text, strict=False)
    assert database.rule_count == 2
    assert len(database.errors) == 1
    assert database.errors[0].line_number == 3
    assert "Skipping relation rule on line 3" in caplog.text


def test_from_file_is_lenient(tmp_path):
    path = tmp_path / "rules.txt"
    path.write_text(_rules("1|2|3:1 -> 4|5|6:1", "garbage"), encoding="utf-8")
    database = RelationDatabase.from_file(path)
    assert database.rule_count == 1
    assert len(database.errors) == 1


def test_from_file_strict(tmp_path):
    path = tmp_path / "rules.txt"
    path.write_text(_rules("garbage"), encoding="utf-8")
    with pytest.raises(RelationParseError):
        RelationDatabase.from_file(path, strict=True)


# ────────────────────────────────────────────────
# EMBEDDED AND MERGED RULES
# ────────────────────────────────────────────────

def test_embedded_rules_load():
    database = RelationDatabase.embedded()
    assert database.rule_count >= 2
    assert database.errors == []
    assert database.redirect_mal(41380, 13).mal == 44881


def test_merge_gives_precedence_to_self(relations):
    user = RelationDatabase.parse(_rules("41380|?|?:13-24 -> 99999|?|?:1-12"))
    merged = user.merge(relations)
    assert merged.rule_count == relations.rule_count + 1
    assert merged.redirect_mal(41380, 13).mal == 99999
    assert merged.redirect_mal(6682, 13).mal == 7739
    # Inputs are untouched
    assert user.rule_count == 1
