import json
import pytest
from unittest.mock import patch
from cli.main import anirecog_cli, build_context
from services.catalog_implementations.json_catalog import JsonCatalog
from services.catalog_implementations.memory_catalog import MemoryCatalog
from utils.anirecog_config import write_temp_config


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI group from reconfiguring the root logger during tests."""
    with patch("cli.main.setup_logging") as mock_setup:
        yield mock_setup


def test_commands_are_discovered():
    assert {"parse-name", "match-title", "recognize", "redirect-episode", "stream-title"} <= set(anirecog_cli.commands)


def test_group_initializes_from_config(runner, test_config_path, no_logging_setup):
    """Test that the group builds services from the config file."""
    result = runner.invoke(anirecog_cli, ["-c", str(test_config_path), "-v", "match-title", "Sousou no Frieren"])
    assert result.exit_code == 0, result.output
    assert "matched Sousou no Frieren (exact)" in result.output
    no_logging_setup.assert_called_once_with(verbosity=1, logfile=None)


def test_group_skips_initialization_with_ready_context(runner, cli_obj, no_logging_setup):
    result = runner.invoke(anirecog_cli, ["redirect-episode", "41380", "13"], obj=cli_obj)
    assert result.exit_code == 0
    no_logging_setup.assert_not_called()


def test_group_reports_initialization_errors(runner, tmp_path):
    config_path = write_temp_config({"catalog": {"type": "postgres"}}, str(tmp_path))
    result = runner.invoke(anirecog_cli, ["-c", str(config_path), "parse-name", "x"])
    assert result.exit_code == 1
    assert "Initialization failed: Unsupported catalog type: postgres" in result.output


def test_build_context_defaults():
    context = build_context({})
    assert isinstance(context["catalog"], MemoryCatalog)
    assert context["cache"].capacity == 64
    assert context["relations"].rule_count >= 2
    assert len(context["streams"]) == 6


def test_build_context_reads_settings(catalog_json_file):
    context = build_context({
        "catalog": {"type": "json", "path": str(catalog_json_file)},
        "recognition": {"cache_capacity": "16", "fuzzy_threshold": "0.7"},
    })
    assert isinstance(context["catalog"], JsonCatalog)
    assert context["cache"].capacity == 16
    assert context["cache"].threshold == 0.7


def test_build_context_merges_user_rules_first(tmp_path):
    rules = tmp_path / "rules.txt"
    rules.write_text("::rules\n- 41380|?|?:13-24 -> 99999|?|?:1-12\n", encoding="utf-8")
    context = build_context({"relations": {"user_rules": str(rules)}})
    assert context["relations"].redirect_mal(41380, 13).mal == 99999


def test_build_context_merges_user_streams(tmp_path):
    streams = tmp_path / "streams.json"
    streams.write_text(json.dumps([{"name": "Local Player", "title_pattern": "^Now playing: (.+)$"}]), encoding="utf-8")
    context = build_context({"streams": {"user_streams": str(streams)}})
    assert len(context["streams"]) == 7


def test_build_context_missing_user_files(tmp_path):
    context = build_context({
        "relations": {"user_rules": str(tmp_path / "nope.txt")},
        "streams": {"user_streams": str(tmp_path / "nope.json")},
    })
    assert len(context["streams"]) == 6
    assert context["relations"].redirect_mal(41380, 13).mal == 44881
