import os
import sys
import json
import pytest
from click.testing import CliRunner

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from models.anime import Anime, AnimeIds, AnimeTitleSet
from services.catalog_implementations.memory_catalog import MemoryCatalog
from services.recognition_cache import RecognitionCache
from services.relation_database import RelationDatabase
from services.stream_database import StreamDatabase
from utils.anirecog_config import write_temp_config

# ────────────────────────────────────────────────
# CATALOG FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def frieren():
    return Anime(
        id=1,
        ids=AnimeIds(mal=52991, kitsu=46474, anilist=154587),
        title=AnimeTitleSet(romaji="Sousou no Frieren", english="Frieren: Beyond Journey's End", native="葬送のフリーレン"),
        synonyms=["Frieren"],
        episodes=28,
    )


@pytest.fixture
def attack_on_titan():
    return Anime(
        id=2,
        ids=AnimeIds(mal=16498, kitsu=7442, anilist=16498),
        title=AnimeTitleSet(romaji="Shingeki no Kyojin", english="Attack on Titan", native="進撃の巨人"),
        synonyms=["AoT"],
    )


@pytest.fixture
def split_cour_show():
    """Second-cour entry whose episodes 13-24 redirect to MAL 44881."""
    return Anime(
        id=3,
        ids=AnimeIds(mal=41380, kitsu=43367, anilist=116242),
        title=AnimeTitleSet(romaji="Test Split Cour", english="Split Cour Show"),
    )


@pytest.fixture
def sample_anime(frieren, attack_on_titan, split_cour_show):
    return [frieren, attack_on_titan, split_cour_show]


@pytest.fixture
def memory_catalog(sample_anime):
    return MemoryCatalog(sample_anime)


@pytest.fixture
def catalog_json_file(tmp_path, sample_anime):
    """Write the sample catalog to a JSON file and return its path."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([a.model_dump() for a in sample_anime]), encoding="utf-8")
    return path


# ────────────────────────────────────────────────
# RELATION FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def relation_text():
    return (
        "::meta\n"
        "- version: 1.0.0\n"
        "- last_modified: 2026-01-01\n"
        "::rules\n"
        "# split cour\n"
        "- 41380|43367|116242:13-24 -> 44881|43883|127366:1-12\n"
        "- 6682|4662|6682:13 -> 7739|5102|7739:1\n"
    )


@pytest.fixture
def relations(relation_text):
    return RelationDatabase.parse(relation_text)


# ────────────────────────────────────────────────
# CLI FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def runner():
    """Fixture providing a Click CliRunner instance."""
    return CliRunner()


@pytest.fixture
def cli_obj(memory_catalog, relations):
    """A complete context object, so the CLI group skips its own initialization."""
    return {
        "config": {},
        "catalog": memory_catalog,
        "cache": RecognitionCache(capacity=8),
        "relations": relations,
        "streams": StreamDatabase.embedded(),
    }


@pytest.fixture
def test_config_path(tmp_path, catalog_json_file):
    """Write a configuration file pointing at the sample JSON catalog."""
    return write_temp_config(
        {
            "Catalog": {"type": "json", "path": str(catalog_json_file)},
            "Recognition": {"cache_capacity": "16", "fuzzy_threshold": "0.7"},
        },
        str(tmp_path),
    )
