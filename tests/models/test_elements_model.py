import json
import pytest
from pydantic import ValidationError
from models.elements import Elements


def test_defaults_are_empty():
    elements = Elements()
    assert elements.title is None
    assert elements.subtitles == []
    assert elements.to_dict() == {}


def test_set_first_keeps_first_value():
    elements = Elements()
    assert elements.set_first("resolution", "1080p") is True
    assert elements.set_first("resolution", "720p") is False
    assert elements.resolution == "1080p"


def test_add_appends_to_list_fields():
    elements = Elements()
    elements.add("language", "ENG")
    elements.add("language", "JPN")
    assert elements.language == ["ENG", "JPN"]


def test_add_rejects_scalar_fields():
    with pytest.raises(ValueError):
        Elements().add("title", "Nope")


def test_assignment_is_validated():
    elements = Elements()
    with pytest.raises(ValidationError):
        elements.year = 1800
    with pytest.raises(ValidationError):
        elements.episode_number = 5000


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        Elements(director="nobody")


def test_serialization_omits_unset_fields():
    elements = Elements(title="Sousou no Frieren", episode_number=5, subtitles=["Multi-Subs"])
    assert elements.to_dict() == {"title": "Sousou no Frieren", "episode_number": 5, "subtitles": ["Multi-Subs"]}
    assert json.loads(elements.to_json()) == elements.to_dict()
