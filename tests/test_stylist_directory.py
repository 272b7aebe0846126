"""
Tests for the in-memory stylist directory.
"""

import pytest

from stylistbook.adapters.stylist_directory import InMemoryStylistDirectory
from stylistbook.config import AppConfig
from stylistbook.domain.exceptions import StylistNotFoundError
from stylistbook.domain.models import Stylist


@pytest.fixture
def directory():
    return InMemoryStylistDirectory([Stylist(id="s1", name="Anna"), Stylist(id="s2", name="Ben")])


def test_get_by_id(directory):
    assert directory.get_by_id("s1") == Stylist(id="s1", name="Anna")


def test_get_by_unknown_id_raises(directory):
    with pytest.raises(StylistNotFoundError, match="Unknown stylist id: 's9'"):
        directory.get_by_id("s9")


def test_find_by_name_is_case_insensitive(directory):
    assert directory.find_by_name("anna").id == "s1"
    assert directory.find_by_name("carla") is None


def test_resolve_accepts_id_or_name(directory):
    assert directory.resolve("s2").name == "Ben"
    assert directory.resolve("BEN").id == "s2"


def test_resolve_unknown_raises(directory):
    with pytest.raises(StylistNotFoundError):
        directory.resolve("carla")


def test_from_config():
    config = AppConfig(stylists=[{"id": "s1", "name": "anna"}])

    directory = InMemoryStylistDirectory.from_config(config)

    assert len(directory) == 1
    assert [s.id for s in directory] == ["s1"]
