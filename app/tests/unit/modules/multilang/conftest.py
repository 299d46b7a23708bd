"""Fixtures for multilang tests."""

import pytest

from modules.multilang.content_store import InMemoryContentStore
from modules.multilang.registry import LanguageRegistry, RegistryCache
from tests.factories.multilang import build_site, make_language_record, write_registry_file


@pytest.fixture
def registry_file(tmp_path):
    """Registry with en (default), fr and de."""
    return write_registry_file(
        tmp_path / "languages.json",
        [
            make_language_record("en", is_default=True, locales=["en_US"]),
            make_language_record("fr", locales=["fr_FR", "fr_CA"]),
            make_language_record("de"),
        ],
    )


@pytest.fixture
def registry(registry_file):
    return LanguageRegistry(registry_file, cache=RegistryCache())


@pytest.fixture
def store():
    return InMemoryContentStore()


@pytest.fixture
def site(store):
    return build_site(store, "en")
