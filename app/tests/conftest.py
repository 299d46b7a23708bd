"""Shared fixtures for the whole test suite.

Process-wide caches (catalog files, registry files, plural overrides,
settings) are reset around every test so tests never observe each other.
"""

import json

import pytest

from infrastructure.i18n import loader as catalog_loader
from infrastructure.i18n import plural
from infrastructure.services.providers import get_settings
from modules.multilang import registry as language_registry


@pytest.fixture(autouse=True)
def reset_process_caches():
    catalog_loader.clear_cache()
    language_registry.get_default_registry_cache().clear()
    plural.reset_custom_rules()
    get_settings.cache_clear()
    yield
    catalog_loader.clear_cache()
    language_registry.get_default_registry_cache().clear()
    plural.reset_custom_rules()
    get_settings.cache_clear()


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""

    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
