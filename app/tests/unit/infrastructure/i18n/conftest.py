"""Fixtures for i18n tests: a small catalog directory."""

import json

import pytest

from infrastructure.i18n.loader import CatalogCache

EN_CATALOG = {
    "HELLO": "Hello",
    "WELCOME": "Welcome, ##name##!",
    "TAGGED": "<b>##name##</b> & co",
    "ITEMS": {
        "singular": "One item",
        "one": "##count## item",
        "other": "##count## items",
    },
    "ONLY_SINGULAR": {"singular": "Just this"},
    "NO_SINGULAR": {"other": "Many things"},
    "BROKEN": 42,
}

FR_CATALOG = {
    "HELLO": "Bonjour",
    "COLOR": "Couleur",
    "ITEMS": {"singular": "Un article", "one": "article", "other": "articles"},
}

FR_CA_CATALOG = {"COLOR": "Couleur (CA)"}

PL_CATALOG = {
    "FILES": {
        "singular": "plik",
        "one": "plik",
        "few": "pliki",
        "many": "plików",
    }
}


@pytest.fixture
def translations_dir(tmp_path):
    """Directory with en, fr, fr_CA and pl catalogs."""
    directory = tmp_path / "translations"
    directory.mkdir()
    for name, data in (
        ("en", EN_CATALOG),
        ("fr", FR_CATALOG),
        ("fr_CA", FR_CA_CATALOG),
        ("pl", PL_CATALOG),
    ):
        (directory / f"{name}.json").write_text(
            json.dumps(data, ensure_ascii=False), encoding="utf-8"
        )
    return directory


@pytest.fixture
def catalog_cache():
    return CatalogCache()
