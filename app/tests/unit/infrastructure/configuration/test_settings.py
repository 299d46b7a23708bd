"""Tests for infrastructure.configuration settings."""

from pathlib import Path

import pytest

from infrastructure.configuration import Settings
from infrastructure.configuration.settings import APP_ROOT
from infrastructure.services import get_settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "I18N_TRANSLATIONS_DIR",
            "MULTILANG_LANGUAGES_FILE",
            "MULTILANG_FALLBACK_LANGUAGE",
            "MULTILANG_FORCE_DELETE_PAGES",
            "ENVIRONMENT",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.translations_dir == APP_ROOT / "translations"
        assert settings.languages_file == APP_ROOT / "translations" / "languages.json"
        assert settings.multilang.FALLBACK_LANGUAGE == "en"
        assert settings.multilang.FORCE_DELETE_PAGES is False
        assert settings.is_production is False

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("I18N_TRANSLATIONS_DIR", str(tmp_path))
        monkeypatch.setenv("MULTILANG_FORCE_DELETE_PAGES", "true")
        monkeypatch.setenv("ENVIRONMENT", "Production")

        settings = Settings()

        assert settings.translations_dir == tmp_path
        assert settings.languages_file == tmp_path / "languages.json"
        assert settings.multilang.FORCE_DELETE_PAGES is True
        assert settings.is_production is True

    def test_explicit_languages_file(self, monkeypatch):
        monkeypatch.setenv("MULTILANG_LANGUAGES_FILE", "/srv/site/languages.json")
        assert Settings().languages_file == Path("/srv/site/languages.json")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
