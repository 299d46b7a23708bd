"""Tests for modules.multilang.provisioning module."""

from unittest.mock import patch

import pytest

from infrastructure.operations import OperationStatus
from infrastructure.services import get_settings
from modules.multilang.provisioning import LanguageProvisioningService, duplication_marker
from tests.factories.multilang import make_language_data


@pytest.fixture
def service(registry, store):
    return LanguageProvisioningService(registry, store)


@pytest.mark.unit
class TestEnableLanguage:
    def test_full_duplication(self, service, site, store):
        result = service.enable_language("fr")

        assert result.status == OperationStatus.SUCCESS
        assert result.data["source"] == "en"
        assert result.data["pages"] == 4
        assert result.data["menus"] == 2
        assert result.data["widget_areas"] == 2
        assert set(result.data["page_id_map"]) == set(site.pages.values())
        assert result.data["correlation_id"]
        assert service.is_provisioned("fr")
        assert store.get_option(duplication_marker("fr")) is True

    def test_menu_widget_points_at_new_menu(self, service, site, store):
        service.enable_language("fr")

        fr_main = store.get_menu_locations()["main-menu-fr"]
        menu_widget = store.get_sidebars()["sidebar-left-fr"][1]
        number = int(menu_widget.rsplit("-", 1)[1])
        assert store.get_widget_instances("menu")[number]["nav_menu"] == fr_main

    def test_second_run_skipped(self, service, site, store):
        service.enable_language("fr")

        result = service.enable_language("fr")

        assert result.status == OperationStatus.SKIPPED
        assert len(store.list_nodes(language="fr")) == 4

    def test_force_reruns(self, service, site, store):
        first = service.enable_language("fr")
        second = service.enable_language("fr", force=True)

        assert second.status == OperationStatus.SUCCESS
        assert second.data["correlation_id"] != first.data["correlation_id"]
        assert len(store.list_nodes(language="fr")) == 8

    def test_unknown_language(self, service):
        result = service.enable_language("xx")
        assert result.status == OperationStatus.NOT_FOUND

    def test_default_language_rejected(self, service):
        result = service.enable_language("en")
        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "DEFAULT_LANGUAGE"

    def test_empty_code_rejected(self, service):
        with pytest.raises(ValueError):
            service.enable_language("")

    def test_empty_site_still_marks_provisioned(self, service, store):
        result = service.enable_language("de")
        assert result.status == OperationStatus.SUCCESS
        assert result.data["pages"] == 0
        assert service.is_provisioned("de")


@pytest.mark.unit
class TestAddLanguage:
    def test_add_and_provision(self, service, registry, site, store):
        result = service.add_language(make_language_data("pl"))

        assert result.status == OperationStatus.SUCCESS
        assert registry.get_by_iso2("pl") is not None
        assert len(store.list_nodes(language="pl")) == 4
        assert store.get_menu(store.get_menu_locations()["main-menu-pl"]).name == "Main Pol"

    def test_add_without_provisioning(self, service, registry, site):
        result = service.add_language(make_language_data("pl"), provision=False)

        assert result.status == OperationStatus.SUCCESS
        assert registry.get_by_iso2("pl") is not None
        assert not service.is_provisioned("pl")

    def test_rejected_add(self, service):
        result = service.add_language(make_language_data("fr"))
        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "LANGUAGE_ADD_REJECTED"


@pytest.mark.unit
class TestRemoveLanguage:
    def test_full_teardown(self, service, registry, site, store):
        service.enable_language("fr")

        result = service.remove_language("fr")

        assert result.status == OperationStatus.SUCCESS
        assert result.data["widget_instances"] == 2
        assert result.data["widget_areas"] == 2
        assert result.data["menus"] == 2
        assert result.data["pages"] == 4
        assert registry.get_by_iso2("fr") is None
        assert store.get_option(duplication_marker("fr")) is False
        assert store.get_option("widgets_cloned_fr") is False

    def test_default_language_content_untouched(self, service, site, store):
        service.enable_language("fr")
        service.remove_language("fr")

        assert len(store.list_nodes(language="en")) == 4
        assert store.get_sidebars()["sidebar-left-en"] == ["text-1", "menu-1"]
        assert store.get_widget_instances("text")[1] == {"title": "Welcome", "text": "Hello"}
        assert store.get_menu(site.menus["main"]) is not None

    def test_pages_trashed_unless_forced(self, service, site, store):
        id_map = service.enable_language("fr").data["page_id_map"]
        service.remove_language("fr")
        assert all(store.get_node(i).status == "trash" for i in id_map.values())

    def test_force_delete_from_settings(self, monkeypatch, registry, store, site):
        monkeypatch.setenv("MULTILANG_FORCE_DELETE_PAGES", "true")
        get_settings.cache_clear()
        service = LanguageProvisioningService(registry, store)
        id_map = service.enable_language("fr").data["page_id_map"]

        service.remove_language("fr")

        assert all(store.get_node(i) is None for i in id_map.values())

    def test_explicit_force_delete(self, service, site, store):
        id_map = service.enable_language("fr").data["page_id_map"]
        service.remove_language("fr", force_delete=True)
        assert all(store.get_node(i) is None for i in id_map.values())

    def test_default_language_rejected(self, service, registry):
        result = service.remove_language("en")
        assert result.status == OperationStatus.PERMANENT_ERROR
        assert registry.get_by_iso2("en") is not None

    def test_unknown_language(self, service):
        assert service.remove_language("xx").status == OperationStatus.NOT_FOUND

    def test_registry_failure_reported(self, service, registry, site, store):
        service.enable_language("fr")

        with patch.object(registry, "remove", return_value=False):
            result = service.remove_language("fr")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "REGISTRY_WRITE_FAILED"
        assert result.data["pages"] == 4
        assert service.is_provisioned("fr")

    def test_readd_after_removal_provisions_again(self, service, site, store):
        service.enable_language("fr")
        service.remove_language("fr", force_delete=True)

        result = service.add_language(make_language_data("fr"))

        assert result.status == OperationStatus.SUCCESS
        assert len(store.list_nodes(language="fr")) == 4
