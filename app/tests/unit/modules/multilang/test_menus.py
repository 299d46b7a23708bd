"""Tests for modules.multilang.menus module."""

import pytest

from modules.multilang.menus import MenuDuplicator, localized_menu_name, menu_name_suffix
from modules.multilang.pages import PageDuplicator


@pytest.fixture
def menus(store, registry):
    return MenuDuplicator(store, registry)


@pytest.fixture
def page_id_map(store, registry, site):
    return PageDuplicator(store, registry).duplicate_pages_for_language("fr", "en")


@pytest.mark.unit
class TestMenuNames:
    def test_suffix_from_iso3(self):
        assert menu_name_suffix("fr", "FRA") == "Fra"

    def test_suffix_from_iso2(self):
        assert menu_name_suffix("fr") == "FR"

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("Main Eng", "Main Fra"),
            ("Footer EN", "Footer Fra"),
            ("Main", "Main Fra"),
            ("Primary Navigation", "Primary Navigation Fra"),
        ],
    )
    def test_localized_menu_name(self, source, expected):
        assert localized_menu_name(source, "Fra") == expected


@pytest.mark.unit
class TestDuplicateMenusForLanguage:
    def test_menus_created_per_location(self, menus, site, store, page_id_map):
        assert menus.duplicate_menus_for_language("fr", page_id_map, "en") == 2

        locations = store.get_menu_locations()
        assert store.get_menu(locations["main-menu-fr"]).name == "Main Fra"
        assert store.get_menu(locations["footer-copyright-menu-fr"]).name == "Footer Fra"
        assert "top-bar-menu-fr" not in locations
        assert locations["main-menu-en"] == site.menus["main"]

    def test_page_items_remapped(self, menus, site, store, page_id_map):
        menus.duplicate_menus_for_language("fr", page_id_map, "en")
        items = store.list_menu_items(store.get_menu_locations()["main-menu-fr"])

        home, about, team, docs = items
        assert home.object_id == page_id_map[site.pages["home"]]
        assert home.url == "https://example.test/fr/"
        assert about.classes == ["highlight"]
        assert team.parent_id == about.id
        assert team.url == "https://example.test/fr/about/team/"
        assert docs.item_type == "custom"
        assert docs.url == "https://docs.example.test/"

    def test_source_menu_untouched(self, menus, site, store, page_id_map):
        before = store.list_menu_items(site.menus["main"])
        menus.duplicate_menus_for_language("fr", page_id_map, "en")
        assert store.list_menu_items(site.menus["main"]) == before

    def test_unmapped_page_keeps_reference(self, menus, site, store):
        menus.duplicate_menus_for_language("fr", {}, "en")
        items = store.list_menu_items(store.get_menu_locations()["main-menu-fr"])
        assert items[0].object_id == site.pages["home"]
        assert items[0].url == "https://example.test/home/"

    def test_no_source_menus(self, menus):
        assert menus.duplicate_menus_for_language("fr", {}, "en") == 0

    def test_dangling_location_skipped(self, menus, store):
        store.set_menu_locations({"main-menu-en": 999})
        assert menus.duplicate_menus_for_language("fr", {}, "en") == 0


@pytest.mark.unit
class TestRemoveAndMap:
    def test_remove_language_menus(self, menus, site, store, page_id_map):
        menus.duplicate_menus_for_language("fr", page_id_map, "en")
        fr_main = store.get_menu_locations()["main-menu-fr"]

        assert menus.remove_language_menus("fr") == 2

        assert store.get_menu(fr_main) is None
        assert store.get_menu_locations() == {
            "main-menu-en": site.menus["main"],
            "footer-copyright-menu-en": site.menus["footer"],
        }

    def test_remove_without_menus(self, menus):
        assert menus.remove_language_menus("de") == 0

    def test_build_menu_map(self, menus, site, store, page_id_map):
        menus.duplicate_menus_for_language("fr", page_id_map, "en")
        locations = store.get_menu_locations()

        assert menus.build_menu_map("en", "fr") == {
            site.menus["main"]: locations["main-menu-fr"],
            site.menus["footer"]: locations["footer-copyright-menu-fr"],
        }
        assert menus.build_menu_map("en", "de") == {}
