"""Tests for modules.multilang.content_store module."""

import pytest

from modules.multilang.content_store import InMemoryContentStore, generate_group_id
from tests.factories.multilang import add_page


@pytest.mark.unit
class TestInMemoryNodes:
    def test_create_and_get(self, store):
        node_id = store.create_node(title="About", slug="about")
        node = store.get_node(node_id)
        assert node.title == "About"
        assert node.status == "publish"

    def test_create_with_unknown_field_fails(self, store):
        assert store.create_node(title="x", colour="red") == 0

    def test_reads_return_copies(self, store):
        node_id = add_page(store, "About", "en", tags=["a"])
        store.get_node(node_id).title = "Changed"
        store.get_metadata(node_id)["tags"].append("b")

        assert store.get_node(node_id).title == "About"
        assert store.get_metadata(node_id)["tags"] == ["a"]

    def test_list_filters(self, store):
        en = add_page(store, "One", "en", group="g1")
        fr = add_page(store, "Un", "fr", group="g1")
        bare = add_page(store, "Bare", None)

        assert [n.id for n in store.list_nodes(language="en")] == [en]
        assert [n.id for n in store.list_nodes(missing_language=True)] == [bare]
        assert [n.id for n in store.list_nodes(translation_group="g1")] == [en, fr]
        assert len(store.list_nodes(limit=2)) == 2

    def test_trash_and_force_delete(self, store):
        trashed = add_page(store, "Old", "en")
        deleted = add_page(store, "Gone", "en")

        assert store.delete_node(trashed)
        assert store.delete_node(deleted, force=True)

        assert store.get_node(trashed).status == "trash"
        assert store.get_node(deleted) is None
        assert store.list_nodes(language="en") == []
        assert store.delete_node(deleted) is False

    def test_metadata_on_unknown_node_ignored(self, store):
        store.set_metadata(99, "language", "en")
        assert store.get_metadata(99) == {}

    def test_permalink_follows_parents(self, store):
        parent = add_page(store, "About", "en")
        child = add_page(store, "Team", "en", parent_id=parent)
        assert store.permalink(child) == "https://example.test/about/team/"
        assert store.permalink(404) == ""

    def test_update_node(self, store):
        node_id = add_page(store, "About", "en")
        assert store.update_node(node_id, slug="about-us")
        assert store.get_node(node_id).slug == "about-us"
        assert store.update_node(404, slug="x") is False


@pytest.mark.unit
class TestInMemoryMenusAndWidgets:
    def test_menu_items_ordered_by_position(self, store):
        menu_id = store.create_menu("Main")
        second = store.create_menu_item(menu_id, title="B", position=2)
        first = store.create_menu_item(menu_id, title="A", position=1)

        assert [item.id for item in store.list_menu_items(menu_id)] == [first, second]

    def test_item_for_missing_menu(self, store):
        assert store.create_menu_item(404, title="x") == 0

    def test_delete_menu(self, store):
        menu_id = store.create_menu("Main")
        store.create_menu_item(menu_id, title="A")
        assert store.delete_menu(menu_id)
        assert store.get_menu(menu_id) is None
        assert store.list_menu_items(menu_id) == []

    def test_locations_sidebars_widgets_round_trip(self, store):
        store.set_menu_locations({"main-menu-en": 3})
        store.set_sidebars({"sidebar-left-en": ["text-1"]})
        store.set_widget_instances("text", {1: {"title": "t"}})

        sidebars = store.get_sidebars()
        sidebars["sidebar-left-en"].append("text-2")

        assert store.get_menu_locations() == {"main-menu-en": 3}
        assert store.get_sidebars() == {"sidebar-left-en": ["text-1"]}
        assert store.get_widget_instances("text") == {1: {"title": "t"}}
        assert store.get_widget_instances("missing") == {}

    def test_options(self, store):
        assert store.get_option("flag", "default") == "default"
        store.set_option("flag", True)
        assert store.get_option("flag") is True

    def test_ids_shared_across_records(self):
        store = InMemoryContentStore()
        node_id = store.create_node(title="x")
        menu_id = store.create_menu("m")
        assert menu_id == node_id + 1


@pytest.mark.unit
def test_group_ids_are_unique():
    assert generate_group_id() != generate_group_id()
