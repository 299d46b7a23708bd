"""Navigation menu duplication across languages.

Menus are assigned per language to locations named ``<base>-<iso2>``. For
each base location the source-language menu is copied, its items are
recreated with page references remapped to the duplicated pages, and the copy
is assigned to the target-language location.
"""

import re
from typing import Dict, Optional

from infrastructure.logging import get_module_logger
from modules.multilang.bounded import (
    bounded,
    degrades_on_missing_capability,
    require_code,
)
from modules.multilang.content_store import ContentStore
from modules.multilang.models import MENU_BASE_LOCATIONS, language_slot
from modules.multilang.registry import LanguageRegistry

logger = get_module_logger()

MAX_MENU_ITEMS = 200

TRAILING_LANGUAGE_TOKEN = re.compile(r"\s+\w{2,3}$", re.IGNORECASE)


def menu_name_suffix(iso2: str, iso3: str = "") -> str:
    """Suffix for a language's menu names: "Fra" from iso3, else "FR"."""
    if iso3:
        return iso3.lower().capitalize()
    return iso2.upper()


def localized_menu_name(source_name: str, suffix: str) -> str:
    """Replace the trailing language token of a menu name ("Main Eng" -> "Main Fra")."""
    return f"{TRAILING_LANGUAGE_TOKEN.sub('', source_name)} {suffix}"


class MenuDuplicator:
    """Duplicates and removes the navigation menus of a language."""

    def __init__(self, store: ContentStore, registry: LanguageRegistry):
        self.store = store
        self.registry = registry

    @degrades_on_missing_capability(int)
    def duplicate_menus_for_language(
        self,
        target_iso2: str,
        page_id_map: Dict[int, int],
        default_iso2: Optional[str] = None,
    ) -> int:
        """Copy the menus of every base location into the target language.

        Args:
            target_iso2: Language receiving the menus.
            page_id_map: Source page id -> duplicated page id.
            default_iso2: Source language. Defaults to the registry default.

        Returns:
            Number of menus created.
        """
        require_code(target_iso2, "target_iso2")
        source_iso2 = default_iso2 or self.registry.default_iso2()

        target = self.registry.get_by_iso2(target_iso2)
        suffix = menu_name_suffix(target_iso2, target.iso3 if target else "")

        locations = self.store.get_menu_locations()
        created = 0
        for base in MENU_BASE_LOCATIONS:
            source_menu_id = int(locations.get(language_slot(base, source_iso2)) or 0)
            if source_menu_id <= 0:
                continue

            source_menu = self.store.get_menu(source_menu_id)
            if source_menu is None:
                continue

            new_menu_id = self.store.create_menu(localized_menu_name(source_menu.name, suffix))
            if not new_menu_id:
                logger.warning("menu_create_failed", location=base, target=target_iso2)
                continue

            self._duplicate_menu_items(source_menu_id, new_menu_id, page_id_map)
            locations[language_slot(base, target_iso2)] = new_menu_id
            created += 1

        if created:
            self.store.set_menu_locations(locations)

        logger.info("menus_duplicated", source=source_iso2, target=target_iso2, created=created)
        return created

    def _duplicate_menu_items(
        self, source_menu_id: int, target_menu_id: int, page_id_map: Dict[int, int]
    ) -> None:
        # Items come in source order, so parents are created before children
        item_id_map: Dict[int, int] = {}
        for item in bounded(self.store.list_menu_items(source_menu_id), MAX_MENU_ITEMS):
            object_id = item.object_id
            url = item.url
            if item.item_type == "post_type" and item.object_type == "page":
                mapped = page_id_map.get(int(item.object_id or 0))
                if mapped:
                    object_id = mapped
                    url = self.store.permalink(mapped)

            new_parent = item_id_map.get(item.parent_id, 0) if item.parent_id else 0

            new_item_id = self.store.create_menu_item(
                target_menu_id,
                title=item.title,
                url=url,
                object_type=item.object_type,
                object_id=object_id,
                item_type=item.item_type,
                parent_id=new_parent,
                position=item.position,
                target=item.target,
                classes=list(item.classes),
                attr_title=item.attr_title,
                description=item.description,
            )
            if new_item_id and new_item_id > 0:
                item_id_map[item.id] = new_item_id

    @degrades_on_missing_capability(int)
    def remove_language_menus(self, iso2: str) -> int:
        """Delete the menus assigned to a language and unassign their locations.

        Returns:
            Number of menus deleted.
        """
        require_code(iso2, "iso2")
        locations = self.store.get_menu_locations()
        removed = 0
        for base in MENU_BASE_LOCATIONS:
            location = language_slot(base, iso2)
            menu_id = int(locations.get(location) or 0)
            if menu_id <= 0:
                continue
            if self.store.delete_menu(menu_id):
                del locations[location]
                removed += 1

        if removed:
            self.store.set_menu_locations(locations)

        logger.info("menus_removed", language=iso2, removed=removed)
        return removed

    def build_menu_map(self, source_iso2: str, target_iso2: str) -> Dict[int, int]:
        """Map source-language menu ids to target-language menu ids by location."""
        require_code(source_iso2, "source_iso2")
        require_code(target_iso2, "target_iso2")
        locations = self.store.get_menu_locations()
        menu_map: Dict[int, int] = {}
        for base in MENU_BASE_LOCATIONS:
            source_id = int(locations.get(language_slot(base, source_iso2)) or 0)
            target_id = int(locations.get(language_slot(base, target_iso2)) or 0)
            if source_id > 0 and target_id > 0:
                menu_map[source_id] = target_id
        return menu_map
