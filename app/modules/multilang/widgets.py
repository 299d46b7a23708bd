"""Widget sidebar duplication and cleanup.

Sidebar slots are named ``<sidebar_base>-<iso2>`` and hold ordered widget ids
of the form ``<type>-<number>``. Widget configs are stored per type as
``{number: config}``.

Duplicating a language copies the widget lists of the source slots, cloning
every widget instance rather than sharing it. Removing a language only
deletes instances that no other sidebar still references.
"""

import copy
from typing import Any, Dict, List, Optional, Set, Tuple

from infrastructure.logging import get_module_logger
from modules.multilang.bounded import (
    bounded,
    degrades_on_missing_capability,
    require_code,
)
from modules.multilang.content_store import ContentStore
from modules.multilang.menus import MenuDuplicator
from modules.multilang.models import (
    MENU_WIDGET_FIELD,
    MENU_WIDGET_TYPE,
    OPTION_WIDGETS_CLONED_PREFIX,
    SIDEBAR_BASES,
    language_slot,
)
from modules.multilang.registry import LanguageRegistry

logger = get_module_logger()

MAX_WIDGETS_PER_SIDEBAR = 100
MAX_SIDEBAR_SCAN = 200
MAX_WIDGET_TYPE_LENGTH = 50

MULTIWIDGET_KEY = "_multiwidget"


def parse_widget_id(widget_id: str) -> Optional[Tuple[str, int]]:
    """Split "text-3" into ("text", 3).

    Returns:
        ``(type, number)``, or None when there is no dash, the type is empty
        or longer than 50 characters, or the suffix is not numeric.
    """
    if not isinstance(widget_id, str):
        return None
    widget_type, dash, number = widget_id.rpartition("-")
    if not dash or not widget_type or len(widget_type) > MAX_WIDGET_TYPE_LENGTH:
        return None
    if not number.isdigit():
        return None
    return widget_type, int(number)


def _instance_number(key: Any) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def next_widget_instance_number(instances: Dict[Any, Any]) -> int:
    """One past the highest numeric instance key.

    Every key is scanned: a partial scan could return a number that is
    already taken.
    """
    numbers = (_instance_number(key) for key in instances if key != MULTIWIDGET_KEY)
    return max((number for number in numbers if number is not None), default=0) + 1


def _find_instance_key(instances: Dict[Any, Any], number: int) -> Optional[Any]:
    if number in instances:
        return number
    if str(number) in instances:
        return str(number)
    return None


class WidgetCloneCache:
    """Source widget id -> clone id, so one run clones each source at most once."""

    def __init__(self):
        self._clones: Dict[str, str] = {}

    def get(self, widget_id: str) -> Optional[str]:
        return self._clones.get(widget_id)

    def set(self, widget_id: str, clone_id: str) -> None:
        self._clones[widget_id] = clone_id

    def __len__(self) -> int:
        return len(self._clones)

    def clear(self) -> None:
        self._clones.clear()


class WidgetDuplicator:
    """Duplicates, migrates and removes the widget sidebars of a language."""

    def __init__(
        self,
        store: ContentStore,
        registry: LanguageRegistry,
        menus: Optional[MenuDuplicator] = None,
    ):
        self.store = store
        self.registry = registry
        self.menus = menus or MenuDuplicator(store, registry)

    @degrades_on_missing_capability(int)
    def duplicate_widget_areas_for_language(
        self, target_iso2: str, default_iso2: Optional[str] = None
    ) -> int:
        """Fill the target-language sidebar slots with clones of the source widgets.

        Empty or missing source slots are skipped.

        Returns:
            Number of sidebar slots populated.
        """
        require_code(target_iso2, "target_iso2")
        source_iso2 = default_iso2 or self.registry.default_iso2()
        if source_iso2 == target_iso2:
            raise ValueError("target and source languages must differ")

        menu_map = self.menus.build_menu_map(source_iso2, target_iso2)
        sidebars = self.store.get_sidebars()
        cache = WidgetCloneCache()

        populated = 0
        for base in SIDEBAR_BASES:
            source_widgets = sidebars.get(language_slot(base, source_iso2))
            if not isinstance(source_widgets, list) or not source_widgets:
                continue

            sidebars[language_slot(base, target_iso2)] = [
                self.clone_widget_instance(widget_id, menu_map, cache)
                for widget_id in bounded(source_widgets, MAX_WIDGETS_PER_SIDEBAR)
            ]
            populated += 1

        if populated:
            self.store.set_sidebars(sidebars)

        logger.info(
            "widget_areas_duplicated",
            source=source_iso2,
            target=target_iso2,
            populated=populated,
            cloned=len(cache),
        )
        return populated

    def clone_widget_instance(
        self,
        widget_id: str,
        menu_map: Dict[int, int],
        cache: WidgetCloneCache,
    ) -> str:
        """Clone one widget instance and return the clone id.

        Unparseable ids and ids without a stored instance are returned
        unchanged. Menu widgets get their menu reference remapped through
        ``menu_map``.
        """
        cached = cache.get(widget_id)
        if cached is not None:
            return cached

        parsed = parse_widget_id(widget_id)
        if parsed is None:
            logger.debug("widget_id_unparseable", widget_id=widget_id)
            return widget_id

        widget_type, number = parsed
        instances = self.store.get_widget_instances(widget_type)
        if not isinstance(instances, dict):
            return widget_id
        key = _find_instance_key(instances, number)
        if key is None:
            logger.debug("widget_instance_missing", widget_id=widget_id)
            return widget_id

        source_config = instances[key]
        config = copy.deepcopy(source_config) if isinstance(source_config, dict) else {}

        if widget_type == MENU_WIDGET_TYPE and MENU_WIDGET_FIELD in config:
            try:
                source_menu = int(config[MENU_WIDGET_FIELD])
            except (TypeError, ValueError):
                source_menu = 0
            if source_menu in menu_map:
                config[MENU_WIDGET_FIELD] = menu_map[source_menu]

        new_number = next_widget_instance_number(instances)
        new_key = str(new_number) if isinstance(key, str) else new_number
        instances[new_key] = config
        self.store.set_widget_instances(widget_type, instances)

        clone_id = f"{widget_type}-{new_number}"
        cache.set(widget_id, clone_id)
        return clone_id

    @degrades_on_missing_capability(int)
    def migrate_shared_widgets(self, target_iso2: str, default_iso2: str) -> int:
        """Clone widgets the target language still shares with the default language.

        Widgets referenced only by target sidebars are left untouched. The
        ``widgets_cloned_<iso2>`` flag is set afterwards.

        Returns:
            Number of sidebar entries replaced by a clone.
        """
        require_code(target_iso2, "target_iso2")
        require_code(default_iso2, "default_iso2")
        if target_iso2 == default_iso2:
            return 0

        menu_map = self.menus.build_menu_map(default_iso2, target_iso2)
        sidebars = self.store.get_sidebars()
        cache = WidgetCloneCache()

        default_widgets = set(self._collect_widget_ids(sidebars, default_iso2))

        cloned = 0
        changed = False
        for base in SIDEBAR_BASES:
            slot = language_slot(base, target_iso2)
            widgets = sidebars.get(slot)
            if not isinstance(widgets, list):
                continue

            new_ids: List[str] = []
            slot_changed = False
            for widget_id in bounded(widgets, MAX_WIDGETS_PER_SIDEBAR):
                if widget_id in default_widgets:
                    clone_id = self.clone_widget_instance(widget_id, menu_map, cache)
                    if clone_id != widget_id:
                        cloned += 1
                        slot_changed = True
                    new_ids.append(clone_id)
                else:
                    new_ids.append(widget_id)

            if slot_changed:
                sidebars[slot] = new_ids
                changed = True

        if changed:
            self.store.set_sidebars(sidebars)

        self.store.set_option(f"{OPTION_WIDGETS_CLONED_PREFIX}{target_iso2}", True)
        logger.info(
            "shared_widgets_migrated",
            source=default_iso2,
            target=target_iso2,
            cloned=cloned,
        )
        return cloned

    @degrades_on_missing_capability(int)
    def remove_language_widget_areas(self, iso2: str) -> int:
        """Empty every existing sidebar slot of a language.

        Returns:
            Number of slots cleared.
        """
        require_code(iso2, "iso2")
        sidebars = self.store.get_sidebars()
        cleared = 0
        for base in SIDEBAR_BASES:
            slot = language_slot(base, iso2)
            if slot not in sidebars:
                continue
            sidebars[slot] = []
            cleared += 1

        if cleared:
            self.store.set_sidebars(sidebars)

        logger.info("widget_areas_removed", language=iso2, cleared=cleared)
        return cleared

    @degrades_on_missing_capability(int)
    def remove_language_widget_instances(self, iso2: str) -> int:
        """Delete widget instances referenced only by the language's sidebars.

        Must run before the slots are cleared. Instances also referenced by
        any other sidebar are kept.

        Returns:
            Number of instances deleted.
        """
        require_code(iso2, "iso2")
        sidebars = self.store.get_sidebars()

        target_widgets = self._collect_widget_ids(sidebars, iso2)
        if not target_widgets:
            return 0

        if len(sidebars) > MAX_SIDEBAR_SCAN:
            # Widgets referenced past the scan limit would look orphaned.
            logger.warning(
                "widget_instances_kept",
                language=iso2,
                reason="sidebar_scan_limit",
                sidebars=len(sidebars),
                limit=MAX_SIDEBAR_SCAN,
            )
            return 0

        own_slots = {language_slot(base, iso2) for base in SIDEBAR_BASES}
        other_widgets: Set[str] = set()
        for slot, widgets in sidebars.items():
            if slot in own_slots or not isinstance(widgets, list):
                continue
            other_widgets.update(widgets)

        orphans = [w for w in target_widgets if w not in other_widgets]

        removed = 0
        dirty: Dict[str, Dict[Any, Any]] = {}
        for widget_id in orphans:
            parsed = parse_widget_id(widget_id)
            if parsed is None:
                continue
            widget_type, number = parsed
            if widget_type not in dirty:
                dirty[widget_type] = self.store.get_widget_instances(widget_type)
            key = _find_instance_key(dirty[widget_type], number)
            if key is not None:
                del dirty[widget_type][key]
                removed += 1

        for widget_type, instances in bounded(dirty.items(), MAX_WIDGETS_PER_SIDEBAR):
            self.store.set_widget_instances(widget_type, instances)

        logger.info(
            "widget_instances_removed",
            language=iso2,
            removed=removed,
            kept_shared=len(target_widgets) - len(orphans),
        )
        return removed

    @staticmethod
    def _collect_widget_ids(sidebars: Dict[str, Any], iso2: str) -> List[str]:
        """Widget ids of a language's sidebar slots, deduplicated in order."""
        seen: Dict[str, None] = {}
        for base in SIDEBAR_BASES:
            widgets = sidebars.get(language_slot(base, iso2))
            if not isinstance(widgets, list):
                continue
            for widget_id in bounded(widgets, MAX_WIDGETS_PER_SIDEBAR):
                seen[widget_id] = None
        return list(seen)
