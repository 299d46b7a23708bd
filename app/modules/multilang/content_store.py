"""Content store interface and in-memory implementation.

The hosting platform owns pages, menus, options, sidebars and widget
instances. The duplication steps only talk to it through ``ContentStore``.
All operations are best-effort: creation returns 0 on failure, deletion
returns False, reads of unknown records return None or an empty container.
"""

import copy
import dataclasses
import threading
import uuid
from typing import Any, Dict, Iterable, List, Optional, Protocol

from infrastructure.logging import get_module_logger
from modules.multilang.models import (
    META_LANGUAGE,
    META_TRANSLATION_GROUP,
    NODE_STATUSES,
    ContentNode,
    Menu,
    MenuItem,
)

logger = get_module_logger()

DEFAULT_NODE_LIMIT = 500


def generate_group_id() -> str:
    """New opaque translation group id."""
    return str(uuid.uuid4())


class ContentStore(Protocol):
    """Storage interface for site content.

    Methods:
        list_nodes / get_node / create_node / update_node / delete_node: pages
        get_metadata / set_metadata: per-node key/value metadata
        get_option / set_option: site-wide options and flags
        get_menu / create_menu / delete_menu / list_menu_items / create_menu_item: menus
        get_menu_locations / set_menu_locations: location -> menu id
        get_sidebars / set_sidebars: sidebar slot -> widget ids
        get_widget_instances / set_widget_instances: widget configs per type
        permalink: public URL of a node
    """

    def list_nodes(
        self,
        language: Optional[str] = None,
        missing_language: bool = False,
        translation_group: Optional[str] = None,
        statuses: Iterable[str] = NODE_STATUSES,
        limit: int = DEFAULT_NODE_LIMIT,
    ) -> List[ContentNode]:
        """Return nodes ordered by id.

        Args:
            language: Only nodes whose ``language`` metadata equals this code.
            missing_language: Only nodes without ``language`` metadata.
            translation_group: Only nodes of this translation group.
            statuses: Accepted node statuses.
            limit: Maximum number of nodes returned.
        """
        ...

    def get_node(self, node_id: int) -> Optional[ContentNode]: ...

    def create_node(self, **fields: Any) -> int:
        """Create a node from ContentNode fields; return its id, 0 on failure."""
        ...

    def update_node(self, node_id: int, **fields: Any) -> bool: ...

    def delete_node(self, node_id: int, force: bool = False) -> bool:
        """Trash a node, or delete it permanently when ``force`` is set."""
        ...

    def get_metadata(self, node_id: int) -> Dict[str, Any]: ...

    def set_metadata(self, node_id: int, key: str, value: Any) -> None: ...

    def get_option(self, name: str, default: Any = None) -> Any: ...

    def set_option(self, name: str, value: Any) -> None: ...

    def get_menu(self, menu_id: int) -> Optional[Menu]: ...

    def create_menu(self, name: str) -> int:
        """Create a menu; return its id, 0 on failure."""
        ...

    def delete_menu(self, menu_id: int) -> bool: ...

    def list_menu_items(self, menu_id: int) -> List[MenuItem]:
        """Return the items of a menu ordered by position."""
        ...

    def create_menu_item(self, menu_id: int, **fields: Any) -> int:
        """Create a menu item from MenuItem fields; return its id, 0 on failure."""
        ...

    def permalink(self, node_id: int) -> str: ...

    def get_menu_locations(self) -> Dict[str, int]: ...

    def set_menu_locations(self, locations: Dict[str, int]) -> None: ...

    def get_sidebars(self) -> Dict[str, List[str]]: ...

    def set_sidebars(self, sidebars: Dict[str, List[str]]) -> None: ...

    def get_widget_instances(self, widget_type: str) -> Dict[Any, Any]:
        """Return ``{instance_number: config}`` for a widget type."""
        ...

    def set_widget_instances(self, widget_type: str, instances: Dict[Any, Any]) -> None: ...


class InMemoryContentStore:
    """In-memory content store.

    Thread-safe store used by tests and local tooling. Nodes, menus and menu
    items share one id sequence. Every read returns a copy, so callers never
    mutate stored state by accident.
    """

    def __init__(self, base_url: str = "https://example.test") -> None:
        self.base_url = base_url.rstrip("/")
        self._nodes: Dict[int, ContentNode] = {}
        self._metadata: Dict[int, Dict[str, Any]] = {}
        self._options: Dict[str, Any] = {}
        self._menus: Dict[int, Menu] = {}
        self._menu_items: Dict[int, List[MenuItem]] = {}
        self._menu_locations: Dict[str, int] = {}
        self._sidebars: Dict[str, List[str]] = {}
        self._widgets: Dict[str, Dict[Any, Any]] = {}
        self._lock = threading.RLock()
        self._next_id = 1

    def _allocate_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    # Nodes

    def list_nodes(
        self,
        language: Optional[str] = None,
        missing_language: bool = False,
        translation_group: Optional[str] = None,
        statuses: Iterable[str] = NODE_STATUSES,
        limit: int = DEFAULT_NODE_LIMIT,
    ) -> List[ContentNode]:
        accepted = set(statuses)
        with self._lock:
            result = []
            for node_id in sorted(self._nodes):
                if len(result) >= limit:
                    break
                node = self._nodes[node_id]
                if node.status not in accepted:
                    continue
                meta = self._metadata.get(node_id, {})
                node_language = meta.get(META_LANGUAGE)
                if missing_language and node_language:
                    continue
                if language is not None and node_language != language:
                    continue
                if (
                    translation_group is not None
                    and meta.get(META_TRANSLATION_GROUP) != translation_group
                ):
                    continue
                result.append(dataclasses.replace(node))
            return result

    def get_node(self, node_id: int) -> Optional[ContentNode]:
        with self._lock:
            node = self._nodes.get(node_id)
            return dataclasses.replace(node) if node else None

    def create_node(self, **fields: Any) -> int:
        fields.pop("id", None)
        with self._lock:
            try:
                node = ContentNode(id=self._next_id, **fields)
            except TypeError as e:
                logger.warning("node_create_rejected", error=str(e))
                return 0
            self._allocate_id()
            self._nodes[node.id] = node
            self._metadata[node.id] = {}
            return node.id

    def update_node(self, node_id: int, **fields: Any) -> bool:
        fields.pop("id", None)
        with self._lock:
            node = self._nodes.get(node_id)
            if node is None:
                return False
            try:
                self._nodes[node_id] = dataclasses.replace(node, **fields)
            except TypeError as e:
                logger.warning("node_update_rejected", node_id=node_id, error=str(e))
                return False
            return True

    def delete_node(self, node_id: int, force: bool = False) -> bool:
        with self._lock:
            node = self._nodes.get(node_id)
            if node is None:
                return False
            if force:
                del self._nodes[node_id]
                self._metadata.pop(node_id, None)
            else:
                node.status = "trash"
            return True

    def get_metadata(self, node_id: int) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._metadata.get(node_id, {}))

    def set_metadata(self, node_id: int, key: str, value: Any) -> None:
        with self._lock:
            if node_id not in self._nodes:
                return
            self._metadata.setdefault(node_id, {})[key] = copy.deepcopy(value)

    def permalink(self, node_id: int) -> str:
        with self._lock:
            segments = []
            current = self._nodes.get(node_id)
            seen = set()
            while current is not None and current.id not in seen:
                seen.add(current.id)
                segments.append(current.slug or str(current.id))
                current = self._nodes.get(current.parent_id)
            if not segments:
                return ""
            return f"{self.base_url}/{'/'.join(reversed(segments))}/"

    # Options

    def get_option(self, name: str, default: Any = None) -> Any:
        with self._lock:
            if name not in self._options:
                return default
            return copy.deepcopy(self._options[name])

    def set_option(self, name: str, value: Any) -> None:
        with self._lock:
            self._options[name] = copy.deepcopy(value)

    # Menus

    def get_menu(self, menu_id: int) -> Optional[Menu]:
        with self._lock:
            menu = self._menus.get(menu_id)
            return dataclasses.replace(menu) if menu else None

    def create_menu(self, name: str) -> int:
        with self._lock:
            menu_id = self._allocate_id()
            self._menus[menu_id] = Menu(id=menu_id, name=name)
            self._menu_items[menu_id] = []
            return menu_id

    def delete_menu(self, menu_id: int) -> bool:
        with self._lock:
            if menu_id not in self._menus:
                return False
            del self._menus[menu_id]
            self._menu_items.pop(menu_id, None)
            return True

    def list_menu_items(self, menu_id: int) -> List[MenuItem]:
        with self._lock:
            items = self._menu_items.get(menu_id, [])
            ordered = sorted(items, key=lambda item: (item.position, item.id))
            return [copy.deepcopy(item) for item in ordered]

    def create_menu_item(self, menu_id: int, **fields: Any) -> int:
        fields.pop("id", None)
        fields.pop("menu_id", None)
        with self._lock:
            if menu_id not in self._menus:
                return 0
            try:
                item = MenuItem(id=self._next_id, menu_id=menu_id, **copy.deepcopy(fields))
            except TypeError as e:
                logger.warning("menu_item_create_rejected", menu_id=menu_id, error=str(e))
                return 0
            self._allocate_id()
            self._menu_items[menu_id].append(item)
            return item.id

    def get_menu_locations(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._menu_locations)

    def set_menu_locations(self, locations: Dict[str, int]) -> None:
        with self._lock:
            self._menu_locations = dict(locations)

    # Sidebars and widgets

    def get_sidebars(self) -> Dict[str, List[str]]:
        with self._lock:
            return copy.deepcopy(self._sidebars)

    def set_sidebars(self, sidebars: Dict[str, List[str]]) -> None:
        with self._lock:
            self._sidebars = copy.deepcopy(sidebars)

    def get_widget_instances(self, widget_type: str) -> Dict[Any, Any]:
        with self._lock:
            return copy.deepcopy(self._widgets.get(widget_type, {}))

    def set_widget_instances(self, widget_type: str, instances: Dict[Any, Any]) -> None:
        with self._lock:
            self._widgets[widget_type] = copy.deepcopy(instances)
