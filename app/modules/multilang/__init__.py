"""Multilang module - per-language content replication.

Keeps parallel copies of pages, menus and widget sidebars for every site
language, and the registry of those languages.

Main components:
- registry: LanguageRegistry (file-backed, locked writes)
- content_store: ContentStore protocol and InMemoryContentStore
- pages / menus / widgets: duplication and teardown steps
- migrations: one-shot flag-guarded data migrations
- provisioning: LanguageProvisioningService orchestrating the steps
- context: LanguageContext for the current request
- hreflang: HreflangService alternate links
"""

from modules.multilang.content_store import ContentStore, InMemoryContentStore
from modules.multilang.context import LanguageContext
from modules.multilang.hreflang import HreflangService
from modules.multilang.menus import MenuDuplicator
from modules.multilang.migrations import LanguageMigrations
from modules.multilang.models import ContentNode, Language, Menu, MenuItem
from modules.multilang.pages import PageDuplicator
from modules.multilang.provisioning import LanguageProvisioningService
from modules.multilang.registry import LanguageRegistry, RegistryCache
from modules.multilang.widgets import WidgetCloneCache, WidgetDuplicator

__all__ = [
    "ContentStore",
    "InMemoryContentStore",
    "ContentNode",
    "Language",
    "Menu",
    "MenuItem",
    "LanguageRegistry",
    "RegistryCache",
    "PageDuplicator",
    "MenuDuplicator",
    "WidgetDuplicator",
    "WidgetCloneCache",
    "LanguageMigrations",
    "LanguageProvisioningService",
    "LanguageContext",
    "HreflangService",
]
