"""Data models for the multilang module.

- ``Language``: registry record (Pydantic, validated when read from disk)
- ``ContentNode``, ``Menu``, ``MenuItem``: content store records (dataclasses,
  no validation; the store owns their shape)

Metadata keys, option names and the fixed location/sidebar sets shared by the
duplication steps are defined here as well.
"""

from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, ConfigDict, Field

# Node metadata keys
META_LANGUAGE = "language"
META_LOCALE = "locale"
META_TRANSLATION_GROUP = "translation_group"
META_TEMPLATE = "template"

# Identity keys, never copied to a duplicated node
EXCLUDED_META_KEYS = frozenset({META_LANGUAGE, META_LOCALE, META_TRANSLATION_GROUP})

# Store options
OPTION_FRONT_PAGE = "page_on_front"
OPTION_LANGUAGE_MIGRATION_DONE = "language_migration_done"
OPTION_HOMEPAGE_SLUG_MIGRATION_DONE = "homepage_slug_migration_done"
OPTION_PAGES_DUPLICATED_PREFIX = "pages_duplicated_"
OPTION_WIDGETS_CLONED_PREFIX = "widgets_cloned_"

MENU_BASE_LOCATIONS = ("main-menu", "top-bar-menu", "footer-copyright-menu")

SIDEBAR_BASES = (
    "sidebar-left",
    "sidebar-right",
    "footer-column-1",
    "footer-column-2",
    "footer-column-3",
    "footer-column-4",
    "footer-column-5",
)

# Widget type whose config references a menu through ``nav_menu``
MENU_WIDGET_TYPE = "menu"
MENU_WIDGET_FIELD = "nav_menu"

NODE_STATUSES = ("publish", "draft", "private")


def language_slot(base: str, iso2: str) -> str:
    """Per-language menu location or sidebar slot name, e.g. "main-menu-fr"."""
    return f"{base}-{iso2}"


class Language(BaseModel):
    """A registered site language.

    Attributes:
        id: Opaque generated id (``lang_<iso2>_<8 hex>``).
        iso2: ISO 639-1 code, unique across the registry.
        iso3: ISO 639-2 code, used for menu name suffixes.
        native_name: Display name in the language itself.
        flag: Flag identifier (emoji or asset name).
        locales: Locale codes served under this language (e.g., "en_US").
        enabled: Whether the language is publicly available.
        is_default: Whether this is the site default (at most one).
    """

    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str = ""
    iso2: str = Field(pattern=r"^[a-z]{2}$")
    iso3: str = ""
    native_name: str = ""
    flag: str = ""
    locales: List[str] = Field(default_factory=list)
    enabled: bool = True
    is_default: bool = False


@dataclass
class ContentNode:
    """One page in the content store.

    Language, locale and translation group live in the node metadata, not on
    the node itself.
    """

    id: int
    parent_id: int = 0
    title: str = ""
    content: str = ""
    excerpt: str = ""
    slug: str = ""
    status: str = "publish"
    menu_order: int = 0
    author: int = 0


@dataclass
class Menu:
    id: int
    name: str


@dataclass
class MenuItem:
    """A navigation menu entry.

    ``item_type`` is "post_type" for entries pointing at a node, in which
    case ``object_type`` names the node type ("page") and ``object_id`` the
    node id. ``parent_id`` refers to another item of the same menu.
    """

    id: int
    menu_id: int
    title: str = ""
    url: str = ""
    object_type: str = ""
    object_id: int = 0
    item_type: str = "custom"
    parent_id: int = 0
    position: int = 0
    target: str = ""
    classes: List[str] = field(default_factory=list)
    attr_title: str = ""
    description: str = ""
