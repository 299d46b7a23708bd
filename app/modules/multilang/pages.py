"""Page duplication across languages.

Pages of the source language are recreated in the target language in
parent-first order so every duplicated child can point at its duplicated
parent. The site front page becomes the root of the new language tree: its
copy gets the language code as slug, and former root pages hang below it.

Each copy joins the translation group of its source page, which links the
pages across languages.
"""

from typing import Any, Dict, List, Optional

from infrastructure.logging import get_module_logger
from modules.multilang.bounded import (
    bounded,
    degrades_on_missing_capability,
    require_code,
    slugify,
)
from modules.multilang.content_store import ContentStore, generate_group_id
from modules.multilang.models import (
    EXCLUDED_META_KEYS,
    META_LANGUAGE,
    META_TEMPLATE,
    META_TRANSLATION_GROUP,
    OPTION_FRONT_PAGE,
    ContentNode,
)
from modules.multilang.registry import LanguageRegistry

logger = get_module_logger()

MAX_PAGES_TO_DUPLICATE = 500
MAX_META_KEYS = 50
MAX_SORT_PASSES = 20


def sort_pages_parent_first(
    pages: List[ContentNode], max_passes: int = MAX_SORT_PASSES
) -> List[ContentNode]:
    """Order pages so each parent precedes its children.

    A page is placed once its parent is 0, outside the set, or already
    placed. Pages still unplaced after ``max_passes`` scans (cycles) are
    dropped.
    """
    by_id: Dict[int, ContentNode] = {}
    for page in bounded(pages, MAX_PAGES_TO_DUPLICATE):
        by_id[page.id] = page

    ordered: List[ContentNode] = []
    placed = set()
    passes = 0
    while len(ordered) < len(by_id) and passes < max_passes:
        passes += 1
        for page_id, page in by_id.items():
            if page_id in placed:
                continue
            parent = page.parent_id
            if not parent or parent not in by_id or parent in placed:
                ordered.append(page)
                placed.add(page_id)

    if len(ordered) < len(by_id):
        logger.warning(
            "pages_dropped_from_sort",
            dropped=len(by_id) - len(ordered),
            passes=passes,
        )
    return ordered


class PageDuplicator:
    """Duplicates, links and removes the pages of a language.

    Attributes:
        store: Content store holding the pages.
        registry: Language registry, used to resolve the default language.
    """

    def __init__(self, store: ContentStore, registry: LanguageRegistry):
        self.store = store
        self.registry = registry

    @degrades_on_missing_capability(dict)
    def duplicate_pages_for_language(
        self, target_iso2: str, default_iso2: Optional[str] = None
    ) -> Dict[int, int]:
        """Recreate every source-language page in the target language.

        Args:
            target_iso2: Language receiving the copies.
            default_iso2: Source language. Defaults to the registry default.

        Returns:
            Mapping of source page id to new page id.
        """
        require_code(target_iso2, "target_iso2")
        source_iso2 = default_iso2 or self.registry.default_iso2()

        pages = self.store.list_nodes(language=source_iso2, limit=MAX_PAGES_TO_DUPLICATE)
        if not pages:
            logger.info("no_pages_to_duplicate", source=source_iso2, target=target_iso2)
            return {}

        front_page_id = int(self.store.get_option(OPTION_FRONT_PAGE, 0) or 0)

        # The front page copy must exist before any other root page is copied.
        ordered = sort_pages_parent_first(pages)
        ordered.sort(key=lambda page: page.id != front_page_id or bool(page.parent_id))

        id_map: Dict[int, int] = {}
        homepage_id = 0
        for page in ordered:
            if len(id_map) >= MAX_PAGES_TO_DUPLICATE:
                break

            is_homepage = page.id == front_page_id
            if not page.parent_id:
                new_parent = 0 if is_homepage else homepage_id
            else:
                new_parent = id_map.get(page.parent_id, homepage_id)

            slug = target_iso2 if is_homepage else ""
            new_id = self.duplicate_single_page(page, target_iso2, new_parent, slug)
            if new_id > 0:
                id_map[page.id] = new_id
                if is_homepage:
                    homepage_id = new_id

        logger.info(
            "pages_duplicated",
            source=source_iso2,
            target=target_iso2,
            source_count=len(pages),
            duplicated=len(id_map),
        )
        return id_map

    def duplicate_single_page(
        self,
        source: ContentNode,
        target_iso2: str,
        new_parent: int = 0,
        slug: str = "",
    ) -> int:
        """Create one copy of ``source`` in the target language.

        Returns:
            New page id, or 0 when the store refused the page.
        """
        require_code(target_iso2, "target_iso2")
        fields: Dict[str, Any] = {
            "title": source.title,
            "content": source.content,
            "excerpt": source.excerpt,
            "status": "publish",
            "parent_id": new_parent,
            "menu_order": source.menu_order,
            "author": source.author,
        }
        if slug:
            fields["slug"] = slugify(slug)
        else:
            fields["slug"] = source.slug

        new_id = self.store.create_node(**fields)
        if not new_id or new_id <= 0:
            logger.warning("page_create_failed", source_id=source.id, target=target_iso2)
            return 0

        self._copy_metadata(source.id, new_id)
        self.store.set_metadata(new_id, META_LANGUAGE, target_iso2)
        self.store.set_metadata(
            new_id, META_TRANSLATION_GROUP, self.get_translation_group(source.id)
        )
        return new_id

    def get_translation_group(self, node_id: int) -> str:
        """Translation group of a page, created on first use."""
        if node_id <= 0:
            return ""
        group = self.store.get_metadata(node_id).get(META_TRANSLATION_GROUP)
        if isinstance(group, str) and group:
            return group
        group = generate_group_id()
        self.store.set_metadata(node_id, META_TRANSLATION_GROUP, group)
        return group

    def get_translations(self, node_id: int) -> Dict[str, int]:
        """Map language code to page id for every page sharing the group of ``node_id``."""
        group = self.store.get_metadata(node_id).get(META_TRANSLATION_GROUP)
        if not isinstance(group, str) or not group:
            return {}

        translations: Dict[str, int] = {}
        for page in self.store.list_nodes(
            translation_group=group, limit=MAX_PAGES_TO_DUPLICATE
        ):
            language = self.store.get_metadata(page.id).get(META_LANGUAGE)
            if isinstance(language, str) and language:
                translations[language] = page.id
        return translations

    def get_page_for_language(self, node_id: int, target_iso2: str) -> Optional[int]:
        return self.get_translations(node_id).get(target_iso2)

    @degrades_on_missing_capability(int)
    def remove_language_pages(self, iso2: str, force_delete: bool = False) -> int:
        """Trash (or permanently delete) every page of a language.

        Returns:
            Number of pages removed.
        """
        require_code(iso2, "iso2")
        removed = 0
        for page in self.store.list_nodes(language=iso2, limit=MAX_PAGES_TO_DUPLICATE):
            if self.store.delete_node(page.id, force=force_delete):
                removed += 1

        logger.info("pages_removed", language=iso2, removed=removed, force=force_delete)
        return removed

    def sync_template(self, source_id: int, target_id: int) -> None:
        """Copy the page template setting from one page to another."""
        if source_id <= 0 or target_id <= 0:
            raise ValueError("source_id and target_id must be positive")
        template = self.store.get_metadata(source_id).get(META_TEMPLATE)
        if isinstance(template, str) and template:
            self.store.set_metadata(target_id, META_TEMPLATE, template)

    def _copy_metadata(self, source_id: int, target_id: int) -> None:
        copied = 0
        for key, value in self.store.get_metadata(source_id).items():
            if copied >= MAX_META_KEYS:
                break
            if key in EXCLUDED_META_KEYS:
                continue
            copied += 1
            self.store.set_metadata(target_id, key, value)
