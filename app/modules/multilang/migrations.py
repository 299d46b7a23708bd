"""One-shot data migrations for sites adopting multilang.

Each migration is guarded by a persisted "done" flag and sets it even when
there was nothing to migrate, so re-running is a no-op.
"""

from infrastructure.logging import get_module_logger
from modules.multilang.bounded import require_code, slugify
from modules.multilang.content_store import ContentStore
from modules.multilang.models import (
    META_LANGUAGE,
    OPTION_FRONT_PAGE,
    OPTION_HOMEPAGE_SLUG_MIGRATION_DONE,
    OPTION_LANGUAGE_MIGRATION_DONE,
)
from modules.multilang.pages import MAX_PAGES_TO_DUPLICATE, PageDuplicator

logger = get_module_logger()


class LanguageMigrations:
    def __init__(self, store: ContentStore, pages: PageDuplicator):
        self.store = store
        self.pages = pages

    def migrate_existing_pages(self, default_iso2: str) -> int:
        """Tag pages without a language with the default language.

        Every migrated page also gets a translation group.

        Returns:
            Number of pages migrated, 0 when already done.
        """
        require_code(default_iso2, "default_iso2")
        if self.store.get_option(OPTION_LANGUAGE_MIGRATION_DONE):
            return 0

        migrated = 0
        for page in self.store.list_nodes(
            missing_language=True, limit=MAX_PAGES_TO_DUPLICATE
        ):
            self.store.set_metadata(page.id, META_LANGUAGE, default_iso2)
            self.pages.get_translation_group(page.id)
            migrated += 1

        self.store.set_option(OPTION_LANGUAGE_MIGRATION_DONE, True)
        logger.info("existing_pages_migrated", language=default_iso2, migrated=migrated)
        return migrated

    def migrate_homepage_slugs(self) -> int:
        """Rename the front page and its translations to their language codes.

        Returns:
            Number of pages renamed, 0 when already done.
        """
        if self.store.get_option(OPTION_HOMEPAGE_SLUG_MIGRATION_DONE):
            return 0

        renamed = 0
        front_page_id = int(self.store.get_option(OPTION_FRONT_PAGE, 0) or 0)
        group = self.pages.get_translation_group(front_page_id) if front_page_id > 0 else ""

        if group:
            for page in self.store.list_nodes(
                translation_group=group, limit=MAX_PAGES_TO_DUPLICATE
            ):
                iso2 = self.store.get_metadata(page.id).get(META_LANGUAGE)
                if not isinstance(iso2, str) or not iso2:
                    continue
                if page.slug == iso2:
                    continue
                if self.store.update_node(page.id, slug=slugify(iso2)):
                    renamed += 1

        self.store.set_option(OPTION_HOMEPAGE_SLUG_MIGRATION_DONE, True)
        logger.info("homepage_slugs_migrated", renamed=renamed)
        return renamed
