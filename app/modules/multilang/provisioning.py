"""Language provisioning orchestration.

Runs the duplication steps for a newly enabled language (pages, then menus,
then widget sidebars) and the matching teardown when a language is removed.
Outcomes are reported as OperationResult with per-step counts in ``data``.

There is no rollback across steps: a failed run leaves whatever was created
and is retried with ``force=True``.
"""

from typing import Any, Dict, Optional

from infrastructure.logging import bind_job_context, get_module_logger
from infrastructure.operations import OperationResult
from infrastructure.services.providers import get_settings
from modules.multilang.bounded import require_code
from modules.multilang.content_store import ContentStore
from modules.multilang.menus import MenuDuplicator
from modules.multilang.models import (
    OPTION_PAGES_DUPLICATED_PREFIX,
    OPTION_WIDGETS_CLONED_PREFIX,
)
from modules.multilang.pages import PageDuplicator
from modules.multilang.registry import LanguageRegistry
from modules.multilang.widgets import WidgetDuplicator

logger = get_module_logger()


def duplication_marker(iso2: str) -> str:
    return f"{OPTION_PAGES_DUPLICATED_PREFIX}{iso2}"


class LanguageProvisioningService:
    """Enables and removes languages across the registry and the content store.

    Attributes:
        registry: Language registry.
        store: Content store.
        pages / menus / widgets: Step implementations.
        force_delete_pages: Delete pages permanently on removal instead of
            trashing them. Defaults to MULTILANG_FORCE_DELETE_PAGES.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        store: ContentStore,
        pages: Optional[PageDuplicator] = None,
        menus: Optional[MenuDuplicator] = None,
        widgets: Optional[WidgetDuplicator] = None,
        force_delete_pages: Optional[bool] = None,
    ):
        self.registry = registry
        self.store = store
        self.pages = pages or PageDuplicator(store, registry)
        self.menus = menus or MenuDuplicator(store, registry)
        self.widgets = widgets or WidgetDuplicator(store, registry, self.menus)
        if force_delete_pages is None:
            force_delete_pages = get_settings().multilang.FORCE_DELETE_PAGES
        self.force_delete_pages = force_delete_pages

    def is_provisioned(self, iso2: str) -> bool:
        return bool(self.store.get_option(duplication_marker(iso2)))

    def add_language(self, data: Dict[str, Any], provision: bool = True) -> OperationResult:
        """Register a language and, optionally, duplicate content into it."""
        iso2 = str(data.get("iso2") or "").strip()
        if not self.registry.add(data):
            return OperationResult.permanent_error(
                f"Language could not be added: {iso2 or '<missing iso2>'}",
                error_code="LANGUAGE_ADD_REJECTED",
            )
        if not provision:
            return OperationResult.success(data={"iso2": iso2}, message="language added")
        return self.enable_language(iso2)

    def enable_language(self, iso2: str, force: bool = False) -> OperationResult:
        """Duplicate pages, menus and widget sidebars into a language.

        Guarded by the ``pages_duplicated_<iso2>`` marker: a language that
        was already provisioned is skipped unless ``force`` is set.

        Args:
            iso2: Target language, which must be registered.
            force: Run even if the language was already provisioned.

        Returns:
            OperationResult with ``pages``, ``menus``, ``widget_areas`` counts
            and the ``page_id_map``.
        """
        require_code(iso2, "iso2")
        language = self.registry.get_by_iso2(iso2)
        if language is None:
            return OperationResult.not_found(f"Unknown language: {iso2}")

        default_iso2 = self.registry.default_iso2()
        if default_iso2 == iso2:
            return OperationResult.permanent_error(
                "The default language is the duplication source",
                error_code="DEFAULT_LANGUAGE",
            )

        if self.is_provisioned(iso2) and not force:
            logger.info("language_already_provisioned", language=iso2)
            return OperationResult.skipped(f"Language already provisioned: {iso2}")

        with bind_job_context(job="enable_language", language=iso2) as correlation_id:
            logger.info("language_provisioning_started", source=default_iso2)

            page_id_map = self.pages.duplicate_pages_for_language(iso2, default_iso2)
            menu_count = self.menus.duplicate_menus_for_language(
                iso2, page_id_map, default_iso2
            )
            widget_areas = self.widgets.duplicate_widget_areas_for_language(
                iso2, default_iso2
            )

            self.store.set_option(duplication_marker(iso2), True)

            data = {
                "iso2": iso2,
                "source": default_iso2,
                "pages": len(page_id_map),
                "menus": menu_count,
                "widget_areas": widget_areas,
                "page_id_map": page_id_map,
                "correlation_id": correlation_id,
            }
            logger.info(
                "language_provisioned",
                pages=data["pages"],
                menus=menu_count,
                widget_areas=widget_areas,
            )
        return OperationResult.success(data=data, message=f"Language provisioned: {iso2}")

    def remove_language(
        self, iso2: str, force_delete: Optional[bool] = None
    ) -> OperationResult:
        """Tear down a language's content and remove it from the registry.

        Widget instances are garbage-collected before the sidebar slots are
        cleared, since orphan detection reads the slots.

        Returns:
            OperationResult with ``widget_instances``, ``widget_areas``,
            ``menus`` and ``pages`` counts.
        """
        require_code(iso2, "iso2")
        language = self.registry.get_by_iso2(iso2)
        if language is None:
            return OperationResult.not_found(f"Unknown language: {iso2}")
        if language.is_default:
            return OperationResult.permanent_error(
                "The default language cannot be removed",
                error_code="DEFAULT_LANGUAGE",
            )

        force = self.force_delete_pages if force_delete is None else force_delete

        with bind_job_context(job="remove_language", language=iso2) as correlation_id:
            data = {
                "iso2": iso2,
                "widget_instances": self.widgets.remove_language_widget_instances(iso2),
                "widget_areas": self.widgets.remove_language_widget_areas(iso2),
                "menus": self.menus.remove_language_menus(iso2),
                "pages": self.pages.remove_language_pages(iso2, force_delete=force),
                "correlation_id": correlation_id,
            }

            if not self.registry.remove(iso2):
                logger.error("language_registry_removal_failed")
                return OperationResult.transient_error(
                    f"Content removed but registry update failed: {iso2}",
                    error_code="REGISTRY_WRITE_FAILED",
                    data=data,
                )

            self.store.set_option(duplication_marker(iso2), False)
            self.store.set_option(f"{OPTION_WIDGETS_CLONED_PREFIX}{iso2}", False)
            logger.info(
                "language_removed",
                widget_instances=data["widget_instances"],
                widget_areas=data["widget_areas"],
                menus=data["menus"],
                pages=data["pages"],
            )

        return OperationResult.success(data=data, message=f"Language removed: {iso2}")
