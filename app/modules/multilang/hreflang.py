"""Hreflang alternate links for translated pages."""

import html
from typing import List, Tuple

from modules.multilang.content_store import ContentStore
from modules.multilang.models import META_LANGUAGE, META_TRANSLATION_GROUP
from modules.multilang.registry import LanguageRegistry

MAX_ALTERNATES = 20


class HreflangService:
    def __init__(self, store: ContentStore, registry: LanguageRegistry):
        self.store = store
        self.registry = registry

    def build_alternates(self, node_id: int) -> List[Tuple[str, str]]:
        """Return ``(hreflang, url)`` pairs for every published translation of a node.

        Nothing is returned unless at least two languages exist. An
        ``x-default`` entry points at the default language version.
        """
        if not node_id or node_id <= 0:
            return []

        group = self.store.get_metadata(node_id).get(META_TRANSLATION_GROUP)
        if not isinstance(group, str) or not group:
            return []

        alternates = {}
        for page in self.store.list_nodes(
            translation_group=group, statuses=("publish",), limit=MAX_ALTERNATES
        ):
            language = self.store.get_metadata(page.id).get(META_LANGUAGE)
            if not isinstance(language, str) or not language:
                continue
            url = self.store.permalink(page.id)
            if url:
                alternates[language] = url

        if len(alternates) < 2:
            return []

        links = list(alternates.items())
        default_iso2 = self.registry.default_iso2()
        if default_iso2 in alternates:
            links.append(("x-default", alternates[default_iso2]))
        return links

    def render_links(self, node_id: int) -> str:
        """Render the alternates as ``<link rel="alternate">`` tags."""
        return "".join(
            f'<link rel="alternate" hreflang="{html.escape(lang)}" href="{html.escape(url)}" />\n'
            for lang, url in self.build_alternates(node_id)
        )
