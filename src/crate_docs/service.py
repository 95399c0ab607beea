from __future__ import annotations

from dataclasses import dataclass

import requests

from .cache import DocsCache, Fetcher
from .errors import ItemNotFoundError
from .fetcher import DocsFetcher
from .http_client import DEFAULT_USER_AGENT, HttpClient
from .model import DocumentTree
from .render import format_item_detail, format_module_listing, format_search_results
from .resolve import (
    DEFAULT_SEARCH_LIMIT,
    resolve_item_path,
    resolve_module_path,
    search_items,
)
from .urls import DOCS_RS_BASE_URL, LATEST_VERSION


@dataclass
class DocsConfig:
    base_url: str = DOCS_RS_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_s: float = 45
    cache_max_entries: int = 10
    cache_ttl_s: float = 3600
    search_limit: int = DEFAULT_SEARCH_LIMIT


class DocsService:
    """The three documentation queries: browse a module, show an item, search.

    Fetch failures propagate as :class:`~crate_docs.errors.FetchError`;
    unresolvable paths raise :class:`~crate_docs.errors.ItemNotFoundError`.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        cache: DocsCache,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.search_limit = search_limit

    @classmethod
    def from_config(
        cls,
        config: DocsConfig,
        *,
        session: requests.Session | None = None,
    ) -> DocsService:
        http = HttpClient(
            session or requests.Session(),
            timeout_s=config.timeout_s,
            user_agent=config.user_agent,
        )
        return cls(
            fetcher=DocsFetcher(http, base_url=config.base_url),
            cache=DocsCache(config.cache_max_entries, config.cache_ttl_s),
            search_limit=config.search_limit,
        )

    def tree(self, crate: str, version: str = LATEST_VERSION) -> DocumentTree:
        return self.cache.get_or_fetch(self.fetcher, crate, version)

    def crate_docs(
        self,
        crate: str,
        version: str = LATEST_VERSION,
        module_path: str | None = None,
    ) -> str:
        tree = self.tree(crate, version)
        module_id = tree.root
        if module_path:
            found = resolve_module_path(tree, module_path)
            if found is None:
                raise ItemNotFoundError(
                    f"Module '{module_path}' not found in {crate} v{version}"
                )
            module_id = found
        return format_module_listing(tree, module_id)

    def doc_item(
        self,
        crate: str,
        item_path: str,
        version: str = LATEST_VERSION,
    ) -> str:
        tree = self.tree(crate, version)
        item = resolve_item_path(tree, item_path)
        if item is None:
            raise ItemNotFoundError(
                f"Item '{item_path}' not found in {crate} v{version}"
            )
        return format_item_detail(tree, item)

    def search_docs(
        self,
        crate: str,
        query: str,
        version: str = LATEST_VERSION,
        limit: int | None = None,
    ) -> str:
        tree = self.tree(crate, version)
        hits = search_items(
            tree, query, self.search_limit if limit is None else limit
        )
        if not hits.total:
            return f"No items matching '{query}' found in {crate} v{version}."

        header = (
            f"Found {hits.total} items matching '{query}' in {crate} v{version} "
            f"(showing {len(hits.matches)}):\n\n"
        )
        return header + format_search_results(tree, hits.matches)
