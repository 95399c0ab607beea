from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from .model import DocumentTree

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, crate: str, version: str) -> DocumentTree: ...


@dataclass
class CacheEntry:
    tree: DocumentTree
    fetched_at: float
    last_accessed: float


class DocsCache:
    """In-memory cache of parsed rustdoc trees keyed by (crate, version).

    Entries expire ``ttl_s`` seconds after they were fetched. When full, the
    entry with the oldest access time is evicted to make room. One lock
    guards the map; it is not held while fetching, so two threads missing on
    the same key may both fetch and the later insert wins.
    """

    def __init__(
        self,
        max_entries: int = 10,
        ttl_s: float = 3600,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: dict[tuple[str, str], CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.fetched_at > self.ttl_s

    def get(self, crate: str, version: str) -> DocumentTree | None:
        key = (crate, version)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            if self._expired(entry, now):
                del self._entries[key]
                logger.debug("cache expired: %s %s", crate, version)
                return None
            entry.last_accessed = now
            return entry.tree

    def insert(self, crate: str, version: str, tree: DocumentTree) -> None:
        key = (crate, version)
        with self._lock:
            now = self._clock()
            for stale in [k for k, v in self._entries.items() if self._expired(v, now)]:
                del self._entries[stale]

            if len(self._entries) >= self.max_entries and key not in self._entries:
                lru_key = min(
                    self._entries,
                    key=lambda k: self._entries[k].last_accessed,
                    default=None,
                )
                if lru_key is not None:
                    del self._entries[lru_key]
                    logger.debug("cache evicted: %s %s", *lru_key)

            self._entries[key] = CacheEntry(
                tree=tree, fetched_at=now, last_accessed=now
            )

    def get_or_fetch(self, fetcher: Fetcher, crate: str, version: str) -> DocumentTree:
        cached = self.get(crate, version)
        if cached is not None:
            logger.debug("cache hit: %s %s", crate, version)
            return cached

        logger.debug("cache miss: %s %s", crate, version)
        tree = fetcher.fetch(crate, version)
        self.insert(crate, version, tree)
        return tree
