from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .model import DocumentTree, Item, Module

DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100

_SEPARATOR = re.compile(r"::|\.")


def split_path(path: str) -> list[str]:
    """Split ``de::value::Error`` (or ``de.value.Error``) into segments."""

    return [seg.strip() for seg in _SEPARATOR.split(path or "") if seg.strip()]


def _children(tree: DocumentTree, module_id: str) -> Sequence[str]:
    item = tree.index.get(module_id)
    if item is None or not isinstance(item.inner, Module):
        return ()
    return item.inner.items


def resolve_module_path(tree: DocumentTree, path: str) -> str | None:
    """Resolve a module path to its id; the empty path is the crate root."""

    current = tree.root
    for segment in split_path(path):
        for child_id in _children(tree, current):
            child = tree.index.get(child_id)
            if (
                child is not None
                and child.name == segment
                and isinstance(child.inner, Module)
            ):
                current = child_id
                break
        else:
            return None
    return current


def _walk(tree: DocumentTree, module_id: str, segments: list[str]) -> Item | None:
    if not segments:
        return tree.index.get(module_id)

    target = segments[0]
    for child_id in _children(tree, module_id):
        child = tree.index.get(child_id)
        if child is None or child.name != target:
            continue
        if len(segments) == 1:
            return child
        if isinstance(child.inner, Module):
            found = _walk(tree, child_id, segments[1:])
            if found is not None:
                return found
    return None


def resolve_item_path(tree: DocumentTree, path: str) -> Item | None:
    """Resolve an item path such as ``de::from_str`` or ``Serialize``.

    Walks the module tree first. Items re-exported away from where they are
    defined are not reachable that way, so on a miss every local item named
    like the last segment is checked against its recorded path.
    """

    segments = split_path(path)
    found = _walk(tree, tree.root, segments)
    if found is not None:
        return found
    if not segments:
        return None

    target = segments[-1]
    wanted = tuple(segments)
    for item in tree.index.values():
        if not item.is_local or item.name != target:
            continue
        if len(segments) == 1:
            return item
        summary = tree.paths.get(item.id)
        if summary is not None and summary.path[-len(wanted) :] == wanted:
            return item
    return None


@dataclass(frozen=True)
class SearchHits:
    total: int
    matches: list[tuple[str, Item]]


def search_items(
    tree: DocumentTree, query: str, limit: int = DEFAULT_SEARCH_LIMIT
) -> SearchHits:
    """Case-insensitive name search over the crate's own items.

    Ranked exact match first, then prefix, then substring, then by name.
    A negative limit means the default; limits above the cap are clamped.
    """

    needle = query.lower()
    if limit < 0:
        limit = DEFAULT_SEARCH_LIMIT
    limit = min(limit, MAX_SEARCH_LIMIT)

    hits = [
        (item_id, item)
        for item_id, item in tree.index.items()
        if item.is_local and item.name is not None and needle in item.name.lower()
    ]

    def rank(hit: tuple[str, Item]) -> tuple[int, str]:
        name = (hit[1].name or "").lower()
        if name == needle:
            return 0, name
        if name.startswith(needle):
            return 1, name
        return 2, name

    hits.sort(key=rank)
    return SearchHits(total=len(hits), matches=hits[:limit])
