"""crate-docs core library.

This package fetches rustdoc JSON for a crate from docs.rs, keeps parsed
documentation trees in a bounded in-memory cache, and renders modules, items,
search hits and type signatures as plain markdown text.

Layout:
- http_client / content / urls: transport and payload normalization.
- model / schema: the documentation tree and its JSON reader.
- fetcher / cache: acquisition and the TTL + LRU cache.
- resolve / signatures / render: navigation and text rendering.
- service / cli: the query operations and their command-line front end.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
