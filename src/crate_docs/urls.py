from __future__ import annotations

from urllib.parse import ParseResult, quote, urlparse, urlunparse

DOCS_RS_BASE_URL = "https://docs.rs"
LATEST_VERSION = "latest"


def normalize_base_url(raw_url: str) -> str:
    """Normalize a service base URL.

    - Lowercases scheme + hostname.
    - Strips query, fragment and trailing slashes.
    """

    parsed: ParseResult = urlparse(raw_url.strip())
    scheme = (parsed.scheme or "").lower()
    netloc = (parsed.netloc or "").lower()

    parsed = parsed._replace(
        scheme=scheme,
        netloc=netloc,
        path=parsed.path.rstrip("/"),
        params="",
        query="",
        fragment="",
    )
    return urlunparse(parsed)


def rustdoc_json_url(base_url: str, crate: str, version: str) -> str:
    version = version.strip() or LATEST_VERSION
    return "/".join(
        [
            normalize_base_url(base_url),
            "crate",
            quote(crate.strip(), safe=""),
            quote(version, safe=""),
            "json.gz",
        ]
    )
