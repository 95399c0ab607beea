from __future__ import annotations

import gzip
import zlib
from enum import Enum
from typing import Final

GZIP_MAGIC: Final[bytes] = b"\x1f\x8b"


class ContentKind(str, Enum):
    GZIP = "gzip"
    JSON = "json"
    BYTES = "bytes"


def is_gzip(data: bytes) -> bool:
    return data[:2] == GZIP_MAGIC


def looks_like_json(data: bytes) -> bool:
    head = data[:64].lstrip()
    return head.startswith(b"{") or head.startswith(b"[")


def sniff_kind(body: bytes) -> ContentKind:
    """Classify a payload from its leading bytes.

    Rules:
    - Trust magic bytes, never the declared Content-Type. docs.rs serves
      rustdoc JSON as application/gzip, which requests does not decode since
      it is not a Content-Encoding.
    - Anything else that opens like a JSON document is JSON.
    """

    if is_gzip(body):
        return ContentKind.GZIP
    if looks_like_json(body):
        return ContentKind.JSON
    return ContentKind.BYTES


def gunzip(data: bytes) -> bytes:
    """Decompress a gzip stream. Raises OSError on corrupt input."""

    try:
        return gzip.decompress(data)
    except (EOFError, zlib.error) as e:
        raise OSError(f"invalid gzip stream: {e}") from e


def decode_body(body: bytes) -> tuple[bytes, ContentKind]:
    """Return (payload, original kind), decompressing gzip payloads."""

    kind = sniff_kind(body)
    if kind == ContentKind.GZIP:
        return gunzip(body), kind
    return body, kind
