import gzip

import pytest

from crate_docs.content import ContentKind, decode_body, gunzip, sniff_kind


def test_sniff_kind_trusts_magic_bytes():
    assert sniff_kind(gzip.compress(b"{}")) == ContentKind.GZIP
    assert sniff_kind(b'  {"root": 0}') == ContentKind.JSON
    assert sniff_kind(b"<html></html>") == ContentKind.BYTES
    assert sniff_kind(b"") == ContentKind.BYTES


def test_decode_body_gunzips_only_gzip_payloads():
    raw = b'{"format_version": 56}'
    assert decode_body(gzip.compress(raw)) == (raw, ContentKind.GZIP)
    assert decode_body(raw) == (raw, ContentKind.JSON)


def test_gunzip_raises_oserror_on_truncated_stream():
    data = gzip.compress(b'{"a": 1}' * 100)
    with pytest.raises(OSError):
        gunzip(data[: len(data) // 2])
