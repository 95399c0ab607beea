from __future__ import annotations

import json
import logging

from .content import decode_body
from .errors import (
    CrateNotFoundError,
    DecompressError,
    DocsUnavailableError,
    FormatMismatchError,
    ParseError,
    TransportError,
)
from .http_client import HttpClient, HttpError
from .model import DocumentTree
from .schema import FORMAT_VERSION, parse_crate, peek_format_version
from .urls import DOCS_RS_BASE_URL, normalize_base_url, rustdoc_json_url

logger = logging.getLogger(__name__)

# Drift beyond this many format revisions is logged at WARNING instead of INFO.
FORMAT_DRIFT_WARN_THRESHOLD = 2


class DocsFetcher:
    """Fetches and parses rustdoc JSON from docs.rs.

    One request per call; every failure is final and raised as a
    :class:`~crate_docs.errors.FetchError` subclass.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        base_url: str = DOCS_RS_BASE_URL,
        expected_format: int = FORMAT_VERSION,
    ) -> None:
        self.http = http
        self.base_url = normalize_base_url(base_url)
        self.expected_format = expected_format

    def fetch(self, crate: str, version: str) -> DocumentTree:
        url = rustdoc_json_url(self.base_url, crate, version)
        try:
            res = self.http.get(url)
        except HttpError as e:
            raise TransportError(
                str(e), crate=crate, version=version, status=None
            ) from e

        if res.status_code == 404:
            raise CrateNotFoundError(crate=crate, version=version)
        if res.status_code == 406:
            raise DocsUnavailableError(crate=crate, version=version)
        if not res.ok:
            raise TransportError(
                f"HTTP {res.status_code} from {res.final_url}",
                crate=crate,
                version=version,
                status=res.status_code,
            )

        try:
            payload, kind = decode_body(res.body)
        except OSError as e:
            raise DecompressError(crate=crate, version=version, cause=e) from e
        logger.debug(
            "fetched %s: %d bytes (%s, content-type %s)",
            url,
            len(payload),
            kind.value,
            res.content_type,
        )
        return self.parse(payload, crate=crate, version=version)

    def parse(self, payload: bytes, *, crate: str, version: str) -> DocumentTree:
        expected = self.expected_format
        try:
            data = json.loads(payload)
        except (ValueError, RecursionError) as e:
            raise ParseError(crate=crate, version=version, cause=e) from e

        # Only the version field is probed; the probe itself never fails.
        actual = peek_format_version(data)
        try:
            tree = parse_crate(data)
        except (ValueError, RecursionError) as e:
            if actual is not None and actual != expected:
                raise FormatMismatchError(
                    crate=crate,
                    version=version,
                    expected=expected,
                    actual=actual,
                    cause=e,
                ) from e
            raise ParseError(crate=crate, version=version, cause=e) from e

        if actual is not None and actual != expected:
            drift = abs(actual - expected)
            level = logging.INFO
            label = "close"
            if drift > FORMAT_DRIFT_WARN_THRESHOLD:
                level = logging.WARNING
                label = "far"
            logger.log(
                level,
                "rustdoc JSON format version mismatch (%s) for %s %s: "
                "docs.rs serves v%d, we support v%d",
                label,
                crate,
                version,
                actual,
                expected,
            )
        return tree
