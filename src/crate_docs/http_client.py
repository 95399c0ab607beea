from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "crate-docs/0.1.0"


class HttpError(Exception):
    """Raised when a request never produced an HTTP response."""


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    headers: dict[str, str]
    fetched_at: float
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str | None:
        for k, v in self.headers.items():
            if k.lower() == "content-type":
                return v
        return None


class HttpClient:
    """Single-attempt GET client over a caller-owned requests session.

    Non-2xx responses are returned, not raised; callers classify them.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 45,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._user_agent = user_agent

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        merged = {"User-Agent": self._user_agent}
        if headers:
            merged.update(headers)

        logger.debug("GET %s", url)
        try:
            resp = self._session.get(url, timeout=self._timeout_s, headers=merged)
        except requests.RequestException as e:
            raise HttpError(f"Failed to fetch {url}: {e}") from e

        return FetchResult(
            url=url,
            final_url=str(resp.url or url),
            status_code=int(resp.status_code),
            headers={k: str(v) for k, v in resp.headers.items()},
            fetched_at=time.time(),
            body=resp.content,
        )

