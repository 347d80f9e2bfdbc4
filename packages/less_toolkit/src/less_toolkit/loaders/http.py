"""HTTP(S) backend for remotely hosted stylesheets."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import httpx

from less_toolkit.errors import ResourceAccessError, ResourceNotFoundError
from less_toolkit.loaders.base import candidates, decode_content, ensure_charset, url_scheme

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # seconds
HTTP_SCHEMES = ("http", "https")

# Status codes meaning "nothing here" rather than "could not reach it"
_MISSING_STATUSES = frozenset({404, 410})
# Servers that reject HEAD are probed with GET instead
_HEAD_UNSUPPORTED_STATUSES = frozenset({405, 501})


def _http_candidates(resource: str, paths: Sequence[str]) -> list[str]:
    return [url for url in candidates(resource, paths) if url_scheme(url) in HTTP_SCHEMES]


class HTTPResourceLoader:
    """Fetch stylesheets over HTTP(S) with httpx.

    An injected ``client`` is reused for every request. Without one, a
    short-lived client is opened per call so the loader holds no connection
    state between compiles.
    """

    def __init__(
        self, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None
    ) -> None:
        self.timeout = timeout
        self._client = client

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        """Probe each candidate URL with HEAD until one answers successfully."""
        urls = _http_candidates(resource, paths)
        if not urls:
            return False
        with self._session() as client:
            return any(self._probe(client, url) for url in urls)

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        """GET the first candidate URL that serves the resource."""
        ensure_charset(charset)
        urls = _http_candidates(resource, paths)
        if urls:
            with self._session() as client:
                for url in urls:
                    response = self._send(client, "GET", url)
                    if self._is_available(url, response):
                        logger.debug("Fetched '%s' from %s", resource, url)
                        return decode_content(url, response.content, charset)
        raise ResourceNotFoundError(resource, paths, include_stack)

    @contextmanager
    def _session(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            yield client

    def _probe(self, client: httpx.Client, url: str) -> bool:
        response = self._send(client, "HEAD", url)
        if response.status_code in _HEAD_UNSUPPORTED_STATUSES:
            response = self._send(client, "GET", url)
        return self._is_available(url, response)

    def _send(self, client: httpx.Client, method: str, url: str) -> httpx.Response:
        try:
            return client.request(method, url, timeout=self.timeout, follow_redirects=True)
        except httpx.TimeoutException as exc:
            msg = f"{method} timed out after {self.timeout}s"
            raise ResourceAccessError(url, msg) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ResourceAccessError(url, str(exc)) from exc

    @staticmethod
    def _is_available(url: str, response: httpx.Response) -> bool:
        if response.is_success:
            return True
        if response.status_code in _MISSING_STATUSES:
            return False
        msg = f"HTTP {response.status_code} {response.reason_phrase}".strip()
        raise ResourceAccessError(url, msg)
