"""HTTP fetch for URL image sources, with retry on transient failures."""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from iconcache.config.defaults import DEFAULT_FETCH_RETRIES, DEFAULT_FETCH_TIMEOUT
from iconcache.errors.exceptions import UnreadableSource

logger = logging.getLogger(__name__)

# Network hiccups worth another attempt
_TRANSIENT_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.ReadError,
    httpx.RemoteProtocolError,
    httpx.TimeoutException,
)

_TRANSIENT_STATUS = {429, 500, 502, 503, 504}


class TransientHTTPStatus(Exception):
    """Server answered with a status that may succeed on retry."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class UrlFetcher:
    """Downloads image bytes over HTTP GET."""

    def __init__(
        self,
        timeout: float | None = DEFAULT_FETCH_TIMEOUT,
        max_attempts: int = DEFAULT_FETCH_RETRIES,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(timeout=timeout, follow_redirects=True, transport=transport)
        self._max_attempts = max_attempts

    def fetch(self, url: str) -> bytes:
        """Return the body of ``url``; raises UnreadableSource on any failure."""
        attempt = retry(
            retry=retry_if_exception_type((*_TRANSIENT_EXCEPTIONS, TransientHTTPStatus)),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            stop=stop_after_attempt(self._max_attempts),
            reraise=True,
        )(self._get)
        try:
            return attempt(url)
        except (TransientHTTPStatus, httpx.HTTPError, httpx.InvalidURL) as e:
            raise UnreadableSource(
                f"Error reading image from {url}: {e}", source=url, original=e
            ) from e

    def _get(self, url: str) -> bytes:
        response = self._client.get(url)
        if response.status_code in _TRANSIENT_STATUS:
            logger.warning("Transient HTTP %d fetching %s", response.status_code, url)
            raise TransientHTTPStatus(response.status_code)
        response.raise_for_status()
        return response.content

    def close(self) -> None:
        self._client.close()
