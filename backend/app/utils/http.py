"""
Outbound HTTP helpers for the extraction pipeline.

``HttpClient`` wraps ``requests`` with the timeout, redirect and size limits
from settings and runs each blocking call in a worker thread so the event
loop keeps serving webhooks while a page downloads. Bodies are streamed
against a wall-clock deadline, since ``requests`` only bounds each socket
read. Every failure (connection error, timeout, too many redirects, oversize
body, non-2xx status, undecodable JSON) surfaces as ``FetchError`` so callers
only need one ``except`` per strategy.
"""

import asyncio
import json
import logging
from time import monotonic
from typing import Any

import requests

from app.config import Settings, get_settings


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_MAX_RESPONSE_BYTES = 2 * 1024 * 1024
CHUNK_SIZE = 16 * 1024


class ExtractionError(Exception):
    """Base exception for extraction failures that trigger the next fallback."""


class FetchError(ExtractionError):
    """An outbound request failed or returned an unusable response."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Fetching {url} failed: {reason}")


class HttpClient:
    """
    Small async facade over ``requests``.

    ``timeout`` is a total deadline for one fetch, covering connect,
    redirects and the body download.

    Example:
        >>> client = HttpClient()
        >>> html = await client.get_text("https://example.com")
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_redirects: int = 5,
        max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
    ) -> None:
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.max_response_bytes = max_response_bytes

    def _read_body(self, url: str, response: requests.Response, deadline: float) -> bytes:
        declared = response.headers.get("Content-Length")
        if declared and declared.isdigit() and int(declared) > self.max_response_bytes:
            raise FetchError(url, f"body larger than {self.max_response_bytes} bytes")

        body = bytearray()
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if monotonic() > deadline:
                raise FetchError(url, f"timed out after {self.timeout}s")
            body.extend(chunk)
            if len(body) > self.max_response_bytes:
                raise FetchError(url, f"body larger than {self.max_response_bytes} bytes")
        return bytes(body)

    def _get(self, url: str, params: dict[str, Any] | None, headers: dict[str, str]) -> str:
        deadline = monotonic() + self.timeout
        with requests.Session() as session:
            session.max_redirects = self.max_redirects
            try:
                response = session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=self.timeout,
                    allow_redirects=True,
                    stream=True,
                )
                try:
                    response.raise_for_status()
                    body = self._read_body(url, response, deadline)
                finally:
                    response.close()
            except requests.exceptions.Timeout as e:
                raise FetchError(url, f"timed out after {self.timeout}s") from e
            except requests.exceptions.TooManyRedirects as e:
                raise FetchError(url, f"more than {self.max_redirects} redirects") from e
            except requests.exceptions.RequestException as e:
                raise FetchError(url, str(e)) from e

        try:
            return body.decode(response.encoding or "utf-8", errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    async def get_text(self, url: str, headers: dict[str, str] | None = None) -> str:
        """GET ``url`` and return the decoded body."""
        return await asyncio.to_thread(
            self._get, url, None, headers or {"User-Agent": DEFAULT_USER_AGENT}
        )

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET ``url`` and decode a JSON object body."""
        text = await asyncio.to_thread(
            self._get, url, params, headers or {"User-Agent": DEFAULT_USER_AGENT}
        )
        try:
            data = json.loads(text)
        except ValueError as e:
            raise FetchError(url, "response is not valid JSON") from e
        if not isinstance(data, dict):
            raise FetchError(url, "expected a JSON object")
        return data


def create_http_client(settings: Settings | None = None) -> HttpClient:
    """Build an ``HttpClient`` using the scrape limits from settings."""
    settings = settings or get_settings()
    return HttpClient(
        timeout=settings.scrape_timeout_seconds,
        max_redirects=settings.scrape_max_redirects,
        max_response_bytes=settings.scrape_max_response_bytes,
    )
