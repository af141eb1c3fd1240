"""
Direct media-URL resolution.

``MediaResolver`` is the capability the Instagram extractor depends on:
``resolve(url)`` returns a direct playable URL or ``None``. The production
implementation asks yt-dlp for the metadata of the best mp4 format without
downloading anything; a private post, an extractor error and a timeout all
come back as ``None`` because the caller has nothing else to try in any of
those cases.
"""

import asyncio
import logging
from typing import Any

import yt_dlp

from app.config import Settings, get_settings


logger = logging.getLogger(__name__)

MP4_FORMAT_SELECTOR = "best[ext=mp4]/best"


class _YtDlpLogger:
    """Routes yt-dlp's own output into this module's logger at debug level."""

    def debug(self, msg: str) -> None:
        logger.debug(f"yt-dlp: {msg}")

    def info(self, msg: str) -> None:
        logger.debug(f"yt-dlp: {msg}")

    def warning(self, msg: str) -> None:
        logger.debug(f"yt-dlp: {msg}")

    def error(self, msg: str) -> None:
        logger.debug(f"yt-dlp: {msg}")


class MediaResolver:
    """Resolves a post URL to a direct media URL."""

    name: str = "none"

    async def resolve(self, url: str) -> str | None:
        raise NotImplementedError


class NullMediaResolver(MediaResolver):
    """Resolver used when media resolution is disabled."""

    async def resolve(self, url: str) -> str | None:
        return None


def media_url_from_info(info: dict[str, Any] | None) -> str | None:
    """Direct URL of the selected format in a yt-dlp info dict."""
    if not info:
        return None
    entries = info.get("entries")
    if entries:
        return media_url_from_info(next((e for e in entries if e), None))
    if info.get("url"):
        return info["url"]
    for requested in info.get("requested_formats") or []:
        if requested.get("url"):
            return requested["url"]
    return None


class YtDlpMediaResolver(MediaResolver):
    """
    Resolves media URLs in-process with the yt-dlp library.

    ``extract_info`` blocks, so it runs in a worker thread bounded by
    ``timeout``. A call that overruns is abandoned, not interrupted; the
    socket timeout keeps the leftover thread from hanging on the network.
    """

    name = "yt-dlp"

    def __init__(self, timeout: float = 30.0, socket_timeout: float = 15.0) -> None:
        self.timeout = timeout
        self.socket_timeout = min(socket_timeout, timeout)

    def _options(self) -> dict[str, Any]:
        return {
            "format": MP4_FORMAT_SELECTOR,
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
            "socket_timeout": self.socket_timeout,
            "logger": _YtDlpLogger(),
        }

    def _extract(self, url: str) -> str | None:
        with yt_dlp.YoutubeDL(self._options()) as ydl:
            info = ydl.extract_info(url, download=False)
        return media_url_from_info(info)

    async def resolve(self, url: str) -> str | None:
        try:
            return await asyncio.wait_for(asyncio.to_thread(self._extract, url), timeout=self.timeout)
        except TimeoutError:
            logger.warning(f"Media resolver timed out after {self.timeout}s for {url}")
        except yt_dlp.utils.DownloadError as e:
            logger.info(f"Media resolver found no media for {url}: {e}")
        return None


def create_media_resolver(settings: Settings | None = None) -> MediaResolver:
    """Build the configured media resolver."""
    settings = settings or get_settings()
    if not settings.enable_media_resolver:
        return NullMediaResolver()
    return YtDlpMediaResolver(timeout=settings.media_resolver_timeout_seconds)
