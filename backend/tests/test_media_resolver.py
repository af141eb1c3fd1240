"""Tests for yt-dlp based direct media URL resolution (YoutubeDL mocked)."""

import threading

from unittest.mock import MagicMock, patch

import pytest
import yt_dlp

from app.services.media_resolver import (
    MP4_FORMAT_SELECTOR,
    NullMediaResolver,
    YtDlpMediaResolver,
    create_media_resolver,
    media_url_from_info,
)


REEL_URL = "https://www.instagram.com/reel/Cx7yZ1qLk9W/"


@pytest.fixture
def youtube_dl():
    """Patch ``yt_dlp.YoutubeDL`` and hand back (class mock, instance used inside ``with``)."""
    with patch("app.services.media_resolver.yt_dlp.YoutubeDL") as ydl_cls:
        ydl = MagicMock()
        ydl_cls.return_value.__enter__.return_value = ydl
        yield ydl_cls, ydl


class TestYtDlpMediaResolver:
    async def test_resolves_selected_format_url(self, youtube_dl):
        ydl_cls, ydl = youtube_dl
        ydl.extract_info.return_value = {"id": "Cx7yZ1qLk9W", "url": "https://cdn.example.com/v.mp4"}

        resolved = await YtDlpMediaResolver(timeout=30.0).resolve(REEL_URL)

        assert resolved == "https://cdn.example.com/v.mp4"
        ydl.extract_info.assert_called_once_with(REEL_URL, download=False)
        options = ydl_cls.call_args.args[0]
        assert options["format"] == MP4_FORMAT_SELECTOR
        assert options["quiet"] is True
        assert options["socket_timeout"] == 15.0
        assert options["logger"] is not None

    async def test_download_error(self, youtube_dl):
        _, ydl = youtube_dl
        ydl.extract_info.side_effect = yt_dlp.utils.DownloadError("ERROR: login required")

        assert await YtDlpMediaResolver().resolve(REEL_URL) is None

    async def test_no_media_in_info(self, youtube_dl):
        _, ydl = youtube_dl
        ydl.extract_info.return_value = {"id": "Cx7yZ1qLk9W"}

        assert await YtDlpMediaResolver().resolve(REEL_URL) is None

    async def test_timeout(self, youtube_dl):
        _, ydl = youtube_dl
        release = threading.Event()
        ydl.extract_info.side_effect = lambda *args, **kwargs: release.wait(2) and None

        try:
            resolved = await YtDlpMediaResolver(timeout=0.05).resolve(REEL_URL)
        finally:
            release.set()

        assert resolved is None

    def test_socket_timeout_never_exceeds_total(self):
        assert YtDlpMediaResolver(timeout=5.0).socket_timeout == 5.0


@pytest.mark.unit
class TestMediaUrlFromInfo:
    def test_requested_formats(self):
        info = {"requested_formats": [{"url": "https://cdn.example.com/video.mp4"}, {"url": "https://cdn.example.com/a.m4a"}]}

        assert media_url_from_info(info) == "https://cdn.example.com/video.mp4"

    def test_first_playlist_entry(self):
        info = {"entries": [None, {"url": "https://cdn.example.com/1.mp4"}]}

        assert media_url_from_info(info) == "https://cdn.example.com/1.mp4"

    @pytest.mark.parametrize("info", [None, {}, {"entries": []}, {"requested_formats": [{}]}])
    def test_nothing(self, info):
        assert media_url_from_info(info) is None


class TestCreateMediaResolver:
    def test_disabled(self, test_settings):
        assert isinstance(create_media_resolver(test_settings), NullMediaResolver)

    def test_enabled(self, test_settings):
        settings = test_settings.model_copy(
            update={"enable_media_resolver": True, "media_resolver_timeout_seconds": 12.0}
        )

        resolver = create_media_resolver(settings)

        assert isinstance(resolver, YtDlpMediaResolver)
        assert resolver.timeout == 12.0

    async def test_null_resolver(self):
        assert await NullMediaResolver().resolve(REEL_URL) is None
