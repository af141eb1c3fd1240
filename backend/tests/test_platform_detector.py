"""Tests for URL to platform detection."""

import pytest

from app.models.content import Platform
from app.services.platform_detector import detect_platform


@pytest.mark.unit
class TestDetectPlatform:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.instagram.com/p/Cx7yZ1qLk9W/",
            "https://instagram.com/reel/Cx7yZ1qLk9W/?igsh=abc",
            "https://instagr.am/p/Cx7yZ1qLk9W/",
        ],
    )
    def test_instagram(self, url: str):
        assert detect_platform(url) == Platform.INSTAGRAM

    @pytest.mark.parametrize(
        "url",
        [
            "https://twitter.com/dev/status/1234567890",
            "https://x.com/dev/status/1234567890",
            "https://mobile.twitter.com/dev/status/1",
        ],
    )
    def test_twitter(self, url: str):
        assert detect_platform(url) == Platform.TWITTER

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://m.youtube.com/shorts/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
        ],
    )
    def test_youtube(self, url: str):
        assert detect_platform(url) == Platform.YOUTUBE

    @pytest.mark.parametrize(
        "url",
        [
            "https://blog.example.com/how-to-bake-bread",
            "https://www.netflix.com/title/81234567",
            "https://notinstagram.com/p/abc",
            "not a url",
            "",
        ],
    )
    def test_everything_else_is_article(self, url: str):
        assert detect_platform(url) == Platform.ARTICLE

    def test_unparseable_url_is_article(self):
        assert detect_platform("http://[::1/broken") == Platform.ARTICLE

    def test_host_matching_is_case_insensitive(self):
        assert detect_platform("https://WWW.YouTube.COM/watch?v=dQw4w9WgXcQ") == Platform.YOUTUBE
