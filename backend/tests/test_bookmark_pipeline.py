"""Tests for the one-URL bookmark pipeline and its WhatsApp text helpers."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models.bookmark import BookmarkDraft
from app.models.content import ClassificationResult, ExtractedContent, Platform
from app.services.bookmark_pipeline import (
    GUIDANCE_MESSAGE,
    BookmarkPipeline,
    InvalidSubmissionError,
    build_reply_message,
    create_bookmark_pipeline,
    find_url,
    validate_submission_url,
)
from app.services.classification import ClassificationEngine
from app.services.extractors import ContentExtractionService


ARTICLE_URL = "https://blog.example.com/how-to-bake-bread"
REEL_URL = "https://www.instagram.com/reel/Cx7yZ1qLk9WabcdEFG2/"


@pytest.mark.unit
class TestFindUrl:
    def test_first_url_in_message(self):
        text = "look at this https://x.com/dev/status/1 and https://example.com"
        assert find_url(text) == "https://x.com/dev/status/1"

    def test_case_insensitive_scheme(self):
        assert find_url("HTTPS://EXAMPLE.COM/Page") == "HTTPS://EXAMPLE.COM/Page"

    @pytest.mark.parametrize("text", ["", None, "hello there", "www.example.com without scheme"])
    def test_no_url(self, text):
        assert find_url(text) is None

    def test_guidance_mentions_links(self):
        assert "link" in GUIDANCE_MESSAGE.lower()


@pytest.mark.unit
class TestValidateSubmissionUrl:
    def test_valid_url_is_stripped(self):
        assert validate_submission_url("  https://example.com/a  ") == "https://example.com/a"

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_missing(self, url):
        with pytest.raises(InvalidSubmissionError, match="URL is required"):
            validate_submission_url(url)

    @pytest.mark.parametrize("url", ["ftp://example.com/file", "example.com/page", "https:///only-path", "http://[::1/x", "http://)", "https://exa mple.com"])
    def test_invalid(self, url: str):
        with pytest.raises(InvalidSubmissionError):
            validate_submission_url(url)

    @pytest.mark.parametrize("url", ["http://localhost:3000/x", "http://127.0.0.1/", "http://[::1]/", "https://my_site.example.co.uk/a?b=c"])
    def test_unusual_valid_hosts(self, url: str):
        assert validate_submission_url(url) == url


@pytest.mark.unit
class TestBuildReplyMessage:
    def test_contents(self):
        draft = BookmarkDraft(
            url=REEL_URL,
            platform=Platform.INSTAGRAM,
            title="Creamy Garlic Pasta",
            summary="A quick pasta recipe.",
            category="Cooking",
            tags=["pasta", "recipe"],
        )

        message = build_reply_message(draft, "https://saver.example.com")

        assert message.startswith("📸")
        assert "*Cooking*" in message
        assert "Creamy Garlic Pasta" in message
        assert "A quick pasta recipe." in message
        assert "pasta, recipe" in message
        assert message.endswith("https://saver.example.com")

    def test_no_tags(self):
        draft = BookmarkDraft(url=ARTICLE_URL, title="T", category="Uncategorized")

        message = build_reply_message(draft, "http://localhost:3000")

        assert message.startswith("📄")
        assert "Tags: none" in message


class TestBookmarkPipeline:
    @pytest.fixture
    def extraction(self) -> MagicMock:
        extraction = MagicMock(spec=ContentExtractionService)
        extraction.extract = AsyncMock()
        return extraction

    @pytest.fixture
    def pipeline(self, extraction: MagicMock) -> BookmarkPipeline:
        return BookmarkPipeline(extraction, ClassificationEngine(providers=[]))

    async def test_degraded_article(self, pipeline: BookmarkPipeline, extraction: MagicMock):
        extraction.extract.return_value = ExtractedContent(
            platform=Platform.ARTICLE, title="How To Bake Bread", caption="Saved from the web"
        )

        draft = await pipeline.process_url(ARTICLE_URL)

        extraction.extract.assert_awaited_once_with(ARTICLE_URL)
        assert draft.url == ARTICLE_URL
        assert draft.platform == "article"
        assert draft.title == "How To Bake Bread"
        assert draft.caption == "Saved from the web"
        assert draft.category == "Cooking"
        assert "bake" in draft.tags
        assert draft.embed_url == ARTICLE_URL
        assert draft.raw_data == {}

    async def test_reel_has_no_embed_url(self, pipeline: BookmarkPipeline, extraction: MagicMock):
        extraction.extract.return_value = ExtractedContent(
            platform=Platform.INSTAGRAM,
            title="chefmaria's Reel",
            caption="Cx7yZ1qLk9WabcdEFG2",
            author="chefmaria",
            embed_url=None,
        )

        draft = await pipeline.process_url(REEL_URL)

        assert draft.platform == "instagram"
        assert draft.embed_url == ""
        assert draft.author == "chefmaria"

    async def test_post_keeps_extractor_embed_url(self, pipeline: BookmarkPipeline, extraction: MagicMock):
        extraction.extract.return_value = ExtractedContent(
            platform=Platform.INSTAGRAM,
            title="Desk setup tour",
            caption="Desk setup tour",
            embed_url="https://www.instagram.com/p/abc/embed",
        )

        draft = await pipeline.process_url("https://www.instagram.com/p/abc/")

        assert draft.embed_url == "https://www.instagram.com/p/abc/embed"

    async def test_category_forced_into_vocabulary(self, extraction: MagicMock):
        extraction.extract.return_value = ExtractedContent(title="Horoscope for March", caption="Stars")
        classification = MagicMock(spec=ClassificationEngine)
        classification.classify = AsyncMock(
            return_value=ClassificationResult(
                title="March Horoscope", category="Astrology", tags=["stars"], summary="Stars.", provider="gemini"
            )
        )

        draft = await BookmarkPipeline(extraction, classification).process_url("https://example.com/horoscope")

        assert draft.category == "Uncategorized"
        assert draft.tags == ["stars"]
        assert draft.summary == "Stars."
        classification.classify.assert_awaited_once_with(
            title="Horoscope for March",
            caption="Stars",
            platform="article",
            author="",
            url="https://example.com/horoscope",
        )

    async def test_invalid_url_never_extracted(self, pipeline: BookmarkPipeline, extraction: MagicMock):
        with pytest.raises(InvalidSubmissionError):
            await pipeline.process_url("notaurl")

        extraction.extract.assert_not_awaited()

    def test_factory(self, test_settings):
        pipeline = create_bookmark_pipeline(test_settings)

        assert isinstance(pipeline.extraction, ContentExtractionService)
        assert isinstance(pipeline.classification, ClassificationEngine)
