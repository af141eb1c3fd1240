"""Tests for final title and category resolution."""

import pytest

from app.models.content import ClassificationResult, ExtractedContent, Platform
from app.services.content_normalizer import resolve_category, resolve_title


REEL_URL = "https://www.instagram.com/reel/Cx7yZ1qLk9W/"
POST_URL = "https://www.instagram.com/p/Cx7yZ1qLk9W/"
ARTICLE_URL = "https://blog.example.com/how-to-bake-bread"


def instagram(title: str, author: str = "") -> ExtractedContent:
    return ExtractedContent(platform=Platform.INSTAGRAM, title=title, author=author)


@pytest.mark.unit
class TestResolveTitle:
    def test_reel_prefers_classifier_title(self):
        title = resolve_title(
            instagram("chefmaria's Reel", author="chefmaria"),
            ClassificationResult(title="Creamy Garlic Pasta"),
            REEL_URL,
        )

        assert title == "Creamy Garlic Pasta"

    def test_reel_keeps_extracted_title_without_classifier_title(self):
        title = resolve_title(instagram("chefmaria's Reel", author="chefmaria"), ClassificationResult(), REEL_URL)

        assert title == "chefmaria's Reel"

    def test_generic_reel_title_becomes_author_reel(self):
        title = resolve_title(instagram("Instagram Reel", author="chefmaria"), ClassificationResult(), REEL_URL)

        assert title == "chefmaria's Reel"

    def test_generic_post_without_author_or_classifier_title(self):
        assert resolve_title(instagram("Instagram Post"), ClassificationResult(), POST_URL) == "Untitled"

    def test_generic_post_uses_classifier_title(self):
        title = resolve_title(instagram("Instagram Post"), ClassificationResult(title="Desk Setup Tour"), POST_URL)

        assert title == "Desk Setup Tour"

    def test_real_article_title_kept(self):
        content = ExtractedContent(title="The Bread Book", caption="...")

        title = resolve_title(content, ClassificationResult(title="Bread Baking Guide"), ARTICLE_URL)

        assert title == "The Bread Book"

    def test_placeholder_article_title_replaced(self):
        title = resolve_title(
            ExtractedContent(title="Untitled"), ClassificationResult(title="Bread Baking Guide"), ARTICLE_URL
        )

        assert title == "Bread Baking Guide"

    def test_slug_title_replaced(self):
        title = resolve_title(
            ExtractedContent(title="Cx7yZ1qLk9W"), ClassificationResult(title="Morning Yoga Flow"), ARTICLE_URL
        )

        assert title == "Morning Yoga Flow"

    def test_placeholder_kept_when_nothing_better(self):
        assert resolve_title(ExtractedContent(title="Untitled"), ClassificationResult(), ARTICLE_URL) == "Untitled"

    def test_empty_everything(self):
        assert resolve_title(ExtractedContent(), ClassificationResult(), ARTICLE_URL) == "Untitled"


@pytest.mark.unit
class TestResolveCategory:
    @pytest.mark.parametrize("category", ["Fitness", "Coding", "News", "Productivity"])
    def test_known(self, category: str):
        assert resolve_category(category) == category

    @pytest.mark.parametrize("category", ["Astrology", "fitness", "", None, "Uncategorized"])
    def test_unknown(self, category):
        assert resolve_category(category) == "Uncategorized"
