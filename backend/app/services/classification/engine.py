"""
Classification Engine for Social Saver

Turns extracted text into a title, category, tags and summary by walking an
ordered chain of strategies:

1. Gemini (primary LLM)
2. Cohere (secondary LLM)
3. Deterministic keyword fallback

An LLM strategy is skipped when it has no API key and abandoned on any
failure; the keyword fallback always produces a result, so ``classify``
never raises.
"""

import logging

from app.config import Settings, get_settings
from app.models.content import ClassificationResult
from app.services.classification.keyword_fallback import keyword_classify
from app.services.classification.providers import (
    ClassificationProvider,
    create_classification_providers,
)
from app.services.classification.vocabulary import UNCATEGORIZED


logger = logging.getLogger(__name__)

EMPTY_CONTENT_SUMMARY = "No content available to summarize."


def build_analysis_text(caption: str | None, title: str | None, url: str | None) -> str:
    """Join the non-empty parts of caption, title and URL with spaces."""
    return " ".join(part for part in (caption, title, url) if part).strip()


class ClassificationEngine:
    """
    Runs the provider chain and falls back to keyword scoring.

    Example:
        >>> engine = ClassificationEngine(providers=[])
        >>> result = await engine.classify(title="", caption="Sourdough basics", platform="instagram")
    """

    def __init__(self, providers: list[ClassificationProvider] | None = None) -> None:
        self.providers = list(providers or [])
        configured = [p.name for p in self.providers if p.is_configured]
        logger.info(f"ClassificationEngine initialized with providers: {configured + ['keyword']}")

    async def classify(
        self,
        title: str | None = None,
        caption: str | None = None,
        platform: str | None = None,
        author: str | None = None,
        url: str | None = None,
    ) -> ClassificationResult:
        text = build_analysis_text(caption, title, url)
        if not text:
            return ClassificationResult(
                title="",
                category=UNCATEGORIZED,
                tags=[],
                summary=EMPTY_CONTENT_SUMMARY,
                provider="none",
            )

        context = {"platform": platform, "author": author, "url": url}

        for provider in self.providers:
            if not provider.is_configured:
                continue
            result = await provider.attempt_classify(text, context)
            if result is not None:
                return result
            logger.warning(f"Classification provider {provider.name} failed, trying next")

        logger.info("Using keyword-based fallback classification")
        try:
            return keyword_classify(text, platform=platform, url=url)
        except Exception:
            logger.exception("Keyword classification failed")
            return ClassificationResult(category=UNCATEGORIZED, summary=EMPTY_CONTENT_SUMMARY)


def create_classification_engine(settings: Settings | None = None) -> ClassificationEngine:
    """Build an engine with the provider chain configured from settings."""
    settings = settings or get_settings()
    return ClassificationEngine(providers=create_classification_providers(settings))
