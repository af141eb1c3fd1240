"""
Parsing and cleaning of provider responses.
"""

import json
import re
from typing import Any

from app.models.content import ClassificationResult
from app.services.classification.vocabulary import NOISE_TAGS, UNCATEGORIZED


MAX_PROVIDER_TAGS: int = 6

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)


class ClassificationProviderError(Exception):
    """Base exception for a classification provider that could not produce a result."""


class ProviderNotConfiguredError(ClassificationProviderError):
    """The provider has no API key."""


class ProviderResponseError(ClassificationProviderError):
    """The provider answered with something that is not the expected JSON object."""


def strip_code_fences(raw: str) -> str:
    """Remove markdown code-fence wrappers models like to add around JSON."""
    return CODE_FENCE_PATTERN.sub("", raw or "").strip()


def clean_tags(tags: Any, limit: int = MAX_PROVIDER_TAGS) -> list[str]:
    """
    Normalize a provider's tag list.

    Tags are lower-cased and trimmed, a leading ``#`` is dropped, noise
    words and duplicates are removed, and at most ``limit`` are kept.
    Anything that is not a list yields no tags.
    """
    if not isinstance(tags, list):
        return []

    cleaned: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        tag = tag.strip().lstrip("#").strip().lower()
        if not tag or tag in NOISE_TAGS or tag in cleaned:
            continue
        cleaned.append(tag)
    return cleaned[:limit]


def parse_provider_response(raw: str, provider: str) -> ClassificationResult:
    """
    Parse a model reply into a ``ClassificationResult``.

    Raises:
        ProviderResponseError: If the reply is empty, not JSON, or not a JSON object.
    """
    text = strip_code_fences(raw)
    if not text:
        raise ProviderResponseError(f"{provider} returned an empty response")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProviderResponseError(f"{provider} returned invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ProviderResponseError(f"{provider} returned {type(parsed).__name__}, expected object")

    title = parsed.get("title")
    category = parsed.get("category")
    summary = parsed.get("summary")

    return ClassificationResult(
        title=title.strip() if isinstance(title, str) else "",
        category=category.strip() if isinstance(category, str) and category.strip() else UNCATEGORIZED,
        tags=clean_tags(parsed.get("tags")),
        summary=summary.strip() if isinstance(summary, str) else "",
        provider=provider,
    )
