"""
Content classification: LLM provider chain with a deterministic keyword fallback.
"""

from app.services.classification.engine import (
    EMPTY_CONTENT_SUMMARY,
    ClassificationEngine,
    build_analysis_text,
    create_classification_engine,
)
from app.services.classification.keyword_fallback import keyword_classify
from app.services.classification.parsing import (
    ClassificationProviderError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    parse_provider_response,
)
from app.services.classification.providers import (
    ClassificationProvider,
    CohereProvider,
    GeminiProvider,
    create_classification_providers,
)
from app.services.classification.vocabulary import (
    CATEGORIES,
    NOISE_TAGS,
    UNCATEGORIZED,
    is_known_category,
)


__all__ = [
    "CATEGORIES",
    "EMPTY_CONTENT_SUMMARY",
    "NOISE_TAGS",
    "UNCATEGORIZED",
    "ClassificationEngine",
    "ClassificationProvider",
    "ClassificationProviderError",
    "CohereProvider",
    "GeminiProvider",
    "ProviderNotConfiguredError",
    "ProviderResponseError",
    "build_analysis_text",
    "create_classification_engine",
    "create_classification_providers",
    "is_known_category",
    "keyword_classify",
    "parse_provider_response",
]
