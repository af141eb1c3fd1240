"""
LLM classification providers.

Each provider wraps one LangChain chat model created with
``init_chat_model``. The model is built on first use and reused for the
life of the process. ``attempt_classify`` is the strategy interface used by
the engine: it returns a result or ``None`` and never raises, so every kind
of failure (missing key, SDK error, timeout, bad JSON) simply moves the
engine on to the next provider.
"""

import asyncio
import logging
from typing import Any

from langchain.chat_models import init_chat_model
from langchain_core.messages import HumanMessage, SystemMessage

from app.config import Settings, get_settings
from app.models.content import ClassificationResult
from app.services.classification.parsing import (
    ClassificationProviderError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    parse_provider_response,
)
from app.services.classification.vocabulary import CATEGORIES, UNCATEGORIZED


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = f"""You are a content classifier for a bookmarking app. Given social media content \
(caption, title, URL), respond ONLY with a valid JSON object, no markdown and no code fences:
{{
  "title": "4-10 word descriptive title based on the actual content",
  "category": "exactly one of: {', '.join((*CATEGORIES, UNCATEGORIZED))}",
  "tags": ["tag1", "tag2", "tag3"],
  "summary": "1-2 neutral sentences summarizing the content"
}}

Rules:
- The title MUST describe what the content is about using keywords from the caption. Never start it \
with a platform or format word ("Instagram", "Reel", "Post", "Tweet", "Video") and never write clickbait.
- The category MUST be exactly one value from the list above.
- Tags MUST be 3-6 lowercase keywords. Prefer hashtags that appear in the caption. Never use generic \
engagement words such as viral, trending, fyp, foryou, explorepage, follow, like, share, reels, instagood, love.
- The summary MUST include important words from the caption so the user can search for it later.
- If the caption is empty, infer meaning from the URL or author name."""


def build_user_message(text: str, context: dict[str, Any], max_chars: int) -> str:
    return f"Platform: {context.get('platform') or 'web'}\nContent: {text[:max_chars]}"


def message_text(content: Any) -> str:
    """Flatten a chat message's content (plain string or list of content blocks) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        return "".join(parts)
    return ""


class ClassificationProvider:
    """
    Base class for LLM-backed classification strategies.

    Subclasses set ``name`` and ``model_provider`` and implement
    ``_model_kwargs``.
    """

    name: str = "provider"
    model_provider: str = ""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        temperature: float = 0.3,
        max_output_tokens: int = 200,
        timeout: float = 15.0,
        max_input_chars: int = 1000,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout
        self.max_input_chars = max_input_chars
        self._chat_model: Any = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _model_kwargs(self) -> dict[str, Any]:
        raise NotImplementedError

    def _get_chat_model(self) -> Any:
        if not self.is_configured:
            raise ProviderNotConfiguredError(f"{self.name} API key not configured")

        if self._chat_model is None:
            logger.info(f"Initializing classification model: {self.model_provider}:{self.model}")
            self._chat_model = init_chat_model(
                self.model,
                model_provider=self.model_provider,
                temperature=self.temperature,
                **self._model_kwargs(),
            )
        return self._chat_model

    async def classify(self, text: str, context: dict[str, Any]) -> ClassificationResult:
        """
        Ask the model to classify ``text``.

        Raises:
            ClassificationProviderError: Not configured, or an unusable reply.
            TimeoutError: The call exceeded ``timeout``.
        """
        chat_model = self._get_chat_model()
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=build_user_message(text, context, self.max_input_chars)),
        ]

        response = await asyncio.wait_for(chat_model.ainvoke(messages), timeout=self.timeout)
        raw = message_text(getattr(response, "content", ""))
        return parse_provider_response(raw, provider=self.name)

    async def attempt_classify(self, text: str, context: dict[str, Any]) -> ClassificationResult | None:
        """Classify, converting every failure into ``None``."""
        try:
            result = await self.classify(text, context)
        except ProviderNotConfiguredError:
            logger.debug(f"{self.name} not configured, skipping")
            return None
        except ProviderResponseError as e:
            logger.warning(f"{self.name} response unusable: {e}")
            return None
        except ClassificationProviderError as e:
            logger.warning(f"{self.name} failed: {e}")
            return None
        except TimeoutError:
            logger.warning(f"{self.name} timed out after {self.timeout}s")
            return None
        except Exception as e:
            # SDK and transport errors from the provider client
            logger.warning(f"{self.name} call failed: {type(e).__name__}: {str(e)[:120]}")
            return None

        logger.info(f"{self.name} model '{self.model}' classified content as {result.category}")
        return result


class GeminiProvider(ClassificationProvider):
    """Google Gemini through ``langchain-google-genai``."""

    name = "gemini"
    model_provider = "google_genai"

    def _model_kwargs(self) -> dict[str, Any]:
        return {"google_api_key": self.api_key, "max_output_tokens": self.max_output_tokens}


class CohereProvider(ClassificationProvider):
    """Cohere chat models through ``langchain-cohere``."""

    name = "cohere"
    model_provider = "cohere"

    def _model_kwargs(self) -> dict[str, Any]:
        return {"cohere_api_key": self.api_key, "max_tokens": self.max_output_tokens}


def create_classification_providers(settings: Settings | None = None) -> list[ClassificationProvider]:
    """Build the provider chain in priority order: Gemini, then Cohere."""
    settings = settings or get_settings()
    common = {
        "temperature": settings.ai_temperature,
        "max_output_tokens": settings.ai_max_output_tokens,
        "timeout": settings.ai_request_timeout_seconds,
        "max_input_chars": settings.ai_max_input_chars,
    }
    return [
        GeminiProvider(api_key=settings.gemini_api_key, model=settings.gemini_model, **common),
        CohereProvider(api_key=settings.cohere_api_key, model=settings.cohere_model, **common),
    ]
