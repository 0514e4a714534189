import json
import logging
import os
from typing import Any, Optional

import httpx

from llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").strip().lower()


def provider_from_env(name: Optional[str] = None) -> LLMProvider:
    """Build the configured provider. Raises if it cannot be configured (e.g. no API key)."""
    name = (name or LLM_PROVIDER).strip().lower()

    if name == "mock":
        from llm.providers.mock_provider import MockProvider

        return MockProvider()
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider

        return OllamaProvider()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider

        return OpenAIProvider()
    raise RuntimeError(f"Unknown LLM_PROVIDER: {name}")


def parse_json_object(text: Optional[str]) -> Optional[dict[str, Any]]:
    """Parse the single JSON object in a model reply.

    Tolerates prose around the object. An empty reply is an empty dict;
    content that holds no JSON object (invalid JSON, a list, a bare string)
    is None.
    """
    if not text or not text.strip():
        return {}

    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            logger.warning("LLM reply contained no JSON object")
            return None
        try:
            data = json.loads(text[start : end + 1])
        except ValueError:
            logger.warning("LLM reply contained malformed JSON")
            return None

    return data if isinstance(data, dict) else None


def is_quota_error(exc: BaseException) -> bool:
    """Whether the provider refused because of rate limits, quota or billing."""
    if isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 429:
        return True
    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if status == 429:
        return True
    message = str(exc).lower()
    return "quota" in message or "billing" in message


class LLMClient:
    """Thin wrapper around a provider that asks for, and decodes, one JSON object."""

    def __init__(self, provider: Optional[LLMProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        # Resolved lazily so a missing API key surfaces on the first call,
        # where the interpreter can fall back, instead of at construction.
        if self._provider is None:
            self._provider = provider_from_env()
        return self._provider

    def complete(self, *, system: str, user: str) -> str:
        return self.provider.generate(system=system, user=user)

    def generate_json(self, *, system: str, user: str) -> Optional[dict[str, Any]]:
        text = self.complete(system=system, user=user)
        return parse_json_object(text)
