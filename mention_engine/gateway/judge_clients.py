"""Judge clients — vendor adapters for AI-assisted sentiment scoring.

Every adapter exposes the same capability: send a system + user prompt
and return the raw text completion. Parsing and validating the JSON
inside that text is the caller's job, adapters never inspect it.

  - OpenAI: chat completions, ``response_format: json_object``
  - Anthropic: messages API, ``x-api-key`` + ``anthropic-version`` headers
  - Disabled: no credentials configured, always returns None
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from mention_engine.core.config import Settings

logger = logging.getLogger(__name__)


class JudgeClientError(Exception):
    """Raised when a vendor answers with a payload the adapter cannot read."""

    def __init__(self, message: str, vendor: str = ""):
        super().__init__(message)
        self.vendor = vendor


class BaseJudgeClient(ABC):
    """Base class for all judge clients."""

    vendor: str = ""
    enabled: bool = True

    @abstractmethod
    async def generate_sentiment_json(self, system_prompt: str, user_prompt: str) -> str | None:
        """Return the raw completion text, or None when the vendor sent no content."""
        ...


class DisabledJudgeClient(BaseJudgeClient):
    """Placeholder used when no provider credentials are configured."""

    vendor = "disabled"
    enabled = False

    async def generate_sentiment_json(self, system_prompt: str, user_prompt: str) -> str | None:
        return None


# ---------------------------------------------------------------------------
# OpenAI
# ---------------------------------------------------------------------------


class OpenAIJudgeClient(BaseJudgeClient):
    """OpenAI Chat Completions adapter."""

    vendor = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4-turbo-preview",
        api_url: str = "https://api.openai.com/v1/chat/completions",
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def generate_sentiment_json(self, system_prompt: str, user_prompt: str) -> str | None:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                self.api_url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
            )
            resp.raise_for_status()
            data = resp.json()

        try:
            choice = data["choices"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise JudgeClientError(f"Unexpected OpenAI payload: {e}", vendor=self.vendor) from e

        return (choice.get("message") or {}).get("content") or None


# ---------------------------------------------------------------------------
# Anthropic
# ---------------------------------------------------------------------------


class AnthropicJudgeClient(BaseJudgeClient):
    """Anthropic Messages API adapter."""

    vendor = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-haiku-20240307",
        api_url: str = "https://api.anthropic.com/v1/messages",
        api_version: str = "2023-06-01",
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.api_version = api_version
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def generate_sentiment_json(self, system_prompt: str, user_prompt: str) -> str | None:
        payload = {
            "model": self.model,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                self.api_url,
                json=payload,
                headers={
                    "x-api-key": self.api_key,
                    "anthropic-version": self.api_version,
                    "Content-Type": "application/json",
                },
            )
            resp.raise_for_status()
            data = resp.json()

        try:
            blocks = data["content"]
        except (KeyError, TypeError) as e:
            raise JudgeClientError(f"Unexpected Anthropic payload: {e}", vendor=self.vendor) from e

        # Concatenate text blocks; tool_use and other block types are ignored
        text = "".join(b.get("text", "") for b in blocks or [] if b.get("type") == "text")
        return text or None


def build_judge_client(config: Settings) -> BaseJudgeClient:
    """Pick the judge adapter for the configured credentials.

    OpenAI wins when both keys are present. Missing credentials never
    raise: a disabled client is returned instead.
    """
    if not config.ai_enabled:
        logger.info("Sentiment judge disabled: no AI provider credentials configured")
        return DisabledJudgeClient()

    if config.openai_api_key:
        logger.info("Sentiment judge: OpenAI client initialized (model=%s)", config.judge_openai_model)
        return OpenAIJudgeClient(
            api_key=config.openai_api_key,
            model=config.judge_openai_model,
            api_url=config.judge_openai_url,
            temperature=config.judge_temperature,
            max_tokens=config.judge_max_tokens,
            timeout=config.judge_timeout,
        )

    logger.info("Sentiment judge: Anthropic client initialized (model=%s)", config.judge_anthropic_model)
    return AnthropicJudgeClient(
        api_key=config.anthropic_api_key,
        model=config.judge_anthropic_model,
        api_url=config.judge_anthropic_url,
        api_version=config.judge_anthropic_version,
        temperature=config.judge_temperature,
        max_tokens=config.judge_max_tokens,
        timeout=config.judge_timeout,
    )
