"""
Grok (xAI) chat completion client.
xAI exposes an OpenAI-compatible API, so the official openai SDK is used
with a custom base URL.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from openai import AsyncOpenAI

from app.config import Settings, settings as default_settings
from app.domain.errors import LLMConfigurationError, LLMError

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(self, prompt: str, system_message: Optional[str] = None) -> str:
        ...


class GrokClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.x.ai/v1",
        model: str = "grok-2-1212",
        temperature: float = 0.7,
        timeout: float = 60.0,
    ):
        self.api_key = (api_key or "").strip() or None
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._client: Optional[AsyncOpenAI] = None

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise LLMConfigurationError("XAI_API_KEY not configured")
            # No SDK-level retries; a failed call falls back to RSI upstream
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def complete(self, prompt: str, system_message: Optional[str] = None) -> str:
        """
        Single non-streaming completion.

        Raises:
            LLMConfigurationError: API key not configured
            LLMError: empty completion
            openai.OpenAIError: transport / API failures
        """
        client = self._get_client()

        messages = []
        if system_message:
            messages.append({"role": "system", "content": system_message})
        messages.append({"role": "user", "content": prompt})

        response = await client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
        )
        if not response.choices:
            raise LLMError("Grok returned no choices")
        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise LLMError("Grok returned an empty completion")
        logger.debug("Grok %s completion: %d chars", self.model, len(content))
        return content

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None


def get_llm_client(settings: Optional[Settings] = None) -> GrokClient:
    cfg = settings or default_settings
    return GrokClient(
        api_key=cfg.XAI_API_KEY,
        base_url=cfg.LLM_BASE_URL,
        model=cfg.LLM_MODEL,
        temperature=cfg.LLM_TEMPERATURE,
        timeout=cfg.LLM_TIMEOUT_SECONDS,
    )
