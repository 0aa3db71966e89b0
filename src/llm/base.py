"""Base LLM provider abstraction."""

import asyncio
from abc import ABC, abstractmethod


class LLMError(Exception):
    """Base LLM error."""


class LLMRateLimitError(LLMError):
    """Rate limit hit."""


class LLMAuthError(LLMError):
    """Authentication failure or missing credentials."""


class LLMTimeoutError(LLMError):
    """Provider did not answer in time."""


class LLMResponseError(LLMError):
    """Provider answered, but not with usable text."""


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    provider_name: str = "base"

    @abstractmethod
    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
    ) -> str:
        """Generate a response from messages.

        Args:
            messages: List of {"role": ..., "content": ...} dicts
            system: Optional system prompt
            max_tokens: Max response tokens
            temperature: Sampling temperature (None = provider default)

        Returns:
            Generated text
        """
        ...

    async def agenerate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
    ) -> str:
        """Async variant. Default runs generate() in a worker thread."""
        return await asyncio.to_thread(
            self.generate,
            messages,
            system=system,
            max_tokens=max_tokens,
            temperature=temperature,
        )
