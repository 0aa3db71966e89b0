"""Multi-provider LLM abstraction layer."""

from .base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
)
from .factory import create_llm_provider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMTimeoutError",
    "LLMResponseError",
]
