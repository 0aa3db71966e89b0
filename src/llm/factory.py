"""LLM provider factory."""

import os

from .base import LLMError, LLMProvider

_PROVIDER_ENV_KEYS = {
    "openai": "EMERGENT_LLM_KEY",
    "ollama": "OLLAMA_KEY_1",
}

VALID_PROVIDERS = set(_PROVIDER_ENV_KEYS)


def create_llm_provider(
    provider: str = "openai",
    api_key: str | None = None,
    model: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "openai" (hosted chat completions) or "ollama" (local generate API)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        base_url: Endpoint root (None = provider default)
        timeout: Network client timeout in seconds
        client: Pre-built SDK/HTTP client for testing/DI

    Returns:
        LLMProvider instance
    """
    if not api_key and not client:
        env_var = _PROVIDER_ENV_KEYS.get(provider)
        if env_var:
            api_key = os.getenv(env_var)

    if provider == "openai":
        from .providers.openai import OpenAIProvider

        return OpenAIProvider(
            api_key=api_key, model=model, base_url=base_url, timeout=timeout, client=client
        )
    elif provider == "ollama":
        from .providers.ollama import OllamaProvider

        return OllamaProvider(
            api_key=api_key, model=model, endpoint=base_url, timeout=timeout, client=client
        )
    else:
        raise LLMError(f"Unknown provider: {provider}. Use: openai, ollama")
