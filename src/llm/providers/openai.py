"""OpenAI-compatible chat-completions provider."""

from openai import APIError, APITimeoutError, AuthenticationError, RateLimitError

from ..base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
)

DEFAULT_BASE_URL = "https://llm.kindo.ai/v1"
DEFAULT_MODEL = "gpt-4o-mini"


def _handle_openai_error(e: Exception):
    # APIError is the base of the others, so it is checked last
    if isinstance(e, AuthenticationError):
        raise LLMAuthError(f"OpenAI auth failed: {e}") from e
    if isinstance(e, RateLimitError):
        raise LLMRateLimitError(f"OpenAI rate limit: {e}") from e
    if isinstance(e, APITimeoutError):
        raise LLMTimeoutError(f"OpenAI timeout: {e}") from e
    if isinstance(e, APIError):
        raise LLMError(f"OpenAI API error: {e}") from e
    raise LLMError(f"OpenAI error: {e}") from e


class OpenAIProvider(LLMProvider):
    """Hosted chat-completions provider (OpenAI wire format, any base URL).

    The SDK client is built on first use, so a missing key only fails the
    call that needs it.
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client=None,
    ):
        self.model = model or DEFAULT_MODEL
        self.base_url = base_url or DEFAULT_BASE_URL
        self.timeout = timeout
        self._api_key = api_key
        self.client = client

    def _get_client(self):
        if self.client is not None:
            return self.client
        if not self._api_key:
            raise LLMAuthError("No API key configured for hosted completions")
        from openai import OpenAI

        # One attempt per call; the selector moves on to the next tier on failure
        kwargs = {"api_key": self._api_key, "base_url": self.base_url, "max_retries": 0}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        self.client = OpenAI(**kwargs)
        return self.client

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
    ) -> str:
        client = self._get_client()

        full_messages = []
        if system:
            full_messages.append({"role": "system", "content": system})
        full_messages.extend(messages)

        kwargs = {"model": self.model, "max_tokens": max_tokens, "messages": full_messages}
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = client.chat.completions.create(**kwargs)
        except Exception as e:
            _handle_openai_error(e)

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise LLMResponseError(f"Malformed completion payload: {e}") from e
        if not isinstance(content, str) or not content.strip():
            raise LLMResponseError("Completion payload carried no text")
        return content
