"""Local/self-hosted provider speaking the Ollama generate API."""

import httpx

from ..base import LLMAuthError, LLMError, LLMProvider, LLMResponseError, LLMTimeoutError

DEFAULT_ENDPOINT = "http://localhost:11434"
DEFAULT_MODEL = "llama3.1"


def flatten_prompt(messages: list[dict], system: str | None = None) -> str:
    """Single prompt string: persona plus the last user utterance only."""
    last_user = ""
    for msg in reversed(messages):
        if msg.get("role") == "user":
            last_user = msg.get("content") or ""
            break
    parts = []
    if system:
        parts.append(system)
    parts.append(f"User: {last_user}")
    parts.append("Assistant:")
    return "\n\n".join(parts)


class OllamaProvider(LLMProvider):
    """POSTs a flattened prompt to {endpoint}/api/generate (non-streaming).

    History is not replayed; only the newest user message reaches the model.
    """

    provider_name = "ollama"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ):
        self.model = model or DEFAULT_MODEL
        self.endpoint = (endpoint or DEFAULT_ENDPOINT).rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._client = client
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.endpoint}/api/generate"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _payload(self, messages: list[dict], system: str | None, max_tokens: int, temperature):
        options = {"num_predict": max_tokens}
        if temperature is not None:
            options["temperature"] = temperature
        return {
            "model": self.model,
            "prompt": flatten_prompt(messages, system),
            "stream": False,
            "options": options,
        }

    def _parse(self, response: httpx.Response) -> str:
        if response.status_code in (401, 403):
            raise LLMAuthError(f"Ollama auth failed: HTTP {response.status_code}")
        if response.is_error:
            raise LLMError(f"Ollama HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise LLMResponseError(f"Ollama returned non-JSON body: {e}") from e
        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise LLMResponseError("Ollama payload carried no 'response' text")
        return text.strip()

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
    ) -> str:
        payload = self._payload(messages, system, max_tokens, temperature)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise LLMTimeoutError(f"Ollama timeout: {e}") from e
        except httpx.HTTPError as e:
            raise LLMError(f"Ollama request failed: {e}") from e
        return self._parse(response)

    async def agenerate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
    ) -> str:
        payload = self._payload(messages, system, max_tokens, temperature)
        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=payload, headers=self._headers())
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self._transport
                ) as client:
                    response = await client.post(self.url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise LLMTimeoutError(f"Ollama timeout: {e}") from e
        except httpx.HTTPError as e:
            raise LLMError(f"Ollama request failed: {e}") from e
        return self._parse(response)
