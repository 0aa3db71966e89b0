"""Response tiers: interchangeable sources tried in priority order."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from llm import LLMProvider, LLMResponseError, LLMTimeoutError
from shared_types import ResponseSource


@dataclass(frozen=True)
class CoachResponse:
    """Reply text plus the tier that produced it."""

    content: str
    source: ResponseSource

    def to_dict(self) -> dict:
        return {"content": self.content, "source": str(self.source)}


@dataclass(frozen=True)
class CoachRequest:
    """What every tier receives: persona, conversation, sampling bounds."""

    system: str
    messages: list[dict] = field(default_factory=list)
    max_tokens: int = 150
    temperature: float = 0.7
    kind: str = "chat"


class ResponseTier(ABC):
    """One candidate source in the fallback chain."""

    source: ResponseSource

    @abstractmethod
    async def attempt(self, request: CoachRequest) -> CoachResponse:
        """Produce a reply or raise LLMError."""
        ...


class LLMTier(ResponseTier):
    """Tier backed by an LLM provider.

    With ``timeout`` set the call is cancelled once the deadline passes,
    whatever the endpoint itself is doing. Without it the provider's own
    network timeout applies.
    """

    def __init__(
        self,
        provider: LLMProvider,
        source: ResponseSource,
        timeout: float | None = None,
    ):
        self.provider = provider
        self.source = source
        self.timeout = timeout

    async def attempt(self, request: CoachRequest) -> CoachResponse:
        call = self.provider.agenerate(
            request.messages,
            system=request.system,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        if self.timeout is None:
            text = await call
        else:
            try:
                text = await asyncio.wait_for(call, timeout=self.timeout)
            except asyncio.TimeoutError as e:
                raise LLMTimeoutError(
                    f"{self.provider.provider_name} gave no answer within {self.timeout}s"
                ) from e

        if not isinstance(text, str) or not text.strip():
            raise LLMResponseError(f"{self.provider.provider_name} returned empty text")
        return CoachResponse(content=text.strip(), source=self.source)


class StaticTier(ResponseTier):
    """Fixed text. Cannot fail."""

    source = ResponseSource.FALLBACK

    def __init__(self, text: str):
        self.text = text

    async def attempt(self, request: CoachRequest) -> CoachResponse:
        return CoachResponse(content=self.text, source=self.source)
