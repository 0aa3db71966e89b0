"""Coach reply generation with tiered fallback."""

from typing import Optional, Sequence

import structlog

from llm import create_llm_provider
from observability import metrics
from shared_types import ResponseSource

from .prompts import PromptTemplates
from .stats import UserContext
from .tiers import CoachRequest, CoachResponse, LLMTier, ResponseTier, StaticTier

logger = structlog.get_logger()

CHAT_ROLES = ("user", "assistant")


def _normalize_history(history: Optional[Sequence[dict]]) -> list[dict]:
    """Keep user/assistant turns with text, in order."""
    messages = []
    for msg in history or []:
        if not isinstance(msg, dict):
            continue
        role = msg.get("role")
        content = msg.get("content", msg.get("text"))
        if role in CHAT_ROLES and isinstance(content, str):
            messages.append({"role": role, "content": content})
    return messages


class ResponseSelector:
    """Tries each tier in order; the first success wins.

    The chat and quote chains share the LLM tiers and end in their own
    static fallback, so neither operation ever raises.
    """

    def __init__(
        self,
        tiers: Sequence[ResponseTier],
        chat_max_tokens: int = 150,
        chat_temperature: float = 0.7,
        quote_max_tokens: int = 50,
        quote_temperature: float = 0.9,
    ):
        self.tiers = list(tiers)
        self.chat_max_tokens = chat_max_tokens
        self.chat_temperature = chat_temperature
        self.quote_max_tokens = quote_max_tokens
        self.quote_temperature = quote_temperature
        self._chat_fallback = StaticTier(PromptTemplates.CHAT_FALLBACK)
        self._quote_fallback = StaticTier(PromptTemplates.QUOTE_FALLBACK)

    @classmethod
    def from_config(cls, config) -> "ResponseSelector":
        """Build primary (hosted) and, when enabled, secondary (local) tiers."""
        tiers: list[ResponseTier] = [
            LLMTier(
                create_llm_provider(
                    provider=config.llm.provider,
                    api_key=config.llm.api_key,
                    model=config.llm.model,
                    base_url=config.llm.base_url,
                    timeout=config.llm.timeout,
                ),
                ResponseSource.PRIMARY,
            )
        ]
        if config.local_llm.enabled:
            tiers.append(
                LLMTier(
                    create_llm_provider(
                        provider="ollama",
                        api_key=config.local_llm.api_key,
                        model=config.local_llm.model,
                        base_url=config.local_llm.endpoint,
                    ),
                    ResponseSource.SECONDARY,
                    timeout=config.local_llm.timeout,
                )
            )
        return cls(
            tiers,
            chat_max_tokens=config.llm.chat_max_tokens,
            chat_temperature=config.llm.chat_temperature,
            quote_max_tokens=config.llm.quote_max_tokens,
            quote_temperature=config.llm.quote_temperature,
        )

    async def generate_reply(
        self,
        history: Optional[Sequence[dict]],
        context: Optional[UserContext] = None,
    ) -> CoachResponse:
        """Coach reply for a conversation. Never raises."""
        context = context or UserContext()
        request = CoachRequest(
            system=PromptTemplates.coach_system(
                completed=context.completed_tasks,
                pending=context.pending_tasks,
                streak=context.streak,
            ),
            messages=_normalize_history(history),
            max_tokens=self.chat_max_tokens,
            temperature=self.chat_temperature,
            kind="chat",
        )
        return await self._run(request, self._chat_fallback)

    async def generate_quote(self) -> str:
        """Standalone motivational quote. Never raises."""
        request = CoachRequest(
            system=PromptTemplates.QUOTE_SYSTEM,
            messages=[{"role": "user", "content": PromptTemplates.QUOTE_REQUEST}],
            max_tokens=self.quote_max_tokens,
            temperature=self.quote_temperature,
            kind="quote",
        )
        response = await self._run(request, self._quote_fallback)
        return response.content

    async def _run(self, request: CoachRequest, fallback: StaticTier) -> CoachResponse:
        for tier in [*self.tiers, fallback]:
            try:
                with metrics.timer(f"coach.tier.{tier.source}"):
                    response = await tier.attempt(request)
            except Exception as e:
                metrics.counter(f"coach.tier_failed.{tier.source}")
                logger.warning(
                    "coach.tier_failed",
                    tier=str(tier.source),
                    kind=request.kind,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            metrics.counter(f"coach.source.{response.source}")
            logger.info("coach.reply", source=str(response.source), kind=request.kind)
            return response
        # Only reachable if a StaticTier subclass misbehaves.
        return CoachResponse(content=fallback.text, source=ResponseSource.FALLBACK)
