"""Habit coach: tiered reply generation and task statistics."""

from .prompts import PromptTemplates
from .selector import ResponseSelector
from .stats import UserContext, compute_stats
from .tiers import CoachRequest, CoachResponse, LLMTier, ResponseTier, StaticTier

__all__ = [
    "PromptTemplates",
    "ResponseSelector",
    "UserContext",
    "compute_stats",
    "CoachRequest",
    "CoachResponse",
    "LLMTier",
    "ResponseTier",
    "StaticTier",
]
