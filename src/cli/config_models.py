"""Pydantic configuration models for fitox."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from llm.factory import VALID_PROVIDERS


def _expand_env(value: Optional[str]) -> Optional[str]:
    """Resolve a ``${VAR}`` reference, leaving literals untouched."""
    if value and value.startswith("${") and value.endswith("}"):
        return os.getenv(value[2:-1], "") or None
    return value


class LLMConfig(BaseModel):
    """Primary tier: hosted chat-completions service."""

    provider: str = "openai"
    model: str = "gpt-4o-mini"
    base_url: str = "https://llm.kindo.ai/v1"
    api_key: Optional[str] = None
    timeout: float = 30.0
    chat_max_tokens: int = 150
    chat_temperature: float = 0.7
    quote_max_tokens: int = 50
    quote_temperature: float = 0.9

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_PROVIDERS}")
        return v

    @field_validator("chat_temperature", "quote_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"temperature must be 0-2, got {v}")
        return v


class LocalLLMConfig(BaseModel):
    """Secondary tier: self-hosted generate endpoint."""

    enabled: bool = True
    endpoint: str = "http://localhost:11434"
    model: str = "llama3.1"
    api_key: Optional[str] = None
    timeout: float = 5.0

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class StoreConfig(BaseModel):
    """Document store location."""

    db_path: Path = Path("~/fitox/fitox.db")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in the database path."""
        if str(self.db_path) != ":memory:":
            self.db_path = self.db_path.expanduser()
        return self


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class FitoxConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    local_llm: LocalLLMConfig = Field(default_factory=LocalLLMConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in API keys."""
        self.llm.api_key = _expand_env(self.llm.api_key)
        self.local_llm.api_key = _expand_env(self.local_llm.api_key)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "FitoxConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
