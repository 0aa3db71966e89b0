"""Dependency injection for FastAPI routes."""

from functools import lru_cache

from fastapi import Request

from cli.config import load_config_model
from cli.config_models import FitoxConfig
from coach import ResponseSelector
from store import StoreHandle


@lru_cache
def get_config() -> FitoxConfig:
    """Load config once per process."""
    return load_config_model()


def get_store(request: Request) -> StoreHandle:
    """Process-wide store handle created at startup (connects lazily)."""
    return request.app.state.store


def get_selector(request: Request) -> ResponseSelector:
    return request.app.state.selector
