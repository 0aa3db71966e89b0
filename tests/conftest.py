"""Shared test fixtures for fitox."""

import asyncio
import sqlite3
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from llm import LLMProvider  # noqa: E402
from observability import metrics  # noqa: E402
from store import StoreHandle  # noqa: E402


class FakeProvider(LLMProvider):
    """Scripted provider: returns ``reply``, raises ``error`` or stalls for ``delay``."""

    provider_name = "fake"

    def __init__(self, reply: str | None = "fake reply", error: Exception | None = None, delay: float = 0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[dict] = []
        self.cancelled = False

    def _record(self, messages, system, max_tokens, temperature):
        self.calls.append(
            {
                "messages": list(messages),
                "system": system,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )

    def generate(self, messages, system=None, max_tokens=2000, temperature=None):
        self._record(messages, system, max_tokens, temperature)
        if self.error:
            raise self.error
        return self.reply

    async def agenerate(self, messages, system=None, max_tokens=2000, temperature=None):
        self._record(messages, system, max_tokens, temperature)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "fitox.db"


@pytest.fixture
def store_handle(db_path):
    """Live handle on a fresh SQLite file."""
    handle = StoreHandle.for_path(db_path)
    yield handle
    handle.close()


@pytest.fixture
def down_handle():
    """Handle whose connect primitive always fails."""

    def _connect():
        raise sqlite3.OperationalError("unable to open database file")

    return StoreHandle(_connect)
