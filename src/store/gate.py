"""Degraded-persistence gate.

Store access goes through a StoreHandle. The handle connects lazily on first
need, reuses the connection afterwards, and reports an unreachable store as
the ``UNAVAILABLE`` sentinel instead of raising.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import structlog

from observability import metrics

from .documents import DocumentStore, StoreError

logger = structlog.get_logger()

T = TypeVar("T")


class _Unavailable:
    """Sentinel type: the store could not be reached."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = _Unavailable()


@dataclass
class WriteResult:
    """Outcome of a best-effort write.

    ``document`` is usable either way; ``persisted`` says whether anything
    durable happened. ``found`` is False only when a live store matched nothing.
    """

    document: Optional[dict]
    persisted: bool
    found: bool = True


class StoreHandle:
    """Owns the process-wide store connection."""

    def __init__(self, connect: Callable[[], DocumentStore]):
        self._connect = connect
        self._store: Optional[DocumentStore] = None
        self._lock = threading.Lock()

    @classmethod
    def for_path(cls, db_path: str | Path) -> "StoreHandle":
        return cls(lambda: DocumentStore.open(db_path))

    @property
    def connected(self) -> bool:
        return self._store is not None

    def ensure_connected(self) -> Optional[DocumentStore]:
        """Return the live store, connecting on first use. None if unreachable."""
        if self._store is not None:
            return self._store
        with self._lock:
            if self._store is None:
                try:
                    self._store = self._connect()
                except Exception as e:
                    metrics.counter("store.unavailable")
                    logger.warning("store.unavailable", error=str(e), error_type=type(e).__name__)
                    return None
                logger.info("store.connected")
            return self._store

    def with_store(self, operation: Callable[[DocumentStore], T]) -> T | _Unavailable:
        """Run ``operation`` against the live store, or return UNAVAILABLE."""
        store = self.ensure_connected()
        if store is None:
            return UNAVAILABLE
        return operation(store)

    def close(self) -> None:
        with self._lock:
            if self._store is not None:
                self._store.close()
                self._store = None
                logger.info("store.closed")


def safe_read(handle: StoreHandle, operation: Callable[[DocumentStore], list], collection: str) -> list:
    """Read through the gate; unreachable store or failed query yields []."""
    try:
        result = handle.with_store(operation)
    except StoreError as e:
        metrics.counter("store.read_failed")
        logger.warning("store.read_failed", collection=collection, error=str(e))
        return []
    if result is UNAVAILABLE:
        return []
    return result


def safe_write(handle: StoreHandle, operation: Callable[[DocumentStore], Any], collection: str) -> Any:
    """Write through the gate; any failure collapses to UNAVAILABLE."""
    try:
        result = handle.with_store(operation)
    except StoreError as e:
        metrics.counter("store.write_failed")
        logger.warning("store.write_failed", collection=collection, error=str(e))
        return UNAVAILABLE
    if result is UNAVAILABLE:
        logger.info("store.write_skipped", collection=collection)
    return result
