"""Chat exchange persistence. Messages are append-only."""

import uuid
from datetime import datetime, timezone

from .gate import UNAVAILABLE, StoreHandle, WriteResult, safe_read, safe_write

MESSAGES = "messages"
DEFAULT_SESSION = "default"
HISTORY_LIMIT = 50


def list_messages(
    handle: StoreHandle,
    user_id: str,
    session_id: str = DEFAULT_SESSION,
    limit: int = HISTORY_LIMIT,
) -> list[dict]:
    """Most recent ``limit`` exchanges of a session, returned oldest first.

    A session longer than ``limit`` drops its earliest exchanges, never its
    latest ones. Empty when the store is down.
    """
    newest = safe_read(
        handle,
        lambda store: store.collection(MESSAGES).find(
            {"user_id": user_id, "session_id": session_id},
            sort=("created_at", -1),
            limit=limit,
        ),
        MESSAGES,
    )
    return list(reversed(newest))


def record_exchange(
    handle: StoreHandle,
    user_id: str,
    session_id: str,
    message: str | None,
    response: str,
    source: str,
) -> WriteResult:
    """Persist one user utterance and the coach reply with its source tier."""
    doc = {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "session_id": session_id,
        "message": message,
        "response": response,
        "source": str(source),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    outcome = safe_write(handle, lambda store: store.collection(MESSAGES).insert_one(doc), MESSAGES)
    return WriteResult(document=doc, persisted=outcome is not UNAVAILABLE)
