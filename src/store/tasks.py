"""Task persistence through the degraded-persistence gate."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from shared_types import TaskCategory, TaskPriority

from .gate import UNAVAILABLE, StoreHandle, WriteResult, safe_read, safe_write

TASKS = "tasks"

# Never overwritten by an update patch
_IMMUTABLE_FIELDS = {"id", "user_id", "created_at"}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_task(
    user_id: str,
    title: str,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    due_date: Optional[str] = None,
) -> dict:
    """Build a fresh, not-yet-completed task document."""
    now = _now()
    return {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "title": title,
        "category": str(category or TaskCategory.PERSONAL),
        "priority": str(priority or TaskPriority.MEDIUM),
        "due_date": due_date or now,
        "completed": False,
        "created_at": now,
        "updated_at": now,
    }


def list_tasks(handle: StoreHandle, user_id: str) -> list[dict]:
    """User's tasks, newest first. Empty when the store is down."""
    return safe_read(
        handle,
        lambda store: store.collection(TASKS).find({"user_id": user_id}, sort=("created_at", -1)),
        TASKS,
    )


def create_task(handle: StoreHandle, task: dict) -> WriteResult:
    outcome = safe_write(handle, lambda store: store.collection(TASKS).insert_one(task), TASKS)
    return WriteResult(document=task, persisted=outcome is not UNAVAILABLE)


def update_task(handle: StoreHandle, user_id: str, task_id: str, patch: dict) -> WriteResult:
    """Apply ``patch`` to the caller's task.

    Degraded mode returns an optimistic ``{id, user_id, **patch}`` with
    ``persisted=False``; a live store with no matching task gives ``found=False``.
    """
    changes = {k: v for k, v in patch.items() if k not in _IMMUTABLE_FIELDS}
    changes["updated_at"] = _now()

    def _apply(store):
        tasks = store.collection(TASKS)
        if tasks.update_one({"id": task_id, "user_id": user_id}, changes) == 0:
            return None
        return tasks.find_one({"id": task_id, "user_id": user_id})

    outcome = safe_write(handle, _apply, TASKS)
    if outcome is UNAVAILABLE:
        return WriteResult(
            document={"id": task_id, "user_id": user_id, **changes},
            persisted=False,
        )
    if outcome is None:
        return WriteResult(document=None, persisted=False, found=False)
    return WriteResult(document=outcome, persisted=True)


def delete_task(handle: StoreHandle, user_id: str, task_id: str) -> WriteResult:
    outcome = safe_write(
        handle,
        lambda store: store.collection(TASKS).delete_one({"id": task_id, "user_id": user_id}),
        TASKS,
    )
    if outcome is UNAVAILABLE:
        return WriteResult(document=None, persisted=False)
    if outcome == 0:
        return WriteResult(document=None, persisted=False, found=False)
    return WriteResult(document=None, persisted=True)
