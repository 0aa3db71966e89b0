"""Document persistence with graceful degradation when the store is down."""

from .documents import Collection, DocumentStore, StoreError
from .gate import UNAVAILABLE, StoreHandle, WriteResult, safe_read, safe_write
from .messages import list_messages, record_exchange
from .tasks import create_task, delete_task, list_tasks, new_task, update_task

__all__ = [
    "Collection",
    "DocumentStore",
    "StoreError",
    "UNAVAILABLE",
    "StoreHandle",
    "WriteResult",
    "safe_read",
    "safe_write",
    "list_messages",
    "record_exchange",
    "create_task",
    "delete_task",
    "list_tasks",
    "new_task",
    "update_task",
]
