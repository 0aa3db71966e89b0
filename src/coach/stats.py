"""Aggregate task statistics and the coarse streak indicator."""

from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional


@dataclass(frozen=True)
class UserContext:
    """Per-request snapshot of a user's task counts. Never persisted."""

    completed_tasks: int = 0
    pending_tasks: int = 0
    streak: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def _local_day(value) -> Optional[date]:
    """Calendar day (server local time) of an ISO timestamp or datetime."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.date()


def compute_stats(tasks: Iterable[dict], today: Optional[date] = None) -> UserContext:
    """Count completed/pending tasks and derive the streak indicator.

    The streak is deliberately a two-level signal, not a consecutive-day count:
    0 when nothing was completed today, 1 when something was completed today
    but not yesterday, 2 when both days have a completion. Completion day is
    taken from the task's ``updated_at``.
    """
    today = today or date.today()
    yesterday = today - timedelta(days=1)

    completed = pending = 0
    done_today = done_yesterday = False
    for task in tasks:
        if not task.get("completed"):
            pending += 1
            continue
        completed += 1
        day = _local_day(task.get("updated_at"))
        if day == today:
            done_today = True
        elif day == yesterday:
            done_yesterday = True

    if not done_today:
        streak = 0
    elif not done_yesterday:
        streak = 1
    else:
        streak = 2

    return UserContext(completed_tasks=completed, pending_tasks=pending, streak=streak)
