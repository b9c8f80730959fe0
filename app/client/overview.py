# app/client/overview.py
"""Per-user task summary for the admin dashboard.

Tasks are grouped under the user who created them. Nothing here talks to the
network; ``ApiClient.user_task_overview`` feeds it the two list responses.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import TypeAdapter

_timestamp = TypeAdapter(datetime)


@dataclass
class TaskCounts:
    total: int = 0
    pending: int = 0
    inProgress: int = 0
    completed: int = 0
    overdue: int = 0


@dataclass
class UserTasks:
    user: dict
    tasks: List[dict] = field(default_factory=list)
    counts: TaskCounts = field(default_factory=TaskCounts)


def _reference_id(value) -> Optional[str]:
    # createdBy arrives populated, but a bare id is accepted too
    if isinstance(value, dict):
        return value.get("_id")
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_overdue(task: dict, now: datetime) -> bool:
    """Due date strictly in the past and not completed."""
    due = task.get("dueDate")
    if not due or (task.get("status") or "pending") == "completed":
        return False
    return _as_utc(_timestamp.validate_python(due)) < _as_utc(now)


def count_tasks(tasks: List[dict], now: datetime) -> TaskCounts:
    counts = TaskCounts(total=len(tasks))
    for task in tasks:
        status = task.get("status") or "pending"
        if status == "pending":
            counts.pending += 1
        elif status == "in-progress":
            counts.inProgress += 1
        elif status == "completed":
            counts.completed += 1
        if is_overdue(task, now):
            counts.overdue += 1
    return counts


def group_tasks_by_user(users: List[dict], tasks: List[dict], now: datetime = None) -> List[UserTasks]:
    """Busiest creators first; equal totals keep the order of ``users``."""
    now = now or datetime.now(timezone.utc)
    overview = []
    for user in users:
        created = [t for t in tasks if _reference_id(t.get("createdBy")) == user["_id"]]
        overview.append(UserTasks(user=user, tasks=created, counts=count_tasks(created, now)))
    overview.sort(key=lambda entry: entry.counts.total, reverse=True)
    return overview
