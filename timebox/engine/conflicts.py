"""Interval conflict detection."""

from datetime import datetime
from typing import Iterable, List, Optional

from ..models.task import Task


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open overlap test; intervals that only touch do not overlap."""
    return start_a < end_b and end_a > start_b


def find_conflicts(
    tasks: Iterable[Task],
    start: datetime,
    end: datetime,
    exclude_id: Optional[str] = None,
) -> List[Task]:
    """Return every task whose interval overlaps [start, end)."""
    return [
        task
        for task in tasks
        if task.task_id != exclude_id
        and overlaps(start, end, task.start_time, task.end_time)
    ]


def has_conflict(
    tasks: Iterable[Task],
    start: datetime,
    end: datetime,
    exclude_id: Optional[str] = None,
) -> bool:
    """Check whether [start, end) overlaps any task other than ``exclude_id``.

    Callers guarantee ``start < end``; no ordering validation happens here.
    """
    return any(
        overlaps(start, end, task.start_time, task.end_time)
        for task in tasks
        if task.task_id != exclude_id
    )
