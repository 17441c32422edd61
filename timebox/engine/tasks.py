"""Task collection operations used by the calling application."""

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from ..models.task import Category, Priority, Task
from ..utils.config import DEFAULT_CONFIG, SchedulingConfig


def generate_task_id() -> str:
    """Fresh identifier for a task draft."""
    return uuid.uuid4().hex[:12]


def create_task(
    title: str,
    start_time: datetime,
    end_time: datetime,
    description: Optional[str] = None,
    category: str = Category.WORK.value,
    priority: str = Priority.MEDIUM.value,
    color: Optional[str] = None,
    reminder: bool = True,
    task_id: Optional[str] = None,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> Task:
    """Build a task draft from direct user input.

    Raises:
        ValueError: if the title is blank, the interval is empty, or the
            category or priority is unknown.
    """
    title = title.strip()
    if not title:
        raise ValueError("Task title must not be blank")
    if start_time >= end_time:
        raise ValueError("start_time must be before end_time")

    category = Category(category)
    return Task(
        task_id=task_id or generate_task_id(),
        title=title,
        description=description,
        start_time=start_time,
        end_time=end_time,
        category=category,
        priority=Priority(priority),
        color=color or config.color_for(category),
        reminder=reminder,
    )


def find_task(tasks: Iterable[Task], task_id: str) -> Task:
    """Look up a task by id, raising KeyError when it is absent."""
    for task in tasks:
        if task.task_id == task_id:
            return task
    raise KeyError(f"Task not found: {task_id}")


def toggle_completion(tasks: Sequence[Task], task_id: str, now: datetime) -> List[Task]:
    """Flip the completed flag of one task, keeping completed_at in step."""
    target = find_task(tasks, task_id)
    completed = not target.completed
    updated = replace(target, completed=completed, completed_at=now if completed else None)
    return [updated if task.task_id == task_id else task for task in tasks]
