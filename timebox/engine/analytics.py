"""Productivity summaries over the task collection."""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable

from ..models.task import Category, Task
from .free_slots import tasks_on_day


@dataclass
class DaySummary:
    """Completion figures for one day."""

    day: date
    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def completion_rate(self) -> int:
        """Completed share as a rounded percentage, 0 for an empty day."""
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)

    def to_dict(self) -> Dict:
        return {
            'date': self.day.isoformat(),
            'total': self.total,
            'completed': self.completed,
            'pending': self.pending,
            'completion_rate_percent': self.completion_rate,
        }


def summarize_day(tasks: Iterable[Task], day: date) -> DaySummary:
    day_tasks = tasks_on_day(tasks, day)
    return DaySummary(
        day=day,
        total=len(day_tasks),
        completed=sum(1 for task in day_tasks if task.completed),
    )


def category_breakdown(tasks: Iterable[Task]) -> Dict[str, int]:
    """Task count per category, skipping categories with no tasks."""
    counts = {category.value: 0 for category in Category}
    for task in tasks:
        counts[task.category.value] += 1
    return {key: count for key, count in counts.items() if count > 0}
