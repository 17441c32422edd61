"""Scheduling engine: conflicts, free time, reminders and task operations."""

from .conflicts import find_conflicts, has_conflict
from .free_slots import day_schedule, get_free_slots, tasks_on_day
from .reminders import ReminderScheduler, check_reminders
from .tasks import create_task, toggle_completion
from .analytics import category_breakdown, summarize_day

__all__ = [
    'ReminderScheduler',
    'category_breakdown',
    'check_reminders',
    'create_task',
    'day_schedule',
    'find_conflicts',
    'get_free_slots',
    'has_conflict',
    'summarize_day',
    'tasks_on_day',
    'toggle_completion',
]
