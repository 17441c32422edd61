"""Data models for tasks, free slots and core results."""

from .task import Category, Priority, Task
from .slots import DaySchedule, FreeSlot, TimeWindow
from .result import FailureKind, IntentResult, Notification, ReminderPoll

__all__ = [
    'Category',
    'DaySchedule',
    'FailureKind',
    'FreeSlot',
    'IntentResult',
    'Notification',
    'Priority',
    'ReminderPoll',
    'Task',
    'TimeWindow',
]
