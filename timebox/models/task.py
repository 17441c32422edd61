"""Task data model."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class Category(str, Enum):
    """Task category, also used to pick a display color."""

    WORK = "work"
    HEALTH = "health"
    PERSONAL = "personal"
    GENERAL = "general"


class Priority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Task:
    """A time-boxed task on the calendar.

    Instances are immutable; every state change (completion, reminder sent)
    produces a new copy through ``dataclasses.replace``.
    """

    task_id: str
    title: str
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    category: Category = Category.GENERAL
    priority: Priority = Priority.MEDIUM
    color: Optional[str] = None
    reminder: bool = True
    reminder_sent: bool = False

    def __post_init__(self):
        """Coerce plain strings into the category and priority enums."""
        object.__setattr__(self, 'category', Category(self.category))
        object.__setattr__(self, 'priority', Priority(self.priority))

    @property
    def duration_minutes(self) -> int:
        """Length of the task in whole minutes."""
        return int((self.end_time - self.start_time).total_seconds() // 60)

    def mark_reminder_sent(self) -> "Task":
        """Return a copy with the reminder flag set."""
        return replace(self, reminder_sent=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to a JSON-ready dictionary."""
        return {
            'id': self.task_id,
            'title': self.title,
            'description': self.description,
            'start_time': self.start_time.isoformat(),
            'end_time': self.end_time.isoformat(),
            'completed': self.completed,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'category': self.category.value,
            'priority': self.priority.value,
            'color': self.color,
            'reminder': self.reminder,
            'reminder_sent': self.reminder_sent,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from a dictionary, validating it on the way in.

        Raises:
            ValueError: if a required field is missing, a timestamp cannot be
                parsed or carries a UTC offset, an enum value is unknown, the
                interval is empty, or ``completed_at`` disagrees with
                ``completed``.
        """
        missing = [key for key in ('id', 'title', 'start_time', 'end_time') if not data.get(key)]
        if missing:
            raise ValueError(f"Missing required fields {missing}")

        title = str(data['title']).strip()
        if not title:
            raise ValueError("Task title must not be blank")

        start_time = _parse_timestamp(data['start_time'], 'start_time')
        end_time = _parse_timestamp(data['end_time'], 'end_time')
        if start_time >= end_time:
            raise ValueError(f"Task {data['id']}: start_time must be before end_time")

        completed = bool(data.get('completed', False))
        completed_at = None
        if data.get('completed_at'):
            completed_at = _parse_timestamp(data['completed_at'], 'completed_at')
        if completed != (completed_at is not None):
            raise ValueError(
                f"Task {data['id']}: completed_at must be set exactly when the task is completed"
            )

        try:
            category = Category(data.get('category') or Category.GENERAL.value)
            priority = Priority(data.get('priority') or Priority.MEDIUM.value)
        except ValueError as exc:
            raise ValueError(f"Task {data['id']}: {exc}") from exc

        return cls(
            task_id=str(data['id']),
            title=title,
            description=data.get('description'),
            start_time=start_time,
            end_time=end_time,
            completed=completed,
            completed_at=completed_at,
            category=category,
            priority=priority,
            color=data.get('color'),
            reminder=bool(data.get('reminder', True)),
            reminder_sent=bool(data.get('reminder_sent', False)),
        )


def _parse_timestamp(value: Any, field_name: str) -> datetime:
    """Parse a local wall-clock timestamp; UTC offsets are refused."""
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value))
        except ValueError as exc:
            raise ValueError(f"Malformed timestamp in {field_name}: {value!r}") from exc
    if moment.tzinfo is not None:
        raise ValueError(f"Timestamp in {field_name} must not carry a UTC offset: {value!r}")
    return moment
