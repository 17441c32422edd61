"""Result models returned by the scheduling core."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .slots import FreeSlot
from .task import Task


class FailureKind(str, Enum):
    """Recoverable failures of the intent resolver."""

    NO_TIME_DETECTED = "no_time_detected"
    CONFLICT_DETECTED = "conflict_detected"


@dataclass
class IntentResult:
    """Outcome of resolving one utterance.

    Exactly one of ``task`` (success) or ``failure`` is set. Alternatives are
    only attached to conflict failures and may be empty when the day is full.
    """

    success: bool
    message: str
    task: Optional[Task] = None
    failure: Optional[FailureKind] = None
    alternatives: List[FreeSlot] = field(default_factory=list)

    @classmethod
    def ok(cls, task: Task, message: str) -> "IntentResult":
        return cls(success=True, message=message, task=task)

    @classmethod
    def no_time(cls, message: str) -> "IntentResult":
        return cls(success=False, message=message, failure=FailureKind.NO_TIME_DETECTED)

    @classmethod
    def conflict(cls, message: str, alternatives: List[FreeSlot]) -> "IntentResult":
        return cls(
            success=False,
            message=message,
            failure=FailureKind.CONFLICT_DETECTED,
            alternatives=list(alternatives),
        )

    @property
    def is_conflict(self) -> bool:
        return self.failure is FailureKind.CONFLICT_DETECTED

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON export."""
        return {
            'success': self.success,
            'message': self.message,
            'task': self.task.to_dict() if self.task else None,
            'failure': self.failure.value if self.failure else None,
            'alternatives': [slot.label for slot in self.alternatives],
        }


@dataclass(frozen=True)
class Notification:
    """Payload handed to the notification sink when a reminder fires."""

    task_id: str
    title: str
    start_time: datetime
    description: Optional[str] = None
    lead_minutes: int = 15
    accent: Optional[str] = None

    @property
    def headline(self) -> str:
        return f"Starting in {self.lead_minutes} min: {self.title}"

    @property
    def body(self) -> str:
        return f"{self.start_time:%H:%M} – {self.description or ''}"


@dataclass
class ReminderPoll:
    """Record of a single reminder tick."""

    polled_at: datetime
    tasks: List[Task]
    fired: List[Notification] = field(default_factory=list)
    failed_deliveries: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.fired)

    def to_dict(self) -> Dict[str, Any]:
        """Convert poll outcome to dictionary for JSON export."""
        return {
            'polled_at': self.polled_at.isoformat(),
            'fired': [
                {
                    'task_id': n.task_id,
                    'title': n.title,
                    'start_time': n.start_time.isoformat(),
                }
                for n in self.fired
            ],
            'failed_deliveries': list(self.failed_deliveries),
        }

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [f"=== Reminder poll at {self.polled_at:%Y-%m-%d %H:%M:%S} ==="]
        if not self.fired:
            lines.append("  No reminders due")
        for notification in self.fired:
            lines.append(f"  {notification.headline}")
            lines.append(f"    {notification.body}")
            if notification.task_id in self.failed_deliveries:
                lines.append("    Delivery failed")
        return "\n".join(lines)
