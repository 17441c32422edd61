"""Free-time slot models."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from ..utils.datetime_utils import minutes_to_time


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) in minutes since midnight of one day."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        """Render as ``HH:MM – HH:MM``."""
        return f"{minutes_to_time(self.start)} – {minutes_to_time(self.end)}"

    def clip(self, duration: int) -> "TimeWindow":
        """Shorten the slot to at most ``duration`` minutes from its start."""
        return TimeWindow(self.start, min(self.end, self.start + duration))

    def to_dict(self) -> Dict[str, str]:
        return {'start': minutes_to_time(self.start), 'end': minutes_to_time(self.end)}


@dataclass
class DaySchedule:
    """Busy and free time of a single day within the day window."""

    day: date
    busy_slots: List[TimeWindow] = field(default_factory=list)
    free_slots: List[TimeWindow] = field(default_factory=list)

    @property
    def free_minutes(self) -> int:
        return sum(slot.duration for slot in self.free_slots)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON export."""
        return {
            'date': self.day.isoformat(),
            'busy_slots': [slot.to_dict() for slot in self.busy_slots],
            'free_slots': [slot.to_dict() for slot in self.free_slots],
        }


# Gaps between tasks are the only windows the scheduler hands out.
FreeSlot = TimeWindow
