"""Free time computation over a bounded day window."""

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..models.slots import DaySchedule, FreeSlot, TimeWindow
from ..models.task import Task
from ..utils.config import DEFAULT_CONFIG, SchedulingConfig
from ..utils.datetime_utils import minutes_from_day_start

logger = logging.getLogger(__name__)


def tasks_on_day(tasks: Iterable[Task], day: date) -> List[Task]:
    """Tasks starting on ``day``, ordered by start time."""
    return sorted(
        (task for task in tasks if task.start_time.date() == day),
        key=lambda task: task.start_time,
    )


def get_free_slots(
    tasks: Iterable[Task],
    day: date,
    window_start: Optional[int] = None,
    window_end: Optional[int] = None,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> List[FreeSlot]:
    """Compute the gaps of the day window not covered by any task.

    The window is given in minutes since midnight and defaults to the
    configured day window (08:00-22:00). Tasks are swept in start order with
    a cursor that only moves forward, so overlapping and nested tasks are
    handled without merging them first.
    """
    start_bound = config.day_start_minutes if window_start is None else window_start
    end_bound = config.day_end_minutes if window_end is None else window_end

    free: List[FreeSlot] = []
    cursor = start_bound

    for task in tasks_on_day(tasks, day):
        task_start = minutes_from_day_start(task.start_time, day)
        task_end = minutes_from_day_start(task.end_time, day)
        gap_end = min(task_start, end_bound)
        if gap_end > cursor:
            free.append(FreeSlot(cursor, gap_end))
        cursor = max(cursor, task_end)

    if cursor < end_bound:
        free.append(FreeSlot(cursor, end_bound))

    logger.debug("Free slots on %s: %d", day, len(free))
    return free


def busy_slots(
    tasks: Iterable[Task],
    day: date,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> List[TimeWindow]:
    """Task intervals of ``day`` clipped to the day window."""
    busy: List[TimeWindow] = []
    for task in tasks_on_day(tasks, day):
        start = max(minutes_from_day_start(task.start_time, day), config.day_start_minutes)
        end = min(minutes_from_day_start(task.end_time, day), config.day_end_minutes)
        if end > start:
            busy.append(TimeWindow(start, end))
    return busy


def day_schedule(
    tasks: Iterable[Task],
    day: date,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> DaySchedule:
    """Busy and free time of ``day`` in one record."""
    tasks = list(tasks)
    return DaySchedule(
        day=day,
        busy_slots=busy_slots(tasks, day, config),
        free_slots=get_free_slots(tasks, day, config=config),
    )
