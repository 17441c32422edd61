"""Reminder firing policy."""

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..models.result import Notification, ReminderPoll
from ..models.task import Task
from ..utils.config import DEFAULT_CONFIG, SchedulingConfig

logger = logging.getLogger(__name__)

NotificationSink = Callable[[Notification], None]


def is_reminder_due(task: Task, now: datetime, lead_minutes: int = 15) -> bool:
    """Whether ``task`` is inside its reminder window and not yet notified."""
    if not task.reminder or task.completed or task.reminder_sent:
        return False
    minutes_until = (task.start_time - now).total_seconds() / 60
    return 0 < minutes_until <= lead_minutes


def check_reminders(
    tasks: Sequence[Task],
    now: datetime,
    sink: NotificationSink,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> ReminderPoll:
    """Run one reminder tick over ``tasks``.

    Each due task is delivered to ``sink`` and comes back in the poll's task
    list with ``reminder_sent`` set. A sink that raises does not stop the
    task from being marked; the failure is logged and recorded on the poll.
    The input sequence is never mutated.
    """
    lead = config.reminder_lead_minutes
    poll = ReminderPoll(polled_at=now, tasks=[])

    for task in tasks:
        if not is_reminder_due(task, now, lead):
            poll.tasks.append(task)
            continue

        notification = Notification(
            task_id=task.task_id,
            title=task.title,
            start_time=task.start_time,
            description=task.description,
            lead_minutes=lead,
            accent=config.priority_colors.get(task.priority.value),
        )
        try:
            sink(notification)
        except Exception:
            logger.exception("Notification delivery failed for task %s", task.task_id)
            poll.failed_deliveries.append(task.task_id)

        logger.info("Reminder sent for %s (%s)", task.task_id, task.title)
        poll.fired.append(notification)
        poll.tasks.append(task.mark_reminder_sent())

    return poll


class ReminderScheduler:
    """Runs ``check_reminders`` on a fixed tick.

    The scheduler owns no tasks. Each tick asks ``load_tasks`` for the current
    collection and hands a changed collection to ``save_tasks``. Ticks run to
    completion one after another on the calling thread; ``stop`` only prevents
    further ticks.
    """

    def __init__(
        self,
        load_tasks: Callable[[], List[Task]],
        save_tasks: Callable[[List[Task]], None],
        sink: NotificationSink,
        config: SchedulingConfig = DEFAULT_CONFIG,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.load_tasks = load_tasks
        self.save_tasks = save_tasks
        self.sink = sink
        self.config = config
        self.clock = clock
        self._stopped = threading.Event()

    @property
    def interval(self) -> float:
        return self.config.poll_interval_seconds

    def tick(self) -> ReminderPoll:
        """Run a single poll and persist the result if anything fired."""
        poll = check_reminders(self.load_tasks(), self.clock(), self.sink, self.config)
        if poll.changed:
            self.save_tasks(poll.tasks)
        return poll

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick until stopped or ``max_ticks`` is reached; return tick count."""
        self._stopped.clear()
        ticks = 0
        logger.info("Reminder scheduler started (every %.0fs)", self.interval)
        while not self._stopped.is_set():
            self.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            self._stopped.wait(self.interval)
        logger.info("Reminder scheduler stopped after %d ticks", ticks)
        return ticks

    def stop(self) -> None:
        self._stopped.set()
