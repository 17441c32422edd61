from datetime import datetime, timedelta

from timebox.engine.reminders import ReminderScheduler, check_reminders, is_reminder_due
from timebox.models.task import Task
from timebox.utils.config import SchedulingConfig

NOW = datetime(2025, 3, 10, 9, 0)


def make_task(task_id, minutes_until, **kwargs):
    start = NOW + timedelta(minutes=minutes_until)
    return Task(
        task_id=task_id,
        title=f"Task {task_id}",
        start_time=start,
        end_time=start + timedelta(hours=1),
        **kwargs,
    )


class RecordingSink:
    def __init__(self):
        self.notifications = []

    def __call__(self, notification):
        self.notifications.append(notification)


def test_task_in_window_fires_once():
    sink = RecordingSink()
    task = make_task("a", 10, description="Standup notes")

    poll = check_reminders([task], NOW, sink)
    assert len(sink.notifications) == 1
    assert poll.tasks[0].reminder_sent is True
    assert task.reminder_sent is False

    notification = sink.notifications[0]
    assert notification.title == "Task a"
    assert notification.start_time == task.start_time
    assert notification.headline == "Starting in 15 min: Task a"
    assert notification.body == "09:10 – Standup notes"

    second = check_reminders(poll.tasks, NOW + timedelta(seconds=1), sink)
    assert len(sink.notifications) == 1
    assert not second.changed
    assert second.tasks[0].reminder_sent is True


def test_task_outside_window_waits():
    sink = RecordingSink()
    task = make_task("a", 20)

    poll = check_reminders([task], NOW, sink)
    assert sink.notifications == []
    assert poll.tasks == [task]

    poll = check_reminders(poll.tasks, NOW + timedelta(minutes=6), sink)
    assert len(sink.notifications) == 1
    assert poll.tasks[0].reminder_sent is True


def test_window_is_open_closed():
    assert is_reminder_due(make_task("a", 15), NOW)
    assert not is_reminder_due(make_task("b", 0), NOW)
    assert not is_reminder_due(make_task("c", -5), NOW)
    assert not is_reminder_due(make_task("d", 15.5), NOW)


def test_ineligible_tasks_are_untouched():
    sink = RecordingSink()
    tasks = [
        make_task("done", 5, completed=True, completed_at=NOW),
        make_task("muted", 5, reminder=False),
        make_task("sent", 5, reminder_sent=True),
    ]
    poll = check_reminders(tasks, NOW, sink)
    assert sink.notifications == []
    assert poll.tasks == tasks


def test_failing_sink_still_marks_task():
    def broken_sink(notification):
        raise RuntimeError("no display")

    poll = check_reminders([make_task("a", 5)], NOW, broken_sink)
    assert poll.tasks[0].reminder_sent is True
    assert poll.failed_deliveries == ["a"]
    assert "Delivery failed" in poll.to_human_readable()


def test_lead_time_comes_from_config():
    config = SchedulingConfig.from_dict({'reminders': {'lead_minutes': 30}})
    sink = RecordingSink()
    check_reminders([make_task("a", 25)], NOW, sink, config)
    assert sink.notifications[0].headline == "Starting in 30 min: Task a"


def test_collection_order_is_preserved():
    tasks = [make_task("late", 60), make_task("soon", 5), make_task("later", 90)]
    poll = check_reminders(tasks, NOW, RecordingSink())
    assert [task.task_id for task in poll.tasks] == ["late", "soon", "later"]


def test_scheduler_persists_only_changes():
    store = {'tasks': [make_task("a", 10), make_task("b", 40)]}
    saves = []

    def save(tasks):
        saves.append(tasks)
        store['tasks'] = tasks

    sink = RecordingSink()
    config = SchedulingConfig.from_dict({'reminders': {'poll_interval_seconds': 0}})
    scheduler = ReminderScheduler(
        load_tasks=lambda: store['tasks'],
        save_tasks=save,
        sink=sink,
        config=config,
        clock=lambda: NOW,
    )

    assert scheduler.run(max_ticks=3) == 3
    assert len(sink.notifications) == 1
    assert len(saves) == 1
    assert [task.reminder_sent for task in store['tasks']] == [True, False]


def test_scheduler_stop_ends_loop():
    config = SchedulingConfig.from_dict({'reminders': {'poll_interval_seconds': 0}})
    scheduler = None

    def stopping_sink(notification):
        scheduler.stop()

    scheduler = ReminderScheduler(
        load_tasks=lambda: [make_task("a", 10)],
        save_tasks=lambda tasks: None,
        sink=stopping_sink,
        config=config,
        clock=lambda: NOW,
    )
    assert scheduler.run() == 1


def test_notification_accent_follows_priority():
    sink = RecordingSink()
    check_reminders([make_task("a", 5, priority="high")], NOW, sink)
    assert sink.notifications[0].accent == "#E8505B"
