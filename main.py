"""Main entry point for the timebox task scheduler."""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from timebox.engine.analytics import category_breakdown, summarize_day
from timebox.engine.conflicts import find_conflicts
from timebox.engine.free_slots import day_schedule
from timebox.engine.reminders import ReminderScheduler, check_reminders
from timebox.engine.tasks import create_task, toggle_completion
from timebox.intent.resolver import resolve_intent
from timebox.models.result import Notification
from timebox.utils.config import SchedulingConfig, get_default_config, load_config
from timebox.utils.datetime_utils import format_day
from timebox.utils.logging_utils import setup_logging
from timebox.utils.task_io import load_tasks, save_tasks

logger = logging.getLogger(__name__)


def print_notification(notification: Notification) -> None:
    """Notification sink for the terminal."""
    print(f"[reminder] {notification.headline}")
    print(f"           {notification.body}")


def run_parse(tasks_path: str, text: str, day: date, config: SchedulingConfig) -> int:
    """Resolve an utterance and store the draft when it fits."""
    tasks = load_tasks(tasks_path)
    result = resolve_intent(text, tasks, day, config)
    print(result.message)

    if not result.success:
        return 1

    save_tasks(tasks_path, tasks + [result.task])
    logger.info("Stored task %s in %s", result.task.task_id, tasks_path)
    return 0


def run_add(
    tasks_path: str,
    title: str,
    day: date,
    start: str,
    end: str,
    category: str,
    priority: str,
    config: SchedulingConfig,
) -> int:
    """Add a task from explicit fields, warning about overlaps."""
    tasks = load_tasks(tasks_path)
    start_time = datetime.combine(day, datetime.strptime(start, '%H:%M').time())
    end_time = datetime.combine(day, datetime.strptime(end, '%H:%M').time())
    task = create_task(title, start_time, end_time, category=category, priority=priority, config=config)

    for other in find_conflicts(tasks, task.start_time, task.end_time):
        print(f"Warning: overlaps \"{other.title}\" "
              f"({other.start_time:%H:%M}-{other.end_time:%H:%M})")

    save_tasks(tasks_path, tasks + [task])
    print(f"Added \"{task.title}\" ({task.task_id}) on {format_day(day)} from {start} to {end}")
    return 0


def run_free_slots(tasks_path: str, day: date, config: SchedulingConfig) -> int:
    """Print busy and free time of a day."""
    schedule = day_schedule(load_tasks(tasks_path), day, config)

    print(f"Schedule for {format_day(day)}")
    print("Busy:")
    for slot in schedule.busy_slots:
        print(f"  {slot.label}")
    print("Free:")
    for slot in schedule.free_slots:
        print(f"  {slot.label} ({slot.duration} min)")
    print(f"Total free: {schedule.free_minutes} min")
    return 0


def run_remind(tasks_path: str, config: SchedulingConfig, watch: bool, ticks: Optional[int]) -> int:
    """Fire due reminders once, or keep polling with ``watch``."""
    if not watch:
        poll = check_reminders(load_tasks(tasks_path), datetime.now(), print_notification, config)
        if poll.changed:
            save_tasks(tasks_path, poll.tasks)
        print(poll.to_human_readable())
        return 0

    scheduler = ReminderScheduler(
        load_tasks=lambda: load_tasks(tasks_path),
        save_tasks=lambda tasks: save_tasks(tasks_path, tasks),
        sink=print_notification,
        config=config,
    )
    try:
        scheduler.run(max_ticks=ticks)
    except KeyboardInterrupt:
        scheduler.stop()
    return 0


def run_complete(tasks_path: str, task_id: str) -> int:
    """Toggle completion of one task."""
    tasks = toggle_completion(load_tasks(tasks_path), task_id, datetime.now())
    save_tasks(tasks_path, tasks)
    task = next(task for task in tasks if task.task_id == task_id)
    state = "done" if task.completed else "pending"
    print(f"\"{task.title}\" marked {state}")
    return 0


def run_stats(tasks_path: str, day: date) -> int:
    """Print the day summary and category breakdown."""
    tasks = load_tasks(tasks_path)
    summary = summarize_day(tasks, day)

    print(f"Tasks on {format_day(day)}: {summary.total}")
    print(f"Completed: {summary.completed}")
    print(f"Completion rate: {summary.completion_rate}%")
    print("By category:")
    for category, count in category_breakdown(tasks).items():
        print(f"  {category}: {count}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Timebox task scheduler"
    )
    parser.add_argument(
        'command',
        choices=['parse', 'add', 'free-slots', 'remind', 'complete', 'stats'],
        help='Command to run'
    )
    parser.add_argument(
        'arguments',
        nargs='*',
        help='Utterance for parse, title for add, task id for complete'
    )
    parser.add_argument(
        '--tasks',
        type=str,
        default='tasks.json',
        help='Path to the task file (default: tasks.json)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--date',
        type=date.fromisoformat,
        default=None,
        help='Day in view as YYYY-MM-DD (default: today)'
    )
    parser.add_argument('--start', type=str, default='09:00', help='Start time for add (HH:MM)')
    parser.add_argument('--end', type=str, default='10:00', help='End time for add (HH:MM)')
    parser.add_argument('--category', type=str, default='work', help='Category for add')
    parser.add_argument('--priority', type=str, default='medium', help='Priority for add')
    parser.add_argument(
        '--watch',
        action='store_true',
        help='Keep polling reminders at the configured interval'
    )
    parser.add_argument(
        '--ticks',
        type=int,
        default=None,
        help='Stop watching after this many polls'
    )
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level')
    parser.add_argument('--log-file', type=str, default=None, help='Optional log file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        raw_config = load_config(args.config) if Path(args.config).exists() else get_default_config()
        config = SchedulingConfig.from_dict(raw_config)
        day = args.date or date.today()
        text = ' '.join(args.arguments)

        if args.command == 'parse':
            if not text:
                parser.error("parse needs an utterance")
            return run_parse(args.tasks, text, day, config)
        elif args.command == 'add':
            return run_add(args.tasks, text, day, args.start, args.end,
                           args.category, args.priority, config)
        elif args.command == 'free-slots':
            return run_free_slots(args.tasks, day, config)
        elif args.command == 'remind':
            return run_remind(args.tasks, config, args.watch, args.ticks)
        elif args.command == 'complete':
            if len(args.arguments) != 1:
                parser.error("complete needs exactly one task id")
            return run_complete(args.tasks, args.arguments[0])
        elif args.command == 'stats':
            return run_stats(args.tasks, day)
    except (ValueError, KeyError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
