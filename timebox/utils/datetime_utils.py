"""Date and time utilities."""

from datetime import date, datetime, time


def day_start(day: date) -> datetime:
    """Midnight at the beginning of ``day``."""
    return datetime.combine(day, time.min)


def minutes_from_day_start(moment: datetime, day: date) -> int:
    """Whole minutes between midnight of ``day`` and ``moment``.

    Keeps counting past 24:00, so a task ending after midnight yields an
    offset greater than 1440.
    """
    delta = moment - day_start(day)
    return int(delta.total_seconds() // 60)


def minutes_to_time(minutes: int) -> str:
    """Format a minute offset as ``HH:MM``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def format_clock(moment: datetime) -> str:
    """24-hour ``HH:MM`` rendering of an instant."""
    return moment.strftime('%H:%M')


def format_day(day: date) -> str:
    """Render a day as e.g. ``Tuesday, Oct 20``."""
    return f"{day:%A}, {day:%b} {day.day}"
