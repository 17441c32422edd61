"""Turn a free-form utterance into a task draft.

The resolver is a bounded heuristic. It reads the token stream produced by
``tokenize`` and applies a fixed set of rules, each consuming one kind of
token:

* time: the first time-of-day mention is the start time. Any later mention
  (as in "from 2 PM to 3 PM") is ignored and the end time still comes from
  the duration. This is a known limitation, kept on purpose.
* date: "tomorrow" beats "next week" beats "today"; none keeps the
  reference day.
* duration: the first duration phrase, otherwise the configured default.
* title: the literal text left over, trimmed and capitalised.
* category: keyword groups tried in configured order, first hit wins.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional, Sequence

from ..engine.conflicts import has_conflict
from ..engine.free_slots import get_free_slots
from ..engine.tasks import generate_task_id
from ..models.result import IntentResult
from ..models.slots import FreeSlot
from ..models.task import Category, Task
from ..utils.config import DEFAULT_CONFIG, SchedulingConfig
from ..utils.datetime_utils import day_start, format_clock, format_day
from .tokenizer import DateKeyword, DurationPhrase, Literal, TimeMention, Token, tokenize

logger = logging.getLogger(__name__)

DATE_PRIORITY = ('tomorrow', 'next week', 'today')

NO_TIME_MESSAGE = "I couldn't detect a time. Try: 'Schedule a meeting tomorrow at 3 PM'"


@dataclass
class Extraction:
    """Everything the rules pulled out of one utterance."""

    title: str
    category: Category
    duration_minutes: int
    day_offset: int = 0
    time_mention: Optional[TimeMention] = None
    ignored_times: List[TimeMention] = field(default_factory=list)


def extract_day_offset(tokens: Sequence[Token]) -> int:
    keywords = {token.keyword: token.day_offset for token in tokens if isinstance(token, DateKeyword)}
    for keyword in DATE_PRIORITY:
        if keyword in keywords:
            return keywords[keyword]
    return 0


def extract_duration(tokens: Sequence[Token], default: int) -> int:
    for token in tokens:
        if isinstance(token, DurationPhrase) and token.minutes > 0:
            return token.minutes
    return default


def extract_title(tokens: Sequence[Token], default: str) -> str:
    title = ' '.join(
        ' '.join(token.text for token in tokens if isinstance(token, Literal)).split()
    )
    if not title:
        return default
    return title[0].upper() + title[1:]


def infer_category(title: str, config: SchedulingConfig = DEFAULT_CONFIG) -> Category:
    """Pick the first keyword group that matches ``title``."""
    for category, keywords in config.category_keywords:
        if not keywords:
            continue
        pattern = r"\b(?:" + "|".join(re.escape(word) for word in keywords) + ")"
        if re.search(pattern, title, re.IGNORECASE):
            return Category(category)
    return Category.GENERAL


def extract(text: str, config: SchedulingConfig = DEFAULT_CONFIG) -> Extraction:
    """Apply every extraction rule to ``text``."""
    tokens = tokenize(text)
    logger.debug("Tokens for %r: %s", text, tokens)

    times = [token for token in tokens if isinstance(token, TimeMention)]
    title = extract_title(tokens, config.default_title)

    return Extraction(
        title=title,
        category=infer_category(title, config),
        duration_minutes=extract_duration(tokens, config.default_duration_minutes),
        day_offset=extract_day_offset(tokens),
        time_mention=times[0] if times else None,
        ignored_times=times[1:],
    )


def suggest_alternatives(
    tasks: Sequence[Task],
    day: date,
    duration_minutes: int,
    config: SchedulingConfig = DEFAULT_CONFIG,
) -> List[FreeSlot]:
    """Earliest free slots long enough for the duration, clipped to it.

    Free slots only see tasks starting on ``day``; a candidate still covered
    by a task from the previous evening is dropped.
    """
    midnight = day_start(day)
    candidates = []
    for slot in get_free_slots(tasks, day, config=config):
        if slot.duration < duration_minutes:
            continue
        candidate = slot.clip(duration_minutes)
        start = midnight + timedelta(minutes=candidate.start)
        end = midnight + timedelta(minutes=candidate.end)
        if has_conflict(tasks, start, end):
            continue
        candidates.append(candidate)
    return candidates[:config.max_alternatives]


def _conflict_message(alternatives: List[FreeSlot], day: date, duration_minutes: int) -> str:
    if not alternatives:
        return (
            f"That time slot is already taken! No free slot of {duration_minutes} minutes "
            f"is left on {format_day(day)}."
        )
    labels = ", ".join(slot.label for slot in alternatives)
    return f"That time slot is already taken! Available slots: {labels}"


def resolve_intent(
    text: str,
    tasks: Sequence[Task],
    reference_date: date,
    config: SchedulingConfig = DEFAULT_CONFIG,
    id_factory: Callable[[], str] = generate_task_id,
) -> IntentResult:
    """Resolve ``text`` against the task collection and the day in view."""
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    extraction = extract(text, config)
    if extraction.time_mention is None:
        return IntentResult.no_time(NO_TIME_MESSAGE)
    if extraction.ignored_times:
        logger.debug(
            "Using %r as start time, ignoring %s",
            extraction.time_mention.text,
            [mention.text for mention in extraction.ignored_times],
        )

    day = reference_date + timedelta(days=extraction.day_offset)
    start = datetime.combine(day, time(extraction.time_mention.hour, extraction.time_mention.minute))
    end = start + timedelta(minutes=extraction.duration_minutes)

    if has_conflict(tasks, start, end):
        alternatives = suggest_alternatives(tasks, day, extraction.duration_minutes, config)
        logger.debug("Conflict at %s, %d alternatives", start, len(alternatives))
        return IntentResult.conflict(
            _conflict_message(alternatives, day, extraction.duration_minutes),
            alternatives,
        )

    draft = Task(
        task_id=id_factory(),
        title=extraction.title,
        description=config.draft_description,
        start_time=start,
        end_time=end,
        category=extraction.category,
        priority=config.default_priority,
        color=config.color_for(extraction.category),
        reminder=True,
        reminder_sent=False,
        completed=False,
    )
    message = (
        f'Added "{draft.title}" on {format_day(day)} '
        f"from {format_clock(start)} to {format_clock(end)}"
    )
    return IntentResult.ok(draft, message)
