"""Tokenizer for scheduling utterances.

An utterance is split into a flat sequence of tagged tokens. Recognised
phrases become typed tokens and everything between them is kept as
``Literal`` text, so the title is simply the literals joined back together.

Phrases are matched left to right. Where two kinds could start at the same
position the earlier alternative wins, in this order:

1. command verbs ("schedule", "add", "create", "set up", "book",
   "remind me to")
2. date keywords ("tomorrow", "next week", "today")
3. duration phrases ("for 90 minutes", "2 hours", "30 min")
4. time-of-day mentions ("at 2 PM", "14:30", "9am")

Putting durations ahead of times keeps the "1" in "for 1 hour" from being
read as one o'clock.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

Span = Tuple[int, int]


@dataclass(frozen=True)
class CommandVerb:
    text: str
    span: Span


@dataclass(frozen=True)
class DateKeyword:
    text: str
    span: Span
    keyword: str
    day_offset: int


@dataclass(frozen=True)
class DurationPhrase:
    text: str
    span: Span
    minutes: int


@dataclass(frozen=True)
class TimeMention:
    """A time of day, already normalized to the 24-hour clock."""

    text: str
    span: Span
    hour: int
    minute: int


@dataclass(frozen=True)
class Literal:
    text: str
    span: Span


Token = Union[CommandVerb, DateKeyword, DurationPhrase, TimeMention, Literal]

DATE_OFFSETS = {
    'tomorrow': 1,
    'next week': 7,
    'today': 0,
}

_TOKEN_RE = re.compile(
    r"""
    (?P<command>\b(?:remind\s+me\s+to|set\s+up|schedule|add|create|book)\b)
  | (?P<date>\b(?:tomorrow|next\s+week|today)\b)
  | (?P<duration>(?:\bfor\s+)?(?<![.\d])\b(?P<amount>\d+)\s*(?P<unit>hours?|hrs?|minutes?|mins?)\b)
  | (?P<time>(?:\bat\s+)?(?<![.:\d])\b(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?(?!\d|\.\d)
        (?:\s*(?P<meridiem>am|pm)\b)?)
    """,
    re.IGNORECASE | re.VERBOSE,
)


def normalize_hour(hour: int, meridiem: Optional[str]) -> int:
    """Convert a 12-hour clock reading to 24-hour.

    ``pm`` adds twelve unless the hour is 12; ``12 am`` is midnight. Without
    a marker the hour is taken as already being on the 24-hour clock.
    """
    if meridiem is None:
        return hour
    meridiem = meridiem.lower()
    if meridiem == 'pm' and hour != 12:
        return hour + 12
    if meridiem == 'am' and hour == 12:
        return 0
    return hour


def _time_token(match: 're.Match', span: Span) -> Optional[TimeMention]:
    hour = int(match.group('hour'))
    minute = int(match.group('minute') or 0)
    meridiem = match.group('meridiem')
    if meridiem and not 1 <= hour <= 12:
        return None
    hour = normalize_hour(hour, meridiem)
    if hour > 23 or minute > 59:
        return None
    return TimeMention(text=match.group(0), span=span, hour=hour, minute=minute)


def _duration_minutes(amount: str, unit: str) -> int:
    if unit.lower().startswith('h'):
        return int(amount) * 60
    return int(amount)


def _classify(match: 're.Match') -> Token:
    span = match.span()
    text = match.group(0)

    if match.group('command'):
        return CommandVerb(text=text, span=span)
    if match.group('date'):
        keyword = ' '.join(text.lower().split())
        return DateKeyword(text=text, span=span, keyword=keyword, day_offset=DATE_OFFSETS[keyword])
    if match.group('duration'):
        minutes = _duration_minutes(match.group('amount'), match.group('unit'))
        return DurationPhrase(text=text, span=span, minutes=minutes)

    token = _time_token(match, span)
    # Out-of-range clock readings ("25", "13pm") stay part of the title.
    return token if token is not None else Literal(text=text, span=span)


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into tagged tokens covering the whole string."""
    tokens: List[Token] = []
    cursor = 0

    for match in _TOKEN_RE.finditer(text):
        start, end = match.span()
        if start > cursor:
            tokens.append(Literal(text=text[cursor:start], span=(cursor, start)))
        tokens.append(_classify(match))
        cursor = end

    if cursor < len(text):
        tokens.append(Literal(text=text[cursor:], span=(cursor, len(text))))

    return _merge_literals(tokens)


def _merge_literals(tokens: List[Token]) -> List[Token]:
    """Join adjacent literal tokens into one."""
    merged: List[Token] = []
    for token in tokens:
        previous = merged[-1] if merged else None
        if isinstance(token, Literal) and isinstance(previous, Literal):
            merged[-1] = Literal(
                text=previous.text + token.text,
                span=(previous.span[0], token.span[1]),
            )
        else:
            merged.append(token)
    return merged
