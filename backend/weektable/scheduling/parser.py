"""Parse commitment and activity text blocks into typed records.

Both parsers are lenient by contract: an entry that does not follow the
grammar is logged at DEBUG and skipped, it never aborts the whole block.

Commitment paragraph (paragraphs separated by a blank line)::

    Name: Mon, Wed. Uniform time: 09:00 to 17:00.
    Name: Mon, Wed. Specific times: Mon: 09:00 to 12:00; Wed: 13:00 to 15:30.

Activity line::

    Name: 3 hours weekly, Min/Max Session: 1h/2h, Preferred time: morning
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Tuple

from weektable.scheduling.models import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    Commitment,
    CommitmentInterval,
    DayOfWeek,
    DesiredActivity,
    Frequency,
    InvalidActivityError,
    PreferredTime,
)

logger = logging.getLogger(__name__)

NO_COMMITMENTS_SENTINEL = "no fixed commitments specified"
NO_ACTIVITIES_SENTINEL = "no desired activities specified"

UNIFORM_TIME_LABEL = "uniform time"
SPECIFIC_TIMES_LABEL = "specific times"
SESSION_LABEL = "min/max session"
PREFERRED_TIME_LABEL = "preferred time"

_DAY_LOOKUP: Dict[str, DayOfWeek] = {day.value.lower(): day for day in DayOfWeek}
_FULL_DAY_LOOKUP: Dict[str, DayOfWeek] = dict(
    zip(
        ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"),
        DayOfWeek,
    )
)
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_RANGE_SPLIT = re.compile(r"\s+to\s+", re.IGNORECASE)


class ParseError(ValueError):
    """An entry does not follow the expected grammar."""


def parse_commitments(text: str | None) -> List[Commitment]:
    """Return one Commitment per well-formed paragraph; malformed ones are dropped."""
    if not text or NO_COMMITMENTS_SENTINEL in text.lower():
        return []

    commitments: List[Commitment] = []
    for paragraph in _PARAGRAPH_SPLIT.split(text):
        entry = paragraph.strip()
        if not entry:
            continue
        try:
            commitments.append(parse_commitment_entry(entry))
        except ParseError as exc:
            logger.debug("Skipping commitment entry %r: %s", entry[:80], exc)
    return commitments


def parse_commitment_entry(entry: str) -> Commitment:
    name, rest = _split_label(entry)
    days_part, _, time_part = rest.partition(".")
    days = _parse_day_list(days_part)
    label, _, value = time_part.strip().partition(":")
    label = label.strip().lower()

    if label == UNIFORM_TIME_LABEL:
        if not days:
            raise ParseError("uniform time given without any day")
        start, end = parse_time_range(value)
        intervals = [CommitmentInterval(day=day, start_minute=start, end_minute=end) for day in days]
    elif label == SPECIFIC_TIMES_LABEL:
        intervals = _parse_specific_times(value, days)
    else:
        raise ParseError("missing time clause")

    if not intervals:
        raise ParseError("no usable day/time pairs")
    return Commitment(name=name, intervals=tuple(intervals))


def parse_activities(text: str | None) -> List[DesiredActivity]:
    """Return one DesiredActivity per matching line; other lines are skipped."""
    if not text or NO_ACTIVITIES_SENTINEL in text.lower():
        return []

    activities: List[DesiredActivity] = []
    for line in text.splitlines():
        entry = line.strip()
        if not entry:
            continue
        try:
            activities.append(parse_activity_line(entry))
        except (ParseError, InvalidActivityError) as exc:
            logger.debug("Skipping activity line %r: %s", entry[:80], exc)
    return activities


def parse_activity_line(line: str) -> DesiredActivity:
    name, rest = _split_label(line)
    clauses = [clause.strip() for clause in rest.split(",")]
    if len(clauses) < 3:
        raise ParseError("expected duration, session and preferred-time clauses")

    duration_tokens = clauses[0].split()
    if len(duration_tokens) != 3 or duration_tokens[1].lower() != "hours":
        raise ParseError(f"bad duration clause {clauses[0]!r}")
    total_hours = _parse_hours(duration_tokens[0])
    frequency = _parse_enum(Frequency, duration_tokens[2])

    session_label, _, session_value = clauses[1].partition(":")
    if session_label.strip().lower() != SESSION_LABEL:
        raise ParseError(f"bad session clause {clauses[1]!r}")
    min_part, slash, max_part = session_value.strip().partition("/")
    if not slash:
        raise ParseError(f"bad session clause {clauses[1]!r}")
    min_hours = _parse_hours(_strip_hour_suffix(min_part))
    max_hours = _parse_hours(_strip_hour_suffix(max_part))

    preferred_label, _, preferred_value = clauses[2].partition(":")
    if preferred_label.strip().lower() != PREFERRED_TIME_LABEL:
        raise ParseError(f"bad preferred-time clause {clauses[2]!r}")
    preferred_tokens = preferred_value.split()
    if not preferred_tokens:
        raise ParseError("missing preferred time")
    preferred_time = _parse_enum(PreferredTime, preferred_tokens[0].rstrip("."))

    return DesiredActivity(
        name=name,
        total_hours=total_hours,
        min_session_hours=min_hours,
        max_session_hours=max_hours,
        frequency=frequency,
        preferred_time=preferred_time,
    )


def parse_clock(value: str) -> int:
    """Parse ``HH:MM`` (24-hour, ``24:00`` allowed) into minutes since midnight."""
    hours_text, colon, minutes_text = value.strip().partition(":")
    if not colon or len(minutes_text) != 2 or not (1 <= len(hours_text) <= 2):
        raise ParseError(f"bad clock value {value!r}")
    if not (hours_text.isdigit() and minutes_text.isdigit()):
        raise ParseError(f"bad clock value {value!r}")
    hours, minutes = int(hours_text), int(minutes_text)
    if minutes >= MINUTES_PER_HOUR:
        raise ParseError(f"bad clock value {value!r}")
    minute_of_day = hours * MINUTES_PER_HOUR + minutes
    if minute_of_day > MINUTES_PER_DAY:
        raise ParseError(f"clock value out of range {value!r}")
    return minute_of_day


def parse_time_range(value: str) -> Tuple[int, int]:
    """Parse ``HH:MM to HH:MM`` into a ``(start, end)`` minute pair with start < end."""
    parts = _RANGE_SPLIT.split(value.strip().rstrip(".").strip())
    if len(parts) != 2:
        raise ParseError(f"bad time range {value!r}")
    start, end = parse_clock(parts[0]), parse_clock(parts[1])
    if start >= end:
        raise ParseError(f"time range ends before it starts {value!r}")
    return start, end


def parse_day(token: str) -> DayOfWeek:
    """Accept three-letter abbreviations and full day names, case-insensitively."""
    key = token.strip().lower()
    day = _DAY_LOOKUP.get(key) or _FULL_DAY_LOOKUP.get(key)
    if day is None:
        raise ParseError(f"unknown day {token!r}")
    return day


def _parse_specific_times(value: str, days: List[DayOfWeek]) -> List[CommitmentInterval]:
    intervals: List[CommitmentInterval] = []
    for raw in value.split(";"):
        item = raw.strip().rstrip(".")
        if not item:
            continue
        day_text, _, range_text = item.partition(":")
        try:
            day = parse_day(day_text)
            start, end = parse_time_range(range_text)
        except ParseError as exc:
            logger.debug("Skipping specific time %r: %s", item, exc)
            continue
        if day not in days:
            logger.debug("Skipping specific time %r: %s is not one of the listed days", item, day.value)
            continue
        intervals.append(CommitmentInterval(day=day, start_minute=start, end_minute=end))
    return intervals


def _parse_day_list(value: str) -> List[DayOfWeek]:
    days: List[DayOfWeek] = []
    for token in value.split(","):
        if not token.strip():
            continue
        try:
            day = parse_day(token)
        except ParseError:
            return []
        if day not in days:
            days.append(day)
    return days


def _split_label(entry: str) -> Tuple[str, str]:
    name, colon, rest = entry.partition(":")
    name = name.strip()
    if not colon or not name:
        raise ParseError("missing name")
    return name, rest.strip()


def _strip_hour_suffix(value: str) -> str:
    value = value.strip()
    if not value.lower().endswith("h"):
        raise ParseError(f"session bound {value!r} must end with 'h'")
    return value[:-1]


def _parse_hours(value: str) -> float:
    text = value.strip()
    if not text or text.count(".") > 1 or not text.replace(".", "").isdigit():
        raise ParseError(f"bad hour value {value!r}")
    return float(text)


def _parse_enum(enum_cls, value: str):
    try:
        return enum_cls(value.strip().lower())
    except ValueError as exc:
        raise ParseError(f"unknown {enum_cls.__name__} {value!r}") from exc
