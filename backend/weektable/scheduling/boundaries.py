"""Derive the active hours of the day from lifestyle text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_WAKE_HOUR = 7
DEFAULT_BED_HOUR = 22
FALLBACK_START_HOUR = 8
FALLBACK_END_HOUR = 21
MIDNIGHT_END_HOUR = 24

_WAKE_PATTERN = re.compile(r"wakes up around (\d{1,2}):\d{2}", re.IGNORECASE)
_BED_PATTERN = re.compile(r"goes to bed around (\d{1,2}):\d{2}", re.IGNORECASE)


@dataclass(frozen=True)
class DayBoundaries:
    """Parsed wake/bed hours and the resolved ``[start_hour, end_hour)`` table range."""

    wake_hour: int
    bed_hour: int
    start_hour: int
    end_hour: int
    used_fallback: bool = False


def extract_wake_bed_hours(
    text: str | None,
    *,
    default_wake: int = DEFAULT_WAKE_HOUR,
    default_bed: int = DEFAULT_BED_HOUR,
) -> Tuple[int, int]:
    """Return (wake_hour, bed_hour); missing or out-of-range values fall back to the defaults."""
    text = text or ""
    wake = _match_hour(_WAKE_PATTERN, text)
    bed = _match_hour(_BED_PATTERN, text)
    return (default_wake if wake is None else wake, default_bed if bed is None else bed)


def resolve_day_boundaries(
    text: str | None,
    *,
    default_wake: int = DEFAULT_WAKE_HOUR,
    default_bed: int = DEFAULT_BED_HOUR,
    fallback: Tuple[int, int] = (FALLBACK_START_HOUR, FALLBACK_END_HOUR),
) -> DayBoundaries:
    wake, bed = extract_wake_bed_hours(text, default_wake=default_wake, default_bed=default_bed)
    return resolve_hours(wake, bed, fallback=fallback)


def resolve_hours(
    wake_hour: int,
    bed_hour: int,
    *,
    fallback: Tuple[int, int] = (FALLBACK_START_HOUR, FALLBACK_END_HOUR),
) -> DayBoundaries:
    """
    Resolve the table range for a wake/bed pair.

    A bedtime of midnight, or one earlier than waking, means the day runs
    through hour 24. An empty range (bed == wake) uses the fallback window.
    """
    end_hour = bed_hour
    if bed_hour == 0 or bed_hour < wake_hour:
        end_hour = MIDNIGHT_END_HOUR

    if wake_hour < end_hour:
        return DayBoundaries(wake_hour=wake_hour, bed_hour=bed_hour, start_hour=wake_hour, end_hour=end_hour)

    start, end = fallback
    return DayBoundaries(
        wake_hour=wake_hour, bed_hour=bed_hour, start_hour=start, end_hour=end, used_fallback=True
    )


def _match_hour(pattern: re.Pattern, text: str) -> Optional[int]:
    match = pattern.search(text)
    if not match:
        return None
    hour = int(match.group(1))
    if 0 <= hour <= 23:
        return hour
    return None
