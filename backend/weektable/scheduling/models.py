"""Typed records shared by the schedule synthesis engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


class DayOfWeek(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"


# Canonical order; used for output, never for allocation order.
DAYS_OF_WEEK: Tuple[DayOfWeek, ...] = tuple(DayOfWeek)


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


class PreferredTime(str, Enum):
    ANY = "any"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class InvalidActivityError(ValueError):
    """Raised when a desired activity's duration constraints are inconsistent."""


def format_clock(minute_of_day: int) -> str:
    hours, minutes = divmod(minute_of_day, MINUTES_PER_HOUR)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class CommitmentInterval:
    """One weekly occurrence of a commitment, ``[start_minute, end_minute)`` on ``day``."""

    day: DayOfWeek
    start_minute: int
    end_minute: int

    def overlaps_hour(self, day: DayOfWeek, hour: int) -> bool:
        """True when this interval intersects the slot ``[hour:00, hour+1:00)`` on ``day``."""
        if day != self.day:
            return False
        slot_start = hour * MINUTES_PER_HOUR
        slot_end = slot_start + MINUTES_PER_HOUR
        return self.start_minute < slot_end and self.end_minute > slot_start

    @property
    def start_time(self) -> str:
        return format_clock(self.start_minute)

    @property
    def end_time(self) -> str:
        return format_clock(self.end_minute)


@dataclass(frozen=True)
class Commitment:
    name: str
    intervals: Tuple[CommitmentInterval, ...]


@dataclass(frozen=True)
class DesiredActivity:
    """
    A flexible recurring activity to fit into free time.

    For daily activities ``total_hours`` is the per-day duration and must lie
    within the session bounds; for weekly ones it is the week's target and must
    be at least one minimum session.
    """

    name: str
    total_hours: float
    min_session_hours: float
    max_session_hours: float
    frequency: Frequency = Frequency.WEEKLY
    preferred_time: PreferredTime = PreferredTime.ANY

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidActivityError("Activity name is required.")
        if self.min_session_hours <= 0:
            raise InvalidActivityError(f"{self.name}: minimum session must be positive.")
        if self.min_session_hours > self.max_session_hours:
            raise InvalidActivityError(f"{self.name}: minimum session cannot exceed maximum.")
        if self.frequency == Frequency.DAILY and not (
            self.min_session_hours <= self.total_hours <= self.max_session_hours
        ):
            raise InvalidActivityError(f"{self.name}: daily duration must lie within the session bounds.")
        if self.frequency == Frequency.WEEKLY and self.total_hours < self.min_session_hours:
            raise InvalidActivityError(f"{self.name}: weekly total must be at least one minimum session.")

    @property
    def daily_session_hours(self) -> float:
        return max(self.min_session_hours, min(self.total_hours, self.max_session_hours))


@dataclass(frozen=True)
class CommitmentOccupant:
    name: str
    kind: str = field(default="commitment", init=False)

    def belongs_to(self, activity_name: str) -> bool:
        return False


@dataclass(frozen=True)
class SessionStart:
    activity: str
    ordinal: Optional[int] = None
    kind: str = field(default="session_start", init=False)

    @property
    def name(self) -> str:
        return self.activity

    def belongs_to(self, activity_name: str) -> bool:
        return self.activity == activity_name


@dataclass(frozen=True)
class SessionContinuation:
    activity: str
    kind: str = field(default="session_continuation", init=False)

    @property
    def name(self) -> str:
        return self.activity

    def belongs_to(self, activity_name: str) -> bool:
        return self.activity == activity_name


Occupant = Union[CommitmentOccupant, SessionStart, SessionContinuation]


@dataclass(frozen=True)
class PlacementRecord:
    activity_name: str
    day: DayOfWeek
    start_slot_index: int
    slot_count: int
    session_ordinal: Optional[int]
    hours: float


@dataclass
class ActivityReport:
    """How much of an activity the allocator managed to place."""

    activity: DesiredActivity
    requested_hours: float
    placed_hours: float = 0.0
    sessions: List[PlacementRecord] = field(default_factory=list)

    @property
    def unplaced_hours(self) -> float:
        return max(0.0, round(self.requested_hours - self.placed_hours, 2))

    @property
    def fully_placed(self) -> bool:
        return self.unplaced_hours < 0.01
