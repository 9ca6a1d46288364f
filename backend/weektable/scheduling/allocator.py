"""Greedy, randomized placement of desired-activity sessions.

Each activity gets a shuffled pool of candidate start slots drawn from its
preferred part of the day. Daily activities try to place one session on every
day; weekly activities carve their weekly total into sessions and place them
one at a time, broadening to the whole day once when nothing fits. Placement
never raises: whatever does not fit is left out and shows up as unplaced hours
in the activity's report.
"""
from __future__ import annotations

import logging
import math
import random
from typing import Iterable, List, Optional, Sequence, Tuple

from weektable.scheduling.boundaries import DayBoundaries
from weektable.scheduling.grid import WeekGrid
from weektable.scheduling.models import (
    DAYS_OF_WEEK,
    ActivityReport,
    Commitment,
    DayOfWeek,
    DesiredActivity,
    Frequency,
    PlacementRecord,
    PreferredTime,
    SessionContinuation,
    SessionStart,
)

logger = logging.getLogger(__name__)

SESSION_TOLERANCE_HOURS = 0.01
REMAINING_EPSILON_HOURS = 0.01
TAIL_THRESHOLD_HOURS = 0.4
MIN_TAIL_SESSION_HOURS = 0.5
EXTRA_WEEKLY_ATTEMPTS = 7

MORNING_EARLIEST_HOUR = 7
NOON_HOUR = 12
AFTERNOON_END_HOUR = 17
EVENING_LATEST_HOUR = 22


def round_to_half_hour(hours: float) -> float:
    """Round to the nearest half hour, halves rounding up."""
    return math.floor(hours * 2 + 0.5) / 2


def weekly_attempt_limit(activity: DesiredActivity) -> int:
    return math.ceil(activity.total_hours / activity.min_session_hours) + EXTRA_WEEKLY_ATTEMPTS


class ActivityAllocator:
    """Places activity sessions onto a grid that already carries the commitments."""

    def __init__(
        self,
        grid: WeekGrid,
        commitments: Iterable[Commitment],
        boundaries: DayBoundaries,
        rng: Optional[random.Random] = None,
    ):
        self.grid = grid
        self.commitments: Tuple[Commitment, ...] = tuple(commitments)
        self.boundaries = boundaries
        self.rng = rng if rng is not None else random.Random()

    def allocate(self, activities: Sequence[DesiredActivity]) -> List[ActivityReport]:
        """Place every activity in random order; reports come back in input order."""
        order = self.rng.sample(range(len(activities)), len(activities))
        reports = {}
        for index in order:
            reports[index] = self.allocate_activity(activities[index])
        return [reports[index] for index in range(len(activities))]

    def allocate_activity(self, activity: DesiredActivity) -> ActivityReport:
        if activity.frequency == Frequency.DAILY:
            report = self._allocate_daily(activity)
        else:
            report = self._allocate_weekly(activity)
        report.placed_hours = round(report.placed_hours, 2)
        if not report.fully_placed:
            logger.debug(
                "Activity %s partially placed: %.2f of %.2f hours",
                activity.name,
                report.placed_hours,
                report.requested_hours,
            )
        return report

    def preferred_window(self, preferred_time: PreferredTime) -> Tuple[int, int]:
        """Return the ``[first_hour, end_hour)`` range for a part of the day."""
        if preferred_time == PreferredTime.MORNING:
            return max(self.boundaries.wake_hour, MORNING_EARLIEST_HOUR), NOON_HOUR
        if preferred_time == PreferredTime.AFTERNOON:
            return NOON_HOUR, AFTERNOON_END_HOUR
        if preferred_time == PreferredTime.EVENING:
            return AFTERNOON_END_HOUR, min(self.boundaries.end_hour, EVENING_LATEST_HOUR)
        return 0, 24

    def candidate_pool(self, preferred_time: PreferredTime) -> List[int]:
        """Slot indices inside the preferred window, shuffled."""
        first_hour, end_hour = self.preferred_window(preferred_time)
        pool = [index for index, slot in enumerate(self.grid.slots) if first_hour <= slot.hour < end_hour]
        self.rng.shuffle(pool)
        return pool

    def is_feasible(self, day: DayOfWeek, start: int, slot_count: int, activity: DesiredActivity) -> bool:
        if start < 0 or start + slot_count > len(self.grid):
            return False

        # Abutting sessions of the same activity must not merge into an overlong run.
        before = self._same_activity_run(day, start - 1, -1, activity.name)
        after = self._same_activity_run(day, start + slot_count, 1, activity.name)
        if before or after:
            if before + slot_count + after > activity.max_session_hours + SESSION_TOLERANCE_HOURS:
                return False

        for index in range(start, start + slot_count):
            hour = self.grid.slots[index].hour
            if self._overlaps_commitment(day, hour):
                return False
            # Another owner blocks the slot; so does an earlier session of this activity,
            # otherwise a stacked session would be counted twice.
            if self.grid.occupants(day, index):
                return False
        return True

    def _allocate_daily(self, activity: DesiredActivity) -> ActivityReport:
        session_hours = activity.daily_session_hours
        slot_count = math.ceil(session_hours)
        report = ActivityReport(activity=activity, requested_hours=session_hours * len(DAYS_OF_WEEK))
        if slot_count <= 0:
            return report

        pool = self.candidate_pool(activity.preferred_time)
        for day in self._shuffled(DAYS_OF_WEEK):
            for start in self._shuffled(pool):
                if self.is_feasible(day, start, slot_count, activity):
                    report.sessions.append(self._place(activity, day, start, slot_count, None, session_hours))
                    report.placed_hours += session_hours
                    break
            else:
                logger.debug("No room for %s on %s", activity.name, day.value)
        return report

    def _allocate_weekly(self, activity: DesiredActivity) -> ActivityReport:
        report = ActivityReport(activity=activity, requested_hours=activity.total_hours)
        remaining = activity.total_hours
        ordinal = 1
        attempts = 0
        max_attempts = weekly_attempt_limit(activity)

        pool = self.candidate_pool(activity.preferred_time)
        broadened = len(pool) == len(self.grid)

        while remaining > REMAINING_EPSILON_HOURS and attempts < max_attempts:
            attempts += 1
            session_hours = self._next_session_hours(activity, remaining)
            if session_hours is None:
                break
            slot_count = math.ceil(session_hours)

            placement = self._place_first_fit(activity, pool, slot_count, ordinal, session_hours)
            if placement is None:
                if broadened:
                    break
                logger.debug("Broadening candidate slots for %s", activity.name)
                pool = self._shuffled(range(len(self.grid)))
                broadened = True
                continue

            report.sessions.append(placement)
            report.placed_hours += session_hours
            remaining = max(0.0, remaining - session_hours)
            ordinal += 1
        return report

    def _next_session_hours(self, activity: DesiredActivity, remaining: float) -> Optional[float]:
        """Length of the next weekly session, or None when the remainder is too small to schedule."""
        if remaining >= activity.min_session_hours:
            hours = max(activity.min_session_hours, min(remaining, activity.max_session_hours))
        elif remaining > TAIL_THRESHOLD_HOURS:
            hours = max(MIN_TAIL_SESSION_HOURS, remaining)
        else:
            return None
        hours = min(round_to_half_hour(hours), remaining)
        return hours if hours > 0 else None

    def _place_first_fit(
        self,
        activity: DesiredActivity,
        pool: Sequence[int],
        slot_count: int,
        ordinal: int,
        hours: float,
    ) -> Optional[PlacementRecord]:
        for day in self._shuffled(DAYS_OF_WEEK):
            for start in self._shuffled(pool):
                if self.is_feasible(day, start, slot_count, activity):
                    return self._place(activity, day, start, slot_count, ordinal, hours)
        return None

    def _place(
        self,
        activity: DesiredActivity,
        day: DayOfWeek,
        start: int,
        slot_count: int,
        ordinal: Optional[int],
        hours: float,
    ) -> PlacementRecord:
        self.grid.add(day, start, SessionStart(activity=activity.name, ordinal=ordinal))
        for index in range(start + 1, start + slot_count):
            self.grid.add(day, index, SessionContinuation(activity=activity.name))
        return PlacementRecord(
            activity_name=activity.name,
            day=day,
            start_slot_index=start,
            slot_count=slot_count,
            session_ordinal=ordinal,
            hours=hours,
        )

    def _same_activity_run(self, day: DayOfWeek, index: int, step: int, activity_name: str) -> int:
        length = 0
        while 0 <= index < len(self.grid):
            if not any(occupant.belongs_to(activity_name) for occupant in self.grid.occupants(day, index)):
                break
            length += 1
            index += step
        return length

    def _overlaps_commitment(self, day: DayOfWeek, hour: int) -> bool:
        return any(
            interval.overlaps_hour(day, hour)
            for commitment in self.commitments
            for interval in commitment.intervals
        )

    def _shuffled(self, items: Iterable) -> list:
        items = list(items)
        self.rng.shuffle(items)
        return items
