"""End-to-end schedule synthesis: parse, build the grid, place, assemble."""
from __future__ import annotations

import logging
import random
from typing import Optional, Sequence, Tuple

from weektable.scheduling.allocator import ActivityAllocator
from weektable.scheduling.assembler import ScheduleResult, assemble
from weektable.scheduling.boundaries import (
    DEFAULT_BED_HOUR,
    DEFAULT_WAKE_HOUR,
    FALLBACK_END_HOUR,
    FALLBACK_START_HOUR,
    DayBoundaries,
    resolve_day_boundaries,
)
from weektable.scheduling.commitments import place_commitments
from weektable.scheduling.grid import build_grid
from weektable.scheduling.models import Commitment, DesiredActivity
from weektable.scheduling.parser import parse_activities, parse_commitments

logger = logging.getLogger(__name__)


def build_schedule(
    boundaries: DayBoundaries,
    commitments: Sequence[Commitment],
    activities: Sequence[DesiredActivity],
    rng: Optional[random.Random] = None,
) -> ScheduleResult:
    """
    Place commitments, then activities, onto a fresh grid.

    Pass a seeded ``random.Random`` for a reproducible placement; without one
    every call may produce a different valid schedule.
    """
    rng = rng if rng is not None else random.Random()
    grid = build_grid(boundaries.start_hour, boundaries.end_hour)
    place_commitments(grid, commitments)

    allocator = ActivityAllocator(grid, commitments, boundaries, rng)
    reports = allocator.allocate(list(activities))

    result = assemble(grid, boundaries, reports, commitments=commitments, activities=activities)
    logger.info(
        "Schedule generated: %d slots/day (%02d:00-%02d:00), %d commitments, %d activities, %d not fully placed",
        len(result.slots),
        result.slots[0].hour,
        result.slots[-1].hour + 1,
        len(result.commitments),
        len(result.activities),
        len(result.unplaced_reports),
    )
    return result


def generate_schedule(
    lifestyle: str | None,
    commitments_text: str | None,
    activities_text: str | None,
    rng: Optional[random.Random] = None,
    *,
    default_wake: int = DEFAULT_WAKE_HOUR,
    default_bed: int = DEFAULT_BED_HOUR,
    fallback: Tuple[int, int] = (FALLBACK_START_HOUR, FALLBACK_END_HOUR),
) -> ScheduleResult:
    """Run the whole pipeline from the three text blocks."""
    boundaries = resolve_day_boundaries(
        lifestyle,
        default_wake=default_wake,
        default_bed=default_bed,
        fallback=fallback,
    )
    commitments = parse_commitments(commitments_text)
    activities = parse_activities(activities_text)
    return build_schedule(boundaries, commitments, activities, rng=rng)
