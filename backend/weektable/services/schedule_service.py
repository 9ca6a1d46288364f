"""Schedule generation action used by the HTTP layer."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from time import perf_counter
from typing import Optional

from weektable.api.schemas.schedule import ScheduleRequest
from weektable.core.config import settings
from weektable.observability.metrics import log_metric
from weektable.observability.tracing import annotate, trace
from weektable.scheduling.assembler import ScheduleResult
from weektable.scheduling.engine import generate_schedule

logger = logging.getLogger(__name__)


@dataclass
class ScheduleGeneration:
    result: ScheduleResult
    summary_lifestyle: str
    summary_commitments: str
    summary_desired_activities: str


def generate_schedule_action(
    request: ScheduleRequest,
    *,
    seed: Optional[int] = None,
    request_id: str | None = None,
) -> ScheduleGeneration:
    """
    Build a timetable from the three text blocks.

    ``seed`` falls back to the SCHEDULE_SEED setting; with neither set each
    call draws a fresh placement, which is how "regenerate" gets its variety.
    """
    if seed is None:
        seed = settings.schedule_seed
    rng = random.Random(seed)
    start = perf_counter()

    metadata = {
        "lifestyle_length": len(request.lifestyle_assessment),
        "commitments_length": len(request.commitments),
        "activities_length": len(request.desired_activities),
        "seeded": seed is not None,
    }
    with trace("schedule.generate", metadata=metadata, request_id=request_id, tags=["schedule"]) as span:
        result = generate_schedule(
            request.lifestyle_assessment,
            request.commitments,
            request.desired_activities,
            rng=rng,
            default_wake=settings.default_wake_hour,
            default_bed=settings.default_bed_hour,
            fallback=(settings.fallback_start_hour, settings.fallback_end_hour),
        )
        annotate(
            span,
            **metadata,
            commitments=len(result.commitments),
            activities=len(result.activities),
            unplaced_activities=len(result.unplaced_reports),
        )

    requested = sum(report.requested_hours for report in result.reports)
    placed = sum(report.placed_hours for report in result.reports)
    log_metric("schedule.generate.placed_ratio", round(placed / requested, 3) if requested else 1.0)
    log_metric("schedule.generate.unplaced_activities", len(result.unplaced_reports))
    log_metric("schedule.generate.latency_ms", (perf_counter() - start) * 1000)

    return ScheduleGeneration(
        result=result,
        summary_lifestyle=_lifestyle_summary(result, request.lifestyle_assessment),
        summary_commitments=request.commitments,
        summary_desired_activities=request.desired_activities,
    )


def _lifestyle_summary(result: ScheduleResult, lifestyle: str) -> str:
    boundaries = result.boundaries
    return (
        f"Parsed wake-up: {boundaries.wake_hour}:00, Parsed bedtime: {boundaries.bed_hour}:00. "
        f"Other details: {lifestyle}"
    )
