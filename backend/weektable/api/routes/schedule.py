"""Schedule generation endpoints."""
from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter, Request

from weektable.api.schemas.schedule import (
    ActivityReportPayload,
    CellPayload,
    DayBoundariesPayload,
    OccupantPayload,
    ScheduleRequest,
    ScheduleResponse,
    SessionPayload,
    TimeSlotPayload,
)
from weektable.scheduling.grid import TimeSlot
from weektable.scheduling.models import DAYS_OF_WEEK, ActivityReport, Occupant
from weektable.services.schedule_service import ScheduleGeneration, generate_schedule_action

router = APIRouter()


@router.post("/schedule/generate", response_model=ScheduleResponse, tags=["schedule"])
def schedule_generate(payload: ScheduleRequest, request: Request) -> ScheduleResponse:
    """Generate a weekly timetable; pass ``seed`` to make the placement reproducible."""
    request_id = getattr(request.state, "request_id", None)
    generation = generate_schedule_action(payload, seed=payload.seed, request_id=request_id)
    return _response_from_generation(generation, request_id)


@router.post("/schedule/regenerate", response_model=ScheduleResponse, tags=["schedule"])
def schedule_regenerate(payload: ScheduleRequest, request: Request) -> ScheduleResponse:
    """Generate a new variation for the same input; any seed in the body is ignored."""
    request_id = getattr(request.state, "request_id", None)
    generation = generate_schedule_action(payload.model_copy(update={"seed": None}), request_id=request_id)
    return _response_from_generation(generation, request_id)


def _response_from_generation(generation: ScheduleGeneration, request_id: str | None) -> ScheduleResponse:
    result = generation.result
    boundaries = result.boundaries
    return ScheduleResponse(
        boundaries=DayBoundariesPayload(
            wake_hour=boundaries.wake_hour,
            bed_hour=boundaries.bed_hour,
            start_hour=boundaries.start_hour,
            end_hour=boundaries.end_hour,
            used_fallback=boundaries.used_fallback,
        ),
        days=[day.value for day in DAYS_OF_WEEK],
        slots=[
            TimeSlotPayload(index=index, hour=slot.hour, start=slot.start_label, end=slot.end_label)
            for index, slot in enumerate(result.slots)
        ],
        cells=[
            CellPayload(
                day=cell.day.value,
                slot_index=cell.slot_index,
                occupants=[_occupant_payload(occupant) for occupant in cell.occupants],
            )
            for cell in result.cells
        ],
        activity_reports=[_report_payload(report, result.slots) for report in result.reports],
        summary_lifestyle=generation.summary_lifestyle,
        summary_commitments=generation.summary_commitments,
        summary_desired_activities=generation.summary_desired_activities,
        request_id=request_id or "",
    )


def _occupant_payload(occupant: Occupant) -> OccupantPayload:
    return OccupantPayload(kind=occupant.kind, name=occupant.name, ordinal=getattr(occupant, "ordinal", None))


def _report_payload(report: ActivityReport, slots: Sequence[TimeSlot]) -> ActivityReportPayload:
    activity = report.activity
    return ActivityReportPayload(
        name=activity.name,
        frequency=activity.frequency.value,
        preferred_time=activity.preferred_time.value,
        requested_hours=report.requested_hours,
        placed_hours=report.placed_hours,
        unplaced_hours=report.unplaced_hours,
        fully_placed=report.fully_placed,
        sessions=[
            SessionPayload(
                day=session.day.value,
                start_slot_index=session.start_slot_index,
                start=slots[session.start_slot_index].start_label,
                slot_count=session.slot_count,
                hours=session.hours,
                ordinal=session.session_ordinal,
            )
            for session in report.sessions
        ],
    )
