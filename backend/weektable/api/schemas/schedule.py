"""Schemas for schedule generation."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ScheduleRequest(BaseModel):
    lifestyle_assessment: str = ""
    commitments: str = ""
    desired_activities: str = ""
    seed: Optional[int] = Field(default=None, description="Fix the placement for reproducible output")


class DayBoundariesPayload(BaseModel):
    wake_hour: int
    bed_hour: int
    start_hour: int
    end_hour: int
    used_fallback: bool


class TimeSlotPayload(BaseModel):
    index: int
    hour: int
    start: str
    end: str


class OccupantPayload(BaseModel):
    kind: Literal["commitment", "session_start", "session_continuation"]
    name: str
    ordinal: Optional[int] = None


class CellPayload(BaseModel):
    day: str
    slot_index: int
    occupants: List[OccupantPayload]


class SessionPayload(BaseModel):
    day: str
    start_slot_index: int
    start: str
    slot_count: int
    hours: float
    ordinal: Optional[int] = None


class ActivityReportPayload(BaseModel):
    name: str
    frequency: Literal["daily", "weekly"]
    preferred_time: Literal["any", "morning", "afternoon", "evening"]
    requested_hours: float
    placed_hours: float
    unplaced_hours: float
    fully_placed: bool
    sessions: List[SessionPayload]


class ScheduleResponse(BaseModel):
    boundaries: DayBoundariesPayload
    days: List[str]
    slots: List[TimeSlotPayload]
    cells: List[CellPayload]
    activity_reports: List[ActivityReportPayload]
    summary_lifestyle: str
    summary_commitments: str
    summary_desired_activities: str
    request_id: str
