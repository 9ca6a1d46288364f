"""Collect the filled grid into an ordered, immutable result."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from weektable.scheduling.boundaries import DayBoundaries
from weektable.scheduling.grid import TimeSlot, WeekGrid
from weektable.scheduling.models import (
    ActivityReport,
    Commitment,
    DayOfWeek,
    DesiredActivity,
    Occupant,
)


@dataclass(frozen=True)
class CellRecord:
    day: DayOfWeek
    slot_index: int
    slot: TimeSlot
    occupants: Tuple[Occupant, ...]


@dataclass(frozen=True)
class ScheduleResult:
    boundaries: DayBoundaries
    slots: Tuple[TimeSlot, ...]
    cells: Tuple[CellRecord, ...]
    reports: Tuple[ActivityReport, ...]
    commitments: Tuple[Commitment, ...] = ()
    activities: Tuple[DesiredActivity, ...] = ()

    def cell(self, day: DayOfWeek, hour: int) -> Optional[CellRecord]:
        for record in self.cells:
            if record.day == day and record.slot.hour == hour:
                return record
        return None

    def cells_for(self, day: DayOfWeek) -> Tuple[CellRecord, ...]:
        return tuple(record for record in self.cells if record.day == day)

    @property
    def unplaced_reports(self) -> Tuple[ActivityReport, ...]:
        return tuple(report for report in self.reports if not report.fully_placed)


def assemble(
    grid: WeekGrid,
    boundaries: DayBoundaries,
    reports: Sequence[ActivityReport],
    commitments: Iterable[Commitment] = (),
    activities: Iterable[DesiredActivity] = (),
) -> ScheduleResult:
    cells = tuple(
        CellRecord(day=day, slot_index=index, slot=grid.slots[index], occupants=occupants)
        for day, index, occupants in grid.iter_cells()
    )
    return ScheduleResult(
        boundaries=boundaries,
        slots=grid.slots,
        cells=cells,
        reports=tuple(reports),
        commitments=tuple(commitments),
        activities=tuple(activities),
    )
