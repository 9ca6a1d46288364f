"""Weekly grid of hourly slots."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

from weektable.scheduling.boundaries import FALLBACK_END_HOUR, FALLBACK_START_HOUR
from weektable.scheduling.models import DAYS_OF_WEEK, MINUTES_PER_HOUR, DayOfWeek, Occupant


@dataclass(frozen=True)
class TimeSlot:
    """The hour-aligned interval ``[hour:00, hour+1:00)``."""

    hour: int

    @property
    def start_minute(self) -> int:
        return self.hour * MINUTES_PER_HOUR

    @property
    def end_minute(self) -> int:
        return (self.hour + 1) * MINUTES_PER_HOUR

    @property
    def start_label(self) -> str:
        return f"{self.hour:02d}:00"

    @property
    def end_label(self) -> str:
        return f"{(self.hour + 1) % 24:02d}:00"


class WeekGrid:
    """Seven days sharing one ascending slot sequence; each cell holds occupants."""

    def __init__(self, slots: Sequence[TimeSlot]):
        if not slots:
            raise ValueError("A week grid needs at least one slot")
        self.slots: Tuple[TimeSlot, ...] = tuple(slots)
        self._cells: Dict[DayOfWeek, List[List[Occupant]]] = {
            day: [[] for _ in self.slots] for day in DAYS_OF_WEEK
        }

    def __len__(self) -> int:
        return len(self.slots)

    def occupants(self, day: DayOfWeek, index: int) -> Tuple[Occupant, ...]:
        return tuple(self._cells[day][index])

    def add(self, day: DayOfWeek, index: int, occupant: Occupant) -> None:
        self._cells[day][index].append(occupant)

    def is_free(self, day: DayOfWeek, index: int) -> bool:
        return not self._cells[day][index]

    def iter_cells(self) -> Iterator[Tuple[DayOfWeek, int, Tuple[Occupant, ...]]]:
        """Yield ``(day, slot index, occupants)`` in canonical day order, then slot order."""
        for day in DAYS_OF_WEEK:
            for index in range(len(self.slots)):
                yield day, index, tuple(self._cells[day][index])


def build_grid(start_hour: int, end_hour: int) -> WeekGrid:
    """Build an empty grid for ``[start_hour, end_hour)``, or the fallback window if that is empty."""
    hours = range(start_hour, end_hour)
    if not hours:
        hours = range(FALLBACK_START_HOUR, FALLBACK_END_HOUR)
    return WeekGrid([TimeSlot(hour=hour) for hour in hours])
