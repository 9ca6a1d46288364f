"""Stamp fixed commitments onto the week grid."""
from __future__ import annotations

import logging
from typing import Iterable

from weektable.scheduling.grid import WeekGrid
from weektable.scheduling.models import Commitment, CommitmentOccupant

logger = logging.getLogger(__name__)


def place_commitments(grid: WeekGrid, commitments: Iterable[Commitment]) -> int:
    """
    Mark every slot overlapped by a commitment interval.

    A commitment appears at most once per slot even when two of its intervals
    touch the same hour. Returns the number of cells stamped.
    """
    stamped = 0
    for commitment in commitments:
        occupant = CommitmentOccupant(name=commitment.name)
        for interval in commitment.intervals:
            for index, slot in enumerate(grid.slots):
                if not interval.overlaps_hour(interval.day, slot.hour):
                    continue
                if occupant in grid.occupants(interval.day, index):
                    continue
                grid.add(interval.day, index, occupant)
                stamped += 1
    logger.debug("Placed %d commitment cells", stamped)
    return stamped
