from __future__ import annotations

from enum import StrEnum
from typing import Iterable, Optional, TYPE_CHECKING

from zonesync.config import STARTING_SOON_HOUR, WORK_END_HOUR, WORK_START_HOUR

if TYPE_CHECKING:
    from zonesync.model.conversion import DerivedRecord


class WorkState(StrEnum):
    """Where a local hour falls relative to the work window."""
    WORKING = "working"
    STARTING_SOON = "startingSoon"
    OUTSIDE = "outside"


def classify(hour: int) -> WorkState:
    """
    Classify an hour of day. Both ranges are half-open.

    Examples:
        - classify(9)  -> WORKING
        - classify(18) -> OUTSIDE
        - classify(7)  -> STARTING_SOON
    """
    if WORK_START_HOUR <= hour < WORK_END_HOUR:
        return WorkState.WORKING
    if STARTING_SOON_HOUR <= hour < WORK_START_HOUR:
        return WorkState.STARTING_SOON
    return WorkState.OUTSIDE


def group_by_work_state(
    records: Iterable[DerivedRecord],
    exclude_id: Optional[str] = None,
) -> dict[WorkState, list[DerivedRecord]]:
    """
    Bucket records by work state, keeping roster order inside each bucket.

    Every state is present in the result, possibly with an empty list.
    The record whose location id equals `exclude_id` is left out.
    """
    groups: dict[WorkState, list[DerivedRecord]] = {state: [] for state in WorkState}
    for record in records:
        if record.location.id == exclude_id:
            continue
        groups[record.work_state].append(record)
    return groups
