from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DayOffset:
    day_offset: int
    label: Optional[str]


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def day_label(day_offset: int) -> Optional[str]:
    if day_offset == 1:
        return "Tomorrow"
    if day_offset == -1:
        return "Yesterday"
    if day_offset > 1:
        return f"+{day_offset} days"
    if day_offset < -1:
        return f"{day_offset} days"
    return None


def label(source_day: date | datetime, target_day: date | datetime) -> DayOffset:
    """
    Signed whole-day difference between two calendar days (target - source).

    Aware datetimes contribute their own local calendar day; the difference is
    taken on proleptic ordinals so DST shifts never produce fractional days.
    """
    offset = _as_date(target_day).toordinal() - _as_date(source_day).toordinal()
    return DayOffset(day_offset=offset, label=day_label(offset))
