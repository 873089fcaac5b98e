"""
Conversion Engine
=================
Projects the source state into every location on the roster and assembles
one display record per location.

Two time sources are consumed on purpose:
    - `state.anchor`: the (possibly user-edited) instant that drives hours,
      minutes, dates, offsets, work state and colours;
    - `now`: the real current instant, used only for the live seconds field.

`derive_all` is pure: the same state and `now` always give the same records.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from zonesync.model.day_offset import label as day_offset_label
from zonesync.model.gradient import GradientColors, colors_for
from zonesync.model.locations import Location, LocationRegistry
from zonesync.model.source_state import SourceTimeState
from zonesync.model.work_state import WorkState, classify
from zonesync.model.zones import format_utc_offset, is_dst, utc_offset_minutes

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class DerivedRecord:
    """Fully computed display payload for one location."""
    location: Location
    local_time: datetime
    local_hour: int
    local_minute: int
    local_second: int
    calendar_day: date
    utc_offset_minutes: int
    is_dst: bool
    work_state: WorkState
    day_offset: int
    day_label: Optional[str]
    gradient: GradientColors
    is_source: bool
    tz_abbreviation: str

    @property
    def location_id(self) -> str:
        return self.location.id

    @property
    def contrast_overlay(self) -> float:
        return self.gradient.contrast_overlay

    @property
    def gradient_top(self) -> str:
        return self.gradient.top.css()

    @property
    def gradient_bottom(self) -> str:
        return self.gradient.bottom.css()

    @property
    def utc_offset(self) -> str:
        return format_utc_offset(self.utc_offset_minutes)

    @property
    def formatted_time(self) -> str:
        return f"{self.local_hour:02d}:{self.local_minute:02d}"

    @property
    def formatted_seconds(self) -> str:
        return f"{self.local_second:02d}"

    @property
    def formatted_date(self) -> str:
        # e.g. "Sun, Mar 10", independent of the process locale
        day = self.local_time
        return f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}"


def derive_record(state: SourceTimeState, location: Location, now: datetime) -> DerivedRecord:
    local = state.anchor.astimezone(location.zone)
    live = now.astimezone(location.zone)
    offset = day_offset_label(state.anchor, local)

    return DerivedRecord(
        location=location,
        local_time=local,
        local_hour=local.hour,
        local_minute=local.minute,
        local_second=live.second,
        calendar_day=local.date(),
        utc_offset_minutes=utc_offset_minutes(local),
        is_dst=is_dst(local),
        work_state=classify(local.hour),
        day_offset=offset.day_offset,
        day_label=offset.label,
        gradient=colors_for(local.hour, local.minute),
        is_source=location.id == state.location.id,
        tz_abbreviation=local.tzname() or "",
    )


def derive_all(
    state: SourceTimeState,
    now: datetime,
    registry: Optional[LocationRegistry] = None,
) -> tuple[DerivedRecord, ...]:
    """
    Derive the full batch of records, in roster order.

    Args:
        state: Authoritative source location and anchor instant.
        now: Real current instant (timezone-aware), for live seconds.
        registry: Locations to project into; defaults to the state's registry.

    Returns:
        An immutable tuple with exactly one record per location.
    """
    if now.tzinfo is None:
        raise ValueError("derive_all() requires a timezone-aware 'now'")
    registry = registry if registry is not None else state.registry
    return tuple(derive_record(state, location, now) for location in registry)
