"""
Source Time State (Data Model)
==============================
This module defines the single authoritative value of the application: the
selected source location and an instant anchored in that location's zone.

Why is this file needed?
------------------------
1. State Management: Every displayed time is derived from this one object.
2. Single Writer: It is mutated only through `set_source`, `apply_patch` and
   `set_now`, each of which keeps the anchor in the source location's zone.
3. Validation: Time/date patches are checked as a whole before anything is
   written, so a rejected patch never leaves a half-applied state behind.

Classes:
    PatchError: Raised for an invalid time/date patch.
    TimePatch: Validated {hour?, minute?, date?} edit.
    SourceTimeComponents: Editable-field view of the anchor.
    SourceTimeState: The state container.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import logging
import re
from typing import Any, Mapping, NamedTuple, Optional, Union

from zonesync.model.locations import DEFAULT_REGISTRY, Location, LocationRegistry
from zonesync.model.zones import detect_location, normalize

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_PATCH_KEYS = frozenset({"hour", "minute", "date"})


class PatchError(ValueError):
    """Invalid hour, minute or date in a time patch."""


def _check_int(name: str, value: Any, low: int, high: int) -> int:
    # bool is an int subclass, but True is not an hour
    if isinstance(value, bool) or not isinstance(value, int):
        raise PatchError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise PatchError(f"{name} must be in {low}..{high}, got {value}")
    return value


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a strict YYYY-MM-DD calendar day.

    Raises:
        PatchError: For malformed strings or impossible days (e.g. 2023-02-29).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise PatchError(f"date must be a 'YYYY-MM-DD' string, got {value!r}")
    m = _DATE_RE.match(value.strip())
    if not m:
        raise PatchError(f"date must look like 'YYYY-MM-DD', got {value!r}")
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError as ex:
        raise PatchError(f"Invalid date {value!r}: {ex}") from ex


@dataclass(frozen=True)
class TimePatch:
    """
    Wall-clock edit for the source time. Absent fields are left untouched.
    A string date is parsed on construction.
    """
    hour: Optional[int] = None
    minute: Optional[int] = None
    date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.hour is not None:
            _check_int("hour", self.hour, 0, 23)
        if self.minute is not None:
            _check_int("minute", self.minute, 0, 59)
        if self.date is not None:
            object.__setattr__(self, "date", parse_date(self.date))

    @classmethod
    def coerce(cls, patch: Union[TimePatch, Mapping[str, Any]]) -> TimePatch:
        if isinstance(patch, TimePatch):
            return patch
        if not isinstance(patch, Mapping):
            raise PatchError(f"Patch must be a TimePatch or a mapping, got {type(patch).__name__}")
        unknown = set(patch) - _PATCH_KEYS
        if unknown:
            raise PatchError(f"Unknown patch fields: {', '.join(sorted(map(str, unknown)))}")
        return cls(hour=patch.get("hour"), minute=patch.get("minute"), date=patch.get("date"))

    def is_empty(self) -> bool:
        return self.hour is None and self.minute is None and self.date is None


class SourceTimeComponents(NamedTuple):
    hour: int
    minute: int
    date: str


def _require_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError(f"Expected a timezone-aware datetime, got {moment!r}")
    return moment


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SourceTimeState:
    """
    The selected source location and the anchor instant in its zone.
    Pass this instance to the conversion engine; mutate it only through the
    methods below.
    """
    location: Location
    anchor: datetime
    registry: LocationRegistry = field(default=DEFAULT_REGISTRY, repr=False)

    def __post_init__(self) -> None:
        if self.location.id not in self.registry:
            raise ValueError(f"Location '{self.location.id}' is not in the registry.")
        self.anchor = _require_aware(self.anchor).astimezone(self.location.zone)

    @classmethod
    def initial(
        cls,
        registry: LocationRegistry = DEFAULT_REGISTRY,
        now: Optional[datetime] = None,
        zone_name: Optional[str] = None,
    ) -> SourceTimeState:
        """Seed the state from the user's zone and the current time."""
        now = _require_aware(now) if now is not None else utc_now()
        location = detect_location(registry, now, zone_name)
        logger.info(f"Source location initialised to '{location.id}'.")
        return cls(location=location, anchor=now, registry=registry)

    @property
    def location_id(self) -> str:
        return self.location.id

    def set_source(self, location_id: str) -> bool:
        """
        Switch the source location, keeping the same absolute instant.

        Returns:
            True if the source changed; False for unknown or unchanged ids.
        """
        if location_id == self.location.id:
            return False
        new_location = self.registry.find(location_id)
        if new_location is None:
            logger.debug(f"Ignoring unknown source location '{location_id}'.")
            return False
        self.anchor = self.anchor.astimezone(new_location.zone)
        self.location = new_location
        return True

    def apply_patch(self, patch: Union[TimePatch, Mapping[str, Any]]) -> None:
        """
        Overwrite individual wall-clock components of the anchor.

        Fields not present in the patch (including seconds) keep their value.
        Non-existent wall times are moved forward past the DST gap.

        Raises:
            PatchError: If any field is invalid; the anchor is left unchanged.
        """
        patch = TimePatch.coerce(patch)
        if patch.is_empty():
            return

        changes: dict[str, int] = {}
        if patch.date is not None:
            changes.update(year=patch.date.year, month=patch.date.month, day=patch.date.day)
        if patch.hour is not None:
            changes["hour"] = patch.hour
        if patch.minute is not None:
            changes["minute"] = patch.minute

        # A patched wall time always means its first occurrence
        self.anchor = normalize(self.anchor.replace(fold=0, **changes))

    def set_now(self, now: Optional[datetime] = None) -> None:
        """Discard any manual override and anchor to the real current instant."""
        now = _require_aware(now) if now is not None else utc_now()
        self.anchor = now.astimezone(self.location.zone)

    def components(self) -> SourceTimeComponents:
        return SourceTimeComponents(
            hour=self.anchor.hour,
            minute=self.anchor.minute,
            date=self.anchor.date().isoformat(),
        )
