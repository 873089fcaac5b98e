"""
Time zone helpers built on the IANA database (`zoneinfo` + `tzdata`).

All datetimes handled here are timezone-aware.
"""
from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzlocal import get_localzone_name

from zonesync.config import DEFAULT_LOCATION_ID
from zonesync.model.locations import Location, LocationRegistry

logger = logging.getLogger(__name__)


def resolve_zone(name: str) -> ZoneInfo:
    """
    Resolve an IANA zone name.

    Raises:
        ValueError: For empty or unknown identifiers.
    """
    if not name or not str(name).strip():
        raise ValueError("Empty time zone identifier")
    try:
        return ZoneInfo(str(name).strip())
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid time zone identifier: {name!r}") from ex


def normalize(moment: datetime) -> datetime:
    """
    Round-trip an aware datetime through UTC.

    A wall-clock time that falls into a spring-forward gap comes back shifted
    forward by the size of the gap (02:30 on a 02:00->03:00 day becomes 03:30).
    Existing wall-clock times are returned unchanged.
    """
    if moment.tzinfo is None:
        raise ValueError("normalize() requires an aware datetime")
    return moment.astimezone(timezone.utc).astimezone(moment.tzinfo)


def utc_offset_minutes(moment: datetime) -> int:
    offset = moment.utcoffset()
    if offset is None:
        return 0
    return int(offset.total_seconds() // 60)


def is_dst(moment: datetime) -> bool:
    dst = moment.dst()
    return bool(dst)


def format_utc_offset(minutes: int) -> str:
    """
    Compact UTC offset label.

    Examples:
        - 330  -> "UTC+5:30"
        - -180 -> "UTC-3"
        - 0    -> "UTC+0"
    """
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    if mins:
        return f"UTC{sign}{hours}:{mins:02d}"
    return f"UTC{sign}{hours}"


def detect_local_zone_name() -> Optional[str]:
    """IANA name of the machine's zone, or None if it cannot be determined."""
    try:
        name = get_localzone_name()
    except Exception as ex:  # tzlocal raises a variety of errors on broken setups
        logger.warning(f"Could not detect local time zone: {ex}")
        return None
    return name or None


def default_location(registry: LocationRegistry) -> Location:
    return registry.find(DEFAULT_LOCATION_ID) or registry.all()[0]


def detect_location(
    registry: LocationRegistry,
    now: datetime,
    zone_name: Optional[str] = None,
) -> Location:
    """
    Pick the roster location that best matches the user's zone.

    Order:
        1) A location in exactly the same IANA zone.
        2) The first location with the same UTC offset at `now`.
        3) The default location.

    Args:
        registry: Candidate locations.
        now: Reference instant for the offset comparison.
        zone_name: User's IANA zone; detected from the system when omitted.
    """
    if zone_name is None:
        zone_name = detect_local_zone_name()
    if not zone_name:
        logger.warning("No local time zone available, falling back to default location.")
        return default_location(registry)

    exact = registry.find_by_timezone(zone_name)
    if exact is not None:
        return exact

    try:
        user_offset = now.astimezone(resolve_zone(zone_name)).utcoffset()
    except ValueError as ex:
        logger.warning(f"{ex}; falling back to default location.")
        return default_location(registry)

    for loc in registry:
        if now.astimezone(loc.zone).utcoffset() == user_offset:
            logger.debug(f"Matched local zone {zone_name} to {loc.id} by UTC offset.")
            return loc

    return default_location(registry)
