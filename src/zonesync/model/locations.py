"""Predefined Office Locations (Catalog)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Location:
    """
    One place on the roster.

    `timezone` must be an IANA zone name understood by `zoneinfo`.
    """
    id: str
    name: str
    country: str
    timezone: str
    flag: str
    address: str = ""

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class LocationRegistry:
    """
    Immutable, ordered collection of locations keyed by id.

    Raises:
        ValueError: On duplicate ids, an empty roster or an unknown IANA zone.
    """

    def __init__(self, locations: Iterable[Location]) -> None:
        self._locations: tuple[Location, ...] = tuple(locations)
        if not self._locations:
            raise ValueError("Location registry must contain at least one location.")

        self._by_id: dict[str, Location] = {}
        for loc in self._locations:
            if loc.id in self._by_id:
                raise ValueError(f"Duplicate location id '{loc.id}'.")
            try:
                ZoneInfo(loc.timezone)
            except (ZoneInfoNotFoundError, ValueError) as ex:
                raise ValueError(f"Unknown time zone '{loc.timezone}' for location '{loc.id}'.") from ex
            self._by_id[loc.id] = loc

    def all(self) -> tuple[Location, ...]:
        """All locations in roster order."""
        return self._locations

    def find(self, location_id: str) -> Optional[Location]:
        return self._by_id.get(location_id)

    def find_by_timezone(self, tz_name: str) -> Optional[Location]:
        """First location whose IANA zone equals `tz_name`."""
        for loc in self._locations:
            if loc.timezone == tz_name:
                return loc
        return None

    def ids(self) -> list[str]:
        return [loc.id for loc in self._locations]

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._by_id

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)


# ------------------------------------------------------------------------------
# Roster
# ------------------------------------------------------------------------------
ALL_LOCATIONS: tuple[Location, ...] = (
    Location(
        id="saopaulo",
        name="São Paulo",
        country="Brazil",
        timezone="America/Sao_Paulo",
        flag="🇧🇷",
        address="Av. Brg. Faria Lima, 4221 São Paulo, SP, 04538-133",
    ),
    Location(
        id="austin",
        name="Austin",
        country="USA",
        timezone="America/Chicago",
        flag="🇺🇸",
        address="12401 Research Blvd, Building II, Austin, Texas, 78759",
    ),
    Location(
        id="bristol",
        name="Bristol",
        country="UK",
        timezone="Europe/London",
        flag="🇬🇧",
        address="One Temple Quay, Temple Back E, Bristol, BS1 6DZ",
    ),
    Location(
        id="bangalore",
        name="Bangalore",
        country="India",
        timezone="Asia/Kolkata",
        flag="🇮🇳",
        address="Regus The Estate, 8th Floor, Dickenson Road, Bangalore, 560042",
    ),
    Location(
        id="singapore",
        name="Singapore",
        country="Singapore",
        timezone="Asia/Singapore",
        flag="🇸🇬",
        address="Level 8, 71 Robinson Road, Singapore, 068895",
    ),
)

DEFAULT_REGISTRY = LocationRegistry(ALL_LOCATIONS)
