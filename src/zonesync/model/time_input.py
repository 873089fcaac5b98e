"""
Helpers for the free-text time field and the 12/24-hour display.

The parser is deliberately forgiving while the user is typing: incomplete
input yields None instead of an error, and a complete value yields a
`TimePatch` ready for `SourceTimeState.apply_patch`.
"""
from __future__ import annotations

import re
from typing import Literal, Optional

from zonesync.model.source_state import TimePatch

Period = Literal["AM", "PM"]

MAX_INPUT_LENGTH = 5
_STRIP_RE = re.compile(r"[^\d:]")


def period_of(hour: int) -> Period:
    return "PM" if hour >= 12 else "AM"


def to_12_hour(hour: int) -> tuple[int, Period]:
    """0 -> (12, "AM"), 13 -> (1, "PM"), 12 -> (12, "PM")."""
    period = period_of(hour)
    if hour == 0:
        return 12, period
    if hour > 12:
        return hour - 12, period
    return hour, period


def format_clock(hour: int, minute: int, use_24h: bool = True) -> str:
    """'HH:MM' in 24-hour mode, 'HH:MM AM/PM' otherwise."""
    if use_24h:
        return f"{hour:02d}:{minute:02d}"
    display_hour, period = to_12_hour(hour)
    return f"{display_hour:02d}:{minute:02d} {period}"


def sanitize(text: str) -> str:
    """Keep digits and colons, at most MAX_INPUT_LENGTH characters."""
    return _STRIP_RE.sub("", text)[:MAX_INPUT_LENGTH]


def _split(value: str) -> Optional[tuple[str, str]]:
    if ":" in value:
        hour_text, _, minute_text = value.partition(":")
        if len(minute_text) != 2:
            return None
        return hour_text, minute_text
    if len(value) == 4:
        return value[:2], value[2:]
    if len(value) == 3:
        return value[:1], value[1:]
    return None


def parse_time_text(text: str, use_24h: bool = True, period: Period = "AM") -> Optional[TimePatch]:
    """
    Parse partial user input into an {hour, minute} patch.

    Accepted shapes: "H:MM", "HH:MM", "HMM", "HHMM".

    Args:
        text: Raw text from the input field.
        use_24h: 24-hour input clamps the hour to 0..23; 12-hour input clamps
            to 1..12 and applies `period`.
        period: Current AM/PM period, used only in 12-hour mode.

    Returns:
        A TimePatch, or None while the input is incomplete or the minute is
        out of range.
    """
    parts = _split(sanitize(text))
    if parts is None:
        return None
    hour_text, minute_text = parts
    if not hour_text.isdigit() or not minute_text.isdigit():
        return None

    hour = int(hour_text)
    minute = int(minute_text)
    if not 0 <= minute <= 59:
        return None

    if use_24h:
        hour = min(23, max(0, hour))
    else:
        hour = min(12, max(1, hour))
        if period == "PM" and hour != 12:
            hour += 12
        elif period == "AM" and hour == 12:
            hour = 0

    return TimePatch(hour=hour, minute=minute)


def toggle_period(hour: int) -> TimePatch:
    """Flip between AM and PM keeping the 12-hour clock face value."""
    return TimePatch(hour=hour + 12 if hour < 12 else hour - 12)
