"""
Time-of-day colour ramp.

A day is described by a handful of anchor stops, each with a top and a bottom
colour. Any time in between is linearly interpolated per RGB channel, which
gives a continuous sky-like gradient for a location card. A darkening overlay
strength is derived from the perceptual luminance of the result so that light
text stays legible on bright backgrounds.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

HOURS_PER_DAY = 24.0

# Overlay = clamp((avg_luminance - threshold) * gain, 0, max)
OVERLAY_THRESHOLD = 0.42
OVERLAY_GAIN = 0.48
OVERLAY_MAX = 0.22

# Rec. 709 luminance weights
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


class Rgb(NamedTuple):
    r: int
    g: int
    b: int

    def css(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass(frozen=True)
class GradientStop:
    time: float
    top: Rgb
    bottom: Rgb


@dataclass(frozen=True)
class GradientColors:
    top: Rgb
    bottom: Rgb
    contrast_overlay: float


GRADIENT_STOPS: tuple[GradientStop, ...] = (
    GradientStop(0.0, Rgb(10, 10, 18), Rgb(26, 26, 46)),         # midnight
    GradientStop(4.0, Rgb(30, 42, 74), Rgb(42, 26, 10)),         # pre-dawn
    GradientStop(6.0, Rgb(74, 106, 154), Rgb(245, 166, 35)),     # dawn
    GradientStop(9.0, Rgb(125, 211, 252), Rgb(224, 242, 254)),   # morning
    GradientStop(12.0, Rgb(135, 206, 235), Rgb(186, 230, 253)),  # noon
    GradientStop(17.0, Rgb(251, 191, 36), Rgb(96, 165, 250)),    # afternoon
    GradientStop(19.0, Rgb(249, 115, 22), Rgb(49, 46, 129)),     # dusk
    GradientStop(21.0, Rgb(30, 27, 75), Rgb(15, 10, 26)),        # evening
    GradientStop(24.0, Rgb(10, 10, 18), Rgb(26, 26, 46)),        # wraps to midnight
)


def stop_table(
    stops: tuple[GradientStop, ...] = GRADIENT_STOPS,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Stops as arrays.

    Returns:
        (times, tops, bottoms) with shapes (n,), (n, 3), (n, 3).
    """
    times = np.array([s.time for s in stops], dtype=np.float64)
    tops = np.array([s.top for s in stops], dtype=np.float64)
    bottoms = np.array([s.bottom for s in stops], dtype=np.float64)
    return times, tops, bottoms


_TIMES, _TOPS, _BOTTOMS = stop_table()


def time_value(hour: float, minute: float = 0.0) -> float:
    """Continuous hour of day in [0, 24)."""
    return float((hour + minute / 60.0) % HOURS_PER_DAY)


def _interpolate(t: float, colors: npt.NDArray[np.float64]) -> Rgb:
    channels = [np.interp(t, _TIMES, colors[:, c]) for c in range(3)]
    # Round half up per channel
    r, g, b = (int(np.floor(v + 0.5)) for v in channels)
    return Rgb(r, g, b)


def srgb_to_linear(value: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
    """
    Convert an 8-bit sRGB channel value to linear light.

    Args:
        value: Channel value(s) in 0..255.

    Returns:
        Linear intensity in 0..1.
    """
    channel = np.asarray(value, dtype=np.float64) / 255.0
    linear = np.where(channel <= 0.04045, channel / 12.92, ((channel + 0.055) / 1.055) ** 2.4)
    if np.isscalar(value):
        return float(linear)
    return linear


def relative_luminance(color: Rgb | tuple[int, int, int]) -> float:
    linear = srgb_to_linear(np.array(color, dtype=np.float64))
    return float(np.dot(LUMINANCE_WEIGHTS, linear))


def contrast_overlay_for(top: Rgb, bottom: Rgb) -> float:
    """Darkening overlay strength in [0, OVERLAY_MAX] for a pair of colours."""
    average = (relative_luminance(top) + relative_luminance(bottom)) / 2.0
    return float(np.clip((average - OVERLAY_THRESHOLD) * OVERLAY_GAIN, 0.0, OVERLAY_MAX))


def colors_for(hour: float, minute: float = 0.0) -> GradientColors:
    """
    Gradient colours for a wall-clock time.

    Args:
        hour: Hour of day, may be fractional.
        minute: Minute of hour.

    Returns:
        Interpolated top/bottom colours and the contrast overlay strength.
    """
    t = time_value(hour, minute)
    top = _interpolate(t, _TOPS)
    bottom = _interpolate(t, _BOTTOMS)
    return GradientColors(top=top, bottom=bottom, contrast_overlay=contrast_overlay_for(top, bottom))
