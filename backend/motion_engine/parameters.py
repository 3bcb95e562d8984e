"""
Numeric render parameters and motion profile expressions.

Durations are clamped rather than rejected, and unknown motion profiles fall
back to the cinematic zoom.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_DURATION = 8.0
MIN_DURATION = 5.0
MAX_DURATION = 20.0

FRAME_RATE = 30
MIN_FRAME_COUNT = 90

CINEMATIC_ZOOM_STEP = 0.0025
CINEMATIC_MAX_ZOOM = 1.18
PULSE_BASE_ZOOM = 1.05
PULSE_AMPLITUDE = 0.05
PAN_ZOOM = 1.05
PAN_TRAVEL = 0.02


class MotionProfile(str, Enum):
    """Named zoom/pan presets."""

    CINEMATIC = "cinematic"
    PULSE = "pulse"
    PAN = "pan"


MOTION_DESCRIPTIONS = {
    MotionProfile.CINEMATIC: "Slow push-in zoom capped at 1.18x",
    MotionProfile.PULSE: "Sinusoidal breathing zoom around 1.05x",
    MotionProfile.PAN: "Fixed 1.05x zoom drifting diagonally over the clip",
}


class MotionExpression(BaseModel):
    """zoompan expressions for one motion profile."""

    model_config = ConfigDict(frozen=True)

    profile: MotionProfile
    zoom: str
    x: Optional[str] = None
    y: Optional[str] = None


def _numeric_or_default(raw: Any, default: float) -> float:
    if raw is None or isinstance(raw, bool):
        return default

    try:
        value = float(str(raw).strip())
    except ValueError:
        return default

    if math.isnan(value):
        return default
    # Zero is a real number and gets clamped like any other
    return value


def resolve_duration(raw: Any) -> float:
    """
    Resolve a requested duration in seconds.

    Absent, empty or non-numeric values use the 8 second default; the result
    is clamped into [5, 20].
    """
    value = _numeric_or_default(raw, DEFAULT_DURATION)
    return max(MIN_DURATION, min(value, MAX_DURATION))


def frame_count(duration_seconds: float) -> int:
    """Frames to generate at 30 fps, never fewer than 90."""
    return max(math.floor(duration_seconds * FRAME_RATE), MIN_FRAME_COUNT)


def resolve_motion_profile(raw: Any) -> MotionProfile:
    """Map a raw form value onto a profile; anything unrecognized is cinematic."""
    if raw is None:
        return MotionProfile.CINEMATIC

    try:
        return MotionProfile(str(raw).strip().lower())
    except ValueError:
        return MotionProfile.CINEMATIC


def _format_number(value: float) -> str:
    # zoompan expressions read cleaner without a trailing ".0"
    return f"{value:g}"


def motion_expression(profile: MotionProfile, duration_seconds: float) -> MotionExpression:
    """
    Build the zoompan expressions for ``profile``.

    Elapsed time is expressed as the output frame number ``on`` divided by the
    frame rate, so every expression is a function of elapsed and total time.
    """
    duration = _format_number(duration_seconds)
    elapsed = f"(on/{FRAME_RATE})"

    if profile is MotionProfile.PULSE:
        return MotionExpression(
            profile=profile,
            zoom=(
                f"{_format_number(PULSE_BASE_ZOOM)}"
                f"+{_format_number(PULSE_AMPLITUDE)}*sin(2*PI*{elapsed}/{duration})"
            ),
        )

    if profile is MotionProfile.PAN:
        travel = _format_number(PAN_TRAVEL)
        return MotionExpression(
            profile=profile,
            zoom=_format_number(PAN_ZOOM),
            x=f"iw*{travel}*{elapsed}/{duration}",
            y=f"ih*{travel}*{elapsed}/{duration}",
        )

    return MotionExpression(
        profile=MotionProfile.CINEMATIC,
        zoom=(
            f"min(zoom+{_format_number(CINEMATIC_ZOOM_STEP)},"
            f"{_format_number(CINEMATIC_MAX_ZOOM)})"
        ),
    )
