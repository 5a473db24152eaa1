"""
Timecode conversion between decimal seconds and SMPTE HH:MM:SS:FF strings.

Non-drop-frame only. Fractional rates such as 29.97 are counted against the
nominal rate: the frame field is the number of whole frames elapsed since the
start of the current second, so a round trip never drifts by more than one
frame.

Examples:
    seconds_to_timecode(38.32, 25)          # "00:00:38:08"
    timecode_to_seconds("00:00:28:08", 25)  # 28.32
"""

import math
from typing import Union

# PAL, used whenever an event carries no usable frame rate
DEFAULT_FPS = 25

_DAY_SECONDS = 24 * 3600

Number = Union[int, float]


def _check_fps(fps: Number) -> float:
    if isinstance(fps, bool) or not isinstance(fps, (int, float)):
        raise TypeError(f"Frame rate must be a number, got {type(fps).__name__}")
    if fps <= 0:
        raise ValueError(f"Frame rate must be positive, got {fps}")
    return float(fps)


def frame_duration(fps: Number = DEFAULT_FPS) -> float:
    """Length of a single frame in seconds."""
    return 1.0 / _check_fps(fps)


def seconds_to_timecode(seconds: Number, fps: Number = DEFAULT_FPS) -> str:
    """Convert decimal seconds to an ``HH:MM:SS:FF`` timecode.

    Frames are truncated to the frame at or before ``seconds``. Hours wrap
    at 24 like a wall clock.

    Raises:
        ValueError: If ``seconds`` is negative or ``fps`` is not positive.
        TypeError: If either argument is not numeric.
    """
    rate = _check_fps(fps)
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise TypeError(f"Seconds must be a number, got {type(seconds).__name__}")
    if seconds < 0:
        raise ValueError(f"Cannot express negative time as timecode: {seconds}")

    whole_seconds = math.floor(seconds)
    # Rounding first absorbs float noise such as 0.32 * 25 == 7.9999999
    frames = math.floor(round((seconds - whole_seconds) * rate, 6))
    frames = min(frames, math.ceil(rate) - 1)

    hours = (whole_seconds % _DAY_SECONDS) // 3600
    minutes = (whole_seconds % 3600) // 60
    secs = whole_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}:{frames:02d}"


def timecode_to_seconds(timecode: str, fps: Number = DEFAULT_FPS) -> float:
    """Convert a timecode string to decimal seconds.

    Supported formats:
    - "HH:MM:SS:FF" - Standard timecode
    - "HH:MM:SS;FF" - Drop-frame separator, counted as non-drop
    - "HH:MM:SS" - Whole seconds

    Raises:
        ValueError: If the string is not a recognisable timecode.
    """
    rate = _check_fps(fps)
    if not isinstance(timecode, str):
        raise ValueError(f"Invalid timecode format: {timecode!r}")

    tc = timecode.strip()
    parts = tc.replace(';', ':').split(':')
    if len(parts) not in (3, 4) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid timecode format: {timecode!r}")

    values = [int(p) for p in parts]
    h, m, s = values[:3]
    f = values[3] if len(values) == 4 else 0
    if m > 59 or s > 59:
        raise ValueError(f"Invalid timecode format: {timecode!r}")
    return h * 3600 + m * 60 + s + f / rate
