"""Frame/time conversion and timecode utilities."""

import math
import re

from contact_sheet.config.config import TIME_TO_FRAME_EPSILON
from contact_sheet.exceptions import InvalidConfiguration, InvalidRange, InvalidTimeFormat

_TIMECODE_RE = re.compile(r"^(\d+):([0-5]\d):([0-5]\d)\.(\d{3})$")


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def _check_fps(fps: float) -> None:
    if fps is None or fps <= 0:
        raise InvalidConfiguration(f"FPS must be > 0, got {fps}")


def frame_to_time(frame: int, fps: float) -> float:
    """Convert frame index to seconds."""
    _check_fps(fps)
    if frame < 0:
        raise InvalidRange(f"Frame index must be >= 0, got {frame}")
    return frame / fps


def time_to_frame(seconds: float, fps: float) -> int:
    """Convert seconds to the frame index shown at that moment."""
    _check_fps(fps)
    if seconds < 0:
        raise InvalidRange(f"Time must be >= 0, got {seconds}")
    return int(math.floor(seconds * fps + TIME_TO_FRAME_EPSILON))


def interval_seconds_to_frames(seconds: float, fps: float) -> int:
    """Convert a seconds-denominated interval to whole frames (at least 1)."""
    _check_fps(fps)
    if seconds <= 0:
        raise InvalidRange(f"Interval must be > 0, got {seconds}")
    return max(1, round_half_up(seconds * fps))


def interval_frames_to_seconds(frames: float, fps: float) -> float:
    """Seconds view of a frame-denominated interval."""
    _check_fps(fps)
    return frames / fps


def format_time(seconds: float) -> str:
    """Format seconds as HH:MM:SS.mmm."""
    if seconds < 0:
        raise InvalidRange(f"Time must be >= 0, got {seconds}")
    total_ms = round_half_up(seconds * 1000)
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def parse_time(text: str) -> float:
    """Parse HH:MM:SS.mmm into seconds. Inverse of format_time."""
    if text is None:
        raise InvalidTimeFormat("Time value not specified")
    match = _TIMECODE_RE.match(text.strip())
    if not match:
        raise InvalidTimeFormat(f"Invalid time format '{text}'. Expected HH:MM:SS.mmm")
    hours, minutes, secs, millis = (int(part) for part in match.groups())
    total_ms = ((hours * 60 + minutes) * 60 + secs) * 1000 + millis
    return total_ms / 1000.0


def format_label(seconds: float) -> str:
    """Format compact in-grid label MM:SS (minutes are not wrapped into hours)."""
    if seconds < 0:
        raise InvalidRange(f"Time must be >= 0, got {seconds}")
    whole = int(math.floor(seconds + TIME_TO_FRAME_EPSILON))
    minutes, secs = divmod(whole, 60)
    return f"{minutes:02d}:{secs:02d}"


def parse_time_value(value: str, *, allow_zero: bool = False) -> float:
    """Parse time in seconds from user string.

    Accepts ``HH:MM:SS.mmm``, plain numbers, and ``s``/``ms`` suffixes.
    """
    if value is None:
        raise InvalidTimeFormat("Time value not specified")

    normalized = value.strip().replace(" ", "").replace(",", ".").lower()
    if not normalized:
        raise InvalidTimeFormat("Empty time value")

    if ":" in normalized:
        total_seconds = parse_time(normalized)
    else:
        suffix = None
        if normalized.endswith("ms"):
            suffix = "ms"
            number_part = normalized[:-2]
        elif normalized.endswith("s"):
            suffix = "s"
            number_part = normalized[:-1]
        else:
            number_part = normalized

        if not number_part:
            raise InvalidTimeFormat(f"Invalid time format '{value}'")

        try:
            number = float(number_part)
        except ValueError as exc:
            raise InvalidTimeFormat(f"Failed to parse number in '{value}'") from exc

        if math.isnan(number) or math.isinf(number):
            raise InvalidTimeFormat(f"Invalid time value '{value}'")

        total_seconds = number / 1000.0 if suffix == "ms" else number

    if total_seconds < 0 or (total_seconds == 0 and not allow_zero):
        raise InvalidTimeFormat("Time must be > 0")

    return total_seconds
