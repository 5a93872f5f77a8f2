"""Utilities for contact-sheet module."""

from .time_utils import (
    frame_to_time,
    time_to_frame,
    format_time,
    parse_time,
    format_label,
    parse_time_value,
    interval_seconds_to_frames,
    interval_frames_to_seconds,
    round_half_up,
)
from .color_utils import parse_color, normalize_color, to_rgba

__all__ = [
    "frame_to_time",
    "time_to_frame",
    "format_time",
    "parse_time",
    "format_label",
    "parse_time_value",
    "interval_seconds_to_frames",
    "interval_frames_to_seconds",
    "round_half_up",
    "parse_color",
    "normalize_color",
    "to_rgba",
]
