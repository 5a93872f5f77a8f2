"""Input validation shared by the planners.

Every check raises one of the typed ``ValidationError`` subclasses instead of
letting a planner produce geometry from nonsensical input.
"""

import math
from numbers import Real

from contact_sheet.config.config import OUTPUT_FORMATS, TIMESTAMP_POSITIONS
from contact_sheet.exceptions import (
    InvalidConfiguration,
    InvalidGrid,
    InvalidInterval,
    InvalidLimit,
    InvalidRange,
    InvalidStyling,
)
from contact_sheet.utils.color_utils import parse_color


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_metadata(metadata) -> None:
    """Check that probed video metadata is usable."""
    for name in ("duration", "fps", "width", "height"):
        value = getattr(metadata, name)
        if not _is_number(value) or value <= 0:
            raise InvalidConfiguration(f"Video {name} must be > 0, got {value!r}")


def validate_aspect_ratio(aspect_ratio: float) -> None:
    if not _is_number(aspect_ratio) or aspect_ratio <= 0:
        raise InvalidConfiguration(f"Aspect ratio must be > 0, got {aspect_ratio!r}")


def validate_interval(interval_value) -> None:
    if not _is_number(interval_value) or interval_value <= 0:
        raise InvalidInterval(f"Interval must be > 0, got {interval_value!r}")


def validate_limit(frame_limit) -> None:
    """``None`` means no limit; anything else must be a positive integer."""
    if frame_limit is None:
        return
    if not _is_int(frame_limit) or frame_limit <= 0:
        raise InvalidLimit(f"Frame limit must be a positive integer, got {frame_limit!r}")


def validate_range(start_frame, end_frame, max_frame_index: int) -> None:
    if not _is_int(start_frame) or not _is_int(end_frame):
        raise InvalidRange(f"Frame bounds must be integers, got {start_frame!r}..{end_frame!r}")
    if start_frame < 0:
        raise InvalidRange(f"Start frame must be >= 0, got {start_frame}")
    if start_frame > end_frame:
        raise InvalidRange(f"Start frame {start_frame} is after end frame {end_frame}")
    if end_frame > max_frame_index:
        raise InvalidRange(f"End frame {end_frame} exceeds last frame {max_frame_index}")


def validate_selection(selection, metadata) -> None:
    """Validate a selection against the video it applies to."""
    validate_metadata(metadata)
    validate_interval(selection.interval_value)
    validate_limit(selection.frame_limit)
    validate_range(selection.start_frame, selection.end_frame, metadata.max_frame_index)
    if selection.start_time < 0 or selection.end_time < selection.start_time:
        raise InvalidRange(
            f"Time range {selection.start_time}..{selection.end_time} is not ordered"
        )


def validate_grid_shape(layout) -> None:
    """Columns, rows, spacing and thumbnail size checks."""
    if not _is_int(layout.columns) or layout.columns < 1:
        raise InvalidGrid(f"Columns must be >= 1, got {layout.columns!r}")
    if layout.rows is not None and (not _is_int(layout.rows) or layout.rows < 1):
        raise InvalidGrid(f"Rows must be >= 1, got {layout.rows!r}")
    if not _is_int(layout.thumbnail_width) or layout.thumbnail_width <= 0:
        raise InvalidGrid(f"Thumbnail width must be > 0, got {layout.thumbnail_width!r}")
    if layout.thumbnail_height is not None and (
        not _is_int(layout.thumbnail_height) or layout.thumbnail_height <= 0
    ):
        raise InvalidGrid(f"Thumbnail height must be > 0, got {layout.thumbnail_height!r}")
    for name in ("border_spacing", "film_spacing"):
        value = getattr(layout, name)
        if not _is_int(value) or value < 0:
            raise InvalidGrid(f"{name} must be >= 0, got {value!r}")


def validate_styling(layout) -> None:
    """Border, color and timestamp checks."""
    parse_color(layout.background_color)
    if layout.show_border:
        if not _is_int(layout.border_thickness) or layout.border_thickness <= 0:
            raise InvalidStyling(
                f"Border thickness must be > 0 when border is shown, got {layout.border_thickness!r}"
            )
        parse_color(layout.border_color)
    if layout.show_timestamp:
        if not _is_int(layout.timestamp_font_size) or layout.timestamp_font_size <= 0:
            raise InvalidStyling(
                f"Timestamp font size must be > 0, got {layout.timestamp_font_size!r}"
            )
        if layout.timestamp_position not in TIMESTAMP_POSITIONS:
            raise InvalidStyling(
                f"Unknown timestamp position '{layout.timestamp_position}'. "
                f"Expected one of: {', '.join(TIMESTAMP_POSITIONS)}"
            )
        parse_color(layout.timestamp_color)
        parse_color(layout.timestamp_background_color)
        alpha = layout.timestamp_background_alpha
        if not _is_number(alpha) or not 0 < alpha < 1:
            raise InvalidStyling(f"Label background alpha must be within (0, 1), got {alpha!r}")


def validate_layout(layout) -> None:
    validate_grid_shape(layout)
    validate_styling(layout)


def validate_output(output) -> None:
    if output.format not in OUTPUT_FORMATS:
        raise InvalidConfiguration(
            f"Unsupported output format '{output.format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
    if not _is_int(output.quality) or not 1 <= output.quality <= 100:
        raise InvalidConfiguration(f"Quality must be an integer within 1-100, got {output.quality!r}")
