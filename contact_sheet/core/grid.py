"""Grid dimensions and canvas size."""

import math
from typing import Optional, Tuple

from contact_sheet.exceptions import InvalidGrid
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import GridPlan, LayoutConfig
from contact_sheet.core.validation import validate_aspect_ratio, validate_grid_shape
from contact_sheet.utils.time_utils import round_half_up


def grid_capacity(layout: LayoutConfig) -> Optional[int]:
    """Cell count of a fixed grid, None for a dynamic one."""
    if not layout.is_fixed_grid:
        return None
    return layout.columns * layout.rows


def resolve_thumbnail_size(layout: LayoutConfig, aspect_ratio: float) -> Tuple[int, int]:
    """Thumbnail (width, height) in pixels.

    A missing height follows the video aspect ratio. While ``aspect_lock`` is
    on, an explicit height is kept only if it still pairs with the width
    (``width == round(height * ratio)``); a stale one is re-derived.
    """
    validate_aspect_ratio(aspect_ratio)
    width = layout.thumbnail_width
    height = layout.thumbnail_height
    derived = round_half_up(width / aspect_ratio)
    if height is None:
        height = derived
    elif layout.aspect_lock and round_half_up(height * aspect_ratio) != width:
        height = derived
    if height <= 0:
        raise InvalidGrid(
            f"Thumbnail width {width} gives zero height at aspect ratio {aspect_ratio:.3f}"
        )
    return width, height


def plan_grid(sample_count: int, layout: LayoutConfig, aspect_ratio: float) -> GridPlan:
    """Compute columns, rows and canvas size for ``sample_count`` thumbnails.

    Columns always come from the layout. Fixed grids keep their rows;
    dynamic grids use ``ceil(sample_count / columns)`` rows.
    """
    validate_grid_shape(layout)
    if sample_count < 1:
        raise InvalidGrid(f"Sample count must be >= 1, got {sample_count}")

    columns = layout.columns
    if layout.is_fixed_grid:
        rows = layout.rows
        if sample_count > columns * rows:
            raise InvalidGrid(
                f"{sample_count} samples do not fit a fixed {columns}x{rows} grid"
            )
    else:
        rows = int(math.ceil(sample_count / columns))

    thumb_width, thumb_height = resolve_thumbnail_size(layout, aspect_ratio)
    spacing = layout.film_spacing
    margin = layout.border_spacing

    canvas_width = columns * thumb_width + (columns - 1) * spacing + 2 * margin
    canvas_height = rows * thumb_height + (rows - 1) * spacing + 2 * margin
    if canvas_width <= 0 or canvas_height <= 0:
        raise InvalidGrid(f"Canvas size {canvas_width}x{canvas_height} is not positive")

    get_logger().debug(
        f"Grid {columns}x{rows}, thumbnails {thumb_width}x{thumb_height}, "
        f"canvas {canvas_width}x{canvas_height}"
    )
    return GridPlan(
        columns=columns,
        rows=rows,
        thumbnail_width=thumb_width,
        thumbnail_height=thumb_height,
        film_spacing=spacing,
        border_spacing=margin,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
    )
