"""Per-thumbnail placement, borders and timestamp labels."""

from typing import List, Sequence, Tuple

from contact_sheet.config.config import LABEL_INSET
from contact_sheet.exceptions import InvalidGrid
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import (
    BorderRect,
    Canvas,
    DrawPlan,
    GridPlan,
    LayoutConfig,
    Rect,
    Sample,
    ThumbnailPlacement,
    TimestampLabel,
)
from contact_sheet.core.validation import validate_styling
from contact_sheet.utils.color_utils import normalize_color
from contact_sheet.utils.time_utils import format_label


def cell_origin(ordinal: int, grid: GridPlan) -> Tuple[int, int]:
    """Top-left pixel of grid cell ``ordinal`` (row-major)."""
    row, col = divmod(ordinal, grid.columns)
    x = col * (grid.thumbnail_width + grid.film_spacing) + grid.border_spacing
    y = row * (grid.thumbnail_height + grid.film_spacing) + grid.border_spacing
    return x, y


def label_anchor(position: str, rect: Rect, font_size: int) -> Tuple[int, int, str]:
    """Anchor point and text alignment for a timestamp label."""
    left = rect.x + LABEL_INSET
    right = rect.x + rect.width - LABEL_INSET
    top = rect.y + LABEL_INSET
    bottom = rect.y + rect.height - font_size - LABEL_INSET

    if position == "top-left":
        return left, top, "left"
    if position == "top-right":
        return right, top, "right"
    if position == "bottom-left":
        return left, bottom, "left"
    if position == "bottom-right":
        return right, bottom, "right"
    # bottom-center
    return rect.x + rect.width // 2, bottom, "center"


def plan_composition(
    samples: Sequence[Sample],
    grid: GridPlan,
    layout: LayoutConfig,
) -> DrawPlan:
    """Build the draw plan: canvas plus one placement per sample, in order.

    Borders are strokes inset inside the thumbnail rectangle, drawn after the
    image. Every timestamp label carries a semi-opaque background box style.

    Raises:
        InvalidStyling: bad font size, border thickness, position or color.
        InvalidGrid: more samples than grid cells.
    """
    validate_styling(layout)
    if len(samples) > grid.cell_count:
        raise InvalidGrid(
            f"{len(samples)} samples exceed {grid.columns}x{grid.rows} grid cells"
        )

    background = normalize_color(layout.background_color)
    border_color = normalize_color(layout.border_color) if layout.show_border else None
    if layout.show_timestamp:
        text_color = normalize_color(layout.timestamp_color)
        label_background = normalize_color(layout.timestamp_background_color)

    placements: List[ThumbnailPlacement] = []
    for ordinal, sample in enumerate(samples):
        x, y = cell_origin(ordinal, grid)
        rect = Rect(x, y, grid.thumbnail_width, grid.thumbnail_height)

        border = None
        if layout.show_border:
            border = BorderRect(rect=rect, thickness=layout.border_thickness, color=border_color)

        label = None
        if layout.show_timestamp:
            label_x, label_y, align = label_anchor(
                layout.timestamp_position, rect, layout.timestamp_font_size
            )
            label = TimestampLabel(
                text=format_label(sample.timestamp),
                x=label_x,
                y=label_y,
                align=align,
                font_size=layout.timestamp_font_size,
                color=text_color,
                background_color=label_background,
                background_alpha=layout.timestamp_background_alpha,
            )

        placements.append(
            ThumbnailPlacement(
                sample=sample,
                x=rect.x,
                y=rect.y,
                width=rect.width,
                height=rect.height,
                border=border,
                label=label,
            )
        )

    get_logger().debug(f"Composed {len(placements)} placements on {grid.canvas_width}x{grid.canvas_height}")
    return DrawPlan(
        canvas=Canvas(width=grid.canvas_width, height=grid.canvas_height, background_color=background),
        placements=tuple(placements),
        columns=grid.columns,
        rows=grid.rows,
    )
