"""End-to-end sheet planning: samples, grid and draw plan."""

from functools import lru_cache

from contact_sheet.config.config import MAX_SAMPLES_WARNING
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import ContactSheetPlan, LayoutConfig, SelectionConfig, VideoMetadata
from contact_sheet.core.composition import plan_composition
from contact_sheet.core.grid import grid_capacity, plan_grid
from contact_sheet.core.sampling import plan_samples
from contact_sheet.core.validation import validate_grid_shape, validate_metadata


@lru_cache(maxsize=128)
def _plan_cached(
    metadata: VideoMetadata,
    selection: SelectionConfig,
    layout: LayoutConfig,
) -> ContactSheetPlan:
    validate_metadata(metadata)
    validate_grid_shape(layout)
    samples = plan_samples(metadata, selection, limit_cap=grid_capacity(layout))
    grid = plan_grid(len(samples), layout, metadata.aspect_ratio)
    draw_plan = plan_composition(samples, grid, layout)
    return ContactSheetPlan(samples=samples, grid=grid, draw_plan=draw_plan, metadata=metadata)


def plan_contact_sheet(
    metadata: VideoMetadata,
    selection: SelectionConfig,
    layout: LayoutConfig,
) -> ContactSheetPlan:
    """Plan a contact sheet for a video.

    A fixed grid caps the frame limit at ``columns * rows``. Plans are cached
    by the three input records, so repeated calls with equal inputs return the
    same plan object.
    """
    plan = _plan_cached(metadata, selection, layout)
    logger = get_logger()
    logger.info(
        f"🧮 Planned {plan.total_samples} thumbnails on a "
        f"{plan.grid.columns}x{plan.grid.rows} grid "
        f"({plan.grid.canvas_width}x{plan.grid.canvas_height}px)"
    )
    if plan.total_samples > MAX_SAMPLES_WARNING:
        logger.warning(
            f"⚠️ {plan.total_samples} thumbnails requested. "
            "Consider a larger interval or a frame limit."
        )
    return plan


def clear_plan_cache() -> None:
    _plan_cached.cache_clear()
