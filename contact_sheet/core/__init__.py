"""Frame sampling and contact-sheet geometry planners."""

from .sampling import plan_samples, count_samples, effective_frame_limit
from .grid import plan_grid, resolve_thumbnail_size, grid_capacity
from .composition import plan_composition
from .planner import plan_contact_sheet, clear_plan_cache
from .interfaces import Decoder, Renderer

__all__ = [
    "plan_samples",
    "count_samples",
    "effective_frame_limit",
    "plan_grid",
    "resolve_thumbnail_size",
    "grid_capacity",
    "plan_composition",
    "plan_contact_sheet",
    "clear_plan_cache",
    "Decoder",
    "Renderer",
]
