"""Contact Sheet - frame sampling and grid geometry for video contact sheets."""

from .exceptions import (
    ContactSheetError,
    ValidationError,
    InvalidRange,
    EmptyRange,
    InvalidInterval,
    InvalidLimit,
    InvalidGrid,
    InvalidStyling,
    InvalidConfiguration,
    InvalidTimeFormat,
    ConfigError,
    VideoFileError,
    ProcessingError,
)
from .models import (
    VideoMetadata,
    SelectionConfig,
    LayoutConfig,
    OutputConfig,
    Sample,
    DrawPlan,
    ContactSheetPlan,
)
from .core import plan_samples, plan_grid, plan_composition, plan_contact_sheet
from .cli.main import main

__version__ = "1.0.0"
__all__ = [
    "main",
    "plan_samples",
    "plan_grid",
    "plan_composition",
    "plan_contact_sheet",
    "VideoMetadata",
    "SelectionConfig",
    "LayoutConfig",
    "OutputConfig",
    "Sample",
    "DrawPlan",
    "ContactSheetPlan",
    "ContactSheetError",
    "ValidationError",
    "InvalidRange",
    "EmptyRange",
    "InvalidInterval",
    "InvalidLimit",
    "InvalidGrid",
    "InvalidStyling",
    "InvalidConfiguration",
    "InvalidTimeFormat",
    "ConfigError",
    "VideoFileError",
    "ProcessingError",
]
