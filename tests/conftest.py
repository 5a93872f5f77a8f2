"""Shared fixtures for contact-sheet tests."""

import pytest

from contact_sheet.core.planner import clear_plan_cache
from contact_sheet.models import LayoutConfig, Sample, SelectionConfig, VideoMetadata


@pytest.fixture(autouse=True)
def fresh_plan_cache():
    clear_plan_cache()
    yield
    clear_plan_cache()


@pytest.fixture
def hd_metadata() -> VideoMetadata:
    """10 second, 30 fps, 1920x1080 video."""
    return VideoMetadata(duration=10.0, fps=30.0, width=1920, height=1080, codec="h264")


@pytest.fixture
def whole_video(hd_metadata) -> SelectionConfig:
    return SelectionConfig.for_video(hd_metadata)


@pytest.fixture
def layout() -> LayoutConfig:
    return LayoutConfig(
        columns=4,
        thumbnail_width=300,
        border_spacing=10,
        film_spacing=10,
        show_border=True,
        border_thickness=2,
        timestamp_font_size=14,
        timestamp_position="bottom-center",
    )


@pytest.fixture
def ten_samples():
    return tuple(Sample(index=i, frame_index=i * 30, timestamp=float(i)) for i in range(10))
