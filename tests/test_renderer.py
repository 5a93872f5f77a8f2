import numpy as np
import pytest
from PIL import Image, ImageChops

from contact_sheet.backends.renderer import PillowRenderer, save_contact_sheet
from contact_sheet.core.composition import plan_composition
from contact_sheet.core.grid import plan_grid
from contact_sheet.exceptions import InvalidConfiguration, ProcessingError
from contact_sheet.models import Canvas, DrawPlan, LayoutConfig, OutputConfig, Sample

WIDESCREEN = 16 / 9
BLUE = (0, 0, 255)


@pytest.fixture
def samples():
    return tuple(Sample(index=i, frame_index=i * 10, timestamp=i / 3) for i in range(3))


@pytest.fixture
def small_layout():
    return LayoutConfig(
        columns=2,
        thumbnail_width=40,
        film_spacing=4,
        border_spacing=6,
        border_color="red",
        border_thickness=2,
        background_color="#00ff00",
        show_timestamp=False,
    )


def draw_plan_for(samples, layout):
    grid = plan_grid(len(samples), layout, WIDESCREEN)
    return plan_composition(samples, grid, layout)


def blue_frames(count, size=(64, 36)):
    return [Image.new("RGB", size, BLUE) for _ in range(count)]


def test_render_places_thumbnails_and_borders(samples, small_layout):
    plan = draw_plan_for(samples, small_layout)
    sheet = PillowRenderer().render(plan, blue_frames(3))

    assert sheet.size == (96, 62)
    assert sheet.getpixel((0, 0)) == (0, 255, 0)
    # Border stroke sits on the thumbnail edge
    assert sheet.getpixel((6, 6)) == (255, 0, 0)
    assert sheet.getpixel((7, 15)) == (255, 0, 0)
    assert sheet.getpixel((26, 17)) == BLUE
    # Empty fourth cell shows the background
    assert sheet.getpixel((70, 44)) == (0, 255, 0)


def test_numpy_frames_are_accepted(samples, small_layout):
    plan = draw_plan_for(samples, small_layout)
    frames = [np.zeros((36, 64, 3), dtype=np.uint8) for _ in range(3)]
    sheet = PillowRenderer().render(plan, frames)
    assert sheet.getpixel((26, 17)) == (0, 0, 0)


def test_frame_count_mismatch(samples, small_layout):
    plan = draw_plan_for(samples, small_layout)
    with pytest.raises(ProcessingError):
        PillowRenderer().render(plan, blue_frames(2))


def test_labels_are_drawn(samples):
    layout = LayoutConfig(columns=3, thumbnail_width=160, show_border=False)
    plan = draw_plan_for(samples, layout)
    frames = [Image.new("RGB", (160, 90), (0, 0, 0)) for _ in range(3)]

    with_labels = PillowRenderer().render(plan, frames)
    without_labels = PillowRenderer().render(
        draw_plan_for(samples, LayoutConfig(columns=3, thumbnail_width=160, show_border=False, show_timestamp=False)),
        frames,
    )
    assert ImageChops.difference(with_labels, without_labels).getbbox() is not None


def test_composite_encodes_jpeg_and_png(samples, small_layout):
    plan = draw_plan_for(samples, small_layout)
    renderer = PillowRenderer()

    jpeg = renderer.composite(plan, blue_frames(3), OutputConfig(format="jpeg", quality=80))
    png = renderer.composite(plan, blue_frames(3), OutputConfig(format="png"))

    assert jpeg.startswith(b"\xff\xd8")
    assert png.startswith(b"\x89PNG")


def test_composite_rejects_unknown_format(samples, small_layout):
    plan = draw_plan_for(samples, small_layout)
    with pytest.raises(InvalidConfiguration):
        PillowRenderer().composite(plan, blue_frames(3), OutputConfig(format="tiff"))


def test_save_contact_sheet(tmp_path):
    path = save_contact_sheet(b"data", tmp_path / "out" / "sheet.jpg")
    assert path.read_bytes() == b"data"


def test_jpeg_rejects_oversized_canvas():
    plan = DrawPlan(canvas=Canvas(width=10, height=70000, background_color="#ffffff"), placements=(), columns=1, rows=1)
    with pytest.raises(ProcessingError):
        PillowRenderer().composite(plan, [], OutputConfig(format="jpeg"))
