from contextlib import contextmanager

import cv2
import numpy as np
import pytest
from PIL import Image

from contact_sheet.backends.video_processing import OpenCVDecoder
from contact_sheet.config.sheet_config import SelectionSettings
from contact_sheet.core.sampling import plan_samples
from contact_sheet.exceptions import ProcessingError, VideoFileError
from contact_sheet.models import LayoutConfig, OutputConfig, SelectionConfig, VideoMetadata
from contact_sheet.pipeline import generate_contact_sheet


@pytest.fixture
def sample_video(tmp_path):
    """Two seconds of 64x48 MJPG at 10 fps."""
    path = tmp_path / "clip.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (64, 48))
    if not writer.isOpened():
        pytest.skip("OpenCV cannot write MJPG video here")
    for i in range(20):
        writer.write(np.full((48, 64, 3), i * 10, dtype=np.uint8))
    writer.release()
    return path


def test_probe(sample_video):
    metadata = OpenCVDecoder().probe(sample_video)

    assert metadata.fps == pytest.approx(10.0)
    assert metadata.duration == pytest.approx(2.0)
    assert (metadata.width, metadata.height) == (64, 48)
    assert metadata.codec == "mjpg"


def test_probe_missing_file(tmp_path):
    with pytest.raises(VideoFileError):
        OpenCVDecoder().probe(tmp_path / "missing.mp4")


def test_extract_frames_reports_progress(sample_video):
    decoder = OpenCVDecoder()
    metadata = decoder.probe(sample_video)
    selection = SelectionConfig.for_video(metadata, interval_value=4)
    samples = plan_samples(metadata, selection)

    calls = []
    images = decoder.extract_frames(sample_video, samples, lambda done, total: calls.append((done, total)))

    assert len(images) == len(samples) == 6
    assert all(image.size == (64, 48) for image in images)
    assert calls == [(i, 6) for i in range(1, 7)]


def test_generate_contact_sheet(sample_video, tmp_path):
    output_path = tmp_path / "sheets" / "clip.jpg"
    result = generate_contact_sheet(
        sample_video,
        selection=SelectionSettings(interval_value=5, interval_seconds=None),
        layout=LayoutConfig(columns=3, thumbnail_width=64),
        output=OutputConfig(format="jpeg"),
        output_path=output_path,
    )

    assert [s.frame_index for s in result.plan.samples] == [0, 5, 10, 15, 20]
    assert result.output_path == output_path
    assert output_path.read_bytes() == result.data
    assert result.data.startswith(b"\xff\xd8")


def test_generate_with_default_selection(sample_video):
    result = generate_contact_sheet(sample_video, layout=LayoutConfig(columns=2, thumbnail_width=32))
    # One thumbnail every 30 seconds: a two second clip yields only the first frame
    assert [s.frame_index for s in result.plan.samples] == [0]
    assert result.output_path is None


class StillFrameDecoder:
    """Decoder without OpenCV or ``extract_frames``; hands out its own handles."""

    def __init__(self):
        self.handles = []
        self.closed = []

    def probe(self, video_path):
        return VideoMetadata(duration=4.0, fps=25.0, width=80, height=60, codec="raw")

    @contextmanager
    def open(self, video_path):
        handle = {"path": str(video_path), "reads": 0}
        self.handles.append(handle)
        try:
            yield handle
        finally:
            self.closed.append(handle)

    def extract_frame(self, video_handle, timestamp_seconds):
        assert isinstance(video_handle, dict)
        video_handle["reads"] += 1
        shade = int(timestamp_seconds * 50)
        return Image.new("RGB", (80, 60), (shade, shade, shade))


def test_generate_drives_custom_decoder_through_its_own_handle(tmp_path):
    decoder = StillFrameDecoder()
    calls = []

    result = generate_contact_sheet(
        tmp_path / "not_a_real_file.raw",
        selection=SelectionSettings(interval_value=25, interval_seconds=None),
        layout=LayoutConfig(columns=5, thumbnail_width=40),
        output=OutputConfig(format="png"),
        decoder=decoder,
        on_progress=lambda done, total: calls.append((done, total)),
    )

    assert result.plan.timestamps == (0.0, 1.0, 2.0, 3.0, 4.0)
    assert len(decoder.handles) == 1
    assert decoder.closed == decoder.handles
    assert decoder.handles[0]["reads"] == 5
    assert calls == [(i, 5) for i in range(1, 6)]
    assert result.data.startswith(b"\x89PNG")


def test_custom_decoder_handle_is_released_on_failure(tmp_path):
    class FailingDecoder(StillFrameDecoder):
        def extract_frame(self, video_handle, timestamp_seconds):
            raise ProcessingError("cannot decode")

    decoder = FailingDecoder()
    with pytest.raises(ProcessingError):
        generate_contact_sheet(tmp_path / "clip.raw", decoder=decoder)
    assert decoder.closed == decoder.handles
    assert len(decoder.handles) == 1


def test_opencv_decoder_open_releases_capture(sample_video):
    decoder = OpenCVDecoder()
    with decoder.open(sample_video) as cap:
        assert cap.isOpened()
        image = decoder.extract_frame(cap, 0.5)
    assert image.size == (64, 48)
    assert not cap.isOpened()
