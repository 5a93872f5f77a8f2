"""Video probing and frame extraction with OpenCV."""

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Union

import cv2
import numpy as np
from PIL import Image

from contact_sheet.config.config import SUPPORTED_VIDEO_FORMATS
from contact_sheet.exceptions import ProcessingError, VideoFileError
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import Sample, VideoMetadata

ProgressCallback = Callable[[int, int], None]


def _decode_fourcc(value: float) -> str:
    code = int(value)
    if code <= 0:
        return "unknown"
    chars = "".join(chr((code >> (8 * i)) & 0xFF) for i in range(4))
    return chars.strip().lower() or "unknown"


def frame_to_image(frame: np.ndarray) -> Image.Image:
    """Convert an OpenCV BGR frame into an RGB PIL image."""
    return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))


def open_video(video_path: Union[str, Path]) -> cv2.VideoCapture:
    video_path = Path(video_path)
    if not video_path.exists():
        raise VideoFileError(f"Video file not found: {video_path}")
    cap = cv2.VideoCapture(str(video_path))
    if not cap.isOpened():
        raise VideoFileError(f"Failed to open video '{video_path}'")
    return cap


class OpenCVDecoder:
    """Decoder backed by ``cv2.VideoCapture``."""

    def __init__(self):
        self.logger = get_logger()

    def probe(self, video_path: Union[str, Path]) -> VideoMetadata:
        """Read duration, FPS, size and codec of a video file."""
        video_path = Path(video_path)
        if video_path.suffix.lower() not in SUPPORTED_VIDEO_FORMATS:
            self.logger.warning(f"⚠️ Unrecognised video extension '{video_path.suffix}'")

        cap = open_video(video_path)
        try:
            fps = cap.get(cv2.CAP_PROP_FPS)
            frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
            width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
            height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
            codec = _decode_fourcc(cap.get(cv2.CAP_PROP_FOURCC))
        finally:
            cap.release()

        if not fps or fps <= 0:
            raise VideoFileError(f"Unable to get FPS of '{video_path}'")
        if frame_count <= 0:
            raise VideoFileError(f"Unable to determine frame count of '{video_path}'")
        if width <= 0 or height <= 0:
            raise VideoFileError(f"Unable to determine frame size of '{video_path}'")

        metadata = VideoMetadata(
            duration=frame_count / fps,
            fps=fps,
            width=width,
            height=height,
            codec=codec,
        )
        self.logger.debug(f"Probed {video_path.name}: {metadata}")
        return metadata

    @contextmanager
    def open(self, video_path: Union[str, Path]) -> Iterator[cv2.VideoCapture]:
        """Open a capture for ``extract_frame`` calls; released on exit."""
        cap = open_video(video_path)
        try:
            yield cap
        finally:
            cap.release()

    def extract_frame(self, video_handle: cv2.VideoCapture, timestamp_seconds: float) -> Image.Image:
        """Grab the frame shown at ``timestamp_seconds`` from an open capture."""
        video_handle.set(cv2.CAP_PROP_POS_MSEC, timestamp_seconds * 1000.0)
        ok, frame = video_handle.read()
        if not ok or frame is None:
            raise ProcessingError(f"Failed to read frame at {timestamp_seconds:.3f}s")
        return frame_to_image(frame)

    def extract_frames(
        self,
        video_path: Union[str, Path],
        samples: Sequence[Sample],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Image.Image]:
        """Extract one RGB image per sample, in sample order."""
        cap = open_video(video_path)
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        total = len(samples)
        images: List[Image.Image] = []

        try:
            for completed, sample in enumerate(samples, start=1):
                # The last sampled index may sit one past the final decodable frame
                frame_index = max(0, min(sample.frame_index, frame_count - 1))
                cap.set(cv2.CAP_PROP_POS_FRAMES, frame_index)
                ok, frame = cap.read()
                if not ok or frame is None:
                    raise ProcessingError(f"Failed to read frame #{frame_index}")
                images.append(frame_to_image(frame))

                if on_progress is not None:
                    on_progress(completed, total)
                self.logger.log_progress(completed, total, "frame extraction")
        finally:
            cap.release()

        return images
