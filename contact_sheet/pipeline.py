"""Contact sheet generation pipeline: probe, plan, extract, composite."""

import time
from pathlib import Path
from typing import Callable, Optional, Union

from contact_sheet.backends.renderer import PillowRenderer, save_contact_sheet
from contact_sheet.backends.video_processing import OpenCVDecoder
from contact_sheet.config.sheet_config import SelectionSettings
from contact_sheet.core.interfaces import Decoder, Renderer
from contact_sheet.core.planner import plan_contact_sheet
from contact_sheet.exceptions import ContactSheetError
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import ContactSheetPlan, LayoutConfig, OutputConfig, SelectionConfig


class ContactSheetResult:
    """Encoded sheet plus the plan it was drawn from."""

    def __init__(self, plan: ContactSheetPlan, data: bytes, output_path: Optional[Path] = None):
        self.plan = plan
        self.data = data
        self.output_path = output_path


def generate_contact_sheet(
    video_path: Union[str, Path],
    selection: Union[SelectionConfig, SelectionSettings, None] = None,
    layout: Optional[LayoutConfig] = None,
    output: Optional[OutputConfig] = None,
    output_path: Optional[Union[str, Path]] = None,
    decoder: Optional[Decoder] = None,
    renderer: Optional[Renderer] = None,
    on_progress: Optional[Callable[[int, int], None]] = None,
) -> ContactSheetResult:
    """Build a contact sheet for ``video_path``.

    ``selection`` may be a resolved SelectionConfig, config-file style
    SelectionSettings, or None for the default settings (whole video, one
    thumbnail every 30 seconds).
    """
    logger = get_logger()
    decoder = decoder or OpenCVDecoder()
    renderer = renderer or PillowRenderer()
    layout = layout or LayoutConfig()
    output = (output or OutputConfig()).validated()
    video_path = Path(video_path)

    started = time.time()
    logger.log_operation_start("contact sheet", video=video_path.name)
    try:
        metadata = decoder.probe(video_path)
        if selection is None:
            selection = SelectionSettings()
        if isinstance(selection, SelectionSettings):
            selection = selection.resolve(metadata)

        plan = plan_contact_sheet(metadata, selection, layout)
        if hasattr(decoder, "extract_frames"):
            images = decoder.extract_frames(video_path, plan.samples, on_progress)
        else:
            images = _extract_one_by_one(decoder, video_path, plan, on_progress)

        data = renderer.composite(plan.draw_plan, images, output)
        saved = save_contact_sheet(data, output_path) if output_path else None
    except ContactSheetError as exc:
        logger.log_operation_error("contact sheet", exc)
        raise

    logger.log_operation_complete(
        "contact sheet",
        time.time() - started,
        thumbnails=plan.total_samples,
        bytes=len(data),
    )
    return ContactSheetResult(plan, data, saved)


def _extract_one_by_one(decoder, video_path, plan, on_progress):
    """Drive a decoder through its own handle, one timestamp at a time."""
    logger = get_logger()
    total = plan.total_samples
    images = []
    with decoder.open(video_path) as handle:
        for completed, timestamp in enumerate(plan.timestamps, start=1):
            images.append(decoder.extract_frame(handle, timestamp))
            if on_progress is not None:
                on_progress(completed, total)
            logger.log_progress(completed, total, "frame extraction")
    return images
