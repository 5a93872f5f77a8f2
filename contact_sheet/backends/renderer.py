"""Contact sheet compositing with Pillow."""

import io
from pathlib import Path
from typing import Any, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from contact_sheet.config.config import JPEG_MAX_DIMENSION, LABEL_PADDING
from contact_sheet.core.validation import validate_output
from contact_sheet.exceptions import ProcessingError
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import DrawPlan, OutputConfig, TimestampLabel
from contact_sheet.utils.color_utils import parse_color, to_rgba

_ALIGN_ANCHORS = {"left": "la", "right": "ra", "center": "ma"}
_PIL_FORMATS = {"jpeg": "JPEG", "png": "PNG"}


def load_font(size: int) -> ImageFont.FreeTypeFont:
    """DejaVu Sans when installed, else Pillow's bundled default font."""
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


def _to_image(frame: Any) -> Image.Image:
    if isinstance(frame, Image.Image):
        return frame.convert("RGB")
    if isinstance(frame, np.ndarray):
        return Image.fromarray(frame).convert("RGB")
    raise ProcessingError(f"Unsupported frame type: {type(frame).__name__}")


def label_box(
    draw: ImageDraw.ImageDraw,
    label: TimestampLabel,
    font: ImageFont.FreeTypeFont,
) -> Tuple[int, int, int, int]:
    """Background box around the label glyphs."""
    left, top, right, bottom = draw.textbbox(
        (label.x, label.y), label.text, font=font, anchor=_ALIGN_ANCHORS[label.align]
    )
    return (
        left - LABEL_PADDING,
        top - LABEL_PADDING,
        right + LABEL_PADDING,
        bottom + LABEL_PADDING,
    )


class PillowRenderer:
    """Renderer drawing a DrawPlan onto a Pillow canvas."""

    def __init__(self):
        self.logger = get_logger()

    def render(self, draw_plan: DrawPlan, images: Sequence[Any]) -> Image.Image:
        """Draw thumbnails, borders and labels; returns an RGB image."""
        if len(images) != len(draw_plan.placements):
            raise ProcessingError(
                f"Got {len(images)} frames for {len(draw_plan.placements)} placements"
            )

        canvas_spec = draw_plan.canvas
        canvas = Image.new(
            "RGB",
            (canvas_spec.width, canvas_spec.height),
            parse_color(canvas_spec.background_color),
        )

        for placement, frame in zip(draw_plan.placements, images):
            thumb = _to_image(frame).resize((placement.width, placement.height), Image.Resampling.LANCZOS)
            canvas.paste(thumb, (placement.x, placement.y))

        draw = ImageDraw.Draw(canvas)
        for placement in draw_plan.placements:
            border = placement.border
            if border is None:
                continue
            rect = border.rect
            # Pillow strokes the outline inside the given box
            draw.rectangle(
                [rect.x, rect.y, rect.right - 1, rect.bottom - 1],
                outline=parse_color(border.color),
                width=border.thickness,
            )

        labels = [p.label for p in draw_plan.placements if p.label is not None]
        if labels:
            canvas = self._draw_labels(canvas, labels)

        return canvas

    def _draw_labels(self, canvas: Image.Image, labels: Sequence[TimestampLabel]) -> Image.Image:
        fonts = {}
        overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        overlay_draw = ImageDraw.Draw(overlay)
        for label in labels:
            font = fonts.setdefault(label.font_size, load_font(label.font_size))
            overlay_draw.rectangle(
                label_box(overlay_draw, label, font),
                fill=to_rgba(label.background_color, label.background_alpha),
            )

        result = Image.alpha_composite(canvas.convert("RGBA"), overlay)
        text_draw = ImageDraw.Draw(result)
        for label in labels:
            text_draw.text(
                (label.x, label.y),
                label.text,
                font=fonts[label.font_size],
                fill=parse_color(label.color),
                anchor=_ALIGN_ANCHORS[label.align],
            )
        return result.convert("RGB")

    def composite(self, draw_plan: DrawPlan, images: Sequence[Any], output: OutputConfig) -> bytes:
        """Render and encode the sheet."""
        validate_output(output)
        canvas = draw_plan.canvas
        if output.format == "jpeg" and max(canvas.width, canvas.height) > JPEG_MAX_DIMENSION:
            raise ProcessingError(
                f"Canvas {canvas.width}x{canvas.height} exceeds the JPEG limit of "
                f"{JPEG_MAX_DIMENSION}px; use png or sample fewer frames"
            )
        sheet = self.render(draw_plan, images)

        buffer = io.BytesIO()
        params = {"quality": output.quality} if output.format == "jpeg" else {}
        sheet.save(buffer, format=_PIL_FORMATS[output.format], **params)
        data = buffer.getvalue()
        self.logger.debug(f"Encoded {output.format} sheet, {len(data)} bytes")
        return data


def save_contact_sheet(data: bytes, output_path: Union[str, Path]) -> Path:
    """Write encoded sheet bytes to disk."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        output_path.write_bytes(data)
    except OSError as exc:
        raise ProcessingError(f"Failed to save file '{output_path}': {exc}") from exc
    return output_path
