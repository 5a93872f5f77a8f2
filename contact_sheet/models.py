"""Data models for contact-sheet module."""

import json
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

from contact_sheet.config.config import (
    DEFAULT_ASPECT_LOCK,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BORDER_COLOR,
    DEFAULT_BORDER_SPACING,
    DEFAULT_BORDER_THICKNESS,
    DEFAULT_COLUMNS,
    DEFAULT_FILM_SPACING,
    DEFAULT_INTERVAL_FRAMES,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SHOW_BORDER,
    DEFAULT_SHOW_TIMESTAMP,
    DEFAULT_THUMBNAIL_WIDTH,
    DEFAULT_TIMESTAMP_COLOR,
    DEFAULT_TIMESTAMP_FONT_SIZE,
    DEFAULT_TIMESTAMP_POSITION,
    LABEL_BG_ALPHA,
    LABEL_BG_COLOR,
)
from contact_sheet.exceptions import ConfigError
from contact_sheet.utils.time_utils import (
    frame_to_time,
    interval_frames_to_seconds,
    interval_seconds_to_frames,
    round_half_up,
    time_to_frame,
)


def _from_mapping(cls, data: Dict[str, Any]):
    """Build a flat dataclass from a mapping, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"{cls.__name__} expects an object, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} fields: {', '.join(sorted(unknown))}")
    try:
        return cls(**data)
    except TypeError as exc:
        raise ConfigError(f"Invalid {cls.__name__}: {exc}") from exc


@dataclass(frozen=True)
class VideoMetadata:
    """Video file information."""
    duration: float
    fps: float
    width: int
    height: int
    codec: str = "unknown"

    @property
    def max_frame_index(self) -> int:
        return time_to_frame(self.duration, self.fps)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoMetadata":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class SelectionConfig:
    """Frame range, interval and limit for sampling.

    Frame and time bounds are two views of the same range. Use the ``with_*``
    methods to edit one view; the other is re-derived and the result validated
    against the video.
    """
    start_frame: int
    end_frame: int
    start_time: float
    end_time: float
    interval_value: float = DEFAULT_INTERVAL_FRAMES
    frame_limit: Optional[int] = None

    @classmethod
    def from_frames(
        cls,
        start_frame: int,
        end_frame: int,
        fps: float,
        interval_value: float = DEFAULT_INTERVAL_FRAMES,
        frame_limit: Optional[int] = None,
    ) -> "SelectionConfig":
        """Build from frame bounds, deriving the time bounds."""
        return cls(
            start_frame=start_frame,
            end_frame=end_frame,
            start_time=frame_to_time(start_frame, fps),
            end_time=frame_to_time(end_frame, fps),
            interval_value=interval_value,
            frame_limit=frame_limit,
        )

    @classmethod
    def for_video(
        cls,
        metadata: VideoMetadata,
        interval_value: float = DEFAULT_INTERVAL_FRAMES,
        frame_limit: Optional[int] = None,
    ) -> "SelectionConfig":
        """Selection covering the whole video."""
        selection = cls.from_frames(
            0, metadata.max_frame_index, metadata.fps, interval_value, frame_limit
        )
        return selection.validated(metadata)

    def validated(self, metadata: VideoMetadata) -> "SelectionConfig":
        from contact_sheet.core.validation import validate_selection

        validate_selection(self, metadata)
        return self

    def with_start_frame(self, frame: int, metadata: VideoMetadata) -> "SelectionConfig":
        updated = replace(self, start_frame=frame, start_time=frame_to_time(frame, metadata.fps))
        return updated.validated(metadata)

    def with_end_frame(self, frame: int, metadata: VideoMetadata) -> "SelectionConfig":
        updated = replace(self, end_frame=frame, end_time=frame_to_time(frame, metadata.fps))
        return updated.validated(metadata)

    def with_start_time(self, seconds: float, metadata: VideoMetadata) -> "SelectionConfig":
        updated = replace(self, start_time=seconds, start_frame=time_to_frame(seconds, metadata.fps))
        return updated.validated(metadata)

    def with_end_time(self, seconds: float, metadata: VideoMetadata) -> "SelectionConfig":
        updated = replace(self, end_time=seconds, end_frame=time_to_frame(seconds, metadata.fps))
        return updated.validated(metadata)

    def with_interval(self, frames: float, metadata: VideoMetadata) -> "SelectionConfig":
        return replace(self, interval_value=frames).validated(metadata)

    def with_interval_seconds(self, seconds: float, metadata: VideoMetadata) -> "SelectionConfig":
        frames = interval_seconds_to_frames(seconds, metadata.fps)
        return replace(self, interval_value=frames).validated(metadata)

    def with_frame_limit(self, limit: Optional[int], metadata: VideoMetadata) -> "SelectionConfig":
        return replace(self, frame_limit=limit).validated(metadata)

    def interval_seconds(self, fps: float) -> float:
        return interval_frames_to_seconds(self.interval_value, fps)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SelectionConfig":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class LayoutConfig:
    """Grid and per-thumbnail styling configuration.

    ``rows=None`` means a dynamic grid: rows are derived from the sample count.
    ``thumbnail_height=None`` means the height is derived from the video aspect
    ratio.
    """
    columns: int = DEFAULT_COLUMNS
    rows: Optional[int] = None
    thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH
    thumbnail_height: Optional[int] = None
    aspect_lock: bool = DEFAULT_ASPECT_LOCK
    border_spacing: int = DEFAULT_BORDER_SPACING
    film_spacing: int = DEFAULT_FILM_SPACING
    show_border: bool = DEFAULT_SHOW_BORDER
    border_thickness: int = DEFAULT_BORDER_THICKNESS
    border_color: str = DEFAULT_BORDER_COLOR
    background_color: str = DEFAULT_BACKGROUND_COLOR
    show_timestamp: bool = DEFAULT_SHOW_TIMESTAMP
    timestamp_font_size: int = DEFAULT_TIMESTAMP_FONT_SIZE
    timestamp_color: str = DEFAULT_TIMESTAMP_COLOR
    timestamp_position: str = DEFAULT_TIMESTAMP_POSITION
    timestamp_background_color: str = LABEL_BG_COLOR
    timestamp_background_alpha: float = LABEL_BG_ALPHA

    @property
    def is_fixed_grid(self) -> bool:
        return self.rows is not None

    def validated(self) -> "LayoutConfig":
        from contact_sheet.core.validation import validate_layout

        validate_layout(self)
        return self

    def updated(self, **changes) -> "LayoutConfig":
        """Copy with changes applied, then validated."""
        return replace(self, **changes).validated()

    def with_thumbnail_width(self, width: int, aspect_ratio: float) -> "LayoutConfig":
        changes: Dict[str, Any] = {"thumbnail_width": width}
        if self.aspect_lock:
            changes["thumbnail_height"] = round_half_up(width / aspect_ratio)
        return self.updated(**changes)

    def with_thumbnail_height(self, height: int, aspect_ratio: float) -> "LayoutConfig":
        changes: Dict[str, Any] = {"thumbnail_height": height}
        if self.aspect_lock:
            changes["thumbnail_width"] = round_half_up(height * aspect_ratio)
        return self.updated(**changes)

    def with_aspect_lock(self, enabled: bool, aspect_ratio: float) -> "LayoutConfig":
        changes: Dict[str, Any] = {"aspect_lock": enabled}
        if enabled:
            changes["thumbnail_height"] = round_half_up(self.thumbnail_width / aspect_ratio)
        return self.updated(**changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class OutputConfig:
    """Encoded image format settings."""
    format: str = DEFAULT_OUTPUT_FORMAT
    quality: int = DEFAULT_JPEG_QUALITY

    @property
    def extension(self) -> str:
        return f".{self.format}"

    def validated(self) -> "OutputConfig":
        from contact_sheet.core.validation import validate_output

        validate_output(self)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputConfig":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class Sample:
    """One frame selected for the grid."""
    index: int
    frame_index: int
    timestamp: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sample":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class GridPlan:
    """Resolved grid dimensions and canvas size."""
    columns: int
    rows: int
    thumbnail_width: int
    thumbnail_height: int
    film_spacing: int
    border_spacing: int
    canvas_width: int
    canvas_height: int

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridPlan":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rect":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class BorderRect:
    """Border stroke drawn inside ``rect``."""
    rect: Rect
    thickness: int
    color: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BorderRect":
        return cls(rect=Rect.from_dict(data["rect"]), thickness=data["thickness"], color=data["color"])


@dataclass(frozen=True)
class TimestampLabel:
    """Timestamp text anchor plus its background box style."""
    text: str
    x: int
    y: int
    align: str
    font_size: int
    color: str
    background_color: str
    background_alpha: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimestampLabel":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class ThumbnailPlacement:
    """Where and how one sample is drawn on the canvas."""
    sample: Sample
    x: int
    y: int
    width: int
    height: int
    border: Optional[BorderRect] = None
    label: Optional[TimestampLabel] = None

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThumbnailPlacement":
        border = data.get("border")
        label = data.get("label")
        return cls(
            sample=Sample.from_dict(data["sample"]),
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
            border=BorderRect.from_dict(border) if border else None,
            label=TimestampLabel.from_dict(label) if label else None,
        )


@dataclass(frozen=True)
class Canvas:
    width: int
    height: int
    background_color: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Canvas":
        return _from_mapping(cls, data)


@dataclass(frozen=True)
class DrawPlan:
    """Pixel-exact drawing instructions for a renderer."""
    canvas: Canvas
    placements: Tuple[ThumbnailPlacement, ...]
    columns: int
    rows: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["placements"] = list(data["placements"])
        return data

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrawPlan":
        return cls(
            canvas=Canvas.from_dict(data["canvas"]),
            placements=tuple(ThumbnailPlacement.from_dict(p) for p in data["placements"]),
            columns=data["columns"],
            rows=data["rows"],
        )


@dataclass(frozen=True)
class ContactSheetPlan:
    """Samples, grid and draw plan for one contact sheet."""
    samples: Tuple[Sample, ...]
    grid: GridPlan
    draw_plan: DrawPlan
    metadata: Optional[VideoMetadata] = field(default=None, compare=False)

    @property
    def total_samples(self) -> int:
        return len(self.samples)

    @property
    def timestamps(self) -> Tuple[float, ...]:
        return tuple(sample.timestamp for sample in self.samples)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "samples": [asdict(sample) for sample in self.samples],
            "grid": asdict(self.grid),
            "draw_plan": self.draw_plan.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
