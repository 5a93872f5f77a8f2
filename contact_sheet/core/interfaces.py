"""Capabilities the planners hand their output to."""

from pathlib import Path
from typing import Any, ContextManager, Protocol, Sequence, Union

from contact_sheet.models import DrawPlan, OutputConfig, VideoMetadata


class Decoder(Protocol):
    """Probes videos and grabs frames at timestamps.

    ``open`` yields the decoder's own video handle and releases it on exit;
    ``extract_frame`` only ever receives handles produced by the same decoder.
    """

    def probe(self, video_path: Union[str, Path]) -> VideoMetadata:
        ...

    def open(self, video_path: Union[str, Path]) -> ContextManager[Any]:
        ...

    def extract_frame(self, video_handle: Any, timestamp_seconds: float) -> Any:
        ...


class Renderer(Protocol):
    """Composites frames into an encoded image following a draw plan."""

    def composite(
        self,
        draw_plan: DrawPlan,
        images: Sequence[Any],
        output: OutputConfig,
    ) -> bytes:
        ...
