"""Frame sampling: which frames go onto the sheet."""

import math
from typing import List, Optional, Tuple

from contact_sheet.exceptions import EmptyRange
from contact_sheet.logging.logger import get_logger
from contact_sheet.models import Sample, SelectionConfig, VideoMetadata
from contact_sheet.core.validation import validate_selection
from contact_sheet.utils.time_utils import frame_to_time


def effective_frame_limit(
    metadata: VideoMetadata,
    selection: SelectionConfig,
    limit_cap: Optional[int] = None,
) -> int:
    """Frame limit after clamping to the video length and an optional grid capacity."""
    ceiling = max(1, metadata.max_frame_index)
    limit = selection.frame_limit if selection.frame_limit is not None else ceiling
    limit = min(limit, ceiling)
    if limit_cap is not None:
        limit = min(limit, limit_cap)
    return limit


def candidate_count(selection: SelectionConfig) -> int:
    total_frames = selection.end_frame - selection.start_frame + 1
    if selection.interval_value <= 1:
        return total_frames
    return int(math.ceil(total_frames / selection.interval_value))


def count_samples(
    metadata: VideoMetadata,
    selection: SelectionConfig,
    limit_cap: Optional[int] = None,
) -> int:
    """Number of samples plan_samples would return, without building them."""
    validate_selection(selection, metadata)
    total_frames = selection.end_frame - selection.start_frame + 1
    count = min(
        candidate_count(selection),
        effective_frame_limit(metadata, selection, limit_cap),
        total_frames,
    )
    if count <= 0:
        raise EmptyRange(
            f"No frames to sample in {selection.start_frame}..{selection.end_frame}"
        )
    return count


def _candidate_frame(selection: SelectionConfig, ordinal: int) -> int:
    if selection.interval_value <= 1:
        return selection.start_frame + ordinal
    frame = int(math.floor(selection.start_frame + ordinal * selection.interval_value))
    return min(frame, selection.end_frame)


def plan_samples(
    metadata: VideoMetadata,
    selection: SelectionConfig,
    limit_cap: Optional[int] = None,
) -> Tuple[Sample, ...]:
    """Ordered, deduplicated samples for a selection.

    Candidates step through the inclusive frame range by ``interval_value``
    starting at ``start_frame``. The first ``min(candidates, limit, frames in
    range)`` candidates are kept. ``limit_cap`` further caps the limit, e.g. to
    the capacity of a fixed grid.

    Raises:
        InvalidConfiguration: metadata has a non-positive field.
        InvalidInterval: interval is not positive.
        InvalidLimit: frame limit is not a positive integer.
        InvalidRange: bounds are unordered or outside the video.
        EmptyRange: nothing would be sampled.
    """
    final_count = count_samples(metadata, selection, limit_cap)

    samples: List[Sample] = []
    previous_frame = None
    for ordinal in range(final_count):
        frame_index = _candidate_frame(selection, ordinal)
        if frame_index == previous_frame:
            continue
        previous_frame = frame_index
        samples.append(
            Sample(
                index=len(samples),
                frame_index=frame_index,
                timestamp=frame_to_time(frame_index, metadata.fps),
            )
        )

    get_logger().debug(
        f"Planned {len(samples)} samples from frames "
        f"{selection.start_frame}..{selection.end_frame} (interval {selection.interval_value})"
    )
    return tuple(samples)
