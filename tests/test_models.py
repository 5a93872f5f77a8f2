from dataclasses import FrozenInstanceError

import pytest

from contact_sheet.exceptions import (
    ConfigError,
    InvalidConfiguration,
    InvalidGrid,
    InvalidInterval,
    InvalidLimit,
    InvalidRange,
)
from contact_sheet.models import LayoutConfig, OutputConfig, SelectionConfig, VideoMetadata

WIDESCREEN = 16 / 9


class TestVideoMetadata:
    def test_max_frame_index(self, hd_metadata):
        assert hd_metadata.max_frame_index == 300
        ntsc = VideoMetadata(duration=10.0, fps=29.97, width=720, height=480)
        assert ntsc.max_frame_index == 299

    def test_aspect_ratio(self, hd_metadata):
        assert hd_metadata.aspect_ratio == pytest.approx(WIDESCREEN)

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigError):
            VideoMetadata.from_dict({"duration": 1, "fps": 25, "width": 10, "height": 10, "bitrate": 1})

    def test_from_dict_requires_fields(self):
        with pytest.raises(ConfigError):
            VideoMetadata.from_dict({"duration": 1})


class TestSelectionConfig:
    def test_for_video_covers_everything(self, whole_video):
        assert whole_video.start_frame == 0
        assert whole_video.end_frame == 300
        assert whole_video.end_time == pytest.approx(10.0)
        assert whole_video.frame_limit is None

    def test_start_time_edit_updates_frame(self, whole_video, hd_metadata):
        edited = whole_video.with_start_time(1.5, hd_metadata)
        assert edited.start_frame == 45
        assert edited.start_time == 1.5
        assert whole_video.start_frame == 0

    def test_end_frame_edit_updates_time(self, whole_video, hd_metadata):
        edited = whole_video.with_end_frame(150, hd_metadata)
        assert edited.end_time == pytest.approx(5.0)

    def test_end_time_edit(self, whole_video, hd_metadata):
        edited = whole_video.with_end_time(2.0, hd_metadata)
        assert edited.end_frame == 60

    @pytest.mark.parametrize(
        "edit,value",
        [
            ("with_start_frame", 301),
            ("with_end_frame", 301),
            ("with_start_frame", -1),
            ("with_end_time", 10.5),
            ("with_start_time", -0.5),
        ],
    )
    def test_out_of_range_edits(self, whole_video, hd_metadata, edit, value):
        with pytest.raises(InvalidRange):
            getattr(whole_video, edit)(value, hd_metadata)

    def test_start_after_end(self, whole_video, hd_metadata):
        short = whole_video.with_end_frame(10, hd_metadata)
        with pytest.raises(InvalidRange):
            short.with_start_frame(11, hd_metadata)

    def test_interval_seconds_view(self, whole_video, hd_metadata):
        edited = whole_video.with_interval_seconds(1.0, hd_metadata)
        assert edited.interval_value == 30
        assert edited.interval_seconds(hd_metadata.fps) == pytest.approx(1.0)

    def test_short_interval_seconds_is_at_least_one_frame(self, whole_video, hd_metadata):
        assert whole_video.with_interval_seconds(0.001, hd_metadata).interval_value == 1

    def test_bad_interval_and_limit(self, whole_video, hd_metadata):
        with pytest.raises(InvalidInterval):
            whole_video.with_interval(0, hd_metadata)
        with pytest.raises(InvalidLimit):
            whole_video.with_frame_limit(0, hd_metadata)

    def test_frame_limit_can_be_cleared(self, whole_video, hd_metadata):
        limited = whole_video.with_frame_limit(5, hd_metadata)
        assert limited.with_frame_limit(None, hd_metadata).frame_limit is None

    def test_is_frozen(self, whole_video):
        with pytest.raises(FrozenInstanceError):
            whole_video.start_frame = 3

    def test_equal_selections_hash_equal(self, hd_metadata):
        first = SelectionConfig.from_frames(0, 100, hd_metadata.fps, 10)
        second = SelectionConfig.from_frames(0, 100, hd_metadata.fps, 10)
        assert first == second
        assert hash(first) == hash(second)

    def test_bad_metadata(self):
        with pytest.raises(InvalidConfiguration):
            SelectionConfig.from_frames(0, 10, 0)


class TestLayoutConfig:
    def test_locked_width_edit_derives_height(self):
        layout = LayoutConfig().with_thumbnail_width(300, WIDESCREEN)
        assert (layout.thumbnail_width, layout.thumbnail_height) == (300, 169)

    def test_locked_height_edit_derives_width(self):
        layout = LayoutConfig().with_thumbnail_height(90, WIDESCREEN)
        assert (layout.thumbnail_width, layout.thumbnail_height) == (160, 90)

    def test_unlocked_edits_keep_other_dimension(self):
        layout = LayoutConfig(aspect_lock=False, thumbnail_width=200, thumbnail_height=100)
        assert layout.with_thumbnail_width(300, WIDESCREEN).thumbnail_height == 100
        assert layout.with_thumbnail_height(50, WIDESCREEN).thumbnail_width == 200

    def test_enabling_lock_recomputes_height(self):
        layout = LayoutConfig(aspect_lock=False, thumbnail_width=400, thumbnail_height=10)
        locked = layout.with_aspect_lock(True, WIDESCREEN)
        assert locked.aspect_lock
        assert locked.thumbnail_height == 225

    def test_updated_validates(self):
        with pytest.raises(InvalidGrid):
            LayoutConfig().updated(columns=0)

    def test_fixed_grid_flag(self):
        assert not LayoutConfig().is_fixed_grid
        assert LayoutConfig(rows=2).is_fixed_grid

    def test_dict_round_trip(self):
        layout = LayoutConfig(columns=6, rows=3, border_color="#ff0000")
        assert LayoutConfig.from_dict(layout.to_dict()) == layout


class TestOutputConfig:
    def test_defaults(self):
        output = OutputConfig().validated()
        assert output.format == "jpeg"
        assert output.extension == ".jpeg"
        assert OutputConfig(format="png").extension == ".png"

    @pytest.mark.parametrize("changes", [{"format": "gif"}, {"quality": 0}, {"quality": 101}])
    def test_invalid(self, changes):
        with pytest.raises(InvalidConfiguration):
            OutputConfig(**changes).validated()
