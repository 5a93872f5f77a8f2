import pytest

from contact_sheet.exceptions import InvalidConfiguration, InvalidRange, InvalidTimeFormat
from contact_sheet.utils.time_utils import (
    format_label,
    format_time,
    frame_to_time,
    interval_frames_to_seconds,
    interval_seconds_to_frames,
    parse_time,
    parse_time_value,
    round_half_up,
    time_to_frame,
)


def test_frame_to_time_divides_by_fps():
    assert frame_to_time(45, 30) == 1.5
    assert frame_to_time(0, 24) == 0.0


def test_time_to_frame_floors():
    assert time_to_frame(1.5, 30) == 45
    assert time_to_frame(1.49, 30) == 44
    assert time_to_frame(0.0, 25) == 0


@pytest.mark.parametrize("fps", [23.976, 24, 25, 29.97, 30, 59.94, 60])
def test_frame_time_round_trip(fps):
    for frame in range(0, 5000, 7):
        assert time_to_frame(frame_to_time(frame, fps), fps) == frame


@pytest.mark.parametrize("fps", [0, -30])
def test_conversions_reject_non_positive_fps(fps):
    with pytest.raises(InvalidConfiguration):
        frame_to_time(10, fps)
    with pytest.raises(InvalidConfiguration):
        time_to_frame(1.0, fps)


def test_conversions_reject_negative_inputs():
    with pytest.raises(InvalidRange):
        frame_to_time(-1, 30)
    with pytest.raises(InvalidRange):
        time_to_frame(-0.5, 30)


def test_format_time_pads_fields():
    assert format_time(0) == "00:00:00.000"
    assert format_time(3723.456) == "01:02:03.456"
    assert format_time(59.9994) == "00:00:59.999"
    assert format_time(59.9996) == "00:01:00.000"


def test_format_time_hours_are_unbounded():
    assert format_time(100 * 3600 + 1.5) == "100:00:01.500"


def test_parse_time_inverts_format_time():
    assert parse_time("01:02:03.456") == 3723.456
    for millis in range(0, 7_500_000, 12_347):
        seconds = millis / 1000
        assert parse_time(format_time(seconds)) == seconds


@pytest.mark.parametrize(
    "text",
    ["", "1:2:3", "00:61:00.000", "00:00:60.000", "00:00:00.12", "00:00:00", "abc", "-1:00:00.000"],
)
def test_parse_time_rejects_malformed_strings(text):
    with pytest.raises(InvalidTimeFormat):
        parse_time(text)


def test_format_label_is_compact_minutes_seconds():
    assert format_label(0) == "00:00"
    assert format_label(75.9) == "01:15"
    assert format_label(3725.2) == "62:05"


def test_parse_time_value_accepts_cli_formats():
    assert parse_time_value("1.5s") == 1.5
    assert parse_time_value("200ms") == 0.2
    assert parse_time_value("2,5") == 2.5
    assert parse_time_value("00:00:03.500") == 3.5
    assert parse_time_value("0", allow_zero=True) == 0.0


@pytest.mark.parametrize("value", ["0", "-1", "s", "ten", "nan"])
def test_parse_time_value_rejects_bad_values(value):
    with pytest.raises(InvalidTimeFormat):
        parse_time_value(value)


def test_interval_seconds_view():
    assert interval_seconds_to_frames(1.0, 30) == 30
    assert interval_seconds_to_frames(2.0, 29.97) == 60
    assert interval_seconds_to_frames(0.01, 30) == 1
    assert interval_frames_to_seconds(30, 30) == 1.0


def test_round_half_up():
    assert round_half_up(168.75) == 169
    assert round_half_up(2.5) == 3
    assert round_half_up(0.49) == 0
