"""Tests for timecode conversion — seconds <-> HH:MM:SS:FF."""

import pytest

from edlcomposer.timecode import (
    DEFAULT_FPS,
    frame_duration,
    seconds_to_timecode,
    timecode_to_seconds,
)


class TestSecondsToTimecode:

    def test_zero(self):
        assert seconds_to_timecode(0, 25) == "00:00:00:00"

    def test_default_fps_is_pal(self):
        assert DEFAULT_FPS == 25
        assert seconds_to_timecode(1.5) == "00:00:01:12"

    def test_whole_seconds(self):
        assert seconds_to_timecode(10, 25) == "00:00:10:00"

    def test_frames_from_fraction(self):
        assert seconds_to_timecode(38.32, 25) == "00:00:38:08"

    def test_frames_truncate(self):
        # 0.5s at 25fps is 12.5 frames
        assert seconds_to_timecode(6.5, 25) == "00:00:06:12"

    def test_float_noise_absorbed(self):
        # 0.28 * 25 evaluates to 6.999999...
        assert seconds_to_timecode(10.28, 25) == "00:00:10:07"

    def test_hours_minutes(self):
        assert seconds_to_timecode(3661.5, 25) == "01:01:01:12"

    def test_hours_wrap_at_24(self):
        assert seconds_to_timecode(25 * 3600, 25) == "01:00:00:00"

    def test_24fps(self):
        assert seconds_to_timecode(10.5, 24) == "00:00:10:12"

    def test_2997_last_frame_of_second(self):
        assert seconds_to_timecode(0.99, 29.97) == "00:00:00:29"

    def test_2997_whole_second(self):
        assert seconds_to_timecode(1.0, 29.97) == "00:00:01:00"

    def test_frame_never_reaches_rate(self):
        assert seconds_to_timecode(0.9999999999, 25) == "00:00:00:24"

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="negative"):
            seconds_to_timecode(-0.5, 25)

    def test_zero_fps_raises(self):
        with pytest.raises(ValueError, match="positive"):
            seconds_to_timecode(1, 0)

    def test_string_fps_raises(self):
        with pytest.raises(TypeError):
            seconds_to_timecode(1, "25")

    def test_none_seconds_raises(self):
        with pytest.raises(TypeError):
            seconds_to_timecode(None, 25)


class TestTimecodeToSeconds:

    def test_basic(self):
        assert timecode_to_seconds("00:00:28:08", 25) == pytest.approx(28.32)

    def test_frames_depend_on_rate(self):
        assert timecode_to_seconds("00:00:28:08", 24) == pytest.approx(28 + 8 / 24)
        assert timecode_to_seconds("00:00:28:08", 29.97) == pytest.approx(28 + 8 / 29.97)

    def test_hours(self):
        assert timecode_to_seconds("01:00:00:00", 25) == 3600

    def test_drop_frame_separator(self):
        assert timecode_to_seconds("00:00:10;15", 30) == pytest.approx(10.5)

    def test_without_frames(self):
        assert timecode_to_seconds("00:01:30", 25) == 90

    def test_surrounding_whitespace(self):
        assert timecode_to_seconds(" 00:00:01:00 ", 25) == 1

    @pytest.mark.parametrize("bad", ["abc", "1:2", "00:61:00:00", "00:00:xx:00", "00:00:01:00:00"])
    def test_invalid_format_raises(self, bad):
        with pytest.raises(ValueError, match="Invalid timecode format"):
            timecode_to_seconds(bad, 25)

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="Invalid timecode format"):
            timecode_to_seconds("", 25)

    def test_non_string_raises(self):
        with pytest.raises(ValueError, match="Invalid timecode format"):
            timecode_to_seconds(28.32, 25)


class TestRoundTrip:
    """Converting to timecode and back loses less than one frame."""

    @pytest.mark.parametrize("fps", [25, 29.97, 24])
    @pytest.mark.parametrize("seconds", [0, 0.5, 1.0, 10.28, 33.37, 59.99, 3599.96, 7322.123])
    def test_within_one_frame(self, fps, seconds):
        back = timecode_to_seconds(seconds_to_timecode(seconds, fps), fps)
        assert abs(back - seconds) < frame_duration(fps)


def test_frame_duration():
    assert frame_duration(25) == pytest.approx(0.04)
    assert frame_duration(29.97) == pytest.approx(1 / 29.97)
