import numpy as np
import pytest

from binaural import (InvalidParameter, duration_channels, generate_period, loop_channels,
                      tile_period)


class TestTilePeriod:
    def test_repeats_cyclically(self):
        channel = tile_period(np.array([1, 2, 3], dtype=np.int16), 7)
        np.testing.assert_array_equal(channel, [1, 2, 3, 1, 2, 3, 1])

    def test_truncates_to_shorter_length(self):
        channel = tile_period(np.array([1, 2, 3], dtype=np.int16), 2)
        np.testing.assert_array_equal(channel, [1, 2])

    def test_keeps_dtype(self):
        assert tile_period(np.array([1, 2], dtype=np.int8), 5).dtype == np.int8

    def test_rejects_empty_period(self):
        with pytest.raises(InvalidParameter):
            tile_period(np.array([], dtype=np.int16), 4)

    def test_rejects_non_positive_length(self):
        with pytest.raises(InvalidParameter):
            tile_period(np.array([1], dtype=np.int16), 0)


class TestLoopChannels:
    def test_440_with_4hz_beat_over_10_loops(self):
        right = generate_period(440.0, 44100)
        left = generate_period(444.0, 44100)
        assert (len(right), len(left)) == (100, 99)

        channels = loop_channels([left, right], 10)
        assert [len(c) for c in channels] == [990, 990]

    def test_each_channel_repeats_its_own_period(self):
        right = generate_period(440.0, 44100)
        left = generate_period(444.0, 44100, 45.0)
        left_channel, right_channel = loop_channels([left, right], 10)

        indices = np.arange(990)
        np.testing.assert_array_equal(left_channel, left[indices % len(left)])
        np.testing.assert_array_equal(right_channel, right[indices % len(right)])

    @pytest.mark.parametrize("num_loops", [0, -3])
    def test_rejects_non_positive_loops(self, num_loops):
        with pytest.raises(InvalidParameter):
            loop_channels([generate_period(440.0, 44100)], num_loops)


class TestDurationChannels:
    def test_whole_periods_per_channel(self):
        right = generate_period(440.0, 44100)
        left = generate_period(444.0, 44100)
        left_channel, right_channel = duration_channels([left, right], 0.1, 44100)

        # 4410 samples: 44 periods of 99 and 44 periods of 100
        assert len(left_channel) == 44 * 99
        assert len(right_channel) == 44 * 100

    def test_channel_ends_on_period_boundary(self):
        period = generate_period(444.0, 44100)
        (channel,) = duration_channels([period], 0.5, 44100)
        assert len(channel) % len(period) == 0
        np.testing.assert_array_equal(channel[-len(period):], period)

    @pytest.mark.parametrize("duration", [0.0, -1.0])
    def test_rejects_non_positive_duration(self, duration):
        with pytest.raises(InvalidParameter):
            duration_channels([generate_period(440.0, 44100)], duration, 44100)

    def test_rejects_duration_shorter_than_a_period(self):
        with pytest.raises(InvalidParameter):
            duration_channels([generate_period(440.0, 44100)], 0.001, 44100)

    def test_rejects_infinite_duration(self):
        with pytest.raises(InvalidParameter):
            duration_channels([generate_period(440.0, 44100)], float("inf"), 44100)


class TestLoopCountType:
    def test_rejects_float_loop_count(self):
        with pytest.raises(InvalidParameter):
            loop_channels([generate_period(440.0, 44100)], 10.0)

    def test_accepts_numpy_integer(self):
        (channel,) = loop_channels([generate_period(440.0, 44100)], np.int64(3))
        assert len(channel) == 300
