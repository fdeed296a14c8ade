"""Tests for Floyd-Steinberg error diffusion."""

import numpy as np

from text_sprite.core.dither import (
    FLOYD_STEINBERG_KERNEL,
    KERNEL_DENOMINATOR,
    diffuse_error,
    neighbor_accepts,
    weighted_error,
)


def _buffer(width=4, height=3):
    return np.zeros((height, width, 3), dtype=np.int64)


class TestKernel:
    def test_weights_sum_to_one(self):
        assert sum(n for _, _, n in FLOYD_STEINBERG_KERNEL) == KERNEL_DENOMINATOR

    def test_taps(self):
        taps = {(dx, dy): n for dx, dy, n in FLOYD_STEINBERG_KERNEL}
        assert taps == {(1, 0): 7, (-1, 1): 3, (0, 1): 5, (1, 1): 1}


class TestWeightedError:
    def test_exact(self):
        assert weighted_error(np.array([16]), 7)[0] == 7

    def test_rounds_half_up(self):
        assert weighted_error(np.array([8]), 1)[0] == 1
        assert weighted_error(np.array([-8]), 1)[0] == 0
        assert weighted_error(np.array([-24]), 1)[0] == -1

    def test_rounds_to_nearest(self):
        # 100 * 7 / 16 = 43.75
        assert weighted_error(np.array([100]), 7)[0] == 44
        # 100 * 5 / 16 = 31.25
        assert weighted_error(np.array([100]), 5)[0] == 31


class TestNeighborRule:
    def test_lower_left_never_lands_on_column_zero(self):
        assert not neighbor_accepts(-1, 0, 1, 4, 3)
        assert neighbor_accepts(-1, 1, 1, 4, 3)

    def test_below_lands_on_column_zero(self):
        assert neighbor_accepts(0, 0, 1, 4, 3)

    def test_out_of_bounds(self):
        assert not neighbor_accepts(1, 4, 0, 4, 3)
        assert not neighbor_accepts(0, 0, 3, 4, 3)


class TestDiffuseError:
    def test_left_edge_source(self):
        buf = _buffer()
        diffuse_error(buf, 0, 0, np.array([16, 16, 16]))
        assert list(buf[0, 1]) == [7, 7, 7]
        assert list(buf[1, 0]) == [5, 5, 5]
        assert list(buf[1, 1]) == [1, 1, 1]
        assert buf.sum() == 13 * 3

    def test_column_one_does_not_feed_column_zero(self):
        buf = _buffer()
        diffuse_error(buf, 1, 0, np.array([16, 16, 16]))
        assert list(buf[1, 0]) == [0, 0, 0]
        assert list(buf[1, 1]) == [5, 5, 5]
        assert list(buf[0, 2]) == [7, 7, 7]

    def test_interior_source_uses_all_taps(self):
        buf = _buffer()
        diffuse_error(buf, 2, 0, np.array([16, 0, -16]))
        assert list(buf[1, 1]) == [3, 0, -3]
        assert buf[:, :, 0].sum() == 16
        assert buf[:, :, 2].sum() == -16

    def test_last_row_diffuses_only_right(self):
        buf = _buffer()
        diffuse_error(buf, 1, 2, np.array([16, 16, 16]))
        assert list(buf[2, 2]) == [7, 7, 7]
        assert buf.sum() == 7 * 3

    def test_zero_error_is_noop(self):
        buf = _buffer()
        buf[:] = 5
        diffuse_error(buf, 1, 1, np.array([0, 0, 0]))
        assert (buf == 5).all()

    def test_values_may_leave_byte_range(self):
        buf = _buffer()
        buf[:] = 250
        diffuse_error(buf, 0, 0, np.array([32, -255, 0]))
        assert buf[0, 1, 0] == 264
        assert buf[0, 1, 1] < 250
