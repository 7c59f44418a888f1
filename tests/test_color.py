"""Tests for the filter color model."""

import math
import random

import pytest

from tint.color import (
    FilterColor,
    clamp,
    hue_rotate_matrix,
    saturate_matrix,
    sepia_matrix,
)

IDENTITY = (1, 0, 0, 0, 1, 0, 0, 0, 1)


def assert_close(color, expected, tol=1e-6):
    for got, want in zip(color, expected):
        assert abs(got - want) < tol, (tuple(color), expected)


class TestMatrices:
    def test_identity_amounts(self):
        for m in (sepia_matrix(0), saturate_matrix(1), hue_rotate_matrix(0)):
            for got, want in zip(m, IDENTITY):
                assert abs(got - want) < 1e-9

    def test_full_sepia_coefficients(self):
        assert sepia_matrix(1) == pytest.approx(
            (0.393, 0.769, 0.189, 0.349, 0.686, 0.168, 0.272, 0.534, 0.131)
        )

    def test_saturate_zero_is_luma(self):
        m = saturate_matrix(0)
        for row in range(3):
            assert m[row * 3 : row * 3 + 3] == pytest.approx((0.213, 0.715, 0.072))

    def test_hue_rotate_full_turn(self):
        for got, want in zip(hue_rotate_matrix(360), IDENTITY):
            assert abs(got - want) < 1e-9

    def test_hue_rotate_preserves_gray(self):
        gray = FilterColor(100.0, 100.0, 100.0)
        for angle in (30, 90, 180, 270):
            assert_close(gray.hue_rotate(angle), (100, 100, 100), tol=0.1)


class TestPrimitives:
    def test_clamp(self):
        assert clamp(-5) == 0
        assert clamp(300) == 255
        assert clamp(12.5) == 12.5

    def test_of_clamps(self):
        assert FilterColor.of(-10, 128, 999) == (0, 128, 255)

    def test_invert(self):
        assert_close(FilterColor.black().invert(1), (255, 255, 255))
        assert_close(FilterColor.black().invert(0.5), (127.5, 127.5, 127.5))
        assert_close(FilterColor(10, 20, 30).invert(0), (10, 20, 30))
        assert_close(FilterColor(10, 20, 30).invert(), (245, 235, 225))

    def test_sepia_on_white(self):
        assert_close(FilterColor(255, 255, 255).sepia(1), (255, 255, 0.937 * 255))

    def test_saturate_zero_grays(self):
        r, g, b = FilterColor(255, 0, 0).saturate(0)
        assert abs(r - g) < 1e-9 and abs(g - b) < 1e-9
        assert abs(r - 0.213 * 255) < 1e-6

    def test_brightness(self):
        assert_close(FilterColor(200, 100, 50).brightness(0.5), (100, 50, 25))
        assert_close(FilterColor(200, 100, 50).brightness(2), (255, 200, 100))

    def test_contrast(self):
        assert_close(FilterColor(200, 100, 50).contrast(1), (200, 100, 50))
        assert_close(FilterColor(200, 100, 50).contrast(0), (128, 128, 128))
        assert_close(FilterColor(200, 100, 50).contrast(2), (255, 72, 0))

    def test_operations_return_new_values(self):
        base = FilterColor(10, 20, 30)
        base.invert(1).sepia(1).brightness(2)
        assert base == (10, 20, 30)

    def test_apply_uses_canonical_order(self):
        params = (0.4, 0.6, 3.0, 120.0, 0.9, 1.3)
        expected = (
            FilterColor.black()
            .invert(0.4)
            .sepia(0.6)
            .saturate(3.0)
            .hue_rotate(120.0)
            .brightness(0.9)
            .contrast(1.3)
        )
        assert FilterColor.black().apply(params) == expected
        shuffled = FilterColor.black().invert(0.4).brightness(0.9).sepia(0.6).contrast(1.3).saturate(3.0).hue_rotate(120.0)
        assert shuffled != expected


class TestHsl:
    def test_primaries(self):
        assert_close(FilterColor(255, 0, 0).hsl(), (0, 100, 50))
        assert_close(FilterColor(0, 255, 0).hsl(), (100 / 3, 100, 50))
        assert_close(FilterColor(0, 0, 255).hsl(), (200 / 3, 100, 50))

    def test_gray_has_no_hue(self):
        assert_close(FilterColor(51, 51, 51).hsl(), (0, 0, 20))

    def test_magenta_wraps(self):
        h, s, l = FilterColor(255, 0, 128).hsl()
        assert 90 < h < 100

    def test_unrounded(self):
        h, s, l = FilterColor(34, 197, 94).hsl()
        assert h != round(h)


class TestClampingProperty:
    OPERATIONS = ("invert", "sepia", "saturate", "hue_rotate", "brightness", "contrast")

    @pytest.mark.parametrize("seed", range(20))
    def test_random_sequences_stay_in_range(self, seed):
        rng = random.Random(seed)
        color = FilterColor.of(rng.uniform(0, 255), rng.uniform(0, 255), rng.uniform(0, 255))
        for _ in range(30):
            op = rng.choice(self.OPERATIONS)
            if op == "hue_rotate":
                amount = rng.uniform(-720, 720)
            elif op in ("invert", "sepia"):
                amount = rng.uniform(0, 1)
            else:
                amount = rng.uniform(0, 80)
            color = getattr(color, op)(amount)
            for c in color:
                assert 0 <= c <= 255
                assert not math.isnan(c)
