"""
Color value under CSS filter functions.

Matrices are the luma-preserving blends from the Filter Effects spec
(https://www.w3.org/TR/filter-effects-1/), with the coefficients used by
Barrett Sonntag's CSS filter solver. Every operation returns a new clamped
FilterColor, so a value can be shared between evaluations.
"""

import math
from typing import NamedTuple, Sequence, Tuple

Matrix = Tuple[float, float, float, float, float, float, float, float, float]

# Channel spread below this counts as gray; float noise near white would give a random hue
_EPSILON = 1e-9


def clamp(v: float) -> float:
    """Clamp a channel to [0, 255]."""
    return max(0.0, min(255.0, v))


def sepia_matrix(value: float = 1) -> Matrix:
    """Row-major sepia blend; value 0 is identity, 1 full sepia."""
    inv = 1 - value
    return (
        0.393 + 0.607 * inv, 0.769 - 0.769 * inv, 0.189 - 0.189 * inv,
        0.349 - 0.349 * inv, 0.686 + 0.314 * inv, 0.168 - 0.168 * inv,
        0.272 - 0.272 * inv, 0.534 - 0.534 * inv, 0.131 + 0.869 * inv,
    )


def saturate_matrix(value: float = 1) -> Matrix:
    """Row-major saturation blend; value 1 is identity, 0 luma grayscale."""
    return (
        0.213 + 0.787 * value, 0.715 - 0.715 * value, 0.072 - 0.072 * value,
        0.213 - 0.213 * value, 0.715 + 0.285 * value, 0.072 - 0.072 * value,
        0.213 - 0.213 * value, 0.715 - 0.715 * value, 0.072 + 0.928 * value,
    )


def hue_rotate_matrix(angle: float = 0) -> Matrix:
    """Row-major hue rotation by angle degrees around the luma axis."""
    rad = math.radians(angle)
    sin = math.sin(rad)
    cos = math.cos(rad)
    return (
        0.213 + cos * 0.787 - sin * 0.213,
        0.715 - cos * 0.715 - sin * 0.715,
        0.072 - cos * 0.072 + sin * 0.928,
        0.213 - cos * 0.213 + sin * 0.143,
        0.715 + cos * 0.285 + sin * 0.140,
        0.072 - cos * 0.072 - sin * 0.283,
        0.213 - cos * 0.213 - sin * 0.787,
        0.715 - cos * 0.715 + sin * 0.715,
        0.072 + cos * 0.928 + sin * 0.072,
    )


class FilterColor(NamedTuple):
    """Immutable RGB triple of floats in [0, 255]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def of(cls, r: float, g: float, b: float) -> "FilterColor":
        return cls(clamp(r), clamp(g), clamp(b))

    @classmethod
    def black(cls) -> "FilterColor":
        return cls(0.0, 0.0, 0.0)

    def multiply(self, m: Sequence[float]) -> "FilterColor":
        r, g, b = self
        return FilterColor(
            clamp(r * m[0] + g * m[1] + b * m[2]),
            clamp(r * m[3] + g * m[4] + b * m[5]),
            clamp(r * m[6] + g * m[7] + b * m[8]),
        )

    def invert(self, value: float = 1) -> "FilterColor":
        k = 1 - 2 * value
        return FilterColor(*(clamp((value + (c / 255) * k) * 255) for c in self))

    def sepia(self, value: float = 1) -> "FilterColor":
        return self.multiply(sepia_matrix(value))

    def saturate(self, value: float = 1) -> "FilterColor":
        return self.multiply(saturate_matrix(value))

    def hue_rotate(self, angle: float = 0) -> "FilterColor":
        return self.multiply(hue_rotate_matrix(angle))

    def brightness(self, value: float = 1) -> "FilterColor":
        return FilterColor(*(clamp(c * value) for c in self))

    def contrast(self, value: float = 1) -> "FilterColor":
        return FilterColor(*(clamp((c - 128) * value + 128) for c in self))

    def apply(self, params: Sequence[float]) -> "FilterColor":
        """Apply [invert, sepia, saturate, hue-rotate deg, brightness, contrast] in that order.

        The order is fixed: the reachable gamut and the solver's loss surface
        both depend on it.
        """
        invert, sepia, saturate, hue, brightness, contrast = params
        return (
            self.invert(invert)
            .sepia(sepia)
            .saturate(saturate)
            .hue_rotate(hue)
            .brightness(brightness)
            .contrast(contrast)
        )

    def hsl(self) -> Tuple[float, float, float]:
        """HSL with every component scaled to 0-100 (hue as a fraction of a turn), unrounded."""
        r, g, b = self.r / 255, self.g / 255, self.b / 255
        hi = max(r, g, b)
        lo = min(r, g, b)
        l = (hi + lo) / 2
        if hi - lo < _EPSILON:
            return 0.0, 0.0, l * 100
        d = hi - lo
        s = d / (2 - hi - lo) if l > 0.5 else d / (hi + lo)
        if hi == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif hi == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        return h / 6 * 100, s * 100, l * 100
