"""
Filter parameter vector and its CSS `filter` serialization.
"""

import re
from typing import Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .parser import num, round_half_up


class FilterParams(BaseModel):
    """Filter amounts in natural CSS units, canonical application order."""

    model_config = ConfigDict(frozen=True)

    invert: float = Field(default=0.0, ge=0, le=1)
    sepia: float = Field(default=0.0, ge=0, le=1)
    saturate: float = Field(default=1.0, ge=0)
    hue_rotate: float = Field(default=0.0, ge=0, lt=360, description="Degrees")
    brightness: float = Field(default=1.0, ge=0)
    contrast: float = Field(default=1.0, ge=0)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "FilterParams":
        invert, sepia, saturate, hue_rotate, brightness, contrast = values
        hue_rotate = hue_rotate % 360
        if hue_rotate >= 360:
            # float modulo of a tiny negative angle rounds up to 360.0
            hue_rotate = 0.0
        return cls(
            invert=invert,
            sepia=sepia,
            saturate=saturate,
            hue_rotate=hue_rotate,
            brightness=brightness,
            contrast=contrast,
        )

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return (self.invert, self.sepia, self.saturate, self.hue_rotate, self.brightness, self.contrast)

    def rounded(self) -> "FilterParams":
        """Params exactly as they survive a trip through format_filter."""
        return parse_filter(format_filter(self))


def format_filter(params: FilterParams) -> str:
    """Render params as a single-line CSS filter value with integer amounts."""

    def pct(v: float) -> int:
        return round_half_up(v * 100)

    return (
        f"invert({pct(params.invert)}%) "
        f"sepia({pct(params.sepia)}%) "
        f"saturate({pct(params.saturate)}%) "
        f"hue-rotate({round_half_up(params.hue_rotate) % 360}deg) "
        f"brightness({pct(params.brightness)}%) "
        f"contrast({pct(params.contrast)}%)"
    )


FILTER_RE = re.compile(
    f"^invert\\(({num})%\\)\\s+"
    f"sepia\\(({num})%\\)\\s+"
    f"saturate\\(({num})%\\)\\s+"
    f"hue-rotate\\(({num})deg\\)\\s+"
    f"brightness\\(({num})%\\)\\s+"
    f"contrast\\(({num})%\\)$",
    re.IGNORECASE,
)


def parse_filter(css: str) -> FilterParams:
    """Read a filter chain produced by format_filter back into params.

    Raises ValueError when the string is not in canonical form.
    """
    m = FILTER_RE.match(css.strip())
    if not m:
        raise ValueError(f"not a canonical filter chain: {css!r}")
    invert, sepia, saturate, hue, brightness, contrast = (float(v) for v in m.groups())
    return FilterParams.from_sequence(
        (invert / 100, sepia / 100, saturate / 100, hue, brightness / 100, contrast / 100)
    )
