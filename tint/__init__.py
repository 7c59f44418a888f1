"""Recolor monochrome assets with CSS filters."""

from .color import FilterColor, hue_rotate_matrix, saturate_matrix, sepia_matrix
from .config import DEFAULT_CONFIG, FilterBounds, SolverConfig
from .facade import build_tint_utilities, color_to_filter, flatten_color_palette
from .formatter import FilterParams, format_filter, parse_filter
from .parser import RGB, ParseResult, parse_color
from .solver import FilterSolver, SolveResult, solve

__all__ = [
    "DEFAULT_CONFIG",
    "FilterBounds",
    "FilterColor",
    "FilterParams",
    "FilterSolver",
    "ParseResult",
    "RGB",
    "SolveResult",
    "SolverConfig",
    "build_tint_utilities",
    "color_to_filter",
    "flatten_color_palette",
    "format_filter",
    "hue_rotate_matrix",
    "parse_color",
    "parse_filter",
    "saturate_matrix",
    "sepia_matrix",
    "solve",
]
