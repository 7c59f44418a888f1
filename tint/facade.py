"""
Color value -> CSS filter, with the fallbacks a stylesheet build relies on.

Nothing here raises: unsupported or broken values render as "none" so a bad
palette entry never breaks CSS generation.
"""

import logging
import random
from typing import Any, Dict, Mapping, Optional

from .config import SolverConfig
from .parser import parse_color
from .solver import FilterSolver

logger = logging.getLogger(__name__)

NO_FILTER = "none"
TRANSPARENT_FILTER = "opacity(0)"

# Keywords with a fixed answer (compared lower-cased)
KEYWORD_FILTERS: Dict[str, str] = {
    "transparent": TRANSPARENT_FILTER,
    "currentcolor": NO_FILTER,
    "inherit": NO_FILTER,
}


def color_to_filter(
    value: Any,
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Return a CSS filter value that recolors black to `value`.

    :param value: CSS color (hex, rgb, hsl, oklch, oklab) or keyword
    :param config: solver tuning; config.max_loss rejects poor matches
    :param rng: random source for the solver
    :returns: filter chain, "opacity(0)" for transparent, else "none"
    """
    try:
        color = str(value).strip()
        keyword = KEYWORD_FILTERS.get(color.lower())
        if keyword is not None:
            return keyword

        parsed = parse_color(color)
        if not parsed:
            return NO_FILTER

        solver = FilterSolver(parsed.rgb, config=config, rng=rng)
        result = solver.solve()
        max_loss = solver.config.max_loss
        if max_loss is not None and result.loss > max_loss:
            logger.debug("rejecting filter for %r: loss %.3f > %.3f", color, result.loss, max_loss)
            return NO_FILTER
        return result.filter
    except Exception:
        logger.warning("filter generation failed for %r", value, exc_info=True)
        return NO_FILTER


def flatten_color_palette(colors: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten a nested palette: {"red": {"500": v}} -> {"red-500": v}.

    A "DEFAULT" key names its parent: {"brand": {"DEFAULT": v}} -> {"brand": v}.
    """
    flat: Dict[str, Any] = {}
    for key, value in colors.items():
        if key == "DEFAULT" and prefix:
            name = prefix
        else:
            name = f"{prefix}-{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_color_palette(value, name))
        else:
            flat[name] = value
    return flat


def build_tint_utilities(
    colors: Mapping[str, Any],
    prefix: str = "tint",
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Dict[str, str]]:
    """Build {"tint-red-500": {"filter": ...}} declarations for a palette."""
    return {
        f"{prefix}-{name}": {"filter": color_to_filter(value, config=config, rng=rng)}
        for name, value in flatten_color_palette(colors).items()
    }
