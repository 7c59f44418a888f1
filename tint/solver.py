"""
Search for CSS filter amounts that turn black into a target color.

Uses SPSA (simultaneous perturbation stochastic approximation): every step
perturbs all six amounts at once with random signs, estimates the gradient
from two evaluations, and takes a step whose size decays with the iteration
count. A wide phase with restarts locates a basin, then a narrow phase
refines it with gains scaled to the remaining error.

Reference: Barrett Sonntag, "CSS filter generator to convert from black to
target hex color" (https://codepen.io/sosuke/pen/Pjoqqp).
"""

import logging
import math
import random
import time
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from .color import FilterColor
from .config import DEFAULT_CONFIG, SolverConfig
from .formatter import FilterParams, format_filter
from .parser import RGB

logger = logging.getLogger(__name__)

# The search runs in percent units so one perturbation size fits every axis:
# CSS percent for the amounts, percent of a full turn for the hue.
SEARCH_SCALE = (0.01, 0.01, 0.01, 3.6, 0.01, 0.01)
HUE_AXIS = 3

ALPHA = 1.0
GAMMA = 1 / 6

WIDE_A = 5.0
WIDE_C = 15.0
WIDE_GAINS = (60.0, 180.0, 18000.0, 600.0, 1.2, 1.2)

NARROW_C = 2.0
NARROW_GAIN_FACTORS = (0.25, 0.25, 1.0, 0.25, 0.2, 0.2)

# Iterations between deadline checks
_CLOCK_STRIDE = 64


class SolveResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    # integer-rounded amounts, exactly what `filter` renders
    params: FilterParams
    loss: float
    filter: str
    # loss of the unrounded point the search ended on
    search_loss: float

    @property
    def distance(self) -> float:
        """Square root of the loss, in the units of a single channel."""
        return math.sqrt(self.loss)


class FilterSolver:
    """Finds filter params for one target color.

    :param target: color to reproduce
    :param config: search tuning, defaults to DEFAULT_CONFIG
    :param rng: random source for restarts and perturbations; pass a seeded
        random.Random for reproducible results. Each solver owns its rng.
    """

    def __init__(
        self,
        target: RGB,
        config: Optional[SolverConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.target = target
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else random.Random()

        self._target_color = FilterColor.of(*target.as_tuple())
        self._target_hsl = self._target_color.hsl()
        self._upper = tuple(hi / s for hi, s in zip(self.config.bounds.upper(), SEARCH_SCALE))
        self._deadline: Optional[float] = None

    # Loss ------------------------------------------------------------

    def loss(self, params: Sequence[float]) -> float:
        """Weighted squared RGB + HSL error of black filtered by params (natural units)."""
        color = FilterColor.black().apply(params)
        h, s, l = color.hsl()
        th, ts, tl = self._target_hsl
        tr, tg, tb = self._target_color
        rgb_error = (color.r - tr) ** 2 + (color.g - tg) ** 2 + (color.b - tb) ** 2
        hsl_error = (h - th) ** 2 + (s - ts) ** 2 + (l - tl) ** 2
        return self.config.weight_rgb * rgb_error + self.config.weight_hsl * hsl_error

    def _to_params(self, values: Sequence[float]) -> List[float]:
        return [v * s for v, s in zip(values, SEARCH_SCALE)]

    def _distance(self, values: Sequence[float]) -> float:
        return math.sqrt(self.loss(self._to_params(values)))

    # Search ----------------------------------------------------------

    def solve(self) -> SolveResult:
        """Run the full search and return the best candidate found.

        Never raises on poor convergence; check SolveResult.loss instead.
        """
        budget = self.config.time_budget
        self._deadline = time.monotonic() + budget if budget is not None else None

        values, distance = self._solve_wide()
        values, distance = self._solve_narrow(values, distance)

        natural = self._to_params(values)
        search_loss = self.loss(natural)
        params = FilterParams.from_sequence(natural).rounded()
        loss = self.loss(params.as_tuple())
        logger.debug("solved %s: loss=%.3f search=%.3f", self.target.hex, loss, search_loss)
        return SolveResult(params=params, loss=loss, filter=format_filter(params), search_loss=search_loss)

    def _solve_wide(self) -> Tuple[List[float], float]:
        cfg = self.config
        acceptable = math.sqrt(cfg.acceptable_loss)
        best: List[float] = []
        best_distance = math.inf
        stale = 0

        for restart in range(cfg.max_restarts):
            start = self._initial_values() if restart == 0 else self._random_values()
            values, distance = self._spsa(WIDE_A, WIDE_GAINS, WIDE_C, start, cfg.wide_iterations)
            logger.debug("restart %d for %s: distance=%.3f", restart, self.target.hex, distance)

            if distance < best_distance:
                best, best_distance = values, distance
                stale = 0
            else:
                stale += 1

            if best_distance <= acceptable or stale >= cfg.patience or self._expired():
                break

        return best, best_distance

    def _solve_narrow(self, values: List[float], distance: float) -> Tuple[List[float], float]:
        if self.config.narrow_iterations == 0 or self._expired():
            return values, distance
        A = distance
        gains = tuple(f * (A + 1) for f in NARROW_GAIN_FACTORS)
        return self._spsa(A, gains, NARROW_C, values, self.config.narrow_iterations)

    def _spsa(
        self,
        A: float,
        a: Sequence[float],
        c: float,
        start: Sequence[float],
        iterations: int,
    ) -> Tuple[List[float], float]:
        threshold = math.sqrt(self.config.convergence_loss)
        values = list(start)
        best = list(values)
        best_distance = self._distance(values)

        for k in range(iterations):
            if best_distance <= threshold:
                break
            if k % _CLOCK_STRIDE == 0 and self._expired():
                break

            ck = c / (k + 1) ** GAMMA
            deltas = [1 if self.rng.random() < 0.5 else -1 for _ in range(6)]
            high = [self._fix(v + ck * d, i) for i, (v, d) in enumerate(zip(values, deltas))]
            low = [self._fix(v - ck * d, i) for i, (v, d) in enumerate(zip(values, deltas))]
            loss_diff = self._distance(high) - self._distance(low)

            for i in range(6):
                g = loss_diff / (2 * ck) * deltas[i]
                ak = a[i] / (A + k + 1) ** ALPHA
                values[i] = self._fix(values[i] - ak * g, i)

            distance = self._distance(values)
            if distance < best_distance:
                best, best_distance = list(values), distance

        return best, best_distance

    # Bounds ----------------------------------------------------------

    def _fix(self, value: float, idx: int) -> float:
        """Project a search value back into bounds; the hue wraps."""
        hi = self._upper[idx]
        if idx == HUE_AXIS:
            wrapped = value % hi
            return 0.0 if wrapped >= hi else wrapped
        return min(max(value, 0.0), hi)

    def _initial_values(self) -> List[float]:
        return [self._fix(v / s, i) for i, (v, s) in enumerate(zip(self.config.initial_guess, SEARCH_SCALE))]

    def _random_values(self) -> List[float]:
        return [self._fix(self.rng.uniform(0, hi), i) for i, hi in enumerate(self._upper)]

    def _expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline


def solve(
    target: RGB,
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
) -> SolveResult:
    """Shortcut for FilterSolver(target, config, rng).solve()."""
    return FilterSolver(target, config, rng).solve()
