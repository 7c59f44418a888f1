"""
Solver configuration.

Defaults reproduce the behaviour of the reference filter solver: a wide SPSA
phase with restarts followed by a narrow refinement.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FilterBounds(BaseModel):
    """Upper search bounds for the unbounded filter functions (natural units)."""

    model_config = ConfigDict(frozen=True)

    saturate_max: float = Field(default=75.0, gt=0)
    brightness_max: float = Field(default=2.0, gt=0)
    contrast_max: float = Field(default=2.0, gt=0)

    def upper(self) -> Tuple[float, float, float, float, float, float]:
        """Upper bound per axis, canonical order. Hue is exclusive (wraps)."""
        return (1.0, 1.0, self.saturate_max, 360.0, self.brightness_max, self.contrast_max)


class SolverConfig(BaseModel):
    """Tuning knobs for FilterSolver and the facade quality policy."""

    model_config = ConfigDict(frozen=True)

    weight_rgb: float = Field(default=1.0, ge=0)
    weight_hsl: float = Field(default=1.0, ge=0)

    wide_iterations: int = Field(default=1000, ge=1)
    narrow_iterations: int = Field(default=500, ge=0)
    max_restarts: int = Field(default=5, ge=1)
    patience: int = Field(default=2, ge=1)

    # Loss units (weighted squared error)
    acceptable_loss: float = Field(default=625.0, ge=0)
    convergence_loss: float = Field(default=0.25, ge=0)

    time_budget: Optional[float] = Field(default=None, gt=0, description="Seconds for the whole search")

    # invert, sepia, saturate, hue-rotate (deg), brightness, contrast
    initial_guess: Tuple[float, float, float, float, float, float] = (0.5, 0.2, 37.5, 180.0, 1.0, 1.0)
    bounds: FilterBounds = Field(default_factory=FilterBounds)

    max_loss: Optional[float] = Field(
        default=None,
        ge=0,
        description="Facade returns 'none' when the best loss stays above this",
    )

    @model_validator(mode="after")
    def _check_initial_guess(self) -> "SolverConfig":
        upper = self.bounds.upper()
        for idx, (value, hi) in enumerate(zip(self.initial_guess, upper)):
            # hue-rotate wraps, so 360 is excluded
            if value < 0 or value > hi or (idx == 3 and value >= hi):
                raise ValueError(f"initial_guess value {value} outside the bounds for axis {idx}")
        return self


DEFAULT_CONFIG = SolverConfig()
