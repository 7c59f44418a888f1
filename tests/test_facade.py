"""Tests for color_to_filter and the tint utility builder."""

import random
import re

import pytest

from tint import facade
from tint.config import SolverConfig
from tint.facade import build_tint_utilities, color_to_filter, flatten_color_palette
from tint.formatter import parse_filter
from tint.parser import parse_color
from tint.solver import FilterSolver

FAST = SolverConfig(wide_iterations=200, narrow_iterations=100, max_restarts=1)

CHAIN_RE = re.compile(
    r"^invert\(\d+%\) sepia\(\d+%\) saturate\(\d+%\) hue-rotate\(\d+deg\) brightness\(\d+%\) contrast\(\d+%\)$"
)


class TestKeywords:
    def test_transparent(self):
        assert color_to_filter("transparent") == "opacity(0)"

    @pytest.mark.parametrize("value", ["currentColor", "currentcolor", "inherit", " inherit "])
    def test_no_filter_keywords(self, value):
        assert color_to_filter(value) == "none"


class TestFallbacks:
    @pytest.mark.parametrize("value", ["not-a-color", "#ggg", "#1234", "red", "lab(50% 0 0)", "", None])
    def test_unsupported_is_none(self, value):
        assert color_to_filter(value) == "none"

    def test_solver_failure_is_none(self, monkeypatch):
        def boom(self):
            raise RuntimeError("solver exploded")

        monkeypatch.setattr(FilterSolver, "solve", boom)
        assert color_to_filter("#22c55e") == "none"

    def test_max_loss_rejects_poor_matches(self):
        config = SolverConfig(wide_iterations=50, narrow_iterations=0, max_restarts=1, max_loss=0)
        assert color_to_filter("#22c55e", config=config, rng=random.Random(0)) == "none"

    def test_generous_max_loss_keeps_result(self):
        config = FAST.model_copy(update={"max_loss": 1e9})
        assert CHAIN_RE.match(color_to_filter("#22c55e", config=config, rng=random.Random(0)))

    @pytest.mark.parametrize("value", ["#6b7280", "#3b82f6", "#f59e0b"])
    def test_returned_filter_meets_max_loss(self, value):
        max_loss = 400.0
        config = FAST.model_copy(update={"max_loss": max_loss})
        css = color_to_filter(value, config=config, rng=random.Random(1))
        if css != "none":
            solver = FilterSolver(parse_color(value).rgb)
            assert solver.loss(parse_filter(css).as_tuple()) <= max_loss


class TestSolving:
    @pytest.mark.parametrize(
        "value",
        ["#3b82f6", "rgb(34, 197, 94)", "hsl(0, 100%, 50%)", "oklch(0.7 0.15 180)", "oklab(0.6 0.1 -0.1)"],
    )
    def test_returns_filter_chain(self, value):
        assert CHAIN_RE.match(color_to_filter(value, config=FAST, rng=random.Random(5)))

    def test_seeded_is_deterministic(self):
        a = color_to_filter("#f59e0b", config=FAST, rng=random.Random(9))
        b = color_to_filter("#f59e0b", config=FAST, rng=random.Random(9))
        assert a == b


class TestPalette:
    def test_flatten_nested(self):
        colors = {
            "transparent": "transparent",
            "red": {"500": "#ef4444", "600": "#dc2626"},
            "brand": {"DEFAULT": "#123456", "light": {"DEFAULT": "#abcdef", "x": "#fff"}},
        }
        assert flatten_color_palette(colors) == {
            "transparent": "transparent",
            "red-500": "#ef4444",
            "red-600": "#dc2626",
            "brand": "#123456",
            "brand-light": "#abcdef",
            "brand-light-x": "#fff",
        }

    def test_build_utilities(self, monkeypatch):
        monkeypatch.setattr(facade, "FilterSolver", _StubSolver)
        utilities = build_tint_utilities(
            {"transparent": "transparent", "current": "currentColor", "red": {"500": "#ef4444"}, "bad": "nope"}
        )
        assert utilities == {
            "tint-transparent": {"filter": "opacity(0)"},
            "tint-current": {"filter": "none"},
            "tint-red-500": {"filter": "stub(#ef4444)"},
            "tint-bad": {"filter": "none"},
        }

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setattr(facade, "FilterSolver", _StubSolver)
        assert list(build_tint_utilities({"a": "#000"}, prefix="recolor")) == ["recolor-a"]


class _StubResult:
    def __init__(self, rgb):
        self.filter = f"stub({rgb.hex})"
        self.loss = 0.0


class _StubSolver:
    def __init__(self, target, config=None, rng=None):
        self.target = target
        self.config = config or SolverConfig()

    def solve(self):
        return _StubResult(self.target)
