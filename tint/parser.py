"""
CSS color parsing with RGB as the hub.
Supported: hex 3/6, rgb/rgba (legacy commas or modern spaces), hsl/hsla,
oklch, oklab. Alpha is accepted and discarded; filters only reproduce opaque colors.
Excludes: named colors, lab/lch, color() spaces.

Parsers never raise. Every entry point returns a ParseResult that is either
a success carrying an RGB value or a failure carrying the reason.
"""

import logging
import math
import re
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


# Type definitions
class RGB(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class ParseResult(BaseModel):
    """Tagged parse outcome: ok with rgb, or not ok with a reason."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    rgb: Optional[RGB] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, r: int, g: int, b: int) -> "ParseResult":
        return cls(ok=True, rgb=RGB(r=r, g=g, b=b))

    @classmethod
    def failure(cls, reason: str) -> "ParseResult":
        logger.debug("color parse failed: %s", reason)
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


# Regular expression patterns
ws = r"\s*"
num = r"[+-]?(?:\d+(?:\.\d+)?|\.\d+)(?:e[+-]?\d+)?"
integer = r"\d+"
# legacy comma or modern whitespace separator
sep = r"(?:\s*,\s*|\s+)"
token = r"[^\s/)]+"

NUM_RE = re.compile(f"^({num})(%)?$", re.IGNORECASE)
ANGLE_RE = re.compile(f"^({num})(deg|grad|rad|turn)?$", re.IGNORECASE)

# OKLab chroma/axis percentages: 100% maps to 0.4
OK_PERCENT_REF = 0.4


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp value between lo and hi."""
    return max(lo, min(hi, v))


def round_half_up(x: float) -> int:
    """Round halves up (127.5 -> 128) instead of to even."""
    return int(math.floor(x + 0.5))


def parse_number(s: str) -> Optional[Tuple[float, bool]]:
    """Parse '<number>' or '<number>%'; returns (value, is_percent) or None."""
    m = NUM_RE.match(s.strip())
    if not m:
        return None
    v = float(m.group(1))
    if not math.isfinite(v):
        return None
    return v, m.group(2) is not None


def angle_to_deg(s: str) -> Optional[float]:
    """Convert angle string to degrees; unitless means degrees."""
    m = ANGLE_RE.match(s.strip())
    if not m:
        return None
    v = float(m.group(1))
    if not math.isfinite(v):
        return None
    unit = (m.group(2) or "deg").lower()
    if unit == "grad":
        v = (v * 9) / 10
    elif unit == "rad":
        v = (v * 180) / math.pi
    elif unit == "turn":
        v = v * 360
    return v if math.isfinite(v) else None


# HEX -------------------------------------------------------------

HEX_DIGITS_RE = re.compile(r"^[0-9a-f]*$", re.IGNORECASE)


def parse_hex(s: str) -> ParseResult:
    """Parse #rgb or #rrggbb."""
    h = s.strip()
    if h.startswith("#"):
        h = h[1:]
    if len(h) == 3:
        h = "".join(c + c for c in h)
    if len(h) != 6:
        return ParseResult.failure(f"hex color must have 3 or 6 digits: {s!r}")
    if not HEX_DIGITS_RE.match(h):
        return ParseResult.failure(f"non-hex digit in {s!r}")
    return ParseResult.success(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


# RGB -------------------------------------------------------------

RGB_RE = re.compile(
    f"^rgba?{ws}\\({ws}({integer}){sep}({integer}){sep}({integer})",
    re.IGNORECASE,
)


def parse_rgb(s: str) -> ParseResult:
    """Parse rgb()/rgba(); only the first three integer components are used."""
    m = RGB_RE.match(s.strip())
    if not m:
        return ParseResult.failure(f"malformed rgb color: {s!r}")
    r, g, b = (int(clamp(int(v), 0, 255)) for v in m.groups())
    return ParseResult.success(r, g, b)


# HSL -------------------------------------------------------------

HSL_RE = re.compile(
    f"^hsla?{ws}\\({ws}({integer})(?:deg)?{sep}({integer})%{sep}({integer})%",
    re.IGNORECASE,
)


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL to RGB. h, s, l all in [0,1] (CSS Color 4 algorithm)."""

    def f(n: int) -> float:
        k = (n + h * 12) % 12
        a = s * min(l, 1 - l)
        return l - a * clamp(min(k - 3, 9 - k, 1), -1, 1)

    return (
        round_half_up(f(0) * 255),
        round_half_up(f(8) * 255),
        round_half_up(f(4) * 255),
    )


def parse_hsl(s: str) -> ParseResult:
    """Parse hsl()/hsla() with integer hue and percentage saturation/lightness."""
    m = HSL_RE.match(s.strip())
    if not m:
        return ParseResult.failure(f"malformed hsl color: {s!r}")
    h_val, s_val, l_val = m.groups()
    h = (int(h_val) % 360) / 360
    sat = clamp(int(s_val) / 100, 0, 1)
    light = clamp(int(l_val) / 100, 0, 1)
    return ParseResult.success(*hsl_to_rgb(h, sat, light))


# OKLab/OKLCH -----------------------------------------------------

OKLCH_RE = re.compile(
    f"^oklch{ws}\\({ws}({token})\\s+({token})\\s+({token})(?:{ws}/{ws}[^)]+)?{ws}\\)",
    re.IGNORECASE,
)

OKLAB_RE = re.compile(
    f"^oklab{ws}\\({ws}({token})\\s+({token})\\s+({token})(?:{ws}/{ws}[^)]+)?{ws}\\)",
    re.IGNORECASE,
)

# Björn Ottosson's OKLab matrices.
# OKLab -> LMS' (cube-root domain), then cube, then LMS -> linear sRGB.
OKLAB_TO_LMS_ = (
    (1.0, 0.3963377774, 0.2158037573),
    (1.0, -0.1055613458, -0.0638541728),
    (1.0, -0.0894841775, -1.2914855480),
)
LMS_TO_LINEAR_SRGB = (
    (4.0767416621, -3.3077115913, 0.2309699292),
    (-1.2684380046, 2.6097574011, -0.3413193965),
    (-0.0041960863, -0.7034186147, 1.7076147010),
)
# Forward direction: linear sRGB -> LMS, then cube root, then LMS' -> OKLab.
LINEAR_SRGB_TO_LMS = (
    (0.4122214708, 0.5363325363, 0.0514459929),
    (0.2119034982, 0.6806995451, 0.1073969566),
    (0.0883024619, 0.2817188376, 0.6299787005),
)
LMS_TO_OKLAB = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)


def _dot(row: Tuple[float, float, float], x: float, y: float, z: float) -> float:
    return row[0] * x + row[1] * y + row[2] * z


def srgb_compand(x: float) -> float:
    """Linear light to sRGB gamma encoding."""
    return 12.92 * x if x <= 0.0031308 else 1.055 * (x ** (1 / 2.4)) - 0.055


def srgb_linearize(x: float) -> float:
    """sRGB gamma encoding to linear light."""
    return x / 12.92 if x <= 0.04045 else ((x + 0.055) / 1.055) ** 2.4


def oklab_to_linear_rgb(L: float, a: float, b: float) -> Tuple[float, float, float]:
    """Convert OKLab to linear sRGB (unclamped, may leave the gamut)."""
    l_, m_, s_ = (_dot(row, L, a, b) for row in OKLAB_TO_LMS_)
    l, m, s = l_ ** 3, m_ ** 3, s_ ** 3
    r, g, bl = (_dot(row, l, m, s) for row in LMS_TO_LINEAR_SRGB)
    return r, g, bl


def linear_rgb_to_oklab(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Convert linear sRGB to OKLab."""
    l, m, s = (_dot(row, r, g, b) for row in LINEAR_SRGB_TO_LMS)
    l_, m_, s_ = (math.copysign(abs(v) ** (1 / 3), v) for v in (l, m, s))
    L, a, bb = (_dot(row, l_, m_, s_) for row in LMS_TO_OKLAB)
    return L, a, bb


def linear_to_srgb(r: float, g: float, b: float) -> Tuple[int, int, int]:
    """Linear sRGB to 0-255 ints, clamped to the displayable gamut."""
    return tuple(round_half_up(clamp(srgb_compand(c), 0, 1) * 255) for c in (r, g, b))


def rgb_to_oklab(rgb: RGB) -> Tuple[float, float, float]:
    """Convert RGB to OKLab."""
    return linear_rgb_to_oklab(*(srgb_linearize(c / 255) for c in rgb.as_tuple()))


def _lightness(s: str) -> Optional[float]:
    parsed = parse_number(s)
    if parsed is None:
        return None
    v, is_percent = parsed
    if is_percent:
        v = v / 100
    elif v > 1:
        v = v / 100
    return clamp(v, 0, 1)


def _ok_axis(s: str) -> Optional[float]:
    parsed = parse_number(s)
    if parsed is None:
        return None
    v, is_percent = parsed
    return v / 100 * OK_PERCENT_REF if is_percent else v


def _oklab_result(s: str, L: float, a: float, b: float) -> ParseResult:
    try:
        linear = oklab_to_linear_rgb(L, a, b)
    except OverflowError:
        return ParseResult.failure(f"component out of range in {s!r}")
    if not all(math.isfinite(c) for c in linear):
        return ParseResult.failure(f"non-finite component in {s!r}")
    return ParseResult.success(*linear_to_srgb(*linear))


def parse_oklch(s: str) -> ParseResult:
    """Parse OKLCH color string."""
    m = OKLCH_RE.match(s.strip())
    if not m:
        return ParseResult.failure(f"malformed oklch color: {s!r}")
    L_val, C_val, h_val = m.groups()
    L = _lightness(L_val)
    C = _ok_axis(C_val)
    h = angle_to_deg(h_val)
    if L is None or C is None or h is None:
        return ParseResult.failure(f"invalid oklch component in {s!r}")
    hr = math.radians(h % 360)
    return _oklab_result(s, L, C * math.cos(hr), C * math.sin(hr))


def parse_oklab(s: str) -> ParseResult:
    """Parse OKLab color string."""
    m = OKLAB_RE.match(s.strip())
    if not m:
        return ParseResult.failure(f"malformed oklab color: {s!r}")
    L_val, a_val, b_val = m.groups()
    L = _lightness(L_val)
    a = _ok_axis(a_val)
    b = _ok_axis(b_val)
    if L is None or a is None or b is None:
        return ParseResult.failure(f"invalid oklab component in {s!r}")
    return _oklab_result(s, L, a, b)


# Top-level parse -------------------------------------------------

def parse_color(input_str) -> ParseResult:
    """Parse any supported CSS color string into RGB."""
    if not isinstance(input_str, str):
        return ParseResult.failure(f"expected a string, got {type(input_str).__name__}")
    s = input_str.strip()
    lower = s.lower()

    if lower.startswith("#"):
        return parse_hex(s)
    if lower.startswith("rgb"):
        return parse_rgb(s)
    if lower.startswith("hsl"):
        return parse_hsl(s)
    if lower.startswith("oklch"):
        return parse_oklch(s)
    if lower.startswith("oklab"):
        return parse_oklab(s)
    return ParseResult.failure(f"unsupported color syntax: {s!r}")
