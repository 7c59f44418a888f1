"""
Endpoints that turn CSS colors into CSS filter chains.
A filter chain recolors a black (monochrome) asset to the requested color.

Handlers are plain functions: solving is CPU bound, so FastAPI runs them in
its thread pool instead of on the event loop.
"""

import logging
import random
from typing import Optional

from fastapi import APIRouter, HTTPException

from schemas.requests import (
    ColorFilterRequest,
    ParseColorRequest,
    TintUtilitiesRequest,
)
from schemas.responses import (
    FilterParamsPayload,
    FilterSolutionResponse,
    ParsedColorResponse,
    SuccessResponse,
    TintUtilitiesResponse,
)
from tint import (
    FilterSolver,
    ParseResult,
    build_tint_utilities,
    color_to_filter,
    parse_color,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def make_rng(seed: Optional[int]) -> random.Random:
    """One random source per request; seeded when the caller asks for it."""
    return random.Random(seed) if seed is not None else random.Random()


def parsed_or_400(color: str) -> ParseResult:
    parsed = parse_color(color)
    if not parsed:
        raise HTTPException(status_code=400, detail=f"Invalid CSS color: {parsed.reason}")
    return parsed


def to_payload(parsed: ParseResult) -> ParsedColorResponse:
    rgb = parsed.rgb
    return ParsedColorResponse(r=rgb.r, g=rgb.g, b=rgb.b, hex=rgb.hex)


@router.post("/color_to_filter", response_model=SuccessResponse, operation_id="color_to_filter", description="Convert a CSS color to a CSS filter chain that recolors black to it")
def color_to_filter_endpoint(request: ColorFilterRequest):
    """Fail-safe conversion: unsupported colors yield 'none'."""
    return SuccessResponse(success=True, message=color_to_filter(request.color, rng=make_rng(request.seed)))


@router.post("/solve_filter", response_model=FilterSolutionResponse, operation_id="solve_filter", description="Solve for CSS filter amounts reproducing a CSS color, with the residual loss")
def solve_filter(request: ColorFilterRequest):
    """Run the solver and report its params and loss."""
    parsed = parsed_or_400(request.color)
    result = FilterSolver(parsed.rgb, rng=make_rng(request.seed)).solve()
    return FilterSolutionResponse(
        success=True,
        filter=result.filter,
        loss=result.loss,
        params=FilterParamsPayload(**result.params.model_dump()),
        rgb=to_payload(parsed),
    )


@router.post("/parse_color", response_model=ParsedColorResponse, operation_id="parse_color", description="Parse a CSS color into RGB")
def parse_color_endpoint(request: ParseColorRequest):
    """Parse CSS color to RGB."""
    return to_payload(parsed_or_400(request.color))


@router.post("/tint_utilities", response_model=TintUtilitiesResponse, operation_id="tint_utilities", description="Build tint-* utility declarations for a color palette")
def tint_utilities(request: TintUtilitiesRequest):
    """Flatten the palette and solve a filter for every entry."""
    utilities = build_tint_utilities(request.colors, prefix=request.prefix, rng=make_rng(request.seed))
    logger.info("built %d tint utilities", len(utilities))
    return TintUtilitiesResponse(success=True, utilities=utilities)
