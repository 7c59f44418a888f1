from .requests import ColorFilterRequest, ParseColorRequest, TintUtilitiesRequest
from .responses import (
    SuccessResponse,
    FilterParamsPayload,
    FilterSolutionResponse,
    ParsedColorResponse,
    TintUtilitiesResponse,
)

__all__ = [
    "ColorFilterRequest",
    "ParseColorRequest",
    "TintUtilitiesRequest",
    "SuccessResponse",
    "FilterParamsPayload",
    "FilterSolutionResponse",
    "ParsedColorResponse",
    "TintUtilitiesResponse",
]
