from pydantic import BaseModel, Field
from typing import Dict, Optional

class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None

class FilterParamsPayload(BaseModel):
    invert: float
    sepia: float
    saturate: float
    hue_rotate: float = Field(..., description="Degrees")
    brightness: float
    contrast: float

class FilterSolutionResponse(BaseModel):
    success: bool = True
    filter: str = Field(..., description="CSS filter value")
    loss: float = Field(..., description="Weighted squared RGB + HSL error of the returned filter")
    params: FilterParamsPayload
    rgb: "ParsedColorResponse"

class ParsedColorResponse(BaseModel):
    r: int
    g: int
    b: int
    hex: str

class TintUtilitiesResponse(BaseModel):
    success: bool = True
    utilities: Dict[str, Dict[str, str]]

FilterSolutionResponse.model_rebuild()
