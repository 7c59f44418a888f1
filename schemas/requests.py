from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

class ColorFilterRequest(BaseModel):
    color: str = Field(..., description="The CSS color to reproduce (hex, rgb, hsl, oklch, oklab or keyword)")
    seed: Optional[int] = Field(None, description="Seed for the solver's random source; fixes the result")

class ParseColorRequest(BaseModel):
    color: str = Field(..., description="The CSS color to parse")

class TintUtilitiesRequest(BaseModel):
    colors: Dict[str, Any] = Field(..., description="Color palette, optionally nested (e.g. {'red': {'500': '#ef4444'}})")
    prefix: str = Field("tint", min_length=1, description="Utility class prefix")
    seed: Optional[int] = Field(None, description="Seed for the solver's random source; fixes the result")
