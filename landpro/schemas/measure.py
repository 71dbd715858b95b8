# File: landpro/schemas/measure.py

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

MeasureMode = Literal["distance", "area"]


class MeasureRequest(BaseModel):
    mode: MeasureMode
    # [longitude, latitude] pairs in click order
    points: List[Tuple[float, float]] = Field(default_factory=list, max_length=1000)

    @field_validator("points")
    @classmethod
    def check_ranges(cls, v):
        for lon, lat in v:
            if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
                raise ValueError("Point coordinates out of range.")
        return v


class MeasureResponse(BaseModel):
    mode: MeasureMode
    result: Optional[str] = None
    value: Optional[float] = None
    unit: Optional[str] = None
