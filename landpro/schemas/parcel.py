# File: landpro/schemas/parcel.py

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from landpro.gis.geometry import parse_polygon

PropertyType = Literal["residential", "wooded", "pasture", "mixed"]


class PreprocessParcelRequest(BaseModel):
    parcel_geometry: dict
    property_goal: Optional[str] = Field(default=None, max_length=255)
    # Mean NDVI over the parcel when the caller has imagery for it
    ndvi: Optional[float] = Field(default=None, ge=-1, le=1)

    @field_validator("parcel_geometry")
    @classmethod
    def validate_geometry(cls, v):
        return parse_polygon(v, min_vertices=3)


class PreprocessParcelResponse(BaseModel):
    job_id: str
    property_type: PropertyType
    acreage: Optional[float] = None
