# File: landpro/schemas/project.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from landpro.gis.geometry import parse_polygon

ProjectStatus = Literal["draft", "active", "completed"]


class ProjectBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    version: int


class ProjectRead(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    boundary: Optional[dict] = None
    acreage: Optional[float] = None
    status: str
    version: int
    created_at: datetime
    updated_at: datetime


class BoundaryUpdate(BaseModel):
    # null clears the boundary (every vertex deleted)
    boundary: Optional[dict] = None
    version: int

    @field_validator("boundary")
    @classmethod
    def validate_boundary(cls, v):
        if v is None:
            return v
        return parse_polygon(v)


class BoundaryResult(BaseModel):
    project: ProjectRead
    self_intersecting: bool = False
    analysis_invalidated: bool = False
