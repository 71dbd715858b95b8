# File: landpro/schemas/analysis.py

"""
Land analysis payloads.

``AnalysisResult`` is the versioned, schema-checked shape of what the model
returns. Replies that do not fit are rejected at the boundary instead of
being stored as opaque JSON.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from landpro.gis.geometry import parse_polygon

ANALYSIS_RESULT_VERSION = 1

LandIntent = Literal["build", "clear", "farm", "evaluate"]


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class VegetationSection(_Section):
    type: str
    density: str
    recommendations: List[str] = []


class TerrainSection(_Section):
    type: str
    slope_estimate: str
    drainage: str
    recommendations: List[str] = []

    @field_validator("slope_estimate", mode="before")
    @classmethod
    def stringify_slope(cls, v):
        # Models sometimes answer with a bare number
        return v if isinstance(v, str) else str(v)


class EquipmentSection(_Section):
    recommended: List[str]
    considerations: List[str] = []


class LaborSection(_Section):
    estimated_crew_size: float
    estimated_hours: float
    difficulty: str


class CostFactorsSection(_Section):
    base_rate_per_acre: float
    estimated_total: float
    factors_affecting_cost: List[str] = []


class AnalysisResult(_Section):
    version: int = ANALYSIS_RESULT_VERSION
    vegetation: VegetationSection
    terrain: TerrainSection
    equipment: EquipmentSection
    labor: LaborSection
    hazards: List[str]
    cost_factors: CostFactorsSection
    summary: str
    next_steps: Optional[List[str]] = None


class AnalyzeLandRequest(BaseModel):
    boundary: dict
    acreage: float = Field(gt=0, allow_inf_nan=False)
    location: Optional[str] = Field(default=None, max_length=500)
    intent: Optional[LandIntent] = None

    @field_validator("boundary")
    @classmethod
    def validate_boundary(cls, v):
        return parse_polygon(v, min_vertices=3)


class AnalyzeLandResponse(BaseModel):
    analysis: AnalysisResult


class AnalysisRunRequest(BaseModel):
    location: Optional[str] = Field(default=None, max_length=500)
    intent: Optional[LandIntent] = None


class AnalysisRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    land_classification: Optional[dict] = None
    hazards: Optional[list] = None
    path: Optional[dict] = None
    intent: Optional[str] = None
    stale: bool
    created_at: datetime
