# File: landpro/schemas/quote.py

"""
Quote payloads.

The generate-quote function speaks camelCase on the wire (the browser posts
``clientName``/``jobDescription``); the REST API uses snake_case like every
other resource.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

PropertyUnit = Literal["acres", "sqft"]
QuoteStatus = Literal["pending", "sent", "approved", "declined", "completed"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


# ---------- generate-quote function ----------

class GenerateQuoteRequest(_CamelModel):
    client_name: str = Field(min_length=1, max_length=255)
    job_description: str = Field(min_length=1, max_length=5000)
    property_size: float = Field(gt=0)
    property_unit: PropertyUnit
    material_notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("client_name", "job_description", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class QuoteEstimateDraft(_CamelModel):
    """Raw estimate as the model returns it, before rounding."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", allow_inf_nan=False
    )

    job_title: str
    labor_cost: float = Field(ge=0)
    material_cost: float = Field(ge=0)
    equipment_cost: Optional[float] = Field(default=None, ge=0)
    completion_time: float = Field(gt=0)
    notes: str = ""


class QuoteEstimate(_CamelModel):
    job_title: str
    labor_cost: int
    material_cost: int
    equipment_cost: Optional[int] = None
    total_estimate: int
    completion_time: int
    notes: str
    client_name: str
    timestamp: datetime


# ---------- REST ----------

class QuoteBase(BaseModel):
    client_name: str = Field(min_length=1, max_length=255)
    job_description: str = Field(min_length=1)
    client_id: Optional[str] = None
    project_id: Optional[str] = None
    property_size: Optional[Decimal] = Field(default=None, gt=0)
    property_unit: Optional[PropertyUnit] = None
    material_notes: Optional[str] = None


class QuoteCreate(QuoteBase):
    labor_cost: Decimal = Field(default=Decimal("0"), ge=0)
    material_cost: Decimal = Field(default=Decimal("0"), ge=0)
    equipment_cost: Decimal = Field(default=Decimal("0"), ge=0)
    completion_time: Optional[str] = Field(default=None, max_length=50)


class QuoteFromEstimate(BaseModel):
    """Save a generated estimate, optionally linking a client/project."""

    estimate: QuoteEstimate
    job_description: str = Field(min_length=1)
    client_id: Optional[str] = None
    project_id: Optional[str] = None
    property_size: Optional[Decimal] = Field(default=None, gt=0)
    property_unit: Optional[PropertyUnit] = None
    material_notes: Optional[str] = None


class QuoteUpdate(BaseModel):
    client_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    job_description: Optional[str] = Field(default=None, min_length=1)
    client_id: Optional[str] = None
    labor_cost: Optional[Decimal] = Field(default=None, ge=0)
    material_cost: Optional[Decimal] = Field(default=None, ge=0)
    equipment_cost: Optional[Decimal] = Field(default=None, ge=0)
    completion_time: Optional[str] = Field(default=None, max_length=50)
    material_notes: Optional[str] = None
    version: int


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus
    version: int


class QuoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    client_id: Optional[str] = None
    project_id: Optional[str] = None
    client_name: str
    job_description: str
    property_size: Optional[Decimal] = None
    property_unit: Optional[str] = None
    labor_cost: Decimal
    material_cost: Decimal
    equipment_cost: Decimal
    total_cost: Decimal
    completion_time: Optional[str] = None
    material_notes: Optional[str] = None
    status: str
    version: int
    created_at: datetime
    updated_at: datetime


class JobList(BaseModel):
    scheduled: List[QuoteRead]
    completed: List[QuoteRead]
