# File: landpro/schemas/lead.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LeadCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    email: EmailStr
    message: Optional[str] = Field(default=None, max_length=5000)


class LeadRead(LeadCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
