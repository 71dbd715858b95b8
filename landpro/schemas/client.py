# File: landpro/schemas/client.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

ClientStatus = Literal["active", "inactive"]


class ClientBase(BaseModel):
    client_name: str = Field(min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    client_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None
    status: Optional[ClientStatus] = None


class ClientRead(ClientBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    landscaper_id: str
    client_user_id: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class PortalAccessRequest(BaseModel):
    """Email of an already registered user to link as this client's portal login."""

    email: EmailStr
