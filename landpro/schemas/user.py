# File: landpro/schemas/user.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserBase(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class RegisterRequest(UserBase):
    password: str = Field(min_length=6, max_length=100)
    full_name: str = Field(min_length=1, max_length=100)
    business_name: str = Field(min_length=1, max_length=100)

    @field_validator("full_name", "business_name", mode="before")
    @classmethod
    def strip_names(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(UserBase):
    password: str = Field(min_length=1, max_length=100)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: Optional[str] = None
    business_name: Optional[str] = None
    role: str


class SessionRead(BaseModel):
    user_id: str
    email: str
    is_admin: bool
    client_id: Optional[str] = None
    profile: Optional[ProfileRead] = None
