"""
User Schemas
"""
from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from careerprep.utils.validators import validate_phone, validate_linkedin_url, validate_github_url


# Auth schemas
class RegisterRequest(BaseModel):
    """Register request schema"""
    email: EmailStr
    password: str
    full_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if not validate_phone(v):
            raise ValueError("Please provide a valid phone number")
        return v

    @field_validator("linkedin_url")
    @classmethod
    def check_linkedin(cls, v):
        if not validate_linkedin_url(v):
            raise ValueError("Please provide a valid LinkedIn URL")
        return v

    @field_validator("github_url")
    @classmethod
    def check_github(cls, v):
        if not validate_github_url(v):
            raise ValueError("Please provide a valid GitHub URL")
        return v


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User response schema (never carries the password hash)"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    avatar_url: Optional[str] = None
    active_resume_id: Optional[UUID] = None
    analytics: dict = Field(default_factory=dict, validation_alias="dashboard_analytics")
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Register / login response schema"""
    message: str
    user: UserResponse
    token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    user: UserResponse
