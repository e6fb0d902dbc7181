"""
Pydantic schemas for authentication, registration and user profiles.

Field names are snake_case in Python and camelCase on the wire; both forms
are accepted on input.
"""

from pydantic import BaseModel, EmailStr, Field, StringConstraints, UUID4, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional
from datetime import datetime

from app.models.user import UserRole


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, ORM attribute loading."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        str_strip_whitespace = True


# Passwords are hashed and checked exactly as sent
RawPassword = Annotated[str, StringConstraints(strip_whitespace=False)]


class UserRegisterRequest(CamelModel):
    """Request schema for user registration."""
    email: EmailStr
    password: RawPassword = Field(
        ...,
        min_length=6,
        max_length=72,  # bcrypt limit
        description="Password must be 6-72 characters"
    )
    role: UserRole = UserRole.CANDIDATE
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone_number: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    resume_url: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    website: Optional[str] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator('role')
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        """Admin accounts cannot be self-registered."""
        if v == UserRole.ADMIN:
            raise ValueError('Role must be CANDIDATE or EMPLOYER')
        return v


class UserLoginRequest(CamelModel):
    """Request schema for user login."""
    email: EmailStr
    password: RawPassword = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserProfileUpdateRequest(CamelModel):
    """
    Partial profile update. Only fields present in the request are changed.

    Email, role and password are deliberately absent.
    """
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone_number: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    resume_url: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    website: Optional[str] = None

    @field_validator('first_name', 'last_name')
    @classmethod
    def names_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError('Name cannot be null')
        return v


class TokenPayload(BaseModel):
    """Verified claims carried by an access token."""
    user_id: UUID4
    role: UserRole


class UserResponse(CamelModel):
    """User profile response for the account owner (no credential)."""
    id: UUID4
    email: str
    role: UserRole
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    resume_url: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    website: Optional[str] = None
    created_at: Optional[datetime] = None


class PublicUserResponse(CamelModel):
    """Public profile: no email, phone number or resume."""
    id: UUID4
    role: UserRole
    first_name: str
    last_name: str
    location: Optional[str] = None
    bio: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    website: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    """Returned by register and login."""
    user: UserResponse
    token: str
    token_type: str = "bearer"
