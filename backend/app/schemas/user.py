"""User schemas."""

from datetime import date
from typing import Optional

from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema, IDMixin, TimestampMixin
from app.models.enums import UserRole


class UserCreate(BaseSchema):
    """Register a new account as a tenant or an operator."""

    email: EmailStr
    full_name: Optional[str] = Field(None, max_length=255)
    role: UserRole = UserRole.TENANT
    phone: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=100)
    occupation: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    avatar_url: Optional[str] = Field(None, max_length=1000)


class UserUpdate(BaseSchema):
    """Update profile fields. Role changes go through the admin role endpoint."""

    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=100)
    occupation: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    avatar_url: Optional[str] = Field(None, max_length=1000)


class UserRoleUpdate(BaseSchema):
    role: UserRole


class UserResponse(BaseSchema, IDMixin, TimestampMixin):
    """User response."""

    email: str
    full_name: Optional[str] = None
    role: UserRole
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = None
    occupation: Optional[str] = None
    address: Optional[str] = None
    avatar_url: Optional[str] = None
