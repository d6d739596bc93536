"""Tenant CV schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.base import BaseSchema


class RentHistoryEntry(BaseModel):
    """A past tenancy shown on the CV."""

    property_name: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    price_per_month: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    size_sqft: Optional[float] = Field(None, ge=0)
    property_type: Optional[str] = Field(None, max_length=50)
    furnishing: Optional[str] = Field(None, max_length=50)
    match_score: Optional[int] = Field(None, ge=0, le=100)
    review: Optional[str] = None
    landlord: Optional[str] = Field(None, max_length=255)
    period_from: Optional[date] = None
    period_to: Optional[date] = None
    media_url: Optional[str] = Field(None, max_length=1000)


class TenantCvUpdate(BaseSchema):
    """Partial CV update; created on first write."""

    headline: Optional[str] = Field(None, max_length=255)
    about_me: Optional[str] = None
    hobbies: Optional[list[str]] = None
    rent_history: Optional[list[RentHistoryEntry]] = None
    kyc_status: Optional[str] = Field(None, max_length=50)
    referencing_status: Optional[str] = Field(None, max_length=50)


class TenantCvProfile(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age_years: Optional[int] = None
    nationality: Optional[str] = None
    occupation: Optional[str] = None
    address: Optional[str] = None


class TenantCvMeta(BaseModel):
    headline: Optional[str] = None
    kyc_status: Optional[str] = None
    referencing_status: Optional[str] = None
    move_in_date: Optional[date] = None
    move_out_date: Optional[date] = None
    created_at: Optional[datetime] = None
    smoker: Optional[str] = None
    pets: Optional[str] = None
    tenant_type_labels: list[str] = []


class TenantCvPreferencesSnapshot(BaseModel):
    """The parts of a tenant's preferences a landlord sees on the CV."""

    preferred_address: Optional[str] = None
    preferred_areas: list[str] = []
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    bedrooms: list[int] = []
    bathrooms: list[int] = []
    property_types: list[str] = []
    furnishing: list[str] = []
    let_duration: Optional[str] = None
    tenant_types: list[str] = []
    family_status: Optional[str] = None
    children_count: Optional[str] = None
    ideal_living_environment: list[str] = []


class TenantCvResponse(BaseModel):
    """Assembled CV: account profile, CV content and preference highlights."""

    user_id: UUID
    share_uuid: Optional[UUID] = None
    profile: TenantCvProfile
    meta: TenantCvMeta
    preferences: Optional[TenantCvPreferencesSnapshot] = None
    amenities: list[str] = []
    about: Optional[str] = None
    hobbies: list[str] = []
    rent_history: list[RentHistoryEntry] = []


class TenantCvShareResponse(BaseModel):
    share_uuid: UUID
