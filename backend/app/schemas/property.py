"""Property schemas."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema, IDMixin, TimestampMixin
from app.schemas.common import ConciergeHours, LabeledDistance, Pet
from app.models.enums import TenantType


class PropertyFields(BaseSchema):
    """Listing fields. Every one of them may be left out of a sparse listing."""

    apartment_number: Optional[str] = Field(None, max_length=50)
    descriptions: Optional[str] = None
    property_type: Optional[str] = Field(None, max_length=50)
    building_type: Optional[str] = Field(None, max_length=100)
    furnishing: Optional[str] = Field(None, max_length=50)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    floor: Optional[int] = Field(None, ge=-5, le=300)
    square_meters: Optional[float] = Field(None, gt=0)
    outdoor_space: Optional[bool] = None
    balcony: Optional[bool] = None
    terrace: Optional[bool] = None
    luxury: Optional[bool] = None
    price: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    bills: Optional[str] = Field(None, max_length=50)
    let_duration: Optional[str] = Field(None, max_length=50)
    available_from: Optional[date] = None
    photos: Optional[list[str]] = None
    video: Optional[str] = Field(None, max_length=1000)
    documents: Optional[str] = None
    lifestyle_features: Optional[list[str]] = None

    # Inherited from the building when left out
    address: Optional[str] = Field(None, max_length=500)
    tenant_types: Optional[list[TenantType]] = None
    amenities: Optional[list[str]] = None
    is_concierge: Optional[bool] = None
    concierge_hours: Optional[ConciergeHours] = None
    pet_policy: Optional[bool] = None
    pets: Optional[list[Pet]] = None
    smoking_area: Optional[bool] = None
    metro_stations: Optional[list[LabeledDistance]] = None
    commute_times: Optional[list[LabeledDistance]] = None
    local_essentials: Optional[list[LabeledDistance]] = None


class PropertyCreate(PropertyFields):
    """Create a listing.

    ``title`` is typed optional so that a missing title is reported as a
    nullability violation by the service rather than a generic validation error.
    """

    title: Optional[str] = Field(None, max_length=255)
    building_id: Optional[UUID] = None
    operator_id: Optional[UUID] = None


class PropertyUpdate(PropertyFields):
    title: Optional[str] = Field(None, max_length=255)
    building_id: Optional[UUID] = None


class PropertyResponse(BaseSchema, IDMixin, TimestampMixin):
    """Property response."""

    title: str
    building_id: Optional[UUID] = None
    building_name: Optional[str] = None
    operator_id: Optional[UUID] = None
    apartment_number: Optional[str] = None
    descriptions: Optional[str] = None
    property_type: Optional[str] = None
    building_type: Optional[str] = None
    furnishing: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    floor: Optional[int] = None
    square_meters: Optional[float] = None
    outdoor_space: bool = False
    balcony: bool = False
    terrace: bool = False
    luxury: bool = False
    price: Optional[float] = None
    deposit: Optional[float] = None
    bills: Optional[str] = None
    let_duration: Optional[str] = None
    available_from: Optional[date] = None
    photos: list[str] = []
    video: Optional[str] = None
    documents: Optional[str] = None
    lifestyle_features: list[str] = []
    address: Optional[str] = None
    tenant_types: list[str] = []
    amenities: list[str] = []
    is_concierge: bool = False
    concierge_hours: Optional[ConciergeHours] = None
    pet_policy: bool = False
    pets: list[Pet] = []
    smoking_area: bool = False
    metro_stations: list[LabeledDistance] = []
    commute_times: list[LabeledDistance] = []
    local_essentials: list[LabeledDistance] = []

    # Listing completeness
    is_complete: bool = False
    missing_fields: list[str] = []
