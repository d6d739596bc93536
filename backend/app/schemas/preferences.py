"""Preferences schemas."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import Field, model_validator

from app.schemas.base import BaseSchema, IDMixin, TimestampMixin
from app.schemas.common import Pet
from app.models.enums import DepositPreference


class PreferencesFields(BaseSchema):
    """Everything a tenant can say about the home they want. All optional."""

    # Location
    preferred_address: Optional[str] = Field(None, max_length=500)
    preferred_areas: Optional[list[str]] = None
    preferred_districts: Optional[list[str]] = None
    preferred_metro_stations: Optional[list[str]] = None

    # Dates and budget
    move_in_date: Optional[date] = None
    move_out_date: Optional[date] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    deposit_preference: Optional[DepositPreference] = None

    # Property
    property_types: Optional[list[str]] = None
    bedrooms: Optional[list[int]] = None
    bathrooms: Optional[list[int]] = None
    min_bedrooms: Optional[int] = Field(None, ge=0)
    max_bedrooms: Optional[int] = Field(None, ge=0)
    min_bathrooms: Optional[int] = Field(None, ge=0)
    max_bathrooms: Optional[int] = Field(None, ge=0)
    furnishing: Optional[list[str]] = None
    outdoor_space: Optional[bool] = None
    balcony: Optional[bool] = None
    terrace: Optional[bool] = None
    min_square_meters: Optional[float] = Field(None, ge=0)
    max_square_meters: Optional[float] = Field(None, ge=0)

    # Building and let
    building_types: Optional[list[str]] = None
    let_duration: Optional[str] = Field(None, max_length=50)
    bills: Optional[str] = Field(None, max_length=50)

    # Household
    tenant_types: Optional[list[str]] = None
    pet_policy: Optional[bool] = None
    pets: Optional[list[Pet]] = None
    number_of_pets: Optional[int] = Field(None, ge=0)

    # Amenities and lifestyle
    amenities: Optional[list[str]] = None
    is_concierge: Optional[bool] = None
    smoking_area: Optional[bool] = None
    hobbies: Optional[list[str]] = None
    ideal_living_environment: Optional[list[str]] = None
    lifestyle_features: Optional[list[str]] = None
    smoker: Optional[str] = Field(None, max_length=50)
    occupation: Optional[str] = Field(None, max_length=255)
    family_status: Optional[str] = Field(None, max_length=100)
    children_count: Optional[str] = Field(None, max_length=50)

    additional_info: Optional[str] = None

    @model_validator(mode="after")
    def validate_ranges(self):
        """Lower bounds may not exceed upper bounds."""
        pairs = (
            ("min_price", "max_price"),
            ("min_square_meters", "max_square_meters"),
            ("min_bedrooms", "max_bedrooms"),
            ("min_bathrooms", "max_bathrooms"),
            ("move_in_date", "move_out_date"),
        )
        for low_name, high_name in pairs:
            low, high = getattr(self, low_name), getattr(self, high_name)
            if low is not None and high is not None and low > high:
                raise ValueError(f"{low_name} must not be greater than {high_name}")
        for name in ("bedrooms", "bathrooms"):
            values = getattr(self, name)
            if values and any(v < 0 for v in values):
                raise ValueError(f"{name} must not contain negative values")
        return self


class PreferencesUpsert(PreferencesFields):
    """Create or replace-in-place a tenant's preferences."""


class PreferencesUpdate(PreferencesFields):
    """Partial update of existing preferences."""


class PreferencesResponse(BaseSchema, IDMixin, TimestampMixin):
    """Preferences response."""

    user_id: UUID
    preferred_address: Optional[str] = None
    preferred_areas: list[str] = []
    preferred_districts: list[str] = []
    preferred_metro_stations: list[str] = []
    move_in_date: Optional[date] = None
    move_out_date: Optional[date] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    deposit_preference: Optional[str] = None
    property_types: list[str] = []
    bedrooms: list[int] = []
    bathrooms: list[int] = []
    min_bedrooms: Optional[int] = None
    max_bedrooms: Optional[int] = None
    min_bathrooms: Optional[int] = None
    max_bathrooms: Optional[int] = None
    furnishing: list[str] = []
    outdoor_space: bool = False
    balcony: bool = False
    terrace: bool = False
    min_square_meters: Optional[float] = None
    max_square_meters: Optional[float] = None
    building_types: list[str] = []
    let_duration: Optional[str] = None
    bills: Optional[str] = None
    tenant_types: list[str] = []
    pet_policy: bool = False
    pets: list[Pet] = []
    number_of_pets: Optional[int] = None
    amenities: list[str] = []
    is_concierge: bool = False
    smoking_area: bool = False
    hobbies: list[str] = []
    ideal_living_environment: list[str] = []
    lifestyle_features: list[str] = []
    smoker: Optional[str] = None
    occupation: Optional[str] = None
    family_status: Optional[str] = None
    children_count: Optional[str] = None
    kyc_status: Optional[str] = None
    referencing_status: Optional[str] = None
    additional_info: Optional[str] = None
