"""Building schemas."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema, IDMixin, TimestampMixin
from app.schemas.common import ConciergeHours, LabeledDistance, Pet
from app.models.enums import TenantType, UnitType


class BuildingFields(BaseSchema):
    """Fields shared by create and update; everything optional."""

    address: Optional[str] = Field(None, max_length=500)
    number_of_units: Optional[int] = Field(None, ge=0)
    type_of_unit: Optional[list[UnitType]] = None
    building_type: Optional[str] = Field(None, max_length=100)
    logo: Optional[str] = Field(None, max_length=1000)
    video: Optional[str] = Field(None, max_length=1000)
    photos: Optional[list[str]] = None
    documents: Optional[str] = None
    metro_stations: Optional[list[LabeledDistance]] = None
    commute_times: Optional[list[LabeledDistance]] = None
    local_essentials: Optional[list[LabeledDistance]] = None
    amenities: Optional[list[str]] = None
    is_concierge: Optional[bool] = None
    concierge_hours: Optional[ConciergeHours] = None
    pet_policy: Optional[bool] = None
    pets: Optional[list[Pet]] = None
    smoking_area: Optional[bool] = None
    tenant_types: Optional[list[TenantType]] = None


class BuildingCreate(BuildingFields):
    """Create a building for an operator."""

    name: str = Field(..., min_length=1, max_length=255)
    operator_id: UUID


class BuildingUpdate(BuildingFields):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    operator_id: Optional[UUID] = None


class BuildingResponse(BaseSchema, IDMixin, TimestampMixin):
    """Building response."""

    name: str
    operator_id: Optional[UUID] = None
    address: Optional[str] = None
    number_of_units: Optional[int] = None
    type_of_unit: list[str] = []
    building_type: Optional[str] = None
    logo: Optional[str] = None
    video: Optional[str] = None
    photos: list[str] = []
    documents: Optional[str] = None
    metro_stations: list[LabeledDistance] = []
    commute_times: list[LabeledDistance] = []
    local_essentials: list[LabeledDistance] = []
    amenities: list[str] = []
    is_concierge: bool = False
    concierge_hours: Optional[ConciergeHours] = None
    pet_policy: bool = False
    pets: list[Pet] = []
    smoking_area: bool = False
    tenant_types: list[str] = []
