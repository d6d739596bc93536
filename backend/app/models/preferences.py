"""Tenant rental preferences model."""

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import String, DateTime, Date, ForeignKey, Text, Integer, Boolean
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, utcnow
from app.models.types import JSONType, Decimal10_2


class Preferences(Base):
    """What a tenant is looking for. One row per user."""

    __tablename__ = "preferences"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    # Location
    preferred_address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    preferred_areas: Mapped[list] = mapped_column(JSONType, default=list)
    preferred_districts: Mapped[list] = mapped_column(JSONType, default=list)
    preferred_metro_stations: Mapped[list] = mapped_column(JSONType, default=list)

    # Dates and budget
    move_in_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    move_out_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    min_price: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)
    max_price: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)
    deposit_preference: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    # Property
    property_types: Mapped[list] = mapped_column(JSONType, default=list)
    bedrooms: Mapped[list] = mapped_column(JSONType, default=list)
    bathrooms: Mapped[list] = mapped_column(JSONType, default=list)
    min_bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    min_bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    furnishing: Mapped[list] = mapped_column(JSONType, default=list)
    outdoor_space: Mapped[bool] = mapped_column(Boolean, default=False)
    balcony: Mapped[bool] = mapped_column(Boolean, default=False)
    terrace: Mapped[bool] = mapped_column(Boolean, default=False)
    min_square_meters: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)
    max_square_meters: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)

    # Building and let
    building_types: Mapped[list] = mapped_column(JSONType, default=list)
    let_duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    bills: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Household
    tenant_types: Mapped[list] = mapped_column(JSONType, default=list)
    pet_policy: Mapped[bool] = mapped_column(Boolean, default=False)
    pets: Mapped[list] = mapped_column(JSONType, default=list)
    number_of_pets: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Amenities and lifestyle
    amenities: Mapped[list] = mapped_column(JSONType, default=list)
    is_concierge: Mapped[bool] = mapped_column(Boolean, default=False)
    smoking_area: Mapped[bool] = mapped_column(Boolean, default=False)
    hobbies: Mapped[list] = mapped_column(JSONType, default=list)
    ideal_living_environment: Mapped[list] = mapped_column(JSONType, default=list)
    lifestyle_features: Mapped[list] = mapped_column(JSONType, default=list)
    smoker: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    occupation: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    family_status: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    children_count: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Mirrored from the tenant CV
    kyc_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    referencing_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    additional_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
