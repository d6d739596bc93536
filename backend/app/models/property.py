"""Property (listing) model."""

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, Date, ForeignKey, Text, Integer, Boolean
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, utcnow
from app.models.types import JSONType, Decimal10_2

if TYPE_CHECKING:
    from app.models.building import Building
    from app.models.user import User


class Property(Base):
    """A rentable listing.

    Only ``title`` is mandatory; a private landlord can publish a sparse
    listing without a building, operator, price or room counts. Completeness
    is tracked at the service layer (see ``REQUIRED_LISTING_FIELDS``).
    """

    __tablename__ = "properties"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    building_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("buildings.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    operator_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    apartment_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    descriptions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Unit details
    property_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    building_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    furnishing: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    square_meters: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)
    outdoor_space: Mapped[bool] = mapped_column(Boolean, default=False)
    balcony: Mapped[bool] = mapped_column(Boolean, default=False)
    terrace: Mapped[bool] = mapped_column(Boolean, default=False)
    luxury: Mapped[bool] = mapped_column(Boolean, default=False)

    # Terms
    price: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)
    deposit: Mapped[Optional[float]] = mapped_column(Decimal10_2, nullable=True)
    bills: Mapped[Optional[str]] = mapped_column(String(50), default="excluded", nullable=True)
    let_duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    available_from: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Media
    photos: Mapped[list] = mapped_column(JSONType, default=list)
    video: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    documents: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Context copied from the building when not set explicitly
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    tenant_types: Mapped[list] = mapped_column(JSONType, default=list)
    amenities: Mapped[list] = mapped_column(JSONType, default=list)
    is_concierge: Mapped[bool] = mapped_column(Boolean, default=False)
    concierge_hours: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    pet_policy: Mapped[bool] = mapped_column(Boolean, default=False)
    pets: Mapped[list] = mapped_column(JSONType, default=list)
    smoking_area: Mapped[bool] = mapped_column(Boolean, default=False)
    metro_stations: Mapped[list] = mapped_column(JSONType, default=list)
    commute_times: Mapped[list] = mapped_column(JSONType, default=list)
    local_essentials: Mapped[list] = mapped_column(JSONType, default=list)

    # Kept for older listings; not scored by matching
    lifestyle_features: Mapped[list] = mapped_column(JSONType, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    building: Mapped[Optional["Building"]] = relationship("Building")
    operator: Mapped[Optional["User"]] = relationship("User")
