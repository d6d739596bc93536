"""Building model (residential complex managed by an operator)."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, ForeignKey, Text, Integer, Boolean
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, utcnow
from app.models.types import JSONType

if TYPE_CHECKING:
    from app.models.user import User


class Building(Base):
    """A building whose context (location, amenities, policies) its properties inherit."""

    __tablename__ = "buildings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    operator_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    number_of_units: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    type_of_unit: Mapped[list] = mapped_column(JSONType, default=list)
    building_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Media
    logo: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    video: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    photos: Mapped[list] = mapped_column(JSONType, default=list)
    documents: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Location context: ordered lists of {"label", "destination"}
    metro_stations: Mapped[list] = mapped_column(JSONType, default=list)
    commute_times: Mapped[list] = mapped_column(JSONType, default=list)
    local_essentials: Mapped[list] = mapped_column(JSONType, default=list)

    # Services and policies
    amenities: Mapped[list] = mapped_column(JSONType, default=list)
    is_concierge: Mapped[bool] = mapped_column(Boolean, default=False)
    concierge_hours: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    pet_policy: Mapped[bool] = mapped_column(Boolean, default=False)
    pets: Mapped[list] = mapped_column(JSONType, default=list)
    smoking_area: Mapped[bool] = mapped_column(Boolean, default=False)
    tenant_types: Mapped[list] = mapped_column(JSONType, default=lambda: ["family"])

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    operator: Mapped[Optional["User"]] = relationship("User")
