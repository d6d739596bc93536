"""Booking request model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, utcnow
from app.models.enums import BookingRequestStatus

if TYPE_CHECKING:
    from app.models.property import Property
    from app.models.user import User

BOOKING_REQUEST_STATUS_ENUM = SQLEnum(
    BookingRequestStatus,
    name="booking_requests_status_enum",
    values_callable=lambda e: [m.value for m in e],
    validate_strings=True,
)


class BookingRequest(Base):
    """A tenant's request to rent a property, tracked through the letting pipeline.

    At most one request exists per (property, tenant) pair; the unique
    constraint is what enforces it, including under concurrent inserts.
    """

    __tablename__ = "booking_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[BookingRequestStatus] = mapped_column(
        BOOKING_REQUEST_STATUS_ENUM,
        default=BookingRequestStatus.NEW,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Many-to-one only; deletes of the parents cascade in the database
    property: Mapped["Property"] = relationship("Property")
    tenant: Mapped["User"] = relationship("User")

    __table_args__ = (
        UniqueConstraint("property_id", "tenant_id", name="uq_booking_requests_property_tenant"),
    )
