"""Booking request schemas."""

from typing import Optional
from uuid import UUID

from pydantic import ConfigDict

from app.schemas.base import BaseSchema, IDMixin, TimestampMixin
from app.schemas.property import PropertyResponse
from app.schemas.user import UserResponse
from app.models.enums import BookingRequestStatus


class BookingRequestCreate(BaseSchema):
    """Request to rent a property.

    ``tenant_id`` is only honoured for admins; tenants always book for themselves.
    """

    property_id: UUID
    tenant_id: Optional[UUID] = None


class BookingRequestStatusUpdate(BaseSchema):
    """Move a booking request to another lifecycle stage.

    Kept as a plain, unstripped string so every non-token (empty, padded,
    overlong) reaches the service and is reported as an invalid status value.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    status: str


class BookingTenant(UserResponse):
    """The requesting tenant, with the public link to their CV once shared."""

    cv_share_uuid: Optional[UUID] = None


class BookingRequestResponse(BaseSchema, IDMixin, TimestampMixin):
    """Booking request response, with the property and tenant it is about."""

    property_id: UUID
    tenant_id: UUID
    property: PropertyResponse
    tenant: BookingTenant
    status: BookingRequestStatus
    is_terminal: bool = False
    allowed_transitions: list[BookingRequestStatus] = []
