"""Booking request lifecycle: status state machine and persistence."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    DuplicateBookingRequest,
    InvalidInput,
    InvalidStatusTransition,
    InvalidStatusValue,
    NotFound,
    ReferentialViolation,
)
from app.models.booking_request import BookingRequest
from app.models.enums import BookingRequestStatus, UserRole
from app.models.property import Property
from app.models.tenant_cv import TenantCv
from app.models.user import User

logger = logging.getLogger(__name__)

S = BookingRequestStatus

# Letting pipeline, in order. An open stage may move to any later stage or be
# cancelled; moving back is not allowed.
PIPELINE: tuple[BookingRequestStatus, ...] = (
    S.NEW,
    S.CONTACTING,
    S.KYC_REFERENCING,
    S.APPROVED_VIEWING,
    S.VIEWING,
    S.CONTRACT,
    S.DEPOSIT,
    S.FULL_PAYMENT,
    S.MOVE_IN,
    S.RENTED,
)


def _build_transitions() -> dict[BookingRequestStatus, frozenset[BookingRequestStatus]]:
    table: dict[BookingRequestStatus, frozenset[BookingRequestStatus]] = {}
    for position, current in enumerate(PIPELINE[:-1]):
        table[current] = frozenset(PIPELINE[position + 1:]) | {S.CANCEL_BOOKING}
    table[S.RENTED] = frozenset()
    table[S.CANCEL_BOOKING] = frozenset()
    return table


ALLOWED_TRANSITIONS = _build_transitions()

# Property (with its building) and tenant, as shown in every response
LOAD_RELATIONS = (
    selectinload(BookingRequest.property).selectinload(Property.building),
    selectinload(BookingRequest.tenant),
)


def parse_status(token: str) -> BookingRequestStatus:
    """Map a wire token onto the closed status set."""
    try:
        return BookingRequestStatus(token)
    except ValueError:
        raise InvalidStatusValue(
            f"Invalid status '{token}'. Expected one of: "
            + ", ".join(s.value for s in BookingRequestStatus)
        )


def allowed_next(current: BookingRequestStatus) -> frozenset[BookingRequestStatus]:
    return ALLOWED_TRANSITIONS[current]


def check_transition(current: BookingRequestStatus, target: BookingRequestStatus) -> None:
    """Raise if ``target`` cannot follow ``current``. Re-asserting the current status is allowed."""
    if target == current:
        return
    if target not in ALLOWED_TRANSITIONS[current]:
        if current.is_terminal:
            raise InvalidStatusTransition(
                f"Booking request is {current.value}; no further status changes are allowed"
            )
        raise InvalidStatusTransition(
            f"Cannot move booking request from {current.value} to {target.value}"
        )


class BookingRequestService:
    """Create-or-reject booking requests and walk them through the pipeline."""

    def __init__(self, db: AsyncSession, enforce_transitions: bool = True):
        self.db = db
        self.enforce_transitions = enforce_transitions

    async def create(self, property_id: UUID, tenant_id: UUID) -> BookingRequest:
        """Create a request in status ``new``.

        Raises:
            ReferentialViolation: property or tenant does not exist
            DuplicateBookingRequest: a request for this pair already exists
        """
        await self._ensure_references(property_id, tenant_id)

        booking_request = BookingRequest(
            property_id=property_id,
            tenant_id=tenant_id,
            status=S.NEW,
        )
        self.db.add(booking_request)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            # The unique constraint decides; a concurrent delete of the
            # property or tenant is the only other way to get here.
            if await self._find_pair(property_id, tenant_id) is not None:
                logger.info(
                    f"[BOOKING] Duplicate request rejected: property={property_id} tenant={tenant_id}"
                )
                raise DuplicateBookingRequest()
            raise ReferentialViolation("Property or tenant no longer exists")

        await self.db.commit()
        booking_request = await self.get(booking_request.id)
        logger.info(
            f"[BOOKING] Created {booking_request.id}: property={property_id} tenant={tenant_id}"
        )
        return booking_request

    async def get(self, booking_request_id: UUID) -> BookingRequest:
        result = await self.db.execute(
            select(BookingRequest)
            .options(*LOAD_RELATIONS)
            .where(BookingRequest.id == booking_request_id)
            .execution_options(populate_existing=True)
        )
        booking_request = result.scalar_one_or_none()
        if not booking_request:
            raise NotFound("Booking request not found")
        return booking_request

    async def list_all(self, status: Optional[str] = None) -> list[BookingRequest]:
        """All requests, newest first, optionally filtered by status."""
        query = select(BookingRequest).options(*LOAD_RELATIONS)
        if status:
            query = query.where(BookingRequest.status == parse_status(status))
        result = await self.db.execute(query.order_by(BookingRequest.created_at.desc()))
        return list(result.scalars().all())

    async def list_for_tenant(
        self, tenant_id: UUID, property_id: Optional[UUID] = None
    ) -> list[BookingRequest]:
        query = (
            select(BookingRequest)
            .options(*LOAD_RELATIONS)
            .where(BookingRequest.tenant_id == tenant_id)
        )
        if property_id:
            query = query.where(BookingRequest.property_id == property_id)
        result = await self.db.execute(query.order_by(BookingRequest.created_at.desc()))
        return list(result.scalars().all())

    async def list_for_property(self, property_id: UUID) -> list[BookingRequest]:
        result = await self.db.execute(
            select(BookingRequest)
            .options(*LOAD_RELATIONS)
            .where(BookingRequest.property_id == property_id)
            .order_by(BookingRequest.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_status(self, booking_request_id: UUID, token: str) -> BookingRequest:
        """Move a request to the status named by ``token``.

        Raises:
            InvalidStatusValue: token is not one of the eleven statuses
            NotFound: no such request
            InvalidStatusTransition: transition table forbids it (when enforced)
        """
        target = parse_status(token)
        booking_request = await self.get(booking_request_id)
        current = booking_request.status

        if self.enforce_transitions:
            check_transition(current, target)

        if target == current:
            return booking_request

        booking_request.status = target
        await self.db.commit()
        booking_request = await self.get(booking_request_id)
        logger.info(
            f"[BOOKING] {booking_request.id} status {current.value} -> {target.value}"
        )
        return booking_request

    async def cv_share_ids(
        self, booking_requests: list[BookingRequest]
    ) -> dict[UUID, Optional[UUID]]:
        """Public CV link of each tenant in ``booking_requests``, keyed by tenant id."""
        tenant_ids = {b.tenant_id for b in booking_requests}
        if not tenant_ids:
            return {}
        result = await self.db.execute(
            select(TenantCv.user_id, TenantCv.share_uuid).where(TenantCv.user_id.in_(tenant_ids))
        )
        return {user_id: share_uuid for user_id, share_uuid in result.all()}

    async def _ensure_references(self, property_id: UUID, tenant_id: UUID) -> None:
        prop = await self.db.scalar(select(Property.id).where(Property.id == property_id))
        if prop is None:
            raise ReferentialViolation("Property not found")

        role = await self.db.scalar(select(User.role).where(User.id == tenant_id))
        if role is None:
            raise ReferentialViolation("Tenant not found")
        if role == UserRole.OPERATOR:
            raise InvalidInput("Booking requests can only be made for tenant accounts")

    async def _find_pair(self, property_id: UUID, tenant_id: UUID) -> Optional[BookingRequest]:
        result = await self.db.execute(
            select(BookingRequest).where(
                BookingRequest.property_id == property_id,
                BookingRequest.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()
