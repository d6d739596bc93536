"""Booking requests router."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.core.exceptions import NotFound, PermissionDenied
from app.core.security import (
    CurrentUser,
    get_current_user,
    require_admin,
    require_operator,
    require_tenant,
)
from app.models.booking_request import BookingRequest
from app.models.enums import BookingRequestStatus
from app.schemas.booking_request import (
    BookingRequestCreate,
    BookingRequestResponse,
    BookingRequestStatusUpdate,
    BookingTenant,
)
from app.services.booking_requests import BookingRequestService, allowed_next
from app.services.properties import PropertyService, to_response as property_response

router = APIRouter(prefix="/booking-requests", tags=["booking-requests"])


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> BookingRequestService:
    return BookingRequestService(db, enforce_transitions=settings.enforce_booking_transitions)


def to_response(
    booking_request: BookingRequest,
    cv_share_ids: dict[UUID, Optional[UUID]],
    enforce_transitions: bool = True,
) -> BookingRequestResponse:
    current = booking_request.status
    if enforce_transitions:
        allowed = allowed_next(current)
    else:
        allowed = frozenset(BookingRequestStatus) - {current}

    tenant = BookingTenant.model_validate(booking_request.tenant).model_copy(
        update={"cv_share_uuid": cv_share_ids.get(booking_request.tenant_id)}
    )
    return BookingRequestResponse(
        id=booking_request.id,
        property_id=booking_request.property_id,
        tenant_id=booking_request.tenant_id,
        property=property_response(booking_request.property),
        tenant=tenant,
        status=current,
        is_terminal=current.is_terminal,
        allowed_transitions=sorted(allowed, key=lambda s: s.value),
        created_at=booking_request.created_at,
        updated_at=booking_request.updated_at,
    )


async def respond(
    service: BookingRequestService, booking_requests: list[BookingRequest]
) -> list[BookingRequestResponse]:
    cv_share_ids = await service.cv_share_ids(booking_requests)
    return [
        to_response(b, cv_share_ids, service.enforce_transitions) for b in booking_requests
    ]


@router.post("", response_model=BookingRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_request(
    data: BookingRequestCreate,
    service: BookingRequestService = Depends(get_booking_service),
    current_user: CurrentUser = Depends(require_tenant),
):
    """Request to rent a property.

    Rejected with 409 if the tenant already has a request for this property,
    whatever its status.
    """
    tenant_id = current_user.id
    if current_user.is_admin and data.tenant_id:
        tenant_id = data.tenant_id

    booking_request = await service.create(data.property_id, tenant_id)
    return (await respond(service, [booking_request]))[0]


@router.get("", response_model=List[BookingRequestResponse])
async def list_booking_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    service: BookingRequestService = Depends(get_booking_service),
    current_user: CurrentUser = Depends(require_admin),
):
    """All booking requests, newest first (admin)."""
    return await respond(service, await service.list_all(status_filter))


@router.get("/me", response_model=List[BookingRequestResponse])
async def list_my_booking_requests(
    property_id: Optional[UUID] = None,
    service: BookingRequestService = Depends(get_booking_service),
    current_user: CurrentUser = Depends(require_tenant),
):
    """The caller's own booking requests."""
    return await respond(service, await service.list_for_tenant(current_user.id, property_id))


@router.get("/property/{property_id}", response_model=List[BookingRequestResponse])
async def list_property_booking_requests(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    service: BookingRequestService = Depends(get_booking_service),
    current_user: CurrentUser = Depends(require_operator),
):
    """Requests for one property (its operator or an admin)."""
    prop = await PropertyService(db).get(property_id)
    if not current_user.is_admin and prop.operator_id != current_user.id:
        raise PermissionDenied("Property belongs to another operator")
    return await respond(service, await service.list_for_property(property_id))


@router.get("/{booking_request_id}", response_model=BookingRequestResponse)
async def get_booking_request(
    booking_request_id: UUID,
    service: BookingRequestService = Depends(get_booking_service),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get a booking request (admin or the requesting tenant)."""
    booking_request = await service.get(booking_request_id)
    if not current_user.is_admin and booking_request.tenant_id != current_user.id:
        raise NotFound("Booking request not found")
    return (await respond(service, [booking_request]))[0]


@router.patch("/{booking_request_id}/status", response_model=BookingRequestResponse)
async def update_booking_request_status(
    booking_request_id: UUID,
    data: BookingRequestStatusUpdate,
    service: BookingRequestService = Depends(get_booking_service),
    current_user: CurrentUser = Depends(require_admin),
):
    """Move a booking request along the pipeline (admin)."""
    booking_request = await service.update_status(booking_request_id, data.status)
    return (await respond(service, [booking_request]))[0]
