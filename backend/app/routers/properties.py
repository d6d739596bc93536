"""Properties router."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import CurrentUser, require_operator
from app.schemas.base import Page
from app.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from app.services.properties import DEFAULT_PAGE_SIZE, PropertyService, to_response

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("/public", response_model=Page[PropertyResponse])
async def list_public_properties(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: Optional[str] = Query(None, max_length=200),
    complete_only: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """Public, paginated listing search (no authentication).

    Out-of-range ``page`` / ``limit`` fall back to the defaults instead of failing.
    """
    return await PropertyService(db).list_public(
        page=page, limit=limit, search=search, complete_only=complete_only
    )


@router.get("/public/{property_id}", response_model=PropertyResponse)
async def get_public_property(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return to_response(await PropertyService(db).get(property_id))


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    data: PropertyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_operator),
):
    """Create a listing. Only ``title`` is required."""
    prop = await PropertyService(db).create(data, current_user)
    return to_response(prop)


@router.get("", response_model=List[PropertyResponse])
async def list_properties(
    building_id: Optional[UUID] = None,
    operator_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_operator),
):
    """Operators see their own listings; admins see all (optionally per operator)."""
    properties = await PropertyService(db).list_for_operator(
        current_user, building_id=building_id, operator_id=operator_id
    )
    return [to_response(p) for p in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_operator),
):
    """Get a property by ID."""
    return to_response(await PropertyService(db).get(property_id))


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: UUID,
    data: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_operator),
):
    """Update a property."""
    prop = await PropertyService(db).update(property_id, data, current_user)
    return to_response(prop)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_operator),
):
    """Delete a property; its booking requests and shortlist entries go with it."""
    await PropertyService(db).delete(property_id, current_user)
