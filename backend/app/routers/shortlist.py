"""Shortlist router."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import CurrentUser, require_tenant
from app.schemas.property import PropertyResponse
from app.schemas.shortlist import ShortlistCount, ShortlistStatus
from app.services.properties import to_response
from app.services.shortlist import ShortlistService

router = APIRouter(prefix="/shortlist", tags=["shortlist"])


@router.get("", response_model=List[PropertyResponse])
async def list_shortlist(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    properties = await ShortlistService(db).list_properties(current_user.id)
    return [to_response(p) for p in properties]


@router.get("/count", response_model=ShortlistCount)
async def count_shortlist(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    return ShortlistCount(count=await ShortlistService(db).count(current_user.id))


@router.get("/check/{property_id}", response_model=ShortlistStatus)
async def check_shortlist(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    is_shortlisted = await ShortlistService(db).contains(current_user.id, property_id)
    return ShortlistStatus(property_id=property_id, is_shortlisted=is_shortlisted)


@router.post("/{property_id}", response_model=ShortlistStatus)
async def add_to_shortlist(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    """Save a property. Saving it twice is a no-op."""
    await ShortlistService(db).add(current_user.id, property_id)
    return ShortlistStatus(property_id=property_id, is_shortlisted=True)


@router.delete("/{property_id}", response_model=ShortlistStatus)
async def remove_from_shortlist(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    await ShortlistService(db).remove(current_user.id, property_id)
    return ShortlistStatus(property_id=property_id, is_shortlisted=False)
