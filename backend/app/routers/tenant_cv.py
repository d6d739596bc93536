"""Tenant CV router."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import CurrentUser, get_current_user
from app.schemas.tenant_cv import TenantCvResponse, TenantCvShareResponse, TenantCvUpdate
from app.services.tenant_cv import TenantCvService

router = APIRouter(prefix="/tenant-cv", tags=["tenant-cv"])


@router.get("/me", response_model=TenantCvResponse)
async def get_my_cv(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await TenantCvService(db).get_for_user(current_user.user)


@router.get("", response_model=TenantCvResponse)
async def get_current_cv(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await TenantCvService(db).get_for_user(current_user.user)


@router.put("/me", response_model=TenantCvResponse)
@router.put("", response_model=TenantCvResponse)
async def update_cv(
    data: TenantCvUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Edit the caller's CV (created on first write)."""
    return await TenantCvService(db).update_for_user(current_user.user, data)


@router.post("/share", response_model=TenantCvShareResponse)
async def share_cv(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get (or create) the public share id of the caller's CV."""
    share_uuid = await TenantCvService(db).ensure_share_uuid(current_user.user)
    return TenantCvShareResponse(share_uuid=share_uuid)


@router.get("/{share_uuid}", response_model=TenantCvResponse)
async def get_shared_cv(
    share_uuid: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Public view of a shared CV (no authentication)."""
    return await TenantCvService(db).get_by_share_uuid(share_uuid)
