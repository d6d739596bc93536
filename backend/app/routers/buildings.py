"""Buildings router."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import CurrentUser, require_admin
from app.schemas.building import BuildingCreate, BuildingResponse, BuildingUpdate
from app.schemas.user import UserResponse
from app.services.buildings import BuildingService

router = APIRouter(prefix="/buildings", tags=["buildings"])


@router.post("", response_model=BuildingResponse, status_code=status.HTTP_201_CREATED)
async def create_building(
    data: BuildingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    """Create a building for an operator (admin)."""
    return BuildingResponse.model_validate(await BuildingService(db).create(data))


@router.get("", response_model=List[BuildingResponse])
async def list_buildings(
    operator_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    buildings = await BuildingService(db).list_all(operator_id)
    return [BuildingResponse.model_validate(b) for b in buildings]


@router.get("/operators", response_model=List[UserResponse])
async def list_operators(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    """Accounts a building can be assigned to."""
    operators = await BuildingService(db).list_operators()
    return [UserResponse.model_validate(u) for u in operators]


@router.get("/public/{building_id}", response_model=BuildingResponse)
async def get_public_building(
    building_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Building details for listing pages (no authentication)."""
    return BuildingResponse.model_validate(await BuildingService(db).get(building_id))


@router.get("/{building_id}", response_model=BuildingResponse)
async def get_building(
    building_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return BuildingResponse.model_validate(await BuildingService(db).get(building_id))


@router.patch("/{building_id}", response_model=BuildingResponse)
async def update_building(
    building_id: UUID,
    data: BuildingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return BuildingResponse.model_validate(await BuildingService(db).update(building_id, data))


@router.delete("/{building_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_building(
    building_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    """Delete a building and all of its properties."""
    await BuildingService(db).delete(building_id)
