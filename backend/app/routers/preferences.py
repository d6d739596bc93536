"""Preferences router."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import CurrentUser, get_current_user, require_tenant
from app.schemas.preferences import PreferencesResponse, PreferencesUpdate, PreferencesUpsert
from app.services.preferences import PreferencesService

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.post("", response_model=PreferencesResponse)
async def upsert_preferences(
    data: PreferencesUpsert,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Create the caller's preferences or update them in place.

    Operators are refused by the service.
    """
    preferences = await PreferencesService(db).upsert(current_user, data)
    return PreferencesResponse.model_validate(preferences)


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    return PreferencesResponse.model_validate(await PreferencesService(db).get(current_user.id))


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    data: PreferencesUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    """Partial update; 404 if the caller has no preferences yet."""
    preferences = await PreferencesService(db).update(current_user.id, data)
    return PreferencesResponse.model_validate(preferences)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_preferences(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    await PreferencesService(db).delete(current_user.id)
