"""Matching router."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.core.security import CurrentUser, require_tenant
from app.schemas.matching import MatchingResponse, PropertyMatchResult, TopMatch
from app.services.matching import MatchingService

router = APIRouter(prefix="/matching", tags=["matching"])


@router.get("/matches", response_model=MatchingResponse)
async def get_matches(
    limit: Optional[int] = Query(None, ge=1, le=500),
    min_score: int = Query(0, ge=0, le=100),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: CurrentUser = Depends(require_tenant),
):
    """Every listing scored against the caller's preferences, best first."""
    return await MatchingService(db).get_matches_for_user(
        current_user.id,
        limit=limit or settings.matching_default_limit,
        min_score=min_score,
    )


@router.get("/top-matches", response_model=List[TopMatch])
async def get_top_matches(
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    """Simplified matches for property cards."""
    return await MatchingService(db).get_top_matches(current_user.id, limit=limit)


@router.get("/detailed-matches", response_model=MatchingResponse)
async def get_detailed_matches(
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    """Matches with the full per-category breakdown."""
    return await MatchingService(db).get_matches_for_user(current_user.id, limit=limit)


@router.get("/property/{property_id}", response_model=PropertyMatchResult)
async def get_property_match(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_tenant),
):
    return await MatchingService(db).get_property_match(property_id, current_user.id)


@router.get("/recommendations", response_model=MatchingResponse)
async def get_recommendations(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: CurrentUser = Depends(require_tenant),
):
    """High-quality matches only."""
    return await MatchingService(db).get_matches_for_user(
        current_user.id,
        limit=limit,
        min_score=settings.matching_recommendation_min_score,
    )
