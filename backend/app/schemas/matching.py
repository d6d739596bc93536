"""Matching schemas."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.property import PropertyResponse


class CategoryWeights(BaseModel):
    """Points each category contributes to a perfect match (defaults sum to 100)."""

    budget: int = Field(20, ge=0)
    availability: int = Field(10, ge=0)
    deposit: int = Field(5, ge=0)
    property_type: int = Field(8, ge=0)
    bedrooms: int = Field(10, ge=0)
    bathrooms: int = Field(5, ge=0)
    building_style: int = Field(5, ge=0)
    duration: int = Field(5, ge=0)
    square_meters: int = Field(5, ge=0)
    bills: int = Field(5, ge=0)
    tenant_type: int = Field(5, ge=0)
    pets: int = Field(5, ge=0)
    amenities: int = Field(5, ge=0)
    outdoor_space: int = Field(4, ge=0)
    furnishing: int = Field(2, ge=0)
    location: int = Field(1, ge=0)


class CategoryMatchResult(BaseModel):
    """Score of one category for one property."""

    category: str
    match: bool
    score: int
    max_score: int
    reason: str
    details: Optional[str] = None
    has_preference: bool


class MatchSummary(BaseModel):
    matched: int = 0
    partial: int = 0
    not_matched: int = 0
    skipped: int = 0


class MatchBreakdown(BaseModel):
    """Totals and per-category results of matching one property."""

    total_score: int
    max_possible_score: int
    match_percentage: int
    is_perfect_match: bool
    categories: list[CategoryMatchResult]
    summary: MatchSummary


class PropertyMatchResult(MatchBreakdown):
    property: PropertyResponse


class PreferencesSummary(BaseModel):
    id: UUID
    summary: str


class MatchingResponse(BaseModel):
    results: list[PropertyMatchResult]
    total: int
    preferences: Optional[PreferencesSummary] = None
    applied_weights: CategoryWeights


class TopMatch(BaseModel):
    """Simplified match for property cards."""

    property: PropertyResponse
    match_score: int
    match_categories: list[str] = []
