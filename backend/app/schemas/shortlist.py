"""Shortlist schemas."""

from uuid import UUID

from pydantic import BaseModel


class ShortlistStatus(BaseModel):
    property_id: UUID
    is_shortlisted: bool


class ShortlistCount(BaseModel):
    count: int
