"""Tenant preferences service."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidInput, NotFound, PermissionDenied
from app.core.security import CurrentUser
from app.models.enums import UserRole
from app.models.preferences import Preferences
from app.schemas.preferences import PreferencesFields
from app.services.payloads import column_values

logger = logging.getLogger(__name__)

LIST_FIELDS = {
    "preferred_areas",
    "preferred_districts",
    "preferred_metro_stations",
    "property_types",
    "bedrooms",
    "bathrooms",
    "furnishing",
    "building_types",
    "tenant_types",
    "pets",
    "amenities",
    "hobbies",
    "ideal_living_environment",
    "lifestyle_features",
}
JSON_FIELDS = LIST_FIELDS | {"deposit_preference"}
BOOL_FIELDS = {
    "outdoor_space",
    "balcony",
    "terrace",
    "pet_policy",
    "is_concierge",
    "smoking_area",
}

RANGE_PAIRS = (
    ("min_price", "max_price"),
    ("min_square_meters", "max_square_meters"),
    ("min_bedrooms", "max_bedrooms"),
    ("min_bathrooms", "max_bathrooms"),
    ("move_in_date", "move_out_date"),
)


def check_ranges(preferences: Preferences) -> None:
    """Validate bounds on the merged row (a partial update may touch one side only)."""
    for low_name, high_name in RANGE_PAIRS:
        low, high = getattr(preferences, low_name), getattr(preferences, high_name)
        if low is not None and high is not None and low > high:
            raise InvalidInput(f"{low_name} must not be greater than {high_name}")


class PreferencesService:
    """One preferences row per tenant."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, user_id: UUID) -> Optional[Preferences]:
        result = await self.db.execute(
            select(Preferences).where(Preferences.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get(self, user_id: UUID) -> Preferences:
        preferences = await self.find(user_id)
        if not preferences:
            raise NotFound("Preferences not found")
        return preferences

    async def upsert(self, current_user: CurrentUser, data: PreferencesFields) -> Preferences:
        """Create the caller's preferences, or update them in place if they exist."""
        if current_user.role == UserRole.OPERATOR:
            raise PermissionDenied("Operators cannot have tenant preferences")

        preferences = await self.find(current_user.id)
        created = preferences is None
        if created:
            preferences = Preferences(user_id=current_user.id)
            self.db.add(preferences)

        self._apply(preferences, data)
        check_ranges(preferences)

        await self.db.commit()
        await self.db.refresh(preferences)
        logger.info(
            f"[PREFERENCES] {'Created' if created else 'Updated'} preferences for user {current_user.id}"
        )
        return preferences

    async def update(self, user_id: UUID, data: PreferencesFields) -> Preferences:
        preferences = await self.get(user_id)
        self._apply(preferences, data)
        check_ranges(preferences)

        await self.db.commit()
        await self.db.refresh(preferences)
        logger.info(f"[PREFERENCES] Updated preferences for user {user_id}")
        return preferences

    async def delete(self, user_id: UUID) -> None:
        preferences = await self.get(user_id)
        await self.db.delete(preferences)
        await self.db.commit()
        logger.info(f"[PREFERENCES] Deleted preferences for user {user_id}")

    @staticmethod
    def _apply(preferences: Preferences, data: PreferencesFields) -> None:
        values = column_values(data, JSON_FIELDS, LIST_FIELDS, BOOL_FIELDS)
        for field, value in values.items():
            setattr(preferences, field, value)
