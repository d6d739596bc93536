"""Shortlist service."""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFound
from app.models.property import Property
from app.models.shortlist import ShortlistEntry

logger = logging.getLogger(__name__)


class ShortlistService:
    """A tenant's saved properties. Adding and removing are idempotent."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, user_id: UUID, property_id: UUID) -> None:
        if await self.db.get(Property, property_id) is None:
            raise NotFound("Property not found")
        if await self.contains(user_id, property_id):
            return

        self.db.add(ShortlistEntry(user_id=user_id, property_id=property_id))
        try:
            await self.db.commit()
        except IntegrityError:
            # Already added by a concurrent request
            await self.db.rollback()
            return
        logger.info(f"[SHORTLIST] User {user_id} saved property {property_id}")

    async def remove(self, user_id: UUID, property_id: UUID) -> None:
        await self.db.execute(
            delete(ShortlistEntry).where(
                ShortlistEntry.user_id == user_id,
                ShortlistEntry.property_id == property_id,
            )
        )
        await self.db.commit()

    async def contains(self, user_id: UUID, property_id: UUID) -> bool:
        entry_id = await self.db.scalar(
            select(ShortlistEntry.id).where(
                ShortlistEntry.user_id == user_id,
                ShortlistEntry.property_id == property_id,
            )
        )
        return entry_id is not None

    async def count(self, user_id: UUID) -> int:
        return await self.db.scalar(
            select(func.count(ShortlistEntry.id)).where(ShortlistEntry.user_id == user_id)
        ) or 0

    async def list_properties(self, user_id: UUID) -> list[Property]:
        """Shortlisted properties, most recently saved first."""
        result = await self.db.execute(
            select(Property)
            .join(ShortlistEntry, ShortlistEntry.property_id == Property.id)
            .where(ShortlistEntry.user_id == user_id)
            .options(selectinload(Property.building))
            .order_by(ShortlistEntry.created_at.desc())
        )
        return list(result.scalars().all())
