"""Building service."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound, NullabilityViolation, ReferentialViolation
from app.models.building import Building
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.building import BuildingCreate, BuildingUpdate
from app.services.payloads import column_values

logger = logging.getLogger(__name__)

JSON_FIELDS = {
    "type_of_unit",
    "photos",
    "metro_stations",
    "commute_times",
    "local_essentials",
    "amenities",
    "concierge_hours",
    "pets",
    "tenant_types",
}
LIST_FIELDS = JSON_FIELDS - {"concierge_hours"}
BOOL_FIELDS = {"is_concierge", "pet_policy", "smoking_area"}


class BuildingService:
    """Admin management of buildings. Deleting a building removes its properties."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: BuildingCreate) -> Building:
        await self._ensure_operator(data.operator_id)

        values = column_values(data, JSON_FIELDS, LIST_FIELDS, BOOL_FIELDS)
        if not values.get("tenant_types"):
            values.pop("tenant_types", None)

        building = Building(**values)
        self.db.add(building)
        await self.db.commit()
        await self.db.refresh(building)
        logger.info(f"[BUILDING] Created {building.id} for operator {building.operator_id}")
        return building

    async def get(self, building_id: UUID) -> Building:
        building = await self.db.get(Building, building_id)
        if not building:
            raise NotFound("Building not found")
        return building

    async def list_all(self, operator_id: Optional[UUID] = None) -> list[Building]:
        query = select(Building)
        if operator_id:
            query = query.where(Building.operator_id == operator_id)
        result = await self.db.execute(query.order_by(Building.created_at.desc()))
        return list(result.scalars().all())

    async def list_operators(self) -> list[User]:
        """Accounts that can own buildings."""
        result = await self.db.execute(
            select(User)
            .where(User.role.in_([UserRole.OPERATOR, UserRole.ADMIN]))
            .order_by(User.full_name, User.email)
        )
        return list(result.scalars().all())

    async def update(self, building_id: UUID, data: BuildingUpdate) -> Building:
        building = await self.get(building_id)

        values = column_values(data, JSON_FIELDS, LIST_FIELDS, BOOL_FIELDS)
        if "name" in values and not values["name"]:
            raise NullabilityViolation("name cannot be empty")
        if values.get("operator_id"):
            await self._ensure_operator(values["operator_id"])

        for field, value in values.items():
            setattr(building, field, value)

        await self.db.commit()
        await self.db.refresh(building)
        logger.info(f"[BUILDING] Updated {building.id}: {sorted(values)}")
        return building

    async def delete(self, building_id: UUID) -> None:
        building = await self.get(building_id)
        await self.db.delete(building)
        await self.db.commit()
        logger.info(f"[BUILDING] Deleted {building_id} (properties cascade)")

    async def _ensure_operator(self, operator_id: UUID) -> None:
        role = await self.db.scalar(select(User.role).where(User.id == operator_id))
        if role is None or role == UserRole.TENANT:
            raise ReferentialViolation("Operator not found")
