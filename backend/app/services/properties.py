"""Property listing service."""

import logging
import math
from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    NotFound,
    NullabilityViolation,
    PermissionDenied,
    ReferentialViolation,
)
from app.core.security import CurrentUser
from app.models.building import Building
from app.models.enums import UserRole
from app.models.property import Property
from app.models.user import User
from app.schemas.base import Page
from app.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from app.services.payloads import column_values

logger = logging.getLogger(__name__)

# A listing missing any of these is stored but flagged incomplete
REQUIRED_LISTING_FIELDS = (
    "price",
    "bedrooms",
    "bathrooms",
    "property_type",
    "furnishing",
    "available_from",
)

# Copied from the building onto a new property unless supplied explicitly
INHERITED_FIELDS = (
    "address",
    "building_type",
    "tenant_types",
    "amenities",
    "is_concierge",
    "concierge_hours",
    "pet_policy",
    "pets",
    "smoking_area",
    "metro_stations",
    "commute_times",
    "local_essentials",
)

JSON_FIELDS = {
    "photos",
    "lifestyle_features",
    "tenant_types",
    "amenities",
    "concierge_hours",
    "pets",
    "metro_stations",
    "commute_times",
    "local_essentials",
}
LIST_FIELDS = JSON_FIELDS - {"concierge_hours"}
BOOL_FIELDS = {
    "outdoor_space",
    "balcony",
    "terrace",
    "luxury",
    "is_concierge",
    "pet_policy",
    "smoking_area",
}

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def missing_fields(prop: Property) -> list[str]:
    return [name for name in REQUIRED_LISTING_FIELDS if getattr(prop, name) is None]


def to_response(prop: Property) -> PropertyResponse:
    """Build the response; ``prop.building`` must already be loaded."""
    missing = missing_fields(prop)
    response = PropertyResponse.model_validate(prop)
    return response.model_copy(
        update={
            "building_name": prop.building.name if prop.building else None,
            "is_complete": not missing,
            "missing_fields": missing,
        }
    )


class PropertyService:
    """Create, read, update and delete listings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, property_id: UUID) -> Property:
        result = await self.db.execute(
            select(Property)
            .options(selectinload(Property.building))
            .where(Property.id == property_id)
            .execution_options(populate_existing=True)
        )
        prop = result.scalar_one_or_none()
        if not prop:
            raise NotFound("Property not found")
        return prop

    async def create(self, data: PropertyCreate, current_user: CurrentUser) -> Property:
        """Create a listing.

        With a building, the operator and any building context not supplied
        are taken from the building. Without one (private landlord), the
        operator is the caller, or the given ``operator_id`` / nobody for admins.
        """
        if not data.title:
            raise NullabilityViolation("title is required")

        values = column_values(data, JSON_FIELDS, LIST_FIELDS, BOOL_FIELDS)
        values.pop("operator_id", None)

        if data.building_id:
            building = await self._get_building(data.building_id)
            self._check_building_access(building, current_user)
            values["operator_id"] = building.operator_id
            for name in INHERITED_FIELDS:
                if name not in values:
                    values[name] = getattr(building, name)
        elif current_user.is_admin:
            if data.operator_id:
                await self._ensure_operator(data.operator_id)
            values["operator_id"] = data.operator_id
        else:
            values["operator_id"] = current_user.id

        prop = Property(**values)
        self.db.add(prop)
        await self.db.commit()

        logger.info(
            f"[PROPERTY] Created {prop.id} building={prop.building_id} operator={prop.operator_id}"
        )
        return await self.get(prop.id)

    async def list_for_operator(
        self,
        current_user: CurrentUser,
        building_id: Optional[UUID] = None,
        operator_id: Optional[UUID] = None,
    ) -> list[Property]:
        """Listings visible to an operator (their own) or admin (all)."""
        query = select(Property).options(selectinload(Property.building))
        if not current_user.is_admin:
            query = query.where(Property.operator_id == current_user.id)
        elif operator_id:
            query = query.where(Property.operator_id == operator_id)
        if building_id:
            query = query.where(Property.building_id == building_id)

        result = await self.db.execute(query.order_by(Property.created_at.desc()))
        return list(result.scalars().all())

    async def list_public(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
        complete_only: bool = False,
    ) -> Page[PropertyResponse]:
        """Paginated public listing with free-text search."""
        page = page if page >= 1 else 1
        limit = limit if 1 <= limit <= MAX_PAGE_SIZE else DEFAULT_PAGE_SIZE

        query = select(Property).outerjoin(Building, Property.building_id == Building.id)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Property.title.ilike(pattern),
                    Property.apartment_number.ilike(pattern),
                    Property.descriptions.ilike(pattern),
                    Property.address.ilike(pattern),
                    Building.name.ilike(pattern),
                    Building.address.ilike(pattern),
                )
            )
        if complete_only:
            query = query.where(
                *(getattr(Property, name).is_not(None) for name in REQUIRED_LISTING_FIELDS)
            )

        total = await self.db.scalar(select(func.count()).select_from(query.subquery())) or 0

        result = await self.db.execute(
            query.options(selectinload(Property.building))
            .order_by(Property.created_at.desc(), Property.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return Page[PropertyResponse](
            data=[to_response(p) for p in result.scalars().all()],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    async def update(
        self, property_id: UUID, data: PropertyUpdate, current_user: CurrentUser
    ) -> Property:
        prop = await self.get(property_id)
        self._check_property_access(prop, current_user)

        values = column_values(data, JSON_FIELDS, LIST_FIELDS, BOOL_FIELDS)
        if "title" in values and not values["title"]:
            raise NullabilityViolation("title cannot be empty")

        if values.get("building_id") and values["building_id"] != prop.building_id:
            building = await self._get_building(values["building_id"])
            self._check_building_access(building, current_user)
            values["operator_id"] = building.operator_id

        for field, value in values.items():
            setattr(prop, field, value)

        await self.db.commit()
        logger.info(f"[PROPERTY] Updated {prop.id}: {sorted(values)}")
        return await self.get(property_id)

    async def delete(self, property_id: UUID, current_user: CurrentUser) -> None:
        prop = await self.get(property_id)
        self._check_property_access(prop, current_user)
        await self.db.delete(prop)
        await self.db.commit()
        logger.info(f"[PROPERTY] Deleted {property_id}")

    async def _get_building(self, building_id: UUID) -> Building:
        building = await self.db.get(Building, building_id)
        if not building:
            raise ReferentialViolation("Building not found")
        return building

    async def _ensure_operator(self, operator_id: UUID) -> None:
        role = await self.db.scalar(select(User.role).where(User.id == operator_id))
        if role is None or role == UserRole.TENANT:
            raise ReferentialViolation("Operator not found")

    @staticmethod
    def _check_building_access(building: Building, current_user: CurrentUser) -> None:
        if not current_user.is_admin and building.operator_id != current_user.id:
            raise PermissionDenied("Building belongs to another operator")

    @staticmethod
    def _check_property_access(prop: Property, current_user: CurrentUser) -> None:
        if not current_user.is_admin and prop.operator_id != current_user.id:
            raise PermissionDenied("Property belongs to another operator")
