"""User account service."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Conflict, NotFound, PermissionDenied
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Registration, profile edits and admin account management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: UserCreate) -> User:
        """Register a tenant or operator account. Admins are only made by a role change."""
        if data.role == UserRole.ADMIN:
            raise PermissionDenied("Admin accounts cannot be registered")

        user = User(**data.model_dump())
        user.email = user.email.lower()
        self.db.add(user)
        await self._commit_unique_email(user.email)
        await self.db.refresh(user)
        logger.info(f"[USERS] Registered {user.id} as {user.role.value}")
        return user

    async def get(self, user_id: UUID) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    async def list_all(
        self,
        role: Optional[UserRole] = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[User], int]:
        query = select(User)
        if role:
            query = query.where(User.role == role)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery())) or 0
        result = await self.db.execute(
            query.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit)
        )
        return list(result.scalars().all()), total

    async def update(self, user: User, data: UserUpdate) -> User:
        values = data.model_dump(exclude_unset=True)
        if values.get("email"):
            values["email"] = values["email"].lower()
        elif "email" in values:
            values.pop("email")

        for field, value in values.items():
            setattr(user, field, value)

        await self._commit_unique_email(user.email)
        await self.db.refresh(user)
        return user

    async def set_role(self, user_id: UUID, role: UserRole) -> User:
        user = await self.get(user_id)
        previous = user.role
        user.role = role
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"[USERS] Role of {user.id} changed {previous.value} -> {role.value}")
        return user

    async def delete(self, user_id: UUID) -> None:
        """Delete an account; preferences, CV, booking requests and shortlist cascade."""
        user = await self.get(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"[USERS] Deleted {user_id}")

    async def _commit_unique_email(self, email: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict(f"An account with email {email} already exists")
