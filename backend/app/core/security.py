"""Caller identity and role guards.

Token verification happens upstream (API gateway / auth proxy); by the time a
request reaches this service the caller's account id travels in the
``X-User-Id`` header. These dependencies resolve it to a ``User`` row and
enforce roles.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.enums import UserRole
from app.models.user import User

USER_ID_HEADER = "X-User-Id"


class CurrentUser:
    """The authenticated caller."""

    def __init__(self, user: User):
        self.user = user
        self.id: UUID = user.id
        self.email: str = user.email
        self.role: UserRole = user.role

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_operator(self) -> bool:
        return self.role == UserRole.OPERATOR

    @property
    def is_tenant(self) -> bool:
        return self.role == UserRole.TENANT


async def get_current_user(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Resolve the caller from the identity header."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identity",
        )

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )

    return CurrentUser(user)


def require_tenant(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require a tenant (admins pass every guard)."""
    if current_user.role not in (UserRole.TENANT, UserRole.ADMIN):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant account required",
        )
    return current_user


def require_operator(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require an operator or admin."""
    if current_user.role not in (UserRole.OPERATOR, UserRole.ADMIN):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Operator privileges required",
        )
    return current_user


def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require an admin."""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user
