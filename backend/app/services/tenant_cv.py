"""Tenant CV service: storage, sharing and response assembly."""

import logging
import uuid
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound
from app.models.preferences import Preferences
from app.models.tenant_cv import TenantCv
from app.models.user import User
from app.schemas.tenant_cv import (
    TenantCvMeta,
    TenantCvPreferencesSnapshot,
    TenantCvProfile,
    TenantCvResponse,
    TenantCvUpdate,
)
from app.services.payloads import column_values

logger = logging.getLogger(__name__)

JSON_FIELDS = {"hobbies", "rent_history"}
# CV verification statuses are mirrored onto preferences
MIRRORED_FIELDS = ("kyc_status", "referencing_status")


def split_name(full_name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """'Ada Byron King' -> ('Ada', 'Byron King')."""
    parts = (full_name or "").split()
    if not parts:
        return None, None
    return parts[0], " ".join(parts[1:]) or None


def age_in_years(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if not date_of_birth:
        return None
    today = today or date.today()
    had_birthday = (today.month, today.day) >= (date_of_birth.month, date_of_birth.day)
    return today.year - date_of_birth.year - (0 if had_birthday else 1)


def describe_pets(pets: list[dict]) -> Optional[str]:
    """[{'type': 'dog', 'size': 'small'}, {'type': 'cat'}] -> 'dog (small), cat'."""
    if not pets:
        return None
    return ", ".join(
        f"{pet.get('type')} ({pet['size']})" if pet.get("size") else str(pet.get("type"))
        for pet in pets
    )


def build_cv_response(
    user: User,
    cv: Optional[TenantCv],
    preferences: Optional[Preferences],
) -> TenantCvResponse:
    """Assemble the CV view from the account, the CV row and the preferences row."""
    first_name, last_name = split_name(user.full_name)

    profile = TenantCvProfile(
        first_name=first_name,
        last_name=last_name,
        full_name=" ".join(p for p in (first_name, last_name) if p) or None,
        avatar_url=user.avatar_url,
        email=user.email,
        phone=user.phone,
        age_years=age_in_years(user.date_of_birth),
        nationality=user.nationality,
        occupation=user.occupation or (preferences.occupation if preferences else None),
        address=user.address,
    )

    # Verification status: preferences first, CV as fallback
    meta = TenantCvMeta(
        headline=cv.headline if cv else None,
        kyc_status=(preferences.kyc_status if preferences else None) or (cv.kyc_status if cv else None),
        referencing_status=(
            (preferences.referencing_status if preferences else None)
            or (cv.referencing_status if cv else None)
        ),
        move_in_date=preferences.move_in_date if preferences else None,
        move_out_date=preferences.move_out_date if preferences else None,
        created_at=user.created_at,
        smoker=preferences.smoker if preferences else None,
        pets=describe_pets(preferences.pets) if preferences else None,
        tenant_type_labels=list(preferences.tenant_types or []) if preferences else [],
    )

    snapshot = (
        TenantCvPreferencesSnapshot.model_validate(preferences, from_attributes=True)
        if preferences
        else None
    )

    about = (cv.about_me if cv else None) or (preferences.additional_info if preferences else None)
    hobbies = (cv.hobbies if cv else None) or (preferences.hobbies if preferences else None) or []

    return TenantCvResponse(
        user_id=user.id,
        share_uuid=cv.share_uuid if cv else None,
        profile=profile,
        meta=meta,
        preferences=snapshot,
        amenities=list(preferences.amenities or []) if preferences else [],
        about=about,
        hobbies=hobbies,
        rent_history=cv.rent_history if cv else [],
    )


class TenantCvService:
    """Read, edit and share tenant CVs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, user_id: UUID) -> Optional[TenantCv]:
        result = await self.db.execute(select(TenantCv).where(TenantCv.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_for_user(self, user: User) -> TenantCvResponse:
        cv = await self.find(user.id)
        return await self._respond(user, cv)

    async def update_for_user(self, user: User, data: TenantCvUpdate) -> TenantCvResponse:
        """Partial update; the CV row is created on first write."""
        cv = await self.find(user.id)
        if cv is None:
            cv = TenantCv(user_id=user.id)
            self.db.add(cv)

        values = column_values(data, JSON_FIELDS, JSON_FIELDS, set())
        for field, value in values.items():
            setattr(cv, field, value)

        mirrored = {name: values[name] for name in MIRRORED_FIELDS if name in values}
        if mirrored:
            preferences = await self._find_preferences(user.id)
            if preferences:
                for field, value in mirrored.items():
                    setattr(preferences, field, value)

        await self.db.commit()
        await self.db.refresh(cv)
        logger.info(f"[TENANT_CV] Updated CV for user {user.id}: {sorted(values)}")
        return await self._respond(user, cv)

    async def ensure_share_uuid(self, user: User) -> UUID:
        """Return the CV's public share id, creating the CV and/or the id if needed."""
        cv = await self.find(user.id)
        if cv is None:
            cv = TenantCv(user_id=user.id)
            self.db.add(cv)
        if cv.share_uuid:
            return cv.share_uuid

        cv.share_uuid = uuid.uuid4()
        try:
            await self.db.commit()
        except IntegrityError:
            # Two share requests raced: keep whichever id was stored first
            await self.db.rollback()
            cv = await self.find(user.id)
            if cv is None or cv.share_uuid is None:
                raise
            return cv.share_uuid

        logger.info(f"[TENANT_CV] Share link created for user {user.id}")
        return cv.share_uuid

    async def get_by_share_uuid(self, share_uuid: UUID) -> TenantCvResponse:
        """Public view of a shared CV."""
        result = await self.db.execute(select(TenantCv).where(TenantCv.share_uuid == share_uuid))
        cv = result.scalar_one_or_none()
        if not cv:
            raise NotFound("Tenant CV not found")

        user = await self.db.get(User, cv.user_id)
        if not user:
            raise NotFound("Tenant CV not found")
        return await self._respond(user, cv)

    async def _find_preferences(self, user_id: UUID) -> Optional[Preferences]:
        result = await self.db.execute(
            select(Preferences).where(Preferences.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _respond(self, user: User, cv: Optional[TenantCv]) -> TenantCvResponse:
        preferences = await self._find_preferences(user.id)
        return build_cv_response(user, cv, preferences)
