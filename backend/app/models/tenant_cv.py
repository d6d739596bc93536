"""Tenant CV model."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, utcnow
from app.models.types import JSONType


class TenantCv(Base):
    """A tenant's rental CV, shareable with landlords through ``share_uuid``."""

    __tablename__ = "tenant_cvs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    # Public link id; null until the tenant shares the CV
    share_uuid: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        unique=True,
        nullable=True,
    )

    headline: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    about_me: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    hobbies: Mapped[list] = mapped_column(JSONType, default=list)
    rent_history: Mapped[list] = mapped_column(JSONType, default=list)
    kyc_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    referencing_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
