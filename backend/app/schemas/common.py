"""Structured list items stored in JSON columns.

Buildings, properties and preferences keep location context, concierge hours
and pets as JSON. These schemas validate the items on the way in; services
store ``model_dump(by_alias=True)`` so the column contents stay plain JSON.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.enums import PetSize, PetType


class LabeledDistance(BaseModel):
    """A named place and how far it is (minutes or meters, depending on the list)."""

    label: str = Field(..., min_length=1, max_length=255)
    destination: float = Field(..., ge=0)


class ConciergeHours(BaseModel):
    """Daily concierge window, hours 0-23."""

    model_config = ConfigDict(populate_by_name=True)

    from_: int = Field(..., alias="from", ge=0, le=23)
    to: int = Field(..., ge=0, le=23)


class Pet(BaseModel):
    type: PetType
    custom_type: Optional[str] = Field(None, max_length=100)
    size: Optional[PetSize] = None

    @model_validator(mode="after")
    def validate_custom_type(self):
        """custom_type only describes pets of type 'other'."""
        if self.custom_type and self.type != PetType.OTHER:
            raise ValueError("custom_type is only allowed when type is 'other'")
        return self
