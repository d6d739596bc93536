"""SQLAlchemy models for the rental marketplace."""

from app.models.user import User
from app.models.building import Building
from app.models.property import Property
from app.models.preferences import Preferences
from app.models.tenant_cv import TenantCv
from app.models.booking_request import BookingRequest
from app.models.shortlist import ShortlistEntry

__all__ = [
    "User",
    "Building",
    "Property",
    "Preferences",
    "TenantCv",
    "BookingRequest",
    "ShortlistEntry",
]
