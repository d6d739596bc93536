"""Services for the rental marketplace."""

from app.services.users import UserService
from app.services.buildings import BuildingService
from app.services.properties import PropertyService
from app.services.booking_requests import BookingRequestService
from app.services.preferences import PreferencesService
from app.services.tenant_cv import TenantCvService
from app.services.shortlist import ShortlistService
from app.services.matching import MatchingCalculator, MatchingService

__all__ = [
    "UserService",
    "BuildingService",
    "PropertyService",
    "BookingRequestService",
    "PreferencesService",
    "TenantCvService",
    "ShortlistService",
    "MatchingCalculator",
    "MatchingService",
]
