"""API routers for the rental marketplace."""

from app.routers.users import router as users_router
from app.routers.buildings import router as buildings_router
from app.routers.properties import router as properties_router
from app.routers.booking_requests import router as booking_requests_router
from app.routers.preferences import router as preferences_router
from app.routers.matching import router as matching_router
from app.routers.tenant_cv import router as tenant_cv_router
from app.routers.shortlist import router as shortlist_router

__all__ = [
    "users_router",
    "buildings_router",
    "properties_router",
    "booking_requests_router",
    "preferences_router",
    "matching_router",
    "tenant_cv_router",
    "shortlist_router",
]
