"""Pydantic schemas for the rental marketplace API."""

from app.schemas.base import *
from app.schemas.common import *
from app.schemas.user import *
from app.schemas.building import *
from app.schemas.property import *
from app.schemas.booking_request import *
from app.schemas.preferences import *
from app.schemas.tenant_cv import *
from app.schemas.matching import *
from app.schemas.shortlist import *
