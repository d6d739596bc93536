"""Enumeration types for the rental marketplace domain model."""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user account."""
    TENANT = "tenant"
    OPERATOR = "operator"
    ADMIN = "admin"


class BookingRequestStatus(str, Enum):
    """Lifecycle stage of a booking request.

    The member values are the literal tokens stored in the
    ``booking_requests_status_enum`` database type.
    """
    NEW = "new"
    CONTACTING = "contacting"
    KYC_REFERENCING = "kyc_referencing"
    APPROVED_VIEWING = "approved_viewing"
    VIEWING = "viewing"
    CONTRACT = "contract"
    DEPOSIT = "deposit"
    FULL_PAYMENT = "full_payment"
    MOVE_IN = "move_in"
    RENTED = "rented"
    CANCEL_BOOKING = "cancel_booking"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingRequestStatus.RENTED, BookingRequestStatus.CANCEL_BOOKING)


class TenantType(str, Enum):
    """Tenant categories a building accepts."""
    CORPORATE_LETS = "corporateLets"
    SHARERS = "sharers"
    STUDENT = "student"
    FAMILY = "family"
    ELDER = "elder"


class UnitType(str, Enum):
    """Unit layouts offered by a building."""
    STUDIO = "studio"
    ONE_BED = "1-bed"
    TWO_BED = "2-bed"
    THREE_BED = "3-bed"
    DUPLEX = "Duplex"
    PENTHOUSE = "penthouse"


class PetType(str, Enum):
    DOG = "dog"
    CAT = "cat"
    OTHER = "other"


class PetSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class DepositPreference(str, Enum):
    YES = "yes"
    NO = "no"
