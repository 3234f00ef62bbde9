"""
Pydantic schemas for input validation and result rows.
"""

# User schemas
from .user import (
    UserBase,
    UserCreate,
    UserResponse
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyResponse,
    PropertySearchOptions,
    to_minor_units
)

# Reservation schemas
from .reservation import ReservationResponse

__all__ = [
    # User
    "UserBase",
    "UserCreate",
    "UserResponse",

    # Property
    "PropertyBase",
    "PropertyCreate",
    "PropertyResponse",
    "PropertySearchOptions",
    "to_minor_units",

    # Reservation
    "ReservationResponse"
]
