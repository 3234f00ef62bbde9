"""
Repository layer for data access operations.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.property import PropertyRepository, INSERTABLE_COLUMNS
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "INSERTABLE_COLUMNS",
    "ReservationRepository",
    "UserRepository"
]
