"""
Database models for the LightBnB store.
"""

from .user import User
from .property import Property
from .reservation import Reservation
from .review import PropertyReview

__all__ = ["User", "Property", "Reservation", "PropertyReview"]
