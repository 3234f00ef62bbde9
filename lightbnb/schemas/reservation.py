"""
Pydantic schemas for reservation responses.
"""

from pydantic import ConfigDict
from datetime import date
from lightbnb.schemas.property import PropertyBase


class ReservationResponse(PropertyBase):
    """A reservations row joined with the columns of its property."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    start_date: date
    end_date: date
    property_id: int
    guest_id: int
