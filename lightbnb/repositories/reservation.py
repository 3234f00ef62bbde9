"""
Reservation repository. Reservations are read together with their property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from lightbnb.utils.exceptions import from_database_error
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for the reservations table."""

    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)

    async def get_for_guest(self, guest_id: int, limit: int) -> List[Tuple[Reservation, Property]]:
        """
        Get a guest's reservations, each paired with the reserved property.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of rows to return

        Returns:
            List of (reservation, property) pairs
        """
        try:
            query = (
                select(Reservation, Property)
                .join(Property, Reservation.property_id == Property.id)
                .where(Reservation.guest_id == guest_id)
                .limit(limit)
            )
            logger.debug(f"Reservation query: {query}")

            result = await self.db.execute(query)
            rows = [(row.Reservation, row.Property) for row in result.all()]

            logger.debug(f"Retrieved {len(rows)} reservations for guest {guest_id}")
            return rows
        except SQLAlchemyError as e:
            logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
            raise from_database_error(e, "get reservations") from e
