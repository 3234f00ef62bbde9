"""
Property repository for listing search and property inserts.
Search results carry the average review rating of each property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, Float
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertySearchOptions
from lightbnb.utils.exceptions import from_database_error
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)

# Columns written by an insert, in statement order. Column list and value list
# are both generated from this tuple.
INSERTABLE_COLUMNS = (
    Property.owner_id,
    Property.title,
    Property.description,
    Property.thumbnail_photo_url,
    Property.cover_photo_url,
    Property.cost_per_night,
    Property.street,
    Property.city,
    Property.province,
    Property.post_code,
    Property.country,
    Property.parking_spaces,
    Property.number_of_bathrooms,
    Property.number_of_bedrooms,
)

PropertyWithRating = Tuple[Property, Optional[float]]


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property management with filtered search.
    Every search groups by property and joins the reviews for the average rating.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
        self._average_rating = func.avg(PropertyReview.rating, type_=Float)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Insert a property. Every insertable column gets a value; absent fields
        are written as NULL.

        Args:
            property_data: Property fields keyed by column name

        Returns:
            Created property instance
        """
        values = {
            column.key: property_data.get(column.key)
            for column in INSERTABLE_COLUMNS
        }
        created_property = await self.create(values)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def get_with_rating(self, property_id: int) -> Optional[PropertyWithRating]:
        """
        Get one property with its average rating.

        Args:
            property_id: ID of the property

        Returns:
            (property, average_rating) or None if not found
        """
        try:
            query = self._rated_query().where(Property.id == property_id)
            result = await self.db.execute(query)
            row = result.first()

            if row is None:
                logger.debug(f"Property with id {property_id} not found")
                return None

            return row.Property, row.average_rating
        except SQLAlchemyError as e:
            logger.error(f"Failed to get property {property_id}: {e}")
            raise from_database_error(e, "get property") from e

    async def search_properties(
        self,
        options: PropertySearchOptions,
        limit: int
    ) -> List[PropertyWithRating]:
        """
        Search properties with optional filters, cheapest first.

        Args:
            options: Search filters; unset filters are skipped
            limit: Maximum number of rows to return

        Returns:
            List of (property, average_rating) pairs ordered by cost_per_night
        """
        try:
            query = self._rated_query()

            conditions = self._build_filter_conditions(options)
            if conditions:
                query = query.where(and_(*conditions))

            # Rating filters apply to the per-property average, not single reviews
            if options.minimum_rating is not None:
                query = query.having(self._average_rating >= options.minimum_rating)

            query = query.order_by(Property.cost_per_night, Property.id).limit(limit)
            logger.debug(f"Property search query: {query}")

            result = await self.db.execute(query)
            rows = [(row.Property, row.average_rating) for row in result.all()]

            logger.debug(f"Property search returned {len(rows)} results")
            return rows
        except SQLAlchemyError as e:
            logger.error(f"Failed to search properties: {e}")
            raise from_database_error(e, "search properties") from e

    def _rated_query(self):
        """Properties outer-joined with their reviews, one row per property."""
        return (
            select(Property, self._average_rating.label("average_rating"))
            .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
            .group_by(Property.id)
        )

    def _build_filter_conditions(self, options: PropertySearchOptions) -> List:
        """
        Build SQLAlchemy filter conditions from search options.

        Args:
            options: PropertySearchOptions instance

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = []

        # City filter (substring match)
        if options.city:
            conditions.append(Property.city.like(f"%{options.city}%"))

        if options.owner_id is not None:
            conditions.append(Property.owner_id == options.owner_id)

        # Price range filters, converted to cents
        if options.minimum_cost_per_night is not None:
            conditions.append(Property.cost_per_night >= options.minimum_cost_per_night)
        if options.maximum_cost_per_night is not None:
            conditions.append(Property.cost_per_night <= options.maximum_cost_per_night)

        return conditions
