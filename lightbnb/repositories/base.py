"""
Base repository class with common operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, func
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.database import Base
from lightbnb.utils.exceptions import from_database_error
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common operations.
    Every statement runs on the injected session; SQLAlchemy errors are logged
    and re-raised as QueryExecutionError with the original error chained.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert one row and return it as stored, via INSERT ... RETURNING.

        Args:
            obj_in: Column values keyed by column name

        Returns:
            Created model instance

        Raises:
            ConflictError: If a store constraint rejects the row
            QueryExecutionError: If the statement fails for any other reason
        """
        try:
            stmt = insert(self.model).values(obj_in).returning(self.model)
            result = await self.db.execute(stmt)
            db_obj = result.scalar_one()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise from_database_error(e, f"create {self.model.__name__}") from e

        # The row is committed from here on; sessions that expire on commit
        # need the attributes reloaded before they can be read
        try:
            await self.db.refresh(db_obj)
        except SQLAlchemyError as e:
            logger.error(f"Created {self.model.__name__} but failed to reload it: {e}")
            raise from_database_error(e, f"reload created {self.model.__name__}") from e

        logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
        return db_obj

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: Primary key of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        return await self.get_by_field("id", id)

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get the first record whose ``field`` equals ``value``.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            Model instance if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        try:
            query = select(self.model).where(getattr(self.model, field) == value).limit(1)
            result = await self.db.execute(query)
            obj = result.scalars().first()

            if obj:
                logger.debug(f"Retrieved {self.model.__name__} by {field}: {value}")
            else:
                logger.debug(f"{self.model.__name__} with {field}={value} not found")

            return obj
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise from_database_error(e, f"get {self.model.__name__} by {field}") from e

    async def count(self) -> int:
        """Count all records of this model."""
        try:
            result = await self.db.execute(select(func.count(self.model.id)))
            return result.scalar()
        except SQLAlchemyError as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise from_database_error(e, f"count {self.model.__name__}") from e
