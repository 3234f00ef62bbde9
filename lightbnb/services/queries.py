"""
Query service: the public data-access API for the LightBnB web application.

Each operation validates its plain-data input, issues one statement through a
repository and returns pydantic rows. Lookups that match nothing return
``None`` or an empty list. Invalid input raises ``ValidationError`` before any
SQL is built, and store failures raise ``QueryExecutionError`` (or its
``ConflictError`` subclass) with the driver error attached.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.config import settings
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.schemas.user import UserCreate, UserResponse
from lightbnb.schemas.property import PropertyCreate, PropertyResponse, PropertySearchOptions
from lightbnb.schemas.reservation import ReservationResponse
from lightbnb.services.error_handler import ErrorHandlerService
from lightbnb.utils.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)

# Largest value an integer serial key can hold
MAX_ID = 2**31 - 1


class QueryService:
    """
    Facade over the users, reservations and properties repositories.
    One instance wraps one session; it keeps no state of its own.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.reservation_repo = ReservationRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    # Users

    async def get_user_with_email(self, email: str) -> Optional[UserResponse]:
        """
        Get a single user given their email.

        Args:
            email: Email of the user, matched exactly

        Returns:
            The user, or None if no user has that email
        """
        if not isinstance(email, str) or not email:
            raise ValidationError("Email must be a non-empty string")

        user = await self.user_repo.get_by_email(email)
        return UserResponse.model_validate(user) if user else None

    async def get_user_with_id(self, user_id: int) -> Optional[UserResponse]:
        """
        Get a single user given their id.

        Args:
            user_id: ID of the user

        Returns:
            The user, or None if no user has that id
        """
        user_id = self._validate_id(user_id, "user_id")
        if user_id > MAX_ID:
            return None
        user = await self.user_repo.get_by_id(user_id)
        return UserResponse.model_validate(user) if user else None

    async def add_user(self, user: Union[UserCreate, Dict[str, Any]]) -> UserResponse:
        """
        Add a new user.

        Args:
            user: name, email and password

        Returns:
            The inserted user row

        Raises:
            ValidationError: If a field is missing or malformed
            ConflictError: If the email is already registered
        """
        user_in = self._parse(UserCreate, user, "User")
        created = await self.user_repo.create_user(user_in.model_dump())
        return UserResponse.model_validate(created)

    # Reservations

    async def get_all_reservations(
        self,
        guest_id: int,
        limit: Optional[int] = None
    ) -> List[ReservationResponse]:
        """
        Get all reservations for a single guest, with the reserved property's columns.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations, defaults to 10

        Returns:
            Up to ``limit`` reservations
        """
        guest_id = self._validate_id(guest_id, "guest_id")
        limit = self._validate_limit(limit)
        if guest_id > MAX_ID:
            return []

        rows = await self.reservation_repo.get_for_guest(guest_id, limit)
        return [
            ReservationResponse.model_validate({
                **property_obj.to_dict(),
                **reservation.to_dict(),
            })
            for reservation, property_obj in rows
        ]

    # Properties

    async def get_all_properties(
        self,
        options: Union[PropertySearchOptions, Dict[str, Any], None] = None,
        limit: Optional[int] = None
    ) -> List[PropertyResponse]:
        """
        Search properties.

        Args:
            options: Optional filters: city, owner_id, minimum_price_per_night,
                maximum_price_per_night (major units) and minimum_rating
            limit: Maximum number of properties, defaults to 10

        Returns:
            Matching properties ordered by cost_per_night, each with average_rating
        """
        search = self._parse(PropertySearchOptions, options or {}, "Search options")
        limit = self._validate_limit(limit)
        if search.owner_id is not None and search.owner_id > MAX_ID:
            return []
        logger.debug(f"Searching properties with {search.model_dump(exclude_none=True)} (limit {limit})")

        rows = await self.property_repo.search_properties(search, limit)
        return [self._to_property_response(prop, rating) for prop, rating in rows]

    async def get_property_with_id(self, property_id: int) -> Optional[PropertyResponse]:
        """
        Get a single property with its average rating.

        Args:
            property_id: ID of the property

        Returns:
            The property, or None if not found
        """
        property_id = self._validate_id(property_id, "property_id")
        if property_id > MAX_ID:
            return None
        row = await self.property_repo.get_with_rating(property_id)
        if row is None:
            return None
        return self._to_property_response(*row)

    async def add_property(self, property_data: Union[PropertyCreate, Dict[str, Any]]) -> PropertyResponse:
        """
        Add a property.

        Args:
            property_data: owner_id, title and cost_per_night (cents) are required;
                other descriptive fields are optional and stored as NULL when absent

        Returns:
            The inserted property row

        Raises:
            ValidationError: If a required field is missing or a value is malformed
            ConflictError: If owner_id does not reference a user
        """
        property_in = self._parse(PropertyCreate, property_data, "Property")
        created = await self.property_repo.create_property(property_in.model_dump())
        return self._to_property_response(created, None)

    # Helpers

    @staticmethod
    def _parse(schema: Type[SchemaType], data: Union[BaseModel, Dict[str, Any]], subject: str) -> SchemaType:
        """Validate plain data (or another schema instance) into ``schema``."""
        if isinstance(data, schema):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump()
        if not isinstance(data, dict):
            raise ValidationError(f"{subject} must be a mapping")
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            raise ErrorHandlerService.handle_validation_error(e, subject) from e

    @staticmethod
    def _validate_id(value: Any, field: str) -> int:
        # bool is an int subclass but never a valid key
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be a positive integer")
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be a positive integer")
        if number <= 0 or str(number) != str(value).strip():
            raise ValidationError(f"{field} must be a positive integer")
        return number

    @staticmethod
    def _validate_limit(limit: Optional[int]) -> int:
        if limit is None:
            return settings.default_result_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError("limit must be a positive integer")
        if limit > settings.max_result_limit:
            raise ValidationError(f"limit cannot exceed {settings.max_result_limit}")
        return limit

    @staticmethod
    def _to_property_response(property_obj, average_rating: Optional[float]) -> PropertyResponse:
        return PropertyResponse.model_validate({
            **property_obj.to_dict(),
            "average_rating": average_rating,
        })
