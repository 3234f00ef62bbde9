"""
Test configuration and fixtures for the LightBnB data layer.
Provides database fixtures, test data factories, and common test utilities.
"""

import pytest
import pytest_asyncio
import uuid
import os
from datetime import date
from typing import AsyncGenerator, Optional
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from lightbnb.database import build_engine, build_session_factory, create_tables
from lightbnb.models import User, Property, Reservation, PropertyReview
from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.services.queries import QueryService


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with all tables for each test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = build_engine(
            TEST_DATABASE_URL,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = build_engine(TEST_DATABASE_URL, echo=False)

    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = build_session_factory(test_engine)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


@pytest.fixture
def review_repository(db_session: AsyncSession) -> BaseRepository[PropertyReview]:
    """Reviews have no dedicated repository; the generic one covers inserts."""
    return BaseRepository(PropertyReview, db_session)


# Service fixtures
@pytest.fixture
def query_service(db_session: AsyncSession) -> QueryService:
    """Create a query service instance."""
    return QueryService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: str = None,
        password: str = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Speed lamp",
        description: str = "description",
        thumbnail_photo_url: str = "https://images.example.com/thumb.jpeg",
        cover_photo_url: str = "https://images.example.com/cover.jpeg",
        cost_per_night: int = 10000,
        street: str = "536 Namsub Highway",
        city: str = "Sotboske",
        province: str = "Quebec",
        post_code: str = "28142",
        country: str = "Canada",
        parking_spaces: Optional[int] = 3,
        number_of_bathrooms: Optional[int] = 2,
        number_of_bedrooms: Optional[int] = 4
    ) -> dict:
        """Create a dictionary with all fourteen insertable property fields."""
        return {
            "owner_id": owner_id,
            "title": title,
            "description": description,
            "thumbnail_photo_url": thumbnail_photo_url,
            "cover_photo_url": cover_photo_url,
            "cost_per_night": cost_per_night,
            "street": street,
            "city": city,
            "province": province,
            "post_code": post_code,
            "country": country,
            "parking_spaces": parking_spaces,
            "number_of_bathrooms": number_of_bathrooms,
            "number_of_bedrooms": number_of_bedrooms,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: int, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(owner_id=owner_id, **kwargs)
        )


class ReservationFactory:
    """Factory for creating test reservations."""

    @staticmethod
    async def create_reservation(
        reservation_repo: ReservationRepository,
        guest_id: int,
        property_id: int,
        start_date: date = date(2018, 9, 11),
        end_date: date = date(2018, 9, 26)
    ) -> Reservation:
        """Create a test reservation in the database."""
        return await reservation_repo.create({
            "guest_id": guest_id,
            "property_id": property_id,
            "start_date": start_date,
            "end_date": end_date,
        })


class ReviewFactory:
    """Factory for creating test reviews."""

    @staticmethod
    async def create_review(
        review_repo: BaseRepository,
        guest_id: int,
        property_id: int,
        rating: int,
        message: str = "messages"
    ) -> PropertyReview:
        """Create a test review in the database."""
        return await review_repo.create({
            "guest_id": guest_id,
            "property_id": property_id,
            "rating": rating,
            "message": message,
        })


# Common test fixtures
@pytest_asyncio.fixture
async def test_owner(user_repository: UserRepository) -> User:
    """Create a user who owns properties."""
    return await UserFactory.create_user(
        user_repository,
        name="Devin Sanders",
        email="tristanjacobs@gmail.com"
    )


@pytest_asyncio.fixture
async def test_guest(user_repository: UserRepository) -> User:
    """Create a user who books properties."""
    return await UserFactory.create_user(
        user_repository,
        name="Sue Luna",
        email="jasonvincent@gmx.com"
    )


@pytest_asyncio.fixture
async def test_property(property_repository: PropertyRepository, test_owner: User) -> Property:
    """Create a test property."""
    return await PropertyFactory.create_property(
        property_repository,
        owner_id=test_owner.id,
        title="Blank corner",
        city="Vancouver",
        cost_per_night=8500
    )


# Utility functions for tests
def assert_property_fields(actual, expected: dict):
    """Assert that every insertable field of ``actual`` matches ``expected``."""
    for field, value in expected.items():
        assert getattr(actual, field) == value, field
