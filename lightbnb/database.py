"""
Database connection and session management.
Handles async database operations with SQLAlchemy and connection pooling.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import Integer, text
from lightbnb.config import settings
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def build_engine(database_url: Optional[str] = None, **engine_kwargs) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    PostgreSQL URLs get the configured pool sizing; other dialects (SQLite in
    tests) use their driver's default pool unless one is passed explicitly.

    Args:
        database_url: SQLAlchemy URL, defaults to ``settings.database_url``
        **engine_kwargs: Extra arguments passed to ``create_async_engine``

    Returns:
        Configured async engine
    """
    url = database_url or settings.database_url
    options = {"echo": settings.debug}

    if url.startswith("postgresql"):
        options.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_pre_ping=True,  # Validate connections before use
            pool_recycle=settings.pool_recycle,
            pool_timeout=settings.pool_timeout,
            connect_args={
                "server_settings": {
                    "application_name": "lightbnb",
                }
            },
        )

    options.update(engine_kwargs)
    return create_async_engine(url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Create an async session factory bound to ``bind``."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Engine for the configured database
engine = build_engine()


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table is keyed by an integer serial ``id``.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict:
        """Column values keyed by column name."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


async def test_database_connection(target_engine: Optional[AsyncEngine] = None) -> bool:
    """
    Test database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    try:
        async with (target_engine or engine).connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.scalar()
            logger.info("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def create_tables(target_engine: Optional[AsyncEngine] = None) -> None:
    """Create all database tables known to ``Base``."""
    # Register every model on Base.metadata
    import lightbnb.models  # noqa: F401

    async with (target_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")


async def drop_tables(target_engine: Optional[AsyncEngine] = None) -> None:
    """
    Drop all database tables.
    This should only be used in testing or development.
    """
    if settings.is_production:
        raise RuntimeError("Cannot drop tables in production environment")

    import lightbnb.models  # noqa: F401

    async with (target_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

