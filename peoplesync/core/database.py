"""Database connectivity layer for PeopleSync."""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from peoplesync.core.config import settings
from peoplesync.core.exceptions import ServiceUnavailableError
from peoplesync.repositories.tables import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Lazily establishes connections to the relational and document stores."""

    def __init__(self) -> None:
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self.mongodb: Optional[AsyncIOMotorClient] = None

    async def initialize(self, *, create_schema: bool = True) -> None:
        """Connect to both backing services."""

        logger.info("Initializing PeopleSync database manager")

        # PostgreSQL via SQLAlchemy's asyncio extension
        self.engine = create_async_engine(
            settings.POSTGRES_URL,
            pool_size=settings.POSTGRES_POOL_SIZE,
            max_overflow=settings.POSTGRES_MAX_OVERFLOW,
            pool_pre_ping=True,
            echo=settings.POSTGRES_ECHO,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        if create_schema:
            async with self.engine.begin() as connection:
                await connection.run_sync(Base.metadata.create_all)

        # MongoDB for the document copy
        self.mongodb = AsyncIOMotorClient(str(settings.MONGODB_URL), tz_aware=False)

        logger.info("Database manager initialized")

    async def close(self) -> None:
        """Tear down connections gracefully."""

        logger.info("Closing database connections")

        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

        if self.mongodb is not None:
            self.mongodb.close()
            self.mongodb = None

    def sessions(self) -> async_sessionmaker[AsyncSession]:
        if self.session_factory is None:
            raise ServiceUnavailableError("Relational store is unavailable. Ensure PostgreSQL is configured.")
        return self.session_factory

    def people_collection(self) -> AsyncIOMotorCollection:
        if self.mongodb is None:
            raise ServiceUnavailableError("Document store is unavailable. Ensure MongoDB is configured.")
        return self.mongodb[settings.MONGODB_DATABASE][settings.MONGODB_COLLECTION]


# Singleton instance shared by the API and the migration script
database_manager = DatabaseManager()
