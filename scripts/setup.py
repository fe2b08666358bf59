"""Initial setup script for PeopleSync infrastructure."""

from __future__ import annotations

import asyncio
import logging

from peoplesync.core.database import database_manager
from peoplesync.repositories.mongo import PersonDocumentRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def setup_postgres() -> None:
    # initialize() creates the people table when it is missing
    await database_manager.initialize(create_schema=True)
    logger.info("PostgreSQL schema ready")


async def setup_mongodb() -> None:
    repository = PersonDocumentRepository(database_manager.people_collection())
    await repository.ensure_indexes()


async def main() -> None:
    await setup_postgres()
    try:
        await setup_mongodb()
    finally:
        await database_manager.close()
    logger.info("PeopleSync setup complete")


if __name__ == "__main__":
    asyncio.run(main())
