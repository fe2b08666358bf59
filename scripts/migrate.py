#!/usr/bin/env python
"""
People migration script for PeopleSync.

Copies people from PostgreSQL into MongoDB, verifies the copy, reports
progress, or removes the migrated documents again.

Usage:
    python scripts/migrate.py [migrate|migrate-one ID|verify|rollback|status] [--yes]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from peoplesync.core.config import settings
from peoplesync.core.database import database_manager
from peoplesync.repositories.mongo import PersonDocumentRepository
from peoplesync.repositories.postgres import PersonRepository
from peoplesync.services.migration import MigrationService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_service() -> MigrationService:
    return MigrationService(
        PersonRepository(database_manager.sessions()),
        PersonDocumentRepository(database_manager.people_collection()),
        actor="cli",
    )


async def run(command: str, person_id: Optional[int] = None) -> bool:
    """Execute one workflow command and log its result. Returns the success flag."""

    await database_manager.initialize()
    try:
        service = build_service()
        if command == "migrate":
            result = await service.migrate_all()
        elif command == "migrate-one":
            result = await service.migrate_one(person_id)
        elif command == "verify":
            result = await service.verify()
        elif command == "rollback":
            result = await service.rollback()
        else:
            status = await service.status()
            logger.info("Status: %s", status.model_dump_json(by_alias=True))
            return True

        logger.info("Result: %s", result.model_dump_json(by_alias=True))
        for error in result.errors:
            logger.error("  %s", error)
        return result.success
    finally:
        await database_manager.close()


def main() -> None:
    """Main entry point."""

    parser = argparse.ArgumentParser(description="PeopleSync Migration Tool")
    parser.add_argument(
        "command",
        nargs="?",
        default="migrate",
        choices=["migrate", "migrate-one", "verify", "rollback", "status"],
        help="Command to execute (default: migrate)"
    )
    parser.add_argument("person_id", nargs="?", type=int, help="Relational id for migrate-one")
    parser.add_argument("--yes", action="store_true", help="Skip the rollback confirmation prompt")

    args = parser.parse_args()

    if args.command == "migrate-one" and args.person_id is None:
        parser.error("migrate-one requires a person id")

    if args.command == "rollback" and not args.yes:
        logger.warning("Rolling back will delete every migrated document from MongoDB!")
        response = input("Are you sure? (yes/no): ")
        if response.lower() != "yes":
            logger.info("Rollback cancelled.")
            return

    try:
        success = asyncio.run(run(args.command, args.person_id))
    except KeyboardInterrupt:
        logger.info("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Operation failed: {e}")
        sys.exit(1)

    if not success:
        sys.exit(1)


if __name__ == "__main__":
    main()
