#!/usr/bin/env python
"""
Seed PostgreSQL with sample people so the migration can be exercised.

Usage:
    python scripts/seed_people.py
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from peoplesync.core.database import database_manager
from peoplesync.models.person import PersonPayload
from peoplesync.repositories.postgres import PersonRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("peoplesync.seed_people")

PEOPLE = [
    {"name": "Alice Johnson", "role": "engineer", "email": "alice@acme.io"},
    {"name": "Bob Smith", "role": "engineer", "email": "bob@acme.io"},
    {"name": "Carol White", "role": "manager", "email": "carol@acme.io"},
    {"name": "Dan Brown", "role": "designer", "email": "dan@acme.io"},
    {"name": "Eve Black", "role": "analyst", "email": None},
]


async def seed() -> None:
    await database_manager.initialize()
    repository = PersonRepository(database_manager.sessions())

    try:
        for entry in PEOPLE:
            if entry["email"] and await repository.find_by_email(entry["email"]):
                logger.info("Skipping %s, already present", entry["email"])
                continue
            person = await repository.create(PersonPayload(**entry))
            logger.info("Created person %s (%s)", person.id, person.name)
    finally:
        await database_manager.close()

    logger.info("Seeding completed at %s", datetime.utcnow().isoformat())


if __name__ == "__main__":
    asyncio.run(seed())
