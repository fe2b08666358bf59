from __future__ import annotations

from fastapi import Depends

from peoplesync.core.database import database_manager
from peoplesync.repositories.mongo import PersonDocumentRepository
from peoplesync.repositories.postgres import PersonRepository
from peoplesync.services.migration import MigrationService


async def get_db():
    return database_manager


async def get_person_store() -> PersonRepository:
    return PersonRepository(database_manager.sessions())


async def get_document_store() -> PersonDocumentRepository:
    return PersonDocumentRepository(database_manager.people_collection())


async def get_migration_service(
    people: PersonRepository = Depends(get_person_store),
    documents: PersonDocumentRepository = Depends(get_document_store),
) -> MigrationService:
    return MigrationService(people, documents)
