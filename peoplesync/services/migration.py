"""Copy, verify and roll back people between the relational and document stores."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from peoplesync.models.document import PersonDocument
from peoplesync.models.migration import (
    MigrationResult,
    MigrationResultBuilder,
    MigrationStatus,
    VerificationResult,
    VerificationResultBuilder,
)
from peoplesync.models.person import Person
from peoplesync.repositories.base import PersonDocumentStore, PersonStore
from peoplesync.utils.audit import AuditLogger, audit_logger
from peoplesync.utils.monitoring import observe_migration

logger = logging.getLogger(__name__)


class MigrationService:
    """Sequential migrate/verify/rollback passes over the two stores.

    The service keeps no state between calls. The ``legacy_id`` tag on a
    document is the only marker that it came from a migration, and the
    existence check on it is what makes ``migrate_all`` safe to re-run.
    """

    def __init__(
        self,
        people: PersonStore,
        documents: PersonDocumentStore,
        *,
        auditor: Optional[AuditLogger] = None,
        actor: str = "system",
    ) -> None:
        self.people = people
        self.documents = documents
        self.auditor = auditor or audit_logger
        self.actor = actor

    async def migrate_all(self) -> MigrationResult:
        """Copy every person that has no tagged document yet."""

        result = MigrationResultBuilder()

        try:
            people = await self.people.list_all()
        except Exception as exc:
            logger.error("Migration aborted, could not read people: %s", exc)
            result.fail(f"Migration failed: {exc}")
            return self._finish("migrate_all", result)

        result.total_records = len(people)
        for person in people:
            try:
                if await self.documents.find_by_legacy_id(person.id) is not None:
                    result.mark_skipped()
                    continue
                await self.documents.insert(self._to_document(person))
                result.mark_migrated()
            except Exception as exc:
                logger.warning("Failed to migrate person %s: %s", person.id, exc)
                result.mark_failed(f"Failed to migrate person ID {person.id}: {exc}")

        result.success = True
        return self._finish("migrate_all", result)

    async def migrate_one(self, person_id: int) -> MigrationResult:
        result = MigrationResultBuilder()

        try:
            person = await self.people.get(person_id)
            if person is None:
                result.fail(f"Person with PostgreSQL ID {person_id} not found")
                return self._finish("migrate_one", result, person_id=person_id)

            if await self.documents.find_by_legacy_id(person_id) is not None:
                result.fail(f"Person with PostgreSQL ID {person_id} already migrated")
                return self._finish("migrate_one", result, person_id=person_id)

            await self.documents.insert(self._to_document(person))
        except Exception as exc:
            logger.error("Migration of person %s failed: %s", person_id, exc)
            result.fail(f"Migration failed: {exc}")
            return self._finish("migrate_one", result, person_id=person_id)

        result.mark_migrated()
        result.total_records = 1
        result.success = True
        return self._finish("migrate_one", result, person_id=person_id)

    async def verify(self) -> VerificationResult:
        """Compare counts, then reconcile every person field by field."""

        result = VerificationResultBuilder()

        try:
            result.postgres_count = await self.people.count()
            result.mongo_count = await self.documents.count()
            result.migrated_count = await self.documents.count_migrated()
            result.counts_match = result.postgres_count == result.migrated_count

            for person in await self.people.list_all():
                document = await self.documents.find_by_legacy_id(person.id)
                if document is None:
                    result.missing += 1
                elif self._matches(person, document):
                    result.verified += 1
                else:
                    result.mismatched += 1

            result.success = True
        except Exception as exc:
            logger.error("Verification failed: %s", exc)
            result.fail(f"Verification failed: {exc}")

        verification = result.build()
        logger.info(
            "Verification: postgres=%s mongo=%s migrated=%s verified=%s mismatched=%s missing=%s",
            verification.postgres_count,
            verification.mongo_count,
            verification.migrated_count,
            verification.verified,
            verification.mismatched,
            verification.missing,
        )
        self.auditor.record("migration.verify", self.actor, verification.model_dump())
        return verification

    async def rollback(self) -> MigrationResult:
        """Delete every document carrying a legacy id; untagged documents stay."""

        result = MigrationResultBuilder()

        try:
            migrated = await self.documents.list_migrated()
        except Exception as exc:
            logger.error("Rollback aborted, could not read migrated documents: %s", exc)
            result.fail(f"Rollback failed: {exc}")
            return self._finish("rollback", result)

        result.total_records = len(migrated)
        for document in migrated:
            try:
                await self.documents.delete(document.id or "")
                result.mark_migrated()
            except Exception as exc:
                logger.warning("Failed to roll back person %s: %s", document.legacy_id, exc)
                result.mark_failed(f"Failed to rollback person ID {document.legacy_id}: {exc}")

        result.success = True
        return self._finish("rollback", result)

    async def status(self) -> MigrationStatus:
        return MigrationStatus.from_verification(await self.verify())

    @staticmethod
    def _to_document(person: Person) -> PersonDocument:
        return PersonDocument(
            name=person.name,
            role=person.role,
            email=person.email,
            legacy_id=person.id,
            created_at=person.created_at or datetime.utcnow(),
        )

    @staticmethod
    def _matches(person: Person, document: PersonDocument) -> bool:
        return (
            person.name == document.name
            and person.role == document.role
            and person.email == document.email
        )

    def _finish(self, action: str, builder: MigrationResultBuilder, **context) -> MigrationResult:
        result = builder.build()
        logger.info(
            "%s finished: success=%s total=%s migrated=%s skipped=%s failed=%s",
            action,
            result.success,
            result.total_records,
            result.migrated,
            result.skipped,
            result.failed,
        )
        observe_migration(action, migrated=result.migrated, skipped=result.skipped, failed=result.failed)
        self.auditor.record(f"migration.{action}", self.actor, {**context, **result.model_dump()})
        return result
