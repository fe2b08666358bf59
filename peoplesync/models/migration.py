"""Result models returned by the migration workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from peoplesync.models.person import CamelModel


class _FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class MigrationResult(_FrozenCamelModel):
    """Outcome of a migrate or rollback pass.

    For a rollback, ``migrated`` counts the documents removed.
    """

    success: bool = False
    total_records: int = 0
    migrated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class VerificationResult(_FrozenCamelModel):
    success: bool = False
    postgres_count: int = 0
    mongo_count: int = 0
    migrated_count: int = 0
    counts_match: bool = False
    verified: int = 0
    mismatched: int = 0
    missing: int = 0
    errors: List[str] = Field(default_factory=list)


class MigrationStatus(_FrozenCamelModel):
    postgres_count: int
    mongo_count: int
    migrated_count: int
    counts_match: bool
    migration_complete: bool
    migration_progress: float

    @classmethod
    def from_verification(cls, verification: VerificationResult) -> "MigrationStatus":
        progress = 0.0
        if verification.postgres_count > 0:
            progress = verification.migrated_count / verification.postgres_count * 100
        return cls(
            postgres_count=verification.postgres_count,
            mongo_count=verification.mongo_count,
            migrated_count=verification.migrated_count,
            counts_match=verification.counts_match,
            migration_complete=verification.postgres_count == verification.migrated_count,
            migration_progress=progress,
        )


@dataclass
class MigrationResultBuilder:
    """Mutable accumulator used while a single workflow call is running."""

    success: bool = False
    total_records: int = 0
    migrated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def mark_migrated(self) -> None:
        self.migrated += 1

    def mark_skipped(self) -> None:
        self.skipped += 1

    def mark_failed(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    def fail(self, message: str) -> None:
        self.success = False
        self.errors.append(message)

    def build(self) -> MigrationResult:
        return MigrationResult(
            success=self.success,
            total_records=self.total_records,
            migrated=self.migrated,
            skipped=self.skipped,
            failed=self.failed,
            errors=list(self.errors),
        )


@dataclass
class VerificationResultBuilder:
    success: bool = False
    postgres_count: int = 0
    mongo_count: int = 0
    migrated_count: int = 0
    counts_match: bool = False
    verified: int = 0
    mismatched: int = 0
    missing: int = 0
    errors: List[str] = field(default_factory=list)

    def fail(self, message: str) -> None:
        self.success = False
        self.errors.append(message)

    def build(self) -> VerificationResult:
        return VerificationResult(
            success=self.success,
            postgres_count=self.postgres_count,
            mongo_count=self.mongo_count,
            migrated_count=self.migrated_count,
            counts_match=self.counts_match,
            verified=self.verified,
            mismatched=self.mismatched,
            missing=self.missing,
            errors=list(self.errors),
        )
