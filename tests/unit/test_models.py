from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from peoplesync.core.config import Settings
from peoplesync.models.document import PersonDocument, PersonDocumentPayload
from peoplesync.models.migration import MigrationResultBuilder, MigrationStatus, VerificationResult
from peoplesync.models.person import naive_utc


def test_builder_freezes_result():
    builder = MigrationResultBuilder(total_records=2)
    builder.mark_migrated()
    builder.mark_failed("Failed to migrate person ID 2: boom")
    builder.success = True

    result = builder.build()
    builder.mark_skipped()

    assert (result.migrated, result.skipped, result.failed) == (1, 0, 1)
    with pytest.raises(ValidationError):
        result.migrated = 5


def test_status_from_verification():
    status = MigrationStatus.from_verification(
        VerificationResult(success=True, postgres_count=3, mongo_count=5, migrated_count=2, counts_match=False)
    )

    assert status.migration_progress == pytest.approx(66.666, rel=1e-3)
    assert not status.migration_complete
    assert status.model_dump(by_alias=True)["migrationProgress"] == status.migration_progress


def test_document_payload_accepts_camel_case():
    payload = PersonDocumentPayload.model_validate(
        {"name": "Nia", "role": "sales", "email": "nia@acme.io", "createdAt": "2024-02-01T10:00:00"}
    )

    assert payload.created_at == datetime(2024, 2, 1, 10, 0)


def test_document_round_trips_mongo_shape():
    document = PersonDocument(name="Alice", role="eng", email=None, legacy_id=5, created_at=datetime(2024, 1, 1))

    stored = document.to_mongo()
    restored = PersonDocument.from_mongo({"_id": "65a000000000000000000001", **stored})

    assert stored["legacy_id"] == 5
    assert restored.is_migrated
    assert restored.id == "65a000000000000000000001"


def test_settings_rewrite_sync_postgres_url():
    settings = Settings(POSTGRES_URL="postgresql://u:p@db:5432/people", ALLOWED_ORIGINS="http://a, http://b")

    assert settings.POSTGRES_URL == "postgresql+asyncpg://u:p@db:5432/people"
    assert settings.ALLOWED_ORIGINS == ["http://a", "http://b"]


def test_naive_utc_converts_aware_values():
    aware = datetime(2024, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert naive_utc(aware) == datetime(2024, 3, 1, 17, 0)
    assert naive_utc(datetime(2024, 3, 1)) == datetime(2024, 3, 1)
    assert naive_utc(None) is None
