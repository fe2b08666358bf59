"""Migration endpoints: copy people into the document store, verify, roll back."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from peoplesync.api.dependencies import get_migration_service
from peoplesync.models.migration import MigrationResult, MigrationStatus, VerificationResult
from peoplesync.services.migration import MigrationService

router = APIRouter(prefix="/migration", tags=["migration"])


def _status_for(success: bool) -> int:
    return status.HTTP_200_OK if success else status.HTTP_400_BAD_REQUEST


@router.post("/migrate-all", response_model=MigrationResult)
async def migrate_all(response: Response, service: MigrationService = Depends(get_migration_service)) -> MigrationResult:
    result = await service.migrate_all()
    response.status_code = _status_for(result.success)
    return result


@router.post("/migrate/{person_id}", response_model=MigrationResult)
async def migrate_one(
    person_id: int,
    response: Response,
    service: MigrationService = Depends(get_migration_service),
) -> MigrationResult:
    result = await service.migrate_one(person_id)
    response.status_code = _status_for(result.success)
    return result


@router.get("/verify", response_model=VerificationResult)
async def verify(response: Response, service: MigrationService = Depends(get_migration_service)) -> VerificationResult:
    result = await service.verify()
    response.status_code = _status_for(result.success)
    return result


@router.post("/rollback", response_model=MigrationResult)
async def rollback(response: Response, service: MigrationService = Depends(get_migration_service)) -> MigrationResult:
    """Remove migrated documents. ``migrated`` in the response counts removals."""

    result = await service.rollback()
    response.status_code = _status_for(result.success)
    return result


@router.get("/status", response_model=MigrationStatus)
async def migration_status(service: MigrationService = Depends(get_migration_service)) -> MigrationStatus:
    return await service.status()
