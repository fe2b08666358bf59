"""Administrative endpoints for PeopleSync."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from peoplesync.api.dependencies import get_db
from peoplesync.core.config import settings
from peoplesync.core.database import DatabaseManager

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health")
async def healthcheck(db: DatabaseManager = Depends(get_db)) -> Dict[str, Any]:
    """Liveness probe."""

    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "postgres": db.session_factory is not None,
        "mongodb": db.mongodb is not None,
    }
