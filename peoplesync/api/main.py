"""FastAPI application entrypoint for PeopleSync."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from peoplesync.api.middleware.logging import LoggingMiddleware
from peoplesync.api.routes import admin, documents, migration, people
from peoplesync.core.config import settings
from peoplesync.core.database import database_manager
from peoplesync.core.exceptions import ApplicationError
from peoplesync.repositories.mongo import PersonDocumentRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Initialize shared resources on startup and tear them down on shutdown."""

    await database_manager.initialize()
    try:
        await PersonDocumentRepository(database_manager.people_collection()).ensure_indexes()
    except Exception as exc:  # pragma: no cover - MongoDB not reachable in tests
        logger.warning("Could not ensure document indexes: %s", exc)

    try:
        yield
    finally:
        await database_manager.close()


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

# Routers
app.include_router(people.router, prefix="/api")
app.include_router(documents.router, prefix="/api")
app.include_router(migration.router, prefix="/api")
app.include_router(admin.router, prefix="/api")

app.mount("/metrics", make_asgi_app())


@app.exception_handler(ApplicationError)
async def handle_application_error(_: Request, exc: ApplicationError):
    """Return standardized responses for application layer exceptions."""

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})
