"""Command line entry for PeopleSync."""

from __future__ import annotations

import logging

import uvicorn

from peoplesync.core.config import settings


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_server() -> None:
    configure_logging()
    uvicorn.run("peoplesync.api.main:app", host=settings.API_HOST, port=settings.API_PORT)


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
