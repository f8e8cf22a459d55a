"""Application lifespan: startup and shutdown.

Wiring only: logging, schema bootstrap for the dev database, the
per-process execution guard, and engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence.database import create_all, dispose_engine
from app.infrastructure.services.execution_guard import ExecutionGuard
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, tables (when database_auto_create), execution guard.
    Shutdown: SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    if settings.database_auto_create:
        await create_all()
    app.state.execution_guard = ExecutionGuard()
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    await dispose_engine()
