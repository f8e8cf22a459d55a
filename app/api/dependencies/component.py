"""Component dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.components import ComponentService
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    ComponentRepository,
    WorkflowRepository,
)


async def get_component_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ComponentService:
    """Component service for read operations."""
    return ComponentService(ComponentRepository(db), WorkflowRepository(db))


async def get_component_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ComponentService:
    """Component service for activate/deactivate/delete (transactional)."""
    return ComponentService(ComponentRepository(db), WorkflowRepository(db))
