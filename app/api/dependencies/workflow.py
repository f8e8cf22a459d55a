"""Workflow dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.workflows import LifecycleController, WorkflowService
from app.core.config import get_settings
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    get_session_factory,
)
from app.infrastructure.persistence.repositories import (
    ComponentRepository,
    WorkflowRepository,
)
from app.infrastructure.services import (
    ComponentGenerator,
    ExecutionGuard,
    WorkflowEngine,
)


async def get_workflow_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowService:
    """Workflow service for read operations (list, get, statistics)."""
    return WorkflowService(WorkflowRepository(db), ComponentRepository(db))


async def get_workflow_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> WorkflowService:
    """Workflow service for create/update/delete (transactional)."""
    return WorkflowService(WorkflowRepository(db), ComponentRepository(db))


async def get_lifecycle_controller(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> LifecycleController:
    """Lifecycle controller for submit/approve/reject (transactional)."""
    return LifecycleController(WorkflowRepository(db))


def get_execution_guard(request: Request) -> ExecutionGuard:
    """Process-wide execution guard created in the lifespan."""
    guard = getattr(request.app.state, "execution_guard", None)
    if guard is None:
        guard = ExecutionGuard()
        request.app.state.execution_guard = guard
    return guard


async def get_workflow_engine(
    guard: Annotated[ExecutionGuard, Depends(get_execution_guard)],
) -> WorkflowEngine:
    """Workflow engine; manages its own transactions per execution phase."""
    settings = get_settings()
    return WorkflowEngine(
        get_session_factory(),
        guard,
        ComponentGenerator(default_version=settings.component_default_version),
        step_timeout_seconds=settings.step_timeout_seconds,
    )
