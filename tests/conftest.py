"""Pytest configuration and fixtures for the workflow service.

Every test gets its own SQLite file database (tables created from ORM
metadata) bound through app.infrastructure.persistence.database, so HTTP
tests, service tests and engine tests share one schema per test.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.workflow import WorkflowCreate, WorkflowResult
from app.application.use_cases.workflows import LifecycleController, WorkflowService
from app.core.limiter import limiter
from app.domain.enums import ComponentCategory
from app.infrastructure.persistence.database import (
    build_engine,
    configure_engine,
    create_all,
    dispose_engine,
    get_session_factory,
)
from app.infrastructure.persistence.repositories import (
    ComponentRepository,
    WorkflowRepository,
)
from app.infrastructure.services import ExecutionGuard
from app.main import app


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Write endpoints are rate limited per client address; start each test clean."""
    limiter.reset()


@pytest.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Fresh file-backed SQLite database with all tables."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'workflows.db'}")
    configure_engine(engine)
    await create_all()
    yield get_session_factory()
    await dispose_engine()


@pytest.fixture
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    app.state.execution_guard = ExecutionGuard()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def guard() -> ExecutionGuard:
    return ExecutionGuard()


def _workflow_create(**overrides) -> WorkflowCreate:
    """A valid SAFETY_SYSTEM request (the brake alert example) with overrides applied."""
    values = {
        "name": "Brake Alert Module",
        "description": "Alerts the driver on brake pressure loss",
        "category": ComponentCategory.SAFETY_SYSTEM,
        "component_name": "BrakeAlertModule",
        "created_by": "engineer@example.com",
        "dependencies": ["SensorModule", "AlertSystem"],
    }
    values.update(overrides)
    return WorkflowCreate(**values)


@pytest.fixture
def create_workflow(session_factory):
    """Factory: create (and optionally submit/approve) a workflow in its own transaction."""

    async def _create(*, approve: bool = False, submit: bool = False, **overrides) -> WorkflowResult:
        async with session_factory() as session:
            async with session.begin():
                service = WorkflowService(
                    WorkflowRepository(session), ComponentRepository(session)
                )
                workflow = await service.create_workflow(_workflow_create(**overrides))
                if submit or approve:
                    controller = LifecycleController(WorkflowRepository(session))
                    workflow = await controller.submit(workflow.id)
                    if approve:
                        workflow = await controller.approve(workflow.id, "lead@example.com")
        return workflow

    return _create


@pytest.fixture
def load_workflow(session_factory):
    """Read a workflow in a fresh session (sees only committed state)."""

    async def _load(workflow_id: int) -> WorkflowResult | None:
        async with session_factory() as session:
            return await WorkflowRepository(session).get_result(workflow_id)

    return _load
