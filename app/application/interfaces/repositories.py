"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain enums only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import ComponentCategory, StepStatus, WorkflowStatus

if TYPE_CHECKING:
    from app.application.dtos.component import ComponentCreate, ComponentResult
    from app.application.dtos.workflow import (
        WorkflowCreate,
        WorkflowResult,
        WorkflowStepCreate,
    )


class IWorkflowRepository(Protocol):
    """Protocol for workflow repository (DIP)."""

    async def get_result(self, workflow_id: int) -> WorkflowResult | None:
        """Return workflow with its ordered steps, or None."""

    async def get_status(self, workflow_id: int) -> WorkflowStatus | None:
        """Return the current status of a workflow, or None if missing."""

    async def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        """Return whether another workflow already uses name."""

    async def create_workflow(self, data: WorkflowCreate) -> WorkflowResult:
        """Persist a new DRAFT workflow and its PENDING steps."""

    async def update_workflow(
        self,
        workflow_id: int,
        fields: dict[str, Any],
        *,
        expected_version: int | None = None,
        steps: list[WorkflowStepCreate] | None = None,
    ) -> WorkflowResult:
        """Apply field changes (and optionally replace steps) under the optimistic lock."""

    async def delete_workflow(self, workflow_id: int) -> bool:
        """Delete workflow and its steps. Returns False if missing."""

    async def list_all(self) -> list[WorkflowResult]:
        """Return all workflows (newest first)."""

    async def list_by_status(self, status: WorkflowStatus) -> list[WorkflowResult]:
        """Return workflows in status (newest first)."""

    async def list_by_category(
        self, category: ComponentCategory
    ) -> list[WorkflowResult]:
        """Return workflows in category (newest first)."""

    async def count_by_status(self) -> dict[WorkflowStatus, int]:
        """Return workflow counts per status (every status present)."""

    async def transition(
        self,
        workflow_id: int,
        expected: WorkflowStatus,
        target: WorkflowStatus,
        **fields: Any,
    ) -> bool:
        """Conditionally move status from expected to target. False if status changed meanwhile."""

    async def reset_steps(self, workflow_id: int) -> None:
        """Return every step of the workflow to PENDING with results cleared."""

    async def update_step(
        self,
        step_id: int,
        status: StepStatus,
        *,
        executed_by: str | None = None,
        executed_at: datetime | None = None,
        result: str | None = None,
        error_message: str | None = None,
    ) -> None:
        """Record a step status change."""


class IComponentRepository(Protocol):
    """Protocol for component repository (DIP)."""

    async def create_component(self, data: ComponentCreate) -> ComponentResult:
        """Persist a generated component."""

    async def get_result(self, component_id: int) -> ComponentResult | None:
        """Return component by id, or None."""

    async def list_all(self) -> list[ComponentResult]:
        """Return all components (newest first)."""

    async def list_by_category(
        self, category: ComponentCategory
    ) -> list[ComponentResult]:
        """Return components in category."""

    async def list_by_workflow(self, workflow_id: int) -> list[ComponentResult]:
        """Return components produced by a workflow."""

    async def list_active(self) -> list[ComponentResult]:
        """Return active components."""

    async def search(self, query: str) -> list[ComponentResult]:
        """Case-insensitive substring search over name, description and metadata."""

    async def set_active(
        self, component_id: int, active: bool
    ) -> ComponentResult | None:
        """Set is_active; no write when already in the target state. None if missing."""

    async def delete_component(self, component_id: int) -> bool:
        """Hard delete. Returns False if missing."""

    async def count_by_workflow(self, workflow_id: int) -> int:
        """Return how many components reference workflow_id."""

    async def count_by_category_and_active(
        self,
    ) -> dict[tuple[ComponentCategory, bool], int]:
        """Return counts grouped by (category, is_active)."""
