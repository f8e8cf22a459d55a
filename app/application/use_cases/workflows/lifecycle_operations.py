"""Lifecycle controller: submit, approve and reject (execute lives in the workflow engine).

Every status change goes through apply_event() first and is then written as a
conditional update keyed by (id, expected status). If the row moved in
between, the caller gets InvalidTransition or Conflict, never a silent overwrite.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.workflow import WorkflowResult
from app.application.interfaces.repositories import IWorkflowRepository
from app.domain.enums import LifecycleEvent, WorkflowStatus
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.lifecycle import apply_event
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# Attributes that must be non-blank before a workflow can be submitted.
SUBMIT_REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "category",
    "component_name",
    "component_type",
    "template_name",
    "created_by",
)


async def raise_lost_race(
    repo: IWorkflowRepository,
    workflow_id: int,
    event: LifecycleEvent,
) -> None:
    """Explain a conditional update that matched no row.

    Raises:
        ResourceNotFoundException: Workflow was deleted meanwhile.
        InvalidTransitionException: Event is no longer legal in the current status.
        ConflictException: Status is still compatible but the row changed under us.
    """
    status = await repo.get_status(workflow_id)
    if status is None:
        raise ResourceNotFoundException("workflow", workflow_id)
    apply_event(status, event, workflow_id)
    raise ConflictException(
        "Workflow was modified concurrently; reload and retry",
        workflow_id=workflow_id,
        current_status=status.value,
    )


def missing_submit_fields(workflow: WorkflowResult) -> list[str]:
    """Return required attributes that are absent or blank, plus 'steps' when there are none."""
    missing = []
    for attr in SUBMIT_REQUIRED_FIELDS:
        value = getattr(workflow, attr)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(attr)
    if not workflow.steps:
        missing.append("steps")
    return missing


class LifecycleController:
    """Drives the submit/approve/reject edges of the workflow state machine."""

    def __init__(self, workflow_repo: IWorkflowRepository) -> None:
        self._workflow_repo = workflow_repo

    async def _load(self, workflow_id: int) -> WorkflowResult:
        workflow = await self._workflow_repo.get_result(workflow_id)
        if not workflow:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def _move(
        self,
        workflow: WorkflowResult,
        event: LifecycleEvent,
        **fields: Any,
    ) -> WorkflowResult:
        target = apply_event(workflow.status, event, workflow.id)
        moved = await self._workflow_repo.transition(
            workflow.id, workflow.status, target, **fields
        )
        if not moved:
            await raise_lost_race(self._workflow_repo, workflow.id, event)
        logger.info(
            "Workflow %s: %s -> %s (%s)",
            workflow.id,
            workflow.status.value,
            target.value,
            event.value,
        )
        return await self._load(workflow.id)

    async def submit(self, workflow_id: int) -> WorkflowResult:
        """Move DRAFT (or a FAILED attempt) to PENDING_APPROVAL.

        Re-submitting a FAILED workflow starts a new attempt: every step goes
        back to PENDING with results cleared and approval is cleared.

        Raises:
            ResourceNotFoundException: Unknown id.
            InvalidTransitionException: Status is not DRAFT or FAILED.
            ValidationException: Required fields or steps are missing.
        """
        workflow = await self._load(workflow_id)
        apply_event(workflow.status, LifecycleEvent.SUBMIT, workflow_id)
        missing = missing_submit_fields(workflow)
        if missing:
            raise ValidationException(
                f"Workflow is missing required fields: {', '.join(missing)}",
                field=missing[0],
                errors=missing,
            )
        fields = {}
        if workflow.status is WorkflowStatus.FAILED:
            await self._workflow_repo.reset_steps(workflow_id)
            fields = {"approved_by": None, "approved_at": None}
        return await self._move(workflow, LifecycleEvent.SUBMIT, **fields)

    async def approve(self, workflow_id: int, approved_by: str | None) -> WorkflowResult:
        """Move PENDING_APPROVAL to APPROVED, recording approver and approvedAt = now.

        Raises:
            ResourceNotFoundException: Unknown id.
            InvalidTransitionException: Status is not PENDING_APPROVAL.
            ValidationException: approved_by is blank.
        """
        workflow = await self._load(workflow_id)
        if not approved_by or not approved_by.strip():
            raise ValidationException("approvedBy is required", field="approvedBy")
        return await self._move(
            workflow,
            LifecycleEvent.APPROVE,
            approved_by=approved_by.strip(),
            approved_at=utc_now(),
        )

    async def reject(
        self,
        workflow_id: int,
        rejected_by: str | None,
        reason: str | None,
    ) -> WorkflowResult:
        """Move PENDING_APPROVAL to REJECTED. A blank reason leaves the workflow untouched.

        Raises:
            ResourceNotFoundException: Unknown id.
            ValidationException: reason or rejected_by is blank.
            InvalidTransitionException: Status is not PENDING_APPROVAL.
        """
        workflow = await self._load(workflow_id)
        if not reason or not reason.strip():
            raise ValidationException("Rejection reason is required", field="reason")
        if not rejected_by or not rejected_by.strip():
            raise ValidationException("rejectedBy is required", field="rejectedBy")
        return await self._move(
            workflow,
            LifecycleEvent.REJECT,
            rejected_by=rejected_by.strip(),
            rejection_reason=reason.strip(),
        )
