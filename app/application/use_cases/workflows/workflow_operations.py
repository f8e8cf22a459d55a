"""Workflow store use cases: create, read, update, delete, listings and statistics."""

from __future__ import annotations

import dataclasses
from typing import Any

from app.application.dtos.workflow import (
    WorkflowCreate,
    WorkflowResult,
    WorkflowStatistics,
    WorkflowStepCreate,
    WorkflowUpdate,
)
from app.application.interfaces.repositories import (
    IComponentRepository,
    IWorkflowRepository,
)
from app.application.services.category_defaults import (
    default_dependencies,
    default_steps,
    default_template_name,
)
from app.application.services.workflow_validator import validate_definition
from app.application.use_cases.workflows.lifecycle_operations import (
    SUBMIT_REQUIRED_FIELDS,
    missing_submit_fields,
)
from app.domain.enums import ComponentCategory, WorkflowStatus
from app.domain.exceptions import (
    ConflictException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.lifecycle import EDITABLE_STATUSES
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Patch attributes copied onto the stored record as-is when present.
_EDITABLE_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "category",
    "component_name",
    "component_type",
    "dependencies",
    "validation_rules",
    "template_name",
    "configuration",
)


def _check_step_orders(steps: list[WorkflowStepCreate]) -> None:
    orders = [s.step_order for s in steps]
    if len(orders) != len(set(orders)):
        raise ValidationException(
            "Step orders must be unique within a workflow", field="steps"
        )
    if any(order < 1 for order in orders):
        raise ValidationException("Step orders must be positive", field="steps")


class WorkflowService:
    """Workflow store operations. Status never changes here (see LifecycleController)."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        component_repo: IComponentRepository,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._component_repo = component_repo

    async def create_workflow(self, data: WorkflowCreate) -> WorkflowResult:
        """Create a DRAFT workflow.

        Omitted dependencies and template name fall back to the category defaults;
        omitted steps fall back to the default five-step plan.

        Raises:
            ValidationException: Naming rules or step orders are violated.
            ConflictException: Another workflow already has this name.
        """
        name = (data.name or "").strip()
        validate_definition(
            name, data.component_name, data.dependencies, data.validation_rules
        )
        if await self._workflow_repo.exists_by_name(name):
            raise ConflictException(f"Workflow name already exists: {name}", name=name)
        category = ComponentCategory(data.category)
        steps = list(data.steps) if data.steps else default_steps()
        _check_step_orders(steps)
        normalized = dataclasses.replace(
            data,
            name=name,
            category=category,
            dependencies=(
                list(data.dependencies)
                if data.dependencies is not None
                else default_dependencies(category)
            ),
            validation_rules=list(data.validation_rules or []),
            template_name=data.template_name or default_template_name(category),
            steps=sorted(steps, key=lambda s: s.step_order),
        )
        workflow = await self._workflow_repo.create_workflow(normalized)
        logger.info(
            "Workflow created: id=%s name=%s category=%s",
            workflow.id,
            workflow.name,
            workflow.category.value,
        )
        return workflow

    async def get_workflow(self, workflow_id: int) -> WorkflowResult:
        """Return workflow by id. Raises ResourceNotFoundException if missing."""
        workflow = await self._workflow_repo.get_result(workflow_id)
        if not workflow:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def update_workflow(
        self, workflow_id: int, patch: WorkflowUpdate
    ) -> WorkflowResult:
        """Merge editable fields into a DRAFT or PENDING_APPROVAL workflow.

        Raises:
            ResourceNotFoundException: Unknown id.
            InvalidTransitionException: Patch tries to change status, the workflow
                is no longer editable, or steps are replaced outside DRAFT.
            ValidationException: Merged record breaks naming rules or blanks a
                required field.
            ConflictException: Name taken, or the version is stale.
        """
        current = await self.get_workflow(workflow_id)
        if patch.status is not None and WorkflowStatus(patch.status) != current.status:
            raise InvalidTransitionException(
                current.status.value, "directly change the status of", workflow_id
            )
        if current.status not in EDITABLE_STATUSES:
            raise InvalidTransitionException(current.status.value, "edit", workflow_id)
        if patch.steps is not None and current.status is not WorkflowStatus.DRAFT:
            raise InvalidTransitionException(
                current.status.value, "replace the steps of", workflow_id
            )

        fields: dict[str, Any] = {}
        for attr in _EDITABLE_FIELDS:
            value = getattr(patch, attr)
            if value is not None and value != getattr(current, attr):
                fields[attr] = value
        if "name" in fields:
            fields["name"] = fields["name"].strip()
        if "category" in fields:
            fields["category"] = ComponentCategory(fields["category"])

        blank = [
            attr
            for attr in SUBMIT_REQUIRED_FIELDS
            if isinstance(fields.get(attr), str) and not fields[attr].strip()
        ]
        if blank:
            raise ValidationException(
                f"Required fields cannot be blank: {', '.join(blank)}",
                field=blank[0],
                errors=blank,
            )
        if current.status is WorkflowStatus.PENDING_APPROVAL:
            # A submitted workflow must keep satisfying the submit requirements.
            missing = missing_submit_fields(dataclasses.replace(current, **fields))
            if missing:
                raise ValidationException(
                    f"Workflow is missing required fields: {', '.join(missing)}",
                    field=missing[0],
                    errors=missing,
                )

        merged = {attr: fields.get(attr, getattr(current, attr)) for attr in _EDITABLE_FIELDS}
        validate_definition(
            merged["name"],
            merged["component_name"],
            merged["dependencies"],
            merged["validation_rules"],
        )
        if "name" in fields and await self._workflow_repo.exists_by_name(
            fields["name"], exclude_id=workflow_id
        ):
            raise ConflictException(
                f"Workflow name already exists: {fields['name']}", name=fields["name"]
            )
        steps = None
        if patch.steps is not None:
            steps = sorted(patch.steps, key=lambda s: s.step_order)
            _check_step_orders(steps)

        updated = await self._workflow_repo.update_workflow(
            workflow_id,
            fields,
            expected_version=patch.version,
            steps=steps,
        )
        logger.info("Workflow updated: id=%s fields=%s", workflow_id, sorted(fields))
        return updated

    async def delete_workflow(self, workflow_id: int) -> None:
        """Delete a workflow that no component references.

        Raises:
            ResourceNotFoundException: Unknown id.
            ConflictException: At least one component references the workflow.
        """
        await self.get_workflow(workflow_id)
        referenced = await self._component_repo.count_by_workflow(workflow_id)
        if referenced:
            raise ConflictException(
                f"Workflow {workflow_id} is referenced by {referenced} component(s); "
                "deactivate the components instead",
                workflow_id=workflow_id,
                component_count=referenced,
            )
        if not await self._workflow_repo.delete_workflow(workflow_id):
            raise ResourceNotFoundException("workflow", workflow_id)
        logger.info("Workflow deleted: id=%s", workflow_id)

    async def list_workflows(self) -> list[WorkflowResult]:
        return await self._workflow_repo.list_all()

    async def list_by_status(self, status: WorkflowStatus) -> list[WorkflowResult]:
        return await self._workflow_repo.list_by_status(WorkflowStatus(status))

    async def list_by_category(
        self, category: ComponentCategory
    ) -> list[WorkflowResult]:
        return await self._workflow_repo.list_by_category(ComponentCategory(category))

    async def list_pending_approval(self) -> list[WorkflowResult]:
        """Workflows waiting for an approver, newest first."""
        return await self._workflow_repo.list_by_status(WorkflowStatus.PENDING_APPROVAL)

    async def get_statistics(self) -> WorkflowStatistics:
        """Return total and per-status workflow counts."""
        counts = await self._workflow_repo.count_by_status()
        return WorkflowStatistics(
            total=sum(counts.values()),
            draft=counts.get(WorkflowStatus.DRAFT, 0),
            pending_approval=counts.get(WorkflowStatus.PENDING_APPROVAL, 0),
            approved=counts.get(WorkflowStatus.APPROVED, 0),
            in_progress=counts.get(WorkflowStatus.IN_PROGRESS, 0),
            completed=counts.get(WorkflowStatus.COMPLETED, 0),
            failed=counts.get(WorkflowStatus.FAILED, 0),
            rejected=counts.get(WorkflowStatus.REJECTED, 0),
        )
