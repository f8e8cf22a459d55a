"""Workflow and WorkflowStep repository (implements IWorkflowRepository)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import (
    WorkflowCreate,
    WorkflowResult,
    WorkflowStepCreate,
    WorkflowStepResult,
)
from app.domain.enums import ComponentCategory, StepStatus, StepType, WorkflowStatus
from app.domain.exceptions import ConflictException, ResourceNotFoundException
from app.domain.lifecycle import check_step_outcome
from app.infrastructure.persistence.models.workflow import Workflow, WorkflowStep
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc, utc_now


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _step_to_result(step: WorkflowStep) -> WorkflowStepResult:
    return WorkflowStepResult(
        id=step.id,
        step_order=step.step_order,
        step_name=step.step_name,
        step_description=step.step_description,
        step_type=StepType(step.step_type),
        status=StepStatus(step.status),
        configuration=step.configuration,
        executed_by=step.executed_by,
        executed_at=ensure_utc(step.executed_at),
        result=step.result,
        error_message=step.error_message,
    )


def _to_result(wf: Workflow) -> WorkflowResult:
    return WorkflowResult(
        id=wf.id,
        name=wf.name,
        description=wf.description,
        status=WorkflowStatus(wf.status),
        category=ComponentCategory(wf.category),
        component_name=wf.component_name,
        component_type=wf.component_type,
        dependencies=list(wf.dependencies or []),
        validation_rules=list(wf.validation_rules or []),
        template_name=wf.template_name,
        configuration=wf.configuration,
        created_by=wf.created_by,
        approved_by=wf.approved_by,
        approved_at=ensure_utc(wf.approved_at),
        rejected_by=wf.rejected_by,
        rejection_reason=wf.rejection_reason,
        created_at=ensure_utc(wf.created_at),
        updated_at=ensure_utc(wf.updated_at),
        version=wf.version,
        steps=[_step_to_result(s) for s in sorted(wf.steps, key=lambda s: s.step_order)],
    )


def _new_step(data: WorkflowStepCreate) -> WorkflowStep:
    return WorkflowStep(
        step_order=data.step_order,
        step_name=data.step_name,
        step_description=data.step_description,
        step_type=StepType(data.step_type).value,
        status=StepStatus.PENDING.value,
        configuration=data.configuration,
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository. Status changes are conditional UPDATEs keyed by expected status."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def get_result(self, workflow_id: int) -> WorkflowResult | None:
        wf = await self.get_by_id(workflow_id)
        return _to_result(wf) if wf else None

    async def get_status(self, workflow_id: int) -> WorkflowStatus | None:
        result = await self.db.execute(
            select(Workflow.status).where(Workflow.id == workflow_id)
        )
        status = result.scalar_one_or_none()
        return WorkflowStatus(status) if status is not None else None

    async def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        q = select(Workflow.id).where(Workflow.name == name)
        if exclude_id is not None:
            q = q.where(Workflow.id != exclude_id)
        result = await self.db.execute(q.limit(1))
        return result.scalar_one_or_none() is not None

    async def create_workflow(self, data: WorkflowCreate) -> WorkflowResult:
        """Insert a DRAFT workflow with PENDING steps (status is never taken from data)."""
        wf = Workflow(
            name=data.name,
            description=data.description,
            status=WorkflowStatus.DRAFT.value,
            category=ComponentCategory(data.category).value,
            component_name=data.component_name,
            component_type=data.component_type or "component",
            dependencies=list(data.dependencies or []),
            validation_rules=list(data.validation_rules or []),
            template_name=data.template_name,
            configuration=data.configuration,
            created_by=data.created_by,
        )
        wf.steps = [_new_step(s) for s in data.steps or []]
        self.db.add(wf)
        await self.flush()
        created = await self.get_result(wf.id)
        assert created is not None
        return created

    async def update_workflow(
        self,
        workflow_id: int,
        fields: dict[str, Any],
        *,
        expected_version: int | None = None,
        steps: list[WorkflowStepCreate] | None = None,
    ) -> WorkflowResult:
        """Apply fields (and replace steps if given) through the ORM version check.

        Raises:
            ResourceNotFoundException: Unknown id.
            ConflictException: expected_version is stale or another writer won the flush.
        """
        wf = await self.get_by_id(workflow_id)
        if wf is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        if expected_version is not None and wf.version != expected_version:
            raise ConflictException(
                "Workflow was modified since it was read; reload and retry",
                workflow_id=workflow_id,
                expected_version=expected_version,
                current_version=wf.version,
            )
        for key, value in fields.items():
            setattr(wf, key, list(value) if isinstance(value, list) else _plain(value))
        if steps is not None:
            # Old rows go first so (workflow_id, step_order) stays unique.
            wf.steps.clear()
            await self.flush()
            wf.steps.extend(_new_step(s) for s in steps)
        wf.updated_at = utc_now()
        await self.flush()
        self.db.expire_all()
        updated = await self.get_result(workflow_id)
        assert updated is not None
        return updated

    async def delete_workflow(self, workflow_id: int) -> bool:
        wf = await self.get_by_id(workflow_id)
        if wf is None:
            return False
        await self.delete(wf)
        return True

    def _listing(self):
        return select(Workflow).order_by(Workflow.created_at.desc(), Workflow.id.desc())

    async def list_all(self) -> list[WorkflowResult]:
        return [_to_result(wf) for wf in await self._scalars(self._listing())]

    async def list_by_status(self, status: WorkflowStatus) -> list[WorkflowResult]:
        q = self._listing().where(Workflow.status == WorkflowStatus(status).value)
        return [_to_result(wf) for wf in await self._scalars(q)]

    async def list_by_category(
        self, category: ComponentCategory
    ) -> list[WorkflowResult]:
        q = self._listing().where(Workflow.category == ComponentCategory(category).value)
        return [_to_result(wf) for wf in await self._scalars(q)]

    async def count_by_status(self) -> dict[WorkflowStatus, int]:
        result = await self.db.execute(
            select(Workflow.status, func.count(Workflow.id)).group_by(Workflow.status)
        )
        counts = {status: 0 for status in WorkflowStatus}
        for status, n in result.all():
            counts[WorkflowStatus(status)] = n
        return counts

    async def transition(
        self,
        workflow_id: int,
        expected: WorkflowStatus,
        target: WorkflowStatus,
        **fields: Any,
    ) -> bool:
        """UPDATE ... WHERE id = :id AND status = :expected; bumps version. True if one row moved."""
        values = {key: _plain(value) for key, value in fields.items()}
        values.update(
            status=WorkflowStatus(target).value,
            version=Workflow.version + 1,
            updated_at=utc_now(),
        )
        result = await self.db.execute(
            update(Workflow)
            .where(
                Workflow.id == workflow_id,
                Workflow.status == WorkflowStatus(expected).value,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.expire_all()
        return result.rowcount == 1

    async def reset_steps(self, workflow_id: int) -> None:
        await self.db.execute(
            update(WorkflowStep)
            .where(WorkflowStep.workflow_id == workflow_id)
            .values(
                status=StepStatus.PENDING.value,
                executed_by=None,
                executed_at=None,
                result=None,
                error_message=None,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.expire_all()

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
        """Write a step status. Finished statuses must carry a consistent result/error pair."""
        status = StepStatus(status)
        if status in (StepStatus.COMPLETED, StepStatus.FAILED, StepStatus.SKIPPED):
            check_step_outcome(status, result, error_message)
        values: dict[str, Any] = {
            "status": status.value,
            "result": result,
            "error_message": error_message,
        }
        if executed_by is not None:
            values["executed_by"] = executed_by
        if executed_at is not None:
            values["executed_at"] = executed_at
        await self.db.execute(
            update(WorkflowStep)
            .where(WorkflowStep.id == step_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.expire_all()
