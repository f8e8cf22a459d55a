"""Workflow engine: runs an APPROVED workflow's steps and registers the generated component.

Execution is split into short transactions so step progress is visible while
the workflow runs:

1. claim: APPROVED -> IN_PROGRESS (conditional UPDATE; loser gets Conflict)
2. per step: PENDING -> IN_PROGRESS, then COMPLETED / FAILED / SKIPPED
3. finalize: IN_PROGRESS -> COMPLETED plus component insert in one transaction,
   or IN_PROGRESS -> FAILED

A step handler's business error or timeout is recorded on the step and in the
returned WorkflowExecutionResult; it is never raised to the caller. If the run
is interrupted instead (cancellation, a failed write), the running step and the
workflow are marked FAILED before the interruption propagates.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.component import GeneratedComponent
from app.application.dtos.workflow import (
    WorkflowExecutionResult,
    WorkflowResult,
    WorkflowStepResult,
)
from app.application.interfaces.services import IComponentGenerator
from app.application.services.workflow_validator import validate_for_execution
from app.application.use_cases.components import ComponentService
from app.application.use_cases.workflows import raise_lost_race
from app.domain.enums import LifecycleEvent, StepStatus, StepType, WorkflowStatus
from app.domain.exceptions import (
    ResourceNotFoundException,
    StepExecutionException,
    StepTimeoutException,
    ValidationException,
    WorkflowServiceException,
)
from app.domain.lifecycle import apply_event, outcome_for_steps
from app.domain.value_objects import is_pascal_case
from app.infrastructure.persistence.repositories.component_repo import (
    ComponentRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import WorkflowRepository
from app.infrastructure.services.component_generator import ComponentGenerator
from app.infrastructure.services.execution_guard import ExecutionGuard
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DEFAULT_STEP_RESULT = "Step completed successfully"


@dataclass
class ExecutionContext:
    """Artifacts shared by the steps of one execution (later steps read what earlier ones produced)."""

    workflow: WorkflowResult
    generated: GeneratedComponent | None = None
    planned_files: list[str] = field(default_factory=list)


StepHandler = Callable[[ExecutionContext, WorkflowStepResult], Awaitable[str]]


def is_optional_step(configuration: str | None) -> bool:
    """True when the step configuration is a JSON object with "optional": true."""
    if not configuration:
        return False
    try:
        parsed = json.loads(configuration)
    except ValueError:
        return False
    return isinstance(parsed, dict) and parsed.get("optional") is True


class WorkflowEngine:
    """Executes approved workflows step by step (one execution per workflow id at a time)."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        guard: ExecutionGuard,
        generator: IComponentGenerator | None = None,
        *,
        step_timeout_seconds: float = 30.0,
        executor: str = "workflow-engine",
        handlers: dict[StepType, StepHandler] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._guard = guard
        self._generator: IComponentGenerator = generator or ComponentGenerator()
        self._step_timeout = step_timeout_seconds
        self._executor = executor
        self._handlers: dict[StepType, StepHandler] = {
            StepType.VALIDATION: self._validate,
            StepType.DEPENDENCY_CHECK: self._check_dependencies,
            StepType.CODE_GENERATION: self._generate_code,
            StepType.FILE_CREATION: self._create_files,
            StepType.TESTING: self._run_tests,
            StepType.APPROVAL: self._check_approval,
            StepType.NOTIFICATION: self._notify,
            StepType.DEPLOYMENT: self._deploy,
        }
        if handlers:
            self._handlers.update(handlers)

    async def execute(self, workflow_id: int) -> WorkflowExecutionResult:
        """Run the workflow's steps in stepOrder and finalize it.

        Raises:
            ConflictException: Another execute for this id is running (or won the claim).
            ResourceNotFoundException: Unknown id.
            InvalidTransitionException: Workflow is not APPROVED; no step runs.
        """
        # Entered before the first await: a concurrent call for the same id fails here.
        with self._guard.hold(workflow_id):
            return await self._run(workflow_id)

    async def _run(self, workflow_id: int) -> WorkflowExecutionResult:
        result = WorkflowExecutionResult(workflow_id=workflow_id, start_time=utc_now())
        workflow = await self._claim(workflow_id)
        logger.info("Executing workflow %s (%s)", workflow.id, workflow.name)

        ctx = ExecutionContext(workflow=workflow)
        outcomes: list[StepStatus] = []
        error: str | None = None
        running: WorkflowStepResult | None = None
        try:
            for step in sorted(workflow.steps, key=lambda s: s.step_order):
                running = step
                status, message = await self._run_step(ctx, step)
                running = None
                outcomes.append(status)
                if status is StepStatus.FAILED:
                    result.failed_step = step.step_name
                    error = message
                    break

            if outcome_for_steps(outcomes) is LifecycleEvent.COMPLETE:
                try:
                    result.component_ids = await self._complete(ctx)
                except Exception as e:
                    logger.exception("Finalizing workflow %s failed", workflow_id)
                    error = f"Component registration failed: {e}"
                    await self._fail(workflow_id)
            else:
                await self._fail(workflow_id)
        except BaseException as e:
            # Cancellation or a failed write must not leave the workflow IN_PROGRESS.
            if isinstance(e, asyncio.CancelledError):
                reason = "Execution cancelled"
            else:
                reason = f"Execution aborted: {str(e) or type(e).__name__}"
            logger.error("Workflow %s interrupted: %s", workflow_id, reason)
            await asyncio.shield(self._abort(workflow_id, running, reason))
            raise

        result.end_time = utc_now()
        if error is None:
            result.success = True
            result.message = "Workflow executed successfully"
            logger.info(
                "Workflow %s completed in %ss; components=%s",
                workflow_id,
                result.duration_in_seconds,
                result.component_ids,
            )
        else:
            result.error = error
            result.message = f"Workflow execution failed: {error}"
            logger.warning(
                "Workflow %s failed at step %s: %s", workflow_id, result.failed_step, error
            )
        return result

    async def _claim(self, workflow_id: int) -> WorkflowResult:
        async with self._session_factory() as session:
            async with session.begin():
                repo = WorkflowRepository(session)
                workflow = await repo.get_result(workflow_id)
                if workflow is None:
                    raise ResourceNotFoundException("workflow", workflow_id)
                target = apply_event(workflow.status, LifecycleEvent.EXECUTE, workflow_id)
                if not await repo.transition(workflow_id, workflow.status, target):
                    await raise_lost_race(repo, workflow_id, LifecycleEvent.EXECUTE)
                claimed = await repo.get_result(workflow_id)
        assert claimed is not None
        return claimed

    async def _write_step(
        self, step_id: int, status: StepStatus, **values: object
    ) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await WorkflowRepository(session).update_step(step_id, status, **values)

    async def _run_step(
        self, ctx: ExecutionContext, step: WorkflowStepResult
    ) -> tuple[StepStatus, str]:
        """Run one step and persist its outcome. Returns (final status, result or error)."""
        await self._write_step(
            step.id,
            StepStatus.IN_PROGRESS,
            executed_by=self._executor,
            executed_at=utc_now(),
        )
        handler = self._handlers.get(step.step_type)
        try:
            if handler is None:
                raise StepExecutionException(
                    step.step_name, f"No handler for step type {step.step_type.value}"
                )
            output = await asyncio.wait_for(handler(ctx, step), timeout=self._step_timeout)
        except TimeoutError:
            error = StepTimeoutException(step.step_name, self._step_timeout).message
        except WorkflowServiceException as e:
            error = e.message
        except Exception as e:
            logger.exception("Step %s of workflow %s raised", step.step_name, ctx.workflow.id)
            error = str(e) or type(e).__name__
        else:
            text = output or DEFAULT_STEP_RESULT
            await self._write_step(step.id, StepStatus.COMPLETED, result=text)
            logger.info("Step %s completed: %s", step.step_name, text)
            return StepStatus.COMPLETED, text

        error = error or "Step failed"
        if is_optional_step(step.configuration):
            logger.warning("Optional step %s skipped: %s", step.step_name, error)
            await self._write_step(step.id, StepStatus.SKIPPED)
            return StepStatus.SKIPPED, error
        await self._write_step(step.id, StepStatus.FAILED, error_message=error)
        return StepStatus.FAILED, error

    async def _complete(self, ctx: ExecutionContext) -> list[int]:
        """COMPLETED and the component insert commit together, or neither does."""
        workflow_id = ctx.workflow.id
        async with self._session_factory() as session:
            async with session.begin():
                workflow_repo = WorkflowRepository(session)
                target = apply_event(
                    WorkflowStatus.IN_PROGRESS, LifecycleEvent.COMPLETE, workflow_id
                )
                if not await workflow_repo.transition(
                    workflow_id, WorkflowStatus.IN_PROGRESS, target
                ):
                    await raise_lost_race(workflow_repo, workflow_id, LifecycleEvent.COMPLETE)
                registry = ComponentService(ComponentRepository(session), workflow_repo)
                generated = ctx.generated or self._generator.generate(ctx.workflow)
                component = await registry.register_component(
                    self._generator.to_component_create(ctx.workflow, generated)
                )
        return [component.id]

    async def _fail(self, workflow_id: int) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                target = apply_event(
                    WorkflowStatus.IN_PROGRESS, LifecycleEvent.FAIL, workflow_id
                )
                moved = await WorkflowRepository(session).transition(
                    workflow_id, WorkflowStatus.IN_PROGRESS, target
                )
        if not moved:
            logger.warning("Workflow %s left IN_PROGRESS before it could be failed", workflow_id)

    async def _abort(
        self, workflow_id: int, step: WorkflowStepResult | None, reason: str
    ) -> None:
        """Best-effort FAILED marking after an interrupted run; the interruption is re-raised by the caller."""
        try:
            if step is not None:
                await self._write_step(step.id, StepStatus.FAILED, error_message=reason)
            await self._fail(workflow_id)
        except Exception:
            logger.exception("Could not mark workflow %s FAILED after interruption", workflow_id)

    def _require_generated(
        self, ctx: ExecutionContext, step: WorkflowStepResult
    ) -> GeneratedComponent:
        if ctx.generated is None:
            raise StepExecutionException(
                step.step_name, "Component code has not been generated by an earlier step"
            )
        return ctx.generated

    # Step handlers

    async def _validate(self, ctx: ExecutionContext, step: WorkflowStepResult) -> str:
        try:
            validate_for_execution(ctx.workflow)
        except ValidationException as e:
            raise StepExecutionException(step.step_name, e.message) from e
        return "Workflow validation passed"

    async def _check_dependencies(
        self, ctx: ExecutionContext, step: WorkflowStepResult
    ) -> str:
        deps = ctx.workflow.dependencies
        unresolved = [d for d in deps if not is_pascal_case(d)]
        if unresolved:
            raise StepExecutionException(
                step.step_name, f"Unresolvable dependencies: {', '.join(unresolved)}"
            )
        if ctx.workflow.component_name in deps:
            raise StepExecutionException(
                step.step_name, f"{ctx.workflow.component_name} cannot depend on itself"
            )
        for dep in deps:
            logger.debug("Dependency available: %s", dep)
        return f"All {len(deps)} dependencies available"

    async def _generate_code(self, ctx: ExecutionContext, step: WorkflowStepResult) -> str:
        try:
            ctx.generated = self._generator.generate(ctx.workflow)
        except ValueError as e:
            raise StepExecutionException(step.step_name, str(e)) from e
        return f"Generated {ctx.generated.name} ({ctx.generated.selector})"

    async def _create_files(self, ctx: ExecutionContext, step: WorkflowStepResult) -> str:
        generated = self._require_generated(ctx, step)
        ctx.planned_files = list(generated.file_paths)
        for path in ctx.planned_files:
            logger.info("Component file: %s", path)
        return "Planned files: " + ", ".join(ctx.planned_files)

    async def _run_tests(self, ctx: ExecutionContext, step: WorkflowStepResult) -> str:
        generated = self._require_generated(ctx, step)
        class_name = f"{generated.name}Component"
        if not generated.test_code or class_name not in generated.test_code:
            raise StepExecutionException(
                step.step_name, f"Generated test suite does not cover {class_name}"
            )
        return f"Test suite generated for {class_name}"

    async def _check_approval(
        self, ctx: ExecutionContext, step: WorkflowStepResult
    ) -> str:
        if not ctx.workflow.approved_by:
            raise StepExecutionException(step.step_name, "Workflow has no approver")
        return f"Approved by {ctx.workflow.approved_by}"

    async def _notify(self, ctx: ExecutionContext, step: WorkflowStepResult) -> str:
        logger.info(
            "Notification: workflow %s (%s) reached step %s",
            ctx.workflow.id,
            ctx.workflow.name,
            step.step_name,
        )
        return "Notification logged"

    async def _deploy(self, ctx: ExecutionContext, step: WorkflowStepResult) -> str:
        generated = self._require_generated(ctx, step)
        return f"{generated.name} ready for deployment as {generated.selector}"
