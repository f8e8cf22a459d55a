"""DTOs for workflows, their steps, and execution results."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import ComponentCategory, StepStatus, StepType, WorkflowStatus
from app.shared.utils.datetime import seconds_between


@dataclass(frozen=True)
class WorkflowStepCreate:
    """Step definition supplied on workflow create/update (status always starts PENDING)."""

    step_order: int
    step_name: str
    step_type: StepType
    step_description: str | None = None
    configuration: str | None = None


@dataclass(frozen=True)
class WorkflowCreate:
    """Command for creating a workflow. Status is never taken from the caller."""

    name: str
    category: ComponentCategory
    component_name: str
    created_by: str
    description: str | None = None
    component_type: str = "component"
    dependencies: list[str] | None = None
    validation_rules: list[str] = field(default_factory=list)
    template_name: str | None = None
    configuration: str | None = None
    steps: list[WorkflowStepCreate] | None = None


@dataclass(frozen=True)
class WorkflowStepResult:
    """Workflow step read-model."""

    id: int
    step_order: int
    step_name: str
    step_description: str | None
    step_type: StepType
    status: StepStatus
    configuration: str | None
    executed_by: str | None
    executed_at: datetime | None
    result: str | None
    error_message: str | None


@dataclass(frozen=True)
class WorkflowResult:
    """Workflow read-model (result of get, list, create, update and lifecycle events)."""

    id: int
    name: str
    description: str | None
    status: WorkflowStatus
    category: ComponentCategory
    component_name: str
    component_type: str
    dependencies: list[str]
    validation_rules: list[str]
    template_name: str
    configuration: str | None
    created_by: str
    approved_by: str | None
    approved_at: datetime | None
    rejected_by: str | None
    rejection_reason: str | None
    created_at: datetime
    updated_at: datetime
    version: int
    steps: list[WorkflowStepResult] = field(default_factory=list)


@dataclass
class WorkflowExecutionResult:
    """Report of one execute call. Returned to the caller, never persisted."""

    workflow_id: int
    success: bool = False
    message: str = ""
    error: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    failed_step: str | None = None
    component_ids: list[int] = field(default_factory=list)

    @property
    def duration_in_seconds(self) -> int:
        """Whole seconds between start_time and end_time (0 if either is missing)."""
        return seconds_between(self.start_time, self.end_time)


@dataclass(frozen=True)
class WorkflowUpdate:
    """Patch for an editable workflow. None means "leave unchanged".

    status is accepted only so that a caller trying to move it directly can be
    rejected; version, when given, must match the stored optimistic-lock counter.
    """

    name: str | None = None
    description: str | None = None
    category: ComponentCategory | None = None
    component_name: str | None = None
    component_type: str | None = None
    dependencies: list[str] | None = None
    validation_rules: list[str] | None = None
    template_name: str | None = None
    configuration: str | None = None
    status: WorkflowStatus | None = None
    steps: list[WorkflowStepCreate] | None = None
    version: int | None = None


@dataclass(frozen=True)
class WorkflowStatistics:
    """Workflow counts: total and one per status."""

    total: int
    draft: int
    pending_approval: int
    approved: int
    in_progress: int
    completed: int
    failed: int
    rejected: int
