"""Workflow API schemas (camelCase JSON)."""

from datetime import datetime

from pydantic import Field

from app.domain.enums import ComponentCategory, StepStatus, StepType, WorkflowStatus
from app.schemas.base import CamelModel


class WorkflowStepRequest(CamelModel):
    """Step definition in create/update bodies. Any status sent is ignored (steps start PENDING)."""

    step_order: int = Field(..., ge=1)
    step_name: str = Field(..., min_length=1, max_length=255)
    step_type: StepType
    step_description: str | None = None
    configuration: str | None = None


class WorkflowCreateRequest(CamelModel):
    """Request body for creating a workflow.

    Naming rules (name length, PascalCase component and dependency names) are
    checked by the service and reported as 400 VALIDATION_ERROR.
    """

    name: str = Field(..., max_length=255)
    description: str | None = None
    category: ComponentCategory
    component_name: str = Field(..., max_length=255)
    component_type: str = Field(default="component", min_length=1, max_length=64)
    dependencies: list[str] | None = None
    validation_rules: list[str] = Field(default_factory=list)
    template_name: str | None = Field(default=None, max_length=64)
    configuration: str | None = None
    created_by: str = Field(..., min_length=1, max_length=255)
    steps: list[WorkflowStepRequest] | None = None


class WorkflowUpdateRequest(CamelModel):
    """Request body for updating a workflow (partial). status must equal the current status."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    category: ComponentCategory | None = None
    component_name: str | None = Field(default=None, max_length=255)
    component_type: str | None = Field(default=None, min_length=1, max_length=64)
    dependencies: list[str] | None = None
    validation_rules: list[str] | None = None
    template_name: str | None = Field(default=None, max_length=64)
    configuration: str | None = None
    status: WorkflowStatus | None = None
    steps: list[WorkflowStepRequest] | None = None
    version: int | None = Field(default=None, ge=1)


class WorkflowStepResponse(CamelModel):
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


class WorkflowResponse(CamelModel):
    """Workflow with its steps in stepOrder."""

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
    steps: list[WorkflowStepResponse]


class WorkflowStatusResponse(CamelModel):
    """Response for GET /workflows/{id}/status."""

    id: int
    name: str
    status: WorkflowStatus
    category: ComponentCategory
    created_at: datetime
    updated_at: datetime


class WorkflowStatisticsResponse(CamelModel):
    total: int
    draft: int
    pending_approval: int
    approved: int
    in_progress: int
    completed: int
    failed: int
    rejected: int


class ApproveRequest(CamelModel):
    approved_by: str | None = None


class RejectRequest(CamelModel):
    rejected_by: str | None = None
    reason: str | None = None


class WorkflowExecutionResponse(CamelModel):
    """Outcome of one execute call (returned for both success and failure)."""

    workflow_id: int
    success: bool
    message: str
    error: str | None
    start_time: datetime | None
    end_time: datetime | None
    duration_in_seconds: int
    failed_step: str | None
    component_ids: list[int]
