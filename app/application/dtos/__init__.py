"""Application DTOs (no ORM dependency)."""

from app.application.dtos.component import (
    ComponentCode,
    ComponentCreate,
    ComponentResult,
    ComponentStatistics,
    GeneratedComponent,
)
from app.application.dtos.workflow import (
    WorkflowCreate,
    WorkflowExecutionResult,
    WorkflowResult,
    WorkflowStatistics,
    WorkflowStepCreate,
    WorkflowStepResult,
    WorkflowUpdate,
)

__all__ = [
    "ComponentCode",
    "ComponentCreate",
    "ComponentResult",
    "ComponentStatistics",
    "GeneratedComponent",
    "WorkflowCreate",
    "WorkflowExecutionResult",
    "WorkflowResult",
    "WorkflowStatistics",
    "WorkflowStepCreate",
    "WorkflowStepResult",
    "WorkflowUpdate",
]
