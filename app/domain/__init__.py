"""Domain layer: enums, exceptions, lifecycle state machine, value objects.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    ComponentCategory,
    LifecycleEvent,
    StepStatus,
    StepType,
    WorkflowStatus,
)
from app.domain.exceptions import (
    ConflictException,
    InvalidTransitionException,
    ResourceNotFoundException,
    StepExecutionException,
    StepTimeoutException,
    ValidationException,
    WorkflowServiceException,
)
from app.domain.lifecycle import apply_event, can_apply, is_terminal
from app.domain.value_objects import (
    ComponentName,
    DependencyName,
    SemanticVersion,
    WorkflowName,
)

__all__ = [
    # Enums
    "ComponentCategory",
    "LifecycleEvent",
    "StepStatus",
    "StepType",
    "WorkflowStatus",
    # Exceptions
    "ConflictException",
    "InvalidTransitionException",
    "ResourceNotFoundException",
    "StepExecutionException",
    "StepTimeoutException",
    "ValidationException",
    "WorkflowServiceException",
    # Lifecycle
    "apply_event",
    "can_apply",
    "is_terminal",
    # Value objects
    "ComponentName",
    "DependencyName",
    "SemanticVersion",
    "WorkflowName",
]
