"""Domain enumerations for the workflow service.

Closed sets of domain values (workflow status, vehicle subsystem category,
step type and step status). Stored and serialized by value.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowStatus(_ValuesMixin, str, Enum):
    """Workflow lifecycle status.

    DRAFT is initial; REJECTED, COMPLETED and FAILED are terminal
    (FAILED may be re-submitted as a new attempt).
    """

    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ComponentCategory(_ValuesMixin, str, Enum):
    """Vehicle subsystem domain a workflow or component targets."""

    ENGINE_MANAGEMENT = "ENGINE_MANAGEMENT"
    SAFETY_SYSTEM = "SAFETY_SYSTEM"
    INFOTAINMENT = "INFOTAINMENT"
    DIAGNOSTIC = "DIAGNOSTIC"
    POWERTRAIN = "POWERTRAIN"
    CHASSIS_CONTROL = "CHASSIS_CONTROL"
    BODY_ELECTRONICS = "BODY_ELECTRONICS"
    TELEMATICS = "TELEMATICS"


class StepType(_ValuesMixin, str, Enum):
    """Kind of work a workflow step performs."""

    VALIDATION = "VALIDATION"
    CODE_GENERATION = "CODE_GENERATION"
    FILE_CREATION = "FILE_CREATION"
    DEPENDENCY_CHECK = "DEPENDENCY_CHECK"
    APPROVAL = "APPROVAL"
    NOTIFICATION = "NOTIFICATION"
    TESTING = "TESTING"
    DEPLOYMENT = "DEPLOYMENT"


class StepStatus(_ValuesMixin, str, Enum):
    """Workflow step execution status."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class LifecycleEvent(_ValuesMixin, str, Enum):
    """Events that drive the workflow state machine."""

    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    EXECUTE = "execute"
    COMPLETE = "complete"
    FAIL = "fail"
