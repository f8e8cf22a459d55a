"""Domain exceptions for the workflow service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class WorkflowServiceException(Exception):
    """Base exception for all workflow service errors.

    All custom exceptions inherit from this class so the presentation layer
    can map them to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(WorkflowServiceException):
    """Raised when input validation fails (bad or missing fields)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        """Initialize with message, optional field name and optional error list.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            errors: Optional list of individual rule violations.
        """
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(WorkflowServiceException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'component').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidTransitionException(WorkflowServiceException):
    """Raised when a lifecycle event does not match the workflow's current state."""

    def __init__(self, current_status: str, event: str, workflow_id: int | None = None) -> None:
        """Initialize with the current state and the attempted event.

        Args:
            current_status: Status the workflow is in.
            event: Lifecycle event that was attempted (e.g. 'execute').
            workflow_id: Optional workflow id for context.
        """
        details: dict[str, Any] = {"current_status": current_status, "event": event}
        if workflow_id is not None:
            details["workflow_id"] = workflow_id
        super().__init__(
            f"Cannot {event} a workflow in status {current_status}",
            "INVALID_TRANSITION",
            details,
        )


class ConflictException(WorkflowServiceException):
    """Raised on duplicate concurrent execution, delete-while-referenced, lost updates or duplicates."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "CONFLICT", details)


class StepTimeoutException(WorkflowServiceException):
    """Raised when a step exceeds its execution time bound."""

    def __init__(self, step_name: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Step '{step_name}' timed out after {timeout_seconds:g} seconds",
            "STEP_TIMEOUT",
            {"step_name": step_name, "timeout_seconds": timeout_seconds},
        )


class StepExecutionException(WorkflowServiceException):
    """Raised by a step handler for a business failure; carried as the step's errorMessage."""

    def __init__(self, step_name: str, reason: str) -> None:
        super().__init__(
            reason,
            "STEP_EXECUTION_FAILED",
            {"step_name": step_name},
        )
