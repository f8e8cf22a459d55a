"""Workflow lifecycle state machine.

Pure transition table: no persistence, no clock. The Lifecycle Controller and
the workflow engine call apply_event() before mutating a record; an illegal
event raises InvalidTransitionException and the caller leaves the record as is.
"""

from app.domain.enums import LifecycleEvent, StepStatus, WorkflowStatus
from app.domain.exceptions import InvalidTransitionException

TRANSITIONS: dict[tuple[WorkflowStatus, LifecycleEvent], WorkflowStatus] = {
    (WorkflowStatus.DRAFT, LifecycleEvent.SUBMIT): WorkflowStatus.PENDING_APPROVAL,
    # Re-submission of a failed attempt starts a new attempt from step 1.
    (WorkflowStatus.FAILED, LifecycleEvent.SUBMIT): WorkflowStatus.PENDING_APPROVAL,
    (WorkflowStatus.PENDING_APPROVAL, LifecycleEvent.APPROVE): WorkflowStatus.APPROVED,
    (WorkflowStatus.PENDING_APPROVAL, LifecycleEvent.REJECT): WorkflowStatus.REJECTED,
    (WorkflowStatus.APPROVED, LifecycleEvent.EXECUTE): WorkflowStatus.IN_PROGRESS,
    (WorkflowStatus.IN_PROGRESS, LifecycleEvent.COMPLETE): WorkflowStatus.COMPLETED,
    (WorkflowStatus.IN_PROGRESS, LifecycleEvent.FAIL): WorkflowStatus.FAILED,
}

TERMINAL_STATUSES: frozenset[WorkflowStatus] = frozenset(
    {WorkflowStatus.REJECTED, WorkflowStatus.COMPLETED, WorkflowStatus.FAILED}
)

# approvedBy / approvedAt are present exactly in these states.
APPROVED_STATUSES: frozenset[WorkflowStatus] = frozenset(
    {
        WorkflowStatus.APPROVED,
        WorkflowStatus.IN_PROGRESS,
        WorkflowStatus.COMPLETED,
        WorkflowStatus.FAILED,
    }
)

EDITABLE_STATUSES: frozenset[WorkflowStatus] = frozenset(
    {WorkflowStatus.DRAFT, WorkflowStatus.PENDING_APPROVAL}
)

STEP_FINISHED_OK: frozenset[StepStatus] = frozenset(
    {StepStatus.COMPLETED, StepStatus.SKIPPED}
)


def apply_event(
    current: WorkflowStatus,
    event: LifecycleEvent,
    workflow_id: int | None = None,
) -> WorkflowStatus:
    """Return the status reached by applying event to current.

    Raises:
        InvalidTransitionException: If no edge (current, event) exists.
    """
    target = TRANSITIONS.get((WorkflowStatus(current), event))
    if target is None:
        raise InvalidTransitionException(
            WorkflowStatus(current).value, event.value, workflow_id
        )
    return target


def can_apply(current: WorkflowStatus, event: LifecycleEvent) -> bool:
    """Return whether event is legal in current."""
    return (WorkflowStatus(current), event) in TRANSITIONS


def is_terminal(status: WorkflowStatus) -> bool:
    """Return whether status is terminal (REJECTED, COMPLETED, FAILED)."""
    return WorkflowStatus(status) in TERMINAL_STATUSES


def outcome_for_steps(statuses: list[StepStatus]) -> LifecycleEvent:
    """Return COMPLETE when every step finished COMPLETED or SKIPPED, else FAIL."""
    if all(StepStatus(s) in STEP_FINISHED_OK for s in statuses):
        return LifecycleEvent.COMPLETE
    return LifecycleEvent.FAIL


def check_step_outcome(
    status: StepStatus, result: str | None, error_message: str | None
) -> None:
    """Validate the result/errorMessage pairing of a finished step.

    COMPLETED carries a result only, FAILED an error message only, SKIPPED
    neither. Raises ValueError on a mismatch.
    """
    status = StepStatus(status)
    if result is not None and error_message is not None:
        raise ValueError("A step cannot carry both a result and an error message")
    if status is StepStatus.COMPLETED and not result:
        raise ValueError("A completed step requires a result")
    if status is StepStatus.FAILED and not error_message:
        raise ValueError("A failed step requires an error message")
    if status is StepStatus.SKIPPED and (result or error_message):
        raise ValueError("A skipped step carries neither result nor error message")
