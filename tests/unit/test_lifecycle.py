"""Workflow state machine: legal edges, illegal events, step outcome rules."""

import pytest

from app.domain.enums import LifecycleEvent, StepStatus, WorkflowStatus
from app.domain.exceptions import InvalidTransitionException
from app.domain.lifecycle import (
    TRANSITIONS,
    apply_event,
    can_apply,
    check_step_outcome,
    is_terminal,
    outcome_for_steps,
)


@pytest.mark.parametrize(
    ("current", "event", "target"),
    [
        (WorkflowStatus.DRAFT, LifecycleEvent.SUBMIT, WorkflowStatus.PENDING_APPROVAL),
        (WorkflowStatus.FAILED, LifecycleEvent.SUBMIT, WorkflowStatus.PENDING_APPROVAL),
        (WorkflowStatus.PENDING_APPROVAL, LifecycleEvent.APPROVE, WorkflowStatus.APPROVED),
        (WorkflowStatus.PENDING_APPROVAL, LifecycleEvent.REJECT, WorkflowStatus.REJECTED),
        (WorkflowStatus.APPROVED, LifecycleEvent.EXECUTE, WorkflowStatus.IN_PROGRESS),
        (WorkflowStatus.IN_PROGRESS, LifecycleEvent.COMPLETE, WorkflowStatus.COMPLETED),
        (WorkflowStatus.IN_PROGRESS, LifecycleEvent.FAIL, WorkflowStatus.FAILED),
    ],
)
def test_legal_edges(current, event, target) -> None:
    assert apply_event(current, event) is target
    assert can_apply(current, event)


def test_every_other_pair_is_rejected() -> None:
    """Exactly the seven edges exist; everything else raises without side effects."""
    illegal = [
        (status, event)
        for status in WorkflowStatus
        for event in LifecycleEvent
        if (status, event) not in TRANSITIONS
    ]
    assert len(illegal) == len(WorkflowStatus) * len(LifecycleEvent) - 7
    for status, event in illegal:
        assert not can_apply(status, event)
        with pytest.raises(InvalidTransitionException):
            apply_event(status, event)


def test_execute_from_draft_reports_current_status() -> None:
    with pytest.raises(InvalidTransitionException) as exc_info:
        apply_event(WorkflowStatus.DRAFT, LifecycleEvent.EXECUTE, workflow_id=5)
    assert exc_info.value.details["current_status"] == "DRAFT"
    assert exc_info.value.details["workflow_id"] == 5


def test_apply_event_accepts_raw_status_value() -> None:
    assert apply_event("APPROVED", LifecycleEvent.EXECUTE) is WorkflowStatus.IN_PROGRESS


def test_terminal_statuses() -> None:
    assert {s for s in WorkflowStatus if is_terminal(s)} == {
        WorkflowStatus.REJECTED,
        WorkflowStatus.COMPLETED,
        WorkflowStatus.FAILED,
    }


def test_nothing_leaves_rejected_or_completed() -> None:
    for event in LifecycleEvent:
        assert not can_apply(WorkflowStatus.REJECTED, event)
        assert not can_apply(WorkflowStatus.COMPLETED, event)


def test_outcome_complete_when_all_completed_or_skipped() -> None:
    statuses = [StepStatus.COMPLETED, StepStatus.SKIPPED, StepStatus.COMPLETED]
    assert outcome_for_steps(statuses) is LifecycleEvent.COMPLETE


def test_outcome_fail_on_any_failed_step() -> None:
    statuses = [StepStatus.COMPLETED, StepStatus.FAILED]
    assert outcome_for_steps(statuses) is LifecycleEvent.FAIL


def test_outcome_fail_when_a_step_never_ran() -> None:
    assert outcome_for_steps([StepStatus.COMPLETED, StepStatus.PENDING]) is LifecycleEvent.FAIL


def test_check_step_outcome_accepts_valid_pairs() -> None:
    check_step_outcome(StepStatus.COMPLETED, "ok", None)
    check_step_outcome(StepStatus.FAILED, None, "boom")
    check_step_outcome(StepStatus.SKIPPED, None, None)


@pytest.mark.parametrize(
    ("status", "result", "error"),
    [
        (StepStatus.COMPLETED, None, None),
        (StepStatus.FAILED, None, None),
        (StepStatus.COMPLETED, "ok", "boom"),
        (StepStatus.SKIPPED, "ok", None),
    ],
)
def test_check_step_outcome_rejects_mismatches(status, result, error) -> None:
    with pytest.raises(ValueError):
        check_step_outcome(status, result, error)
