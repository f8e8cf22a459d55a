"""Workflow use cases."""

from app.application.use_cases.workflows.lifecycle_operations import (
    LifecycleController,
    raise_lost_race,
)
from app.application.use_cases.workflows.workflow_operations import WorkflowService

__all__ = [
    "LifecycleController",
    "WorkflowService",
    "raise_lost_race",
]
