"""Application use cases: one entry point per workflow or component operation."""

from app.application.use_cases.components import ComponentService
from app.application.use_cases.workflows import LifecycleController, WorkflowService

__all__ = [
    "ComponentService",
    "LifecycleController",
    "WorkflowService",
]
