"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.component_generator import ComponentGenerator
from app.infrastructure.services.component_template_renderer import (
    ComponentTemplateRenderer,
)
from app.infrastructure.services.execution_guard import ExecutionGuard
from app.infrastructure.services.workflow_engine import WorkflowEngine

__all__ = [
    "ComponentGenerator",
    "ComponentTemplateRenderer",
    "ExecutionGuard",
    "WorkflowEngine",
]
