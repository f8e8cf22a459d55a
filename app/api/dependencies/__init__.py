"""API dependencies: composition root wiring services to request-scoped sessions."""

from app.api.dependencies.component import (
    get_component_service,
    get_component_service_for_write,
)
from app.api.dependencies.workflow import (
    get_execution_guard,
    get_lifecycle_controller,
    get_workflow_engine,
    get_workflow_service,
    get_workflow_service_for_write,
)

__all__ = [
    "get_component_service",
    "get_component_service_for_write",
    "get_execution_guard",
    "get_lifecycle_controller",
    "get_workflow_engine",
    "get_workflow_service",
    "get_workflow_service_for_write",
]
