"""Application services: pure rules and lookups shared by use cases and the engine."""

from app.application.services.category_defaults import (
    default_dependencies,
    default_steps,
    default_template_name,
)
from app.application.services.workflow_validator import (
    validate_definition,
    validate_for_execution,
)

__all__ = [
    "default_dependencies",
    "default_steps",
    "default_template_name",
    "validate_definition",
    "validate_for_execution",
]
