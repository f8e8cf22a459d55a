"""Domain value objects and shared value types."""

from app.domain.value_objects.core import (
    ComponentName,
    DependencyName,
    SemanticVersion,
    WorkflowName,
    is_pascal_case,
    to_kebab_case,
)

__all__ = [
    "ComponentName",
    "DependencyName",
    "SemanticVersion",
    "WorkflowName",
    "is_pascal_case",
    "to_kebab_case",
]
