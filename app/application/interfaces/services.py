"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.component import ComponentCreate, GeneratedComponent
    from app.application.dtos.workflow import WorkflowResult


class IComponentGenerator(Protocol):
    """Protocol for rendering component source payloads from a workflow."""

    def generate(self, workflow: WorkflowResult) -> GeneratedComponent:
        """Render template, style and test code for the workflow's component."""
        ...

    def to_component_create(
        self, workflow: WorkflowResult, generated: GeneratedComponent
    ) -> ComponentCreate:
        """Build the registry command for a generated component."""
        ...
