"""Component use cases."""

from app.application.use_cases.components.component_operations import ComponentService

__all__ = ["ComponentService"]
