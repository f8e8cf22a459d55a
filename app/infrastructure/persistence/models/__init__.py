"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.component import Component
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    IntegerIdMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.workflow import Workflow, WorkflowStep

__all__ = [
    "Component",
    "CreatedAtMixin",
    "IntegerIdMixin",
    "TimestampMixin",
    "Workflow",
    "WorkflowStep",
]
