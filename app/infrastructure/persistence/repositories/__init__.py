"""Repositories: persistence adapters returning application DTOs."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.component_repo import (
    ComponentRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import WorkflowRepository

__all__ = [
    "BaseRepository",
    "ComponentRepository",
    "WorkflowRepository",
]
