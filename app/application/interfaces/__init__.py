"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IComponentRepository,
    IWorkflowRepository,
)
from app.application.interfaces.services import IComponentGenerator

__all__ = [
    "IComponentGenerator",
    "IComponentRepository",
    "IWorkflowRepository",
]
