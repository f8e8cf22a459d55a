"""Pydantic request/response schemas for the API."""

from app.schemas.base import CamelModel, MessageResponse
from app.schemas.component import (
    ComponentCodeResponse,
    ComponentResponse,
    ComponentStatisticsResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.workflow import (
    ApproveRequest,
    RejectRequest,
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowStatisticsResponse,
    WorkflowStatusResponse,
    WorkflowUpdateRequest,
)

__all__ = [
    "ApproveRequest",
    "CamelModel",
    "ComponentCodeResponse",
    "ComponentResponse",
    "ComponentStatisticsResponse",
    "HealthResponse",
    "MessageResponse",
    "RejectRequest",
    "WorkflowCreateRequest",
    "WorkflowExecutionResponse",
    "WorkflowResponse",
    "WorkflowStatisticsResponse",
    "WorkflowStatusResponse",
    "WorkflowUpdateRequest",
]
