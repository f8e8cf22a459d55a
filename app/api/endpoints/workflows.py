"""Workflow API: thin routes delegating to WorkflowService, LifecycleController and WorkflowEngine.

Static paths (statistics, pending-approval, status/, category/) are declared
before /{workflow_id} so they are not captured as ids.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import (
    get_lifecycle_controller,
    get_workflow_engine,
    get_workflow_service,
    get_workflow_service_for_write,
)
from app.application.dtos.workflow import (
    WorkflowCreate,
    WorkflowStepCreate,
    WorkflowUpdate,
)
from app.application.use_cases.workflows import LifecycleController, WorkflowService
from app.core.limiter import limit_writes
from app.domain.enums import ComponentCategory, WorkflowStatus
from app.infrastructure.services import WorkflowEngine
from app.schemas.base import MessageResponse
from app.schemas.workflow import (
    ApproveRequest,
    RejectRequest,
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowStatisticsResponse,
    WorkflowStatusResponse,
    WorkflowStepRequest,
    WorkflowUpdateRequest,
)

router = APIRouter()


def _steps(body_steps: list[WorkflowStepRequest] | None) -> list[WorkflowStepCreate] | None:
    if body_steps is None:
        return None
    return [
        WorkflowStepCreate(
            step_order=s.step_order,
            step_name=s.step_name,
            step_type=s.step_type,
            step_description=s.step_description,
            configuration=s.configuration,
        )
        for s in body_steps
    ]


@router.post("", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_workflow(
    request: Request,
    body: WorkflowCreateRequest,
    service: Annotated[WorkflowService, Depends(get_workflow_service_for_write)],
):
    """Create a workflow in DRAFT (category defaults fill omitted dependencies, template and steps)."""
    workflow = await service.create_workflow(
        WorkflowCreate(
            name=body.name,
            description=body.description,
            category=body.category,
            component_name=body.component_name,
            component_type=body.component_type,
            dependencies=body.dependencies,
            validation_rules=body.validation_rules,
            template_name=body.template_name,
            configuration=body.configuration,
            created_by=body.created_by,
            steps=_steps(body.steps),
        )
    )
    return WorkflowResponse.model_validate(workflow)


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    """List all workflows, newest first."""
    workflows = await service.list_workflows()
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get("/statistics", response_model=WorkflowStatisticsResponse)
async def get_workflow_statistics(
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    """Total and per-status workflow counts."""
    return WorkflowStatisticsResponse.model_validate(await service.get_statistics())


@router.get("/pending-approval", response_model=list[WorkflowResponse])
async def list_pending_approval(
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    """Workflows waiting for approval, newest first."""
    workflows = await service.list_pending_approval()
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get("/status/{status}", response_model=list[WorkflowResponse])
async def list_workflows_by_status(
    status: WorkflowStatus,
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    workflows = await service.list_by_status(status)
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get("/category/{category}", response_model=list[WorkflowResponse])
async def list_workflows_by_category(
    category: ComponentCategory,
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    workflows = await service.list_by_category(category)
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: int,
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    """Get workflow by id."""
    return WorkflowResponse.model_validate(await service.get_workflow(workflow_id))


@router.put("/{workflow_id}", response_model=WorkflowResponse)
@limit_writes
async def update_workflow(
    request: Request,
    workflow_id: int,
    body: WorkflowUpdateRequest,
    service: Annotated[WorkflowService, Depends(get_workflow_service_for_write)],
):
    """Update an editable (DRAFT or PENDING_APPROVAL) workflow. Status cannot be changed here."""
    workflow = await service.update_workflow(
        workflow_id,
        WorkflowUpdate(
            name=body.name,
            description=body.description,
            category=body.category,
            component_name=body.component_name,
            component_type=body.component_type,
            dependencies=body.dependencies,
            validation_rules=body.validation_rules,
            template_name=body.template_name,
            configuration=body.configuration,
            status=body.status,
            steps=_steps(body.steps),
            version=body.version,
        ),
    )
    return WorkflowResponse.model_validate(workflow)


@router.delete("/{workflow_id}", status_code=204)
@limit_writes
async def delete_workflow(
    request: Request,
    workflow_id: int,
    service: Annotated[WorkflowService, Depends(get_workflow_service_for_write)],
) -> None:
    """Delete a workflow; 409 while any component references it."""
    await service.delete_workflow(workflow_id)


@router.get("/{workflow_id}/status", response_model=WorkflowStatusResponse)
async def get_workflow_status(
    workflow_id: int,
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    """Status summary: id, name, status, category, createdAt, updatedAt."""
    return WorkflowStatusResponse.model_validate(await service.get_workflow(workflow_id))


@router.post("/{workflow_id}/submit", response_model=WorkflowResponse)
@limit_writes
async def submit_workflow(
    request: Request,
    workflow_id: int,
    controller: Annotated[LifecycleController, Depends(get_lifecycle_controller)],
):
    """Submit a DRAFT (or re-submit a FAILED) workflow for approval."""
    return WorkflowResponse.model_validate(await controller.submit(workflow_id))


@router.post("/{workflow_id}/approve", response_model=MessageResponse)
@limit_writes
async def approve_workflow(
    request: Request,
    workflow_id: int,
    body: ApproveRequest,
    controller: Annotated[LifecycleController, Depends(get_lifecycle_controller)],
):
    await controller.approve(workflow_id, body.approved_by)
    return MessageResponse(message="Workflow approved successfully")


@router.post("/{workflow_id}/reject", response_model=MessageResponse)
@limit_writes
async def reject_workflow(
    request: Request,
    workflow_id: int,
    body: RejectRequest,
    controller: Annotated[LifecycleController, Depends(get_lifecycle_controller)],
):
    await controller.reject(workflow_id, body.rejected_by, body.reason)
    return MessageResponse(message="Workflow rejected")


@router.post("/{workflow_id}/execute", response_model=WorkflowExecutionResponse)
@limit_writes
async def execute_workflow(
    request: Request,
    workflow_id: int,
    engine: Annotated[WorkflowEngine, Depends(get_workflow_engine)],
):
    """Execute an APPROVED workflow. Step failures are reported in the body, not as errors."""
    result = await engine.execute(workflow_id)
    return WorkflowExecutionResponse.model_validate(result)
