"""Component API: thin routes delegating to ComponentService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import (
    get_component_service,
    get_component_service_for_write,
)
from app.application.use_cases.components import ComponentService
from app.core.limiter import limit_writes
from app.domain.enums import ComponentCategory
from app.schemas.component import (
    ComponentCodeResponse,
    ComponentResponse,
    ComponentStatisticsResponse,
)

router = APIRouter()


@router.get("", response_model=list[ComponentResponse])
async def list_components(
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    """List all components, newest first."""
    return [ComponentResponse.model_validate(c) for c in await service.list_components()]


@router.get("/statistics", response_model=ComponentStatisticsResponse)
async def get_component_statistics(
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    """Counts grouped by category and active/inactive."""
    return ComponentStatisticsResponse.model_validate(await service.get_statistics())


@router.get("/active", response_model=list[ComponentResponse])
async def list_active_components(
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    return [ComponentResponse.model_validate(c) for c in await service.list_active()]


@router.get("/search", response_model=list[ComponentResponse])
async def search_components(
    service: Annotated[ComponentService, Depends(get_component_service)],
    query: str = Query("", max_length=255),
):
    """Case-insensitive substring search over name, description and metadata."""
    return [ComponentResponse.model_validate(c) for c in await service.search(query)]


@router.get("/category/{category}", response_model=list[ComponentResponse])
async def list_components_by_category(
    category: ComponentCategory,
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    components = await service.list_by_category(category)
    return [ComponentResponse.model_validate(c) for c in components]


@router.get("/workflow/{workflow_id}", response_model=list[ComponentResponse])
async def list_components_by_workflow(
    workflow_id: int,
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    components = await service.list_by_workflow(workflow_id)
    return [ComponentResponse.model_validate(c) for c in components]


@router.get("/{component_id}", response_model=ComponentResponse)
async def get_component(
    component_id: int,
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    return ComponentResponse.model_validate(await service.get_component(component_id))


@router.get("/{component_id}/code", response_model=ComponentCodeResponse)
async def get_component_code(
    component_id: int,
    service: Annotated[ComponentService, Depends(get_component_service)],
):
    """Template, style and test payloads ("" where missing)."""
    return ComponentCodeResponse.model_validate(await service.get_code(component_id))


@router.put("/{component_id}/activate", response_model=ComponentResponse)
@limit_writes
async def activate_component(
    request: Request,
    component_id: int,
    service: Annotated[ComponentService, Depends(get_component_service_for_write)],
):
    """Mark active (no-op if already active)."""
    return ComponentResponse.model_validate(await service.activate(component_id))


@router.put("/{component_id}/deactivate", response_model=ComponentResponse)
@limit_writes
async def deactivate_component(
    request: Request,
    component_id: int,
    service: Annotated[ComponentService, Depends(get_component_service_for_write)],
):
    """Mark inactive (no-op if already inactive)."""
    return ComponentResponse.model_validate(await service.deactivate(component_id))


@router.delete("/{component_id}", status_code=204)
@limit_writes
async def delete_component(
    request: Request,
    component_id: int,
    service: Annotated[ComponentService, Depends(get_component_service_for_write)],
) -> None:
    """Hard delete; the owning workflow is untouched."""
    await service.delete_component(component_id)
