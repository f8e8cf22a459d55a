"""Component registry use cases: register, query, activation and statistics."""

from __future__ import annotations

from app.application.dtos.component import (
    ComponentCode,
    ComponentCreate,
    ComponentResult,
    ComponentStatistics,
)
from app.application.interfaces.repositories import (
    IComponentRepository,
    IWorkflowRepository,
)
from app.domain.enums import ComponentCategory, WorkflowStatus
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import ComponentName, SemanticVersion
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ComponentService:
    """Registry of generated components."""

    def __init__(
        self,
        component_repo: IComponentRepository,
        workflow_repo: IWorkflowRepository,
    ) -> None:
        self._component_repo = component_repo
        self._workflow_repo = workflow_repo

    async def register_component(self, data: ComponentCreate) -> ComponentResult:
        """Persist a component for a workflow that is COMPLETED right now.

        Raises:
            ValidationException: Name or version is malformed.
            ResourceNotFoundException: Owning workflow does not exist.
            ConflictException: Owning workflow is not COMPLETED.
        """
        try:
            ComponentName(data.name)
            SemanticVersion(data.version)
        except ValueError as e:
            raise ValidationException(str(e)) from e
        status = await self._workflow_repo.get_status(data.workflow_id)
        if status is None:
            raise ResourceNotFoundException("workflow", data.workflow_id)
        if status is not WorkflowStatus.COMPLETED:
            raise ConflictException(
                "Components can only be created for a COMPLETED workflow",
                workflow_id=data.workflow_id,
                current_status=status.value,
            )
        component = await self._component_repo.create_component(data)
        logger.info(
            "Component registered: id=%s name=%s workflow_id=%s",
            component.id,
            component.name,
            component.workflow_id,
        )
        return component

    async def get_component(self, component_id: int) -> ComponentResult:
        """Return component by id. Raises ResourceNotFoundException if missing."""
        component = await self._component_repo.get_result(component_id)
        if not component:
            raise ResourceNotFoundException("component", component_id)
        return component

    async def list_components(self) -> list[ComponentResult]:
        return await self._component_repo.list_all()

    async def list_by_category(
        self, category: ComponentCategory
    ) -> list[ComponentResult]:
        return await self._component_repo.list_by_category(ComponentCategory(category))

    async def list_by_workflow(self, workflow_id: int) -> list[ComponentResult]:
        return await self._component_repo.list_by_workflow(workflow_id)

    async def list_active(self) -> list[ComponentResult]:
        return await self._component_repo.list_active()

    async def search(self, query: str | None) -> list[ComponentResult]:
        """Case-insensitive substring match over name, description and metadata.

        A blank query matches every component.
        """
        query = (query or "").strip()
        if not query:
            return await self._component_repo.list_all()
        return await self._component_repo.search(query)

    async def activate(self, component_id: int) -> ComponentResult:
        """Set isActive; no-op when already active."""
        return await self._set_active(component_id, True)

    async def deactivate(self, component_id: int) -> ComponentResult:
        """Clear isActive; no-op when already inactive."""
        return await self._set_active(component_id, False)

    async def _set_active(self, component_id: int, active: bool) -> ComponentResult:
        component = await self._component_repo.set_active(component_id, active)
        if not component:
            raise ResourceNotFoundException("component", component_id)
        return component

    async def delete_component(self, component_id: int) -> None:
        """Hard delete. The owning workflow is untouched."""
        if not await self._component_repo.delete_component(component_id):
            raise ResourceNotFoundException("component", component_id)
        logger.info("Component deleted: id=%s", component_id)

    async def get_statistics(self) -> ComponentStatistics:
        """Return total, active and inactive counts, overall and per category."""
        counts = await self._component_repo.count_by_category_and_active()
        by_category: dict[str, dict[str, int]] = {}
        for (category, is_active), n in counts.items():
            bucket = by_category.setdefault(
                ComponentCategory(category).value, {"active": 0, "inactive": 0}
            )
            bucket["active" if is_active else "inactive"] += n
        active = sum(b["active"] for b in by_category.values())
        inactive = sum(b["inactive"] for b in by_category.values())
        return ComponentStatistics(
            total=active + inactive,
            active=active,
            inactive=inactive,
            by_category=by_category,
        )

    async def get_code(self, component_id: int) -> ComponentCode:
        """Return template, style and test payloads ("" where missing)."""
        component = await self.get_component(component_id)
        return ComponentCode(
            template_code=component.template_code or "",
            style_code=component.style_code or "",
            test_code=component.test_code or "",
        )
