"""Component repository (implements IComponentRepository)."""

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.component import ComponentCreate, ComponentResult
from app.domain.enums import ComponentCategory
from app.infrastructure.persistence.models.component import Component
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _to_result(c: Component) -> ComponentResult:
    return ComponentResult(
        id=c.id,
        name=c.name,
        description=c.description,
        category=ComponentCategory(c.category),
        component_type=c.component_type,
        selector=c.selector,
        template_code=c.template_code,
        style_code=c.style_code,
        test_code=c.test_code,
        dependencies=list(c.dependencies or []),
        inputs=list(c.inputs or []),
        outputs=list(c.outputs or []),
        version=c.version,
        created_by=c.created_by,
        workflow_id=c.workflow_id,
        created_at=ensure_utc(c.created_at),
        is_active=bool(c.is_active),
        metadata=c.component_metadata,
    )


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ComponentRepository(BaseRepository[Component]):
    """Component repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Component)

    async def create_component(self, data: ComponentCreate) -> ComponentResult:
        obj = Component(
            name=data.name,
            description=data.description,
            category=ComponentCategory(data.category).value,
            component_type=data.component_type,
            selector=data.selector,
            template_code=data.template_code,
            style_code=data.style_code,
            test_code=data.test_code,
            dependencies=list(data.dependencies),
            inputs=list(data.inputs),
            outputs=list(data.outputs),
            version=data.version,
            created_by=data.created_by,
            workflow_id=data.workflow_id,
            is_active=data.is_active,
            component_metadata=data.metadata,
        )
        return _to_result(await self.create(obj))

    async def get_result(self, component_id: int) -> ComponentResult | None:
        obj = await self.get_by_id(component_id)
        return _to_result(obj) if obj else None

    def _listing(self):
        return select(Component).order_by(Component.created_at.desc(), Component.id.desc())

    async def list_all(self) -> list[ComponentResult]:
        return [_to_result(c) for c in await self._scalars(self._listing())]

    async def list_by_category(
        self, category: ComponentCategory
    ) -> list[ComponentResult]:
        q = self._listing().where(Component.category == ComponentCategory(category).value)
        return [_to_result(c) for c in await self._scalars(q)]

    async def list_by_workflow(self, workflow_id: int) -> list[ComponentResult]:
        q = self._listing().where(Component.workflow_id == workflow_id)
        return [_to_result(c) for c in await self._scalars(q)]

    async def list_active(self) -> list[ComponentResult]:
        q = self._listing().where(Component.is_active.is_(True))
        return [_to_result(c) for c in await self._scalars(q)]

    async def search(self, query: str) -> list[ComponentResult]:
        """ILIKE '%query%' over name, description and metadata (wildcards in query are literal)."""
        pattern = _like_pattern(query)
        q = self._listing().where(
            or_(
                Component.name.ilike(pattern, escape="\\"),
                Component.description.ilike(pattern, escape="\\"),
                Component.component_metadata.ilike(pattern, escape="\\"),
            )
        )
        return [_to_result(c) for c in await self._scalars(q)]

    async def set_active(
        self, component_id: int, active: bool
    ) -> ComponentResult | None:
        obj = await self.get_by_id(component_id)
        if obj is None:
            return None
        if bool(obj.is_active) != active:
            obj.is_active = active
            await self.flush()
        return _to_result(obj)

    async def delete_component(self, component_id: int) -> bool:
        obj = await self.get_by_id(component_id)
        if obj is None:
            return False
        await self.delete(obj)
        return True

    async def count_by_workflow(self, workflow_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Component.id)).where(Component.workflow_id == workflow_id)
        )
        return result.scalar_one() or 0

    async def count_by_category_and_active(
        self,
    ) -> dict[tuple[ComponentCategory, bool], int]:
        result = await self.db.execute(
            select(Component.category, Component.is_active, func.count(Component.id))
            .group_by(Component.category, Component.is_active)
        )
        return {
            (ComponentCategory(category), bool(is_active)): n
            for category, is_active, n in result.all()
        }
