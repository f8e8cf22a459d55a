"""Component API schemas (camelCase JSON)."""

from datetime import datetime

from app.domain.enums import ComponentCategory
from app.schemas.base import CamelModel


class ComponentResponse(CamelModel):
    """Generated component."""

    id: int
    name: str
    description: str | None
    category: ComponentCategory
    component_type: str
    selector: str
    template_code: str
    style_code: str | None
    test_code: str | None
    dependencies: list[str]
    inputs: list[str]
    outputs: list[str]
    version: str
    created_by: str
    workflow_id: int
    created_at: datetime
    is_active: bool
    metadata: str | None


class CategoryCountResponse(CamelModel):
    active: int
    inactive: int


class ComponentStatisticsResponse(CamelModel):
    """Counts overall and per category (keys are category values)."""

    total: int
    active: int
    inactive: int
    by_category: dict[str, CategoryCountResponse]


class ComponentCodeResponse(CamelModel):
    """Source payloads of a component; empty strings where none was generated."""

    template_code: str
    style_code: str
    test_code: str
