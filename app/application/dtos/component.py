"""DTOs for generated components."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import ComponentCategory


@dataclass(frozen=True)
class ComponentCreate:
    """Command for registering a generated component."""

    name: str
    category: ComponentCategory
    component_type: str
    selector: str
    template_code: str
    version: str
    created_by: str
    workflow_id: int
    description: str | None = None
    style_code: str | None = None
    test_code: str | None = None
    dependencies: list[str] = field(default_factory=list)
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    is_active: bool = True
    metadata: str | None = None


@dataclass(frozen=True)
class ComponentResult:
    """Component read-model."""

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


@dataclass(frozen=True)
class GeneratedComponent:
    """Source payloads rendered for a workflow (before registration)."""

    name: str
    selector: str
    template_code: str
    style_code: str
    test_code: str
    inputs: list[str]
    outputs: list[str]
    file_paths: list[str]


@dataclass(frozen=True)
class ComponentStatistics:
    """Component counts: total, active, inactive and per-category active/inactive."""

    total: int
    active: int
    inactive: int
    by_category: dict[str, dict[str, int]]


@dataclass(frozen=True)
class ComponentCode:
    """Source payloads of a component (empty strings for missing payloads)."""

    template_code: str
    style_code: str
    test_code: str
