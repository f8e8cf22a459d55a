"""Component generator: renders a workflow's component payloads (implements IComponentGenerator)."""

from __future__ import annotations

from app.application.dtos.component import ComponentCreate, GeneratedComponent
from app.application.dtos.workflow import WorkflowResult
from app.domain.value_objects import ComponentName, to_kebab_case
from app.infrastructure.services.component_template_renderer import (
    ComponentTemplateRenderer,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

COMPONENTS_ROOT = "src/app/components"
_FILE_SUFFIXES: tuple[str, ...] = (
    ".component.ts",
    ".component.html",
    ".component.scss",
    ".component.spec.ts",
)


class ComponentGenerator:
    """Builds template, style and test source for the component a workflow requests."""

    def __init__(
        self,
        renderer: ComponentTemplateRenderer | None = None,
        *,
        default_version: str = "1.0.0",
    ) -> None:
        self._renderer = renderer or ComponentTemplateRenderer()
        self._default_version = default_version

    def generate(self, workflow: WorkflowResult) -> GeneratedComponent:
        """Render payloads. Raises ValueError if the component name is not PascalCase."""
        name = ComponentName(workflow.component_name)
        category = workflow.category.value
        context = {
            "component_name": name.value,
            "selector": name.selector,
            "kebab": name.kebab,
            "description": workflow.description or "",
            "category": category,
            "imports": [
                {"name": dep, "path": to_kebab_case(dep)} for dep in workflow.dependencies
            ],
        }
        # Category template wins over templateName so safety logic is never lost.
        key = self._renderer.resolve_key(category, workflow.template_name)
        template_code = self._renderer.render_component(key, context)
        inputs, outputs = self._renderer.extract_ports(template_code)
        logger.info(
            "Generated component %s for workflow %s using template %s",
            name.value,
            workflow.id,
            key,
        )
        return GeneratedComponent(
            name=name.value,
            selector=name.selector,
            template_code=template_code,
            style_code=self._renderer.render_style(context),
            test_code=self._renderer.render_test(context),
            inputs=inputs,
            outputs=outputs,
            file_paths=self.file_paths(name.value),
        )

    @staticmethod
    def file_paths(component_name: str) -> list[str]:
        """Return the file set a component occupies in the project tree."""
        kebab = to_kebab_case(component_name)
        return [f"{COMPONENTS_ROOT}/{kebab}/{kebab}{suffix}" for suffix in _FILE_SUFFIXES]

    def to_component_create(
        self, workflow: WorkflowResult, generated: GeneratedComponent
    ) -> ComponentCreate:
        """Registry command for a generated component, tagged with the owning workflow."""
        return ComponentCreate(
            name=generated.name,
            description=workflow.description,
            category=workflow.category,
            component_type=workflow.component_type,
            selector=generated.selector,
            template_code=generated.template_code,
            style_code=generated.style_code,
            test_code=generated.test_code,
            dependencies=list(workflow.dependencies),
            inputs=list(generated.inputs),
            outputs=list(generated.outputs),
            version=self._default_version,
            created_by=workflow.created_by,
            workflow_id=workflow.id,
            is_active=True,
            metadata=workflow.configuration,
        )
