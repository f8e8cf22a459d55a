"""Workflow naming and category business rules.

Two entry points: validate_definition() guards create/update (structure of
the request), validate_for_execution() is what a VALIDATION step runs
(category-specific business rules on top of the naming rules).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.enums import ComponentCategory
from app.domain.exceptions import ValidationException
from app.domain.value_objects import WorkflowName, is_pascal_case
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.workflow import WorkflowResult

logger = get_logger(__name__)

SAFETY_REQUIRED_DEPENDENCIES: tuple[str, ...] = ("SensorModule", "AlertSystem")
ENGINE_NAME_MARKERS: tuple[str, ...] = ("Monitor", "Controller")
INFOTAINMENT_DEPENDENCY_MARKERS: tuple[str, ...] = ("UI", "Display")
DIAGNOSTIC_REQUIRED_DEPENDENCY = "DataLogger"


def definition_errors(
    name: str | None,
    component_name: str | None,
    dependencies: list[str] | None = None,
    validation_rules: list[str] | None = None,
) -> list[tuple[str, str]]:
    """Return (field, message) pairs for every naming rule the definition breaks."""
    errors: list[tuple[str, str]] = []
    try:
        WorkflowName(name or "")
    except ValueError as e:
        errors.append(("name", str(e)))
    if not is_pascal_case(component_name):
        errors.append(
            (
                "componentName",
                "Invalid component name. Must be PascalCase and start with a letter.",
            )
        )
    for dep in dependencies or []:
        if not is_pascal_case(dep):
            errors.append(("dependencies", f"Invalid dependency name: {dep}"))
    for rule in validation_rules or []:
        if rule is None or not rule.strip():
            errors.append(("validationRules", "Empty validation rule found"))
    return errors


def validate_definition(
    name: str | None,
    component_name: str | None,
    dependencies: list[str] | None = None,
    validation_rules: list[str] | None = None,
) -> None:
    """Validate name, component name, dependency names and validation rules.

    Raises:
        ValidationException: With every violation in details.errors; field names
            the first offending attribute.
    """
    errors = definition_errors(name, component_name, dependencies, validation_rules)
    if errors:
        raise ValidationException(
            "; ".join(msg for _, msg in errors),
            field=errors[0][0],
            errors=[msg for _, msg in errors],
        )


def category_rule_errors(
    category: ComponentCategory,
    component_name: str,
    dependencies: list[str],
) -> list[str]:
    """Return violations of the category-specific rules (empty when none apply)."""
    errors: list[str] = []
    category = ComponentCategory(category)
    if category is ComponentCategory.SAFETY_SYSTEM:
        for dep in SAFETY_REQUIRED_DEPENDENCIES:
            if dep not in dependencies:
                errors.append(f"Safety system requires dependency: {dep}")
    elif category is ComponentCategory.ENGINE_MANAGEMENT:
        if not any(marker in component_name for marker in ENGINE_NAME_MARKERS):
            errors.append(
                "Engine management components should include 'Monitor' or 'Controller' in name"
            )
    elif category is ComponentCategory.INFOTAINMENT:
        if not any(
            marker in dep for dep in dependencies for marker in INFOTAINMENT_DEPENDENCY_MARKERS
        ):
            errors.append("Infotainment components should have UI/Display dependencies")
    elif category is ComponentCategory.DIAGNOSTIC:
        if DIAGNOSTIC_REQUIRED_DEPENDENCY not in dependencies:
            errors.append("Diagnostic components require DataLogger dependency")
    else:
        logger.debug("No specific validation rules for category: %s", category.value)
    return errors


def validate_for_execution(workflow: WorkflowResult) -> None:
    """Run naming and category rules against a stored workflow.

    Raises:
        ValidationException: "Workflow validation failed: ..." listing every violation.
    """
    errors = [
        msg
        for _, msg in definition_errors(
            workflow.name,
            workflow.component_name,
            workflow.dependencies,
            workflow.validation_rules,
        )
    ]
    errors.extend(
        category_rule_errors(
            workflow.category, workflow.component_name, workflow.dependencies
        )
    )
    if not workflow.dependencies:
        logger.warning("Workflow has no dependencies: %s", workflow.name)
    if errors:
        raise ValidationException(
            "Workflow validation failed: " + ", ".join(errors), errors=errors
        )
    logger.info("Workflow validation passed: %s", workflow.name)
