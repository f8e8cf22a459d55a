"""Category lookup tables: default dependencies, default template, default step plan.

Pure functions over constant tables; no state.
"""

from app.application.dtos.workflow import WorkflowStepCreate
from app.domain.enums import ComponentCategory, StepType

BASE_TEMPLATE = "BASE"

CATEGORY_DEPENDENCIES: dict[ComponentCategory, tuple[str, ...]] = {
    ComponentCategory.SAFETY_SYSTEM: (
        "SensorModule",
        "AlertSystem",
        "BrakeSystem",
        "DataLogger",
    ),
    ComponentCategory.ENGINE_MANAGEMENT: (
        "EngineDataService",
        "SensorModule",
        "DataLogger",
        "ECUInterface",
    ),
    ComponentCategory.INFOTAINMENT: (
        "MediaPlayer",
        "DisplayService",
        "UIComponents",
        "ConnectivityModule",
    ),
    ComponentCategory.DIAGNOSTIC: (
        "DataLogger",
        "OBDInterface",
        "ErrorCodeService",
        "ReportGenerator",
    ),
    ComponentCategory.POWERTRAIN: (
        "TransmissionControl",
        "EngineDataService",
        "SensorModule",
    ),
    ComponentCategory.CHASSIS_CONTROL: (
        "SuspensionControl",
        "SteeringModule",
        "SensorModule",
    ),
    ComponentCategory.BODY_ELECTRONICS: (
        "LightingControl",
        "DoorModule",
        "WindowControl",
    ),
    ComponentCategory.TELEMATICS: (
        "GPSModule",
        "CommunicationService",
        "DataLogger",
    ),
}

# (name, type, description) in execution order.
DEFAULT_STEP_PLAN: tuple[tuple[str, StepType, str], ...] = (
    ("Validation", StepType.VALIDATION, "Validate workflow configuration and dependencies"),
    ("Dependency Check", StepType.DEPENDENCY_CHECK, "Check if all dependencies are available"),
    ("Code Generation", StepType.CODE_GENERATION, "Generate component code from template"),
    ("File Creation", StepType.FILE_CREATION, "Create component files in the project"),
    ("Testing", StepType.TESTING, "Run automated tests on generated component"),
)


def default_dependencies(category: ComponentCategory) -> list[str]:
    """Return the default dependency list for a category (a fresh list)."""
    return list(CATEGORY_DEPENDENCIES.get(ComponentCategory(category), ()))


def default_template_name(category: ComponentCategory) -> str:
    """Return the default template name for a category (the category value)."""
    return ComponentCategory(category).value


def default_steps() -> list[WorkflowStepCreate]:
    """Return the default five-step plan, ordered from 1."""
    return [
        WorkflowStepCreate(
            step_order=order,
            step_name=name,
            step_type=step_type,
            step_description=description,
        )
        for order, (name, step_type, description) in enumerate(DEFAULT_STEP_PLAN, start=1)
    ]
