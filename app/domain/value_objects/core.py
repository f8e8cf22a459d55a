"""Domain value objects for the workflow service.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

# PascalCase identifier: starts uppercase, then letters and digits.
_PASCAL_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?$")


def _validate_pascal(value: str, field_name: str) -> None:
    """Validate non-empty PascalCase identifier. Raises ValueError on failure."""
    if not value:
        raise ValueError(f"{field_name} must be a non-empty string")
    if not _PASCAL_RE.match(value):
        raise ValueError(
            f"{field_name} must start with an uppercase letter and contain only "
            "letters and digits (e.g., 'BrakeAlertModule')"
        )


@dataclass(frozen=True)
class WorkflowName:
    """Value object for workflow name: non-empty, at least 3 characters."""

    value: str

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 255

    def __post_init__(self) -> None:
        stripped = (self.value or "").strip()
        if not stripped:
            raise ValueError("Workflow name must be a non-empty string")
        if len(stripped) < self.MIN_LENGTH:
            raise ValueError(
                f"Workflow name must be at least {self.MIN_LENGTH} characters"
            )
        if len(stripped) > self.MAX_LENGTH:
            raise ValueError(
                f"Workflow name must not exceed {self.MAX_LENGTH} characters"
            )


@dataclass(frozen=True)
class ComponentName:
    """Value object for a generated component's class name (PascalCase)."""

    value: str

    def __post_init__(self) -> None:
        _validate_pascal(self.value, "Component name")

    @property
    def kebab(self) -> str:
        """Return kebab-case form (e.g. BrakeAlertModule -> brake-alert-module)."""
        return to_kebab_case(self.value)

    @property
    def selector(self) -> str:
        """Return the UI selector for this component (app-<kebab>)."""
        return f"app-{self.kebab}"


@dataclass(frozen=True)
class DependencyName:
    """Value object for a dependency module name (PascalCase)."""

    value: str

    def __post_init__(self) -> None:
        _validate_pascal(self.value, "Dependency name")


@dataclass(frozen=True)
class SemanticVersion:
    """Value object for a semantic version string (MAJOR.MINOR.PATCH[-pre])."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not _SEMVER_RE.match(self.value):
            raise ValueError(
                f"Version must be a semantic version (e.g. '1.0.0'), got {self.value!r}"
            )


def is_pascal_case(value: str | None) -> bool:
    """Return whether value is a non-empty PascalCase identifier."""
    return bool(value) and bool(_PASCAL_RE.match(value))


def to_kebab_case(value: str) -> str:
    """Convert PascalCase to kebab-case (lowercase boundary before uppercase)."""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", value).lower()
