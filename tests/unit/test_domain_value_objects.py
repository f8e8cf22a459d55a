"""Tests for domain value objects (validation and derived forms)."""

import pytest

from app.domain.value_objects import (
    ComponentName,
    DependencyName,
    SemanticVersion,
    WorkflowName,
)
from app.domain.value_objects.core import is_pascal_case, to_kebab_case


def test_workflow_name_accepts_three_characters() -> None:
    assert WorkflowName("ABS").value == "ABS"


@pytest.mark.parametrize("value", ["", "   ", "AB"])
def test_workflow_name_rejects_short_or_blank(value: str) -> None:
    with pytest.raises(ValueError):
        WorkflowName(value)


def test_workflow_name_rejects_overlong() -> None:
    with pytest.raises(ValueError, match="must not exceed"):
        WorkflowName("x" * 256)


def test_component_name_kebab_and_selector() -> None:
    name = ComponentName("BrakeAlertModule")
    assert name.kebab == "brake-alert-module"
    assert name.selector == "app-brake-alert-module"


@pytest.mark.parametrize("value", ["brakeAlert", "Brake-Alert", "Brake Alert", "1Brake", ""])
def test_component_name_rejects_non_pascal(value: str) -> None:
    with pytest.raises(ValueError):
        ComponentName(value)


def test_dependency_name_rejects_lowercase() -> None:
    with pytest.raises(ValueError, match="Dependency name"):
        DependencyName("sensorModule")


@pytest.mark.parametrize("value", ["1.0.0", "2.10.3", "1.0.0-beta.1"])
def test_semantic_version_accepts(value: str) -> None:
    assert SemanticVersion(value).value == value


@pytest.mark.parametrize("value", ["1.0", "v1.0.0", "", "1.0.0."])
def test_semantic_version_rejects(value: str) -> None:
    with pytest.raises(ValueError):
        SemanticVersion(value)


def test_is_pascal_case_handles_none() -> None:
    assert is_pascal_case(None) is False
    assert is_pascal_case("ECUInterface") is True


def test_to_kebab_case_keeps_acronyms_together() -> None:
    assert to_kebab_case("ECUInterface") == "ecuinterface"
    assert to_kebab_case("OBDInterfaceModule") == "obdinterface-module"
