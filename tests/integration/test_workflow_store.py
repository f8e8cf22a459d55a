"""WorkflowService and ComponentService against a real SQLite database."""

import pytest

from app.application.dtos.component import ComponentCreate
from app.application.dtos.workflow import WorkflowCreate, WorkflowStepCreate, WorkflowUpdate
from app.application.use_cases.components import ComponentService
from app.application.use_cases.workflows import WorkflowService
from app.domain.enums import ComponentCategory, StepStatus, StepType, WorkflowStatus
from app.domain.exceptions import (
    ConflictException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.persistence.repositories import (
    ComponentRepository,
    WorkflowRepository,
)
from app.infrastructure.services import WorkflowEngine


async def _in_tx(session_factory, fn):
    """Run fn(workflow_service, component_service) in one committed transaction."""
    async with session_factory() as session:
        async with session.begin():
            workflows = WorkflowRepository(session)
            components = ComponentRepository(session)
            return await fn(
                WorkflowService(workflows, components),
                ComponentService(components, workflows),
            )


async def test_create_applies_category_defaults(create_workflow) -> None:
    workflow = await create_workflow(dependencies=None)

    assert workflow.status is WorkflowStatus.DRAFT
    assert workflow.version == 1
    assert workflow.template_name == "SAFETY_SYSTEM"
    assert workflow.dependencies == [
        "SensorModule",
        "AlertSystem",
        "BrakeSystem",
        "DataLogger",
    ]
    assert [s.step_order for s in workflow.steps] == [1, 2, 3, 4, 5]
    assert all(s.status is StepStatus.PENDING for s in workflow.steps)
    assert workflow.approved_by is None and workflow.rejection_reason is None


async def test_create_keeps_explicit_empty_dependencies(create_workflow) -> None:
    workflow = await create_workflow(
        name="Cabin Lights", category=ComponentCategory.BODY_ELECTRONICS,
        component_name="CabinLights", dependencies=[],
    )
    assert workflow.dependencies == []


async def test_create_sorts_supplied_steps(create_workflow) -> None:
    workflow = await create_workflow(
        steps=[
            WorkflowStepCreate(2, "Testing", StepType.TESTING),
            WorkflowStepCreate(1, "Validation", StepType.VALIDATION),
        ]
    )
    assert [s.step_name for s in workflow.steps] == ["Validation", "Testing"]


async def test_create_rejects_duplicate_step_orders(create_workflow) -> None:
    with pytest.raises(ValidationException, match="unique"):
        await create_workflow(
            steps=[
                WorkflowStepCreate(1, "Validation", StepType.VALIDATION),
                WorkflowStepCreate(1, "Testing", StepType.TESTING),
            ]
        )


async def test_create_rejects_bad_component_name(create_workflow) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await create_workflow(component_name="brake_alert")
    assert exc_info.value.details["field"] == "componentName"


async def test_create_rejects_duplicate_name(create_workflow) -> None:
    await create_workflow()
    with pytest.raises(ConflictException, match="already exists"):
        await create_workflow()


async def test_get_unknown_workflow(session_factory) -> None:
    with pytest.raises(ResourceNotFoundException):
        await _in_tx(session_factory, lambda w, c: w.get_workflow(12345))


async def test_update_draft_merges_fields_and_bumps_version(session_factory, create_workflow) -> None:
    workflow = await create_workflow()
    updated = await _in_tx(
        session_factory,
        lambda w, c: w.update_workflow(
            workflow.id,
            WorkflowUpdate(description="Now with haptic feedback", version=workflow.version),
        ),
    )
    assert updated.description == "Now with haptic feedback"
    assert updated.name == workflow.name
    assert updated.version == workflow.version + 1


async def test_update_with_stale_version_conflicts(session_factory, create_workflow) -> None:
    workflow = await create_workflow()
    await _in_tx(
        session_factory,
        lambda w, c: w.update_workflow(workflow.id, WorkflowUpdate(description="first")),
    )
    with pytest.raises(ConflictException):
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(
                workflow.id, WorkflowUpdate(description="second", version=workflow.version)
            ),
        )


async def test_update_cannot_change_status(session_factory, create_workflow) -> None:
    workflow = await create_workflow()
    with pytest.raises(InvalidTransitionException):
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(
                workflow.id, WorkflowUpdate(status=WorkflowStatus.APPROVED)
            ),
        )


async def test_update_after_approval_is_rejected(session_factory, create_workflow) -> None:
    workflow = await create_workflow(approve=True)
    with pytest.raises(InvalidTransitionException):
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(workflow.id, WorkflowUpdate(description="late")),
        )


async def test_replace_steps_only_in_draft(session_factory, create_workflow) -> None:
    draft = await create_workflow()
    new_steps = [WorkflowStepCreate(1, "Generate", StepType.CODE_GENERATION)]
    updated = await _in_tx(
        session_factory,
        lambda w, c: w.update_workflow(draft.id, WorkflowUpdate(steps=new_steps)),
    )
    assert [s.step_name for s in updated.steps] == ["Generate"]

    pending = await create_workflow(name="Lane Keep Assist", submit=True)
    with pytest.raises(InvalidTransitionException):
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(pending.id, WorkflowUpdate(steps=new_steps)),
        )


async def test_rename_to_existing_name_conflicts(session_factory, create_workflow) -> None:
    await create_workflow()
    other = await create_workflow(name="Lane Keep Assist")
    with pytest.raises(ConflictException):
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(other.id, WorkflowUpdate(name="Brake Alert Module")),
        )


async def test_delete_draft(session_factory, create_workflow, load_workflow) -> None:
    workflow = await create_workflow()
    await _in_tx(session_factory, lambda w, c: w.delete_workflow(workflow.id))
    assert await load_workflow(workflow.id) is None


async def test_delete_referenced_workflow_conflicts(
    session_factory, guard, create_workflow, load_workflow
) -> None:
    workflow = await create_workflow(approve=True)
    await WorkflowEngine(session_factory, guard).execute(workflow.id)

    with pytest.raises(ConflictException, match="referenced by 1 component"):
        await _in_tx(session_factory, lambda w, c: w.delete_workflow(workflow.id))
    assert await load_workflow(workflow.id) is not None


async def test_listings_and_statistics(session_factory, create_workflow) -> None:
    await create_workflow()
    await create_workflow(name="Lane Keep Assist", submit=True)
    await create_workflow(
        name="Rpm Watch",
        category=ComponentCategory.ENGINE_MANAGEMENT,
        component_name="RpmMonitor",
        approve=True,
    )

    async def read(w: WorkflowService, c):
        return (
            await w.list_workflows(),
            await w.list_pending_approval(),
            await w.list_by_category(ComponentCategory.ENGINE_MANAGEMENT),
            await w.get_statistics(),
        )

    everything, pending, engine_wfs, stats = await _in_tx(session_factory, read)
    assert [wf.name for wf in everything] == ["Rpm Watch", "Lane Keep Assist", "Brake Alert Module"]
    assert [wf.name for wf in pending] == ["Lane Keep Assist"]
    assert [wf.name for wf in engine_wfs] == ["Rpm Watch"]
    assert stats.total == 3
    assert (stats.draft, stats.pending_approval, stats.approved) == (1, 1, 1)
    assert stats.completed == stats.failed == stats.rejected == stats.in_progress == 0


def _component_create(workflow_id: int, **overrides) -> ComponentCreate:
    values = {
        "name": "BrakeAlertModule",
        "category": ComponentCategory.SAFETY_SYSTEM,
        "component_type": "component",
        "selector": "app-brake-alert-module",
        "template_code": "export class BrakeAlertModuleComponent {}",
        "version": "1.0.0",
        "created_by": "engineer@example.com",
        "workflow_id": workflow_id,
    }
    values.update(overrides)
    return ComponentCreate(**values)


async def test_register_requires_completed_workflow(session_factory, create_workflow) -> None:
    workflow = await create_workflow(approve=True)
    with pytest.raises(ConflictException, match="COMPLETED"):
        await _in_tx(
            session_factory,
            lambda w, c: c.register_component(_component_create(workflow.id)),
        )


async def test_register_unknown_workflow(session_factory) -> None:
    with pytest.raises(ResourceNotFoundException):
        await _in_tx(
            session_factory,
            lambda w, c: c.register_component(_component_create(777)),
        )


async def test_registry_queries(session_factory, guard, create_workflow) -> None:
    safety = await create_workflow(
        approve=True, description="Alerts on brake pressure loss", configuration='{"zone": "front"}'
    )
    engine_wf = await create_workflow(
        name="Rpm Watch",
        category=ComponentCategory.ENGINE_MANAGEMENT,
        component_name="RpmMonitor",
        description="Watches engine speed",
        approve=True,
    )
    engine = WorkflowEngine(session_factory, guard)
    brake_id = (await engine.execute(safety.id)).component_ids[0]
    rpm_id = (await engine.execute(engine_wf.id)).component_ids[0]

    deactivated = await _in_tx(session_factory, lambda w, c: c.deactivate(rpm_id))
    assert deactivated.is_active is False
    again = await _in_tx(session_factory, lambda w, c: c.deactivate(rpm_id))
    assert again.is_active is False

    async def read(w, c: ComponentService):
        return (
            await c.list_components(),
            await c.list_active(),
            await c.search("BRAKE"),
            await c.search("front"),
            await c.search("   "),
            await c.search("%"),
            await c.list_by_category(ComponentCategory.ENGINE_MANAGEMENT),
            await c.list_by_workflow(safety.id),
            await c.get_statistics(),
            await c.get_code(brake_id),
        )

    (
        everything,
        active,
        by_name,
        by_metadata,
        blank,
        literal_percent,
        engine_components,
        by_workflow,
        stats,
        code,
    ) = await _in_tx(session_factory, read)

    assert [x.id for x in everything] == [rpm_id, brake_id]
    assert [x.id for x in active] == [brake_id]
    assert [x.id for x in by_name] == [brake_id]
    assert [x.id for x in by_metadata] == [brake_id]
    assert len(blank) == 2
    assert literal_percent == []
    assert [x.id for x in engine_components] == [rpm_id]
    assert [x.id for x in by_workflow] == [brake_id]

    assert (stats.total, stats.active, stats.inactive) == (2, 1, 1)
    assert stats.by_category == {
        "SAFETY_SYSTEM": {"active": 1, "inactive": 0},
        "ENGINE_MANAGEMENT": {"active": 0, "inactive": 1},
    }
    assert "BrakeAlertModuleComponent" in code.template_code
    assert code.style_code and code.test_code

    await _in_tx(session_factory, lambda w, c: c.delete_component(rpm_id))
    with pytest.raises(ResourceNotFoundException):
        await _in_tx(session_factory, lambda w, c: c.get_component(rpm_id))
    remaining = await _in_tx(session_factory, lambda w, c: w.get_workflow(engine_wf.id))
    assert remaining.status is WorkflowStatus.COMPLETED


def test_workflow_create_dto_defaults() -> None:
    data = WorkflowCreate(
        name="Door Ajar",
        category=ComponentCategory.BODY_ELECTRONICS,
        component_name="DoorAjarAlert",
        created_by="engineer@example.com",
    )
    assert data.component_type == "component"
    assert data.dependencies is None and data.steps is None


async def test_create_then_read_round_trips(session_factory, create_workflow) -> None:
    created = await create_workflow(
        configuration='{"threshold": 40}', validation_rules=["pressure >= 40"]
    )
    read = await _in_tx(session_factory, lambda w, c: w.get_workflow(created.id))
    assert read == created


async def test_update_cannot_blank_fields_of_submitted_workflow(
    session_factory, create_workflow, load_workflow
) -> None:
    workflow = await create_workflow(submit=True)

    with pytest.raises(ValidationException) as exc_info:
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(workflow.id, WorkflowUpdate(description="   ")),
        )
    assert exc_info.value.details["field"] == "description"

    with pytest.raises(ValidationException):
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(workflow.id, WorkflowUpdate(template_name=" ")),
        )

    stored = await load_workflow(workflow.id)
    assert stored.status is WorkflowStatus.PENDING_APPROVAL
    assert stored.description == workflow.description
    assert stored.template_name == workflow.template_name


async def test_update_cannot_blank_required_fields_of_draft(
    session_factory, create_workflow
) -> None:
    workflow = await create_workflow()
    with pytest.raises(ValidationException) as exc_info:
        await _in_tx(
            session_factory,
            lambda w, c: w.update_workflow(workflow.id, WorkflowUpdate(component_type="  ")),
        )
    assert exc_info.value.details["errors"] == ["component_type"]
