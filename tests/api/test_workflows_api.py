"""Workflow endpoints: create, read, update, lifecycle and execution over HTTP."""

import pytest
from httpx import AsyncClient

BRAKE_ALERT = {
    "name": "Brake Alert Module",
    "description": "Alerts the driver on brake pressure loss",
    "category": "SAFETY_SYSTEM",
    "componentName": "BrakeAlertModule",
    "dependencies": ["SensorModule", "AlertSystem"],
    "createdBy": "engineer@example.com",
    "steps": [
        {"stepOrder": 1, "stepName": "Validation", "stepType": "VALIDATION"},
        {"stepOrder": 2, "stepName": "Code Generation", "stepType": "CODE_GENERATION"},
        {"stepOrder": 3, "stepName": "Testing", "stepType": "TESTING"},
    ],
}


async def _create(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/workflows", json={**BRAKE_ALERT, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


async def _approved(client: AsyncClient, **overrides) -> dict:
    workflow = await _create(client, **overrides)
    assert (await client.post(f"/api/workflows/{workflow['id']}/submit")).status_code == 200
    response = await client.post(
        f"/api/workflows/{workflow['id']}/approve",
        json={"approvedBy": "lead@example.com"},
    )
    assert response.status_code == 200
    return workflow


async def test_create_returns_draft_in_camel_case(client: AsyncClient) -> None:
    data = await _create(client)
    assert data["status"] == "DRAFT"
    assert data["componentName"] == "BrakeAlertModule"
    assert data["templateName"] == "SAFETY_SYSTEM"
    assert data["version"] == 1
    assert data["approvedBy"] is None
    assert [s["stepOrder"] for s in data["steps"]] == [1, 2, 3]
    assert all(s["status"] == "PENDING" for s in data["steps"])


async def test_create_ignores_client_status(client: AsyncClient) -> None:
    data = await _create(client, status="COMPLETED")
    assert data["status"] == "DRAFT"


async def test_create_with_defaults(client: AsyncClient) -> None:
    body = {k: v for k, v in BRAKE_ALERT.items() if k not in ("dependencies", "steps")}
    response = await client.post("/api/workflows", json=body)
    assert response.status_code == 201
    data = response.json()
    assert data["dependencies"] == ["SensorModule", "AlertSystem", "BrakeSystem", "DataLogger"]
    assert len(data["steps"]) == 5


async def test_create_invalid_component_name_returns_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/workflows", json={**BRAKE_ALERT, "componentName": "brake-alert"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"]["field"] == "componentName"


async def test_create_unknown_category_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/workflows", json={**BRAKE_ALERT, "category": "SUNROOF"})
    assert response.status_code == 422


async def test_create_missing_body_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/workflows", json={})
    assert response.status_code == 422


async def test_create_duplicate_name_returns_409(client: AsyncClient) -> None:
    await _create(client)
    response = await client.post("/api/workflows", json=BRAKE_ALERT)
    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


async def test_get_unknown_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/workflows/4040")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_get_and_status_summary(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.get(f"/api/workflows/{created['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Brake Alert Module"

    summary = (await client.get(f"/api/workflows/{created['id']}/status")).json()
    assert set(summary) == {"id", "name", "status", "category", "createdAt", "updatedAt"}
    assert summary["status"] == "DRAFT"


async def test_update_draft(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.put(
        f"/api/workflows/{created['id']}",
        json={"description": "Haptic pedal feedback", "version": created["version"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["description"] == "Haptic pedal feedback"
    assert data["version"] == created["version"] + 1


async def test_update_with_stale_version_returns_409(client: AsyncClient) -> None:
    created = await _create(client)
    await client.put(f"/api/workflows/{created['id']}", json={"description": "first"})
    response = await client.put(
        f"/api/workflows/{created['id']}",
        json={"description": "second", "version": created["version"]},
    )
    assert response.status_code == 409


async def test_update_status_directly_returns_409(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.put(
        f"/api/workflows/{created['id']}", json={"status": "APPROVED"}
    )
    assert response.status_code == 409
    assert response.json()["error"] == "INVALID_TRANSITION"


async def test_lifecycle_happy_path_and_execute(client: AsyncClient) -> None:
    workflow = await _create(client)
    wid = workflow["id"]

    submitted = await client.post(f"/api/workflows/{wid}/submit")
    assert submitted.status_code == 200
    assert submitted.json()["status"] == "PENDING_APPROVAL"

    pending = (await client.get("/api/workflows/pending-approval")).json()
    assert [w["id"] for w in pending] == [wid]

    approved = await client.post(
        f"/api/workflows/{wid}/approve", json={"approvedBy": "lead@example.com"}
    )
    assert approved.status_code == 200
    assert approved.json() == {"message": "Workflow approved successfully"}

    executed = await client.post(f"/api/workflows/{wid}/execute")
    assert executed.status_code == 200
    result = executed.json()
    assert result["success"] is True
    assert result["workflowId"] == wid
    assert result["message"] == "Workflow executed successfully"
    assert result["durationInSeconds"] >= 0
    assert len(result["componentIds"]) == 1

    stored = (await client.get(f"/api/workflows/{wid}")).json()
    assert stored["status"] == "COMPLETED"
    assert stored["approvedBy"] == "lead@example.com"
    assert stored["approvedAt"] is not None
    assert all(s["status"] == "COMPLETED" and s["result"] for s in stored["steps"])

    components = (await client.get(f"/api/components/workflow/{wid}")).json()
    assert [c["id"] for c in components] == result["componentIds"]


async def test_execute_draft_returns_409(client: AsyncClient) -> None:
    workflow = await _create(client)
    response = await client.post(f"/api/workflows/{workflow['id']}/execute")
    assert response.status_code == 409
    assert response.json()["details"]["current_status"] == "DRAFT"


async def test_execute_with_failing_step_reports_failure(client: AsyncClient) -> None:
    workflow = await _approved(client, dependencies=["SensorModule"])
    response = await client.post(f"/api/workflows/{workflow['id']}/execute")
    assert response.status_code == 200
    result = response.json()
    assert result["success"] is False
    assert result["failedStep"] == "Validation"
    assert result["componentIds"] == []

    stored = (await client.get(f"/api/workflows/{workflow['id']}")).json()
    assert stored["status"] == "FAILED"

    resubmitted = await client.post(f"/api/workflows/{workflow['id']}/submit")
    assert resubmitted.status_code == 200
    assert resubmitted.json()["status"] == "PENDING_APPROVAL"
    assert all(s["status"] == "PENDING" for s in resubmitted.json()["steps"])


async def test_approve_twice_returns_409(client: AsyncClient) -> None:
    workflow = await _approved(client)
    response = await client.post(
        f"/api/workflows/{workflow['id']}/approve", json={"approvedBy": "other@example.com"}
    )
    assert response.status_code == 409


async def test_approve_without_approver_returns_400(client: AsyncClient) -> None:
    workflow = await _create(client)
    await client.post(f"/api/workflows/{workflow['id']}/submit")
    response = await client.post(f"/api/workflows/{workflow['id']}/approve", json={})
    assert response.status_code == 400


async def test_reject_requires_reason(client: AsyncClient) -> None:
    workflow = await _create(client)
    wid = workflow["id"]
    await client.post(f"/api/workflows/{wid}/submit")

    response = await client.post(
        f"/api/workflows/{wid}/reject", json={"rejectedBy": "lead@example.com", "reason": ""}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Rejection reason is required"
    assert (await client.get(f"/api/workflows/{wid}")).json()["status"] == "PENDING_APPROVAL"

    response = await client.post(
        f"/api/workflows/{wid}/reject",
        json={"rejectedBy": "lead@example.com", "reason": "Sensor spec missing"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Workflow rejected"}
    stored = (await client.get(f"/api/workflows/{wid}")).json()
    assert stored["status"] == "REJECTED"
    assert stored["rejectionReason"] == "Sensor spec missing"


async def test_submit_rejected_workflow_returns_409(client: AsyncClient) -> None:
    workflow = await _create(client)
    wid = workflow["id"]
    await client.post(f"/api/workflows/{wid}/submit")
    await client.post(
        f"/api/workflows/{wid}/reject", json={"rejectedBy": "lead@example.com", "reason": "No"}
    )
    response = await client.post(f"/api/workflows/{wid}/submit")
    assert response.status_code == 409


async def test_listings_and_statistics(client: AsyncClient) -> None:
    await _create(client)
    await _create(
        client,
        name="Rpm Watch",
        category="ENGINE_MANAGEMENT",
        componentName="RpmMonitor",
    )

    everything = (await client.get("/api/workflows")).json()
    assert [w["name"] for w in everything] == ["Rpm Watch", "Brake Alert Module"]

    drafts = (await client.get("/api/workflows/status/DRAFT")).json()
    assert len(drafts) == 2

    engine = (await client.get("/api/workflows/category/ENGINE_MANAGEMENT")).json()
    assert [w["name"] for w in engine] == ["Rpm Watch"]

    stats = (await client.get("/api/workflows/statistics")).json()
    assert stats == {
        "total": 2,
        "draft": 2,
        "pendingApproval": 0,
        "approved": 0,
        "inProgress": 0,
        "completed": 0,
        "failed": 0,
        "rejected": 0,
    }


@pytest.mark.parametrize("path", ["/api/workflows/status/DONE", "/api/workflows/category/ROOF"])
async def test_listing_with_unknown_enum_returns_422(client: AsyncClient, path: str) -> None:
    response = await client.get(path)
    assert response.status_code == 422


async def test_delete(client: AsyncClient) -> None:
    workflow = await _create(client)
    response = await client.delete(f"/api/workflows/{workflow['id']}")
    assert response.status_code == 204
    assert (await client.get(f"/api/workflows/{workflow['id']}")).status_code == 404


async def test_delete_with_components_returns_409(client: AsyncClient) -> None:
    workflow = await _approved(client)
    await client.post(f"/api/workflows/{workflow['id']}/execute")
    response = await client.delete(f"/api/workflows/{workflow['id']}")
    assert response.status_code == 409


async def test_brake_alert_scenario(client: AsyncClient) -> None:
    """DRAFT -> submit -> approve("qa-lead") -> execute: three steps, one active component."""
    created = await _create(client, name="BrakeAlert")
    wid = created["id"]
    assert created["status"] == "DRAFT"

    assert (await client.post(f"/api/workflows/{wid}/submit")).json()["status"] == "PENDING_APPROVAL"
    await client.post(f"/api/workflows/{wid}/approve", json={"approvedBy": "qa-lead"})
    approved = (await client.get(f"/api/workflows/{wid}")).json()
    assert approved["status"] == "APPROVED"
    assert approved["approvedBy"] == "qa-lead"

    result = (await client.post(f"/api/workflows/{wid}/execute")).json()
    assert result["success"] is True

    done = (await client.get(f"/api/workflows/{wid}")).json()
    assert done["status"] == "COMPLETED"
    assert [s["status"] for s in done["steps"]] == ["COMPLETED"] * 3

    components = (await client.get(f"/api/components/workflow/{wid}")).json()
    assert len(components) == 1
    assert components[0]["workflowId"] == wid
    assert components[0]["isActive"] is True


async def test_update_pending_workflow_with_blank_description_returns_400(
    client: AsyncClient,
) -> None:
    created = await _create(client)
    wid = created["id"]
    await client.post(f"/api/workflows/{wid}/submit")

    response = await client.put(f"/api/workflows/{wid}", json={"description": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"

    stored = (await client.get(f"/api/workflows/{wid}")).json()
    assert stored["status"] == "PENDING_APPROVAL"
    assert stored["description"] == BRAKE_ALERT["description"]
