"""Tests for the dispatch tool endpoints over in-memory pools."""

from __future__ import annotations

import asyncio

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from fieldops.adapters.memory.repositories import (
    InMemoryAssignmentRepository,
    InMemoryTechnicianRepository,
)
from fieldops.application.use_cases.commit_assignments import CommitAssignmentsUseCase
from fieldops.domain.value_objects.enums import AssignmentStatus
from fieldops.infrastructure.api.dependencies import (
    Repositories,
    get_commit_assignments_uc,
    get_repositories,
)
from fieldops.main import create_app


@pytest.fixture
def repos(make_assignment, make_technician) -> Repositories:
    return Repositories(
        assignments=InMemoryAssignmentRepository(
            [
                make_assignment("A1", site="Harbor Clinic", region="North"),
                make_assignment("A2", site="Pike Market", region="South"),
                make_assignment("A3", status=AssignmentStatus.DISPATCHED),
            ]
        ),
        technicians=InMemoryTechnicianRepository(
            [
                make_technician("T1", name="Avery Cole", skills=["Plumbing", "Electrical"]),
                make_technician("T2", name="Jordan Lee", region="South"),
                make_technician("T3", name="Sam Ortiz", available=False),
            ]
        ),
    )


@pytest.fixture
def app(repos):
    app = create_app()

    async def _repos():
        yield repos

    app.dependency_overrides[get_repositories] = _repos
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _structured(response) -> dict:
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["content"][0]["type"] == "text"
    return body["structuredContent"]


# ─── Catalog / health ──────────────────────────────────────────────


def test_tool_catalog(client):
    response = client.get("/api/tools")

    assert response.status_code == 200
    tools = {t["name"]: t for t in response.json()["tools"]}
    assert set(tools) == {
        "list-new-assignments",
        "show-assignments-on-map",
        "get-available-technicians",
        "create-dispatch-plan",
        "commit-assignments",
    }
    assert "maxHoursOld" in tools["list-new-assignments"]["inputSchema"]["properties"]
    assert tools["commit-assignments"]["annotations"]["readOnlyHint"] is False
    assert tools["create-dispatch-plan"]["annotations"]["readOnlyHint"] is True


def test_health(client):
    body = client.get("/api/health").json()

    assert body["status"] == "ok"
    assert body["store"] == "connected"


# ─── Intake ────────────────────────────────────────────────────────


def test_list_new_assignments(client):
    response = client.post("/api/tools/list-new-assignments", json={})

    body = response.json()
    assert body["content"][0]["text"].startswith("Suggested next step")
    data = _structured(response)
    assert data["view"] == "list"
    assert [a["id"] for a in data["assignments"]] == ["A1", "A2"]
    first = data["assignments"][0]
    assert first["site"] == "Harbor Clinic"
    assert first["status"] == "New"
    assert first["createdAt"].endswith("Z")
    assert "assetId" in first


def test_list_new_assignments_with_filters(client):
    data = _structured(
        client.post("/api/tools/list-new-assignments", json={"region": "South", "maxResults": 5})
    )

    assert [a["id"] for a in data["assignments"]] == ["A2"]


def test_show_assignments_on_map(client):
    data = _structured(
        client.post("/api/tools/show-assignments-on-map", json={"assignmentIds": ["A3", "A1"]})
    )

    assert data["view"] == "map"
    assert [a["id"] for a in data["assignments"]] == ["A1", "A3"]
    assert "assetId" not in data["assignments"][0]


def test_get_available_technicians(client):
    data = _structured(client.post("/api/tools/get-available-technicians", json={}))
    assert [t["id"] for t in data["technicians"]] == ["T1", "T2"]
    assert data["technicians"][0]["skills"] == ["Plumbing", "Electrical"]

    data = _structured(
        client.post("/api/tools/get-available-technicians", json={"region": "South"})
    )
    assert [t["id"] for t in data["technicians"]] == ["T2"]


# ─── Planning ──────────────────────────────────────────────────────


def test_create_dispatch_plan(client):
    response = client.post(
        "/api/tools/create-dispatch-plan",
        json={"planItems": [{"assignmentId": "A1", "technicianId": "T1", "etaMinutes": 20}]},
    )

    assert response.json()["content"][0]["text"] == "Prepared a plan for 1 assignments."
    data = _structured(response)
    assert data["view"] == "plan"
    assert data["constraints"] == {
        "maxTravelKm": 60.0,
        "allowPartialSkillMatch": True,
        "travelBufferMinutes": 30,
    }
    assert data["planItems"] == [
        {"assignmentId": "A1", "technicianId": "T1", "technicianName": "Avery Cole", "etaMinutes": 20}
    ]
    assert data["technicianOptions"] == [{"id": "T1", "name": "Avery Cole"}]
    assert data["warnings"] == []


def test_create_dispatch_plan_unknown_technician(client):
    data = _structured(
        client.post(
            "/api/tools/create-dispatch-plan",
            json={"planItems": [{"assignmentId": "A1", "technicianId": "T9", "etaMinutes": 20}]},
        )
    )

    assert data["planItems"][0]["technicianName"] == "T9"
    assert data["warnings"] == [{"code": "unresolved_technician", "id": "T9"}]


def test_create_dispatch_plan_passes_optional_fields(client):
    data = _structured(
        client.post(
            "/api/tools/create-dispatch-plan",
            json={
                "planItems": [
                    {
                        "assignmentId": "A2",
                        "technicianId": "T2",
                        "etaMinutes": 35,
                        "reason": "Same region, full skill match",
                        "skillMatch": "Full",
                        "distanceKm": 7.5,
                    }
                ],
                "technicianIds": ["T1", "T2"],
                "maxTravelKm": 25,
            },
        )
    )

    item = data["planItems"][0]
    assert item["skillMatch"] == "Full"
    assert item["distanceKm"] == 7.5
    assert item["reason"] == "Same region, full skill match"
    assert [o["id"] for o in data["technicianOptions"]] == ["T1", "T2"]
    assert data["constraints"]["maxTravelKm"] == 25


# ─── Commit ────────────────────────────────────────────────────────


def test_commit_assignments(client, repos):
    response = client.post(
        "/api/tools/commit-assignments",
        json={
            "assignments": [
                {"assignmentId": "A1", "technicianId": "T1", "etaMinutes": 15},
                {"assignmentId": "A2", "technicianId": "T2", "etaMinutes": 45},
            ]
        },
    )

    assert response.json()["content"][0]["text"] == "2 assignments have been confirmed."
    data = _structured(response)
    assert data["summary"] == "2 assignments confirmed"
    assert data["count"] == 2
    assert data["persisted"] is False
    first, second = data["rows"]
    assert first["site"] == "Harbor Clinic"
    assert first["technicianName"] == "Avery Cole"
    assert first["status"] == "Dispatched"
    assert first["assignedTechnicianId"] == "T1"
    assert first["estimatedTechnicianArrivalDateTime"].endswith("Z")


def test_commit_with_persistence_conflict(app, client, repos):
    def _persisting_uc(r: Repositories = Depends(get_repositories)) -> CommitAssignmentsUseCase:
        return CommitAssignmentsUseCase(r.assignments, r.technicians, persist=True)

    app.dependency_overrides[get_commit_assignments_uc] = _persisting_uc
    payload = {"assignments": [{"assignmentId": "A1", "technicianId": "T1", "etaMinutes": 15}]}

    first = client.post("/api/tools/commit-assignments", json=payload)
    second = client.post("/api/tools/commit-assignments", json=payload)

    assert _structured(first)["persisted"] is True
    assert second.status_code == 409
    error = second.json()["error"]
    assert error["code"] == "dispatch_conflict"
    assert error["details"] == [{"assignmentIds": ["A1"]}]


def test_persisted_commit_with_unknown_technician_conflicts(app, client, repos):
    def _persisting_uc(r: Repositories = Depends(get_repositories)) -> CommitAssignmentsUseCase:
        return CommitAssignmentsUseCase(r.assignments, r.technicians, persist=True)

    app.dependency_overrides[get_commit_assignments_uc] = _persisting_uc

    response = client.post(
        "/api/tools/commit-assignments",
        json={"assignments": [{"assignmentId": "A2", "technicianId": "T404", "etaMinutes": 15}]},
    )

    assert response.status_code == 409
    assert response.json()["error"]["details"] == [{"assignmentIds": ["A2"]}]
    pool = asyncio.run(repos.assignments.get_all())
    assert [a.id for a in pool if a.is_new()] == ["A1", "A2"]


# ─── Validation ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "path, payload",
    [
        ("/api/tools/list-new-assignments", {"maxHoursOld": 0}),
        ("/api/tools/list-new-assignments", {"maxHoursOld": 169}),
        ("/api/tools/list-new-assignments", {"priority": "Urgent"}),
        ("/api/tools/create-dispatch-plan", {"planItems": []}),
        (
            "/api/tools/create-dispatch-plan",
            {"planItems": [{"assignmentId": "A1", "technicianId": "T1", "etaMinutes": 0}]},
        ),
        (
            "/api/tools/create-dispatch-plan",
            {
                "planItems": [{"assignmentId": "A1", "technicianId": "T1", "etaMinutes": 10}],
                "travelBufferMinutes": 181,
            },
        ),
        ("/api/tools/commit-assignments", {"assignments": []}),
        (
            "/api/tools/commit-assignments",
            {"assignments": [{"assignmentId": "", "technicianId": "T1", "etaMinutes": 10}]},
        ),
    ],
)
def test_invalid_input_is_rejected(client, path, payload):
    response = client.post(path, json=payload)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert error["details"]


def test_commit_repeated_assignment_returns_one_row_each(client):
    response = client.post(
        "/api/tools/commit-assignments",
        json={
            "assignments": [
                {"assignmentId": "A1", "technicianId": "T1", "etaMinutes": 10},
                {"assignmentId": "A1", "technicianId": "T2", "etaMinutes": 20},
            ]
        },
    )

    data = _structured(response)
    assert data["count"] == 2
    assert [(r["assignmentId"], r["technicianId"]) for r in data["rows"]] == [("A1", "T1"), ("A1", "T2")]


def test_invalid_commit_leaves_pool_untouched(client, repos):
    client.post("/api/tools/commit-assignments", json={"assignments": []})

    pool = asyncio.run(repos.assignments.get_all())
    assert [a.id for a in pool if a.is_new()] == ["A1", "A2"]
