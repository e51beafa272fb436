"""Dispatch tool endpoints, in workflow order.

Each tool is a POST taking its schema-validated input and returning the
tool-call envelope (``content`` text + ``structuredContent``).
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fieldops.application.use_cases.commit_assignments import CommitAssignmentsUseCase
from fieldops.application.use_cases.create_dispatch_plan import CreateDispatchPlanUseCase
from fieldops.application.use_cases.intake import (
    GetAvailableTechniciansUseCase,
    ListNewAssignmentsUseCase,
    ShowAssignmentsOnMapUseCase,
)
from fieldops.infrastructure.api.dependencies import (
    Repositories,
    get_available_technicians_uc,
    get_commit_assignments_uc,
    get_create_dispatch_plan_uc,
    get_list_new_assignments_uc,
    get_repositories,
    get_show_on_map_uc,
)
from fieldops.infrastructure.api.schemas import (
    CommitAssignmentsInput,
    CreateDispatchPlanInput,
    GetAvailableTechniciansInput,
    ListNewAssignmentsInput,
    ShowAssignmentsOnMapInput,
)
from fieldops.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_commit,
    serialize_plan,
    serialize_technician,
    tool_result,
)

router = APIRouter(prefix="/tools", tags=["tools"])

NEXT_STEP_PLAN = "Suggested next step: list available technicians and create a dispatch plan."
NEXT_STEP_CREATE = "Suggested next step: create a dispatch plan for assignments."


# ── Catalog ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    title: str
    description: str
    input_model: type[BaseModel]
    read_only: bool = True
    destructive: bool = False

    def describe(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.input_model.model_json_schema(by_alias=True),
            "annotations": {
                "readOnlyHint": self.read_only,
                "destructiveHint": self.destructive,
                "openWorldHint": False,
            },
        }


TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="list-new-assignments",
        title="List New Assignments",
        description=(
            "Use this first for dispatch intake. Returns unassigned, recently created work "
            "orders (default: status=New and created in last 24 hours), optionally filtered "
            "by priority/region/team."
        ),
        input_model=ListNewAssignmentsInput,
    ),
    ToolDefinition(
        name="show-assignments-on-map",
        title="Show Assignments on Map",
        description=(
            "Render assignment pins on a map view. Pass selected assignmentIds, or omit them "
            "to map the default new assignments. Read-only."
        ),
        input_model=ShowAssignmentsOnMapInput,
    ),
    ToolDefinition(
        name="get-available-technicians",
        title="Get Available Technicians",
        description=(
            "Return currently available technicians and their dispatch metadata for "
            "planning, optionally filtered by region."
        ),
        input_model=GetAvailableTechniciansInput,
    ),
    ToolDefinition(
        name="create-dispatch-plan",
        title="Create Dispatch Plan",
        description=(
            "Render a review-ready dispatch plan from caller-supplied assignment-technician "
            "pairings. The server does not compute or alter the mapping."
        ),
        input_model=CreateDispatchPlanInput,
    ),
    ToolDefinition(
        name="commit-assignments",
        title="Commit Assignments",
        description=(
            "Commit a reviewed dispatch plan after explicit user confirmation. Input must "
            "include final plan rows (assignmentId + technicianId + etaMinutes)."
        ),
        input_model=CommitAssignmentsInput,
        read_only=False,
    ),
)


@router.get("")
async def list_tools():
    """Describe every dispatch tool with its JSON input schema."""
    return {"tools": [tool.describe() for tool in TOOLS]}


# ── Tools ───────────────────────────────────────────────────────────


@router.post("/list-new-assignments")
async def list_new_assignments(
    body: ListNewAssignmentsInput,
    uc: ListNewAssignmentsUseCase = Depends(get_list_new_assignments_uc),
):
    result = await uc.execute(body.to_filters(), max_results=body.max_results)
    return tool_result(
        NEXT_STEP_PLAN,
        {
            "view": "list",
            "fallbackUsed": result.fallback_used,
            "assignments": [serialize_assignment(a) for a in result.assignments],
        },
    )


@router.post("/show-assignments-on-map")
async def show_assignments_on_map(
    body: ShowAssignmentsOnMapInput,
    uc: ShowAssignmentsOnMapUseCase = Depends(get_show_on_map_uc),
):
    assignments = await uc.execute(body.assignment_ids)
    return tool_result(
        NEXT_STEP_PLAN,
        {
            "view": "map",
            "assignments": [serialize_assignment(a, include_asset=False) for a in assignments],
        },
    )


@router.post("/get-available-technicians")
async def get_available_technicians(
    body: GetAvailableTechniciansInput,
    uc: GetAvailableTechniciansUseCase = Depends(get_available_technicians_uc),
):
    technicians = await uc.execute(body.to_filters())
    return tool_result(
        NEXT_STEP_CREATE,
        {"technicians": [serialize_technician(t) for t in technicians]},
    )


@router.post("/create-dispatch-plan")
async def create_dispatch_plan(
    body: CreateDispatchPlanInput,
    uc: CreateDispatchPlanUseCase = Depends(get_create_dispatch_plan_uc),
):
    plan = await uc.execute(
        [item.to_domain() for item in body.plan_items],
        technician_ids=body.technician_ids,
        max_travel_km=body.max_travel_km,
        allow_partial_skill_match=body.allow_partial_skill_match,
        travel_buffer_minutes=body.travel_buffer_minutes,
    )
    return tool_result(
        f"Prepared a plan for {len(plan.plan_items)} assignments.",
        serialize_plan(plan),
    )


@router.post("/commit-assignments")
async def commit_assignments(
    body: CommitAssignmentsInput,
    uc: CommitAssignmentsUseCase = Depends(get_commit_assignments_uc),
    repos: Repositories = Depends(get_repositories),
):
    result = await uc.execute([row.to_domain() for row in body.assignments])
    await repos.commit()
    return tool_result(
        f"{len(result.records)} assignments have been confirmed.",
        serialize_commit(result),
    )
