"""Tool input schemas — validated at the API boundary.

Field names are camelCase on the wire (``maxHoursOld``) and snake_case in Python.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fieldops.domain.entities.dispatch_plan import PlanItem
from fieldops.domain.entities.dispatch_record import CommitRow
from fieldops.domain.policies.intake import AssignmentFilters, TechnicianFilters
from fieldops.domain.value_objects.enums import Priority, SkillMatch


class ToolInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Intake ──────────────────────────────────────────────────────────


class ListNewAssignmentsInput(ToolInput):
    priority: Priority | None = Field(
        default=None,
        description="Optional priority filter. Use High/Medium/Low to narrow returned assignments.",
    )
    region: str | None = Field(
        default=None, description="Optional region filter. Example: North, South, East, West."
    )
    team: str | None = Field(default=None, description="Optional team filter. Example: Alpha, Beta.")
    max_hours_old: int | None = Field(
        default=None,
        ge=1,
        le=168,
        description="Optional recency window in hours. Defaults to 24 when omitted.",
    )
    max_results: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Optional max number of assignments to return. Defaults to 50.",
    )

    def to_filters(self) -> AssignmentFilters:
        return AssignmentFilters(
            priority=self.priority,
            region=self.region,
            team=self.team,
            max_hours_old=self.max_hours_old,
        )


class ShowAssignmentsOnMapInput(ToolInput):
    assignment_ids: list[str] | None = Field(
        default=None,
        description=(
            "Optional list of assignment IDs to display. If omitted, the tool maps "
            "current default new assignments."
        ),
    )


class GetAvailableTechniciansInput(ToolInput):
    region: str | None = Field(
        default=None,
        description="Optional region filter to return technicians from a specific region.",
    )

    def to_filters(self) -> TechnicianFilters:
        return TechnicianFilters(region=self.region)


# ── Planning ────────────────────────────────────────────────────────


class PlanItemInput(ToolInput):
    assignment_id: str = Field(min_length=1, description="Required assignment ID selected for dispatch.")
    technician_id: str = Field(
        min_length=1,
        description="Required technician ID selected by the external matching/planning logic.",
    )
    reason: str | None = Field(
        default=None,
        description="Clear explanation of why this technician is assigned to this assignment.",
    )
    eta_minutes: int = Field(gt=0, description="Recommended ETA in minutes for technician arrival.")
    skill_match: SkillMatch | None = Field(
        default=None, description="Optional skill match label from external matching result."
    )
    distance_km: float | None = Field(
        default=None,
        ge=0,
        description="Optional travel distance in kilometers from technician to assignment.",
    )

    def to_domain(self) -> PlanItem:
        return PlanItem(
            assignment_id=self.assignment_id,
            technician_id=self.technician_id,
            eta_minutes=self.eta_minutes,
            reason=self.reason,
            skill_match=self.skill_match,
            distance_km=self.distance_km,
        )


class CreateDispatchPlanInput(ToolInput):
    plan_items: list[PlanItemInput] = Field(
        min_length=1,
        description=(
            "Required final assignment-technician pairings produced by external "
            "planning logic. One item per assignment to plan."
        ),
    )
    technician_ids: list[str] | None = Field(
        default=None,
        description=(
            "Optional technician IDs from get-available-technicians output, used to "
            "populate the override dropdown in the UI."
        ),
    )
    max_travel_km: float | None = Field(
        default=None, ge=1, le=500, description="Optional display constraint. Defaults to 60."
    )
    allow_partial_skill_match: bool | None = Field(
        default=None, description="Optional display constraint. Defaults to true."
    )
    travel_buffer_minutes: int | None = Field(
        default=None,
        ge=0,
        le=180,
        description=(
            "Optional scheduling buffer between consecutive assignments for the same "
            "technician. Defaults to 30."
        ),
    )


# ── Commit ──────────────────────────────────────────────────────────


class CommitRowInput(ToolInput):
    assignment_id: str = Field(min_length=1, description="Required assignment ID to commit.")
    technician_id: str = Field(min_length=1, description="Required final technician ID to assign.")
    eta_minutes: int = Field(gt=0, description="Required final ETA in minutes for commit summary.")

    def to_domain(self) -> CommitRow:
        return CommitRow(
            assignment_id=self.assignment_id,
            technician_id=self.technician_id,
            eta_minutes=self.eta_minutes,
        )


class CommitAssignmentsInput(ToolInput):
    assignments: list[CommitRowInput] = Field(
        min_length=1,
        description=(
            "Required final assignment rows to commit. Use reviewed plan rows from "
            "create-dispatch-plan output."
        ),
    )
