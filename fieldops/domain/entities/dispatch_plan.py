"""Dispatch plan — a caller-proposed pairing of assignments and technicians.

Plans are transient: built per request for review, never persisted.
"""

from dataclasses import dataclass, field

from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.value_objects.enums import SkillMatch

DEFAULT_MAX_TRAVEL_KM = 60.0
DEFAULT_ALLOW_PARTIAL_SKILL_MATCH = True
DEFAULT_TRAVEL_BUFFER_MINUTES = 30


@dataclass
class PlanItem:
    assignment_id: str
    technician_id: str
    eta_minutes: int
    reason: str | None = None
    skill_match: SkillMatch | None = None
    distance_km: float | None = None
    technician_name: str | None = None  # resolved during assembly


@dataclass(frozen=True)
class PlanConstraints:
    max_travel_km: float = DEFAULT_MAX_TRAVEL_KM
    allow_partial_skill_match: bool = DEFAULT_ALLOW_PARTIAL_SKILL_MATCH
    travel_buffer_minutes: int = DEFAULT_TRAVEL_BUFFER_MINUTES


@dataclass(frozen=True)
class TechnicianOption:
    id: str
    name: str


@dataclass(frozen=True)
class ReferenceWarning:
    """An ID that could not be resolved and was echoed instead."""

    code: str  # "unresolved_assignment" | "unresolved_technician"
    id: str


@dataclass
class DispatchPlan:
    constraints: PlanConstraints
    plan_items: list[PlanItem]
    assignments: list[Assignment]
    technicians: list[Technician]
    technician_options: list[TechnicianOption]
    warnings: list[ReferenceWarning] = field(default_factory=list)
