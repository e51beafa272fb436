"""Commit-time types: reviewed plan rows and the dispatch records they produce."""

from dataclasses import dataclass
from datetime import datetime

from fieldops.domain.value_objects.enums import AssignmentStatus


@dataclass(frozen=True)
class CommitRow:
    assignment_id: str
    technician_id: str
    eta_minutes: int


@dataclass(frozen=True)
class DispatchRecord:
    assignment_id: str
    site: str
    technician_id: str
    technician_name: str
    eta_minutes: int
    estimated_technician_arrival: datetime
    status: AssignmentStatus = AssignmentStatus.DISPATCHED
