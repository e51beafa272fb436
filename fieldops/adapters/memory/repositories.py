"""In-memory repository implementations over insertion-ordered pools."""

from __future__ import annotations

from datetime import datetime

from fieldops.application.ports.assignment_repo import AssignmentRepository
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.policies.intake import (
    AssignmentFilters,
    TechnicianFilters,
    assignment_matches,
    select_by_ids,
    technician_matches,
)
from fieldops.domain.value_objects.enums import AssignmentStatus


class InMemoryAssignmentRepository(AssignmentRepository):
    def __init__(self, assignments: list[Assignment] | None = None):
        # dicts keep insertion order, which is the pool's natural order
        self._assignments: dict[str, Assignment] = {a.id: a for a in assignments or []}

    async def save(self, assignment: Assignment) -> Assignment:
        self._assignments[assignment.id] = assignment
        return assignment

    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        return self._assignments.get(assignment_id)

    async def get_by_ids(self, assignment_ids: list[str]) -> list[Assignment]:
        return select_by_ids(self._assignments.values(), assignment_ids)

    async def get_all(self) -> list[Assignment]:
        return list(self._assignments.values())

    async def find_new(
        self, filters: AssignmentFilters, created_after: datetime | None
    ) -> list[Assignment]:
        return [
            a for a in self._assignments.values()
            if assignment_matches(a, filters, created_after)
        ]

    async def mark_dispatched(
        self,
        assignment_id: str,
        technician_id: str,
        arrival: datetime,
        expected_status: AssignmentStatus = AssignmentStatus.NEW,
    ) -> bool:
        assignment = self._assignments.get(assignment_id)
        if assignment is None or assignment.status != expected_status:
            return False
        assignment.dispatch(technician_id, arrival)
        return True


class InMemoryTechnicianRepository(TechnicianRepository):
    def __init__(self, technicians: list[Technician] | None = None):
        self._technicians: dict[str, Technician] = {t.id: t for t in technicians or []}

    async def save(self, technician: Technician) -> Technician:
        self._technicians[technician.id] = technician
        return technician

    async def get_by_id(self, technician_id: str) -> Technician | None:
        return self._technicians.get(technician_id)

    async def get_by_ids(self, technician_ids: list[str]) -> list[Technician]:
        return select_by_ids(self._technicians.values(), technician_ids)

    async def get_all(self) -> list[Technician]:
        return list(self._technicians.values())

    async def find_available(self, filters: TechnicianFilters) -> list[Technician]:
        return [t for t in self._technicians.values() if technician_matches(t, filters)]
