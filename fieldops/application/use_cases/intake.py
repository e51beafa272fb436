"""Read-only intake views over the assignment and technician pools."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from fieldops.application.ports.assignment_repo import AssignmentRepository
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.policies.intake import (
    AssignmentFilters,
    TechnicianFilters,
    dedupe_ids,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class IntakeResult:
    assignments: list[Assignment]
    fallback_used: bool = False


class ListNewAssignmentsUseCase:
    """Filters the work-order pool down to New, recent, matching assignments."""

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        default_max_hours_old: int = 24,
        default_max_results: int = 50,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._assignments = assignment_repo
        self._default_hours = default_max_hours_old
        self._default_max_results = default_max_results
        self._clock = clock

    @property
    def default_max_hours_old(self) -> int:
        return self._default_hours

    async def find(self, filters: AssignmentFilters) -> IntakeResult:
        """Apply status + recency + priority/region/team filters.

        When the recency pass is empty and the caller did NOT pass
        ``max_hours_old``, a second pass drops the recency check. An explicit
        ``max_hours_old`` always returns the recency pass as-is.
        """
        created_after = filters.window_start(self._clock(), self._default_hours)
        recent = await self._assignments.find_new(filters, created_after)

        if filters.max_hours_old is not None or recent:
            return IntakeResult(assignments=recent)

        logger.info(
            "No New assignments in the last %dh, falling back to all New assignments",
            self._default_hours,
        )
        return IntakeResult(
            assignments=await self._assignments.find_new(filters, None),
            fallback_used=True,
        )

    async def execute(
        self, filters: AssignmentFilters, max_results: int | None = None
    ) -> IntakeResult:
        result = await self.find(filters)
        limit = max_results if max_results is not None else self._default_max_results
        result.assignments = result.assignments[:limit]
        return result


class ShowAssignmentsOnMapUseCase:
    """Resolves the assignments to pin on the map view."""

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        list_new_assignments: ListNewAssignmentsUseCase,
    ):
        self._assignments = assignment_repo
        self._list_new = list_new_assignments

    async def execute(self, assignment_ids: list[str] | None = None) -> list[Assignment]:
        if assignment_ids:
            return await self._assignments.get_by_ids(dedupe_ids(assignment_ids))

        # Explicit window, so the intake fallback never kicks in here
        filters = AssignmentFilters(max_hours_old=self._list_new.default_max_hours_old)
        result = await self._list_new.find(filters)
        return result.assignments


class GetAvailableTechniciansUseCase:
    def __init__(self, technician_repo: TechnicianRepository):
        self._technicians = technician_repo

    async def execute(self, filters: TechnicianFilters) -> list[Technician]:
        return await self._technicians.find_available(filters)
