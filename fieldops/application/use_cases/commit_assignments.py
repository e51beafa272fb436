"""CommitAssignmentsUseCase — finalize reviewed plan rows into dispatch records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Sequence

from fieldops.application.ports.assignment_repo import AssignmentRepository
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.application.use_cases.intake import utcnow
from fieldops.domain.entities.dispatch_plan import ReferenceWarning
from fieldops.domain.entities.dispatch_record import CommitRow, DispatchRecord
from fieldops.domain.policies.intake import dedupe_ids
from fieldops.domain.policies.plan_assembly import build_dispatch_records

logger = logging.getLogger(__name__)


class DispatchConflictError(Exception):
    """Some rows of a persisted commit cannot be written; nothing was written.

    A row is blocked when its assignment is missing, no longer New or repeated
    in the batch, or when its technician does not resolve.
    """

    def __init__(self, assignment_ids: list[str]):
        self.assignment_ids = assignment_ids
        super().__init__(
            "Assignments cannot be dispatched: "
            + ", ".join(assignment_ids)
        )


@dataclass
class CommitResult:
    records: list[DispatchRecord]
    committed_at: datetime
    warnings: list[ReferenceWarning] = field(default_factory=list)
    persisted: bool = False

    @property
    def summary(self) -> str:
        return f"{len(self.records)} assignments confirmed"


class CommitAssignmentsUseCase:
    """Builds dispatch records; optionally applies them to the assignment pool.

    With ``persist=False`` the pools are left untouched and the records are
    returned for the caller to apply. With ``persist=True`` every row is
    compare-and-swapped from New to Dispatched, all or nothing.
    """

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        technician_repo: TechnicianRepository,
        persist: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._assignments = assignment_repo
        self._technicians = technician_repo
        self._persist = persist
        self._clock = clock

    async def execute(self, rows: Sequence[CommitRow]) -> CommitResult:
        if not rows:
            raise ValueError("At least one assignment row is required")

        # One baseline for the whole batch
        committed_at = self._clock()

        assignments = await self._assignments.get_by_ids(dedupe_ids(r.assignment_id for r in rows))
        technicians = await self._technicians.get_by_ids(dedupe_ids(r.technician_id for r in rows))
        records, warnings = build_dispatch_records(rows, assignments, technicians, committed_at)

        for warning in warnings:
            logger.warning("Commit references unknown ID: %s (%s)", warning.id, warning.code)

        if self._persist:
            await self._apply(
                records,
                {a.id: a for a in assignments},
                {t.id for t in technicians},
            )

        logger.info(
            "Committed %d dispatch rows at %s (persisted=%s)",
            len(records), committed_at.isoformat(), self._persist,
        )
        return CommitResult(
            records=records,
            committed_at=committed_at,
            warnings=warnings,
            persisted=self._persist,
        )

    async def _apply(
        self,
        records: list[DispatchRecord],
        known: dict,
        known_technicians: set[str],
    ) -> None:
        ids = [r.assignment_id for r in records]
        blocked = dedupe_ids(
            r.assignment_id for r in records
            if r.assignment_id not in known
            or not known[r.assignment_id].is_new()
            or ids.count(r.assignment_id) > 1
            or r.technician_id not in known_technicians
        )
        if blocked:
            raise DispatchConflictError(blocked)

        for record in records:
            swapped = await self._assignments.mark_dispatched(
                record.assignment_id,
                record.technician_id,
                record.estimated_technician_arrival,
            )
            if not swapped:
                # Lost a race with a concurrent commit; the caller rolls back
                raise DispatchConflictError([record.assignment_id])
