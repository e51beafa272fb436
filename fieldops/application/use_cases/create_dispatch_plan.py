"""CreateDispatchPlanUseCase — render a caller-proposed plan for review.

Read-only: resolves IDs, attaches display names and applies constraint
defaults. The pairing itself is never computed or altered here.
"""

from __future__ import annotations

import logging
from typing import Sequence

from fieldops.application.ports.assignment_repo import AssignmentRepository
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.domain.entities.dispatch_plan import (
    DEFAULT_ALLOW_PARTIAL_SKILL_MATCH,
    DEFAULT_MAX_TRAVEL_KM,
    DEFAULT_TRAVEL_BUFFER_MINUTES,
    DispatchPlan,
    PlanConstraints,
    PlanItem,
)
from fieldops.domain.policies.intake import dedupe_ids
from fieldops.domain.policies.plan_assembly import assemble_plan

logger = logging.getLogger(__name__)


class CreateDispatchPlanUseCase:
    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        technician_repo: TechnicianRepository,
    ):
        self._assignments = assignment_repo
        self._technicians = technician_repo

    async def execute(
        self,
        plan_items: Sequence[PlanItem],
        technician_ids: Sequence[str] | None = None,
        max_travel_km: float | None = None,
        allow_partial_skill_match: bool | None = None,
        travel_buffer_minutes: int | None = None,
    ) -> DispatchPlan:
        """Assemble the plan view.

        Steps:
        1. Resolve the distinct assignment IDs of the items.
        2. Resolve the distinct technician IDs of the items.
        3. Resolve override candidates (``technician_ids``) or reuse step 2.
        4. Join, enrich names, apply constraint defaults.
        """
        if not plan_items:
            raise ValueError("planItems must contain at least one item")

        assignments = await self._assignments.get_by_ids(
            dedupe_ids(i.assignment_id for i in plan_items)
        )
        plan_technicians = await self._technicians.get_by_ids(
            dedupe_ids(i.technician_id for i in plan_items)
        )

        requested_options = dedupe_ids(technician_ids or [])
        option_technicians = (
            await self._technicians.get_by_ids(requested_options) if requested_options else None
        )

        constraints = PlanConstraints(
            max_travel_km=max_travel_km if max_travel_km is not None else DEFAULT_MAX_TRAVEL_KM,
            allow_partial_skill_match=(
                allow_partial_skill_match
                if allow_partial_skill_match is not None
                else DEFAULT_ALLOW_PARTIAL_SKILL_MATCH
            ),
            travel_buffer_minutes=(
                travel_buffer_minutes
                if travel_buffer_minutes is not None
                else DEFAULT_TRAVEL_BUFFER_MINUTES
            ),
        )

        plan = assemble_plan(
            plan_items,
            assignments,
            plan_technicians,
            option_technicians,
            constraints,
            requested_option_ids=requested_options,
        )

        for warning in plan.warnings:
            logger.warning("Dispatch plan references unknown ID: %s (%s)", warning.id, warning.code)
        logger.info(
            "Prepared dispatch plan: %d items, %d assignments, %d technicians",
            len(plan.plan_items), len(plan.assignments), len(plan.technicians),
        )
        return plan
