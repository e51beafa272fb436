"""PlanAssemblyPolicy — joins caller-proposed pairings against the entity pools.

Pairing quality (skill match, ETA, distance, reasoning) always comes from the
caller. Nothing here chooses or reorders technicians.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.dispatch_plan import (
    DispatchPlan,
    PlanConstraints,
    PlanItem,
    ReferenceWarning,
    TechnicianOption,
)
from fieldops.domain.entities.dispatch_record import CommitRow, DispatchRecord
from fieldops.domain.entities.technician import Technician

UNRESOLVED_ASSIGNMENT = "unresolved_assignment"
UNRESOLVED_TECHNICIAN = "unresolved_technician"


def _missing(ids: Iterable[str], known: dict, code: str) -> list[ReferenceWarning]:
    seen: set[str] = set()
    warnings = []
    for ref in ids:
        if ref not in known and ref not in seen:
            seen.add(ref)
            warnings.append(ReferenceWarning(code=code, id=ref))
    return warnings


def assemble_plan(
    items: Sequence[PlanItem],
    assignments: Sequence[Assignment],
    plan_technicians: Sequence[Technician],
    option_technicians: Sequence[Technician] | None,
    constraints: PlanConstraints,
    requested_option_ids: Sequence[str] = (),
) -> DispatchPlan:
    """Build a reviewable plan from resolved entities.

    Args:
        items: caller pairings, one output row per input row.
        assignments: assignments resolved from the items' IDs.
        plan_technicians: technicians resolved from the items' IDs.
        option_technicians: resolved override candidates, or None to reuse
            ``plan_technicians``.
        constraints: display constraints with defaults already applied.
        requested_option_ids: raw override IDs, only used for warnings.

    Returns:
        DispatchPlan with enriched items and a warning per unresolved ID.
    """
    plan_by_id = {t.id: t for t in plan_technicians}
    options = list(option_technicians) if option_technicians is not None else list(plan_technicians)

    # Union keyed by ID; entities are keyed so overwrite order does not matter
    technicians_by_id = {t.id: t for t in [*plan_technicians, *options]}

    enriched = [
        replace(
            item,
            technician_name=plan_by_id[item.technician_id].name
            if item.technician_id in plan_by_id
            else item.technician_id,
        )
        for item in items
    ]

    assignments_by_id = {a.id: a for a in assignments}
    warnings = _missing((i.assignment_id for i in items), assignments_by_id, UNRESOLVED_ASSIGNMENT)
    warnings += _missing(
        [*(i.technician_id for i in items), *requested_option_ids],
        technicians_by_id,
        UNRESOLVED_TECHNICIAN,
    )

    return DispatchPlan(
        constraints=constraints,
        plan_items=enriched,
        assignments=list(assignments),
        technicians=list(technicians_by_id.values()),
        technician_options=[TechnicianOption(id=t.id, name=t.name) for t in options],
        warnings=warnings,
    )


def build_dispatch_records(
    rows: Sequence[CommitRow],
    assignments: Sequence[Assignment],
    technicians: Sequence[Technician],
    commit_time: datetime,
) -> tuple[list[DispatchRecord], list[ReferenceWarning]]:
    """Turn reviewed rows into dispatch records sharing one ``commit_time`` baseline."""
    assignments_by_id = {a.id: a for a in assignments}
    technicians_by_id = {t.id: t for t in technicians}

    records = []
    for row in rows:
        assignment = assignments_by_id.get(row.assignment_id)
        technician = technicians_by_id.get(row.technician_id)
        records.append(
            DispatchRecord(
                assignment_id=row.assignment_id,
                site=assignment.site if assignment else row.assignment_id,
                technician_id=row.technician_id,
                technician_name=technician.name if technician else row.technician_id,
                eta_minutes=row.eta_minutes,
                estimated_technician_arrival=commit_time + timedelta(minutes=row.eta_minutes),
            )
        )

    warnings = _missing((r.assignment_id for r in rows), assignments_by_id, UNRESOLVED_ASSIGNMENT)
    warnings += _missing((r.technician_id for r in rows), technicians_by_id, UNRESOLVED_TECHNICIAN)
    return records, warnings
