"""IntakePolicy — which work orders and technicians are eligible for planning."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, TypeVar

from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.value_objects.enums import Priority

T = TypeVar("T")


@dataclass(frozen=True)
class AssignmentFilters:
    """Caller-supplied intake filters.

    ``max_hours_old`` stays ``None`` when the caller omitted it; the intake
    use case relies on that to decide whether the no-recency fallback may run.
    """

    priority: Priority | None = None
    region: str | None = None
    team: str | None = None
    max_hours_old: int | None = None

    def window_start(self, now: datetime, default_hours: int) -> datetime:
        hours = self.max_hours_old if self.max_hours_old is not None else default_hours
        return now - timedelta(hours=hours)


@dataclass(frozen=True)
class TechnicianFilters:
    region: str | None = None


def assignment_matches(
    assignment: Assignment,
    filters: AssignmentFilters,
    created_after: datetime | None,
) -> bool:
    """Conjunctive match: status New, recency (if given), priority, region, team.

    Region and team compare exactly and case-sensitively.
    """
    if not assignment.is_new():
        return False
    if created_after is not None and assignment.created_at < created_after:
        return False
    if filters.priority is not None and assignment.priority != filters.priority:
        return False
    if filters.region and assignment.region != filters.region:
        return False
    if filters.team and assignment.team != filters.team:
        return False
    return True


def technician_matches(technician: Technician, filters: TechnicianFilters) -> bool:
    if not technician.available:
        return False
    return not filters.region or technician.region == filters.region


def dedupe_ids(ids: Iterable[str]) -> list[str]:
    """Drop repeated IDs, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def select_by_ids(pool: Iterable[T], ids: Iterable[str]) -> list[T]:
    """Set-membership filter over ``pool``; unmatched IDs are silently dropped.

    The result follows pool order and holds at most one entry per ID.
    """
    wanted = set(ids)
    return [item for item in pool if item.id in wanted]
