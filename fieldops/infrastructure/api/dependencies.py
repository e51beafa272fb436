"""FastAPI dependency injection: wires repositories into use cases."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.csv_loader.loader import load_assignments, load_technicians
from fieldops.adapters.memory.repositories import (
    InMemoryAssignmentRepository,
    InMemoryTechnicianRepository,
)
from fieldops.adapters.persistence.database import async_session_factory
from fieldops.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlTechnicianRepository,
)
from fieldops.application.ports.assignment_repo import AssignmentRepository
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.application.use_cases.commit_assignments import CommitAssignmentsUseCase
from fieldops.application.use_cases.create_dispatch_plan import CreateDispatchPlanUseCase
from fieldops.application.use_cases.intake import (
    GetAvailableTechniciansUseCase,
    ListNewAssignmentsUseCase,
    ShowAssignmentsOnMapUseCase,
)
from fieldops.config import settings

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Repositories for one request, plus the SQL session when there is one."""

    assignments: AssignmentRepository
    technicians: TechnicianRepository
    session: AsyncSession | None = None

    async def commit(self) -> None:
        if self.session is not None:
            await self.session.commit()


@lru_cache
def memory_pools() -> tuple[InMemoryAssignmentRepository, InMemoryTechnicianRepository]:
    """Load the CSV pools once per process."""
    data_dir = Path(settings.csv_data_path)
    assignments_csv = data_dir / "assignments.csv"
    technicians_csv = data_dir / "technicians.csv"

    assignments = load_assignments(assignments_csv) if assignments_csv.exists() else []
    technicians = load_technicians(technicians_csv) if technicians_csv.exists() else []
    if not assignments and not technicians:
        logger.warning("No CSV pools found in %s, starting with empty pools", data_dir)

    return InMemoryAssignmentRepository(assignments), InMemoryTechnicianRepository(technicians)


async def get_repositories() -> AsyncIterator[Repositories]:
    if settings.data_backend == "sql":
        async with async_session_factory() as session:
            yield Repositories(
                assignments=SqlAssignmentRepository(session),
                technicians=SqlTechnicianRepository(session),
                session=session,
            )
    else:
        assignments, technicians = memory_pools()
        yield Repositories(assignments=assignments, technicians=technicians)


def get_list_new_assignments_uc(
    repos: Repositories = Depends(get_repositories),
) -> ListNewAssignmentsUseCase:
    return ListNewAssignmentsUseCase(
        assignment_repo=repos.assignments,
        default_max_hours_old=settings.default_max_hours_old,
        default_max_results=settings.default_max_results,
    )


def get_show_on_map_uc(
    repos: Repositories = Depends(get_repositories),
    list_uc: ListNewAssignmentsUseCase = Depends(get_list_new_assignments_uc),
) -> ShowAssignmentsOnMapUseCase:
    return ShowAssignmentsOnMapUseCase(
        assignment_repo=repos.assignments,
        list_new_assignments=list_uc,
    )


def get_available_technicians_uc(
    repos: Repositories = Depends(get_repositories),
) -> GetAvailableTechniciansUseCase:
    return GetAvailableTechniciansUseCase(technician_repo=repos.technicians)


def get_create_dispatch_plan_uc(
    repos: Repositories = Depends(get_repositories),
) -> CreateDispatchPlanUseCase:
    return CreateDispatchPlanUseCase(
        assignment_repo=repos.assignments,
        technician_repo=repos.technicians,
    )


def get_commit_assignments_uc(
    repos: Repositories = Depends(get_repositories),
) -> CommitAssignmentsUseCase:
    return CommitAssignmentsUseCase(
        assignment_repo=repos.assignments,
        technician_repo=repos.technicians,
        persist=settings.persist_commits,
    )
