"""Port interface for the assignment (work order) pool."""

from abc import ABC, abstractmethod
from datetime import datetime

from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.policies.intake import AssignmentFilters
from fieldops.domain.value_objects.enums import AssignmentStatus


class AssignmentRepository(ABC):
    @abstractmethod
    async def save(self, assignment: Assignment) -> Assignment:
        ...

    @abstractmethod
    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        ...

    @abstractmethod
    async def get_by_ids(self, assignment_ids: list[str]) -> list[Assignment]:
        """Return the assignments whose ID is in ``assignment_ids``, in pool order.

        Unknown IDs are dropped; each assignment appears at most once.
        """
        ...

    @abstractmethod
    async def get_all(self) -> list[Assignment]:
        ...

    @abstractmethod
    async def find_new(
        self, filters: AssignmentFilters, created_after: datetime | None
    ) -> list[Assignment]:
        """Return New assignments matching ``filters``, in pool order.

        ``created_after=None`` disables the recency check.
        """
        ...

    @abstractmethod
    async def mark_dispatched(
        self,
        assignment_id: str,
        technician_id: str,
        arrival: datetime,
        expected_status: AssignmentStatus = AssignmentStatus.NEW,
    ) -> bool:
        """Compare-and-swap the assignment into Dispatched.

        Returns False (and writes nothing) when the assignment is missing or
        its status is no longer ``expected_status``.
        """
        ...
