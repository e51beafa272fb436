"""Port interface for the technician pool."""

from abc import ABC, abstractmethod

from fieldops.domain.entities.technician import Technician
from fieldops.domain.policies.intake import TechnicianFilters


class TechnicianRepository(ABC):
    @abstractmethod
    async def save(self, technician: Technician) -> Technician:
        ...

    @abstractmethod
    async def get_by_id(self, technician_id: str) -> Technician | None:
        ...

    @abstractmethod
    async def get_by_ids(self, technician_ids: list[str]) -> list[Technician]:
        """Set-membership lookup in pool order; unknown IDs are dropped."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Technician]:
        ...

    @abstractmethod
    async def find_available(self, filters: TechnicianFilters) -> list[Technician]:
        ...
