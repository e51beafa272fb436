"""SQLAlchemy repository implementations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.persistence.models import AssignmentModel, TechnicianModel
from fieldops.application.ports.assignment_repo import AssignmentRepository
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.policies.intake import AssignmentFilters, TechnicianFilters
from fieldops.domain.value_objects.enums import (
    AssignmentStatus,
    Priority,
    Shift,
    VehicleType,
)
from fieldops.domain.value_objects.geo_point import GeoPoint

# ─── Mappers ─────────────────────────────────────────────────────────


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.code,
        site=m.site,
        category=m.category,
        priority=Priority(m.priority),
        status=AssignmentStatus(m.status),
        created_at=m.created_at,
        sla_due=m.sla_due,
        estimated_start=m.estimated_start,
        estimated_end=m.estimated_end,
        region=m.region,
        team=m.team,
        location=GeoPoint(lat=m.latitude, lng=m.longitude, address=m.address),
        description=m.description,
        required_skills=list(m.required_skills) if m.required_skills else [],
        customer_name=m.customer_name,
        customer_phone=m.customer_phone,
        customer_profile_pic_url=m.customer_profile_pic_url,
        asset_id=m.asset_id,
        estimated_duration_minutes=m.estimated_duration_minutes,
        site_image_url=m.site_image_url,
        tags=list(m.tags) if m.tags else [],
        assigned_technician_id=m.assigned_technician_code,
        estimated_technician_arrival=m.estimated_technician_arrival,
    )


def _technician_to_domain(m: TechnicianModel) -> Technician:
    return Technician(
        id=m.code,
        name=m.name,
        region=m.region,
        location=GeoPoint(lat=m.latitude, lng=m.longitude, address=m.address),
        available=m.available,
        phone=m.phone,
        profile_pic_url=m.profile_pic_url,
        rating=m.rating,
        years_experience=m.years_experience,
        shift=Shift(m.shift),
        vehicle_type=VehicleType(m.vehicle_type),
        skills=list(m.skills) if m.skills else [],
        certifications=list(m.certifications) if m.certifications else [],
        languages=list(m.languages) if m.languages else [],
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, assignment: Assignment) -> Assignment:
        m = AssignmentModel(
            code=assignment.id,
            site=assignment.site,
            category=assignment.category,
            priority=assignment.priority.value,
            status=assignment.status.value,
            created_at=assignment.created_at,
            sla_due=assignment.sla_due,
            estimated_start=assignment.estimated_start,
            estimated_end=assignment.estimated_end,
            region=assignment.region,
            team=assignment.team,
            latitude=assignment.location.lat,
            longitude=assignment.location.lng,
            address=assignment.location.address,
            description=assignment.description,
            required_skills=list(assignment.required_skills),
            customer_name=assignment.customer_name,
            customer_phone=assignment.customer_phone,
            customer_profile_pic_url=assignment.customer_profile_pic_url,
            asset_id=assignment.asset_id,
            estimated_duration_minutes=assignment.estimated_duration_minutes,
            site_image_url=assignment.site_image_url,
            tags=list(assignment.tags),
            assigned_technician_code=assignment.assigned_technician_id,
            estimated_technician_arrival=assignment.estimated_technician_arrival,
        )
        self._s.add(m)
        await self._s.flush()
        return assignment

    async def get_by_id(self, assignment_id: str) -> Assignment | None:
        result = await self._s.execute(
            select(AssignmentModel).where(AssignmentModel.code == assignment_id)
        )
        m = result.scalar_one_or_none()
        return _assignment_to_domain(m) if m else None

    async def get_by_ids(self, assignment_ids: list[str]) -> list[Assignment]:
        if not assignment_ids:
            return []
        result = await self._s.execute(
            select(AssignmentModel)
            .where(AssignmentModel.code.in_(set(assignment_ids)))
            .order_by(AssignmentModel.id)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def get_all(self) -> list[Assignment]:
        result = await self._s.execute(select(AssignmentModel).order_by(AssignmentModel.id))
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def find_new(
        self, filters: AssignmentFilters, created_after: datetime | None
    ) -> list[Assignment]:
        stmt = select(AssignmentModel).where(
            AssignmentModel.status == AssignmentStatus.NEW.value
        )
        if created_after is not None:
            stmt = stmt.where(AssignmentModel.created_at >= created_after)
        if filters.priority is not None:
            stmt = stmt.where(AssignmentModel.priority == filters.priority.value)
        if filters.region:
            stmt = stmt.where(AssignmentModel.region == filters.region)
        if filters.team:
            stmt = stmt.where(AssignmentModel.team == filters.team)

        result = await self._s.execute(stmt.order_by(AssignmentModel.id))
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def mark_dispatched(
        self,
        assignment_id: str,
        technician_id: str,
        arrival: datetime,
        expected_status: AssignmentStatus = AssignmentStatus.NEW,
    ) -> bool:
        result = await self._s.execute(
            update(AssignmentModel)
            .where(
                AssignmentModel.code == assignment_id,
                AssignmentModel.status == expected_status.value,
            )
            .values(
                status=AssignmentStatus.DISPATCHED.value,
                assigned_technician_code=technician_id,
                estimated_technician_arrival=arrival,
            )
        )
        await self._s.flush()
        return result.rowcount == 1


class SqlTechnicianRepository(TechnicianRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, technician: Technician) -> Technician:
        m = TechnicianModel(
            code=technician.id,
            name=technician.name,
            phone=technician.phone,
            profile_pic_url=technician.profile_pic_url,
            rating=technician.rating,
            years_experience=technician.years_experience,
            shift=technician.shift.value,
            vehicle_type=technician.vehicle_type.value,
            skills=list(technician.skills),
            certifications=list(technician.certifications),
            languages=list(technician.languages),
            latitude=technician.location.lat,
            longitude=technician.location.lng,
            address=technician.location.address,
            available=technician.available,
            region=technician.region,
        )
        self._s.add(m)
        await self._s.flush()
        return technician

    async def get_by_id(self, technician_id: str) -> Technician | None:
        result = await self._s.execute(
            select(TechnicianModel).where(TechnicianModel.code == technician_id)
        )
        m = result.scalar_one_or_none()
        return _technician_to_domain(m) if m else None

    async def get_by_ids(self, technician_ids: list[str]) -> list[Technician]:
        if not technician_ids:
            return []
        result = await self._s.execute(
            select(TechnicianModel)
            .where(TechnicianModel.code.in_(set(technician_ids)))
            .order_by(TechnicianModel.id)
        )
        return [_technician_to_domain(m) for m in result.scalars()]

    async def get_all(self) -> list[Technician]:
        result = await self._s.execute(select(TechnicianModel).order_by(TechnicianModel.id))
        return [_technician_to_domain(m) for m in result.scalars()]

    async def find_available(self, filters: TechnicianFilters) -> list[Technician]:
        stmt = select(TechnicianModel).where(TechnicianModel.available.is_(True))
        if filters.region:
            stmt = stmt.where(TechnicianModel.region == filters.region)
        result = await self._s.execute(stmt.order_by(TechnicianModel.id))
        return [_technician_to_domain(m) for m in result.scalars()]
