"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from fieldops.adapters.persistence.database import Base


class TechnicianModel(Base):
    __tablename__ = "technicians"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    profile_pic_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    years_experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shift: Mapped[str] = mapped_column(String(20), nullable=False)
    vehicle_type: Mapped[str] = mapped_column(String(20), nullable=False)
    skills: Mapped[list[str]] = mapped_column(ARRAY(String(100)), nullable=False, default=list)
    certifications: Mapped[list[str]] = mapped_column(ARRAY(String(100)), nullable=False, default=list)
    languages: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    region: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (Index("idx_technicians_region", "region"),)


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    site: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    priority: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="New")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sla_due: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    estimated_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    estimated_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    team: Mapped[str] = mapped_column(String(100), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    required_skills: Mapped[list[str]] = mapped_column(ARRAY(String(100)), nullable=False, default=list)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    customer_phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    customer_profile_pic_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    asset_id: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    estimated_duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    site_image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    assigned_technician_code: Mapped[str | None] = mapped_column(
        String(50), ForeignKey("technicians.code"), nullable=True
    )
    estimated_technician_arrival: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_assignments_status_created", "status", "created_at"),
        Index("idx_assignments_region", "region"),
        Index("idx_assignments_team", "team"),
    )
