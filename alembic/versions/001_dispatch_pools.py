"""Initial schema — technician and assignment pools.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Technicians
    op.create_table(
        "technicians",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("profile_pic_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("rating", sa.Float, nullable=False, server_default="0"),
        sa.Column("years_experience", sa.Integer, nullable=False, server_default="0"),
        sa.Column("shift", sa.String(20), nullable=False),
        sa.Column("vehicle_type", sa.String(20), nullable=False),
        sa.Column("skills", ARRAY(sa.String(100)), nullable=False, server_default="{}"),
        sa.Column("certifications", ARRAY(sa.String(100)), nullable=False, server_default="{}"),
        sa.Column("languages", ARRAY(sa.String(50)), nullable=False, server_default="{}"),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("address", sa.Text, nullable=False, server_default=""),
        sa.Column("available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("region", sa.String(100), nullable=False),
    )
    op.create_index("idx_technicians_region", "technicians", ["region"])

    # Assignments
    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("site", sa.String(200), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="New"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sla_due", sa.DateTime(timezone=True), nullable=False),
        sa.Column("estimated_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("estimated_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("region", sa.String(100), nullable=False),
        sa.Column("team", sa.String(100), nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("address", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("required_skills", ARRAY(sa.String(100)), nullable=False, server_default="{}"),
        sa.Column("customer_name", sa.String(200), nullable=False, server_default=""),
        sa.Column("customer_phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("customer_profile_pic_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("asset_id", sa.String(100), nullable=False, server_default=""),
        sa.Column("estimated_duration_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("site_image_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("tags", ARRAY(sa.String(50)), nullable=False, server_default="{}"),
        sa.Column(
            "assigned_technician_code",
            sa.String(50),
            sa.ForeignKey("technicians.code"),
            nullable=True,
        ),
        sa.Column("estimated_technician_arrival", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("idx_assignments_status_created", "assignments", ["status", "created_at"])
    op.create_index("idx_assignments_region", "assignments", ["region"])
    op.create_index("idx_assignments_team", "assignments", ["team"])


def downgrade() -> None:
    op.drop_table("assignments")
    op.drop_table("technicians")
