"""Seed the SQL store from CSV files.

Usage:
    python -m fieldops.tools.seed_db
    python -m fieldops.tools.seed_db --data-dir data
    python -m fieldops.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.csv_loader.loader import load_assignments, load_technicians
from fieldops.adapters.persistence.database import async_session_factory
from fieldops.adapters.persistence.models import AssignmentModel, TechnicianModel
from fieldops.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlTechnicianRepository,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in FK order (assignments reference technicians)."""
    for model in [AssignmentModel, TechnicianModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records; existing IDs are skipped."""
    counts = {"technicians": 0, "assignments": 0}

    technician_csv = data_dir / "technicians.csv"
    assignment_csv = data_dir / "assignments.csv"
    for csv_path in (technician_csv, assignment_csv):
        if not csv_path.exists():
            raise FileNotFoundError(f"Expected {csv_path.name} in {data_dir}")

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        technicians = SqlTechnicianRepository(session)
        for technician in load_technicians(technician_csv):
            if await technicians.get_by_id(technician.id):
                logger.debug("Technician '%s' already exists, skipping", technician.id)
                continue
            await technicians.save(technician)
            counts["technicians"] += 1
        await session.commit()

        assignments = SqlAssignmentRepository(session)
        for assignment in load_assignments(assignment_csv):
            if await assignments.get_by_id(assignment.id):
                logger.debug("Assignment '%s' already exists, skipping", assignment.id)
                continue
            await assignments.save(assignment)
            counts["assignments"] += 1
        await session.commit()

    logger.info(
        "Seeded %d technicians, %d assignments", counts["technicians"], counts["assignments"]
    )
    return counts


async def _verify_data() -> None:
    async with async_session_factory() as session:
        status_rows = (
            await session.execute(
                select(AssignmentModel.status, func.count(AssignmentModel.id))
                .group_by(AssignmentModel.status)
            )
        ).all()
        available = (
            await session.execute(
                select(func.count(TechnicianModel.id)).where(TechnicianModel.available.is_(True))
            )
        ).scalar() or 0

    logger.info("Assignments by status: %s", {status: count for status, count in status_rows})
    logger.info("Available technicians: %d", available)


def main():
    parser = argparse.ArgumentParser(description="Seed FieldOps database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default="data",
        help="Directory containing assignments.csv and technicians.csv (default: data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
