"""CSV loader — reads the assignment and technician pools from CSV files."""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path

from fieldops.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_datetime,
    parse_list,
)
from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.value_objects.enums import (
    AssignmentStatus,
    Priority,
    Shift,
    VehicleType,
)
from fieldops.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization."""
    with open(file_path, encoding=encoding, newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s", len(rows), file_path.name)
    return rows


def _require(row: dict, key: str, file_path: Path, line: int) -> str:
    value = row.get(key)
    if not value:
        raise ValueError(f"{file_path.name}:{line}: missing required column '{key}'")
    return value


def _required_datetime(row: dict, keys: tuple[str, ...], file_path: Path, line: int) -> datetime:
    """First present column among ``keys`` (header spellings differ between exports)."""
    for key in keys:
        if row.get(key):
            return parse_datetime(row[key])
    raise ValueError(f"{file_path.name}:{line}: missing required column '{keys[0]}'")


def load_assignments(file_path: Path) -> list[Assignment]:
    """Load the work-order pool.

    Expected columns (after normalization):
        id, site, category, priority, status, created_at, sla_due,
        estimated_start[_date_time], estimated_end[_date_time], region, team,
        lat, lng, address, plus optional descriptive columns.
    """
    assignments = []
    for line, row in enumerate(_read_csv(file_path), start=2):
        assignments.append(
            Assignment(
                id=_require(row, "id", file_path, line),
                site=_require(row, "site", file_path, line),
                category=row.get("category") or "",
                priority=Priority(row.get("priority") or Priority.MEDIUM.value),
                status=AssignmentStatus(row.get("status") or AssignmentStatus.NEW.value),
                created_at=_required_datetime(row, ("created_at",), file_path, line),
                sla_due=_required_datetime(row, ("sla_due",), file_path, line),
                estimated_start=_required_datetime(
                    row, ("estimated_start_date_time", "estimated_start"), file_path, line
                ),
                estimated_end=_required_datetime(
                    row, ("estimated_end_date_time", "estimated_end"), file_path, line
                ),
                region=row.get("region") or "",
                team=row.get("team") or "",
                location=GeoPoint(
                    lat=float(_require(row, "lat", file_path, line)),
                    lng=float(_require(row, "lng", file_path, line)),
                    address=row.get("address") or "",
                ),
                description=row.get("description") or "",
                required_skills=parse_list(row.get("required_skills")),
                customer_name=row.get("customer_name") or "",
                customer_phone=row.get("customer_phone") or "",
                customer_profile_pic_url=row.get("customer_profile_pic_url") or "",
                asset_id=row.get("asset_id") or "",
                estimated_duration_minutes=int(row.get("estimated_duration_minutes") or 0),
                site_image_url=row.get("site_image_url") or "",
                tags=parse_list(row.get("tags")),
                assigned_technician_id=row.get("assigned_technician_id"),
                estimated_technician_arrival=parse_datetime(
                    row.get("estimated_technician_arrival_date_time")
                    or row.get("estimated_technician_arrival")
                ),
            )
        )
    logger.info("Parsed %d assignments", len(assignments))
    return assignments


def load_technicians(file_path: Path) -> list[Technician]:
    """Load the technician pool.

    Expected columns (after normalization):
        id, name, region, lat, lng, address, available, plus optional profile
        columns (phone, rating, years_experience, shift, vehicle_type, skills,
        certifications, languages, profile_pic_url).
    """
    technicians = []
    for line, row in enumerate(_read_csv(file_path), start=2):
        technicians.append(
            Technician(
                id=_require(row, "id", file_path, line),
                name=_require(row, "name", file_path, line),
                region=row.get("region") or "",
                location=GeoPoint(
                    lat=float(_require(row, "lat", file_path, line)),
                    lng=float(_require(row, "lng", file_path, line)),
                    address=row.get("address") or "",
                ),
                available=parse_bool(row.get("available"), default=True),
                phone=row.get("phone") or "",
                profile_pic_url=row.get("profile_pic_url") or "",
                rating=float(row.get("rating") or 0),
                years_experience=int(row.get("years_experience") or 0),
                shift=Shift(row.get("shift") or Shift.MORNING.value),
                vehicle_type=VehicleType(row.get("vehicle_type") or VehicleType.VAN.value),
                skills=parse_list(row.get("skills")),
                certifications=parse_list(row.get("certifications")),
                languages=parse_list(row.get("languages")),
            )
        )
    logger.info("Parsed %d technicians", len(technicians))
    return technicians
