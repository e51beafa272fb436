"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.technician import Technician
from fieldops.domain.value_objects.enums import AssignmentStatus, Priority
from fieldops.domain.value_objects.geo_point import GeoPoint

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _make_assignment(
    id="A1",
    status=AssignmentStatus.NEW,
    hours_old: float = 2,
    priority=Priority.HIGH,
    region="North",
    team="Alpha",
    site=None,
    now=NOW,
    **kwargs,
) -> Assignment:
    if status != AssignmentStatus.NEW:
        kwargs.setdefault("assigned_technician_id", "T1")
        kwargs.setdefault("estimated_technician_arrival", now + timedelta(minutes=20))
    return Assignment(
        id=id,
        site=site or f"Site {id}",
        category="HVAC",
        priority=priority,
        status=status,
        created_at=now - timedelta(hours=hours_old),
        sla_due=now + timedelta(hours=8),
        estimated_start=now + timedelta(hours=1),
        estimated_end=now + timedelta(hours=3),
        region=region,
        team=team,
        location=GeoPoint(lat=47.61, lng=-122.33, address=f"{id} Main St"),
        **kwargs,
    )


def _make_technician(id="T1", name=None, region="North", available=True, **kwargs) -> Technician:
    return Technician(
        id=id,
        name=name or f"Tech {id}",
        region=region,
        location=GeoPoint(lat=47.60, lng=-122.32, address="Depot"),
        available=available,
        **kwargs,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def make_assignment():
    return _make_assignment


@pytest.fixture
def make_technician():
    return _make_technician
