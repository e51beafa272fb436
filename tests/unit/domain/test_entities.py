"""Tests for domain entities."""

from datetime import timedelta

import pytest

from fieldops.domain.value_objects.enums import AssignmentStatus


def test_new_assignment_has_no_dispatch_fields(make_assignment):
    a = make_assignment()
    assert a.is_new() is True
    assert a.assigned_technician_id is None
    assert a.estimated_technician_arrival is None


def test_new_assignment_with_technician_is_rejected(make_assignment):
    with pytest.raises(ValueError, match="New status"):
        make_assignment(assigned_technician_id="T1")


def test_dispatched_assignment_requires_both_fields(make_assignment, now):
    with pytest.raises(ValueError, match="Dispatched"):
        make_assignment(
            status=AssignmentStatus.DISPATCHED,
            assigned_technician_id="T1",
            estimated_technician_arrival=None,
        )


def test_en_route_assignment_is_not_new(make_assignment):
    a = make_assignment(status=AssignmentStatus.EN_ROUTE)
    assert a.is_new() is False


def test_dispatch_moves_new_to_dispatched(make_assignment, now):
    a = make_assignment()
    arrival = now + timedelta(minutes=15)
    a.dispatch("T7", arrival)
    assert a.status == AssignmentStatus.DISPATCHED
    assert a.assigned_technician_id == "T7"
    assert a.estimated_technician_arrival == arrival


def test_dispatch_twice_is_rejected(make_assignment, now):
    a = make_assignment()
    a.dispatch("T7", now)
    with pytest.raises(ValueError, match="expected New"):
        a.dispatch("T8", now)

