"""Tests for PlanAssemblyPolicy."""

from datetime import timedelta

from fieldops.domain.entities.dispatch_plan import PlanConstraints, PlanItem
from fieldops.domain.entities.dispatch_record import CommitRow
from fieldops.domain.policies.plan_assembly import (
    UNRESOLVED_ASSIGNMENT,
    UNRESOLVED_TECHNICIAN,
    assemble_plan,
    build_dispatch_records,
)
from fieldops.domain.value_objects.enums import AssignmentStatus, SkillMatch


def _item(assignment_id="A1", technician_id="T1", eta=30, **kwargs) -> PlanItem:
    return PlanItem(assignment_id=assignment_id, technician_id=technician_id, eta_minutes=eta, **kwargs)


def test_assemble_enriches_technician_name(make_assignment, make_technician):
    plan = assemble_plan(
        [_item(reason="closest", skill_match=SkillMatch.FULL, distance_km=4.2)],
        [make_assignment()],
        [make_technician(name="Avery")],
        None,
        PlanConstraints(),
    )
    item = plan.plan_items[0]
    assert item.technician_name == "Avery"
    assert item.reason == "closest"
    assert item.skill_match == SkillMatch.FULL
    assert item.distance_km == 4.2
    assert plan.warnings == []


def test_assemble_unknown_technician_echoes_id(make_assignment):
    plan = assemble_plan([_item(technician_id="T9")], [make_assignment()], [], None, PlanConstraints())
    assert plan.plan_items[0].technician_name == "T9"
    assert [(w.code, w.id) for w in plan.warnings] == [(UNRESOLVED_TECHNICIAN, "T9")]


def test_assemble_unknown_assignment_is_warned_not_fatal(make_technician):
    plan = assemble_plan([_item(assignment_id="A404")], [], [make_technician()], None, PlanConstraints())
    assert len(plan.plan_items) == 1
    assert plan.assignments == []
    assert [(w.code, w.id) for w in plan.warnings] == [(UNRESOLVED_ASSIGNMENT, "A404")]


def test_assemble_keeps_one_item_per_input_item(make_assignment, make_technician):
    items = [_item("A1", "T1"), _item("A2", "T1"), _item("A1", "T2")]
    plan = assemble_plan(
        items,
        [make_assignment("A1"), make_assignment("A2")],
        [make_technician("T1"), make_technician("T2")],
        None,
        PlanConstraints(),
    )
    assert [(i.assignment_id, i.technician_id) for i in plan.plan_items] == [
        ("A1", "T1"), ("A2", "T1"), ("A1", "T2"),
    ]
    assert all(i.technician_name for i in plan.plan_items)


def test_assemble_does_not_mutate_input_items(make_assignment, make_technician):
    item = _item()
    assemble_plan([item], [make_assignment()], [make_technician()], None, PlanConstraints())
    assert item.technician_name is None


def test_options_default_to_plan_technicians(make_assignment, make_technician):
    plan = assemble_plan(
        [_item()], [make_assignment()], [make_technician("T1", name="Avery")], None, PlanConstraints()
    )
    assert [(o.id, o.name) for o in plan.technician_options] == [("T1", "Avery")]


def test_technicians_are_union_of_plan_and_options(make_assignment, make_technician):
    t1, t2, t3 = make_technician("T1"), make_technician("T2"), make_technician("T3")
    plan = assemble_plan([_item()], [make_assignment()], [t1], [t2, t1, t3], PlanConstraints())
    assert [t.id for t in plan.technicians] == ["T1", "T2", "T3"]
    assert [o.id for o in plan.technician_options] == ["T2", "T1", "T3"]


def test_unresolved_option_ids_are_warned(make_assignment, make_technician):
    plan = assemble_plan(
        [_item()],
        [make_assignment()],
        [make_technician("T1")],
        [],
        PlanConstraints(),
        requested_option_ids=["T1", "T404"],
    )
    assert [(w.code, w.id) for w in plan.warnings] == [(UNRESOLVED_TECHNICIAN, "T404")]


def test_constraints_are_carried(make_assignment, make_technician):
    constraints = PlanConstraints(max_travel_km=120, allow_partial_skill_match=False, travel_buffer_minutes=0)
    plan = assemble_plan([_item()], [make_assignment()], [make_technician()], None, constraints)
    assert plan.constraints == constraints


def test_records_share_one_baseline(make_assignment, make_technician, now):
    rows = [CommitRow("A1", "T1", 15), CommitRow("A2", "T2", 45)]
    records, warnings = build_dispatch_records(
        rows,
        [make_assignment("A1", site="Harbor"), make_assignment("A2", site="Pike")],
        [make_technician("T1", name="Avery"), make_technician("T2", name="Jordan")],
        now,
    )
    assert warnings == []
    assert [r.estimated_technician_arrival for r in records] == [
        now + timedelta(minutes=15),
        now + timedelta(minutes=45),
    ]
    assert records[1].estimated_technician_arrival - records[0].estimated_technician_arrival == timedelta(minutes=30)
    assert [(r.site, r.technician_name) for r in records] == [("Harbor", "Avery"), ("Pike", "Jordan")]
    assert all(r.status == AssignmentStatus.DISPATCHED for r in records)


def test_records_fall_back_to_raw_ids(now):
    records, warnings = build_dispatch_records([CommitRow("A404", "T404", 10)], [], [], now)
    assert records[0].site == "A404"
    assert records[0].technician_name == "T404"
    assert {w.code for w in warnings} == {UNRESOLVED_ASSIGNMENT, UNRESOLVED_TECHNICIAN}
