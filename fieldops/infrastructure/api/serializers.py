"""Entity → tool ``structuredContent`` dicts (camelCase, ISO-8601 UTC timestamps)."""

from __future__ import annotations

from datetime import datetime, timezone

from fieldops.application.use_cases.commit_assignments import CommitResult
from fieldops.domain.entities.assignment import Assignment
from fieldops.domain.entities.dispatch_plan import DispatchPlan, PlanItem, ReferenceWarning
from fieldops.domain.entities.dispatch_record import DispatchRecord
from fieldops.domain.entities.technician import Technician


def iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def tool_result(text: str, structured: dict) -> dict:
    """Wrap a structured payload in the tool-call result envelope."""
    return {
        "content": [{"type": "text", "text": text}],
        "structuredContent": structured,
    }


def serialize_assignment(a: Assignment, include_asset: bool = True) -> dict:
    data = {
        "id": a.id,
        "site": a.site,
        "category": a.category,
        "priority": a.priority.value,
        "slaDue": iso(a.sla_due),
        "estimatedStartDateTime": iso(a.estimated_start),
        "estimatedEndDateTime": iso(a.estimated_end),
        "description": a.description,
        "requiredSkills": list(a.required_skills),
        "customerName": a.customer_name,
        "customerPhone": a.customer_phone,
        "customerProfilePicUrl": a.customer_profile_pic_url,
        "estimatedTechnicianArrivalDateTime": iso(a.estimated_technician_arrival),
        "assignedTechnicianId": a.assigned_technician_id,
        "siteImageUrl": a.site_image_url,
        "tags": list(a.tags),
        "status": a.status.value,
        "region": a.region,
        "team": a.team,
        "createdAt": iso(a.created_at),
        "address": a.location.address,
        "lat": a.location.lat,
        "lng": a.location.lng,
    }
    # The map view does not show asset details
    if include_asset:
        data["assetId"] = a.asset_id
        data["estimatedDurationMinutes"] = a.estimated_duration_minutes
    return data


def serialize_technician(t: Technician) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "profilePicUrl": t.profile_pic_url,
        "phone": t.phone,
        "rating": t.rating,
        "yearsExperience": t.years_experience,
        "shift": t.shift.value,
        "vehicleType": t.vehicle_type.value,
        "skills": list(t.skills),
        "certifications": list(t.certifications),
        "languages": list(t.languages),
        "available": t.available,
        "region": t.region,
        "lat": t.location.lat,
        "lng": t.location.lng,
        "address": t.location.address,
    }


def serialize_warning(w: ReferenceWarning) -> dict:
    return {"code": w.code, "id": w.id}


def _serialize_plan_item(item: PlanItem) -> dict:
    data = {
        "assignmentId": item.assignment_id,
        "technicianId": item.technician_id,
        "technicianName": item.technician_name,
        "etaMinutes": item.eta_minutes,
    }
    if item.reason is not None:
        data["reason"] = item.reason
    if item.skill_match is not None:
        data["skillMatch"] = item.skill_match.value
    if item.distance_km is not None:
        data["distanceKm"] = item.distance_km
    return data


def serialize_plan(plan: DispatchPlan) -> dict:
    return {
        "view": "plan",
        "constraints": {
            "maxTravelKm": plan.constraints.max_travel_km,
            "allowPartialSkillMatch": plan.constraints.allow_partial_skill_match,
            "travelBufferMinutes": plan.constraints.travel_buffer_minutes,
        },
        "planItems": [_serialize_plan_item(i) for i in plan.plan_items],
        "assignments": [serialize_assignment(a) for a in plan.assignments],
        "technicians": [serialize_technician(t) for t in plan.technicians],
        "technicianOptions": [{"id": o.id, "name": o.name} for o in plan.technician_options],
        "warnings": [serialize_warning(w) for w in plan.warnings],
    }


def serialize_record(r: DispatchRecord) -> dict:
    return {
        "assignmentId": r.assignment_id,
        "site": r.site,
        "technicianId": r.technician_id,
        "technicianName": r.technician_name,
        "etaMinutes": r.eta_minutes,
        "estimatedTechnicianArrivalDateTime": iso(r.estimated_technician_arrival),
        "assignedTechnicianId": r.technician_id,
        "status": r.status.value,
    }


def serialize_commit(result: CommitResult) -> dict:
    return {
        "summary": result.summary,
        "count": len(result.records),
        "committedAt": iso(result.committed_at),
        "persisted": result.persisted,
        "rows": [serialize_record(r) for r in result.records],
        "warnings": [serialize_warning(w) for w in result.warnings],
    }
