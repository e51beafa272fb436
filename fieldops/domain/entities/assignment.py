"""Assignment entity — a field-service work order awaiting dispatch."""

from dataclasses import dataclass, field
from datetime import datetime

from fieldops.domain.value_objects.enums import AssignmentStatus, Priority
from fieldops.domain.value_objects.geo_point import GeoPoint


@dataclass
class Assignment:
    id: str
    site: str
    category: str
    priority: Priority
    status: AssignmentStatus
    created_at: datetime
    sla_due: datetime
    estimated_start: datetime
    estimated_end: datetime
    region: str
    team: str
    location: GeoPoint
    description: str = ""
    required_skills: list[str] = field(default_factory=list)
    customer_name: str = ""
    customer_phone: str = ""
    customer_profile_pic_url: str = ""
    asset_id: str = ""
    estimated_duration_minutes: int = 0
    site_image_url: str = ""
    tags: list[str] = field(default_factory=list)
    assigned_technician_id: str | None = None
    estimated_technician_arrival: datetime | None = None

    def __post_init__(self) -> None:
        dispatch_fields = (self.assigned_technician_id, self.estimated_technician_arrival)
        if self.status == AssignmentStatus.NEW and any(f is not None for f in dispatch_fields):
            raise ValueError(f"Assignment {self.id}: New status must not carry dispatch fields")
        if self.status == AssignmentStatus.DISPATCHED and any(f is None for f in dispatch_fields):
            raise ValueError(f"Assignment {self.id}: Dispatched status requires technician and arrival")

    def is_new(self) -> bool:
        return self.status == AssignmentStatus.NEW

    def dispatch(self, technician_id: str, arrival: datetime) -> None:
        """Move a New assignment to Dispatched."""
        if not self.is_new():
            raise ValueError(f"Assignment {self.id} is {self.status.value}, expected New")
        self.assigned_technician_id = technician_id
        self.estimated_technician_arrival = arrival
        self.status = AssignmentStatus.DISPATCHED
