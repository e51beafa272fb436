"""Technician entity."""

from dataclasses import dataclass, field

from fieldops.domain.value_objects.enums import Shift, VehicleType
from fieldops.domain.value_objects.geo_point import GeoPoint


@dataclass
class Technician:
    id: str
    name: str
    region: str
    location: GeoPoint
    available: bool = True
    phone: str = ""
    profile_pic_url: str = ""
    rating: float = 0.0
    years_experience: int = 0
    shift: Shift = Shift.MORNING
    vehicle_type: VehicleType = VehicleType.VAN
    skills: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
