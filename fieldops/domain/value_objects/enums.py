"""Domain enums."""

from enum import Enum


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AssignmentStatus(str, Enum):
    NEW = "New"
    DISPATCHED = "Dispatched"
    EN_ROUTE = "EnRoute"


class SkillMatch(str, Enum):
    FULL = "Full"
    PARTIAL = "Partial"


class Shift(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"
    NIGHT = "Night"


class VehicleType(str, Enum):
    BIKE = "Bike"
    VAN = "Van"
    CAR = "Car"
