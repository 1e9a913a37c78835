from enum import Enum


class DoseKind(str, Enum):
    BOLUS = "bolus"
    BASAL = "basal"
    CORRECTION = "correction"


class MealCategory(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    CORRECTION = "Correction"
    OTHER = "Other"


class GlucoseStatus(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"
