from .enums import DoseKind, MealCategory, GlucoseStatus
from .forecast import (
    CarbEvent,
    InsulinEvent,
    LoggedEvent,
    PredictionConfig,
    PredictionConfigUpdate,
    PredictionPoint,
    PredictionSummary,
)
from .notes import GlucoseNote
