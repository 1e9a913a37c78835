from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from glucoview.models.forecast import LoggedEvent
from glucoview.models.notes import GlucoseNote


class COBConfig(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    carb_ratio: float = Field(2.0, ge=0, description="Glucose rise per 10 g of carbs")
    isf: float = Field(1.0, ge=0, description="Glucose drop per unit of insulin")
    carb_half_life_minutes: float = Field(45.0, gt=0)
    max_cob_minutes: float = Field(240.0, gt=0, description="How long a meal is tracked")
    insulin_half_life_minutes: float = Field(210.0, gt=0)


class ActiveCarbEntry(BaseModel):
    timestamp: datetime
    carbs_remaining: float
    original_carbs: float
    meal_label: Optional[str] = None
    comment: Optional[str] = None


class COBStatus(BaseModel):
    at: datetime
    current_cob: float  # grams
    active_entries: List[ActiveCarbEntry] = []
    estimated_glucose_impact: float = 0.0
    time_to_zero_minutes: int = 0
    insulin_on_board: float = 0.0


class COBProjectionPoint(BaseModel):
    time: datetime
    cob: float
    iob: float


class COBRequest(BaseModel):
    events: List[LoggedEvent] = Field(default_factory=list)
    at: Optional[datetime] = None
    config: Optional[COBConfig] = None


class COBDailySummary(BaseModel):
    day: date
    total_carbs: int = 0  # grams, rounded
    total_insulin: float = 0.0
    average_glucose: float = 0.0  # 0 when no reading was logged
    carb_insulin_ratio: float = 0.0  # grams per unit, 0 without insulin
    note_count: int = 0


class COBSummaryRequest(BaseModel):
    notes: List[GlucoseNote] = Field(default_factory=list)
    day: Optional[date] = Field(None, description="UTC calendar day (default: today)")
