from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glucoview.models.enums import DoseKind
from glucoview.utils.timezone import ensure_utc


MAX_HORIZON_HOURS = 48.0


# --- Events ---

class CarbEvent(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["carbs"] = "carbs"
    timestamp: datetime
    carbs_grams: float = Field(..., ge=0, description="Grams of carbohydrate eaten")
    meal_label: Optional[str] = None
    comment: Optional[str] = None

    @field_validator("timestamp")
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class InsulinEvent(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["insulin"] = "insulin"
    timestamp: datetime
    units_delivered: float = Field(..., ge=0, description="Insulin units delivered")
    dose_kind: DoseKind = DoseKind.BOLUS
    comment: Optional[str] = None

    @field_validator("timestamp")
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


LoggedEvent = Annotated[Union[CarbEvent, InsulinEvent], Field(discriminator="kind")]


# --- Configuration ---

class PredictionConfig(BaseModel):
    """Tunable parameters of the forecast model.

    Concentration values are unit-agnostic: the defaults assume mmol/L, but any
    consistent unit works as long as the caller supplies glucose in that unit.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    carb_absorption_rate: float = Field(30.0, gt=0, description="Carb absorption rate (g/h)")
    carb_glucose_ratio: float = Field(0.2, ge=0, description="Glucose rise per gram of carbs")
    insulin_sensitivity_factor: float = Field(1.0, ge=0, description="Glucose drop per unit of insulin")
    insulin_action_duration_hours: float = Field(5.0, gt=0, description="Duration of insulin action (h)")
    insulin_peak_time_hours: float = Field(1.0, gt=0, description="Time to peak insulin activity (h)")
    basal_glucose_decline_per_hour: float = Field(0.0, ge=0, description="Drift with no food or insulin (per h)")
    glucose_volatility: float = Field(0.5, ge=0, description="Natural glucose fluctuation")
    max_prediction_hours: float = Field(6.0, ge=0, le=MAX_HORIZON_HOURS, description="Horizon of a full forecast (h)")
    prediction_interval_minutes: int = Field(15, ge=1, description="Minutes between prediction points")


class PredictionConfigUpdate(BaseModel):
    """Partial PredictionConfig; unset fields keep their current value."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    carb_absorption_rate: Optional[float] = None
    carb_glucose_ratio: Optional[float] = None
    insulin_sensitivity_factor: Optional[float] = None
    insulin_action_duration_hours: Optional[float] = None
    insulin_peak_time_hours: Optional[float] = None
    basal_glucose_decline_per_hour: Optional[float] = None
    glucose_volatility: Optional[float] = None
    max_prediction_hours: Optional[float] = None
    prediction_interval_minutes: Optional[int] = None

    def as_partial(self) -> dict:
        return self.model_dump(exclude_none=True)


# --- Results ---

class PredictionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: datetime
    predicted_glucose: float
    carb_contribution: float = 0.0  # Positive
    insulin_contribution: float = 0.0  # Negative or zero
    baseline_glucose: float
    confidence: float = Field(..., ge=0, le=1)


class SummaryFactors(BaseModel):
    model_config = ConfigDict(frozen=True)

    carbs: float = 0.0
    insulin: float = 0.0
    baseline: float = 0.0


Trend = Literal["rising", "falling", "stable"]


class PredictionSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    predicted_glucose: float
    trend: Trend = "stable"
    confidence: float
    factors: SummaryFactors = Field(default_factory=SummaryFactors)


# --- API payloads ---

class ForecastRequest(BaseModel):
    current_glucose: float = Field(..., allow_inf_nan=False, description="Latest glucose reading")
    reference_time: Optional[datetime] = Field(None, description="Instant treated as 'now' (default: server time)")
    events: List[LoggedEvent] = Field(default_factory=list)
    horizon_hours: Optional[float] = Field(
        None, allow_inf_nan=False, le=MAX_HORIZON_HOURS, description="Forecast horizon (default: max_prediction_hours)"
    )


class SummaryRequest(BaseModel):
    current_glucose: float = Field(..., allow_inf_nan=False)
    reference_time: Optional[datetime] = None
    events: List[LoggedEvent] = Field(default_factory=list)


class ForecastResponse(BaseModel):
    points: List[PredictionPoint]
    config: PredictionConfig
