from datetime import datetime
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glucoview.models.enums import DoseKind, MealCategory
from glucoview.models.forecast import MAX_HORIZON_HOURS, CarbEvent, InsulinEvent
from glucoview.utils.timezone import ensure_utc


class GlucoseNote(BaseModel):
    """A dashboard log entry: what was eaten and/or injected at a given time."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: Optional[str] = None
    timestamp: datetime
    carbs: float = Field(0.0, ge=0)
    insulin: float = Field(0.0, ge=0)
    meal: Union[MealCategory, str] = MealCategory.OTHER
    comment: Optional[str] = None
    glucose_value: Optional[float] = None
    detailed_input: Optional[str] = Field(None, description="Free text such as '50g soup 20g bread 7u'")

    @field_validator("timestamp")
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def to_events(self) -> List[Union[CarbEvent, InsulinEvent]]:
        """Carb and/or bolus events for this note.

        The free-text ``detailed_input`` becomes the comment when none was
        written.
        """
        events: List[Union[CarbEvent, InsulinEvent]] = []
        meal_label = self.meal.value if isinstance(self.meal, MealCategory) else self.meal
        comment = self.comment or self.detailed_input
        if self.carbs > 0:
            events.append(CarbEvent(
                timestamp=self.timestamp,
                carbs_grams=self.carbs,
                meal_label=meal_label,
                comment=comment,
            ))
        if self.insulin > 0:
            events.append(InsulinEvent(
                timestamp=self.timestamp,
                units_delivered=self.insulin,
                dose_kind=DoseKind.BOLUS,
                comment=comment or "",
            ))
        return events


def events_from_notes(notes: Sequence[GlucoseNote]) -> List[Union[CarbEvent, InsulinEvent]]:
    events: List[Union[CarbEvent, InsulinEvent]] = []
    for note in notes:
        events.extend(note.to_events())
    return events


class NotesForecastRequest(BaseModel):
    current_glucose: float = Field(..., allow_inf_nan=False)
    reference_time: Optional[datetime] = None
    notes: List[GlucoseNote] = Field(default_factory=list)
    horizon_hours: Optional[float] = Field(None, allow_inf_nan=False, le=MAX_HORIZON_HOURS)
