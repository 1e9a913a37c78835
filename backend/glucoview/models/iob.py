from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from glucoview.models.forecast import MAX_HORIZON_HOURS, LoggedEvent


class IOBPoint(BaseModel):
    time: datetime
    iob: float


class IOBProjectionRequest(BaseModel):
    events: List[LoggedEvent] = Field(default_factory=list)
    start: Optional[datetime] = None
    hours: float = Field(6.0, ge=0, le=MAX_HORIZON_HOURS)
    interval_minutes: int = Field(15, ge=1)
