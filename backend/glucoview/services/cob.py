from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from glucoview.models.cob import ActiveCarbEntry, COBConfig, COBDailySummary, COBProjectionPoint, COBStatus
from glucoview.models.forecast import CarbEvent, InsulinEvent
from glucoview.models.notes import GlucoseNote
from glucoview.services.math.curves import CARB_NOISE_FLOOR_G, CarbCurves, InsulinCurves
from glucoview.utils.timezone import ensure_utc

logger = logging.getLogger(__name__)

# Below this many units insulin is ignored
IOB_NOISE_FLOOR_U = 0.01


class CarbsOnBoardService:
    """
    Carbs on board (COB) and a half-life insulin-on-board estimate for the
    dashboard status widget. Independent of the forecast config.
    """

    def __init__(self, config: Optional[COBConfig] = None):
        self.config = config or COBConfig()

    def calculate(self, events: Iterable, at: datetime) -> COBStatus:
        cfg = self.config
        at = ensure_utc(at)

        total_cob = 0.0
        total_iob = 0.0
        active: List[ActiveCarbEntry] = []

        for event in events:
            age_min = (at - event.timestamp).total_seconds() / 60
            # Not eaten/injected yet, or outside the tracking window
            if age_min < 0 or age_min > cfg.max_cob_minutes:
                continue

            if isinstance(event, CarbEvent) and event.carbs_grams > 0:
                remaining = CarbCurves.remaining_grams(
                    event.carbs_grams, age_min / 60, cfg.carb_half_life_minutes / 60
                )
                if remaining > CARB_NOISE_FLOOR_G:
                    total_cob += remaining
                    active.append(ActiveCarbEntry(
                        timestamp=event.timestamp,
                        carbs_remaining=round(remaining, 1),
                        original_carbs=event.carbs_grams,
                        meal_label=event.meal_label,
                        comment=event.comment,
                    ))
            elif isinstance(event, InsulinEvent) and event.units_delivered > 0:
                remaining_u = InsulinCurves.half_life_remaining(
                    event.units_delivered, age_min, cfg.insulin_half_life_minutes
                )
                if remaining_u > IOB_NOISE_FLOOR_U:
                    total_iob += remaining_u

        impact = (total_cob / 10) * cfg.carb_ratio - total_iob * cfg.isf
        to_zero_h = CarbCurves.hours_to_zero(total_cob, cfg.carb_half_life_minutes / 60)

        active.sort(key=lambda e: e.timestamp, reverse=True)
        logger.debug("COB at %s: %.1fg from %d entries, IOB %.2fU", at.isoformat(), total_cob, len(active), total_iob)

        return COBStatus(
            at=at,
            current_cob=round(total_cob, 1),
            active_entries=active,
            estimated_glucose_impact=round(impact, 1),
            time_to_zero_minutes=round(to_zero_h * 60),
            insulin_on_board=round(total_iob, 2),
        )

    def projection(
        self,
        events: Iterable,
        start: datetime,
        time_points: int = 24,
        interval_minutes: int = 15,
    ) -> List[COBProjectionPoint]:
        events = list(events)
        start = ensure_utc(start)
        points: List[COBProjectionPoint] = []
        for i in range(max(time_points, 0) + 1):
            t = start + timedelta(minutes=i * interval_minutes)
            status = self.calculate(events, t)
            points.append(COBProjectionPoint(time=t, cob=status.current_cob, iob=status.insulin_on_board))
        return points

    @staticmethod
    def daily_summary(notes: Sequence[GlucoseNote], day: date) -> COBDailySummary:
        """Totals over the notes logged on ``day`` (UTC calendar day)."""
        todays = [n for n in notes if n.timestamp.date() == day]

        total_carbs = sum(n.carbs for n in todays)
        total_insulin = sum(n.insulin for n in todays)
        readings = [n.glucose_value for n in todays if n.glucose_value]
        average = sum(readings) / len(readings) if readings else 0.0
        ratio = total_carbs / total_insulin if total_insulin > 0 else 0.0

        return COBDailySummary(
            day=day,
            total_carbs=round(total_carbs),
            total_insulin=round(total_insulin, 2),
            average_glucose=round(average, 1),
            carb_insulin_ratio=round(ratio, 1),
            note_count=len(todays),
        )


__all__ = ["CarbsOnBoardService", "IOB_NOISE_FLOOR_U"]
