import logging
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from glucoview.models.forecast import (
    MAX_HORIZON_HOURS,
    CarbEvent,
    InsulinEvent,
    PredictionConfig,
    PredictionPoint,
    PredictionSummary,
    SummaryFactors,
    Trend,
)
from glucoview.services.math.curves import CarbCurves, ConfidenceCurve, InsulinCurves
from glucoview.services.prediction_config import ConfigPatch, PredictionConfigStore
from glucoview.utils.timezone import ensure_utc, hours_between

logger = logging.getLogger(__name__)

# Absolute physiological floor for any predicted value
GLUCOSE_FLOOR = 2.0
SUMMARY_HORIZON_HOURS = 2.0
TREND_THRESHOLD = 1.0
EMPTY_SUMMARY_CONFIDENCE = 0.5


def _effective_horizon(horizon_hours: float) -> float:
    # NaN and negative horizons collapse to a single point
    if not horizon_hours > 0:
        return 0.0
    return min(horizon_hours, MAX_HORIZON_HOURS)


def _step_count(horizon_hours: float, interval_minutes: int) -> int:
    if horizon_hours <= 0:
        return 1
    # Rounding keeps 2h / 15min at exactly 8 steps despite float noise
    return math.ceil(round(horizon_hours * 60.0 / interval_minutes, 9)) + 1


def _split_events(events: Iterable) -> Tuple[List[CarbEvent], List[InsulinEvent]]:
    carbs: List[CarbEvent] = []
    insulin: List[InsulinEvent] = []
    for e in events:
        if isinstance(e, CarbEvent):
            if e.carbs_grams > 0:
                carbs.append(e)
        elif isinstance(e, InsulinEvent):
            if e.units_delivered > 0:
                insulin.append(e)
    return carbs, insulin


def _trend(delta: float) -> Trend:
    if delta > TREND_THRESHOLD:
        return "rising"
    if delta < -TREND_THRESHOLD:
        return "falling"
    return "stable"


class ForecastEngine:
    """
    Projects glucose forward from a single reading using a drifting baseline
    plus decaying carbohydrate (raise) and insulin (lower) contributions.
    """

    def __init__(self, config_store: Optional[PredictionConfigStore] = None):
        self.config_store = config_store or PredictionConfigStore()

    # --- Configuration ---

    def get_config(self) -> PredictionConfig:
        return self.config_store.get_config()

    def update_config(self, partial: ConfigPatch) -> None:
        self.config_store.update_config(partial)

    # --- Forecast ---

    def predict(
        self,
        current_glucose: float,
        reference_time: datetime,
        events: Sequence,
        horizon_hours: Optional[float] = None,
    ) -> List[PredictionPoint]:
        # Single snapshot for the whole computation
        cfg = self.config_store.get_config()
        return self._predict_with(cfg, current_glucose, reference_time, events, horizon_hours)

    def predict_with(
        self,
        cfg: PredictionConfig,
        current_glucose: float,
        reference_time: datetime,
        events: Sequence,
        horizon_hours: Optional[float] = None,
    ) -> List[PredictionPoint]:
        """Forecast against an explicit config snapshot.

        Callers that report the config next to the points take the snapshot
        themselves so both describe the same computation.
        """
        return self._predict_with(cfg, current_glucose, reference_time, events, horizon_hours)

    def summarize_2h(
        self,
        current_glucose: float,
        reference_time: datetime,
        events: Sequence,
    ) -> PredictionSummary:
        cfg = self.config_store.get_config()
        points = self._predict_with(cfg, current_glucose, reference_time, events, SUMMARY_HORIZON_HOURS)
        return self.summarize_points(current_glucose, points)

    @staticmethod
    def summarize_points(current_glucose: float, points: Sequence[PredictionPoint]) -> PredictionSummary:
        if not points:
            return PredictionSummary(
                predicted_glucose=current_glucose,
                trend="stable",
                confidence=EMPTY_SUMMARY_CONFIDENCE,
                factors=SummaryFactors(),
            )

        final = points[-1]
        return PredictionSummary(
            predicted_glucose=round(final.predicted_glucose, 1),
            trend=_trend(final.predicted_glucose - current_glucose),
            confidence=final.confidence,
            factors=SummaryFactors(
                carbs=round(final.carb_contribution, 1),
                insulin=round(final.insulin_contribution, 1),
                baseline=round(final.baseline_glucose, 1),
            ),
        )

    # --- Internals ---

    def _predict_with(
        self,
        cfg: PredictionConfig,
        current_glucose: float,
        reference_time: datetime,
        events: Sequence,
        horizon_hours: Optional[float],
    ) -> List[PredictionPoint]:
        now = ensure_utc(reference_time)
        horizon = _effective_horizon(cfg.max_prediction_hours if horizon_hours is None else horizon_hours)
        interval = cfg.prediction_interval_minutes
        steps = _step_count(horizon, interval)

        carbs, insulin = _split_events(events)

        series: List[PredictionPoint] = []
        for i in range(steps):
            t = now + timedelta(minutes=i * interval)
            series.append(self._point_at(cfg, current_glucose, now, t, carbs, insulin))

        logger.debug(
            "Forecast computed: %d points, %d carb / %d insulin events, horizon %.2fh",
            len(series), len(carbs), len(insulin), horizon,
        )
        return series

    @staticmethod
    def _point_at(
        cfg: PredictionConfig,
        current_glucose: float,
        now: datetime,
        t: datetime,
        carbs: Sequence[CarbEvent],
        insulin: Sequence[InsulinEvent],
    ) -> PredictionPoint:
        hours_from_now = hours_between(now, t)

        baseline = current_glucose - cfg.basal_glucose_decline_per_hour * hours_from_now

        carb_total = 0.0
        for c in carbs:
            carb_total += CarbCurves.glucose_contribution(
                c.carbs_grams, hours_between(c.timestamp, t), cfg.carb_glucose_ratio
            )

        insulin_total = 0.0
        for b in insulin:
            insulin_total += InsulinCurves.glucose_contribution(
                b.units_delivered,
                hours_between(b.timestamp, t),
                cfg.insulin_sensitivity_factor,
                cfg.insulin_peak_time_hours,
                cfg.insulin_action_duration_hours,
            )

        predicted = max(GLUCOSE_FLOOR, baseline + carb_total + insulin_total)

        return PredictionPoint(
            time=t,
            predicted_glucose=predicted,
            carb_contribution=carb_total,
            insulin_contribution=insulin_total,
            baseline_glucose=baseline,
            confidence=ConfidenceCurve.at(hours_from_now),
        )


__all__ = ["ForecastEngine", "GLUCOSE_FLOOR"]
