import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from glucoview.core.settings import Settings, get_settings
from glucoview.models.enums import GlucoseStatus
from glucoview.models.forecast import (
    ForecastRequest,
    ForecastResponse,
    PredictionConfig,
    PredictionConfigUpdate,
    PredictionSummary,
    SummaryRequest,
)
from glucoview.models.notes import NotesForecastRequest, events_from_notes
from glucoview.services.forecast_engine import ForecastEngine
from glucoview.services.prediction_config import PredictionConfigStore, get_config_store
from glucoview.utils.glucose import glucose_status, to_mmol
from glucoview.utils.timezone import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


class SummaryResponse(BaseModel):
    summary: PredictionSummary
    status: GlucoseStatus
    units: Literal["mmol", "mgdl"]


def get_forecast_engine(store: PredictionConfigStore = Depends(get_config_store)) -> ForecastEngine:
    return ForecastEngine(store)


@router.post("/predict", response_model=ForecastResponse, summary="Glucose forecast series")
def predict(
    payload: ForecastRequest,
    engine: ForecastEngine = Depends(get_forecast_engine),
):
    config = engine.get_config()
    points = engine.predict_with(
        config,
        payload.current_glucose,
        payload.reference_time or utc_now(),
        payload.events,
        payload.horizon_hours,
    )
    return ForecastResponse(points=points, config=config)


@router.post("/summary", response_model=SummaryResponse, summary="Two-hour forecast summary")
def summary(
    payload: SummaryRequest,
    engine: ForecastEngine = Depends(get_forecast_engine),
    settings: Settings = Depends(get_settings),
):
    result = engine.summarize_2h(
        payload.current_glucose,
        payload.reference_time or utc_now(),
        payload.events,
    )
    glucose = settings.glucose
    value_mmol = result.predicted_glucose if glucose.units == "mmol" else to_mmol(result.predicted_glucose)
    status = glucose_status(value_mmol, low=glucose.low, normal=glucose.normal, high=glucose.high)
    return SummaryResponse(summary=result, status=status, units=glucose.units)


@router.post("/from-notes", response_model=ForecastResponse, summary="Forecast from dashboard notes")
def predict_from_notes(
    payload: NotesForecastRequest,
    engine: ForecastEngine = Depends(get_forecast_engine),
):
    config = engine.get_config()
    points = engine.predict_with(
        config,
        payload.current_glucose,
        payload.reference_time or utc_now(),
        events_from_notes(payload.notes),
        payload.horizon_hours,
    )
    return ForecastResponse(points=points, config=config)


@router.get("/config", response_model=PredictionConfig)
def read_config(store: PredictionConfigStore = Depends(get_config_store)):
    return store.get_config()


@router.patch("/config", response_model=PredictionConfig)
def patch_config(
    payload: PredictionConfigUpdate,
    store: PredictionConfigStore = Depends(get_config_store),
):
    try:
        return store.update_config(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


@router.post("/config/reset", response_model=PredictionConfig)
def reset_config(
    store: PredictionConfigStore = Depends(get_config_store),
    settings: Settings = Depends(get_settings),
):
    logger.info("Prediction config reset to defaults")
    return store.reset(settings.initial_prediction_config())
