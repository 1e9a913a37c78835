from datetime import timedelta
from typing import List

from fastapi import APIRouter

from glucoview.models.cob import COBDailySummary, COBProjectionPoint, COBRequest, COBStatus, COBSummaryRequest
from glucoview.models.iob import IOBPoint, IOBProjectionRequest
from glucoview.services.cob import CarbsOnBoardService
from glucoview.services.iob import project_iob
from glucoview.utils.timezone import utc_now

router = APIRouter()


@router.post("/cob", response_model=COBStatus, summary="Carbs and insulin on board")
def cob_status(payload: COBRequest):
    service = CarbsOnBoardService(payload.config)
    return service.calculate(payload.events, payload.at or utc_now())


@router.post("/cob/projection", response_model=List[COBProjectionPoint])
def cob_projection(payload: COBRequest):
    service = CarbsOnBoardService(payload.config)
    return service.projection(payload.events, payload.at or utc_now())


@router.post("/cob/summary", response_model=COBDailySummary, summary="Daily carb and insulin totals")
def cob_summary(payload: COBSummaryRequest):
    return CarbsOnBoardService.daily_summary(payload.notes, payload.day or utc_now().date())


@router.post("/iob/projection", response_model=List[IOBPoint], summary="Insulin on board over time")
def iob_projection(payload: IOBProjectionRequest):
    start = payload.start or utc_now()
    return project_iob(
        payload.events,
        start,
        start + timedelta(hours=payload.hours),
        payload.interval_minutes,
    )
