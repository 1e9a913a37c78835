from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response

from glucoview import __version__
from glucoview.core.settings import Settings, get_settings
from glucoview.services.prediction_config import PredictionConfigStore, get_config_store

router = APIRouter()

_start_time = datetime.now(timezone.utc)


def _uptime_seconds() -> float:
    return (datetime.now(timezone.utc) - _start_time).total_seconds()


@router.api_route("/", methods=["GET", "HEAD"], summary="Liveness probe", response_model=None)
async def health(request: Request):
    if request.method == "HEAD":
        return Response(status_code=200)
    return {"ok": True}


@router.get("/full", summary="Full health check")
async def full_health(
    settings: Settings = Depends(get_settings),
    store: PredictionConfigStore = Depends(get_config_store),
) -> dict:
    config = store.get_config()
    return {
        "ok": True,
        "uptime_seconds": _uptime_seconds(),
        "version": __version__,
        "server": {"host": settings.server.host, "port": settings.server.port},
        "prediction": {
            "max_prediction_hours": config.max_prediction_hours,
            "prediction_interval_minutes": config.prediction_interval_minutes,
        },
    }
