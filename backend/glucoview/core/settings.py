import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from glucoview.models.forecast import PredictionConfig, PredictionConfigUpdate


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class SecurityConfig(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)


class GlucoseDisplayConfig(BaseModel):
    units: Literal["mmol", "mgdl"] = "mmol"
    # Thresholds are mmol/L
    low: float = Field(default=3.9, gt=0)
    normal: float = Field(default=10.0, gt=0)
    high: float = Field(default=13.9, gt=0)


class Settings(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    glucose: GlucoseDisplayConfig = Field(default_factory=GlucoseDisplayConfig)
    prediction: PredictionConfigUpdate = Field(default_factory=PredictionConfigUpdate)

    def initial_prediction_config(self) -> PredictionConfig:
        return PredictionConfig.model_validate(
            PredictionConfig().model_dump() | self.prediction.as_partial()
        )


DEFAULT_CONFIG_PATH = Path(os.environ.get("CONFIG_PATH", "config/config.json"))

_PREDICTION_FIELDS = tuple(PredictionConfigUpdate.model_fields)


def _load_file_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON configuration at {path}") from exc


def _load_env() -> dict[str, Any]:
    env_config: dict[str, Any] = {}

    host = os.environ.get("SERVER_HOST")
    if host:
        env_config.setdefault("server", {})["host"] = host

    port = os.environ.get("SERVER_PORT")
    if port:
        env_config.setdefault("server", {})["port"] = int(port)

    cors_origins = os.environ.get("CORS_ORIGINS")
    if cors_origins:
        env_config.setdefault("security", {})["cors_origins"] = [
            origin.strip() for origin in cors_origins.split(",") if origin.strip()
        ]

    units = os.environ.get("GLUCOSE_UNITS")
    if units:
        env_config.setdefault("glucose", {})["units"] = units.strip().lower()

    for name in _PREDICTION_FIELDS:
        raw = os.environ.get(f"PREDICTION_{name.upper()}")
        if raw:
            env_config.setdefault("prediction", {})[name] = raw

    return env_config


def merge_settings(env_config: dict[str, Any], file_config: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for section in ("server", "security", "glucose", "prediction"):
        merged[section] = {**file_config.get(section, {}), **env_config.get(section, {})}
    return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    env_config = _load_env()
    file_config = _load_file_config(DEFAULT_CONFIG_PATH)
    merged = merge_settings(env_config=env_config, file_config=file_config)
    try:
        settings = Settings.model_validate(merged)
        # Bad prediction overrides fail at startup, not on the first forecast
        settings.initial_prediction_config()
        return settings
    except ValidationError as exc:
        raise RuntimeError(f"Configuration error: {exc}") from exc


__all__ = ["Settings", "get_settings"]
