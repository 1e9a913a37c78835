import logging
import os
from logging.config import dictConfig

# Per-module level overrides, e.g. FORECAST_LOG_LEVEL=DEBUG to trace every forecast
MODULE_LEVEL_ENV = {
    "glucoview.services.forecast_engine": "FORECAST_LOG_LEVEL",
    "glucoview.services.prediction_config": "PREDICTION_CONFIG_LOG_LEVEL",
}


def _env_level(name: str, default: str) -> str:
    return (os.environ.get(name) or default).strip().upper()


def configure_logging() -> None:
    log_level = _env_level("LOG_LEVEL", "INFO")

    loggers = {
        "glucoview": {"level": log_level, "propagate": True},
        "uvicorn": {"handlers": ["console"], "level": log_level},
        "uvicorn.error": {"handlers": ["console"], "level": log_level, "propagate": True},
        "uvicorn.access": {"handlers": ["console"], "level": log_level, "propagate": False},
    }
    for logger_name, env_name in MODULE_LEVEL_ENV.items():
        loggers[logger_name] = {"level": _env_level(env_name, log_level), "propagate": True}

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                }
            },
            "handlers": {
                # The handler passes everything; loggers decide what is emitted
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "level": "DEBUG",
                }
            },
            "loggers": loggers,
            "root": {"handlers": ["console"], "level": log_level},
        }
    )
    logging.getLogger(__name__).debug("Logging configured", extra={"level": log_level})


__all__ = ["configure_logging", "MODULE_LEVEL_ENV"]
