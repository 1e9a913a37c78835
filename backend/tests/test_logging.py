import logging

import pytest

from glucoview.core.logging import MODULE_LEVEL_ENV, configure_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    yield
    for env_name in ("LOG_LEVEL", *MODULE_LEVEL_ENV.values()):
        monkeypatch.delenv(env_name, raising=False)
    configure_logging()


def test_default_levels(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORECAST_LOG_LEVEL", raising=False)
    configure_logging()

    assert logging.getLogger("glucoview").level == logging.INFO
    assert logging.getLogger("glucoview.services.forecast_engine").level == logging.INFO


def test_forecast_logger_override(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("FORECAST_LOG_LEVEL", "debug")
    configure_logging()

    assert logging.getLogger("glucoview").level == logging.WARNING
    assert logging.getLogger("glucoview.services.forecast_engine").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("glucoview.services.cob").isEnabledFor(logging.INFO)
