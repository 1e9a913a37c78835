from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from glucoview.models.forecast import PredictionConfig, PredictionConfigUpdate

logger = logging.getLogger(__name__)

ConfigPatch = Union[PredictionConfigUpdate, Mapping[str, Any]]


@dataclass
class PredictionConfigStore:
    """Holds the active PredictionConfig.

    The config value is frozen; updates build a new value and swap the
    reference, so a snapshot taken by a forecast can never change under it.
    """

    _config: PredictionConfig = field(default_factory=PredictionConfig)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_config(self) -> PredictionConfig:
        with self._lock:
            return self._config

    def update_config(self, partial: ConfigPatch) -> PredictionConfig:
        """Merge ``partial`` into the active config.

        Raises pydantic.ValidationError for unknown keys or out-of-range values;
        the active config is left untouched in that case.
        """
        if isinstance(partial, PredictionConfigUpdate):
            changes = partial.as_partial()
        else:
            changes = dict(partial)

        with self._lock:
            merged = PredictionConfig.model_validate(self._config.model_dump() | changes)
            self._config = merged

        if changes:
            logger.info("Prediction config updated: %s", ", ".join(sorted(changes)))
        return merged

    def reset(self, config: Optional[PredictionConfig] = None) -> PredictionConfig:
        with self._lock:
            self._config = config or PredictionConfig()
            return self._config


_default_store: Optional[PredictionConfigStore] = None
_default_store_lock = threading.Lock()


def get_config_store() -> PredictionConfigStore:
    """Process-wide store, seeded from the ``prediction`` settings section."""
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            from glucoview.core.settings import get_settings

            _default_store = PredictionConfigStore(get_settings().initial_prediction_config())
        return _default_store


__all__ = ["PredictionConfigStore", "get_config_store"]
