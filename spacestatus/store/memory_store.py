"""In-memory SensorStore: lock-protected dict. For development and tests (store.backend: memory)."""

import logging
import threading
from typing import Dict, List

from spacestatus.model.sensors import SensorReading, reading_key
from spacestatus.store.base import SensorStore

logger = logging.getLogger(__name__)


class InMemorySensorStore(SensorStore):
    """Thread-safe store; readings are frozen on write so readers share them safely."""

    def __init__(self):
        self._lock = threading.Lock()
        # kind -> key -> reading; dict order is first-insertion order, kept on replace
        self._readings: Dict[str, Dict[str, SensorReading]] = {}

    def get(self, kind: str) -> List[SensorReading]:
        with self._lock:
            return list(self._readings.get(kind, {}).values())

    def set(self, kind: str, reading: SensorReading) -> None:
        stored = reading.clone().freeze()
        key = reading_key(stored)
        with self._lock:
            self._readings.setdefault(kind, {})[key] = stored
