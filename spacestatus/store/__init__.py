"""Sensor store package: SensorStore interface, in-memory and PostgreSQL adapters."""

import logging
from typing import Any, Dict

from spacestatus.errors import ConfigurationError
from spacestatus.store.base import SensorStore
from spacestatus.store.memory_store import InMemorySensorStore

logger = logging.getLogger(__name__)


# Lazy import so the package loads without psycopg2 (e.g. memory backend in tests)
def __getattr__(name: str):
    if name == "PostgreSQLSensorStore":
        from spacestatus.store.postgres_store import PostgreSQLSensorStore
        return PostgreSQLSensorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def build_store(store_config: Dict[str, Any]) -> SensorStore:
    """Create the SensorStore named by store.backend (postgres | memory)."""
    backend = (store_config.get("backend") or "memory").strip().lower()
    if backend == "memory":
        logger.info("Sensor store: in-memory (readings are lost on restart)")
        return InMemorySensorStore()
    if backend == "postgres":
        from spacestatus.store.postgres_store import PostgreSQLSensorStore

        return PostgreSQLSensorStore(store_config)
    raise ConfigurationError(f"store.backend must be 'postgres' or 'memory', got {backend!r}")


__all__ = [
    "SensorStore",
    "InMemorySensorStore",
    "PostgreSQLSensorStore",
    "build_store",
]
