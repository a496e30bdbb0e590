"""PostgreSQL implementation of SensorStore.

One row per (kind, sensor_key) in ``sensor_readings``; the reading itself is a
jsonb record. Upserts keep the row id, so ``ORDER BY id`` is first-insertion
order within a kind.
"""

import logging
import math
import os
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

import psycopg2
from psycopg2.extras import Json
from psycopg2.pool import ThreadedConnectionPool

from spacestatus.core.logging_utils import log_store_failure
from spacestatus.errors import StoreUnavailable
from spacestatus.model.sensors import SensorReading, reading_key
from spacestatus.store.base import SensorStore

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SEC = 2.0
_DEFAULT_MAX_CONNECTIONS = 10


def _timeout_sec(config: dict) -> float:
    timeout = float(config.get("timeout_sec") or _DEFAULT_TIMEOUT_SEC)
    if not math.isfinite(timeout) or timeout <= 0:
        return _DEFAULT_TIMEOUT_SEC
    return timeout


def _get_conn_params(config: dict) -> dict:
    """Build connection params from store.postgres, with env overrides and timeouts."""
    pg = config.get("postgres", {}) or {}
    db = pg.get("database") or pg.get("Database") or pg.get("db")
    timeout = _timeout_sec(config)
    whole_sec = max(1, int(math.ceil(timeout)))
    timeout_ms = int(timeout * 1000)
    return {
        "host": pg.get("host") or os.environ.get("PGHOST", "127.0.0.1"),
        "port": int(pg.get("port") or os.environ.get("PGPORT", "5432")),
        "dbname": db or os.environ.get("PGDATABASE", "spacestatus"),
        "user": pg.get("user") or os.environ.get("PGUSER", "spacestatus"),
        "password": pg.get("password") or os.environ.get("PGPASSWORD", ""),
        # libpq takes whole seconds
        "connect_timeout": whole_sec,
        "options": f"-c statement_timeout={timeout_ms} -c lock_timeout={timeout_ms}",
        # client-side bounds for a peer that vanished mid-query
        "keepalives": 1,
        "keepalives_idle": whole_sec,
        "keepalives_interval": whole_sec,
        "keepalives_count": 3,
        "tcp_user_timeout": timeout_ms,
    }


def _ensure_tables(conn) -> None:
    """Create sensor_readings if not exists."""
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS sensor_readings (
                id bigserial PRIMARY KEY,
                kind text NOT NULL,
                sensor_key text NOT NULL,
                record jsonb NOT NULL,
                updated_at timestamptz NOT NULL DEFAULT now(),
                UNIQUE (kind, sensor_key)
            )
        """)
    conn.commit()


class PostgreSQLSensorStore(SensorStore):
    """SensorStore backed by PostgreSQL. Uses store.postgres (host, port, database, user, password)."""

    def __init__(self, store_config: dict) -> None:
        self._config = store_config
        params = _get_conn_params(store_config)
        max_conn = int(store_config.get("max_connections") or _DEFAULT_MAX_CONNECTIONS)
        # minconn=0: no connection at startup, so a down database does not block boot
        self._pool = ThreadedConnectionPool(0, max_conn, **params)
        # the pool raises instead of waiting when all connections are out
        self._slots = threading.BoundedSemaphore(max_conn)
        self._wait_sec = _timeout_sec(store_config)
        self._tables_ready = False
        self._init_lock = threading.Lock()
        logger.info(
            "Sensor store: postgres %s:%s/%s (timeout=%ss, max_connections=%s)",
            params["host"],
            params["port"],
            params["dbname"],
            params["connect_timeout"],
            max_conn,
        )

    def _prepare(self, conn) -> None:
        if self._tables_ready:
            return
        with self._init_lock:
            if not self._tables_ready:
                _ensure_tables(conn)
                self._tables_ready = True

    @contextmanager
    def _connection(self, operation: str, kind: str) -> Iterator[Any]:
        """Borrow a pooled connection; commit on success, map psycopg2 errors to StoreUnavailable.

        Waits up to timeout_sec for a free connection when all max_connections are in use.
        """
        if not self._slots.acquire(timeout=self._wait_sec):
            raise StoreUnavailable(
                f"{operation} {kind}: no free connection after {self._wait_sec:g}s", operation, kind
            )
        try:
            conn = self._pool.getconn()
        except psycopg2.Error as e:
            self._slots.release()
            raise StoreUnavailable(f"{operation} {kind}: connect failed: {e}", operation, kind) from e
        broken = False
        try:
            self._prepare(conn)
            yield conn
            conn.commit()
        except psycopg2.Error as e:
            broken = True
            try:
                conn.rollback()
            except psycopg2.Error:
                logger.debug("rollback after failed %s failed", operation)
            raise StoreUnavailable(f"{operation} {kind}: {e}", operation, kind) from e
        finally:
            try:
                self._pool.putconn(conn, close=broken)
            finally:
                self._slots.release()

    def get(self, kind: str) -> List[SensorReading]:
        try:
            with self._connection("get", kind) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT sensor_key, record FROM sensor_readings WHERE kind = %s ORDER BY id",
                        (kind,),
                    )
                    rows = cur.fetchall()
        except StoreUnavailable as e:
            log_store_failure("get", kind, e)
            return []
        out: List[SensorReading] = []
        for key, record in rows:
            try:
                out.append(SensorReading.from_record(kind, record))
            except (KeyError, TypeError) as e:
                logger.warning("Skipping malformed %s reading key=%r: %s", kind, key, e)
        return out

    def set(self, kind: str, reading: SensorReading) -> None:
        key = reading_key(reading)
        record: Dict[str, Any] = reading.to_record()
        with self._connection("set", kind) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO sensor_readings (kind, sensor_key, record, updated_at)
                    VALUES (%s, %s, %s, now())
                    ON CONFLICT (kind, sensor_key) DO UPDATE SET
                        record = EXCLUDED.record,
                        updated_at = now()
                    """,
                    (kind, key, Json(record)),
                )

    def close(self) -> None:
        if self._pool is not None and not self._pool.closed:
            self._pool.closeall()
