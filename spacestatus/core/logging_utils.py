"""Structured logging for status composition, sensor pushes and store failures."""

import logging
import uuid
from typing import Any, Dict, Optional

from spacestatus.model.optional import is_present, unwrap_or

logger = logging.getLogger(__name__)


def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


def _ensure_trace_id(extra: dict) -> str:
    trace_id = extra.get("trace_id")
    if not trace_id:
        trace_id = new_trace_id()
        extra["trace_id"] = trace_id
    return trace_id


def _emit(event: str, extra: Dict[str, Any], level: int = logging.INFO) -> None:
    msg = event + " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))
    logger.log(level, msg)


def log_status_composed(
    trace_id: Optional[str] = None,
    status: Any = None,
    kinds_read: Optional[Dict[str, int]] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a composed status: open/message presence plus reading counts per kind."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    if status is not None:
        extra["space"] = status.name
        extra["open"] = unwrap_or(status.state.open)
        extra["has_message"] = is_present(status.state.message)
    if kinds_read is not None:
        extra["readings"] = kinds_read
    _emit("status_composed", extra, logging.DEBUG)


def log_sensor_push(
    kind: str,
    key: str,
    value: Any,
    trace_id: Optional[str] = None,
    ok: bool = True,
    extra: Optional[dict] = None,
) -> None:
    """Log an accepted or failed sensor push."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    extra["kind"] = kind
    extra["key"] = key or "<unnamed>"
    extra["value"] = value
    extra["ok"] = ok
    _emit("sensor_push", extra, logging.INFO if ok else logging.WARNING)


def log_store_failure(
    operation: str,
    kind: str,
    error: BaseException,
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a backing-store failure (get degrades to no data, set fails the push)."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    extra["operation"] = operation
    extra["kind"] = kind
    extra["error"] = f"{type(error).__name__}: {error}"
    _emit("store_failure", extra, logging.WARNING)
