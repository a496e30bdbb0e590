"""FastAPI app: GET /status (SpaceAPI document) and PUT /sensors/{kind} (sensor push).

Reads never fail because of sensor data: store outages degrade to absent
sensors, and any other composition failure falls back to the template-only
document. Writes surface store failures as 500 so lost readings are visible.
"""

import logging
from typing import Any, Dict

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse

from spacestatus.config.settings import get_modifier_names, get_server_config, get_status_config, get_store_config
from spacestatus.core.logging_utils import log_sensor_push, new_trace_id
from spacestatus.engine.composer import StatusComposer
from spacestatus.errors import StoreUnavailable, ValidationError
from spacestatus.model.sensors import reading_key
from spacestatus.model.serialize import to_document
from spacestatus.modifiers.chain import ModifierChain
from spacestatus.status_server.payloads import parse_sensor_push
from spacestatus.store import build_store
from spacestatus.template import StatusTemplate

logger = logging.getLogger(__name__)

# Sent with every status document.
_STATUS_HEADERS = {"Access-Control-Allow-Origin": "*", "Cache-Control": "no-cache"}


def create_app(composer: StatusComposer) -> FastAPI:
    """Build the app around one shared composer (template, store, modifier chain)."""
    app = FastAPI(title="Space Status API", description="SpaceAPI status document and sensor push endpoint")
    store = composer.store
    sensor_kinds = frozenset(composer.template.sensor_kinds)

    def _status_response() -> JSONResponse:
        trace_id = new_trace_id()
        try:
            status = composer.compose(trace_id=trace_id)
        except Exception as e:
            logger.warning("compose failed trace_id=%s, serving template-only status: %s", trace_id, e, exc_info=True)
            status = composer.base_status()
        return JSONResponse(status_code=200, content=to_document(status), headers=dict(_STATUS_HEADERS))

    @app.get("/")
    def get_root() -> JSONResponse:
        """Same document as /status (SpaceAPI directories often point at the root)."""
        return _status_response()

    @app.get("/status")
    def get_status() -> JSONResponse:
        """Composed status document. Always 200 once the server has started."""
        return _status_response()

    @app.put("/sensors/{kind}")
    def put_sensor(kind: str, body: Any = Body(...)) -> JSONResponse:
        """Record or replace one reading of ``kind``. 404 unknown kind, 400 bad payload, 500 store failure."""
        if kind not in sensor_kinds:
            return JSONResponse(status_code=404, content={"error": f"sensor kind {kind!r} is not enabled"})
        try:
            reading = parse_sensor_push(kind, body)
        except ValidationError as e:
            return JSONResponse(status_code=400, content={"error": str(e), "field": e.field})
        key = reading_key(reading)
        trace_id = new_trace_id()
        try:
            store.set(kind, reading)
        except StoreUnavailable as e:
            log_sensor_push(kind, key, reading.value, trace_id=trace_id, ok=False, extra={"error": str(e)})
            return JSONResponse(status_code=500, content={"error": "failed to store sensor reading", "kind": kind})
        log_sensor_push(kind, key, reading.value, trace_id=trace_id)
        content: Dict[str, Any] = {"ok": True, "kind": kind, "key": key, "value": reading.value}
        return JSONResponse(status_code=200, content=content)

    return app


def build_composer(config: dict) -> StatusComposer:
    """Template, store and modifier chain from config. Raises ConfigurationError on invalid config."""
    template = StatusTemplate.from_config(get_status_config(config))
    modifiers = ModifierChain.from_names(get_modifier_names(config))
    store = build_store(get_store_config(config))
    return StatusComposer(template, store, modifiers)


def run_server(config: dict) -> None:
    """Start the status server (host/port from config.server)."""
    import uvicorn

    server_cfg = get_server_config(config)
    composer = build_composer(config)
    app = create_app(composer)
    logger.info(
        "Status server on %s:%s (space=%s, sensors=%s, modifiers=%s)",
        server_cfg["host"],
        server_cfg["port"],
        composer.template.status.name,
        list(composer.template.sensor_kinds),
        list(composer.modifiers.names),
    )
    try:
        uvicorn.run(app, host=server_cfg["host"], port=server_cfg["port"], log_level="info")
    finally:
        composer.store.close()
