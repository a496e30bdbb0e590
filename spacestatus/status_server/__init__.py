"""HTTP surface: status document and sensor push endpoint."""

from spacestatus.status_server.app import build_composer, create_app, run_server
from spacestatus.status_server.payloads import parse_sensor_push

__all__ = ["create_app", "build_composer", "run_server", "parse_sensor_push"]
