"""Sensor push payload validation. Malformed payloads raise ValidationError and never reach the store."""

import math
import time
from typing import Any, Dict, Optional, Union

from spacestatus.errors import ValidationError
from spacestatus.model.optional import Value
from spacestatus.model.sensors import PEOPLE_NOW_PRESENT, TEMPERATURE, TEMPERATURE_UNITS, SensorReading

# Per-kind payload rules: value type, required metadata, accepted metadata.
_KIND_RULES: Dict[str, Dict[str, Any]] = {
    PEOPLE_NOW_PRESENT: {
        "integral": True,
        "minimum": 0,
        "required": (),
        "fields": ("location", "name", "names", "description"),
    },
    TEMPERATURE: {
        "integral": False,
        "minimum": None,
        "required": ("unit", "location"),
        "fields": ("location", "name", "description", "unit"),
    },
}


def _parse_number(raw: Any) -> Union[int, float]:
    """Numbers and numeric strings; never bool, NaN or infinity."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"value must be a number, got {raw!r}", "value")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        num = raw
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            num = float(text)
        except ValueError:
            raise ValidationError(f"value must be a number, got {raw!r}", "value") from None
    else:
        raise ValidationError(f"value must be a number, got {type(raw).__name__}", "value")
    if not math.isfinite(num):
        raise ValidationError(f"value must be finite, got {raw!r}", "value")
    return num


def _parse_value(kind: str, raw: Any) -> Union[int, float]:
    rules = _KIND_RULES[kind]
    num = _parse_number(raw)
    if rules["integral"]:
        if isinstance(num, float):
            if not num.is_integer():
                raise ValidationError(f"{kind} value must be a whole number, got {raw!r}", "value")
            num = int(num)
    minimum = rules["minimum"]
    if minimum is not None and num < minimum:
        raise ValidationError(f"{kind} value must be >= {minimum}, got {raw!r}", "value")
    return num


def _parse_text(field: str, raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(f"{field} must be a non-empty string", field)
    return raw.strip()


def parse_sensor_push(kind: str, body: Any, now: Optional[float] = None) -> SensorReading:
    """Validate a push payload for ``kind`` and build the SensorReading to store.

    Payload: {"value": <number>, "location"?, "name"?, "names"?, "description"?, "unit"?}.
    ``lastchange`` is stamped here (unix seconds), not taken from the client.
    """
    if kind not in _KIND_RULES:
        raise ValidationError(f"unsupported sensor kind {kind!r}", "kind")
    if not isinstance(body, dict):
        raise ValidationError("payload must be a JSON object")
    rules = _KIND_RULES[kind]
    allowed = ("value",) + rules["fields"]
    unknown = sorted(k for k in body if k not in allowed)
    if unknown:
        raise ValidationError(f"unexpected field(s) for {kind}: {unknown}", unknown[0])
    if "value" not in body:
        raise ValidationError("value is required", "value")
    for field in rules["required"]:
        if body.get(field) is None:
            raise ValidationError(f"{field} is required for {kind}", field)

    kwargs: Dict[str, Any] = {}
    for field in ("location", "name", "description", "unit"):
        if body.get(field) is not None:
            kwargs[field] = Value(_parse_text(field, body[field]))
    if "unit" in kwargs and kwargs["unit"].value not in TEMPERATURE_UNITS:
        raise ValidationError(f"unit must be one of {sorted(TEMPERATURE_UNITS)}", "unit")
    names = body.get("names")
    if names is not None:
        if not isinstance(names, list) or not names:
            raise ValidationError("names must be a non-empty list of strings", "names")
        kwargs["names"] = Value([_parse_text("names", n) for n in names])

    ts = time.time() if now is None else now
    return SensorReading(
        kind=kind,
        value=_parse_value(kind, body["value"]),
        lastchange=Value(int(ts)),
        **kwargs,
    )
