"""Status -> SpaceAPI JSON document. Absent fields are omitted, never emitted as null."""

from typing import Any, Dict, List

from spacestatus.model.optional import is_present
from spacestatus.model.sensors import READING_FIELDS, SENSOR_KINDS, SensorReading
from spacestatus.model.status import CONTACT_CHANNELS, Status


def _put(out: Dict[str, Any], key: str, field: Any) -> None:
    """Set out[key] only when field is Value(x)."""
    if is_present(field):
        value = field.value
        out[key] = list(value) if isinstance(value, tuple) else value


def reading_to_document(reading: SensorReading) -> Dict[str, Any]:
    out: Dict[str, Any] = {"value": reading.value}
    for key in READING_FIELDS:
        _put(out, key, getattr(reading, key))
    return out


def to_document(status: Status) -> Dict[str, Any]:
    """Serialize a Status. Required keys always present; optional keys only when Value(x)."""
    location: Dict[str, Any] = {"lat": status.location.lat, "lon": status.location.lon}
    _put(location, "address", status.location.address)

    contact: Dict[str, Any] = {}
    for channel in CONTACT_CHANNELS:
        _put(contact, channel, getattr(status.contact, channel))

    state: Dict[str, Any] = {}
    _put(state, "open", status.state.open)
    _put(state, "message", status.state.message)

    doc: Dict[str, Any] = {
        "api": status.api,
        "space": status.name,
        "logo": status.logo,
        "url": status.url,
        "location": location,
        "contact": contact,
        "issue_report_channels": list(status.issue_report_channels),
        "state": state,
    }

    if is_present(status.sensors):
        sensors: Dict[str, List[Dict[str, Any]]] = {}
        for kind in SENSOR_KINDS:
            readings = status.sensors.value.readings(kind)
            if readings:
                sensors[kind] = [reading_to_document(r) for r in readings]
        if sensors:
            doc["sensors"] = sensors
    return doc
