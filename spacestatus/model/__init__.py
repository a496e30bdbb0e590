"""Status data model: optional fields, records, sensor readings, serialization."""

from .optional import Absent, OptionalField, Value, from_nullable, is_present, unwrap_or
from .sensors import PEOPLE_NOW_PRESENT, SENSOR_KINDS, TEMPERATURE, TEMPERATURE_UNITS, SensorReading, reading_key
from .status import API_VERSION, CONTACT_CHANNELS, Contact, Location, Sensors, State, Status
from .serialize import to_document

__all__ = [
    "Absent",
    "OptionalField",
    "Value",
    "from_nullable",
    "is_present",
    "unwrap_or",
    "PEOPLE_NOW_PRESENT",
    "TEMPERATURE",
    "SENSOR_KINDS",
    "TEMPERATURE_UNITS",
    "SensorReading",
    "reading_key",
    "API_VERSION",
    "CONTACT_CHANNELS",
    "Contact",
    "Location",
    "Sensors",
    "State",
    "Status",
    "to_document",
]
