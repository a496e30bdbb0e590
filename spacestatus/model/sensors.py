"""Sensor readings and the sensor kinds the status document supports."""

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from spacestatus.model.base import FreezableRecord
from spacestatus.model.optional import Absent, OptionalField, from_nullable, is_present

PEOPLE_NOW_PRESENT = "people_now_present"
TEMPERATURE = "temperature"

# Order here is the order kinds appear under "sensors" in the document.
SENSOR_KINDS = (PEOPLE_NOW_PRESENT, TEMPERATURE)

TEMPERATURE_UNITS = frozenset(("°C", "°F", "K", "°De", "°N", "°R", "°Ré", "°Rø"))

# Optional metadata fields, in serialization order (value is always first).
READING_FIELDS = ("location", "name", "names", "description", "unit", "lastchange")

# Store key for readings that carry neither name nor location.
UNNAMED_KEY = ""


@dataclass
class SensorReading(FreezableRecord):
    """One reading of a sensor kind. Identity within its kind is ``reading_key``."""

    kind: str
    value: Union[int, float]
    location: OptionalField[str] = Absent
    name: OptionalField[str] = Absent
    names: OptionalField[List[str]] = Absent
    description: OptionalField[str] = Absent
    unit: OptionalField[str] = Absent
    lastchange: OptionalField[int] = Absent

    def to_record(self) -> Dict[str, Any]:
        """Plain dict for the backing store; absent fields are left out."""
        record: Dict[str, Any] = {"value": self.value}
        for key in READING_FIELDS:
            field = getattr(self, key)
            if is_present(field):
                record[key] = list(field.value) if key == "names" else field.value
        return record

    @classmethod
    def from_record(cls, kind: str, record: Dict[str, Any]) -> "SensorReading":
        """Build from a backing-store record (inverse of to_record)."""
        if not isinstance(record, dict):
            raise TypeError(f"record must be an object, got {type(record).__name__}")
        kwargs: Dict[str, Any] = {key: from_nullable(record.get(key)) for key in READING_FIELDS}
        return cls(kind=kind, value=record["value"], **kwargs)


def reading_key(reading: SensorReading) -> str:
    """Store identity within a kind: name, else location, else the unnamed slot."""
    if is_present(reading.name):
        return "name:" + reading.name.value
    if is_present(reading.location):
        return "location:" + reading.location.value
    return UNNAMED_KEY
