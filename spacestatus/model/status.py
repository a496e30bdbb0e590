"""Status document records: Status owns Location, Contact, State and Sensors."""

from dataclasses import dataclass, field
from typing import List

from spacestatus.model.base import FreezableRecord
from spacestatus.model.optional import Absent, OptionalField, Value
from spacestatus.model.sensors import SENSOR_KINDS, SensorReading

API_VERSION = "0.13"

# Contact channels the document supports; issue_report_channels may only name these.
CONTACT_CHANNELS = (
    "phone",
    "sip",
    "irc",
    "twitter",
    "facebook",
    "identica",
    "foursquare",
    "email",
    "ml",
    "jabber",
    "issue_mail",
)


@dataclass
class Location(FreezableRecord):
    lat: float
    lon: float
    address: OptionalField[str] = Absent


@dataclass
class Contact(FreezableRecord):
    """Each channel is independently optional."""

    phone: OptionalField[str] = Absent
    sip: OptionalField[str] = Absent
    irc: OptionalField[str] = Absent
    twitter: OptionalField[str] = Absent
    facebook: OptionalField[str] = Absent
    identica: OptionalField[str] = Absent
    foursquare: OptionalField[str] = Absent
    email: OptionalField[str] = Absent
    ml: OptionalField[str] = Absent
    jabber: OptionalField[str] = Absent
    issue_mail: OptionalField[str] = Absent


@dataclass
class State(FreezableRecord):
    """Opening state. ``open`` absent is not the same as ``open`` = False."""

    open: OptionalField[bool] = Absent
    message: OptionalField[str] = Absent


@dataclass
class Sensors(FreezableRecord):
    """Readings grouped by kind, in the order they came from the store."""

    people_now_present: List[SensorReading] = field(default_factory=list)
    temperature: List[SensorReading] = field(default_factory=list)

    def readings(self, kind: str) -> List[SensorReading]:
        if kind not in SENSOR_KINDS:
            return []
        return getattr(self, kind)


@dataclass
class Status(FreezableRecord):
    """The composed status snapshot. Built fresh per request from the template."""

    name: str
    logo: str
    url: str
    location: Location
    contact: Contact = field(default_factory=Contact)
    issue_report_channels: List[str] = field(default_factory=list)
    state: State = field(default_factory=State)
    sensors: OptionalField[Sensors] = Absent
    api: str = API_VERSION

    def ensure_sensors(self) -> Sensors:
        """Return the Sensors container, creating it on first use."""
        if not isinstance(self.sensors, Value):
            self.sensors = Value(Sensors())
        return self.sensors.value
