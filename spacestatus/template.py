"""StatusTemplate: the operator-supplied base status, validated once at startup and never mutated."""

import logging
import math
from typing import Any, Dict, Iterable, Optional, Tuple

from spacestatus.errors import ConfigurationError
from spacestatus.model.optional import from_nullable
from spacestatus.model.sensors import SENSOR_KINDS
from spacestatus.model.status import API_VERSION, CONTACT_CHANNELS, Contact, Location, State, Status

logger = logging.getLogger(__name__)


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"status.{field} must be a non-empty string, got {value!r}")
    return value


def _require_degrees(field: str, value: Any, limit: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"status.location.{field} must be numeric degrees, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or abs(value) > limit:
        raise ConfigurationError(f"status.location.{field} must be finite and within ±{limit:g}, got {value!r}")
    return value


def _optional_of(field: str, value: Any, kind: type) -> Any:
    """from_nullable for config values, rejecting anything that is not ``kind``."""
    if value is not None and not isinstance(value, kind):
        raise ConfigurationError(f"status.{field} must be {kind.__name__}, got {value!r}")
    return from_nullable(value)


class StatusTemplate:
    """Immutable base description. ``clone()`` gives each request its own mutable Status.

    Validation (all raise ConfigurationError):
    - name, logo, url are non-empty strings
    - location.lat / location.lon are finite degrees in range
    - issue_report_channels only names channels Contact supports
    - sensor_kinds only names supported sensor kinds
    """

    def __init__(
        self,
        name: str,
        logo: str,
        url: str,
        location: Location,
        contact: Optional[Contact] = None,
        issue_report_channels: Iterable[str] = (),
        sensor_kinds: Iterable[str] = (),
        state: Optional[State] = None,
        api: str = API_VERSION,
    ) -> None:
        if not isinstance(location, Location):
            raise ConfigurationError("status.location is required")
        location = Location(
            lat=_require_degrees("lat", location.lat, 90.0),
            lon=_require_degrees("lon", location.lon, 180.0),
            address=location.address,
        )
        channels = tuple(issue_report_channels)
        unsupported = [c for c in channels if c not in CONTACT_CHANNELS]
        if unsupported:
            raise ConfigurationError(
                f"issue_report_channels has unsupported channel(s) {unsupported}; supported: {list(CONTACT_CHANNELS)}"
            )
        kinds = tuple(dict.fromkeys(sensor_kinds))
        unknown = [k for k in kinds if k not in SENSOR_KINDS]
        if unknown:
            raise ConfigurationError(f"unsupported sensor kind(s) {unknown}; supported: {list(SENSOR_KINDS)}")

        self._sensor_kinds: Tuple[str, ...] = kinds
        self._status = Status(
            name=_require_text("name", name),
            logo=_require_text("logo", logo),
            url=_require_text("url", url),
            location=location,
            contact=contact if contact is not None else Contact(),
            issue_report_channels=list(channels),
            state=state if state is not None else State(),
            api=_require_text("api", api),
        ).freeze()

    @property
    def status(self) -> Status:
        """The frozen base status. Do not use as a per-request snapshot; call clone()."""
        return self._status

    @property
    def sensor_kinds(self) -> Tuple[str, ...]:
        """Sensor kinds merged into each composed status, in document order."""
        return self._sensor_kinds

    def clone(self) -> Status:
        return self._status.clone()

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "StatusTemplate":
        """Build from the ``status`` config section. Missing/invalid fields raise ConfigurationError."""
        if not isinstance(cfg, dict) or not cfg:
            raise ConfigurationError("status section is missing from config")

        loc = cfg.get("location")
        if not isinstance(loc, dict) or "lat" not in loc or "lon" not in loc:
            raise ConfigurationError("status.location.lat and status.location.lon are required")
        address = _optional_of("location.address", loc.get("address"), str)
        location = Location(lat=loc["lat"], lon=loc["lon"], address=address)

        contact_cfg = cfg.get("contact") or {}
        if not isinstance(contact_cfg, dict):
            raise ConfigurationError("status.contact must be a mapping")
        unknown = [k for k in contact_cfg if k not in CONTACT_CHANNELS]
        if unknown:
            raise ConfigurationError(f"status.contact has unsupported channel(s) {unknown}")
        contact = Contact(**{k: _optional_of(f"contact.{k}", v, str) for k, v in contact_cfg.items()})

        state_cfg = cfg.get("state") or {}
        if not isinstance(state_cfg, dict):
            raise ConfigurationError("status.state must be a mapping")
        state = State(
            open=_optional_of("state.open", state_cfg.get("open"), bool),
            message=_optional_of("state.message", state_cfg.get("message"), str),
        )

        template = cls(
            name=cfg.get("name"),
            logo=cfg.get("logo"),
            url=cfg.get("url"),
            location=location,
            contact=contact,
            issue_report_channels=cfg.get("issue_report_channels") or (),
            sensor_kinds=cfg.get("sensors") or (),
            state=state,
            api=cfg.get("api") or API_VERSION,
        )
        logger.info(
            "Status template loaded: space=%s sensors=%s issue_report_channels=%s",
            template.status.name,
            list(template.sensor_kinds),
            list(template.status.issue_report_channels),
        )
        return template
