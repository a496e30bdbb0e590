"""StatusComposer: builds one frozen Status per request."""

import logging
from typing import Dict, List, Optional

from spacestatus.core.logging_utils import log_status_composed, log_store_failure
from spacestatus.errors import StoreUnavailable
from spacestatus.model.sensors import SensorReading
from spacestatus.model.status import Status
from spacestatus.modifiers.chain import ModifierChain
from spacestatus.store.base import SensorStore
from spacestatus.template import StatusTemplate

logger = logging.getLogger(__name__)


class StatusComposer:
    """Clone template, merge current sensor readings, run modifiers, freeze.

    Holds shared references only; every compose() works on its own clone, so
    concurrent calls never see each other's mutations or touch the template.
    """

    def __init__(
        self,
        template: StatusTemplate,
        store: SensorStore,
        modifiers: Optional[ModifierChain] = None,
    ) -> None:
        self._template = template
        self._store = store
        self._modifiers = modifiers if modifiers is not None else ModifierChain()

    @property
    def template(self) -> StatusTemplate:
        return self._template

    @property
    def store(self) -> SensorStore:
        return self._store

    @property
    def modifiers(self) -> ModifierChain:
        return self._modifiers

    def _read(self, kind: str, trace_id: Optional[str]) -> List[SensorReading]:
        # Stores already degrade to []; this covers stores that raise instead.
        try:
            return self._store.get(kind)
        except StoreUnavailable as e:
            log_store_failure("get", kind, e, trace_id=trace_id)
            return []

    def compose(self, trace_id: Optional[str] = None) -> Status:
        """Return a fresh frozen Status. Missing sensor data is never an error."""
        status = self._template.clone()
        counts: Dict[str, int] = {}
        for kind in self._template.sensor_kinds:
            readings = self._read(kind, trace_id)
            counts[kind] = len(readings)
            if not readings:
                continue
            # Sensors is created lazily: no readings at all leaves it Absent.
            status.ensure_sensors().readings(kind).extend(r.clone() for r in readings)
        self._modifiers.apply(status)
        status.freeze()
        log_status_composed(trace_id=trace_id, status=status, kinds_read=counts)
        return status

    def base_status(self) -> Status:
        """Template-only frozen Status: the best-effort fallback when compose() fails."""
        return self._template.clone().freeze()
