"""SensorStore abstract interface for live sensor readings."""

from abc import ABC, abstractmethod
from typing import List

from spacestatus.model.sensors import SensorReading


class SensorStore(ABC):
    """Key-indexed store of the latest readings per sensor kind.

    Implementations must be safe for concurrent get/set from request threads.
    A get never sees a partially-written reading of the same kind.
    """

    @abstractmethod
    def get(self, kind: str) -> List[SensorReading]:
        """Return readings of ``kind`` in first-insertion order; [] if none.

        Backing-store failures and timeouts are logged and return []; get never
        raises for an unavailable store.
        """
        ...

    @abstractmethod
    def set(self, kind: str, reading: SensorReading) -> None:
        """Record or replace the reading with the same key (see reading_key) within ``kind``.

        Raises StoreUnavailable when the backing store rejects or times out the
        write. Other stored readings are left untouched.
        """
        ...

    def close(self) -> None:
        return
