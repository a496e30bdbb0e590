"""StatusModifier interface: one transformation step over the in-progress Status."""

from abc import ABC, abstractmethod
from typing import Callable

from spacestatus.model.status import Status


class StatusModifier(ABC):
    """Called after all declared sensors are read, with mutable access to the status.

    A modifier must not assume any sensor is present; when its inputs are
    missing it leaves the status alone and returns normally.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def apply(self, status: Status) -> None:
        ...


class CallableModifier(StatusModifier):
    """Wrap a plain ``fn(status) -> None`` as a modifier."""

    def __init__(self, fn: Callable[[Status], None]) -> None:
        self._fn = fn

    @property
    def name(self) -> str:
        return getattr(self._fn, "__name__", repr(self._fn))

    def apply(self, status: Status) -> None:
        self._fn(status)
