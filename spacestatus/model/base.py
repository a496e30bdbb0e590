"""Freeze/clone support for the mutable status records.

Records are plain dataclasses so modifiers can assign fields. ``freeze()``
locks a record tree in place (lists become tuples) and ``clone()`` returns an
independent, mutable deep copy.
"""

import dataclasses
from typing import Any, TypeVar

from spacestatus.model.optional import Value

R = TypeVar("R", bound="FreezableRecord")


class FreezableRecord:
    """Mixin for dataclass records that can be frozen after construction."""

    _frozen = False

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r} of frozen {type(self).__name__}")
        super().__setattr__(name, value)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self: R) -> R:
        """Freeze this record and every record/list reachable from it. Returns self."""
        if self._frozen:
            return self
        for f in dataclasses.fields(self):
            object.__setattr__(self, f.name, _freeze_value(getattr(self, f.name)))
        object.__setattr__(self, "_frozen", True)
        return self

    def clone(self: R) -> R:
        """Deep, mutable copy. Works on frozen and unfrozen records alike."""
        kwargs = {f.name: _thaw_value(getattr(self, f.name)) for f in dataclasses.fields(self) if f.init}
        return type(self)(**kwargs)


def _freeze_value(value: Any) -> Any:
    if isinstance(value, FreezableRecord):
        return value.freeze()
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    if isinstance(value, Value) and isinstance(value.value, (list, tuple, FreezableRecord)):
        return Value(_freeze_value(value.value))
    return value


def _thaw_value(value: Any) -> Any:
    if isinstance(value, FreezableRecord):
        return value.clone()
    if isinstance(value, (list, tuple)):
        return [_thaw_value(v) for v in value]
    if isinstance(value, Value) and isinstance(value.value, (list, tuple, FreezableRecord)):
        return Value(_thaw_value(value.value))
    return value
