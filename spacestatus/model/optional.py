"""Two-case optional field: ``Value(x)`` or ``Absent``.

Absent means the key is omitted from the serialized document. It is not the
same as null, False or 0.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class _AbsentType:
    """Singleton marker for a field that is not present."""

    _instance: Optional["_AbsentType"] = None

    def __new__(cls) -> "_AbsentType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_AbsentType":
        return self

    def __deepcopy__(self, memo: Any) -> "_AbsentType":
        return self

    def __reduce__(self):
        return (_AbsentType, ())


Absent = _AbsentType()


@dataclass(frozen=True)
class Value(Generic[T]):
    """A present field holding exactly ``value``."""

    value: T


OptionalField = Union[Value[T], _AbsentType]


def is_present(field: Any) -> bool:
    return isinstance(field, Value)


def from_nullable(value: Optional[T]) -> "OptionalField[T]":
    """Map None -> Absent, anything else -> Value(x). Use at config/payload boundaries only."""
    return Absent if value is None else Value(value)


def unwrap_or(field: "OptionalField[T]", default: Any = None) -> Any:
    """Return the held value, or ``default`` when Absent."""
    if isinstance(field, Value):
        return field.value
    return default
