"""ModifierChain: ordered, fixed-at-startup sequence of StatusModifiers."""

import importlib
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, Tuple, Type, Union

from spacestatus.errors import ConfigurationError
from spacestatus.model.status import Status
from spacestatus.modifiers.base import CallableModifier, StatusModifier
from spacestatus.modifiers.occupancy import StateFromPeopleNowPresent

logger = logging.getLogger(__name__)

# Names usable in config "modifiers:".
BUILTIN_MODIFIERS: Dict[str, Type[StatusModifier]] = {
    "state_from_people_now_present": StateFromPeopleNowPresent,
}

ModifierLike = Union[StatusModifier, Callable[[Status], None]]


def _as_modifier(item: ModifierLike) -> StatusModifier:
    if isinstance(item, StatusModifier):
        return item
    if callable(item):
        return CallableModifier(item)
    raise ConfigurationError(f"not a modifier: {item!r}")


def _import_modifier(path: str) -> StatusModifier:
    """Load ``package.module:attribute``; a class is instantiated with no arguments."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"modifier path must look like 'package.module:attribute', got {path!r}")
    try:
        target: Any = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"cannot load modifier {path!r}: {e}") from e
    if isinstance(target, type):
        if not issubclass(target, StatusModifier):
            raise ConfigurationError(f"modifier class {path!r} is not a StatusModifier")
        target = target()
    return _as_modifier(target)


class ModifierChain:
    """Runs each modifier once, in registration order. Later steps see earlier effects."""

    def __init__(self, modifiers: Iterable[ModifierLike] = ()) -> None:
        self._modifiers: Tuple[StatusModifier, ...] = tuple(_as_modifier(m) for m in modifiers)

    def __iter__(self) -> Iterator[StatusModifier]:
        return iter(self._modifiers)

    def __len__(self) -> int:
        return len(self._modifiers)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(m.name for m in self._modifiers)

    def apply(self, status: Status) -> None:
        for modifier in self._modifiers:
            modifier.apply(status)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ModifierChain":
        """Build from config: built-in names or 'package.module:attribute' paths."""
        modifiers = []
        for name in names or ():
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(f"modifier name must be a non-empty string, got {name!r}")
            name = name.strip()
            if name in BUILTIN_MODIFIERS:
                modifiers.append(BUILTIN_MODIFIERS[name]())
            elif ":" in name:
                modifiers.append(_import_modifier(name))
            else:
                raise ConfigurationError(
                    f"unknown modifier {name!r}; built-in: {sorted(BUILTIN_MODIFIERS)} or use 'package.module:attribute'"
                )
        chain = cls(modifiers)
        logger.info("Modifier chain: %s", list(chain.names) or "(empty)")
        return chain
