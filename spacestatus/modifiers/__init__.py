"""Status modifiers: per-request transformation steps run after sensors are merged."""

from spacestatus.modifiers.base import CallableModifier, StatusModifier
from spacestatus.modifiers.chain import BUILTIN_MODIFIERS, ModifierChain
from spacestatus.modifiers.occupancy import StateFromPeopleNowPresent

__all__ = [
    "StatusModifier",
    "CallableModifier",
    "ModifierChain",
    "BUILTIN_MODIFIERS",
    "StateFromPeopleNowPresent",
]
