"""Status composition: template -> sensor readings -> modifier chain -> frozen snapshot."""

from spacestatus.engine.composer import StatusComposer

__all__ = ["StatusComposer"]
