"""Exception hierarchy for the status server."""


class SpaceStatusError(Exception):
    """Base exception for all spacestatus errors."""


class ConfigurationError(SpaceStatusError):
    """Invalid startup configuration (status template, store, modifier selection). Fatal."""


class StoreUnavailable(SpaceStatusError):
    """Backing store unreachable, failed or timed out."""

    def __init__(self, message: str, operation: str = "", kind: str = "") -> None:
        self.operation = operation
        self.kind = kind
        super().__init__(message)


class ValidationError(SpaceStatusError):
    """Malformed sensor push payload. Rejected before it reaches the store."""

    def __init__(self, message: str, field: str = "") -> None:
        self.field = field
        super().__init__(message)
