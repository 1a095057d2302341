class TrackerError(Exception):
    """Base class for errors surfaced by the tracker services."""


class ValidationFailure(TrackerError):
    """
    Input was malformed or out of range.

    Raised before any store mutation. ``field`` names the offending input
    when there is one, so the caller can point the user at it.
    """

    def __init__(self, reason: str, field: str | None = None):
        super().__init__(reason)
        self.reason = reason
        self.field = field

    def to_dict(self) -> dict:
        return {"detail": self.reason, "field": self.field}


class StoreFailure(TrackerError):
    """The record store could not complete an operation; nothing was changed."""

    def __init__(self, operation: str):
        super().__init__(f"Store operation failed: {operation}")
        self.operation = operation
