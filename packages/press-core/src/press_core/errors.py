"""Exceptions raised by the reconciliation engine.

Comparison mismatches are never exceptions; they are reported. The errors
below signal that a run cannot produce a trustworthy report at all.
"""


class PressValidationError(Exception):
    """Base class for validation engine failures."""


class MalformedRecord(PressValidationError):
    """A sample record is missing its identifier field."""

    def __init__(self, position: int, id_field: str = "ID"):
        self.position = position
        self.id_field = id_field
        super().__init__(f"sample record at position {position} has no '{id_field}' field")


class RemoteUnavailable(PressValidationError):
    """The remote site could not be reached or refused the request."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"remote request for '{path}' failed: {reason}")


class RemoteDecodeError(PressValidationError):
    """The remote site answered with data that could not be decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"remote response for '{path}' could not be decoded: {reason}")


class ValidationStateError(PressValidationError):
    """A validator stage was invoked out of order."""
