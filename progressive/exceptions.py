"""
Exceptions for the Progressive Rates Engine.

Every error derives from ValueError so callers that only know the plain
validation convention keep working.
"""


class ProgressiveError(ValueError):
    """Base exception for all progressive definition errors."""


class InvalidBound(ProgressiveError):
    """A bracket bound violates its sign, ordering or contiguity constraint."""

    def __init__(self, bound: str, value, message: str):
        self.bound = bound
        self.value = value
        super().__init__(message)


class ProtocolViolation(ProgressiveError):
    """A builder operation was invoked in a stage that does not permit it."""

    def __init__(self, operation: str, stage: str, reason: str | None = None):
        self.operation = operation
        self.stage = stage
        message = f"'{operation}' is not allowed while {stage}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidInput(ProgressiveError):
    """Input value rejected by the configured negative input policy."""
