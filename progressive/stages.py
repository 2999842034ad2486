"""
Stage guard shared by the builder stages and the calculator.

Each stage class only defines the operations legal in that stage. Asking a
stage for any other builder operation raises ProtocolViolation instead of a
bare AttributeError, and a stage can only be used once.
"""

from .exceptions import ProtocolViolation

BUILDER_OPERATIONS = frozenset(
    {
        "up_to",
        "from_",
        "up_to_infinity",
        "multiply_by",
        "capped",
        "reminder_multiplier",
        "remainder_multiplier",
        "add_bracket",
        "calculate",
    }
)


class Stage:
    """Base class for every object returned along the builder chain."""

    STAGE = "building a definition"

    def __getattr__(self, name):
        if name in BUILDER_OPERATIONS:
            raise ProtocolViolation(name, self.STAGE)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def _consume(self, operation: str) -> None:
        """Mark this stage as used; a second call on the same stage is a fork."""
        if self.__dict__.get("_consumed"):
            raise ProtocolViolation(operation, self.STAGE, "this stage has already been used")
        self._consumed = True
