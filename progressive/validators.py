"""
Input Validation for the Progressive Rates Engine

Checks bracket bounds before they become part of a definition.
Raises InvalidBound with clear messages for any constraint violation.
"""

from collections.abc import Sequence
from decimal import InvalidOperation

from .exceptions import InvalidBound
from .models import Bracket
from .numeric import zero_of


class Enforce:
    """Sign, ordering and contiguity checks for a single bound."""

    @staticmethod
    def number(value, bound: str):
        """Reject NaN and infinite bounds; return the zero of the value's type."""
        try:
            if value != value:
                raise InvalidBound(bound, value, f"{bound} must be a number, got: {value}")
            zero = zero_of(value)
            if zero != zero:
                raise InvalidBound(bound, value, f"{bound} must be finite, got: {value}")
        except InvalidOperation as exc:
            raise InvalidBound(bound, value, f"{bound} must be a number, got: {value}") from exc
        return zero

    @staticmethod
    def greater_than_zero(value, bound: str = "up_to"):
        zero = Enforce.number(value, bound)
        if not zero < value:
            raise InvalidBound(bound, value, f"{bound} must be positive, got: {value}")
        return value

    @staticmethod
    def greater_than_or_zero(value, bound: str = "from_"):
        zero = Enforce.number(value, bound)
        if not zero <= value:
            raise InvalidBound(bound, value, f"{bound} cannot be negative, got: {value}")
        return value

    @staticmethod
    def not_below(value, lower, bound: str = "up_to"):
        Enforce.number(value, bound)
        if not lower <= value:
            raise InvalidBound(
                bound, value, f"{bound} cannot be below the bracket start {lower}, got: {value}"
            )
        return value

    @staticmethod
    def contiguous(value, previous_upper, bound: str = "from_"):
        """A bracket must start exactly where the previous one ended."""
        Enforce.number(value, bound)
        if value != previous_upper:
            raise InvalidBound(
                bound,
                value,
                f"{bound} must equal the previous upper bound {previous_upper}, got: {value}",
            )
        return value


class BracketValidator:
    """Validates a complete bracket sequence according to progressive scale rules."""

    def validate(self, brackets: Sequence[Bracket]) -> None:
        """
        Run all validations. Raises InvalidBound if any check fails.
        """
        if not brackets:
            raise InvalidBound("brackets", brackets, "at least one bracket is required")

        for i, bracket in enumerate(brackets):
            self._validate_bracket(i, bracket)

        self._validate_sequence(brackets)

    def _validate_bracket(self, index: int, bracket: Bracket) -> None:
        """Validate the bounds of a single bracket."""
        Enforce.greater_than_or_zero(bracket.lower, f"bracket {index} lower_bound")

        if bracket.open_ended:
            return

        if bracket.upper is None:
            raise InvalidBound(
                f"bracket {index} upper_bound",
                None,
                f"bracket {index} upper_bound is required unless the bracket is open-ended",
            )
        Enforce.not_below(bracket.upper, bracket.lower, f"bracket {index} upper_bound")

    def _validate_sequence(self, brackets: Sequence[Bracket]) -> None:
        """Validate ordering: contiguous, and only the last bracket may be open-ended."""
        for i, (previous, current) in enumerate(zip(brackets, brackets[1:]), start=1):
            if previous.open_ended:
                raise InvalidBound(
                    f"bracket {i} lower_bound",
                    current.lower,
                    f"only the last bracket may be open-ended, found another after bracket {i - 1}",
                )
            Enforce.contiguous(current.lower, previous.upper, f"bracket {i} lower_bound")
