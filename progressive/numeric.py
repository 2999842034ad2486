"""
Numeric capabilities required by the engine.

Any quantity type works as long as it supports addition, subtraction,
comparison and multiplication by its rate type. Decimal, float, int,
Fraction and wrapped money types all qualify.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar


class Quantity(Protocol):
    """A value that can be split across brackets."""

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __lt__(self, other: Any) -> bool: ...

    def __le__(self, other: Any) -> bool: ...

    def __mul__(self, other: Any) -> Any: ...


class Rate(Protocol):
    """A multiplier applied to the amount allocated to a bracket."""

    def __mul__(self, other: Any) -> Any: ...


T = TypeVar("T", bound=Quantity)
M = TypeVar("M", bound=Rate)


def zero_of(value: T) -> T:
    """Additive identity of the value's own type, without naming the type."""
    return value - value
