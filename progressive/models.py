"""
Domain Models for the Progressive Rates Engine

These dataclasses describe brackets and the results of splitting a value
across them. They are generic over the quantity type T and the rate type M;
Decimal is used wherever values are parsed from plain data.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic

from .numeric import M, T, zero_of

# =============================================================================
# DEFINITION MODELS
# =============================================================================


@dataclass(frozen=True)
class Bracket(Generic[T, M]):
    """A single contiguous interval of a progressive scale."""

    lower: T
    upper: T | None  # None = infinite
    multiplier: M
    open_ended: bool = False

    @property
    def from_(self) -> T:
        return self.lower

    @property
    def to(self) -> T | None:
        return self.upper

    @property
    def size(self) -> T:
        """Capacity of the bracket. Open-ended brackets have none."""
        if self.open_ended:
            raise TypeError("open-ended bracket has no finite size")
        return self.upper - self.lower

    def calculate(self, amount: T) -> T:
        """Contribution of an amount allocated to this bracket."""
        return amount * self.multiplier

    def contains(self, value: T) -> bool:
        if value < self.lower:
            return False
        return self.open_ended or value < self.upper

    @classmethod
    def from_dict(cls, data: dict) -> "Bracket":
        upper = data.get("upper_bound")
        return cls(
            lower=Decimal(str(data["lower_bound"])),
            upper=Decimal(str(upper)) if upper is not None else None,
            multiplier=Decimal(str(data["rate"])),
            open_ended=upper is None,
        )


# =============================================================================
# CALCULATION MODELS
# =============================================================================


@dataclass
class BracketAllocation(Generic[T, M]):
    """Portion of the input value assigned to one bracket."""

    bracket: Bracket[T, M]
    amount: T


@dataclass
class BracketsAccumulator(Generic[T, M]):
    """
    Running state of one allocation pass.

    Created fresh for every calculation and discarded afterwards.
    """

    remaining: T
    allocations: list[BracketAllocation[T, M]] = field(default_factory=list)


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class BracketResult(Generic[T, M]):
    """Contribution of one bracket: allocated amount times its multiplier."""

    bracket: Bracket[T, M]
    amount: T
    allocated: T


@dataclass(frozen=True)
class CalculationResult(Generic[T, M]):
    """Final output of a progressive calculation."""

    total: T
    breakdown: tuple[BracketResult[T, M], ...]
    value: T
    unallocated: T

    @property
    def allocated_total(self) -> T:
        """Sum of the pre-multiplication allocations across all brackets."""
        aggregate = zero_of(self.value)
        for result in self.breakdown:
            aggregate += result.allocated
        return aggregate

    @property
    def effective_rate(self):
        """
        Total divided by the input value.

        Only available for quantity types that support division.
        Returns zero for a zero input.
        """
        if self.value == zero_of(self.value):
            return zero_of(self.total)
        return self.total / self.value
