"""
Bracket Reducer

Turns the allocations of one pass into the per-bracket breakdown and total.
"""

from ..models import BracketResult, BracketsAccumulator, CalculationResult
from ..numeric import zero_of


class BracketReducer:
    """Applies each bracket's multiplier and sums the contributions."""

    def reduce(self, accumulator: BracketsAccumulator, value) -> CalculationResult:
        breakdown = tuple(
            BracketResult(
                bracket=allocation.bracket,
                amount=allocation.bracket.calculate(allocation.amount),
                allocated=allocation.amount,
            )
            for allocation in accumulator.allocations
        )

        return CalculationResult(
            total=self._sum_amounts(breakdown, value),
            breakdown=breakdown,
            value=value,
            unallocated=accumulator.remaining,
        )

    @staticmethod
    def _sum_amounts(breakdown: tuple[BracketResult, ...], value):
        # Seeded from the input so an empty breakdown still sums to its type's zero
        aggregate = zero_of(value)
        for result in breakdown:
            aggregate = aggregate + result.amount
        return aggregate
