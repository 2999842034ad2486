"""
Bracket Allocator

Distributes an input value across an ordered bracket sequence.
"""

from collections.abc import Iterable

from ..models import Bracket, BracketAllocation, BracketsAccumulator


class BracketAllocator:
    """Splits a value across brackets in ascending order."""

    def allocate(self, brackets: Iterable[Bracket], value) -> BracketsAccumulator:
        """
        Allocate the value bracket by bracket.

        Handles:
        - Partially filled brackets (remaining smaller than capacity)
        - Brackets above the value (allocated exactly zero)
        - Infinite upper bound on the final bracket (absorbs all remaining)

        Whatever is left in the accumulator afterwards was not absorbed by
        any bracket, which only happens on a capped scale.
        """
        accumulator = BracketsAccumulator(remaining=value)

        for bracket in brackets:
            self._allocate_bracket(accumulator, bracket)

        return accumulator

    @staticmethod
    def _allocate_bracket(accumulator: BracketsAccumulator, bracket: Bracket) -> None:
        remaining = accumulator.remaining

        if bracket.open_ended:
            # Infinite bracket - allocate all remaining
            allocated = remaining
        else:
            size = bracket.size
            allocated = remaining if remaining < size else size

        accumulator.allocations.append(BracketAllocation(bracket=bracket, amount=allocated))
        accumulator.remaining = remaining - allocated
