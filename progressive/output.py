"""
Output Builder

Constructs a plain-dict view of a calculation result, with a description
explaining how each figure was reached. Values are passed through untouched.
"""

from .models import Bracket, BracketResult, CalculationResult
from .numeric import zero_of


def _upper(bracket: Bracket) -> str:
    return "infinity" if bracket.open_ended else str(bracket.upper)


class OutputBuilder:
    """Builds the dict representation of a CalculationResult."""

    def build(self, result: CalculationResult) -> dict:
        """Construct the complete output from a calculation result."""
        return {
            "summary": self._build_summary(result),
            "breakdown": [self._build_bracket(i, item) for i, item in enumerate(result.breakdown, start=1)],
        }

    def _build_summary(self, result: CalculationResult) -> dict:
        """Build summary section."""
        capped_excess = zero_of(result.value) < result.unallocated
        amounts = " + ".join(str(item.amount) for item in result.breakdown) or "nothing"

        return {
            "value": {
                "value": result.value,
                "description": "Value split across the brackets",
            },
            "total": {
                "value": result.total,
                "description": f"Sum of bracket contributions: {amounts} = {result.total}",
            },
            "unallocated": {
                "value": result.unallocated,
                "description": (
                    f"{result.unallocated} above the last bracket is not rated on a capped scale"
                    if capped_excess
                    else "The whole value was allocated to brackets"
                ),
            },
        }

    def _build_bracket(self, index: int, item: BracketResult) -> dict:
        """Build one breakdown entry."""
        bracket = item.bracket
        return {
            "bracket": index,
            "lower": bracket.lower,
            "upper": bracket.upper,
            "open_ended": bracket.open_ended,
            "multiplier": bracket.multiplier,
            "allocated": item.allocated,
            "amount": item.amount,
            "description": (
                f"{item.allocated} allocated to {bracket.lower} - {_upper(bracket)}, "
                f"× {bracket.multiplier} = {item.amount}"
            ),
        }
