"""
Progressive Calculator - Terminal Stage

Holds a frozen bracket sequence and runs the calculation pipeline:
1. Apply Input Policy
2. Allocate Value Across Brackets
3. Reduce Allocations to Breakdown and Total
"""

import logging
from collections.abc import Iterable, Iterator

from .calculators import BracketAllocator, BracketReducer
from .config import NEGATIVE_INPUT_REJECT, Settings
from .exceptions import InvalidInput
from .models import Bracket, CalculationResult
from .numeric import zero_of
from .stages import Stage
from .validators import BracketValidator

logger = logging.getLogger(__name__)


class ProgressiveCalculator(Stage):
    """
    Read-only calculator over a terminated progressive definition.

    Each call to calculate() builds its own accumulator, so one instance can
    be shared freely between callers and threads.
    """

    STAGE = "the definition is terminated"

    def __init__(self, brackets: Iterable[Bracket], settings: Settings | None = None):
        self._brackets = tuple(brackets)
        BracketValidator().validate(self._brackets)
        self.settings = settings or Settings.calculation_from_env()
        self.allocator = BracketAllocator()
        self.reducer = BracketReducer()

    @property
    def brackets(self) -> tuple[Bracket, ...]:
        return self._brackets

    @property
    def is_capped(self) -> bool:
        return not any(bracket.open_ended for bracket in self._brackets)

    @property
    def capacity(self):
        """Largest value the scale can rate, or None when open-ended."""
        if not self.is_capped or not self._brackets:
            return None
        return self._brackets[-1].upper - self._brackets[0].lower

    def __len__(self) -> int:
        return len(self._brackets)

    def __iter__(self) -> Iterator[Bracket]:
        return iter(self._brackets)

    def __repr__(self) -> str:
        kind = "capped" if self.is_capped else "open-ended"
        return f"<ProgressiveCalculator {len(self._brackets)} brackets, {kind}>"

    def calculate(self, value) -> CalculationResult:
        """
        Split a value across the brackets and sum the contributions.

        Args:
            value: Non-negative quantity to rate

        Returns:
            CalculationResult with total, per-bracket breakdown and any
            excess a capped scale did not absorb
        """
        # Step 1: Apply negative input policy
        value = self._apply_input_policy(value)

        # Step 2: Allocate across brackets
        accumulator = self.allocator.allocate(self._brackets, value)

        # Step 3: Reduce to breakdown and total
        result = self.reducer.reduce(accumulator, value)

        logger.debug(f"Calculated {value} across {len(self._brackets)} brackets: total {result.total}")
        if zero_of(value) < result.unallocated:
            logger.info(f"Capped scale dropped {result.unallocated} above its last bracket")

        return result

    def bracket_for(self, value) -> Bracket | None:
        """
        Return the bracket containing the value.

        Positions are absolute on the scale, so None is returned both above a
        capped scale and below a first bracket that starts above zero.
        """
        for bracket in self._brackets:
            if bracket.contains(value):
                return bracket
        return None

    def marginal_rate(self, value):
        """Multiplier applied to the next unit above the value."""
        bracket = self.bracket_for(value)
        return bracket.multiplier if bracket is not None else None

    def _apply_input_policy(self, value):
        zero = zero_of(value)
        if not value < zero:
            return value

        if self.settings.negative_input == NEGATIVE_INPUT_REJECT:
            raise InvalidInput(f"value cannot be negative, got: {value}")

        logger.warning(f"Negative value {value} clamped to zero")
        return zero
