"""
Staged Builder

Fluent stages that force brackets to be declared in a valid order:

    Progressive().up_to(100).multiply_by(rate)
                 .up_to(200).multiply_by(rate)
                 .reminder_multiplier(rate)      # or .capped()

Every stage exposes only the operations legal at that point and returns the
next stage. Each next bracket starts where the previous one ended, so a
finished definition is always gapless.
"""

import logging

from .config import Settings
from .exceptions import InvalidBound, ProtocolViolation
from .models import Bracket
from .numeric import zero_of
from .processor import ProgressiveCalculator
from .stages import Stage
from .validators import BracketValidator, Enforce

logger = logging.getLogger(__name__)


class BracketSequence:
    """Append-only bracket list shared by all stages of one definition."""

    def __init__(self, settings: Settings):
        self.brackets: list[Bracket] = []
        self.settings = settings

    @property
    def last(self) -> Bracket | None:
        return self.brackets[-1] if self.brackets else None

    def append(self, bracket: Bracket) -> None:
        self.brackets.append(bracket)
        upper = "infinity" if bracket.open_ended else bracket.upper
        logger.debug(f"Bracket {len(self.brackets)}: {bracket.lower} to {upper} at {bracket.multiplier}")

    def freeze(self) -> ProgressiveCalculator:
        logger.debug(f"Definition terminated with {len(self.brackets)} brackets")
        return ProgressiveCalculator(self.brackets, self.settings)

    def check_bracket(self, lower, upper, multiplier) -> Bracket:
        """Build a fully specified bracket, checking it against the previous one."""
        Enforce.greater_than_or_zero(lower, "lower")
        if upper is not None:
            Enforce.not_below(upper, lower, "upper")

        previous = self.last
        if previous is not None:
            if previous.open_ended:
                raise InvalidBound(
                    "lower", lower, "cannot add a bracket after an open-ended bracket"
                )
            Enforce.contiguous(lower, previous.upper, "lower")

        return Bracket(lower=lower, upper=upper, multiplier=multiplier, open_ended=upper is None)


class Progressive(Stage):
    """
    Entry point of a progressive definition.

    Start with up_to() (the first bracket begins at zero) or from_(), or
    use add_bracket() when the bracket list is already known.
    """

    STAGE = "starting a definition"

    def __init__(self, settings: Settings | None = None):
        self._sequence = BracketSequence(settings or Settings.calculation_from_env())

    def up_to(self, to) -> "RateBuilder":
        Enforce.greater_than_zero(to, "up_to")
        rate_stage = ToBuilder(self._sequence, zero_of(to)).up_to(to)
        self._consume("up_to")
        return rate_stage

    def from_(self, lower) -> "ToBuilder":
        Enforce.greater_than_or_zero(lower, "from_")
        self._consume("from_")
        return ToBuilder(self._sequence, lower)

    def add_bracket(self, lower, upper, multiplier) -> "NextBracketBuilder":
        """Bulk construction: append a whole bracket. Pass upper=None for open-ended."""
        bracket = self._sequence.check_bracket(lower, upper, multiplier)
        self._consume("add_bracket")
        self._sequence.append(bracket)
        return NextBracketBuilder(self._sequence)

    @classmethod
    def from_tiers(cls, tiers: list[dict], settings: Settings | None = None) -> ProgressiveCalculator:
        """
        Build a terminated calculator from plain tier mappings.

        Each tier has 'lower_bound', 'upper_bound' (None = infinite) and
        'rate'. A list whose last tier is finite is capped.
        """
        brackets = [Bracket.from_dict(tier) for tier in tiers]
        BracketValidator().validate(brackets)

        stage = cls(settings)
        for bracket in brackets:
            stage = stage.add_bracket(bracket.lower, bracket.upper, bracket.multiplier)
        return stage.capped()

    @classmethod
    def from_dict(cls, data: dict, settings: Settings | None = None) -> ProgressiveCalculator:
        """
        Build from {'brackets': [...], 'remainder_rate': optional}.

        A remainder rate appends an open-ended bracket after the last one.
        """
        remainder = data.get("remainder_rate")
        if remainder is None:
            return cls.from_tiers(data["brackets"], settings)

        tiers = list(data["brackets"])
        last_upper = tiers[-1].get("upper_bound") if tiers else None
        if last_upper is None:
            raise InvalidBound(
                "remainder_rate",
                remainder,
                "remainder_rate requires the last bracket to have an upper_bound",
            )

        tiers.append({"lower_bound": last_upper, "upper_bound": None, "rate": remainder})
        return cls.from_tiers(tiers, settings)


class ToBuilder(Stage):
    """A bracket has a start and is waiting for its upper bound."""

    STAGE = "awaiting an upper bound"

    def __init__(self, sequence: BracketSequence, lower):
        self._sequence = sequence
        self._lower = lower

    def up_to(self, to) -> "RateBuilder":
        Enforce.greater_than_zero(to, "up_to")
        Enforce.not_below(to, self._lower, "up_to")
        self._consume("up_to")
        return RateBuilder(self._sequence, self._lower, to, open_ended=False)

    def up_to_infinity(self) -> "RateBuilder":
        self._consume("up_to_infinity")
        return RateBuilder(self._sequence, self._lower, None, open_ended=True)


class RateBuilder(Stage):
    """A bracket has both bounds and is waiting for its multiplier."""

    STAGE = "awaiting a rate"

    def __init__(self, sequence: BracketSequence, lower, upper, open_ended: bool):
        self._sequence = sequence
        self._lower = lower
        self._upper = upper
        self._open_ended = open_ended

    def multiply_by(self, multiplier) -> "NextBracketBuilder":
        self._consume("multiply_by")
        self._sequence.append(
            Bracket(
                lower=self._lower,
                upper=self._upper,
                multiplier=multiplier,
                open_ended=self._open_ended,
            )
        )
        return NextBracketBuilder(self._sequence)


class NextBracketBuilder(Stage):
    """At least one bracket is committed; declare the next one or terminate."""

    STAGE = "awaiting the next bracket or termination"

    def __init__(self, sequence: BracketSequence):
        self._sequence = sequence

    def up_to(self, to) -> RateBuilder:
        rate_stage = ToBuilder(self._sequence, self._next_lower("up_to")).up_to(to)
        self._consume("up_to")
        return rate_stage

    def from_(self, lower) -> ToBuilder:
        expected = self._next_lower("from_")
        Enforce.greater_than_or_zero(lower, "from_")
        Enforce.contiguous(lower, expected, "from_")
        self._consume("from_")
        return ToBuilder(self._sequence, lower)

    def add_bracket(self, lower, upper, multiplier) -> "NextBracketBuilder":
        bracket = self._sequence.check_bracket(lower, upper, multiplier)
        self._consume("add_bracket")
        self._sequence.append(bracket)
        return NextBracketBuilder(self._sequence)

    def capped(self) -> ProgressiveCalculator:
        """Terminate without a remainder bracket; value above the last bound is not rated."""
        self._consume("capped")
        return self._sequence.freeze()

    def reminder_multiplier(self, multiplier) -> ProgressiveCalculator:
        """Terminate with an open-ended bracket from the last bound at this rate."""
        lower = self._next_lower("reminder_multiplier")
        self._consume("reminder_multiplier")
        ToBuilder(self._sequence, lower).up_to_infinity().multiply_by(multiplier)
        return self._sequence.freeze()

    def remainder_multiplier(self, multiplier) -> ProgressiveCalculator:
        return self.reminder_multiplier(multiplier)

    def _next_lower(self, operation: str):
        last = self._sequence.last
        if last.open_ended:
            raise ProtocolViolation(
                operation, self.STAGE, "the last bracket is open-ended, only capped() may follow"
            )
        return last.upper
