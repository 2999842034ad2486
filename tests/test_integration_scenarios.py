"""
Integration Test Scenarios for the Progressive Rates Engine

These tests cover real-world progressive scales end to end, from declaring
the brackets to reading the breakdown.

Run with: python -m pytest tests/test_integration_scenarios.py -v

IMPORTANT: This file has a companion business summary document:
    docs/test_scenarios_business_summary.md

When adding or modifying tests, please update the business summary document
to keep them in sync.
"""

from decimal import Decimal

import pytest

from progressive import OutputBuilder, Progressive

D = Decimal


class TestReferenceScale:
    """The 1% / 2% / 3% reference scale, with and without a remainder rate."""

    @pytest.fixture
    def stage(self):
        return (
            Progressive()
            .up_to(D("100")).multiply_by(D("0.01"))
            .up_to(D("200")).multiply_by(D("0.02"))
            .up_to(D("300")).multiply_by(D("0.03"))
        )

    def test_remainder_rate_applies_above_last_bracket(self, stage):
        """400 → 1 + 2 + 3 + 4 = 10"""
        result = stage.reminder_multiplier(D("0.04")).calculate(D("400"))

        assert result.total == D("10")
        assert [r.amount for r in result.breakdown] == [D("1"), D("2"), D("3"), D("4")]

    def test_capped_scale_drops_excess(self, stage):
        """400 → 1 + 2 + 3 = 6, the last 100 is not rated"""
        result = stage.capped().calculate(D("400"))

        assert result.total == D("6")
        assert len(result.breakdown) == 3
        assert result.unallocated == D("100")

    def test_small_value_fills_first_bracket_only(self, stage):
        """50 → 0.5"""
        result = stage.capped().calculate(D("50"))

        assert result.total == D("0.5")
        assert [r.allocated for r in result.breakdown] == [D("50"), D("0"), D("0")]

    def test_zero_value(self, stage):
        result = stage.reminder_multiplier(D("0.04")).calculate(D("0"))

        assert result.total == D("0")
        assert all(r.allocated == 0 for r in result.breakdown)


class TestIncomeTaxScale:
    """A provincial income tax scale with five brackets."""

    @pytest.fixture
    def tax(self):
        return (
            Progressive()
            .up_to(D("148269")).multiply_by(D("0.10"))
            .up_to(D("177922")).multiply_by(D("0.12"))
            .up_to(D("237230")).multiply_by(D("0.13"))
            .up_to(D("355845")).multiply_by(D("0.14"))
            .reminder_multiplier(D("0.15"))
        )

    def test_income_in_third_bracket(self, tax):
        """14,826.90 + 3,558.36 + 2,870.14 = 21,255.40"""
        result = tax.calculate(D("200000"))

        assert result.total == D("21255.40")
        assert tax.marginal_rate(D("200000")) == D("0.13")

    def test_income_in_top_bracket(self, tax):
        """Everything above 355,845 is taxed at 15%"""
        result = tax.calculate(D("400000"))

        assert result.breakdown[-1].allocated == D("44155")
        assert result.breakdown[-1].amount == D("6623.25")

    def test_effective_rate_below_marginal_rate(self, tax):
        result = tax.calculate(D("200000"))
        assert result.effective_rate < tax.marginal_rate(D("200000"))


class TestLehmanFormula:
    """The 5-4-3-2-1 Lehman fee formula built from tier mappings."""

    @pytest.fixture
    def lehman(self):
        return Progressive.from_dict(
            {
                "brackets": [
                    {"lower_bound": 0, "upper_bound": 1000000, "rate": 0.05},
                    {"lower_bound": 1000000, "upper_bound": 2000000, "rate": 0.04},
                    {"lower_bound": 2000000, "upper_bound": 3000000, "rate": 0.03},
                    {"lower_bound": 3000000, "upper_bound": 4000000, "rate": 0.02},
                ],
                "remainder_rate": 0.01,
            }
        )

    def test_fee_on_three_and_a_half_million(self, lehman):
        """50,000 + 40,000 + 30,000 + 10,000 = 130,000"""
        assert lehman.calculate(D("3500000")).total == D("130000")

    def test_fee_above_all_tiers(self, lehman):
        """140,000 for the first 4M plus 1% of the rest"""
        assert lehman.calculate(D("6000000")).total == D("160000")

    def test_output_explains_each_tier(self, lehman):
        output = OutputBuilder().build(lehman.calculate(D("1500000")))

        assert output["breakdown"][0]["amount"] == D("50000")
        assert output["breakdown"][1]["allocated"] == D("500000")
        assert output["breakdown"][2]["allocated"] == D("0")


class TestPayrollContributionCap:
    """A single-rate contribution capped at a wage base."""

    @pytest.fixture
    def contribution(self):
        return Progressive().up_to(D("168600")).multiply_by(D("0.062")).capped()

    def test_wages_below_base(self, contribution):
        assert contribution.calculate(D("50000")).total == D("3100")

    def test_wages_above_base_are_capped(self, contribution):
        result = contribution.calculate(D("200000"))

        assert result.total == D("10453.20")
        assert result.unallocated == D("31400")
        assert contribution.capacity == D("168600")


class TestBulkDefinition:
    """Brackets supplied as a ready list instead of through the staged calls."""

    def test_add_bracket_matches_staged_definition(self):
        staged = (
            Progressive()
            .up_to(D("100")).multiply_by(D("0.01"))
            .up_to(D("200")).multiply_by(D("0.02"))
            .reminder_multiplier(D("0.04"))
        )
        bulk = (
            Progressive()
            .add_bracket(D("0"), D("100"), D("0.01"))
            .add_bracket(D("100"), D("200"), D("0.02"))
            .add_bracket(D("200"), None, D("0.04"))
            .capped()
        )

        for value in (D("0"), D("75"), D("200"), D("999")):
            assert bulk.calculate(value).total == staged.calculate(value).total
