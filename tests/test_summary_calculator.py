"""
Unit Tests for Summary Calculator
"""

from decimal import Decimal

import pytest

from dealsplit.calculators import SummaryCalculator
from dealsplit.models import TournamentCategory, TournamentFact


def calculated_fact(category, result, normal_deal, automatic_sale, pending=False):
    return TournamentFact(
        name="T",
        category=category,
        buy_in=Decimal("10"),
        result=Decimal(result),
        normal_deal=Decimal(normal_deal),
        automatic_sale=Decimal(automatic_sale),
        conversion_pending=pending,
    ).normalized()


class TestSummaryCalculator:
    """Test aggregation over calculated tournaments."""

    @pytest.fixture
    def calculator(self):
        return SummaryCalculator()

    def test_empty_set(self, calculator):
        summary = calculator.calculate([])
        assert summary.total_tournaments == 0
        assert summary.net_profit == Decimal("0")
        for breakdown in summary.categories.values():
            assert breakdown.count == 0
            assert breakdown.percentage == 0.0

    def test_every_category_is_reported(self, calculator):
        summary = calculator.calculate([calculated_fact(TournamentCategory.PHASE_DAY_1, "-10", "-2", "-8")])
        assert set(summary.categories) == set(TournamentCategory)

    def test_sums(self, calculator):
        facts = [
            calculated_fact(TournamentCategory.PHASE_DAY_1, "-55", "-11", "-44"),
            calculated_fact(TournamentCategory.PHASE_DAY_2_PLUS, "113.44", "22.688", "90.752"),
            calculated_fact(TournamentCategory.OTHER_TOURNAMENTS, "18.75", "-14.50", "-21.75"),
        ]
        summary = calculator.calculate(facts)
        assert summary.total_tournaments == 3
        assert summary.net_profit == Decimal("77.19")
        assert summary.normal_deal == Decimal("-2.812")
        assert summary.automatic_sale == Decimal("25.002")

    def test_category_counts_and_percentages(self, calculator):
        facts = [
            calculated_fact(TournamentCategory.PHASE_DAY_1, "-10", "0", "0"),
            calculated_fact(TournamentCategory.PHASE_DAY_1, "-10", "0", "0"),
            calculated_fact(TournamentCategory.OTHER_TOURNAMENTS, "5", "0", "0"),
        ]
        summary = calculator.calculate(facts)
        assert summary.categories[TournamentCategory.PHASE_DAY_1].count == 2
        assert summary.categories[TournamentCategory.PHASE_DAY_1].percentage == 66.67
        assert summary.categories[TournamentCategory.OTHER_TOURNAMENTS].percentage == 33.33
        assert summary.categories[TournamentCategory.OTHER_CURRENCY].percentage == 0.0

    def test_pending_conversions_are_counted(self, calculator):
        facts = [
            calculated_fact(TournamentCategory.OTHER_CURRENCY, "250", "0", "0", pending=True),
            calculated_fact(TournamentCategory.OTHER_TOURNAMENTS, "5", "0", "0"),
        ]
        assert calculator.calculate(facts).pending_conversions == 1

    def test_order_does_not_matter(self, calculator):
        facts = [
            calculated_fact(TournamentCategory.PHASE_DAY_1, "-55", "-11", "-44"),
            calculated_fact(TournamentCategory.OTHER_CURRENCY, "30", "30", "0"),
            calculated_fact(TournamentCategory.OTHER_TOURNAMENTS, "18.75", "-14.50", "-21.75"),
        ]
        assert calculator.calculate(facts) == calculator.calculate(list(reversed(facts)))
