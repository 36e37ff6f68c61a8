"""
Summary Calculator

Aggregates calculated tournaments into totals and per-category shares.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..models import CategoryBreakdown, Summary, TournamentCategory, TournamentFact


class SummaryCalculator:
    """Builds a Summary from a set of tournaments."""

    def calculate(self, facts: Iterable[TournamentFact]) -> Summary:
        """
        Sum result, normal deal and automatic sale; count per category.

        Percentages are of the total count, 0 when there are no tournaments.
        """
        facts = list(facts)
        counts = {category: 0 for category in TournamentCategory}

        for fact in facts:
            counts[fact.category] += 1

        total = len(facts)
        categories = {
            category: CategoryBreakdown(count=count, percentage=self._percentage(count, total))
            for category, count in counts.items()
        }

        return Summary(
            total_tournaments=total,
            net_profit=sum((f.result for f in facts), Decimal("0")),
            normal_deal=sum((f.normal_deal for f in facts), Decimal("0")),
            automatic_sale=sum((f.automatic_sale for f in facts), Decimal("0")),
            pending_conversions=sum(1 for f in facts if f.conversion_pending),
            categories=categories,
        )

    @staticmethod
    def _percentage(count: int, total: int) -> float:
        if total == 0:
            return 0.0
        share = (Decimal(count) / Decimal(total)) * Decimal("100")
        return float(share.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
