"""
Distribution Calculator

Splits one tournament's outcome between the normal deal and the automatic
sale, with category-dependent rules.
"""

from decimal import Decimal

from ..models import Distribution, PlayerLevel, TournamentCategory, TournamentFact
from .percentages import SplitPercentages


class DistributionCalculator:
    """Calculates the normal deal / automatic sale pair for a tournament."""

    def __init__(self, restore_stake: bool = False):
        # restore_stake=True adds the stake back to the normal-deal side in the
        # default branch, so normal_deal + automatic_sale == result.
        self.restore_stake = restore_stake
        self.percentages = SplitPercentages()

    def calculate(self, fact: TournamentFact, level: PlayerLevel) -> Distribution:
        """
        Calculate the split.

        Branch order:
        1. Conversion pending (non-USD without a rate) - zeroed, flagged
        2. Phase Day 1 - the whole stake is a loss, split by percentage
        3. Phase Day 2+ - the prize is split directly, no buy-in deducted
        4. Default - profit (result - total buy-in) split by percentage
        """
        cap = level.cap_for(fact.category)
        single_buy_in = abs(fact.buy_in)
        total_buy_in = self._total_buy_in(fact, single_buy_in)
        normal_pct, polarize_pct = self.percentages.calculate(single_buy_in, cap)

        if self._is_conversion_pending(fact):
            return Distribution(
                normal_pct=normal_pct,
                polarize_pct=polarize_pct,
                conversion_pending=True,
            )

        if fact.category == TournamentCategory.PHASE_DAY_1:
            return Distribution(
                normal_deal=-total_buy_in * normal_pct,
                automatic_sale=-total_buy_in * polarize_pct,
                normal_pct=normal_pct,
                polarize_pct=polarize_pct,
            )

        if fact.category == TournamentCategory.PHASE_DAY_2_PLUS:
            return Distribution(
                normal_deal=fact.result * normal_pct,
                automatic_sale=fact.result * polarize_pct,
                normal_pct=normal_pct,
                polarize_pct=polarize_pct,
            )

        profit = fact.result - total_buy_in
        normal_deal = profit * normal_pct
        if self.restore_stake:
            normal_deal += total_buy_in

        return Distribution(
            normal_deal=normal_deal,
            automatic_sale=profit * polarize_pct,
            normal_pct=normal_pct,
            polarize_pct=polarize_pct,
        )

    @staticmethod
    def _is_conversion_pending(fact: TournamentFact) -> bool:
        return fact.currency_code != "USD" and fact.conversion_rate <= 0

    @staticmethod
    def _total_buy_in(fact: TournamentFact, single_buy_in: Decimal) -> Decimal:
        """Recorded total stake, or buy-in × entries when absent."""
        if fact.total_buy_in is not None:
            return fact.total_buy_in
        entries = fact.total_entries or (fact.re_entries + 1)
        return single_buy_in * entries
