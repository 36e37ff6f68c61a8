"""
Split Percentages

Derives the normal-deal / automatic-sale shares from how far a single entry's
buy-in exceeds the player's cap.
"""

from decimal import Decimal


class SplitPercentages:
    """Calculates (normal_pct, polarize_pct) for one entry."""

    def calculate(self, single_buy_in: Decimal, cap: Decimal) -> tuple[Decimal, Decimal]:
        """
        normal_pct   = min(1, cap / single_buy_in)
        polarize_pct = 1 - normal_pct

        The single-entry buy-in is used, not the re-entry total: re-entries
        multiply the stake but not the per-entry risk ratio.
        A zero buy-in (freeroll, Day 2+ without a recorded buy-in) has no
        excess over the cap, so everything stays on the normal deal.
        """
        single_buy_in = abs(single_buy_in)
        if single_buy_in == 0:
            return Decimal("1"), Decimal("0")

        # Complement taken once so the two shares always add back to 1
        normal_pct = min(Decimal("1"), cap / single_buy_in)
        polarize_pct = Decimal("1") - normal_pct
        return normal_pct, polarize_pct
