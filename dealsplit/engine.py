"""
Distribution Engine

Applies the split to one tournament or to a whole set, and aggregates the
result. Pure and synchronous: no I/O, no shared state.
"""

from dataclasses import replace
from typing import Iterable

from .calculators import DistributionCalculator, SummaryCalculator
from .models import Distribution, PlayerLevel, Summary, TournamentFact
from .validators import InputValidator


class DistributionEngine:
    """Computes normal deal / automatic sale for tournaments."""

    def __init__(self, restore_stake: bool = False):
        self.validator = InputValidator()
        self.distribution_calculator = DistributionCalculator(restore_stake=restore_stake)
        self.summary_calculator = SummaryCalculator()

    def calculate(self, fact: TournamentFact, level: PlayerLevel) -> Distribution:
        """Compute the split for one tournament. Raises ValueError on invalid input."""
        self.validator.validate_player_level(level)
        self.validator.validate_fact(fact)
        return self.distribution_calculator.calculate(fact, level)

    def distribute(self, fact: TournamentFact, level: PlayerLevel) -> TournamentFact:
        """
        Return a copy of the tournament with normal_deal / automatic_sale set.

        Running it again with the same level gives the same values: only the
        input fields are read, never the previous split.
        """
        distribution = self.calculate(fact, level)
        return replace(
            fact,
            normal_deal=distribution.normal_deal,
            automatic_sale=distribution.automatic_sale,
            conversion_pending=distribution.conversion_pending,
        )

    def distribute_all(
        self, facts: Iterable[TournamentFact], level: PlayerLevel
    ) -> tuple[list[TournamentFact], Summary]:
        """Map every tournament through distribute(), then reduce to a Summary."""
        self.validator.validate_player_level(level)
        calculated = [self.distribute(fact, level) for fact in facts]
        return calculated, self.summary_calculator.calculate(calculated)

    def summarize(self, facts: Iterable[TournamentFact]) -> Summary:
        return self.summary_calculator.calculate(facts)
