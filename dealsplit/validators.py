"""
Input Validation for the Deal Splitter

Validates player levels and tournaments before any split is calculated.
Raises ValueError with clear messages for any constraint violations.
"""

from decimal import Decimal

from .models import PlayerLevel, TournamentCategory, TournamentFact


def _require_finite(field_name: str, value) -> None:
    # NaN and Infinity cannot be ordered, so they are rejected before any comparison
    if isinstance(value, Decimal) and not value.is_finite():
        raise ValueError(f"{field_name} must be a finite number, got: {value}")


class InputValidator:
    """Validates calculation input according to business rules."""

    def validate_player_level(self, level: PlayerLevel) -> None:
        """
        Caps must be present and positive. Raises ValueError otherwise.

        A level without usable caps cannot produce meaningful percentages,
        so the calculation is rejected instead of guessed.
        """
        if level is None:
            raise ValueError("player_level is required")

        _require_finite("normal_limit", level.normal_limit)
        _require_finite("phase_limit", level.phase_limit)

        if level.normal_limit is None or level.normal_limit <= 0:
            raise ValueError(f"normal_limit must be positive, got: {level.normal_limit}")

        if level.phase_limit is None or level.phase_limit <= 0:
            raise ValueError(f"phase_limit must be positive, got: {level.phase_limit}")

    def validate_fact(self, fact: TournamentFact) -> None:
        """Validate tournament-level constraints."""
        if not fact.name or not fact.name.strip():
            raise ValueError("Tournament name cannot be empty")

        for field_name in ("buy_in", "result", "total_buy_in", "conversion_rate"):
            _require_finite(field_name, getattr(fact, field_name))

        if fact.buy_in < 0:
            raise ValueError(f"buy_in cannot be negative, got: {fact.buy_in}")

        if fact.re_entries < 0:
            raise ValueError(f"re_entries cannot be negative, got: {fact.re_entries}")

        if fact.total_buy_in is not None and fact.total_buy_in < 0:
            raise ValueError(f"total_buy_in cannot be negative, got: {fact.total_buy_in}")

        if not isinstance(fact.category, TournamentCategory):
            raise ValueError(f"Invalid category: {fact.category}")
