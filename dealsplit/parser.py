"""
Summary Parser - Text Extraction Orchestrator

Turns one exported tournament summary into a TournamentFact through
discrete, testable extraction steps.
"""

import logging
from decimal import Decimal
from typing import Optional

from .extractors import (
    BuyInExtractor,
    CategoryClassifier,
    HeaderExtractor,
    ReEntryExtractor,
    ResultExtractor,
)
from .models import TournamentCategory, TournamentFact

logger = logging.getLogger(__name__)


class SummaryParser:
    """
    Parser for exported tournament summaries.

    Pipeline:
    1. Header (required)
    2. Buy-in (required)
    3. Re-entries
    4. Result
    5. Category + category-specific result normalization
    6. Derived fields

    parse() never raises. An unrecognized document yields None.
    """

    def __init__(self):
        self.header_extractor = HeaderExtractor()
        self.buy_in_extractor = BuyInExtractor()
        self.re_entry_extractor = ReEntryExtractor()
        self.result_extractor = ResultExtractor()
        self.category_classifier = CategoryClassifier()

    def parse(self, content: str, filename: str = "") -> Optional[TournamentFact]:
        """
        Parse a summary document.

        Args:
            content: Document body
            filename: Original filename, kept for provenance

        Returns:
            TournamentFact, or None when the format is not recognized
        """
        try:
            return self._parse((content or "").lstrip("\ufeff"), filename)
        except Exception as e:
            logger.warning(f"Could not parse {filename or 'document'}: {e}", exc_info=True)
            return None

    def _parse(self, content: str, filename: str) -> Optional[TournamentFact]:
        # Step 1: Header
        header = self.header_extractor.extract(content)
        if header is None:
            logger.info(f"No tournament header found in {filename or 'document'}")
            return None

        # Step 2: Buy-in
        buy_in = self.buy_in_extractor.extract(content)
        if buy_in is None:
            logger.info(f"No buy-in line found in {filename or 'document'}")
            return None

        single_buy_in = buy_in.amount

        # Step 3: Re-entries
        re_entries = self.re_entry_extractor.extract(content)
        total_entries = re_entries + 1
        full_loss = single_buy_in * total_entries

        # Step 4: Result
        parsed_result = self.result_extractor.extract(content, full_loss)

        # Step 5: Category and its result rules
        category = self.category_classifier.classify(header.name, content, buy_in.currency_code)
        result = self._normalize_result(category, parsed_result.amount, full_loss)

        is_usd = buy_in.currency_code == "USD"
        fact = TournamentFact(
            name=header.name,
            tournament_id=header.tournament_id,
            category=category,
            buy_in=single_buy_in,
            buy_in_original=None if is_usd else buy_in.original,
            re_entries=re_entries,
            result=result,
            currency_code=buy_in.currency_code,
            # Non-USD amounts stay in their own currency until a rate is applied
            conversion_rate=Decimal("1") if is_usd else Decimal("0"),
            original_filename=filename or None,
            game_type=header.game_type,
            finish_position=parsed_result.finish_position,
        )

        # Step 6: Derived fields
        fact = fact.normalized()

        logger.debug(
            f"Parsed {filename or 'document'}: {fact.name} [{fact.category.value}] "
            f"buy-in {fact.buy_in} x{fact.total_entries}, result {fact.result} ({parsed_result.source})"
        )
        return fact

    @staticmethod
    def _normalize_result(category: TournamentCategory, result: Decimal, full_loss: Decimal) -> Decimal:
        """
        Apply category-specific result rules.

        - Phase Day 1: always a total loss of every entry's stake
        - Phase Day 2+: no buy-in cost on this leg, so never below zero
        """
        if category == TournamentCategory.PHASE_DAY_1:
            return -full_loss
        if category == TournamentCategory.PHASE_DAY_2_PLUS:
            return max(Decimal("0"), result)
        return result

