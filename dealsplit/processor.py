"""
Analysis Processor - Main Orchestrator

Coordinates the batch pipeline: parse every document, bring amounts to USD,
split each tournament and aggregate the result.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .config import get_config
from .currency import CurrencyNormalizer
from .engine import DistributionEngine
from .models import (
    DEFAULT_PLAYER_LEVEL, AnalysisResult, Document, PlayerLevel, TournamentFact
)
from .output import OutputBuilder
from .parser import SummaryParser

logger = logging.getLogger(__name__)


class AnalysisProcessor:
    """
    Main orchestrator for tournament analysis.

    Pipeline:
    1. Validate player level
    2. Parse documents
    3. Normalize currency
    4. Calculate splits
    5. Summarize
    6. Build output

    Documents are independent: an unrecognized document is skipped and a
    tournament that fails validation is reported, the rest of the batch
    still completes.
    """

    def __init__(
        self,
        normalizer: Optional[CurrencyNormalizer] = None,
        restore_stake: Optional[bool] = None,
    ):
        if restore_stake is None:
            restore_stake = get_config().restore_stake
        self.parser = SummaryParser()
        self.normalizer = normalizer or CurrencyNormalizer()
        self.engine = DistributionEngine(restore_stake=restore_stake)
        self.output_builder = OutputBuilder()

    def process(self, documents: Iterable[Document], player_level: PlayerLevel) -> AnalysisResult:
        """
        Analyze a batch of summary documents.

        Raises:
            ValueError: if the player level is unusable
        """
        # Step 1: Validate
        self.engine.validator.validate_player_level(player_level)

        # Step 2: Parse
        facts = []
        skipped_files = []
        for document in documents:
            fact = self.parser.parse(document.content, document.filename)
            if fact is None:
                skipped_files.append(document.filename)
            else:
                facts.append(fact)

        # Steps 3-5
        result = self._calculate(facts, player_level)
        result.skipped_files = skipped_files

        logger.info(
            f"Analyzed {len(facts)} tournaments, skipped {len(skipped_files)} files, "
            f"{len(result.failures)} failures"
        )
        return result

    def recalculate(self, facts: Iterable[TournamentFact], player_level: PlayerLevel) -> AnalysisResult:
        """Re-run the split on already parsed tournaments (e.g. after a level change)."""
        self.engine.validator.validate_player_level(player_level)
        return self._calculate(list(facts), player_level)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Analyze documents from raw dictionary input.

        Convenience method for API usage.
        """
        try:
            documents = [Document.from_dict(d) for d in data.get("documents") or []]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid document: {e}") from e
        if not documents:
            raise ValueError("documents must contain at least one file")
        result = self.process(documents, self.player_level_from_dict(data))
        return self.output_builder.build(result)

    def recalculate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recalculate tournaments given as dicts (snake_case or camelCase)."""
        facts = self.tournaments_from_dict(data)
        result = self.recalculate(facts, self.player_level_from_dict(data))
        return self.output_builder.build(result)

    def _calculate(self, facts: List[TournamentFact], player_level: PlayerLevel) -> AnalysisResult:
        calculated = []
        failures = []
        for fact in facts:
            try:
                self.engine.validator.validate_fact(fact)

                # Step 3: Normalize currency
                if not fact.is_usd and fact.conversion_rate <= 0:
                    fact = self.normalizer.normalize(fact)

                # Step 4: Calculate split
                calculated.append(self.engine.distribute(fact, player_level))
            except ValueError as e:
                logger.warning(f"Skipping {fact.original_filename or fact.name}: {e}")
                failures.append({
                    "filename": fact.original_filename,
                    "name": fact.name,
                    "error": str(e),
                })

        # Step 5: Summarize
        summary = self.engine.summarize(calculated)

        return AnalysisResult(
            tournaments=calculated,
            summary=summary,
            player_level=player_level,
            failures=failures,
        )

    @staticmethod
    def tournaments_from_dict(data: Dict[str, Any]) -> List[TournamentFact]:
        """Build tournaments from the request's 'tournaments' list. Raises ValueError."""
        raw_tournaments = data.get("tournaments")
        if not isinstance(raw_tournaments, list):
            raise ValueError("tournaments must be a list")

        facts = []
        for index, raw in enumerate(raw_tournaments):
            try:
                facts.append(TournamentFact.from_dict(raw))
            except (KeyError, TypeError, ArithmeticError) as e:
                raise ValueError(f"Invalid tournament at index {index}: {e}") from e
        return facts

    @staticmethod
    def player_level_from_dict(data: Dict[str, Any]) -> PlayerLevel:
        """player_level from the request, or the default level when absent."""
        raw = data.get("player_level") or data.get("playerLevel")
        if raw is None:
            return DEFAULT_PLAYER_LEVEL
        try:
            return PlayerLevel.from_dict(raw)
        except (TypeError, AttributeError, ArithmeticError) as e:
            raise ValueError(f"Invalid player_level: {e}") from e
