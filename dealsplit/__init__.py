"""
Tournament Deal Splitter

Parses exported poker tournament summaries and splits each tournament's
outcome between the normal deal and the automatic sale.
"""

from .currency import Conversion, CurrencyNormalizer
from .engine import DistributionEngine
from .models import (
    DEFAULT_PLAYER_LEVEL,
    AnalysisResult,
    Distribution,
    Document,
    PlayerLevel,
    Summary,
    TournamentCategory,
    TournamentFact,
)
from .output import CsvExporter, OutputBuilder
from .parser import SummaryParser
from .processor import AnalysisProcessor
from .tracker import TrackerClient, TrackerError

__all__ = [
    # Main entry points
    "SummaryParser",
    "DistributionEngine",
    "AnalysisProcessor",
    "CurrencyNormalizer",
    "TrackerClient",
    # Models
    "TournamentCategory",
    "TournamentFact",
    "PlayerLevel",
    "DEFAULT_PLAYER_LEVEL",
    "Document",
    "Distribution",
    "Summary",
    "AnalysisResult",
    "Conversion",
    # Output
    "OutputBuilder",
    "CsvExporter",
    # Errors
    "TrackerError",
]
