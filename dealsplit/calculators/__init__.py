"""
Calculators Package

Provides all calculation components for deal splitting.
"""

from .distribution import DistributionCalculator
from .percentages import SplitPercentages
from .summary import SummaryCalculator

__all__ = [
    "SplitPercentages",
    "DistributionCalculator",
    "SummaryCalculator",
]
