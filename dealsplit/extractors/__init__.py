"""
Extractors Package

Provides all field extractors used by the summary parser.
"""

from .buy_in import BuyInExtractor
from .category import CategoryClassifier
from .header import HeaderExtractor
from .re_entries import ReEntryExtractor
from .result import ResultExtractor

__all__ = [
    "HeaderExtractor",
    "BuyInExtractor",
    "ReEntryExtractor",
    "ResultExtractor",
    "CategoryClassifier",
]
