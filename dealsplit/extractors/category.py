"""
Category Classifier

Assigns one of the four mutually exclusive tournament categories.
Phase markers take precedence over currency.
"""

import re

from ..models import TournamentCategory

DAY_1_NAME_PATTERNS = (
    re.compile(r"\[Day\s*1[A-Z]?\]", re.IGNORECASE),
    re.compile(r"\bDay\s*1(?!\d)", re.IGNORECASE),
    re.compile(r"\bPhase\b.*\bDay\s*1(?!\d)", re.IGNORECASE),
    re.compile(r"\bPhase\s*#\s*1(?!\d)", re.IGNORECASE),
    re.compile(r"\bPhase[\s-]*1(?!\d)", re.IGNORECASE),
)

DAY_1_CONTENT_PATTERNS = (
    re.compile(r"\badvanced\s+to\s+(?:the\s+)?next\s+day\b", re.IGNORECASE),
    re.compile(r"\badvanced\s+to\s+Day\s*2(?!\d)", re.IGNORECASE),
)

DAY_2_PLUS_NAME_PATTERNS = (
    re.compile(r"\[(?:Day\s*[2-9]|Final\s+Day)[A-Z]?\]", re.IGNORECASE),
    re.compile(r"\bDay\s*[2-9](?!\d)", re.IGNORECASE),
    re.compile(r"\bFinal\s+Day\b", re.IGNORECASE),
    re.compile(r"\bPhase\s*#\s*[2-9](?!\d)", re.IGNORECASE),
    re.compile(r"\bPhase[\s-]*[2-9](?!\d)", re.IGNORECASE),
)

DAY_2_PLUS_CONTENT_PATTERNS = (
    re.compile(r"\b(?:this\s+is\s+a\s+)?Day\s*[2-9]\s+tournament\b", re.IGNORECASE),
)


def _any_match(patterns, text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


class CategoryClassifier:
    """Classifies a tournament by name, content and currency."""

    def classify(self, name: str, content: str, currency_code: str) -> TournamentCategory:
        """
        Priority (first match wins):
        1. Phase Day 1 - Day-1 marker in the name
        2. Phase Day 2+ - Day 2/3/final marker in the name
        3. Phase Day 1 - an "advanced to next day" phrase in the body
        4. Phase Day 2+ - a Day-2 statement in the body
        5. Other currency - currency is not USD
        6. Other tournaments

        Name markers outrank body phrases: a Day 2 leg that advances again is
        still Day 2+.
        """
        if _any_match(DAY_1_NAME_PATTERNS, name):
            return TournamentCategory.PHASE_DAY_1

        if _any_match(DAY_2_PLUS_NAME_PATTERNS, name):
            return TournamentCategory.PHASE_DAY_2_PLUS

        if _any_match(DAY_1_CONTENT_PATTERNS, content):
            return TournamentCategory.PHASE_DAY_1

        if _any_match(DAY_2_PLUS_CONTENT_PATTERNS, content):
            return TournamentCategory.PHASE_DAY_2_PLUS

        if currency_code != "USD":
            return TournamentCategory.OTHER_CURRENCY

        return TournamentCategory.OTHER_TOURNAMENTS
