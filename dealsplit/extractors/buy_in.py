"""
Buy-in Extractor

Reads the "Buy-in:" line: optional currency prefix, main stake, fee and an
optional bounty component, each with "." or "," decimals.
"""

import re
from decimal import Decimal
from typing import Optional

from ..amounts import AMOUNT_PATTERN, CURRENCY_PATTERN, currency_code_for, parse_amount
from ..models import ParsedBuyIn
from .base import Rule, first_match

_SP = r"[^\S\n]*"
_CUR = CURRENCY_PATTERN
_AMT = AMOUNT_PATTERN


class BuyInExtractor:
    """Extracts the single-entry buy-in using progressively looser patterns."""

    def __init__(self):
        self.rules = (
            # Buy-in: $25.6+$4.4+$25
            Rule(
                "prefixed_components",
                re.compile(
                    rf"Buy-?in:{_SP}(?P<cur>{_CUR})?{_SP}(?P<main>{_AMT}){_SP}\+{_SP}(?:{_CUR})?{_SP}(?P<fee>{_AMT})"
                    rf"(?:{_SP}\+{_SP}(?:{_CUR})?{_SP}(?P<bounty>{_AMT}))?{_SP}$",
                    re.IGNORECASE | re.MULTILINE,
                ),
                self._from_match,
            ),
            # Buy-in: 25,60+4,40 EUR
            Rule(
                "suffixed_components",
                re.compile(
                    rf"Buy-?in:{_SP}(?P<main>{_AMT}){_SP}\+{_SP}(?P<fee>{_AMT})"
                    rf"(?:{_SP}\+{_SP}(?P<bounty>{_AMT}))?{_SP}(?P<code>(?-i:[A-Z]{{3}})){_SP}$",
                    re.IGNORECASE | re.MULTILINE,
                ),
                self._from_match,
            ),
            # Buy-in: $10  /  Buy-In: EUR 10  /  Buy-in: 10 USD
            Rule(
                "single_amount",
                re.compile(
                    rf"Buy-?in:{_SP}(?P<cur>{_CUR})?{_SP}(?P<main>{_AMT}){_SP}(?P<code>(?-i:[A-Z]{{3}}))?{_SP}$",
                    re.IGNORECASE | re.MULTILINE,
                ),
                self._from_match,
            ),
        )

    def extract(self, content: str) -> Optional[ParsedBuyIn]:
        """Return the buy-in components, or None when no Buy-in line is recognized."""
        return first_match(self.rules, content)

    def _from_match(self, match: re.Match) -> ParsedBuyIn:
        groups = match.groupdict()
        prefix = groups.get("code") or groups.get("cur")
        line = match.group(0)
        return ParsedBuyIn(
            main=parse_amount(groups["main"]),
            fee=self._optional_amount(groups.get("fee")),
            bounty=self._optional_amount(groups.get("bounty")),
            currency_code=currency_code_for(prefix),
            original=line.split(":", 1)[1].strip(),
        )

    @staticmethod
    def _optional_amount(text: Optional[str]) -> Decimal:
        if not text:
            return Decimal("0")
        return parse_amount(text)
