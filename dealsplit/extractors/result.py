"""
Result Extractor

Finds the money received (or lost) in the summary body.
"""

import re
from decimal import Decimal
from typing import Optional

from ..amounts import AMOUNT_PATTERN, CURRENCY_PATTERN, parse_amount
from ..models import ParsedResult
from .base import Rule, first_match

_MONEY = rf"(?:{CURRENCY_PATTERN})?[^\S\n]*(?P<amount>{AMOUNT_PATTERN})"

ADVANCED_PATTERN = re.compile(r"\badvanced\s+to\s+(?:the\s+)?(?:next\s+day|day\s*\d+)", re.IGNORECASE)
FINISH_PATTERN = re.compile(r"finished\s+(?:the\s+tournament\s+)?in\s+(?P<position>\d+)(?:st|nd|rd|th)?\s+place", re.IGNORECASE)


def _finish_position(text: str) -> Optional[int]:
    match = FINISH_PATTERN.search(text)
    return int(match.group("position")) if match else None


def _gain(source: str):
    def build(match: re.Match) -> ParsedResult:
        return ParsedResult(
            amount=parse_amount(match.group("amount")),
            source=source,
            finish_position=_finish_position(match.string),
        )
    return build


def _loss(source: str):
    def build(match: re.Match) -> ParsedResult:
        return ParsedResult(
            amount=-parse_amount(match.group("amount")),
            source=source,
            finish_position=_finish_position(match.string),
        )
    return build


def _position(match: re.Match) -> ParsedResult:
    return ParsedResult(
        amount=parse_amount(match.group("amount")),
        source="position",
        finish_position=int(match.group("position")),
    )


class ResultExtractor:
    """
    Extracts the tournament result.

    Priority:
    1. "received a total of <amount>"
    2. "lost a total of <amount>" (negative)
    3. Position line "<n>th : <player>, <amount>"
    4. "won <amount>" / "Won: / Profit: / Finished: <amount>"
    5. "Lost: <amount>" (negative)
    Nothing found (including an "advanced to" day summary) means a full loss
    of every entry's buy-in.
    """

    RULES = (
        Rule("received", re.compile(rf"received\s+a\s+total\s+of[^\S\n]*{_MONEY}", re.IGNORECASE), _gain("received")),
        Rule("lost_total", re.compile(rf"lost\s+a\s+total\s+of[^\S\n]*{_MONEY}", re.IGNORECASE), _loss("lost_total")),
        Rule(
            "position",
            re.compile(
                rf"^[^\S\n]*(?P<position>\d+)(?:st|nd|rd|th)[^\S\n]*:[^\S\n]*[^,\n]+,[^\S\n]*{_MONEY}",
                re.IGNORECASE | re.MULTILINE,
            ),
            _position,
        ),
        Rule("won", re.compile(rf"(?:\bwon:?|\bprofit:|\bfinished:)[^\S\n]*{_MONEY}", re.IGNORECASE), _gain("won")),
        Rule("lost", re.compile(rf"\blost:[^\S\n]*{_MONEY}", re.IGNORECASE), _loss("lost")),
    )

    def extract(self, content: str, full_loss: Decimal) -> ParsedResult:
        """
        Return the parsed result.

        full_loss is the positive stake of all entries (buy_in × total_entries),
        booked as a negative result when no amount is stated.
        """
        parsed = first_match(self.RULES, content)
        if parsed is not None:
            return parsed

        if ADVANCED_PATTERN.search(content):
            return ParsedResult(amount=-full_loss, source="advanced", finish_position=_finish_position(content))

        return ParsedResult(amount=-full_loss, source="full_loss", finish_position=_finish_position(content))
