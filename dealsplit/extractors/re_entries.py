"""
Re-entry Extractor

Counts additional paid entries. Absence of any phrasing means zero.
"""

import re

from .base import Rule, first_match

_RE_ENTRY = r"re-?entr(?:y|ies)"


def _count(match: re.Match) -> int:
    return int(match.group("count"))


class ReEntryExtractor:
    """Extracts the re-entry count; the first matching phrasing wins."""

    RULES = (
        Rule("made_n", re.compile(rf"\bmade\s+(?P<count>\d+)\s+{_RE_ENTRY}", re.IGNORECASE), _count),
        Rule("n_re_entries", re.compile(rf"\b(?P<count>\d+)\s+{_RE_ENTRY}", re.IGNORECASE), _count),
        Rule("re_entered_n_times", re.compile(r"\bre-?entered\s+(?P<count>\d+)\s+times?\b", re.IGNORECASE), _count),
        Rule("n_times_re_entered", re.compile(r"\b(?P<count>\d+)\s+times?\s+re-?entered\b", re.IGNORECASE), _count),
    )

    def extract(self, content: str) -> int:
        count = first_match(self.RULES, content)
        return count if count is not None else 0
