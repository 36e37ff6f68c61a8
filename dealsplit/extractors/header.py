"""
Header Extractor

Locates the tournament identifier, title and game type.
"""

import re
from typing import Optional

from ..models import ParsedHeader
from .base import Rule, first_match

GAME_KEYWORDS = r"(?:Hold'?em|Omaha|PLO\d?|NLH|Stud|Razz|Draw|Short\s?Deck|Courchevel)"

ID_PATTERN = re.compile(r"Tournament\s*#\s*(\d+)", re.IGNORECASE)


class HeaderExtractor:
    """Extracts the summary header using progressively looser patterns."""

    def __init__(self):
        self.rules = (
            # Tournament #271564213, Sunday Big $20, Hold'em No Limit
            Rule(
                "id_name_game",
                re.compile(
                    r"^[^\S\n]*Tournament[^\S\n]*#(?P<id>\d+)[^\S\n]*,[^\S\n]*(?P<name>[^\n]+)"
                    rf",[^\S\n]*(?P<game>[^,\n]*{GAME_KEYWORDS}[^,\n]*?)[^\S\n]*$",
                    re.IGNORECASE | re.MULTILINE,
                ),
                self._from_match,
            ),
            # Tournament #271564213, Sunday Big $20
            Rule(
                "id_name",
                re.compile(
                    r"^[^\S\n]*Tournament[^\S\n]*#(?P<id>\d+)[^\S\n]*,[^\S\n]*(?P<name>[^\n]+?)[^\S\n]*$",
                    re.IGNORECASE | re.MULTILINE,
                ),
                self._from_match,
            ),
            # Tournament: Sunday Big $20  (id, if any, appears elsewhere)
            Rule(
                "labelled_name",
                re.compile(r"^[^\S\n]*Tournament:[^\S\n]*(?P<name>[^\n]+?)[^\S\n]*$", re.IGNORECASE | re.MULTILINE),
                self._from_labelled_match,
            ),
            # Tournament #271564213 Sunday Big $20
            Rule(
                "id_space_name",
                re.compile(
                    r"^[^\S\n]*Tournament[^\S\n]*#(?P<id>\d+)[^\S\n]+(?P<name>[^\n]+?)[^\S\n]*$",
                    re.IGNORECASE | re.MULTILINE,
                ),
                self._from_match,
            ),
        )

    def extract(self, content: str) -> Optional[ParsedHeader]:
        """Return the header, or None when no header form is recognized."""
        return first_match(self.rules, content)

    def _from_match(self, match: re.Match) -> Optional[ParsedHeader]:
        name = match.group("name").strip().strip(",").strip()
        if not name:
            return None
        groups = match.groupdict()
        game = groups.get("game")
        return ParsedHeader(
            name=name,
            tournament_id=groups.get("id"),
            game_type=game.strip() if game else None,
        )

    def _from_labelled_match(self, match: re.Match) -> Optional[ParsedHeader]:
        name = match.group("name").strip()
        if not name:
            return None
        id_match = ID_PATTERN.search(match.string)
        return ParsedHeader(name=name, tournament_id=id_match.group(1) if id_match else None)
