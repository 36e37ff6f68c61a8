"""
Extraction Rules

Ordered, data-driven pattern lists shared by all extractors.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional


@dataclass(frozen=True)
class Rule:
    """A pattern and the function turning its match into a value."""

    name: str
    pattern: re.Pattern
    build: Callable[[re.Match], Any]


def first_match(rules: Iterable[Rule], text: str) -> Optional[Any]:
    """
    Try each rule in order and return the first non-None value.

    A rule whose builder returns None is treated as a miss, so later
    (looser) rules still get a chance.
    """
    for rule in rules:
        match = rule.pattern.search(text)
        if not match:
            continue
        value = rule.build(match)
        if value is not None:
            return value
    return None
