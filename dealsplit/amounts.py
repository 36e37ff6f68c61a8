"""
Amount Parsing

Currency symbol table and locale-tolerant conversion of exported amounts
("1,234.56", "1.234,56", "25,6") to Decimal.
"""

import re
from decimal import Decimal, InvalidOperation
from types import MappingProxyType

# Longer symbols first so "R$" is never read as "$".
SYMBOL_TO_CODE = MappingProxyType({
    "US$": "USD",
    "R$": "BRL",
    "C$": "CAD",
    "A$": "AUD",
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "CNY",
    "₹": "INR",
    "₩": "KRW",
    "₽": "RUB",
    "฿": "THB",
})

DEFAULT_SYMBOL = "$"

# Alternation of every known symbol, or a three-letter ISO code prefix.
CURRENCY_PATTERN = "(?-i:" + "|".join(re.escape(s) for s in SYMBOL_TO_CODE) + r"|[A-Z]{3}(?=\s?\d))"

# Digits with optional "." / "," grouping; always ends on a digit.
AMOUNT_PATTERN = r"\d(?:[\d.,]*\d)?"


def currency_code_for(prefix: str | None) -> str:
    """
    Map a currency symbol or ISO prefix to an ISO 4217 code.

    A missing prefix means dollars. Unknown tokens pass through upper-cased.
    """
    token = (prefix or DEFAULT_SYMBOL).strip()
    if token in SYMBOL_TO_CODE:
        return SYMBOL_TO_CODE[token]
    return token.upper()


def parse_amount(text: str) -> Decimal:
    """
    Convert an exported amount to Decimal.

    Rules:
    - Both "." and "," present: the right-most one is the decimal point
    - One separator kind occurring more than once: thousands grouping
    - One separator followed by exactly three digits: thousands grouping
    - Otherwise the separator is the decimal point

    Raises ValueError if the text holds no number.
    """
    cleaned = re.sub(r"[^\d.,]", "", text or "")
    if not cleaned or not any(ch.isdigit() for ch in cleaned):
        raise ValueError(f"No numeric amount in: {text!r}")

    has_dot = "." in cleaned
    has_comma = "," in cleaned

    if has_dot and has_comma:
        decimal_sep = "." if cleaned.rfind(".") > cleaned.rfind(",") else ","
        thousands_sep = "," if decimal_sep == "." else "."
        cleaned = cleaned.replace(thousands_sep, "").replace(decimal_sep, ".")
    elif has_dot or has_comma:
        sep = "." if has_dot else ","
        head, _, tail = cleaned.rpartition(sep)
        if cleaned.count(sep) > 1 or len(tail) == 3:
            cleaned = cleaned.replace(sep, "")
        else:
            cleaned = f"{head.replace(sep, '')}.{tail}"

    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {text!r}") from e
