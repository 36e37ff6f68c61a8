"""
Currency Normalizer

Converts tournament amounts to USD. Live rates come from a public exchange
rate API; a static table covers lookup failures so conversion never blocks.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping, Optional

import requests

from .config import get_config
from .models import TournamentFact

logger = logging.getLogger(__name__)

# Multiply original amount -> USD.
FALLBACK_RATES = MappingProxyType({
    "EUR": Decimal("1.06"),
    "GBP": Decimal("1.25"),
    "CAD": Decimal("0.73"),
    "AUD": Decimal("0.65"),
    "CNY": Decimal("0.14"),
    "JPY": Decimal("0.0067"),
})


@dataclass(frozen=True)
class Conversion:
    """An amount in USD and the rate used to get there (0 = unavailable)."""

    amount: Decimal
    rate: Decimal


class CurrencyNormalizer:
    """Converts amounts and tournaments to USD."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        fallback_rates: Mapping[str, Decimal] = FALLBACK_RATES,
        rates_url: Optional[str] = None,
        timeout: Optional[float] = None,
        live: Optional[bool] = None,
    ):
        config = get_config()
        self._session = session or requests.Session()
        self.fallback_rates = MappingProxyType(dict(fallback_rates))
        self.rates_url = rates_url or config.exchange_rate_url
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.live = config.live_exchange_rates if live is None else live

    def convert_to_usd(self, amount: Decimal, currency_code: str) -> Conversion:
        """
        Convert amount to USD. Never raises.

        USD passes through with rate 1. A currency with neither a live nor a
        fallback rate returns rate 0, which the engine treats as pending.
        """
        if currency_code == "USD":
            return Conversion(amount=amount, rate=Decimal("1"))

        rate = self.get_rate(currency_code)
        return Conversion(amount=amount * rate, rate=rate)

    def get_rate(self, currency_code: str) -> Decimal:
        """Rate to multiply an amount in currency_code by to get USD."""
        if currency_code == "USD":
            return Decimal("1")

        rate = self._live_rate(currency_code) if self.live else None
        if rate is not None:
            return rate

        fallback = self.fallback_rates.get(currency_code)
        if fallback is None:
            logger.warning(f"No exchange rate available for {currency_code}; conversion pending")
            return Decimal("0")

        logger.info(f"Using fallback rate for {currency_code}: {fallback}")
        return fallback

    def normalize(self, fact: TournamentFact) -> TournamentFact:
        """
        Return a copy of the tournament with amounts in USD.

        buy_in, total_buy_in and result are rescaled and conversion_rate set.
        USD tournaments and unavailable rates leave the amounts untouched.
        """
        if fact.is_usd:
            return replace(fact, conversion_rate=Decimal("1"))

        rate = self.get_rate(fact.currency_code)
        if rate <= 0:
            return replace(fact, conversion_rate=Decimal("0"))

        return replace(
            fact,
            buy_in=fact.buy_in * rate,
            total_buy_in=fact.total_buy_in * rate if fact.total_buy_in is not None else None,
            result=fact.result * rate,
            conversion_rate=rate,
        )

    def _live_rate(self, currency_code: str) -> Optional[Decimal]:
        """Fetch USD-based rates and invert the one for currency_code."""
        try:
            response = self._session.get(self.rates_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning(f"Exchange rate request failed: {e}")
            return None
        except ValueError as e:
            logger.warning(f"Exchange rate response is not valid JSON: {e}")
            return None

        rates = data.get("rates") if isinstance(data, dict) else None
        quoted = rates.get(currency_code) if rates else None
        if not quoted:
            logger.warning(f"Currency {currency_code} not found in exchange rates")
            return None

        try:
            per_usd = Decimal(str(quoted))
        except InvalidOperation:
            logger.warning(f"Invalid exchange rate for {currency_code}: {quoted!r}")
            return None
        if per_usd <= 0:
            return None
        return Decimal("1") / per_usd
