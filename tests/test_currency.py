"""
Tests for the Currency Normalizer

The exchange rate API is replaced by a mocked requests session.
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from dealsplit.currency import FALLBACK_RATES, CurrencyNormalizer
from dealsplit.models import TournamentCategory, TournamentFact


def rates_session(payload=None, error=None):
    """A session whose GET returns payload as JSON, or raises error."""
    session = Mock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
        return session
    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    session.get.return_value = response
    return session


def yuan_fact():
    return TournamentFact(
        name="Asian Series",
        category=TournamentCategory.OTHER_CURRENCY,
        buy_in=Decimal("100"),
        result=Decimal("250"),
        currency_code="CNY",
        conversion_rate=Decimal("0"),
        buy_in_original="¥90+¥10",
    ).normalized()


class TestConvertToUsd:
    """Test rate lookup and fallbacks."""

    def test_usd_passes_through_without_lookup(self):
        session = rates_session({"rates": {}})
        normalizer = CurrencyNormalizer(session=session, live=True)
        conversion = normalizer.convert_to_usd(Decimal("42.50"), "USD")
        assert conversion.amount == Decimal("42.50")
        assert conversion.rate == Decimal("1")
        session.get.assert_not_called()

    def test_live_rate_is_inverted(self):
        session = rates_session({"result": "success", "rates": {"USD": 1, "EUR": 0.8}})
        normalizer = CurrencyNormalizer(session=session, live=True, timeout=3)
        conversion = normalizer.convert_to_usd(Decimal("100"), "EUR")
        assert conversion.rate == Decimal("1.25")
        assert conversion.amount == Decimal("125")
        session.get.assert_called_once_with(normalizer.rates_url, timeout=3)

    def test_network_error_uses_fallback(self):
        session = rates_session(error=requests.ConnectionError("offline"))
        normalizer = CurrencyNormalizer(session=session, live=True)
        conversion = normalizer.convert_to_usd(Decimal("100"), "CNY")
        assert conversion.rate == Decimal("0.14")
        assert conversion.amount == Decimal("14.00")

    def test_http_error_uses_fallback(self):
        session = rates_session({})
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503")
        normalizer = CurrencyNormalizer(session=session, live=True)
        assert normalizer.convert_to_usd(Decimal("10"), "GBP").rate == Decimal("1.25")

    def test_invalid_json_uses_fallback(self):
        session = rates_session()
        session.get.return_value.json.side_effect = ValueError("not json")
        normalizer = CurrencyNormalizer(session=session, live=True)
        assert normalizer.convert_to_usd(Decimal("10"), "EUR").rate == Decimal("1.06")

    def test_currency_missing_from_response_uses_fallback(self):
        session = rates_session({"rates": {"EUR": 0.9}})
        normalizer = CurrencyNormalizer(session=session, live=True)
        assert normalizer.convert_to_usd(Decimal("1000"), "JPY").rate == Decimal("0.0067")

    def test_unknown_currency_is_pending(self):
        normalizer = CurrencyNormalizer(session=rates_session(error=requests.Timeout()), live=True)
        conversion = normalizer.convert_to_usd(Decimal("10"), "XYZ")
        assert conversion.rate == Decimal("0")

    def test_offline_mode_skips_network(self):
        session = rates_session({"rates": {"EUR": 0.5}})
        normalizer = CurrencyNormalizer(session=session, live=False)
        assert normalizer.convert_to_usd(Decimal("10"), "EUR").rate == Decimal("1.06")
        session.get.assert_not_called()

    def test_injected_fallback_table(self):
        normalizer = CurrencyNormalizer(session=rates_session(), fallback_rates={"BRL": Decimal("0.2")}, live=False)
        assert normalizer.convert_to_usd(Decimal("50"), "BRL").amount == Decimal("10.0")
        assert normalizer.convert_to_usd(Decimal("50"), "EUR").rate == Decimal("0")

    def test_fallback_table_is_read_only(self):
        with pytest.raises(TypeError):
            FALLBACK_RATES["EUR"] = Decimal("2")


class TestNormalize:
    """Test conversion of a whole tournament."""

    @pytest.fixture
    def normalizer(self):
        return CurrencyNormalizer(session=rates_session(), live=False)

    def test_amounts_are_rescaled(self, normalizer):
        fact = normalizer.normalize(yuan_fact())
        assert fact.conversion_rate == Decimal("0.14")
        assert fact.buy_in == Decimal("14.00")
        assert fact.total_buy_in == Decimal("14.00")
        assert fact.result == Decimal("35.00")

    def test_original_fields_are_kept(self, normalizer):
        fact = normalizer.normalize(yuan_fact())
        assert fact.currency_code == "CNY"
        assert fact.buy_in_original == "¥90+¥10"

    def test_input_is_not_modified(self, normalizer):
        original = yuan_fact()
        normalizer.normalize(original)
        assert original.buy_in == Decimal("100")

    def test_unavailable_rate_leaves_amounts(self):
        normalizer = CurrencyNormalizer(session=rates_session(), fallback_rates={}, live=False)
        fact = normalizer.normalize(yuan_fact())
        assert fact.conversion_rate == Decimal("0")
        assert fact.buy_in == Decimal("100")

    def test_usd_fact_gets_rate_one(self, normalizer):
        fact = TournamentFact(
            name="Sunday Big",
            category=TournamentCategory.OTHER_TOURNAMENTS,
            buy_in=Decimal("55"),
            result=Decimal("18.75"),
        ).normalized()
        assert normalizer.normalize(fact).conversion_rate == Decimal("1")
