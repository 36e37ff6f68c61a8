"""
Integration Tests for the Analysis Processor

Runs sample exports through parse, currency normalization, split and summary.
"""

from decimal import Decimal

import pytest

from dealsplit import AnalysisProcessor, CurrencyNormalizer, Document, PlayerLevel, TournamentCategory


@pytest.fixture
def processor():
    return AnalysisProcessor(normalizer=CurrencyNormalizer(live=False), restore_stake=False)


@pytest.fixture
def level():
    return PlayerLevel(normal_limit=Decimal("22"), phase_limit=Decimal("11"), level="3.1")


def documents(sample, *names):
    return [Document(filename=name, content=sample(name)) for name in names]


class TestProcess:

    def test_batch_of_samples(self, processor, level, sample):
        result = processor.process(
            documents(sample, "phase_day1.txt", "phase_day2.txt", "regular_loss.txt", "re_entries.txt"),
            level,
        )
        by_file = {fact.original_filename: fact for fact in result.tournaments}

        assert by_file["phase_day1.txt"].normal_deal == Decimal("-11.00")
        assert by_file["phase_day1.txt"].automatic_sale == Decimal("-44.00")
        assert round(by_file["phase_day2.txt"].normal_deal, 2) == Decimal("22.69")
        assert by_file["regular_loss.txt"].normal_deal == Decimal("-14.50")
        assert by_file["re_entries.txt"].normal_deal == Decimal("-47.30")
        assert result.summary.total_tournaments == 4

    def test_unrecognized_documents_are_skipped(self, processor, level, sample):
        result = processor.process(documents(sample, "regular_loss.txt", "malformed.txt"), level)
        assert len(result.tournaments) == 1
        assert result.skipped_files == ["malformed.txt"]

    def test_foreign_currency_is_converted_before_split(self, processor, level, sample):
        result = processor.process(documents(sample, "yuan.txt"), level)
        fact = result.tournaments[0]

        assert fact.category == TournamentCategory.OTHER_CURRENCY
        assert fact.conversion_rate == Decimal("0.14")
        assert fact.buy_in == Decimal("14.00")
        assert fact.conversion_pending is False
        # 35.00 prize - 14.00 stake, under the cap
        assert fact.normal_deal == Decimal("21.0000")

    def test_missing_rate_leaves_tournament_pending(self, level, sample):
        processor = AnalysisProcessor(normalizer=CurrencyNormalizer(fallback_rates={}, live=False))
        result = processor.process(documents(sample, "yuan.txt"), level)

        fact = result.tournaments[0]
        assert fact.conversion_pending is True
        assert fact.normal_deal == Decimal("0")
        assert result.summary.pending_conversions == 1

    def test_invalid_level_fails_the_batch(self, processor, sample):
        level = PlayerLevel(normal_limit=Decimal("0"), phase_limit=Decimal("11"))
        with pytest.raises(ValueError):
            processor.process(documents(sample, "regular_loss.txt"), level)

    def test_restore_stake_setting(self, level, sample):
        processor = AnalysisProcessor(normalizer=CurrencyNormalizer(live=False), restore_stake=True)
        result = processor.process(documents(sample, "regular_loss.txt"), level)
        fact = result.tournaments[0]
        assert fact.normal_deal + fact.automatic_sale == fact.result


class TestFromDict:

    def test_process_from_dict(self, processor, sample):
        output = processor.process_from_dict({
            "documents": [
                {"filename": "regular_loss.txt", "content": sample("regular_loss.txt")},
                {"filename": "malformed.txt", "content": sample("malformed.txt")},
            ],
            "player_level": {"normal_limit": 22, "phase_limit": 11},
        })

        assert output["summary"]["total_tournaments"] == 1
        assert output["tournaments"][0]["normal_deal"] == -14.5
        assert output["skipped_files"] == ["malformed.txt"]
        assert output["failures"] == []

    def test_default_player_level(self, processor, sample):
        output = processor.process_from_dict({
            "documents": [{"filename": "a.txt", "content": sample("regular_loss.txt")}],
        })
        assert output["player_level"]["level"] == "3.1"
        assert output["player_level"]["normal_limit"] == 22.0

    def test_no_documents(self, processor):
        with pytest.raises(ValueError, match="documents"):
            processor.process_from_dict({"documents": []})

    def test_document_without_content(self, processor):
        with pytest.raises(ValueError):
            processor.process_from_dict({"documents": [{"filename": "a.txt"}]})

    def test_recalculate_with_new_level(self, processor):
        output = processor.recalculate_from_dict({
            "tournaments": [{
                "name": "Sunday Big $55",
                "category": "OTHER_TOURNAMENTS",
                "buyIn": 55,
                "result": 18.75,
                "normalDeal": 999,
            }],
            "playerLevel": {"normalLimit": 55, "phaseLimit": 27.5},
        })
        tournament = output["tournaments"][0]
        assert tournament["normal_deal"] == -36.25
        assert tournament["automatic_sale"] == 0.0
        assert tournament["total_buy_in"] == 55.0

    def test_invalid_tournament_is_rejected(self, processor):
        with pytest.raises(ValueError, match="index 0"):
            processor.recalculate_from_dict({"tournaments": [{"name": "No fields"}]})

    def test_invalid_fact_is_reported_not_fatal(self, processor):
        output = processor.recalculate_from_dict({
            "tournaments": [
                {"name": "Good", "category": "OTHER_TOURNAMENTS", "buy_in": 10, "result": 20},
                {"name": "Bad", "category": "OTHER_TOURNAMENTS", "buy_in": -10, "result": 20},
            ],
        })
        assert len(output["tournaments"]) == 1
        assert output["failures"][0]["name"] == "Bad"
        assert "buy_in" in output["failures"][0]["error"]

    @pytest.mark.parametrize("amount", ["NaN", "Infinity"])
    def test_non_finite_amount_is_reported_not_fatal(self, processor, amount):
        output = processor.recalculate_from_dict({
            "tournaments": [
                {"name": "Good", "category": "OTHER_TOURNAMENTS", "buy_in": 10, "result": 20},
                {"name": "Bad", "category": "OTHER_TOURNAMENTS", "buyIn": amount, "result": 1},
            ],
        })
        assert [t["name"] for t in output["tournaments"]] == ["Good"]
        assert output["failures"][0]["name"] == "Bad"
        assert "finite" in output["failures"][0]["error"]

    def test_non_finite_player_level_is_rejected(self, processor):
        with pytest.raises(ValueError, match="finite"):
            processor.recalculate_from_dict({
                "tournaments": [],
                "player_level": {"normal_limit": "NaN", "phase_limit": 11},
            })
