"""
Output Builder

Constructs API responses and CSV exports from analysis results.
"""

import csv
import io
from decimal import Decimal
from typing import Iterable

from .models import AnalysisResult, PlayerLevel, Summary, TournamentCategory, TournamentFact


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def _fmt(value) -> str:
    """Format a USD amount for the CSV export."""
    return f"${to_money(value):.2f}"


class OutputBuilder:
    """Builds the final output response."""

    def build(self, result: AnalysisResult) -> dict:
        """Construct the complete analysis response."""
        return {
            "tournaments": [self.tournament_to_dict(fact) for fact in result.tournaments],
            "summary": self.summary_to_dict(result.summary),
            "player_level": self.player_level_to_dict(result.player_level),
            "skipped_files": list(result.skipped_files),
            "failures": list(result.failures),
        }

    def tournament_to_dict(self, fact: TournamentFact) -> dict:
        return {
            "name": fact.name,
            "tournament_id": fact.tournament_id,
            "category": fact.category.value,
            "buy_in": to_money(fact.buy_in),
            "buy_in_original": fact.buy_in_original,
            "re_entries": fact.re_entries,
            "total_entries": fact.total_entries,
            "total_buy_in": to_money(fact.total_buy_in or 0),
            "result": to_money(fact.result),
            "currency_code": fact.currency_code,
            "conversion_rate": float(fact.conversion_rate),
            "conversion_pending": fact.conversion_pending,
            "normal_deal": to_money(fact.normal_deal),
            "automatic_sale": to_money(fact.automatic_sale),
            "original_filename": fact.original_filename,
            "game_type": fact.game_type,
            "finish_position": fact.finish_position,
        }

    def summary_to_dict(self, summary: Summary) -> dict:
        return {
            "total_tournaments": summary.total_tournaments,
            "net_profit": to_money(summary.net_profit),
            "normal_deal": to_money(summary.normal_deal),
            "automatic_sale": to_money(summary.automatic_sale),
            "pending_conversions": summary.pending_conversions,
            "categories": {
                category.value: {
                    "count": breakdown.count,
                    "percentage": breakdown.percentage,
                }
                for category, breakdown in summary.categories.items()
            },
        }

    def player_level_to_dict(self, level: PlayerLevel) -> dict:
        return {
            "level": level.level,
            "level_progress": level.level_progress,
            "normal_limit": to_money(level.normal_limit),
            "phase_limit": to_money(level.phase_limit),
        }


# =============================================================================
# CSV EXPORT
# =============================================================================

CSV_HEADERS = {
    "en": [
        "Tournament Name", "Category", "Buy-in", "Re-entries", "Total Entries",
        "Total Buy-in", "Result", "Normal Deal", "Automatic Sale", "Currency",
    ],
    "pt": [
        "Nome do Torneio", "Categoria", "Buy-in", "Re-entries", "Entradas Totais",
        "Buy-in Total", "Resultado", "Deal Normal", "Venda Automática", "Moeda",
    ],
}

CATEGORY_LABELS = {
    "en": {
        TournamentCategory.PHASE_DAY_1: "Phase Day 1",
        TournamentCategory.PHASE_DAY_2_PLUS: "Phase Day 2+",
        TournamentCategory.OTHER_CURRENCY: "Other Currencies",
        TournamentCategory.OTHER_TOURNAMENTS: "Other Tournaments",
    },
    "pt": {
        TournamentCategory.PHASE_DAY_1: "Phase Day 1",
        TournamentCategory.PHASE_DAY_2_PLUS: "Phase Day 2+",
        TournamentCategory.OTHER_CURRENCY: "Outras Moedas",
        TournamentCategory.OTHER_TOURNAMENTS: "Outros Torneios",
    },
}


class CsvExporter:
    """Writes calculated tournaments as CSV, one row per tournament."""

    def __init__(self, locale: str = "en"):
        if locale not in CSV_HEADERS:
            raise ValueError(f"Unsupported CSV locale: {locale}")
        self.locale = locale

    def export(self, facts: Iterable[TournamentFact]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS[self.locale])
        for fact in facts:
            writer.writerow(self._row(fact))
        return buffer.getvalue()

    def _row(self, fact: TournamentFact) -> list:
        # Original buy-in text is shown for non-USD tournaments
        buy_in = fact.buy_in_original or _fmt(fact.buy_in)
        return [
            fact.name,
            CATEGORY_LABELS[self.locale][fact.category],
            buy_in,
            fact.re_entries,
            fact.total_entries,
            _fmt(fact.total_buy_in or 0),
            _fmt(fact.result),
            _fmt(fact.normal_deal),
            _fmt(fact.automatic_sale),
            fact.currency_code,
        ]
