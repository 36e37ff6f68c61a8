"""
Domain Models for the Tournament Deal Splitter

These dataclasses provide type-safe representations of parsed tournaments,
player levels and aggregated results.
All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum


def to_decimal(value) -> Decimal:
    """Convert a JSON/number value to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _pick(data: dict, *keys, default=None):
    """Return the first key present in data (snake_case or camelCase)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


class TournamentCategory(str, Enum):
    """Mutually exclusive tournament classification."""

    PHASE_DAY_1 = "PHASE_DAY_1"
    PHASE_DAY_2_PLUS = "PHASE_DAY_2_PLUS"
    OTHER_CURRENCY = "OTHER_CURRENCY"
    OTHER_TOURNAMENTS = "OTHER_TOURNAMENTS"

    @property
    def is_phase(self) -> bool:
        return self in (TournamentCategory.PHASE_DAY_1, TournamentCategory.PHASE_DAY_2_PLUS)


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class PlayerLevel:
    """Buy-in caps granted to the player (USD), read-only to the core."""

    normal_limit: Decimal
    phase_limit: Decimal
    level: str = ""
    level_progress: float = 0.0

    def cap_for(self, category: TournamentCategory) -> Decimal:
        if category.is_phase:
            return self.phase_limit
        return self.normal_limit

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerLevel":
        normal = _pick(data, "normal_limit", "normalLimit")
        phase = _pick(data, "phase_limit", "phaseLimit")
        if normal is None or phase is None:
            raise ValueError("player_level requires normal_limit and phase_limit")
        return cls(
            normal_limit=to_decimal(normal),
            phase_limit=to_decimal(phase),
            level=str(_pick(data, "level", default="")),
            level_progress=float(_pick(data, "level_progress", "levelProgress", default=0)),
        )

    @classmethod
    def from_tracker_response(cls, data: dict) -> "PlayerLevel":
        """Build from the tracker API shape: {level, progress, limits: {normal, phase}}."""
        limits = data["limits"]
        return cls(
            normal_limit=to_decimal(limits["normal"]),
            phase_limit=to_decimal(limits["phase"]),
            level=str(data.get("level", "")),
            level_progress=float(data.get("progress", 0)),
        )


DEFAULT_PLAYER_LEVEL = PlayerLevel(
    normal_limit=Decimal("22"),
    phase_limit=Decimal("11"),
    level="3.1",
    level_progress=0.65,
)


@dataclass(frozen=True)
class Document:
    """One uploaded tournament summary export."""

    filename: str
    content: str

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        return cls(filename=data.get("filename", ""), content=data["content"])


@dataclass
class TournamentFact:
    """
    The parsed, normalized representation of one played tournament.

    buy_in is always the real single-entry buy-in. For Phase Day 2+ the
    logical buy-in is zero, which is reflected in total_buy_in only.
    """

    name: str
    category: TournamentCategory
    buy_in: Decimal
    result: Decimal
    tournament_id: str | None = None
    buy_in_original: str | None = None
    re_entries: int = 0
    total_entries: int | None = None
    total_buy_in: Decimal | None = None
    currency_code: str = "USD"
    conversion_rate: Decimal = Decimal("1")
    normal_deal: Decimal = Decimal("0")
    automatic_sale: Decimal = Decimal("0")
    conversion_pending: bool = False
    original_filename: str | None = None
    game_type: str | None = None
    finish_position: int | None = None

    @property
    def logical_buy_in(self) -> Decimal:
        if self.category == TournamentCategory.PHASE_DAY_2_PLUS:
            return Decimal("0")
        return self.buy_in

    @property
    def is_usd(self) -> bool:
        return self.currency_code == "USD"

    def normalized(self) -> "TournamentFact":
        """Fill every derived field exactly once."""
        total_entries = self.re_entries + 1
        if self.category == TournamentCategory.PHASE_DAY_2_PLUS:
            total_buy_in = Decimal("0")
        else:
            total_buy_in = self.buy_in * total_entries
        return replace(self, total_entries=total_entries, total_buy_in=total_buy_in)

    @classmethod
    def from_dict(cls, data: dict) -> "TournamentFact":
        total_buy_in = _pick(data, "total_buy_in", "totalBuyIn")
        total_entries = _pick(data, "total_entries", "totalEntries")
        tournament_id = _pick(data, "tournament_id", "tournamentId")
        finish_position = _pick(data, "finish_position", "finishPosition")
        fact = cls(
            name=data["name"],
            category=TournamentCategory(data["category"]),
            buy_in=to_decimal(_pick(data, "buy_in", "buyIn")),
            result=to_decimal(data["result"]),
            tournament_id=str(tournament_id) if tournament_id is not None else None,
            buy_in_original=_pick(data, "buy_in_original", "buyInOriginal"),
            re_entries=int(_pick(data, "re_entries", "reEntries", default=0)),
            total_entries=int(total_entries) if total_entries is not None else None,
            total_buy_in=to_decimal(total_buy_in) if total_buy_in is not None else None,
            currency_code=_pick(data, "currency_code", "currencyCode", default="USD"),
            conversion_rate=to_decimal(_pick(data, "conversion_rate", "conversionRate", default=1)),
            normal_deal=to_decimal(_pick(data, "normal_deal", "normalDeal", default=0)),
            automatic_sale=to_decimal(_pick(data, "automatic_sale", "automaticSale", default=0)),
            original_filename=_pick(data, "original_filename", "originalFilename"),
            game_type=_pick(data, "game_type", "gameType"),
            finish_position=int(finish_position) if finish_position is not None else None,
        )
        return fact.normalized()


# =============================================================================
# PARSE MODELS
# =============================================================================


@dataclass(frozen=True)
class ParsedHeader:
    """Identifier, title and game type from the summary header."""

    name: str
    tournament_id: str | None = None
    game_type: str | None = None


@dataclass(frozen=True)
class ParsedBuyIn:
    """Buy-in components in the original currency."""

    main: Decimal
    fee: Decimal = Decimal("0")
    bounty: Decimal = Decimal("0")
    currency_code: str = "USD"
    original: str = ""

    @property
    def amount(self) -> Decimal:
        return self.main + self.fee + self.bounty


@dataclass(frozen=True)
class ParsedResult:
    """Money received (or lost) as stated in the summary body."""

    amount: Decimal
    source: str
    finish_position: int | None = None


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class Distribution:
    """Split of one tournament between normal deal and automatic sale."""

    normal_deal: Decimal = Decimal("0")
    automatic_sale: Decimal = Decimal("0")
    normal_pct: Decimal = Decimal("1")
    polarize_pct: Decimal = Decimal("0")
    conversion_pending: bool = False


@dataclass
class CategoryBreakdown:
    """Count and share of one category within a summary."""

    count: int = 0
    percentage: float = 0.0


@dataclass
class Summary:
    """Aggregate over a set of calculated tournaments."""

    total_tournaments: int = 0
    net_profit: Decimal = Decimal("0")
    normal_deal: Decimal = Decimal("0")
    automatic_sale: Decimal = Decimal("0")
    pending_conversions: int = 0
    categories: dict[TournamentCategory, CategoryBreakdown] = field(
        default_factory=lambda: {category: CategoryBreakdown() for category in TournamentCategory}
    )


@dataclass
class AnalysisResult:
    """Final output of a batch analysis."""

    tournaments: list[TournamentFact]
    summary: Summary
    player_level: PlayerLevel
    skipped_files: list[str] = field(default_factory=list)
    failures: list[dict] = field(default_factory=list)
