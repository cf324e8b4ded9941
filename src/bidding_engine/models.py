"""Data models produced by the bidding engine."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from src.draft_manager.draft_state import CategoryImpact, Player


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five capped sub-scores of a granular bidding score."""

    roster_fit: int = 0  # 0-25
    remaining_players_value: int = 0  # 0-20
    budget_situation: int = 0  # 0-20
    value_efficiency: int = 0  # 0-20
    punt_strategy: int = 0  # 0-15

    @property
    def total(self) -> int:
        return (
            self.roster_fit
            + self.remaining_players_value
            + self.budget_situation
            + self.value_efficiency
            + self.punt_strategy
        )


@dataclass(frozen=True)
class GranularScore:
    """Scorer output. ``score`` may exceed 100 (timing bonus)."""

    score: int
    breakdown: ScoreBreakdown
    timing_bonus: int
    reasoning: Tuple[str, ...]


@dataclass(frozen=True)
class NominationTiming:
    is_early_opportunity: bool
    reasoning: str


@dataclass(frozen=True)
class CompetitiveInterest:
    interested_teams: int
    avg_budget_per_slot: float
    max_competitor_budget: int


@dataclass(frozen=True)
class BluffRecommendation:
    should_bluff: bool
    max_bluff_bid: int
    reasoning: str


@dataclass(frozen=True)
class BiddingTiming:
    should_wait_for_others: bool
    aggressiveness_level: str  # passive / moderate / aggressive
    bluff_recommendation: Optional[BluffRecommendation] = None


# ----------------------------------------------------------------------
# Opponent modeling
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class OpponentStrategy:
    team_name: str
    detected_strategy: str  # an archetype or "unknown"
    confidence: float
    evidence: Tuple[str, ...] = ()
    category_focus: Tuple[str, ...] = ()
    position_focus: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecentBehavior:
    last_five_bids: Tuple[int, ...] = ()
    last_five_overbids: Tuple[float, ...] = ()
    bluff_count: int = 0


@dataclass(frozen=True)
class BiddingPatterns:
    team_name: str
    aggressiveness: str  # conservative / moderate / aggressive
    average_overbid: float
    position_priorities: Dict[str, float]
    tier_preferences: Dict[int, float]
    recent_behavior: RecentBehavior = field(default_factory=RecentBehavior)
    bluff_tendency: float = 0.0


@dataclass(frozen=True)
class Desperation:
    needs_star_player: bool
    running_out_of_time: bool
    budget_constraints: bool


@dataclass(frozen=True)
class BudgetPressure:
    team_name: str
    pressure_level: str  # desperate / high / moderate / comfortable
    must_fill_positions: Tuple[str, ...]
    slots_remaining: int
    average_budget_per_slot: float
    likely_to_overbid: bool
    estimated_panic_point: int
    desperation: Desperation


@dataclass(frozen=True)
class TeamThreat:
    team_name: str
    threat_level: str  # low / medium / high / critical
    max_likely_bid: int
    bid_probability: float
    strategic_fit: float
    reasoning: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ThreatAssessment:
    player: Player
    threatening_teams: Tuple[TeamThreat, ...]
    recommended_strategy: str  # bid_early / wait_and_see / avoid / bluff_opportunity
    expected_final_cost: int
    competition_intensity: float

    def high_threats(self) -> List[TeamThreat]:
        return [
            t for t in self.threatening_teams
            if t.threat_level in ("critical", "high")
        ]


@dataclass(frozen=True)
class MarketTrends:
    average_overbid: float
    inflation_rate: float
    position_inflation: Dict[str, float]
    tier_inflation: Dict[int, float]


@dataclass(frozen=True)
class CompetitiveIntelligence:
    opponent_strategies: Tuple[OpponentStrategy, ...]
    bidding_patterns: Tuple[BiddingPatterns, ...]
    budget_pressures: Tuple[BudgetPressure, ...]
    market_trends: MarketTrends


@dataclass(frozen=True)
class StrategicRecommendations:
    nomination_timing: str  # now / wait / never
    bidding_approach: str  # aggressive / patient / bluff / avoid
    max_recommended_bid: int
    confidence_level: float


@dataclass(frozen=True)
class AdvancedCompetitionAnalysis:
    threat_assessment: ThreatAssessment
    competitive_intelligence: CompetitiveIntelligence
    strategic_recommendations: StrategicRecommendations


# ----------------------------------------------------------------------
# Recommendations
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class BiddingRecommendation:
    should_bid: bool
    max_bid: int
    reasoning: Tuple[str, ...]
    confidence: str  # low / medium / high
    category_impact: CategoryImpact
    bidding_timing: BiddingTiming
    strategy_fit: float
    bidding_score: int
    score_breakdown: ScoreBreakdown
    advanced_competition_analysis: Optional[AdvancedCompetitionAnalysis] = None


@dataclass(frozen=True)
class NominationRecommendation:
    player: Player
    strategy: str  # target / force_spend
    reasoning: Tuple[str, ...]
    priority: int
