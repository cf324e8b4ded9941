"""Per-player threat assessment and league-wide competitive intelligence."""

import logging
import math
from typing import List, Sequence

from src.bidding_engine.config import (
    BID_PROBABILITY_CAP,
    DEFAULT_MARKET_VALUE,
    EXPECTED_COST_BUFFER,
    MARKET_TIERS,
    MAX_VALUE_MULTIPLIER,
    OPPONENT_STRONG_CATEGORY,
    OPPONENT_WEAK_CATEGORY,
    PRESSURE_BID_MULTIPLIER,
    SCOUTING_AGGRESSIVE_OVERBID,
    SCOUTING_CONSERVATIVE_OVERBID,
    THREAT_AFFORDABILITY_RATIO,
    THREAT_LEVEL_ORDER,
)
from src.bidding_engine.models import (
    AdvancedCompetitionAnalysis,
    CompetitiveIntelligence,
    MarketTrends,
    StrategicRecommendations,
    TeamThreat,
    ThreatAssessment,
)
from src.bidding_engine.opponent_model import (
    analyze_bidding_patterns,
    analyze_budget_pressure,
    detect_opponent_strategy,
    has_positional_need,
)
from src.draft_manager.config import VALID_POSITIONS
from src.draft_manager.draft_state import DraftedPlayer, DraftState, Player, TeamInfo

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def _classify_threat(bid_probability: float, max_likely_bid: float, value: float) -> str:
    if bid_probability > 0.8 and max_likely_bid > value * 1.1:
        return "critical"
    if bid_probability > 0.6 and max_likely_bid > value:
        return "high"
    if bid_probability > 0.4:
        return "medium"
    return "low"


def assess_team_threat(player: Player, team: TeamInfo) -> TeamThreat:
    """How likely *team* is to bid on *player*, and how high."""
    strategy = detect_opponent_strategy(team)
    patterns = analyze_bidding_patterns(team)
    pressure = analyze_budget_pressure(team)

    strategic_fit = 0.5
    positional_need = has_positional_need(player, team.position_needs)
    if positional_need:
        strategic_fit += 0.2

    category_fit = 0.0
    for cat, value in player.category_strengths.items():
        if team.category_strengths.get(cat) < OPPONENT_WEAK_CATEGORY and value > OPPONENT_STRONG_CATEGORY:
            category_fit += 0.1
    strategic_fit += min(category_fit, 0.3)

    if team.budget_per_slot < player.projected_value * THREAT_AFFORDABILITY_RATIO:
        strategic_fit = min(strategic_fit, 0.3)

    bid_probability = strategic_fit
    if pressure.likely_to_overbid:
        bid_probability += 0.2
    if team.slots_remaining <= 5:
        bid_probability += 0.1
    bid_probability = min(bid_probability, BID_PROBABILITY_CAP)

    multiplier = PRESSURE_BID_MULTIPLIER.get(pressure.pressure_level, 1.0)
    max_likely_bid = (player.projected_value + patterns.average_overbid) * multiplier
    max_likely_bid = max(0.0, min(max_likely_bid, team.remaining_budget))

    reasoning = []
    if positional_need:
        reasoning.append(f"Needs {'/'.join(player.positions)}")
    if pressure.likely_to_overbid:
        reasoning.append(f"Budget pressure ({pressure.pressure_level})")
    if patterns.average_overbid > 3:
        reasoning.append(f"Typically overbids by ${patterns.average_overbid:.0f}")
    if strategy.confidence > 0.5:
        reasoning.append(f"Fits {strategy.detected_strategy} strategy")

    return TeamThreat(
        team_name=team.team_name,
        threat_level=_classify_threat(bid_probability, max_likely_bid, player.projected_value),
        max_likely_bid=round_half_up(max_likely_bid),
        bid_probability=bid_probability,
        strategic_fit=strategic_fit,
        reasoning=tuple(reasoning),
    )


def generate_threat_assessment(
    player: Player, all_teams: Sequence[TeamInfo]
) -> ThreatAssessment:
    """Assess every competing team's threat for *player*."""
    competitors = [t for t in all_teams if not t.is_my_team]
    threats = [assess_team_threat(player, team) for team in competitors]
    threats.sort(
        key=lambda t: (THREAT_LEVEL_ORDER[t.threat_level], t.bid_probability),
        reverse=True,
    )

    high_threats = [t for t in threats if t.threat_level in ("critical", "high")]
    if high_threats:
        expected_final_cost = max(t.max_likely_bid for t in high_threats)
    else:
        expected_final_cost = player.projected_value

    intensity = sum(1 for t in threats if t.bid_probability > 0.5) / max(1, len(competitors))
    if intensity > 0.6:
        recommended = "avoid"
    elif intensity > 0.4:
        recommended = "bid_early"
    elif intensity < 0.2:
        recommended = "bluff_opportunity"
    else:
        recommended = "wait_and_see"

    return ThreatAssessment(
        player=player,
        threatening_teams=tuple(threats),
        recommended_strategy=recommended,
        expected_final_cost=round_half_up(expected_final_cost),
        competition_intensity=intensity,
    )


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_market_trends(drafted: Sequence[DraftedPlayer]) -> MarketTrends:
    """League price inflation overall, by position and by tier."""
    average_overbid = _average([p.overbid for p in drafted])
    average_value = _average([p.projected_value for p in drafted]) if drafted else DEFAULT_MARKET_VALUE
    inflation_rate = average_overbid / average_value if average_value else 0.0

    position_inflation = {
        pos: _average([p.overbid for p in drafted if p.has_position(pos)])
        for pos in VALID_POSITIONS
    }
    tier_inflation = {
        tier: _average([p.overbid for p in drafted if p.tier == tier])
        for tier in MARKET_TIERS
    }

    return MarketTrends(
        average_overbid=average_overbid,
        inflation_rate=inflation_rate,
        position_inflation=position_inflation,
        tier_inflation=tier_inflation,
    )


def generate_competitive_intelligence(
    all_teams: Sequence[TeamInfo], drafted: Sequence[DraftedPlayer]
) -> CompetitiveIntelligence:
    """Scouting report on every competitor plus market trends."""
    competitors = [t for t in all_teams if not t.is_my_team]
    return CompetitiveIntelligence(
        opponent_strategies=tuple(detect_opponent_strategy(t) for t in competitors),
        bidding_patterns=tuple(
            analyze_bidding_patterns(
                t,
                aggressive_overbid=SCOUTING_AGGRESSIVE_OVERBID,
                conservative_overbid=SCOUTING_CONSERVATIVE_OVERBID,
            )
            for t in competitors
        ),
        budget_pressures=tuple(analyze_budget_pressure(t) for t in competitors),
        market_trends=calculate_market_trends(drafted),
    )


def generate_advanced_competition_analysis(
    player: Player, draft_state: DraftState
) -> AdvancedCompetitionAnalysis:
    """Threat assessment, scouting and strategic advice for *player*."""
    assessment = generate_threat_assessment(player, draft_state.all_teams)
    intelligence = generate_competitive_intelligence(
        draft_state.all_teams, draft_state.players_drafted
    )

    high_threat_count = len(assessment.high_threats())
    if high_threat_count == 0:
        nomination_timing, approach = "now", "patient"
    elif high_threat_count >= 3:
        nomination_timing, approach = "never", "avoid"
    elif assessment.competition_intensity > 0.5:
        nomination_timing, approach = "wait", "aggressive"
    else:
        nomination_timing, approach = "wait", "patient"

    max_recommended_bid = min(
        assessment.expected_final_cost * EXPECTED_COST_BUFFER,
        player.projected_value * MAX_VALUE_MULTIPLIER,
    )

    logger.debug(
        "Competition for %s: %d high threats, intensity %.2f",
        player.name, high_threat_count, assessment.competition_intensity,
    )

    return AdvancedCompetitionAnalysis(
        threat_assessment=assessment,
        competitive_intelligence=intelligence,
        strategic_recommendations=StrategicRecommendations(
            nomination_timing=nomination_timing,
            bidding_approach=approach,
            max_recommended_bid=round_half_up(max_recommended_bid),
            confidence_level=1 - assessment.competition_intensity,
        ),
    )
