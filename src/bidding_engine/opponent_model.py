"""Opponent modeling - strategy, bidding pattern and budget pressure inference.

Each inference reads a single TeamInfo and falls back to a neutral result
when the team has too little history to say anything.
"""

import logging
from typing import Dict, Optional, Sequence

from src.bidding_engine.config import (
    BUDGET_CONSTRAINED_PER_SLOT,
    CHEAP_SPEND_RATIO,
    DESPERATE_BUDGET_PER_SLOT,
    ELITE_TIER,
    EXPENSIVE_SPEND_RATIO,
    HIGH_PRESSURE_BUDGET_PER_SLOT,
    INTEREST_AFFORDABILITY_RATIO,
    MARKET_TIERS,
    MIN_PICKS_FOR_INFERENCE,
    MODERATE_BUDGET_PER_SLOT,
    MODERATE_DRAFT_PROGRESS,
    OPPONENT_STRONG_CATEGORY,
    OPPONENT_WEAK_CATEGORY,
    PANIC_SLOT_BUFFER,
    POSITION_FOCUS_SHARE,
    PUNT_CATEGORY,
    RECENT_PICKS,
    THREAT_AGGRESSIVE_OVERBID,
    THREAT_CONSERVATIVE_OVERBID,
)
from src.bidding_engine.models import (
    BiddingPatterns,
    BudgetPressure,
    CompetitiveInterest,
    Desperation,
    OpponentStrategy,
    RecentBehavior,
)
from src.draft_manager.config import ROSTER_SIZE, VALID_POSITIONS, VALID_STRATEGIES
from src.draft_manager.draft_state import Player, TeamInfo

logger = logging.getLogger(__name__)

_PUNT_EVIDENCE = {
    "punt_ft": "Consistently weak in FT%, may be punting",
    "punt_fg": "Consistently weak in FG%, may be punting",
    "punt_to": "High turnovers, may be punting TO",
    "punt_assists": "Low assists, may be punting AST",
}


def has_positional_need(player: Player, position_needs: Dict[str, int]) -> bool:
    """Whether a needs map has room for *player* (own position or flex)."""
    if any(position_needs.get(pos, 0) > 0 for pos in player.positions):
        return True
    return position_needs.get("any", 0) > 0


def detect_opponent_strategy(team: TeamInfo) -> OpponentStrategy:
    """Infer the archetype a competitor appears to be drafting toward."""
    players = team.players_owned
    if len(players) < MIN_PICKS_FOR_INFERENCE:
        return OpponentStrategy(
            team_name=team.team_name,
            detected_strategy="unknown",
            confidence=0.0,
            evidence=("Not enough picks to determine strategy",),
        )

    scores = {strategy: 0 for strategy in VALID_STRATEGIES}
    evidence = []

    # Spend pattern
    avg_spent = team.total_spent / len(players)
    expensive = [p for p in players if p.actual_cost > avg_spent * EXPENSIVE_SPEND_RATIO]
    cheap = [p for p in players if p.actual_cost < avg_spent * CHEAP_SPEND_RATIO]
    if len(expensive) >= 2 and len(cheap) >= 2:
        scores["stars_scrubs"] += 3
        evidence.append(
            f"Spent heavily on {len(expensive)} players, cheaply on {len(cheap)}"
        )

    # Category pattern
    weak = [cat for cat, v in team.category_strengths.items() if v < OPPONENT_WEAK_CATEGORY]
    strong = [cat for cat, v in team.category_strengths.items() if v > OPPONENT_STRONG_CATEGORY]

    if len(weak) <= 2:
        for strategy, category in PUNT_CATEGORY.items():
            if category in weak:
                scores[strategy] += 2
                evidence.append(_PUNT_EVIDENCE[strategy])

    if len(weak) <= 1 and len(strong) >= 3:
        scores["balanced"] += 2
        evidence.append("Well-rounded across categories")

    # Position focus
    position_counts = {pos: 0 for pos in VALID_POSITIONS}
    for player in players:
        for pos in player.positions:
            position_counts[pos] = position_counts.get(pos, 0) + 1
    position_focus = tuple(
        pos for pos, count in position_counts.items()
        if count > len(players) * POSITION_FOCUS_SHARE
    )

    max_score = max(scores.values())
    leaders = [s for s, score in scores.items() if score == max_score]
    if max_score > 0 and len(leaders) == 1:
        detected = leaders[0]
        confidence = min(max_score / 3, 1.0)
    else:
        detected = "unknown"
        confidence = 0.0

    return OpponentStrategy(
        team_name=team.team_name,
        detected_strategy=detected,
        confidence=confidence,
        evidence=tuple(evidence),
        category_focus=tuple(strong),
        position_focus=position_focus,
    )


def _neutral_patterns(team_name: str) -> BiddingPatterns:
    return BiddingPatterns(
        team_name=team_name,
        aggressiveness="moderate",
        average_overbid=0.0,
        position_priorities={pos: 0.2 for pos in VALID_POSITIONS},
        tier_preferences={tier: 0.2 for tier in MARKET_TIERS},
    )


def analyze_bidding_patterns(
    team: TeamInfo,
    aggressive_overbid: float = THREAT_AGGRESSIVE_OVERBID,
    conservative_overbid: float = THREAT_CONSERVATIVE_OVERBID,
) -> BiddingPatterns:
    """Summarize how a team has been paying relative to projected value.

    Args:
        team: The competitor to analyze.
        aggressive_overbid: Average overbid above which the team is
            ``aggressive``.
        conservative_overbid: Average overbid below which the team is
            ``conservative``.
    """
    players = team.players_owned
    if len(players) < MIN_PICKS_FOR_INFERENCE:
        return _neutral_patterns(team.team_name)

    overbids = [p.overbid for p in players]
    average_overbid = sum(overbids) / len(overbids)

    if average_overbid > aggressive_overbid:
        aggressiveness = "aggressive"
    elif average_overbid < conservative_overbid:
        aggressiveness = "conservative"
    else:
        aggressiveness = "moderate"

    # Spend share by position (multi-position players count for each)
    position_spend = {pos: 0.0 for pos in VALID_POSITIONS}
    for player in players:
        for pos in player.positions:
            position_spend[pos] = position_spend.get(pos, 0.0) + player.actual_cost
    total_position_spend = sum(position_spend.values())
    if total_position_spend > 0:
        position_priorities = {
            pos: spend / total_position_spend for pos, spend in position_spend.items()
        }
    else:
        position_priorities = {pos: 0.2 for pos in VALID_POSITIONS}

    tier_spend: Dict[int, float] = {}
    for player in players:
        tier_spend[player.tier] = tier_spend.get(player.tier, 0.0) + player.actual_cost
    total_spend = max(1, team.total_spent)
    tier_preferences = {tier: spend / total_spend for tier, spend in sorted(tier_spend.items())}

    recent = players[-RECENT_PICKS:]
    return BiddingPatterns(
        team_name=team.team_name,
        aggressiveness=aggressiveness,
        average_overbid=average_overbid,
        position_priorities=position_priorities,
        tier_preferences=tier_preferences,
        recent_behavior=RecentBehavior(
            last_five_bids=tuple(p.actual_cost for p in recent),
            last_five_overbids=tuple(p.overbid for p in recent),
        ),
    )


def analyze_budget_pressure(team: TeamInfo) -> BudgetPressure:
    """Estimate how squeezed a team is by its remaining budget."""
    budget_per_slot = team.budget_per_slot
    draft_progress = (ROSTER_SIZE - team.slots_remaining) / ROSTER_SIZE

    if budget_per_slot < DESPERATE_BUDGET_PER_SLOT and team.slots_remaining > 3:
        pressure_level = "desperate"
    elif budget_per_slot < HIGH_PRESSURE_BUDGET_PER_SLOT and team.slots_remaining > 2:
        pressure_level = "high"
    elif budget_per_slot < MODERATE_BUDGET_PER_SLOT or draft_progress > MODERATE_DRAFT_PROGRESS:
        pressure_level = "moderate"
    else:
        pressure_level = "comfortable"

    must_fill = tuple(
        pos for pos in VALID_POSITIONS if team.position_needs.get(pos, 0) > 0
    )

    desperation = Desperation(
        needs_star_player=(
            not any(p.tier <= ELITE_TIER for p in team.players_owned)
            and draft_progress < 0.5
        ),
        running_out_of_time=team.slots_remaining <= 3 and draft_progress > 0.8,
        budget_constraints=budget_per_slot < BUDGET_CONSTRAINED_PER_SLOT,
    )

    likely_to_overbid = pressure_level == "desperate" or (
        pressure_level == "high"
        and (desperation.needs_star_player or desperation.running_out_of_time)
    )

    return BudgetPressure(
        team_name=team.team_name,
        pressure_level=pressure_level,
        must_fill_positions=must_fill,
        slots_remaining=team.slots_remaining,
        average_budget_per_slot=budget_per_slot,
        likely_to_overbid=likely_to_overbid,
        estimated_panic_point=max(0, team.slots_remaining - PANIC_SLOT_BUFFER),
        desperation=desperation,
    )


def analyze_competitive_interest(
    player: Player,
    all_teams: Sequence[TeamInfo],
    affordability_ratio: Optional[float] = None,
) -> CompetitiveInterest:
    """Count competitors able and motivated to bid on *player*.

    A team is interested when it has an open slot the player can fill and
    its budget per open slot reaches ``affordability_ratio`` of the
    player's projected value.
    """
    ratio = INTEREST_AFFORDABILITY_RATIO if affordability_ratio is None else affordability_ratio
    competitors = [t for t in all_teams if not t.is_my_team]

    interested = 0
    for team in competitors:
        if team.slots_remaining <= 0:
            continue
        if (
            team.budget_per_slot >= player.projected_value * ratio
            and has_positional_need(player, team.position_needs)
        ):
            interested += 1

    total_budget = sum(t.remaining_budget for t in competitors)
    total_slots = sum(t.slots_remaining for t in competitors)
    avg_budget_per_slot = total_budget / max(1, total_slots) if competitors else 0.0

    return CompetitiveInterest(
        interested_teams=interested,
        avg_budget_per_slot=avg_budget_per_slot,
        max_competitor_budget=max((t.remaining_budget for t in competitors), default=0),
    )
