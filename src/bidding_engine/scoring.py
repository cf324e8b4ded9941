"""Granular bidding score - five capped sub-scores plus a timing bonus.

Sub-score caps:
    roster fit          0-25
    remaining players   0-20
    budget situation    0-20
    value efficiency    0-20
    punt strategy       0-15
"""

import logging
from typing import List, Optional, Sequence

from src.bidding_engine.config import DEFAULT_AVERAGE_TIER, TIMING_BONUS
from src.bidding_engine.models import GranularScore, NominationTiming, ScoreBreakdown
from src.bidding_engine.opponent_model import analyze_competitive_interest
from src.bidding_engine.scarcity import remaining_players_score
from src.bidding_engine.strategy_fit import calculate_punt_strategy_score
from src.draft_manager.draft_state import (
    DraftedPlayer,
    DraftState,
    MyRoster,
    Player,
    RosterAnalysis,
    TeamBudgetInfo,
    TeamInfo,
)
from src.draft_manager.roster_validator import get_roster_needs

logger = logging.getLogger(__name__)


def analyze_nomination_timing(
    player: Player, draft_phase: str, drafted: Sequence[DraftedPlayer]
) -> NominationTiming:
    """Flag a player noticeably better than what has gone so far."""
    if drafted:
        avg_tier = sum(p.tier for p in drafted) / len(drafted)
    else:
        avg_tier = DEFAULT_AVERAGE_TIER

    is_early = player.tier < avg_tier - 0.5

    if is_early and draft_phase == "early":
        reasoning = f"Elite player (Tier {player.tier}) available early - rare opportunity"
    elif is_early and draft_phase == "middle":
        reasoning = f"High-tier player (Tier {player.tier}) still available mid-draft - excellent opportunity"
    elif is_early and draft_phase == "late":
        reasoning = f"Premium player (Tier {player.tier}) available late - exceptional opportunity"
    elif player.tier <= 2:
        reasoning = f"Elite player (Tier {player.tier}) - always valuable regardless of timing"
    elif draft_phase == "late" and player.tier <= 4:
        reasoning = f"Solid player (Tier {player.tier}) in late phase - good opportunity"
    else:
        reasoning = f"Player (Tier {player.tier}) nominated at expected time"

    return NominationTiming(is_early_opportunity=is_early, reasoning=reasoning)


def calculate_roster_fit_score(
    player: Player, roster: MyRoster, roster_analysis: RosterAnalysis
) -> int:
    """Roster fit sub-score (0-25)."""
    needs = get_roster_needs(roster)
    filled = roster.filled_count()
    empty = roster.empty_count()
    score = 0

    if filled == 0:
        score = 15
        if player.tier <= 2:
            score += 5
        if player.is_multi_positional:
            score += 3
        return min(25, score)
    if filled <= 2:
        score += 12
        if player.tier <= 3:
            score += 3

    # Positional need
    positional_need = any(needs.get(pos, 0) > 0 for pos in player.positions)
    if positional_need:
        max_need = max(needs.get(pos, 0) for pos in player.positions)
        score += min(10, max_need * 3)
    elif needs["any"] > 0:
        score += 3

    # Category need
    impact = player.category_strengths
    if filled >= 3:
        category_score = 0
        for cat, strength in roster_analysis.category_needs.items():
            value = impact.get(cat)
            if strength == "weak" and value > 0.5:
                category_score += 2
            elif strength == "weak" and value > 0:
                category_score += 1
            elif strength == "strong" and value < -0.5:
                category_score -= 1
        score += max(0, min(10, category_score))
    else:
        positive = sum(v for v in impact.values() if v > 0)
        score += min(8, int(positive * 2))

    # Flexibility and urgency
    if player.is_multi_positional:
        score += 2
    if empty <= 3 and positional_need:
        score += 3
    elif empty <= 6 and positional_need:
        score += 1

    return min(25, score)


def calculate_budget_score(
    player: Player,
    current_bid: int,
    roster: MyRoster,
    other_teams_budgets: Sequence[TeamBudgetInfo] = (),
    all_teams: Optional[Sequence[TeamInfo]] = None,
) -> int:
    """Budget situation sub-score (0-20).

    With full team data the competitive part counts interested teams and
    compares budget per slot; otherwise it falls back to the legacy
    per-team budget summaries.
    """
    score = 0
    budget = roster.remaining_budget
    empty = roster.empty_count()
    next_bid = current_bid + 1

    # Budget health
    ratio = (budget - next_bid) / max(1, empty)
    if ratio > 15:
        score += 8
    elif ratio > 10:
        score += 6
    elif ratio > 5:
        score += 4
    elif ratio > 2:
        score += 2

    # Affordability vs value
    value = player.projected_value
    if next_bid <= value * 0.7:
        score += 7
    elif next_bid <= value * 0.8:
        score += 5
    elif next_bid <= value * 0.9:
        score += 3
    elif next_bid <= value:
        score += 1

    my_budget_per_slot = budget / max(1, empty)
    if all_teams:
        interest = analyze_competitive_interest(player, all_teams)
        if interest.interested_teams == 0:
            score += 5
        elif interest.interested_teams <= 2:
            score += 3
        elif interest.interested_teams <= 4:
            score += 1

        if interest.avg_budget_per_slot > 0:
            advantage = my_budget_per_slot / interest.avg_budget_per_slot
            if advantage > 1.5:
                score += 2
            elif advantage > 1.2:
                score += 1
    elif other_teams_budgets:
        ratios = [
            t.remaining_budget / t.slots_remaining
            for t in other_teams_budgets
            if t.slots_remaining > 0
        ]
        if ratios:
            avg_competitor = sum(ratios) / len(ratios)
            if my_budget_per_slot > avg_competitor * 1.5:
                score += 5
            elif my_budget_per_slot > avg_competitor * 1.2:
                score += 3
            elif my_budget_per_slot > avg_competitor:
                score += 1

    return min(20, score)


def calculate_value_efficiency_score(
    player: Player, current_bid: int, draft_phase: str
) -> int:
    """Value efficiency sub-score (0-20), efficiency = value / next bid."""
    efficiency = player.projected_value / (current_bid + 1)
    tier = player.tier
    score = 0

    if efficiency >= 1.5:
        score += 12
    elif efficiency >= 1.3:
        score += 10
    elif efficiency >= 1.15:
        score += 8
    elif efficiency >= 1.0:
        score += 6
    elif efficiency >= 0.9:
        score += 4
    elif efficiency >= 0.8:
        score += 2

    # Tier premium
    if tier == 1 and efficiency > 1.0:
        score += 4
    elif tier == 2 and efficiency > 1.1:
        score += 3
    elif tier <= 3 and efficiency > 1.2:
        score += 2
    elif efficiency > 1.3:
        score += 1

    # Opportunity
    if tier <= 2 and efficiency > 1.0:
        score += 4
    elif tier <= 3 and efficiency > 1.15:
        score += 3
    elif draft_phase == "late" and efficiency > 1.2:
        score += 4
    elif efficiency > 1.25:
        score += 2

    return min(20, score)


def _interest_note(interested: int) -> str:
    if interested == 0:
        return "No other teams interested - great opportunity"
    if interested <= 2:
        return f"Light competition: {interested} teams interested"
    if interested <= 4:
        return f"Moderate competition: {interested} teams interested"
    return f"Heavy competition: {interested} teams interested"


def _label(value: int, cap: int, bands, fallback: str) -> str:
    for minimum, text in bands:
        if value >= minimum:
            return f"{text} ({value}/{cap})"
    return f"{fallback} ({value}/{cap})"


def describe_breakdown(breakdown: ScoreBreakdown) -> List[str]:
    """Qualitative label for each sub-score."""
    return [
        _label(breakdown.roster_fit, 25,
               ((20, "Excellent roster fit"), (15, "Good roster fit"), (10, "Moderate roster fit")),
               "Poor roster fit"),
        _label(breakdown.remaining_players_value, 20,
               ((15, "High scarcity value"), (10, "Good scarcity value")),
               "Limited scarcity"),
        _label(breakdown.budget_situation, 20,
               ((15, "Excellent budget situation"), (10, "Good budget situation")),
               "Budget concerns"),
        _label(breakdown.value_efficiency, 20,
               ((15, "Outstanding value"), (10, "Good value")),
               "Below expected value"),
        _label(breakdown.punt_strategy, 15,
               ((12, "Perfect strategy fit"), (8, "Good strategy fit")),
               "Strategy concerns"),
    ]


def calculate_granular_bidding_score(
    player: Player, current_bid: int, draft_state: DraftState
) -> GranularScore:
    """Score a nomination from 0 to 100, or up to 105 with the timing bonus.

    The reported score is the raw sum; callers cap it where they need to.
    """
    roster = draft_state.my_roster
    timing = analyze_nomination_timing(
        player, draft_state.draft_phase, draft_state.players_drafted
    )
    reasoning = [timing.reasoning]

    breakdown = ScoreBreakdown(
        roster_fit=calculate_roster_fit_score(player, roster, draft_state.roster_analysis),
        remaining_players_value=remaining_players_score(player, draft_state.players_remaining),
        budget_situation=calculate_budget_score(
            player,
            current_bid,
            roster,
            draft_state.other_teams_budgets,
            draft_state.all_teams,
        ),
        value_efficiency=calculate_value_efficiency_score(
            player, current_bid, draft_state.draft_phase
        ),
        punt_strategy=calculate_punt_strategy_score(
            player, roster, draft_state.selected_strategy, draft_state.roster_analysis
        ),
    )

    timing_bonus = TIMING_BONUS if timing.is_early_opportunity else 0
    if timing_bonus:
        reasoning.append(f"+{timing_bonus} bonus points for exceptional timing opportunity")

    if draft_state.all_teams:
        interest = analyze_competitive_interest(player, draft_state.all_teams)
        reasoning.append(_interest_note(interest.interested_teams))
        if interest.max_competitor_budget > 0:
            if roster.remaining_budget > interest.max_competitor_budget:
                reasoning.append("Budget advantage: you have more than any competitor")
            elif roster.remaining_budget < interest.max_competitor_budget * 0.8:
                reasoning.append("Budget disadvantage: competitors have significantly more")

    reasoning.extend(describe_breakdown(breakdown))

    score = breakdown.total + timing_bonus
    logger.debug(
        "Score for %s at $%d: %d (%s)", player.name, current_bid, score, breakdown
    )
    return GranularScore(
        score=score,
        breakdown=breakdown,
        timing_bonus=timing_bonus,
        reasoning=tuple(reasoning),
    )
