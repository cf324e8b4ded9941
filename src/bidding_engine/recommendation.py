"""Bidding recommendation for the player currently up for auction."""

import logging
import math
from typing import Tuple

from src.bidding_engine.config import (
    AGGRESSIVE_BUDGET,
    BLUFF_BID_RATIO,
    BLUFF_RAISE,
    BLUFF_RESERVE,
    HIGH_CONFIDENCE_SCORE,
    LOW_CONFIDENCE_SCORE,
    MAX_BID_BANDS,
    MIN_SCORE_TO_BID,
    PASSIVE_BUDGET,
    SCORE_CAP,
)
from src.bidding_engine.models import (
    BiddingRecommendation,
    BiddingTiming,
    BluffRecommendation,
    ScoreBreakdown,
)
from src.bidding_engine.scoring import calculate_granular_bidding_score
from src.bidding_engine.strategy_fit import calculate_strategy_fit
from src.bidding_engine.threat_assessment import (
    generate_advanced_competition_analysis,
    round_half_up,
)
from src.draft_manager.draft_state import DraftState, Player

logger = logging.getLogger(__name__)


def max_affordable_bid(draft_state: DraftState) -> int:
    """Largest bid that still leaves $1 for every other open slot."""
    roster = draft_state.my_roster
    min_needed = max(1, roster.empty_count() - 1)
    return roster.remaining_budget - min_needed


def lookup_bid_band(score: int) -> Tuple[float, str]:
    """Return ``(multiplier, headline)`` for a score, capped at 100 first."""
    capped = min(SCORE_CAP, score)
    for minimum, multiplier, headline in MAX_BID_BANDS:
        if capped >= minimum:
            return multiplier, headline
    _, multiplier, headline = MAX_BID_BANDS[-1]
    return multiplier, headline


def calculate_bidding_timing(
    player: Player, current_bid: int, draft_state: DraftState
) -> BiddingTiming:
    """How eagerly to bid, and whether to bluff the price up."""
    roster = draft_state.my_roster
    filled = roster.filled_count()
    budget = roster.remaining_budget
    efficiency = player.projected_value / (current_bid + 1)

    aggressiveness = "moderate"
    wait = False

    if filled <= 2:
        if efficiency > 1.2:
            aggressiveness, wait = "moderate", False
        elif efficiency > 1.0:
            aggressiveness, wait = "moderate", True
        else:
            aggressiveness, wait = "passive", True
    elif filled <= 8:
        if player.tier <= 2 and efficiency > 0.9:
            aggressiveness, wait = "aggressive", False
        elif efficiency > 1.1:
            aggressiveness, wait = "moderate", False
    elif draft_state.draft_phase == "late" and efficiency < 1.1:
        aggressiveness, wait = "passive", True

    # Budget overrides
    if budget > AGGRESSIVE_BUDGET and efficiency > 1.0:
        aggressiveness = "aggressive"
    elif budget < PASSIVE_BUDGET:
        aggressiveness, wait = "passive", True

    bluff = None
    if (
        player.tier <= 2
        and player.projected_value > budget
        and draft_state.draft_phase == "early"
        and current_bid < player.projected_value * BLUFF_BID_RATIO
    ):
        bluff = BluffRecommendation(
            should_bluff=True,
            max_bluff_bid=max(0, min(current_bid + BLUFF_RAISE, budget - BLUFF_RESERVE)),
            reasoning="Drive up price on elite player you cannot afford",
        )

    return BiddingTiming(
        should_wait_for_others=wait,
        aggressiveness_level=aggressiveness,
        bluff_recommendation=bluff,
    )


def _cannot_afford(player: Player, draft_state: DraftState) -> BiddingRecommendation:
    roster = draft_state.my_roster
    empty = roster.empty_count()
    min_needed = max(1, empty - 1)
    return BiddingRecommendation(
        should_bid=False,
        max_bid=0,
        reasoning=(f"Cannot afford: need to reserve ${min_needed} for remaining {empty} slots",),
        confidence="high",
        category_impact=player.category_strengths,
        bidding_timing=BiddingTiming(should_wait_for_others=True, aggressiveness_level="passive"),
        strategy_fit=0.0,
        bidding_score=0,
        score_breakdown=ScoreBreakdown(),
    )


def get_bidding_recommendation(
    player: Player, current_bid: int, draft_state: DraftState
) -> BiddingRecommendation:
    """
    Decide whether and how high to bid on *player* at *current_bid*.

    An unaffordable bid short-circuits before any scoring. Otherwise the
    granular score picks a value multiplier, the competition analysis may
    lower the ceiling, and every step contributes reasoning lines.
    """
    max_affordable = max_affordable_bid(draft_state)
    if current_bid >= max_affordable:
        logger.info(
            "Skipping %s at $%d: max affordable is $%d",
            player.name, current_bid, max_affordable,
        )
        return _cannot_afford(player, draft_state)

    granular = calculate_granular_bidding_score(player, current_bid, draft_state)
    score = granular.score

    multiplier, headline = lookup_bid_band(score)
    max_bid = min(math.floor(player.projected_value * multiplier), max_affordable)
    should_bid = max_bid > current_bid and score >= MIN_SCORE_TO_BID

    if score >= HIGH_CONFIDENCE_SCORE:
        confidence = "high"
    elif score < LOW_CONFIDENCE_SCORE:
        confidence = "low"
    else:
        confidence = "medium"

    timing = calculate_bidding_timing(player, current_bid, draft_state)
    strategy_fit = calculate_strategy_fit(
        player, draft_state.selected_strategy, draft_state.roster_analysis
    )

    reasoning = [headline]
    reasoning.extend(granular.reasoning)
    reasoning.append(f"Overall Bidding Score: {score}/100")

    if timing.bluff_recommendation is not None and timing.bluff_recommendation.should_bluff:
        reasoning.append(f"Bluff opportunity: {timing.bluff_recommendation.reasoning}")
    if timing.should_wait_for_others:
        reasoning.append("Wait for others to bid first")
    elif timing.aggressiveness_level == "aggressive":
        reasoning.append("Bid aggressively - don't wait")

    analysis = generate_advanced_competition_analysis(player, draft_state)
    assessment = analysis.threat_assessment
    high_threats = assessment.high_threats()
    if high_threats:
        reasoning.append(f"High competition: {len(high_threats)} teams likely to bid heavily")
        reasoning.append(f"Expected final cost: ${assessment.expected_final_cost}")
        for threat in high_threats[:2]:
            reasoning.append(
                f"{threat.team_name}: {round_half_up(threat.bid_probability * 100)}% likely, "
                f"max ~${threat.max_likely_bid}"
            )
    else:
        reasoning.append("Low competition: good opportunity for value")

    recommendations = analysis.strategic_recommendations
    max_bid = max(0, min(max_bid, recommendations.max_recommended_bid))

    if recommendations.confidence_level < 0.3 and confidence == "high":
        confidence = "medium"
    if recommendations.confidence_level < 0.1 and confidence == "medium":
        confidence = "low"

    logger.info(
        "Recommendation for %s at $%d: bid=%s max=$%d score=%d confidence=%s",
        player.name, current_bid, should_bid, max_bid, score, confidence,
    )

    return BiddingRecommendation(
        should_bid=should_bid,
        max_bid=max_bid,
        reasoning=tuple(reasoning),
        confidence=confidence,
        category_impact=player.category_strengths,
        bidding_timing=timing,
        strategy_fit=strategy_fit,
        bidding_score=score,
        score_breakdown=granular.breakdown,
        advanced_competition_analysis=analysis,
    )
