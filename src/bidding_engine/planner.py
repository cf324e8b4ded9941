"""Nomination planning and budget allocation."""

import logging
import math
from typing import List

from src.bidding_engine.config import (
    BUDGET_SPLITS,
    DEFAULT_BUDGET_SPLIT,
    ELITE_TIER,
    FORCE_SPEND_BUDGET_BUFFER,
    FORCE_SPEND_MAX_ANY_NEED,
    HIGH_SCARCITY,
    TARGET_BUDGET_BUFFER,
)
from src.bidding_engine.models import NominationRecommendation
from src.bidding_engine.opponent_model import has_positional_need
from src.bidding_engine.scarcity import min_positional_scarcity
from src.draft_manager.draft_state import BudgetAllocation, DraftState, Player
from src.draft_manager.roster_validator import get_roster_needs

logger = logging.getLogger(__name__)


def _format_value(value: float) -> str:
    return f"{value:g}"


def get_nomination_recommendations(
    draft_state: DraftState, count: int = 3
) -> List[NominationRecommendation]:
    """
    Suggest players for the operator to nominate.

    Two disjoint pools are drawn from the remaining players:

    * ``target`` - affordable players that fill a need, scarcest first.
    * ``force_spend`` - players the operator cannot afford or does not
      need, most expensive first. Skipped in the late phase.

    The pools are interleaved (target first) and the result has at most
    *count* entries, ordered by priority.
    """
    pool = draft_state.players_remaining
    roster = draft_state.my_roster
    budget = roster.remaining_budget
    needs = get_roster_needs(roster)

    def scarcity(player: Player) -> int:
        return min_positional_scarcity(player, pool, player.tier)

    targets = [
        p for p in pool
        if p.projected_value <= budget - TARGET_BUDGET_BUFFER
        and has_positional_need(p, needs)
    ]
    targets.sort(key=lambda p: (scarcity(p), -p.projected_value))

    force_spend: List[Player] = []
    if draft_state.draft_phase != "late":
        target_ids = {p.player_id for p in targets}
        for player in pool:
            if player.player_id in target_ids:
                continue
            too_expensive = player.projected_value > budget - FORCE_SPEND_BUDGET_BUFFER
            not_needed = (
                not any(needs.get(pos, 0) > 0 for pos in player.positions)
                and needs["any"] <= FORCE_SPEND_MAX_ANY_NEED
            )
            if too_expensive or (not_needed and player.tier <= ELITE_TIER):
                force_spend.append(player)
        force_spend.sort(key=lambda p: -p.projected_value)

        targets = targets[: math.ceil(count / 2)]
        force_spend = force_spend[: count // 2]
    else:
        targets = targets[:count]

    ordered = []
    for index in range(max(len(targets), len(force_spend))):
        if index < len(targets):
            ordered.append(("target", targets[index]))
        if index < len(force_spend):
            ordered.append(("force_spend", force_spend[index]))

    recommendations = []
    for strategy, player in ordered[:count]:
        if strategy == "target":
            reasoning = [
                f"Projected value: ${_format_value(player.projected_value)}",
                f"Fits roster need: {'/'.join(player.positions)}",
            ]
            player_scarcity = scarcity(player)
            if player_scarcity <= HIGH_SCARCITY:
                reasoning.append(
                    f"High scarcity: only {player_scarcity} similar players left"
                )
        else:
            reasoning = [
                f"High projected value: ${_format_value(player.projected_value)}",
                "Force competitors to spend budget",
            ]
            if player.projected_value > budget:
                reasoning.append("Too expensive for my budget")
            else:
                reasoning.append("Does not fill current roster need")

        recommendations.append(
            NominationRecommendation(
                player=player,
                strategy=strategy,
                reasoning=tuple(reasoning),
                priority=len(recommendations) + 1,
            )
        )

    logger.debug(
        "Nomination recommendations: %s",
        [(r.player.name, r.strategy) for r in recommendations],
    )
    return recommendations


def calculate_budget_allocation(draft_state: DraftState) -> BudgetAllocation:
    """Phase targets and star reserve from the selected archetype."""
    roster = draft_state.my_roster
    budget = roster.remaining_budget
    strategy = draft_state.selected_strategy

    star, early, middle, late = BUDGET_SPLITS.get(strategy, DEFAULT_BUDGET_SPLIT)
    early_target = math.floor(budget * early)
    middle_target = math.floor(budget * middle)
    late_target = math.floor(budget * late)

    reserve = budget - early_target - middle_target - late_target
    return BudgetAllocation(
        early_phase_target=early_target,
        middle_phase_target=middle_target,
        late_phase_target=late_target,
        star_player_budget=math.floor(budget * star),
        reasoning=(
            f"Strategy: {strategy.replace('_', ' ')}",
            f"{roster.empty_count()} slots remaining",
            f"Reserve ${reserve} for flexibility",
        ),
    )
