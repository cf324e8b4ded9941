"""Positional and tier scarcity of the remaining player pool."""

from typing import Sequence

from src.bidding_engine.config import (
    EARLY_POOL_SIZE,
    ELITE_TIER,
    REMAINING_PLAYERS_CAP,
    TIER_QUALITY_DEFAULT,
    TIER_QUALITY_POINTS,
)
from src.draft_manager.draft_state import Player


def positional_scarcity(
    position: str, pool: Sequence[Player], tier_ceiling: int
) -> int:
    """Remaining players eligible at *position* with tier <= *tier_ceiling*.

    Lower is scarcer.
    """
    return sum(
        1 for p in pool if p.has_position(position) and p.tier <= tier_ceiling
    )


def min_positional_scarcity(
    player: Player, pool: Sequence[Player], tier_ceiling: int
) -> int:
    """Scarcity of the player's scarcest eligible position."""
    return min(
        positional_scarcity(pos, pool, tier_ceiling) for pos in player.positions
    )


def remaining_players_score(player: Player, pool: Sequence[Player]) -> int:
    """Score (0-20) how much the remaining pool makes *player* worth buying.

    With a large pool (early draft) scarcity signals are noisy, so the
    player's own tier dominates. Once the pool thins, real positional and
    tier scarcity take over.
    """
    if len(pool) > EARLY_POOL_SIZE:
        score = _tier_quality_score(player, pool)
    else:
        score = _scarcity_score(player, pool)
    return min(REMAINING_PLAYERS_CAP, score)


def _tier_quality_score(player: Player, pool: Sequence[Player]) -> int:
    score = TIER_QUALITY_POINTS.get(player.tier, TIER_QUALITY_DEFAULT)

    same_tier = [p for p in pool if p.tier == player.tier]
    tier_supply = len(same_tier)
    if player.tier <= ELITE_TIER and tier_supply <= 10:
        score += 5
    elif player.tier <= 3 and tier_supply <= 15:
        score += 3
    elif tier_supply <= 20:
        score += 1

    # Best in tier
    better_in_tier = sum(
        1 for p in same_tier if p.projected_value > player.projected_value
    )
    if better_in_tier == 0:
        score += 5
    elif better_in_tier <= 2:
        score += 3
    elif better_in_tier <= 5:
        score += 1

    return score


def _scarcity_score(player: Player, pool: Sequence[Player]) -> int:
    score = 0

    # Includes players one tier below as reasonable substitutes
    min_scarcity = min_positional_scarcity(player, pool, player.tier + 1)
    if min_scarcity <= 2:
        score += 10
    elif min_scarcity <= 4:
        score += 7
    elif min_scarcity <= 8:
        score += 4
    elif min_scarcity <= 15:
        score += 2

    tier_supply = sum(1 for p in pool if p.tier == player.tier)
    if tier_supply <= 3:
        score += 5
    elif tier_supply <= 6:
        score += 3
    elif tier_supply <= 10:
        score += 1

    # Quality drop-off
    better_alternatives = sum(
        1
        for p in pool
        if p.projected_value > player.projected_value
        and any(pos in player.positions for pos in p.positions)
    )
    if better_alternatives == 0:
        score += 5
    elif better_alternatives <= 2:
        score += 3
    elif better_alternatives <= 5:
        score += 1

    return score
