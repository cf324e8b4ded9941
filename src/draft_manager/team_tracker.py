"""League-wide team tracking.

A TeamInfo's derived fields (slots remaining, positional needs, category
strengths, average price) are always rebuilt from ``players_owned``.
"""

import logging
from typing import Dict, List, Sequence

from src.bidding_engine.categories import sum_category_impacts
from src.draft_manager.config import (
    BASE_TEAM_POSITION_NEEDS,
    DEFAULT_TOTAL_BUDGET,
    ROSTER_SIZE,
)
from src.draft_manager.draft_state import DraftedPlayer, TeamBudgetInfo, TeamInfo

logger = logging.getLogger(__name__)


def calculate_team_position_needs(
    players_owned: Sequence[DraftedPlayer],
) -> Dict[str, int]:
    """Open positional needs for a team owning *players_owned*.

    Each owned player decrements every base position it is eligible for;
    ``any`` is the number of open roster slots.
    """
    needs = dict(BASE_TEAM_POSITION_NEEDS)

    for player in players_owned:
        for pos in player.positions:
            if needs.get(pos, 0) > 0:
                needs[pos] -= 1

    needs["any"] = max(0, ROSTER_SIZE - len(players_owned))
    return needs


def build_team_info(
    team_name: str,
    total_budget: int,
    players_owned: Sequence[DraftedPlayer],
    is_my_team: bool,
) -> TeamInfo:
    """Construct a TeamInfo with every derived field computed from scratch."""
    owned = tuple(players_owned)
    total_spent = sum(p.actual_cost for p in owned)

    return TeamInfo(
        team_name=team_name,
        remaining_budget=total_budget - total_spent,
        total_spent=total_spent,
        players_owned=owned,
        slots_remaining=ROSTER_SIZE - len(owned),
        position_needs=calculate_team_position_needs(owned),
        category_strengths=sum_category_impacts(owned),
        average_player_value=total_spent / len(owned) if owned else 0.0,
        is_my_team=is_my_team,
    )


def initialize_all_teams(
    team_names: Sequence[str],
    my_team_name: str,
    total_budget: int = DEFAULT_TOTAL_BUDGET,
) -> List[TeamInfo]:
    """Create empty TeamInfo records; exactly one is flagged as the operator's."""
    if my_team_name not in team_names:
        raise ValueError(f"Operator team '{my_team_name}' is not in team_names")

    return [
        build_team_info(name, total_budget, (), is_my_team=(name == my_team_name))
        for name in team_names
    ]


def update_team_after_draft(team: TeamInfo, drafted: DraftedPlayer) -> TeamInfo:
    """Return a new TeamInfo with *drafted* added."""
    total_budget = team.remaining_budget + team.total_spent
    return build_team_info(
        team.team_name,
        total_budget,
        team.players_owned + (drafted,),
        team.is_my_team,
    )


def undo_team_draft(team: TeamInfo, removed: DraftedPlayer) -> TeamInfo:
    """Return a new TeamInfo with *removed* taken off the roster."""
    total_budget = team.remaining_budget + team.total_spent
    remaining = tuple(
        p for p in team.players_owned if p.player_id != removed.player_id
    )
    if len(remaining) == len(team.players_owned):
        logger.warning(
            "Undo for %s: player %s was not on the roster",
            team.team_name, removed.player_id,
        )
    return build_team_info(team.team_name, total_budget, remaining, team.is_my_team)


def to_budget_info(team: TeamInfo) -> TeamBudgetInfo:
    """Legacy budget summary for a team."""
    return TeamBudgetInfo(
        team_name=team.team_name,
        remaining_budget=team.remaining_budget,
        players_owned=len(team.players_owned),
        slots_remaining=team.slots_remaining,
    )
