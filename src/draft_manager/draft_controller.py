"""Draft controller - event transitions and the stateful wrapper around them.

Each transition is a pure function ``DraftState -> DraftState``: it validates
the event, builds new TeamInfo / MyRoster records and rebuilds every derived
field. The input snapshot is never modified.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from src.bidding_engine.categories import generate_roster_analysis
from src.bidding_engine.models import (
    AdvancedCompetitionAnalysis,
    BiddingRecommendation,
    NominationRecommendation,
)
from src.bidding_engine.planner import (
    calculate_budget_allocation,
    get_nomination_recommendations,
)
from src.bidding_engine.recommendation import get_bidding_recommendation
from src.bidding_engine.threat_assessment import generate_advanced_competition_analysis
from src.draft_manager.draft_rules import DraftRules, ValidationError
from src.draft_manager.draft_state import (
    BudgetAllocation,
    DraftedPlayer,
    DraftState,
    Nomination,
    Player,
    get_draft_phase,
)
from src.draft_manager.roster_validator import RosterValidator
from src.draft_manager.team_tracker import (
    to_budget_info,
    undo_team_draft,
    update_team_after_draft,
)

logger = logging.getLogger(__name__)

EMPTY_ALLOCATION = BudgetAllocation(
    early_phase_target=0,
    middle_phase_target=0,
    late_phase_target=0,
    star_player_budget=0,
)


def rebuild_state(draft_state: DraftState) -> DraftState:
    """Recompute every derived field of a snapshot from its core fields."""
    state = replace(
        draft_state,
        draft_phase=get_draft_phase(
            len(draft_state.players_drafted), draft_state.total_picks
        ),
        roster_analysis=generate_roster_analysis(
            draft_state.my_roster, draft_state.selected_strategy
        ),
        other_teams_budgets=tuple(
            to_budget_info(t) for t in draft_state.all_teams if not t.is_my_team
        ),
    )
    return replace(state, budget_allocation=calculate_budget_allocation(state))


def _reject(message: str) -> None:
    logger.warning("Invalid draft event: %s", message)
    raise ValidationError(message)


def nominate(
    draft_state: DraftState, player_id: str, starting_bid: int, nominated_by: str
) -> DraftState:
    """Put a remaining player up for auction."""
    is_valid, error_msg = DraftRules(draft_state).validate_nomination(
        player_id, starting_bid, nominated_by
    )
    if not is_valid:
        _reject(error_msg)

    player = draft_state.find_remaining_player(player_id)
    logger.info(
        "%s nominates %s at $%d", nominated_by, player.name, starting_bid
    )
    return replace(
        draft_state,
        current_nomination=Nomination(
            player=player, current_bid=starting_bid, nominated_by=nominated_by
        ),
    )


def update_bid(draft_state: DraftState, new_bid: int) -> DraftState:
    """Raise the bid on the current nomination."""
    nomination = draft_state.current_nomination
    if nomination is None:
        _reject("No player is currently nominated")
    if new_bid < nomination.current_bid:
        _reject(
            f"Bid ${new_bid} is below the current bid ${nomination.current_bid}"
        )
    return replace(draft_state, current_nomination=replace(nomination, current_bid=new_bid))


def finalize_draft(
    draft_state: DraftState, player_id: str, final_price: int, winning_team: str
) -> DraftState:
    """
    Award a player to a team.

    Raises:
        ValidationError: If the player is not in the remaining pool, the
            team is unknown or full, or the price is not payable.
        NoEligibleSlotError: If the operator wins a player no empty slot
            on their roster accepts.
    """
    rules = DraftRules(draft_state)
    if rules.is_draft_complete():
        _reject("Draft is already complete")

    is_valid, error_msg = rules.validate_pick(player_id, final_price, winning_team)
    if not is_valid:
        _reject(error_msg)

    player = draft_state.find_remaining_player(player_id)
    team = draft_state.get_team(winning_team)
    drafted = DraftedPlayer.from_player(
        player,
        drafted_by=winning_team,
        actual_cost=final_price,
        draft_order=len(draft_state.players_drafted) + 1,
    )

    my_roster = draft_state.my_roster
    if team.is_my_team:
        my_roster = RosterValidator().add_player(my_roster, drafted)

    new_state = replace(
        draft_state,
        players_remaining=tuple(
            p for p in draft_state.players_remaining if p.player_id != player_id
        ),
        players_drafted=draft_state.players_drafted + (drafted,),
        my_roster=my_roster,
        all_teams=tuple(
            update_team_after_draft(t, drafted) if t.team_name == winning_team else t
            for t in draft_state.all_teams
        ),
        current_nomination=None,
    )

    logger.info(
        "Pick %d: %s wins %s (%s) for $%d",
        drafted.draft_order,
        winning_team,
        drafted.name,
        "/".join(drafted.positions),
        final_price,
    )
    return rebuild_state(new_state)


def undo_last_pick(draft_state: DraftState) -> DraftState:
    """Reverse the most recent pick and return the player to the pool."""
    if not draft_state.players_drafted:
        _reject("No picks to undo")

    last = draft_state.players_drafted[-1]
    team = draft_state.get_team(last.drafted_by)

    my_roster = draft_state.my_roster
    if team is not None and team.is_my_team:
        my_roster = RosterValidator().remove_player(my_roster, last.player_id)

    new_state = replace(
        draft_state,
        players_remaining=draft_state.players_remaining + (last.to_player(),),
        players_drafted=draft_state.players_drafted[:-1],
        my_roster=my_roster,
        all_teams=tuple(
            undo_team_draft(t, last) if t.team_name == last.drafted_by else t
            for t in draft_state.all_teams
        ),
        current_nomination=None,
    )

    logger.info(
        "Undid pick %d: %s returned from %s ($%d refunded)",
        last.draft_order, last.name, last.drafted_by, last.actual_cost,
    )
    return rebuild_state(new_state)


def change_strategy(draft_state: DraftState, strategy: str) -> DraftState:
    """Switch the operator's roster archetype."""
    is_valid, error_msg = DraftRules.validate_strategy(strategy)
    if not is_valid:
        _reject(error_msg)

    logger.info(
        "Strategy changed: %s -> %s", draft_state.selected_strategy, strategy
    )
    return rebuild_state(replace(draft_state, selected_strategy=strategy))


class DraftController:
    """Holds the current snapshot and applies draft events to it.

    Every event replaces ``draft_state`` with the new snapshot returned by
    the matching transition; a rejected event leaves it untouched.
    """

    def __init__(self, draft_state: DraftState):
        self.draft_state = draft_state
        self.validator = RosterValidator()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def nominate(self, player_id: str, starting_bid: int, nominated_by: str) -> Nomination:
        self.draft_state = nominate(self.draft_state, player_id, starting_bid, nominated_by)
        return self.draft_state.current_nomination

    def update_bid(self, new_bid: int) -> Nomination:
        self.draft_state = update_bid(self.draft_state, new_bid)
        return self.draft_state.current_nomination

    def finalize_draft(
        self, player_id: str, final_price: int, winning_team: str
    ) -> DraftedPlayer:
        """Validate and record a completed auction.

        Returns:
            The DraftedPlayer record.

        Raises:
            ValidationError: If the pick is illegal.
        """
        self.draft_state = finalize_draft(
            self.draft_state, player_id, final_price, winning_team
        )
        return self.draft_state.players_drafted[-1]

    def undo_last_pick(self) -> DraftedPlayer:
        last = self.draft_state.players_drafted[-1] if self.draft_state.players_drafted else None
        self.draft_state = undo_last_pick(self.draft_state)
        return last

    def change_strategy(self, strategy: str) -> None:
        self.draft_state = change_strategy(self.draft_state, strategy)

    @property
    def is_complete(self) -> bool:
        """Whether every roster in the league is full."""
        return DraftRules(self.draft_state).is_draft_complete()

    # ------------------------------------------------------------------
    # Engine entry points
    # ------------------------------------------------------------------
    def _require_player(self, player_id: str) -> Player:
        player = self.draft_state.find_remaining_player(player_id)
        if player is None:
            raise ValidationError(f"Player {player_id} is not in the remaining pool")
        return player

    def get_bidding_recommendation(
        self, player_id: Optional[str] = None, current_bid: Optional[int] = None
    ) -> BiddingRecommendation:
        """Recommendation for a player, defaulting to the current nomination."""
        nomination = self.draft_state.current_nomination
        if player_id is None:
            if nomination is None:
                raise ValidationError("No player is currently nominated")
            player = nomination.player
        else:
            player = self._require_player(player_id)

        if current_bid is None:
            if nomination is None or nomination.player.player_id != player.player_id:
                raise ValidationError(f"No current bid for {player.name}")
            current_bid = nomination.current_bid

        return get_bidding_recommendation(player, current_bid, self.draft_state)

    def get_nomination_recommendations(self, count: int = 3) -> List[NominationRecommendation]:
        return get_nomination_recommendations(self.draft_state, count)

    def get_budget_allocation(self) -> BudgetAllocation:
        return calculate_budget_allocation(self.draft_state)

    def get_competition_analysis(self, player_id: str) -> AdvancedCompetitionAnalysis:
        return generate_advanced_competition_analysis(
            self._require_player(player_id), self.draft_state
        )

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------
    def get_my_roster_summary(self) -> Dict[str, Dict[str, int]]:
        return self.validator.get_roster_summary(self.draft_state.my_roster)

    def get_league_summary(self) -> Dict:
        """Per-team budget and roster overview, operator first."""
        teams = sorted(self.draft_state.all_teams, key=lambda t: not t.is_my_team)
        return {
            "draft_phase": self.draft_state.draft_phase,
            "picks_made": len(self.draft_state.players_drafted),
            "total_picks": self.draft_state.total_picks,
            "selected_strategy": self.draft_state.selected_strategy,
            "teams": [
                {
                    "team_name": team.team_name,
                    "is_my_team": team.is_my_team,
                    "remaining_budget": team.remaining_budget,
                    "total_spent": team.total_spent,
                    "slots_remaining": team.slots_remaining,
                    "budget_per_slot": round(team.budget_per_slot, 1),
                    "players": [p.name for p in team.players_owned],
                }
                for team in teams
            ],
        }
