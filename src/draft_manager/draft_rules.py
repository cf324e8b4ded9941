"""Draft rule enforcement and event validation."""

from typing import Optional, Tuple

from src.draft_manager.config import VALID_STRATEGIES
from src.draft_manager.draft_state import DraftState


class ValidationError(Exception):
    """Raised when a draft event violates draft rules."""

    pass


class NoEligibleSlotError(ValidationError):
    """Raised when a drafted player fits no empty slot on the operator's roster."""

    pass


class DraftRules:
    """Validates draft events against the current snapshot."""

    def __init__(self, draft_state: DraftState):
        self.draft_state = draft_state

    def validate_nomination(
        self, player_id: str, starting_bid: int, nominated_by: str
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate a nomination.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        if not self.draft_state.is_player_available(player_id):
            return False, f"Player {player_id} is not in the remaining pool"

        if self.draft_state.get_team(nominated_by) is None:
            return False, f"Unknown team '{nominated_by}'"

        if starting_bid < 1:
            return False, f"Starting bid must be at least $1 (got {starting_bid})"

        return True, None

    def validate_pick(
        self, player_id: str, final_price: int, winning_team: str
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate that a nomination can be finalized.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        # Check 1: Is the player still available?
        if not self.draft_state.is_player_available(player_id):
            drafted = [
                p for p in self.draft_state.players_drafted
                if p.player_id == player_id
            ]
            if drafted:
                return (
                    False,
                    f"{drafted[0].name} has already been drafted "
                    f"by {drafted[0].drafted_by}",
                )
            return False, f"Player {player_id} not found in player pool"

        # Check 2: Does the team exist?
        team = self.draft_state.get_team(winning_team)
        if team is None:
            return False, f"Unknown team '{winning_team}'"

        # Check 3: Roster space
        if team.slots_remaining <= 0:
            return False, f"{winning_team} has no open roster slots"

        # Check 4: Price
        if final_price < 0:
            return False, f"Price cannot be negative (got {final_price})"
        if final_price > team.remaining_budget:
            return False, (
                f"{winning_team} cannot pay ${final_price} "
                f"(remaining budget ${team.remaining_budget})"
            )

        return True, None

    @staticmethod
    def validate_strategy(strategy: str) -> Tuple[bool, Optional[str]]:
        if strategy not in VALID_STRATEGIES:
            return False, (
                f"Invalid strategy '{strategy}'. "
                f"Must be one of: {', '.join(VALID_STRATEGIES)}"
            )
        return True, None

    def is_draft_complete(self) -> bool:
        """Check if every roster in the league is full."""
        return len(self.draft_state.players_drafted) >= self.draft_state.total_picks
