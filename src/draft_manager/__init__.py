from src.draft_manager.draft_rules import DraftRules, NoEligibleSlotError, ValidationError
from src.draft_manager.draft_state import (
    CategoryImpact,
    DraftedPlayer,
    DraftState,
    MyRoster,
    Player,
    TeamInfo,
)
from src.draft_manager.roster_validator import RosterValidator

# DraftController and DraftInitializer depend on the bidding engine, which
# itself imports this package; import them from their modules directly.

__all__ = [
    "CategoryImpact",
    "DraftRules",
    "DraftState",
    "DraftedPlayer",
    "MyRoster",
    "NoEligibleSlotError",
    "Player",
    "RosterValidator",
    "TeamInfo",
    "ValidationError",
]
