"""Draft initialization - creates the opening snapshot from the player catalog."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from src.data_pipeline.run_update import load_players
from src.draft_manager.config import (
    DEFAULT_STRATEGY,
    DEFAULT_TEAM_COUNT,
    DEFAULT_TOTAL_BUDGET,
    PROCESSED_DATA_DIR,
    ROSTER_SIZE,
)
from src.draft_manager.draft_controller import EMPTY_ALLOCATION, rebuild_state
from src.draft_manager.draft_rules import DraftRules
from src.draft_manager.draft_state import DraftState, Player
from src.draft_manager.roster_validator import RosterValidator
from src.draft_manager.team_tracker import initialize_all_teams

logger = logging.getLogger(__name__)


class DraftInitializer:
    """Handles creation of new auction drafts."""

    MIN_TEAMS = 2
    MAX_TEAMS = 20

    def __init__(self, processed_data_dir: Optional[Path] = None):
        self.processed_data_dir = processed_data_dir or PROCESSED_DATA_DIR

    def create_draft(
        self,
        team_names: Sequence[str],
        my_team_name: str,
        total_budget: int = DEFAULT_TOTAL_BUDGET,
        strategy: str = DEFAULT_STRATEGY,
        players: Optional[Sequence[Player]] = None,
        data_year: Optional[int] = None,
    ) -> DraftState:
        """
        Create a new draft snapshot.

        Args:
            team_names: Every team in the league, operator included.
            my_team_name: The operator's team; flagged once here.
            total_budget: Auction budget per team.
            strategy: Initial roster archetype.
            players: Player catalog. Loaded from processed data when omitted.
            data_year: Season file to load (``players_latest.json`` if None).

        Returns:
            DraftState ready for the first nomination.

        Raises:
            ValueError: On invalid configuration.
            FileNotFoundError: If the catalog has not been generated.
        """
        self._validate_inputs(team_names, my_team_name, total_budget, strategy)

        if players is None:
            players = self._load_player_data(data_year)
        if not players:
            raise ValueError("Player catalog is empty")

        roster = RosterValidator().initialize_roster(total_budget)
        teams = initialize_all_teams(team_names, my_team_name, total_budget)

        draft_state = rebuild_state(
            DraftState(
                total_budget=total_budget,
                players_remaining=tuple(players),
                players_drafted=(),
                my_roster=roster,
                draft_phase="early",
                total_teams=len(team_names),
                selected_strategy=strategy,
                roster_analysis=None,
                budget_allocation=EMPTY_ALLOCATION,
                all_teams=tuple(teams),
            )
        )

        logger.info(
            "Created draft: %d teams, $%d budget, %s strategy, %d players available",
            len(team_names),
            total_budget,
            strategy,
            len(draft_state.players_remaining),
        )
        return draft_state

    def _validate_inputs(
        self,
        team_names: Sequence[str],
        my_team_name: str,
        total_budget: int,
        strategy: str,
    ):
        """Validate draft configuration inputs."""
        if not self.MIN_TEAMS <= len(team_names) <= self.MAX_TEAMS:
            raise ValueError(
                f"League must have between {self.MIN_TEAMS} and "
                f"{self.MAX_TEAMS} teams (got {len(team_names)})"
            )

        if len(set(team_names)) != len(team_names):
            raise ValueError("Team names must be unique")

        if my_team_name not in team_names:
            raise ValueError(f"Operator team '{my_team_name}' is not in team_names")

        if total_budget < ROSTER_SIZE:
            raise ValueError(
                f"Budget ${total_budget} cannot fill {ROSTER_SIZE} roster slots"
            )

        is_valid, error_msg = DraftRules.validate_strategy(strategy)
        if not is_valid:
            raise ValueError(error_msg)

    def _load_player_data(self, data_year: Optional[int]) -> List[Player]:
        """Load the processed player catalog."""
        if data_year is None:
            catalog_file = self.processed_data_dir / "players_latest.json"
        else:
            catalog_file = self.processed_data_dir / f"players_{data_year}.json"

        if not catalog_file.exists():
            raise FileNotFoundError(
                f"No player catalog found at {catalog_file}. "
                "Run data pipeline first: "
                "python -m src.data_pipeline.run_update <csv_path>"
            )

        return load_players(catalog_file)

    @staticmethod
    def get_default_team_names(my_team_name: str = "My Team") -> List[str]:
        """Operator team plus numbered opponents for a default league."""
        return [my_team_name] + [
            f"Team {i}" for i in range(2, DEFAULT_TEAM_COUNT + 1)
        ]
