"""Tests for draft rules - nomination, pick and strategy validation."""

import pytest

from conftest import MY_TEAM, draft_players
from src.draft_manager.draft_rules import DraftRules


# ── Nomination ───────────────────────────────────────────────────────

class TestValidateNomination:
    def test_valid(self, state):
        assert DraftRules(state).validate_nomination("p000", 1, "Team 2") == (True, None)

    def test_unknown_player(self, state):
        is_valid, error = DraftRules(state).validate_nomination("nobody", 1, "Team 2")
        assert not is_valid
        assert "not in the remaining pool" in error

    def test_unknown_team(self, state):
        is_valid, error = DraftRules(state).validate_nomination("p000", 1, "Team 99")
        assert not is_valid
        assert "Unknown team" in error

    def test_zero_starting_bid(self, state):
        is_valid, error = DraftRules(state).validate_nomination("p000", 0, MY_TEAM)
        assert not is_valid
        assert "at least $1" in error


# ── Pick ─────────────────────────────────────────────────────────────

class TestValidatePick:
    def test_valid(self, state):
        assert DraftRules(state).validate_pick("p000", 55, "Team 3") == (True, None)

    def test_already_drafted(self, state):
        state = draft_players(state, "Team 2", [("p000", 50)])
        is_valid, error = DraftRules(state).validate_pick("p000", 50, "Team 3")
        assert not is_valid
        assert error == "Player p000 has already been drafted by Team 2"

    def test_player_not_found(self, state):
        is_valid, error = DraftRules(state).validate_pick("ghost", 5, "Team 3")
        assert not is_valid
        assert "not found" in error

    def test_unknown_team(self, state):
        is_valid, error = DraftRules(state).validate_pick("p000", 5, "Nobody")
        assert not is_valid
        assert "Unknown team" in error

    def test_over_budget(self, state):
        is_valid, error = DraftRules(state).validate_pick("p000", 201, "Team 2")
        assert not is_valid
        assert "cannot pay $201" in error

    def test_negative_price(self, state):
        is_valid, error = DraftRules(state).validate_pick("p000", -1, "Team 2")
        assert not is_valid
        assert "negative" in error

    def test_full_roster(self, state):
        state = draft_players(state, "Team 2", [(f"p{i:03d}", 1) for i in range(13)])
        is_valid, error = DraftRules(state).validate_pick("p100", 1, "Team 2")
        assert not is_valid
        assert "no open roster slots" in error


# ── Strategy and completion ──────────────────────────────────────────

class TestStrategyAndCompletion:
    @pytest.mark.parametrize("strategy", [
        "stars_scrubs", "balanced", "punt_ft", "punt_fg", "punt_to", "punt_assists",
    ])
    def test_valid_strategies(self, strategy):
        assert DraftRules.validate_strategy(strategy) == (True, None)

    def test_invalid_strategy(self):
        is_valid, error = DraftRules.validate_strategy("punt_everything")
        assert not is_valid
        assert "Invalid strategy 'punt_everything'" in error

    def test_fresh_draft_not_complete(self, state):
        assert DraftRules(state).is_draft_complete() is False
