"""Tests for draft state data models."""

from dataclasses import FrozenInstanceError

import pytest

from conftest import MY_TEAM, draft_players, make_player
from src.draft_manager.draft_state import (
    CATEGORIES,
    CategoryImpact,
    DraftedPlayer,
    category_keys,
    get_draft_phase,
)


# ── CategoryImpact ───────────────────────────────────────────────────

class TestCategoryImpact:
    def test_nine_categories(self):
        assert len(category_keys()) == 9
        assert category_keys() == CATEGORIES

    def test_zero(self):
        assert CategoryImpact.zero().values() == [0.0] * 9

    def test_dict_round_trip_fills_missing(self):
        impact = CategoryImpact.from_dict({"points": 1.5, "blocks": "0.5"})
        assert impact.points == 1.5
        assert impact.blocks == 0.5
        assert impact.to_dict()["turnovers"] == 0.0

    def test_items_follow_category_order(self):
        assert [cat for cat, _ in CategoryImpact().items()] == list(CATEGORIES)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            CategoryImpact().points = 1.0


# ── Players ──────────────────────────────────────────────────────────

class TestPlayers:
    def test_positions(self):
        player = make_player(positions=("PF", "C"))
        assert player.has_position("C")
        assert not player.has_position("PG")
        assert player.is_multi_positional

    def test_drafted_player_keeps_catalog_fields(self):
        player = make_player("a", projected_value=20.0, points=1.0)
        drafted = DraftedPlayer.from_player(player, "Team 2", 25, 7)
        assert drafted.player_id == "a"
        assert drafted.category_strengths.points == 1.0
        assert drafted.drafted_by == "Team 2"
        assert drafted.draft_order == 7
        assert drafted.overbid == pytest.approx(5.0)

    def test_to_player_strips_auction_outcome(self):
        player = make_player("a")
        drafted = DraftedPlayer.from_player(player, "Team 2", 25, 1)
        assert drafted.to_player() == player


# ── DraftState ───────────────────────────────────────────────────────

class TestDraftState:
    def test_fresh_state(self, state):
        assert state.total_teams == 10
        assert state.total_picks == 130
        assert state.draft_phase == "early"
        assert len(state.players_remaining) == 200
        assert state.players_drafted == ()
        assert state.current_nomination is None
        assert len(state.other_teams_budgets) == 9

    def test_team_lookup(self, state):
        assert state.get_team("Team 5").team_name == "Team 5"
        assert state.get_team("Nobody") is None
        assert state.get_my_team().team_name == MY_TEAM

    def test_player_lookup(self, state):
        assert state.find_remaining_player("p010").player_id == "p010"
        assert state.find_remaining_player("zzz") is None
        assert state.is_player_available("p010")

    def test_drafted_player_not_available(self, state):
        state = draft_players(state, "Team 2", [("p010", 20)])
        assert not state.is_player_available("p010")

    def test_my_roster_matches_my_team(self, state):
        state = draft_players(state, MY_TEAM, [("p000", 60), ("p020", 10)])
        team = state.get_my_team()
        roster = state.my_roster
        assert roster.remaining_budget == team.remaining_budget == 130
        assert roster.total_spent == team.total_spent == 70
        assert roster.filled_count() == len(team.players_owned) == 2


class TestDraftPhase:
    @pytest.mark.parametrize("drafted,expected", [
        (0, "early"), (38, "early"), (39, "middle"),
        (90, "middle"), (91, "late"), (130, "late"),
    ])
    def test_phase_cutoffs(self, drafted, expected):
        assert get_draft_phase(drafted, 130) == expected

    def test_zero_total_picks(self):
        assert get_draft_phase(0, 0) == "early"
