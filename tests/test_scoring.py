"""Tests for the granular bidding scorer and its sub-scores."""

import pytest

from conftest import MY_TEAM, draft_players, make_player, make_pool, make_state
from src.bidding_engine.models import ScoreBreakdown
from src.bidding_engine.scoring import (
    analyze_nomination_timing,
    calculate_budget_score,
    calculate_granular_bidding_score,
    calculate_roster_fit_score,
    calculate_value_efficiency_score,
    describe_breakdown,
)
from src.draft_manager.draft_state import CATEGORIES, DraftedPlayer, TeamBudgetInfo


def _drafted(player_id, tier):
    return DraftedPlayer.from_player(make_player(player_id, tier=tier), "Team 2", 5, 1)


def _perfect_setup():
    """A fresh draft where one scrub is on the roster and a new star appears.

    The scrub is weak everywhere, the star helps everywhere and tops tier 1.
    """
    scrub = make_player(
        "zz", positions=("PG",), projected_value=1.0, tier=5,
        **{cat: -2.0 for cat in CATEGORIES},
    )
    star = make_player(
        "ss", positions=("C",), projected_value=70.0, tier=1,
        **{cat: 1.0 for cat in CATEGORIES},
    )
    state = make_state(make_pool() + [scrub, star])
    state = draft_players(state, MY_TEAM, [("zz", 1)])
    return state, state.find_remaining_player("ss")


# ── Nomination timing ────────────────────────────────────────────────

class TestNominationTiming:
    def test_no_picks_assumes_average_tier_three(self):
        timing = analyze_nomination_timing(make_player(tier=2), "early", [])
        assert timing.is_early_opportunity is True
        assert timing.reasoning == "Elite player (Tier 2) available early - rare opportunity"

    def test_not_early_when_tier_matches_market(self):
        drafted = [_drafted("a", 2), _drafted("b", 2)]
        timing = analyze_nomination_timing(make_player(tier=2), "early", drafted)
        assert timing.is_early_opportunity is False
        assert "always valuable" in timing.reasoning

    def test_mid_draft_opportunity(self):
        drafted = [_drafted("a", 4), _drafted("b", 4)]
        timing = analyze_nomination_timing(make_player(tier=2), "middle", drafted)
        assert timing.is_early_opportunity is True
        assert "mid-draft" in timing.reasoning

    def test_late_solid_player(self):
        drafted = [_drafted("a", 4)]
        timing = analyze_nomination_timing(make_player(tier=4), "late", drafted)
        assert timing.is_early_opportunity is False
        assert timing.reasoning.startswith("Solid player (Tier 4)")

    def test_ordinary_nomination(self):
        timing = analyze_nomination_timing(make_player(tier=4), "early", [])
        assert timing.reasoning == "Player (Tier 4) nominated at expected time"


# ── Sub-scores ───────────────────────────────────────────────────────

class TestRosterFitScore:
    def test_empty_roster(self, state):
        roster, analysis = state.my_roster, state.roster_analysis
        assert calculate_roster_fit_score(make_player(tier=1), roster, analysis) == 20
        assert calculate_roster_fit_score(make_player(tier=4), roster, analysis) == 15
        multi = make_player(tier=1, positions=("PG", "SG"))
        assert calculate_roster_fit_score(multi, roster, analysis) == 23

    def test_capped_at_25(self):
        state, star = _perfect_setup()
        assert calculate_roster_fit_score(
            star, state.my_roster, state.roster_analysis
        ) == 25


class TestBudgetScore:
    def test_fresh_league_star(self, state, star):
        # health 6 + affordability 7 + nobody interested 5
        score = calculate_budget_score(
            star, 10, state.my_roster, state.other_teams_budgets, state.all_teams
        )
        assert score == 18

    def test_legacy_budget_comparison(self, state, star):
        others = [TeamBudgetInfo("Team 2", 100, 3, 10)]
        score = calculate_budget_score(star, 10, state.my_roster, others)
        # health 6 + affordability 7 + well ahead of competitors 5
        assert score == 18

    def test_legacy_ignores_full_teams(self, state, star):
        others = [TeamBudgetInfo("Team 2", 50, 13, 0)]
        assert calculate_budget_score(star, 10, state.my_roster, others) == 13

    def test_no_competitor_data(self, state, star):
        assert calculate_budget_score(star, 10, state.my_roster) == 13

    def test_overpaying_scores_low(self, state, star):
        score = calculate_budget_score(star, 120, state.my_roster)
        # (200 - 121) / 13 = 6.1 -> 4; bid above value -> 0
        assert score == 4


class TestValueEfficiencyScore:
    def test_cheap_star_maxes_out(self, star):
        assert calculate_value_efficiency_score(star, 10, "early") == 20

    def test_fair_price(self, star):
        # 60 / 60 = 1.0: base 6, no premiums
        assert calculate_value_efficiency_score(star, 59, "early") == 6

    def test_late_phase_opportunity(self):
        player = make_player(tier=5, projected_value=13.0)
        assert calculate_value_efficiency_score(player, 9, "late") == 14
        assert calculate_value_efficiency_score(player, 9, "early") == 12

    def test_overpay(self, star):
        assert calculate_value_efficiency_score(star, 99, "early") == 0


class TestDescribeBreakdown:
    def test_labels(self):
        labels = describe_breakdown(ScoreBreakdown(20, 12, 5, 15, 8))
        assert labels == [
            "Excellent roster fit (20/25)",
            "Good scarcity value (12/20)",
            "Budget concerns (5/20)",
            "Outstanding value (15/20)",
            "Good strategy fit (8/15)",
        ]


# ── Granular score ───────────────────────────────────────────────────

class TestGranularBiddingScore:
    def test_fresh_league_star(self, state, star):
        result = calculate_granular_bidding_score(star, 10, state)
        assert result.breakdown == ScoreBreakdown(
            roster_fit=20,
            remaining_players_value=20,
            budget_situation=18,
            value_efficiency=20,
            punt_strategy=5,
        )
        assert result.timing_bonus == 5
        assert result.score == 88

    def test_reasoning_order(self, state, star):
        reasoning = calculate_granular_bidding_score(star, 10, state).reasoning
        assert reasoning[0] == "Elite player (Tier 1) available early - rare opportunity"
        assert reasoning[1] == "+5 bonus points for exceptional timing opportunity"
        assert reasoning[2] == "No other teams interested - great opportunity"
        assert reasoning[3] == "Excellent roster fit (20/25)"
        assert len(reasoning) == 8

    def test_budget_advantage_note(self, state):
        state = draft_players(state, "Team 2", [("p001", 30)])
        player = state.find_remaining_player("p050")
        reasoning = calculate_granular_bidding_score(player, 1, state).reasoning
        assert "Budget advantage: you have more than any competitor" not in reasoning
        state = draft_players(state, "Team 3", [("p002", 30)])
        state = draft_players(state, "Team 4", [("p003", 30)])
        for i, name in enumerate(["Team 5", "Team 6", "Team 7", "Team 8", "Team 9", "Team 10"]):
            state = draft_players(state, name, [(f"p{10 + i:03d}", 5)])
        reasoning = calculate_granular_bidding_score(player, 1, state).reasoning
        assert "Budget advantage: you have more than any competitor" in reasoning

    def test_raw_score_can_exceed_100(self):
        state, star = _perfect_setup()
        result = calculate_granular_bidding_score(star, 10, state)
        assert result.breakdown.total == 100
        assert result.timing_bonus == 5
        assert result.score == 105

    def test_sub_scores_respect_caps(self, state):
        for player in state.players_remaining[:40]:
            for bid in (1, 10, 40):
                breakdown = calculate_granular_bidding_score(player, bid, state).breakdown
                assert 0 <= breakdown.roster_fit <= 25
                assert 0 <= breakdown.remaining_players_value <= 20
                assert 0 <= breakdown.budget_situation <= 20
                assert 0 <= breakdown.value_efficiency <= 20
                assert 0 <= breakdown.punt_strategy <= 15

    def test_deterministic(self, state, star):
        first = calculate_granular_bidding_score(star, 10, state)
        second = calculate_granular_bidding_score(star, 10, state)
        assert first == second
