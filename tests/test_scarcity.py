"""Tests for remaining-pool scarcity scoring."""

from conftest import make_player, make_pool
from src.bidding_engine.scarcity import (
    min_positional_scarcity,
    positional_scarcity,
    remaining_players_score,
)


def _filler(count, tier=5, positions=("SF",), value=1.0):
    return [
        make_player(f"f{i}", positions=positions, projected_value=value, tier=tier)
        for i in range(count)
    ]


# ── Positional scarcity ──────────────────────────────────────────────

class TestPositionalScarcity:
    def test_counts_eligible_players_within_tier(self):
        pool = [
            make_player("a", positions=("C",), tier=1),
            make_player("b", positions=("PF", "C"), tier=2),
            make_player("c", positions=("C",), tier=4),
            make_player("d", positions=("PG",), tier=1),
        ]
        assert positional_scarcity("C", pool, 2) == 2
        assert positional_scarcity("C", pool, 5) == 3

    def test_min_over_player_positions(self):
        pool = [
            make_player("a", positions=("PG",), tier=2),
            make_player("b", positions=("PG",), tier=2),
            make_player("c", positions=("SG",), tier=2),
        ]
        player = make_player("x", positions=("PG", "SG"), tier=2)
        assert min_positional_scarcity(player, pool, 3) == 1


# ── Remaining players score ─────────────────────────────────────────

class TestRemainingPlayersScore:
    def test_early_pool_rewards_best_tier_one(self, pool, star):
        # Tier 1 (10) + small tier supply (5) + best in tier (5)
        assert remaining_players_score(star, pool) == 20

    def test_early_pool_lower_tier(self, pool):
        # p040 is tier 4 ($7.7); 17 tier-4 players, 8 of them better
        player = next(p for p in pool if p.player_id == "p040")
        assert player.tier == 4
        assert remaining_players_score(player, pool) == 5

    def test_last_elite_center_is_scarce(self):
        center = make_player("c1", positions=("C",), projected_value=30.0, tier=2)
        pool = [center] + _filler(99)
        # scarcity 1 (10) + tier supply 1 (5) + no better C (5)
        assert remaining_players_score(center, pool) == 20

    def test_crowded_position_scores_low(self):
        guard = make_player("g0", positions=("PG",), projected_value=10.0, tier=3)
        rivals = [
            make_player(f"g{i}", positions=("PG",), projected_value=15.0 + i, tier=3)
            for i in range(1, 20)
        ]
        pool = [guard] + rivals + _filler(50)
        assert remaining_players_score(guard, pool) == 0

    def test_score_never_exceeds_cap(self):
        pool = make_pool(200)
        for player in pool[:20]:
            assert 0 <= remaining_players_score(player, pool) <= 20

    def test_pool_threshold_switches_scoring(self):
        center = make_player("c1", positions=("C",), projected_value=30.0, tier=2)
        small = [center] + _filler(149)
        large = [center] + _filler(150)
        # 150 players or fewer use scarcity, otherwise tier quality
        assert remaining_players_score(center, small) == 20
        assert remaining_players_score(center, large) == 8 + 5 + 5
