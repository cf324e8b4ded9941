"""Tests for src.data_pipeline.run_update (full pipeline integration)."""

import json

import pytest

from conftest import SAMPLE_CSV
from src.data_pipeline.ingestion import IngestionError
from src.data_pipeline.run_update import load_players, player_from_dict, run_pipeline
from src.draft_manager.draft_state import CATEGORIES, Player

_REQUIRED_PLAYER_KEYS = {
    "player_id", "name", "team", "positions",
    "projected_value", "tier", "category_strengths", "stats",
}


# ── Pipeline execution ────────────────────────────────────────────────


class TestRunPipeline:
    """End-to-end tests for the complete pipeline."""

    @pytest.fixture(scope="class")
    def pipeline_output(self, tmp_path_factory):
        """Run the pipeline once, writing output to a temp directory."""
        tmp_dir = tmp_path_factory.mktemp("catalog")
        csv_path = tmp_dir / "projections.csv"
        csv_path.write_text(SAMPLE_CSV)

        output_path = run_pipeline(csv_path, season=2025, output_dir=tmp_dir / "processed")

        with open(output_path) as f:
            data = json.load(f)

        return data, output_path, tmp_dir / "processed"

    def test_pipeline_produces_file(self, pipeline_output):
        _, output_path, _ = pipeline_output
        assert output_path.exists()
        assert output_path.name == "players_2025.json"

    def test_latest_symlink_created(self, pipeline_output):
        _, _, out_dir = pipeline_output
        latest = out_dir / "players_latest.json"
        assert latest.is_symlink()
        assert latest.resolve().name == "players_2025.json"

    def test_metadata_structure(self, pipeline_output):
        data, _, _ = pipeline_output
        meta = data["metadata"]
        assert meta["season"] == 2025
        assert meta["source"] == "projections.csv"
        assert meta["categories"] == list(CATEGORIES)
        assert meta["total_players"] == len(data["players"]) == 4

    def test_player_keys(self, pipeline_output):
        data, _, _ = pipeline_output
        for player in data["players"]:
            assert _REQUIRED_PLAYER_KEYS.issubset(player)
            assert set(player["category_strengths"]) == set(CATEGORIES)
            assert "games" in player["stats"]

    def test_players_sorted_by_value(self, pipeline_output):
        data, _, _ = pipeline_output
        values = [p["projected_value"] for p in data["players"]]
        assert values == sorted(values, reverse=True)
        assert data["players"][0]["player_id"] == "nikola_jokic_den"
        assert data["players"][0]["tier"] == 1

    def test_multi_position_preserved(self, pipeline_output):
        data, _, _ = pipeline_output
        sga = next(p for p in data["players"] if p["name"] == "Shai Gilgeous-Alexander")
        assert sga["positions"] == ["PG", "SG"]

    def test_free_agent_team(self, pipeline_output):
        data, _, _ = pipeline_output
        role = next(p for p in data["players"] if p["name"] == "Role Player")
        assert role["team"] == "FA"
        assert role["tier"] == 5

    def test_rerun_replaces_symlink(self, pipeline_output):
        _, _, out_dir = pipeline_output
        csv_path = out_dir.parent / "projections.csv"
        second = run_pipeline(csv_path, season=2026, output_dir=out_dir)
        assert (out_dir / "players_latest.json").resolve().name == second.name


class TestPipelineErrors:
    def test_missing_csv(self, tmp_path):
        with pytest.raises(IngestionError):
            run_pipeline(tmp_path / "missing.csv", output_dir=tmp_path)


# ── Loading ───────────────────────────────────────────────────────────


class TestLoadPlayers:
    def test_round_trip(self, tmp_path):
        csv_path = tmp_path / "projections.csv"
        csv_path.write_text(SAMPLE_CSV)
        output = run_pipeline(csv_path, output_dir=tmp_path)

        players = load_players(output)
        assert len(players) == 4
        assert all(isinstance(p, Player) for p in players)
        jokic = players[0]
        assert jokic.positions == ("C",)
        assert jokic.stats.games == 70
        assert jokic.category_strengths.rebounds > 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_players(tmp_path / "players_latest.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "players_2025.json"
        path.write_text(json.dumps({"players": [{"name": "No ID"}]}))
        with pytest.raises(ValueError, match="Malformed catalog file"):
            load_players(path)

    def test_player_from_dict_defaults(self):
        player = player_from_dict({
            "player_id": "x",
            "name": "X",
            "team": "",
            "positions": ["SF", "PF"],
            "projected_value": 7,
            "tier": 4,
        })
        assert player.team == "FA"
        assert player.positions == ("SF", "PF")
        assert player.category_strengths.points == 0.0
