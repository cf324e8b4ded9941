"""Run the player catalog pipeline.

Usage:
    python -m src.data_pipeline.run_update <csv_path> [season] [output_dir]

Examples:
    python -m src.data_pipeline.run_update data/raw/projections_2025.csv
    python -m src.data_pipeline.run_update projections.csv 2025 /tmp/catalog
"""

import json
import logging
import math
import sys
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import DEFAULT_SEASON, PROCESSED_DATA_DIR
from src.data_pipeline.ingestion import CatalogIngester, IngestionError
from src.data_pipeline.transformation import IMPACT_PREFIX, CatalogTransformer
from src.draft_manager.draft_state import CATEGORIES, CategoryImpact, Player, PlayerStats
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def _player_to_dict(row: pd.Series) -> dict:
    """Convert a single player row to the output JSON structure."""
    sf = _safe

    return {
        "player_id": row["player_id"],
        "name": row["name"],
        "team": sf(row.get("team"), "FA"),
        "positions": list(row["positions"]),
        "projected_value": round(float(sf(row.get("projected_value"), 0)), 1),
        "tier": int(row["tier"]),
        "category_strengths": {
            cat: round(float(sf(row.get(IMPACT_PREFIX + cat), 0)), 4)
            for cat in CATEGORIES
        },
        "stats": {
            **{cat: float(sf(row.get(cat), 0)) for cat in CATEGORIES},
            "games": int(sf(row.get("games"), 0)),
        },
    }


def player_from_dict(data: dict) -> Player:
    """Rebuild an immutable Player from its JSON form."""
    return Player(
        player_id=data["player_id"],
        name=data["name"],
        team=data.get("team") or "FA",
        positions=tuple(data["positions"]),
        projected_value=float(data["projected_value"]),
        tier=int(data["tier"]),
        category_strengths=CategoryImpact.from_dict(data.get("category_strengths", {})),
        stats=PlayerStats(**data.get("stats", {})),
    )


def load_players(path: Path) -> list[Player]:
    """Load a processed catalog file into Player records.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is missing required keys.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        players = [player_from_dict(p) for p in data["players"]]
    except KeyError as e:
        raise ValueError(
            f"Malformed catalog file {path.name}: missing key {e}. "
            "Re-run data pipeline to regenerate."
        ) from e

    logger.info("Loaded %d players from %s", len(players), path.name)
    return players


def run_pipeline(
    csv_path: Path,
    season: int = DEFAULT_SEASON,
    output_dir: Path | None = None,
) -> Path:
    """Run the complete catalog pipeline.

    Args:
        csv_path: Per-game projection CSV.
        season: Season year, used in the output file name.
        output_dir: Directory for JSON output.
            Defaults to ``data/processed/``.

    Returns:
        Path to the generated JSON file.

    Raises:
        IngestionError: If the CSV cannot be read.
    """
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR
    output_dir = Path(output_dir)

    logger.info("Starting pipeline for %d season (source: %s)", season, csv_path)

    # 1. Ingest
    logger.info("Step 1/3: Ingesting CSV...")
    raw = CatalogIngester(csv_path).read()

    # 2. Transform
    logger.info("Step 2/3: Calculating impacts and tiers...")
    players_df = CatalogTransformer().transform(raw)

    # 3. Output JSON
    logger.info("Step 3/3: Generating JSON output...")
    players_list = [_player_to_dict(row) for _, row in players_df.iterrows()]

    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": Path(csv_path).name,
            "season": season,
            "categories": list(CATEGORIES),
            "total_players": len(players_list),
        },
        "players": players_list,
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"players_{season}.json"

    with open(output_file, "w") as f:
        json.dump(output_data, f, indent=2)

    # Update latest symlink
    latest_link = output_dir / "players_latest.json"
    if latest_link.exists() or latest_link.is_symlink():
        latest_link.unlink()
    latest_link.symlink_to(output_file.name)

    # Summary
    tier_counts: dict[int, int] = {}
    for p in players_list:
        tier_counts[p["tier"]] = tier_counts.get(p["tier"], 0) + 1

    logger.info("Pipeline complete! Output: %s", output_file)
    logger.info("  Total players: %d", len(players_list))
    logger.info(
        "  By tier: %s",
        ", ".join(f"T{k}={v}" for k, v in sorted(tier_counts.items())),
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    csv_path = Path(sys.argv[1])
    season = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_SEASON
    output_dir = Path(sys.argv[3]) if len(sys.argv) > 3 else None

    try:
        output = run_pipeline(csv_path, season, output_dir)
        print(f"Pipeline complete: {output}")
    except IngestionError:
        logger.exception("Pipeline failed")
        sys.exit(1)
