"""Data transformation for player projections.

Turns the ingested per-game table into catalog rows:
- Standardized category impacts (z-scores across the pool)
- Tiers from projected auction value
- Unique player IDs
"""

import logging

import pandas as pd

from src.data_pipeline.config import (
    COUNTING_STATS,
    LOWEST_TIER,
    PERCENTAGE_STATS,
    TIER_VALUE_CUTOFFS,
)

logger = logging.getLogger(__name__)

IMPACT_PREFIX = "impact_"


def _zscore(series: pd.Series) -> pd.Series:
    """Population z-score; a constant column maps to all zeros."""
    values = series.fillna(0.0).astype(float)
    std = values.std(ddof=0)
    if not std or pd.isna(std):
        return pd.Series(0.0, index=series.index)
    return (values - values.mean()) / std


class CatalogTransformer:
    """Computes catalog fields from cleaned projection data."""

    # ------------------------------------------------------------------
    # Category impacts
    # ------------------------------------------------------------------
    @staticmethod
    def calculate_category_impacts(df: pd.DataFrame) -> pd.DataFrame:
        """Add an ``impact_<category>`` column per scoring category.

        Counting stats are z-scored directly (turnovers included, so a
        high-turnover player has a positive turnover impact). Percentage
        stats are weighted by attempts when the attempts column is present:
        the impact is ``attempts * (pct - pool_pct)`` before z-scoring.
        """
        out = df.copy()

        for stat in COUNTING_STATS:
            out[IMPACT_PREFIX + stat] = _zscore(out[stat])

        for stat, attempts_col in PERCENTAGE_STATS.items():
            pct = out[stat].fillna(0.0)
            if attempts_col in out.columns and out[attempts_col].fillna(0).sum() > 0:
                attempts = out[attempts_col].fillna(0.0)
                pool_pct = (pct * attempts).sum() / attempts.sum()
                raw = attempts * (pct - pool_pct)
            else:
                raw = pct
            out[IMPACT_PREFIX + stat] = _zscore(raw)

        logger.info("Calculated category impacts for %d players", len(out))
        return out

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------
    @staticmethod
    def assign_tier(projected_value: float) -> int:
        """Tier 1 (best) to 5 from projected auction value."""
        for tier, minimum in TIER_VALUE_CUTOFFS:
            if projected_value >= minimum:
                return tier
        return LOWEST_TIER

    def assign_tiers(self, df: pd.DataFrame) -> pd.DataFrame:
        out = df.copy()
        out["projected_value"] = out["projected_value"].fillna(0.0).clip(lower=0.0)
        out["tier"] = out["projected_value"].apply(self.assign_tier).astype(int)

        counts = out["tier"].value_counts().sort_index()
        logger.info(
            "Assigned tiers: %s",
            ", ".join(f"T{tier}={n}" for tier, n in counts.items()),
        )
        return out

    # ------------------------------------------------------------------
    # Player IDs
    # ------------------------------------------------------------------
    @staticmethod
    def generate_player_ids(df: pd.DataFrame) -> pd.DataFrame:
        """Generate unique player IDs.

        Format: {name}_{team}
        Example: nikola_jokic_den
        """
        def _make_id(row):
            name = str(row.get("name") or "unknown")
            name = (
                name.lower()
                .replace("'", "")
                .replace(".", "")
                .replace("-", "_")
                .replace(" ", "_")
            )
            team = str(row.get("team") or "fa").lower()
            return f"{name}_{team}"

        out = df.copy()
        out["player_id"] = out.apply(_make_id, axis=1)

        # Disambiguate collisions by appending a numeric suffix
        dupes = out["player_id"].duplicated(keep=False)
        if dupes.any():
            dupe_ids = out.loc[dupes, "player_id"].unique().tolist()
            logger.warning("Duplicate player_ids detected: %s", dupe_ids)
            for pid in dupe_ids:
                mask = out["player_id"] == pid
                suffixes = range(1, mask.sum() + 1)
                out.loc[mask, "player_id"] = [
                    f"{pid}_{i}" for i in suffixes
                ]

        logger.info("Generated %d player IDs", len(out))
        return out

    # ------------------------------------------------------------------
    # Full transformation pipeline
    # ------------------------------------------------------------------
    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Run the full transformation on ingested data.

        Players with no recognized position are dropped first so they do
        not distort the pool statistics.

        Returns:
            DataFrame sorted by projected value (descending) with impact,
            tier and player_id columns.
        """
        out = df.copy()
        out["team"] = out["team"].fillna("").replace("", "FA")

        no_pos = out["positions"].apply(len) == 0
        if no_pos.any():
            logger.warning(
                "Dropping %d players with no recognized position: %s",
                no_pos.sum(),
                out.loc[no_pos, "name"].tolist(),
            )
            out = out[~no_pos].reset_index(drop=True)

        out = self.calculate_category_impacts(out)
        out = self.assign_tiers(out)
        out = self.generate_player_ids(out)

        out = out.sort_values("projected_value", ascending=False, kind="stable")
        out = out.reset_index(drop=True)
        logger.info("Transformation complete: %d players", len(out))
        return out
