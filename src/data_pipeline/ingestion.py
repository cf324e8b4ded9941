"""CSV ingestion for per-game player projections.

Handles the quirks of typical projection exports:
- Comma-formatted or quoted numbers (e.g., "1,234")
- Percentages given either as fractions (0.475) or as percents (47.5)
- Multi-position strings ("PG/SG", "SF,PF")
- Blank placeholder rows
"""

import logging
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import (
    CATALOG_COLUMNS,
    PERCENTAGE_STATS,
    POSITION_SEPARATORS,
    REQUIRED_COLUMNS,
)
from src.draft_manager.config import VALID_POSITIONS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when CSV ingestion fails."""


def _parse_numeric(value):
    """Parse a numeric string that may contain commas (e.g., '1,234.5' -> 1234.5)."""
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").strip().strip('"').rstrip("%")
    if s == "" or s.isspace():
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


def parse_positions(raw) -> tuple[str, ...]:
    """Split a position string into valid positions, preserving order.

    Examples:
        "PG/SG" -> ("PG", "SG")
        "sf, pf" -> ("SF", "PF")
        "G" -> ()
    """
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        return ()
    text = str(raw).upper()
    for sep in POSITION_SEPARATORS:
        text = text.replace(sep, " ")

    positions: list[str] = []
    for token in text.split():
        if token in VALID_POSITIONS and token not in positions:
            positions.append(token)
    return tuple(positions)


class CatalogIngester:
    """Reads a player projection CSV into a normalized DataFrame.

    The returned DataFrame has internal column names (see
    ``CATALOG_COLUMNS``), numeric stat columns as floats, percentages as
    fractions and ``positions`` as tuples.
    """

    def __init__(self, csv_path: Path):
        self.csv_path = Path(csv_path)

    def _resolve_path(self) -> Path:
        """Return the CSV path, raising if missing."""
        if not self.csv_path.exists():
            raise FileNotFoundError(f"Expected file not found: {self.csv_path}")
        return self.csv_path

    def read_catalog(self) -> pd.DataFrame:
        """Read and normalize the projection CSV."""
        filepath = self._resolve_path()
        logger.info("Reading projections: %s", filepath.name)

        df = pd.read_csv(filepath, quotechar='"')
        df.columns = [str(c).strip() for c in df.columns]

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise IngestionError(f"Missing required columns: {missing}")

        df = df.rename(
            columns={k: v for k, v in CATALOG_COLUMNS.items() if k in df.columns}
        )
        df = self._clean_catalog_df(df)
        logger.info("Loaded %d player projections", len(df))
        return df

    def _clean_catalog_df(self, df: pd.DataFrame) -> pd.DataFrame:
        """Common cleanup.

        - Strips whitespace/quotes from string columns
        - Drops rows with no player name
        - Parses numeric columns and rescales percent-style percentages
        - Splits the position column into tuples
        """
        string_cols = {"name", "team", "positions"}
        for col in ("name", "team"):
            df[col] = df[col].fillna("").astype(str).str.strip('"').str.strip()

        df = df[df["name"] != ""]
        df = df.reset_index(drop=True)

        for col in df.columns:
            if col not in string_cols:
                df[col] = df[col].apply(_parse_numeric)

        for col in PERCENTAGE_STATS:
            # 47.5 -> 0.475
            df[col] = df[col].where(df[col] <= 1.0, df[col] / 100.0)

        df["positions"] = df["positions"].apply(parse_positions)
        return df

    def read(self) -> pd.DataFrame:
        """Read the catalog CSV.

        Raises:
            IngestionError: if the file cannot be read or is malformed.
        """
        try:
            return self.read_catalog()
        except IngestionError:
            raise
        except Exception as e:
            raise IngestionError(f"Failed to read CSV file: {e}") from e
