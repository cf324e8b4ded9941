"""Tests for the projection CSV ingestion module."""

import math

import pandas as pd
import pytest

from src.data_pipeline.ingestion import (
    CatalogIngester,
    IngestionError,
    _parse_numeric,
    parse_positions,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog(sample_csv):
    return CatalogIngester(sample_csv).read()


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

class TestParseNumeric:
    @pytest.mark.parametrize("raw,expected", [
        ("1,234.5", 1234.5),
        ('"26.4"', 26.4),
        ("47.5%", 47.5),
        (12, 12.0),
    ])
    def test_parses(self, raw, expected):
        assert _parse_numeric(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "n/a"])
    def test_unparseable_is_nan(self, raw):
        assert math.isnan(_parse_numeric(raw))


class TestParsePositions:
    @pytest.mark.parametrize("raw,expected", [
        ("PG/SG", ("PG", "SG")),
        ("sf, pf", ("SF", "PF")),
        ("PF-C", ("PF", "C")),
        ("C/C", ("C",)),
        ("G", ()),
        (None, ()),
        (float("nan"), ()),
    ])
    def test_positions(self, raw, expected):
        assert parse_positions(raw) == expected


# ---------------------------------------------------------------------------
# Catalog reading
# ---------------------------------------------------------------------------

class TestReadCatalog:
    def test_blank_rows_dropped(self, catalog):
        assert len(catalog) == 5
        assert "" not in catalog["name"].tolist()

    def test_columns_renamed(self, catalog):
        expected = {
            "name", "team", "positions", "projected_value", "games",
            "points", "rebounds", "assists", "steals", "blocks",
            "fg_pct", "ft_pct", "three_pointers", "turnovers", "fga", "fta",
        }
        assert expected == set(catalog.columns)

    def test_numeric_columns(self, catalog):
        for col in ("projected_value", "points", "turnovers"):
            assert pd.api.types.is_numeric_dtype(catalog[col])
        assert catalog.loc[0, "points"] == pytest.approx(26.4)

    def test_percentages_become_fractions(self, catalog):
        assert catalog["fg_pct"].max() <= 1.0
        assert catalog.loc[0, "fg_pct"] == pytest.approx(0.583)
        # Already a fraction
        assert catalog.loc[2, "ft_pct"] == pytest.approx(0.79)

    def test_positions_are_tuples(self, catalog):
        assert catalog.loc[1, "positions"] == ("PG", "SG")
        assert catalog.loc[2, "positions"] == ("PF", "C")
        assert catalog.loc[4, "positions"] == ()

    def test_missing_team_is_blank(self, catalog):
        assert catalog.loc[3, "team"] == ""

    def test_missing_required_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("Player,Team,Pos\nSomeone,BOS,PG\n")
        with pytest.raises(IngestionError, match="Missing required columns"):
            CatalogIngester(path).read()

    def test_missing_file(self, tmp_path):
        ingester = CatalogIngester(tmp_path / "nope.csv")
        with pytest.raises(FileNotFoundError):
            ingester.read_catalog()
        with pytest.raises(IngestionError, match="Failed to read CSV file"):
            ingester.read()

    def test_optional_attempt_columns(self, tmp_path):
        header = "Player,Team,Pos,Value,PTS,REB,AST,STL,BLK,FG%,FT%,3PM,TOV"
        path = tmp_path / "lean.csv"
        path.write_text(f"{header}\nSomeone,BOS,PG,10,15,3,5,1,0.2,45,80,2,2\n")
        df = CatalogIngester(path).read()
        assert "fga" not in df.columns
        assert df.loc[0, "ft_pct"] == pytest.approx(0.8)
