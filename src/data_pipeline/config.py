from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"

DEFAULT_SEASON = 2025

# Catalog CSV header -> internal column name
CATALOG_COLUMNS = {
    "Player": "name",
    "Team": "team",
    "Pos": "positions",
    "Value": "projected_value",
    "GP": "games",
    "PTS": "points",
    "REB": "rebounds",
    "AST": "assists",
    "STL": "steals",
    "BLK": "blocks",
    "FG%": "fg_pct",
    "FT%": "ft_pct",
    "3PM": "three_pointers",
    "TOV": "turnovers",
    # Optional shot volume, used to weight the percentage categories
    "FGA": "fga",
    "FTA": "fta",
}

REQUIRED_COLUMNS = [
    "Player", "Team", "Pos", "Value",
    "PTS", "REB", "AST", "STL", "BLK", "FG%", "FT%", "3PM", "TOV",
]

COUNTING_STATS = [
    "points", "rebounds", "assists", "steals", "blocks",
    "three_pointers", "turnovers",
]

# Percentage stat -> attempts column that weights it
PERCENTAGE_STATS = {
    "fg_pct": "fga",
    "ft_pct": "fta",
}

# Minimum projected auction value for each tier; anything lower is tier 5
TIER_VALUE_CUTOFFS = [
    (1, 40.0),
    (2, 25.0),
    (3, 12.0),
    (4, 5.0),
]
LOWEST_TIER = 5

# Separators accepted in the position column ("PG/SG", "PG,SG", "PG-SG")
POSITION_SEPARATORS = "/,-"
