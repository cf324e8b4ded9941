from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
PROCESSED_DATA_DIR = PROJECT_ROOT / "data" / "processed"

# Default league settings
DEFAULT_TOTAL_BUDGET = 200
DEFAULT_TEAM_COUNT = 10
DEFAULT_STRATEGY = "balanced"
ROSTER_SIZE = 13

# Ordered roster configuration (one entry per slot)
DEFAULT_ROSTER_SLOTS = (
    "PG", "SG", "G", "SF", "PF", "F",
    "C", "C",
    "UTIL", "UTIL",
    "BENCH", "BENCH", "BENCH",
)

VALID_POSITIONS = ("PG", "SG", "SF", "PF", "C")

VALID_STRATEGIES = (
    "stars_scrubs",
    "balanced",
    "punt_ft",
    "punt_fg",
    "punt_to",
    "punt_assists",
)

# Slot eligibility
GUARD_POSITIONS = {"PG", "SG"}
FORWARD_POSITIONS = {"SF", "PF"}
FLEX_SLOTS = {"UTIL", "BENCH"}

# Per-team base needs used when tracking competitor rosters
BASE_TEAM_POSITION_NEEDS = {
    "PG": 1, "SG": 1, "SF": 1, "PF": 1, "C": 2,
    "G": 1, "F": 1, "UTIL": 2, "BENCH": 3,
}

# Draft phase cut-offs (fraction of total picks consumed)
EARLY_PHASE_CUTOFF = 0.3
MIDDLE_PHASE_CUTOFF = 0.7
