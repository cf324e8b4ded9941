# Category classification thresholds: category -> (strong_above, weak_below).
# Two tunings exist and each belongs to its own call site.

# Roster analysis stored on the draft snapshot
ROSTER_CATEGORY_THRESHOLDS = {
    "points": (2.0, -1.0),
    "rebounds": (2.0, -1.0),
    "assists": (2.0, -1.0),
    "steals": (1.5, -1.0),
    "blocks": (1.5, -1.0),
    "fg_pct": (1.5, -1.5),
    "ft_pct": (1.5, -1.5),
    "three_pointers": (2.0, -1.0),
    "turnovers": (1.5, -1.5),
}

# Live category check used for the recommended archetype
LIVE_CATEGORY_THRESHOLDS = {
    "points": (1.5, -0.5),
    "rebounds": (1.5, -0.5),
    "assists": (1.5, -0.5),
    "steals": (1.0, -0.5),
    "blocks": (1.0, -0.5),
    "fg_pct": (0.8, -0.8),
    "ft_pct": (0.8, -0.8),
    "three_pointers": (1.0, -0.5),
    "turnovers": (0.8, -0.8),
}

# Category forced to "weak" by each punt archetype
PUNT_CATEGORY = {
    "punt_ft": "ft_pct",
    "punt_fg": "fg_pct",
    "punt_to": "turnovers",
    "punt_assists": "assists",
}

# Recommended archetype
RECOMMEND_PUNT_WEAK_COUNT = 3
RECOMMEND_STARS_STRONG_COUNT = 2
RECOMMEND_STARS_MIN_BUDGET = 100

# Remaining-players pool analysis
EARLY_POOL_SIZE = 150
TIER_QUALITY_POINTS = {1: 10, 2: 8, 3: 6, 4: 4}
TIER_QUALITY_DEFAULT = 2
REMAINING_PLAYERS_CAP = 20

# Strategy fit
ELITE_TIER = 2
CHEAP_PLAYER_VALUE = 5

# Opponent model
MIN_PICKS_FOR_INFERENCE = 2
EXPENSIVE_SPEND_RATIO = 1.5
CHEAP_SPEND_RATIO = 0.7
OPPONENT_WEAK_CATEGORY = -0.5
OPPONENT_STRONG_CATEGORY = 0.5
POSITION_FOCUS_SHARE = 0.4
RECENT_PICKS = 5

# Bidding pattern aggressiveness: per-player threat model vs league scouting
THREAT_AGGRESSIVE_OVERBID = 5
THREAT_CONSERVATIVE_OVERBID = -2
SCOUTING_AGGRESSIVE_OVERBID = 10
SCOUTING_CONSERVATIVE_OVERBID = -5

# Budget pressure ($ per open slot)
DESPERATE_BUDGET_PER_SLOT = 5
HIGH_PRESSURE_BUDGET_PER_SLOT = 10
MODERATE_BUDGET_PER_SLOT = 15
BUDGET_CONSTRAINED_PER_SLOT = 8
MODERATE_DRAFT_PROGRESS = 0.7
PANIC_SLOT_BUFFER = 3

# "Interested team" affordability (budget per slot vs projected value)
THREAT_AFFORDABILITY_RATIO = 0.7
INTEREST_AFFORDABILITY_RATIO = 0.8

# Threat assessment
PRESSURE_BID_MULTIPLIER = {"desperate": 1.2, "high": 1.1}
THREAT_LEVEL_ORDER = {"critical": 4, "high": 3, "medium": 2, "low": 1}
BID_PROBABILITY_CAP = 0.95
EXPECTED_COST_BUFFER = 1.05
MAX_VALUE_MULTIPLIER = 1.1
DEFAULT_MARKET_VALUE = 20
MARKET_TIERS = (1, 2, 3, 4, 5)

# Granular scorer
TIMING_BONUS = 5
DEFAULT_AVERAGE_TIER = 3
SCORE_CAP = 100

# Orchestrator: (minimum score, multiplier of projected value, headline)
MAX_BID_BANDS = (
    (85, 1.10, "EXCEPTIONAL OPPORTUNITY - Highly recommended"),
    (75, 1.05, "EXCELLENT OPPORTUNITY - Strongly recommended"),
    (65, 1.00, "GOOD OPPORTUNITY - Recommended"),
    (55, 0.95, "FAIR OPPORTUNITY - Consider bidding"),
    (45, 0.90, "BELOW AVERAGE - Proceed with caution"),
    (35, 0.80, "POOR OPPORTUNITY - Not recommended"),
    (0, 0.70, "AVOID - Very poor opportunity"),
)
MIN_SCORE_TO_BID = 45
HIGH_CONFIDENCE_SCORE = 75
LOW_CONFIDENCE_SCORE = 55

# Bidding timing
AGGRESSIVE_BUDGET = 120
PASSIVE_BUDGET = 50
BLUFF_BID_RATIO = 0.7
BLUFF_RAISE = 5
BLUFF_RESERVE = 20

# Nomination planner
TARGET_BUDGET_BUFFER = 10
FORCE_SPEND_BUDGET_BUFFER = 5
FORCE_SPEND_MAX_ANY_NEED = 2
HIGH_SCARCITY = 3

# Budget allocation: strategy -> (star, early, middle, late) share of budget
BUDGET_SPLITS = {
    "stars_scrubs": (0.7, 0.6, 0.3, 0.1),
    "balanced": (0.4, 0.4, 0.4, 0.2),
}
DEFAULT_BUDGET_SPLIT = (0.5, 0.5, 0.3, 0.2)
