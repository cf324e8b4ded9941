"""Category impact aggregation and roster category analysis.

Raw impacts are additive for counting categories only. FG% and FT% impacts
depend on shot volume, so across a group of players they are averaged
rather than summed.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from src.bidding_engine.config import (
    LIVE_CATEGORY_THRESHOLDS,
    PUNT_CATEGORY,
    RECOMMEND_PUNT_WEAK_COUNT,
    RECOMMEND_STARS_MIN_BUDGET,
    RECOMMEND_STARS_STRONG_COUNT,
    ROSTER_CATEGORY_THRESHOLDS,
)
from src.draft_manager.draft_state import (
    CATEGORIES,
    PERCENTAGE_CATEGORIES,
    CategoryImpact,
    MyRoster,
    Player,
    RosterAnalysis,
)

logger = logging.getLogger(__name__)


def sum_category_impacts(players: Iterable[Player]) -> CategoryImpact:
    """Aggregate the category impacts of *players*.

    Counting categories are summed; percentage categories are the mean
    over contributing players. An empty collection yields all zeros.
    """
    totals = {cat: 0.0 for cat in CATEGORIES}
    count = 0

    for player in players:
        for cat, value in player.category_strengths.items():
            totals[cat] += value
        count += 1

    if count > 0:
        for cat in PERCENTAGE_CATEGORIES:
            totals[cat] /= count

    return CategoryImpact(**totals)


def classify_categories(
    totals: CategoryImpact,
    thresholds: Dict[str, Tuple[float, float]],
) -> Dict[str, str]:
    """Label each category strong / weak / neutral against *thresholds*."""
    needs: Dict[str, str] = {}
    for cat, value in totals.items():
        strong_above, weak_below = thresholds[cat]
        if value > strong_above:
            needs[cat] = "strong"
        elif value < weak_below:
            needs[cat] = "weak"
        else:
            needs[cat] = "neutral"
    return needs


def apply_punt_override(needs: Dict[str, str], strategy: str) -> Dict[str, str]:
    """Force the punted category to ``weak`` for punt archetypes."""
    punted = PUNT_CATEGORY.get(strategy)
    if punted is None:
        return dict(needs)
    overridden = dict(needs)
    overridden[punted] = "weak"
    return overridden


def weak_categories(needs: Dict[str, str]) -> List[str]:
    return [cat for cat in CATEGORIES if needs.get(cat) == "weak"]


def strong_categories(needs: Dict[str, str]) -> List[str]:
    return [cat for cat in CATEGORIES if needs.get(cat) == "strong"]


def analyze_roster_categories(roster: MyRoster) -> Dict[str, str]:
    """Live category check of the operator's roster (tighter thresholds)."""
    totals = sum_category_impacts(roster.players())
    return classify_categories(totals, LIVE_CATEGORY_THRESHOLDS)


def calculate_positional_flexibility(players: Iterable[Player]) -> float:
    """Distinct positions covered divided by total position eligibilities."""
    counts: Dict[str, int] = {}
    for player in players:
        for pos in player.positions:
            counts[pos] = counts.get(pos, 0) + 1

    total = sum(counts.values())
    if total == 0:
        return 0.0
    return len(counts) / total


def recommend_strategy(
    live_needs: Dict[str, str], remaining_budget: int
) -> str:
    """Suggest an archetype from the live category picture."""
    if len(weak_categories(live_needs)) >= RECOMMEND_PUNT_WEAK_COUNT:
        return "punt_ft"
    if (
        len(strong_categories(live_needs)) >= RECOMMEND_STARS_STRONG_COUNT
        and remaining_budget > RECOMMEND_STARS_MIN_BUDGET
    ):
        return "stars_scrubs"
    return "balanced"


def generate_roster_analysis(
    roster: MyRoster,
    strategy: str,
    thresholds: Optional[Dict[str, Tuple[float, float]]] = None,
) -> RosterAnalysis:
    """Build the RosterAnalysis stored on a draft snapshot.

    Args:
        roster: The operator's roster.
        strategy: Selected archetype; punt archetypes force their category
            to ``weak``.
        thresholds: Category thresholds, defaulting to the snapshot tuning.
    """
    players = roster.players()
    totals = sum_category_impacts(players)
    needs = classify_categories(totals, thresholds or ROSTER_CATEGORY_THRESHOLDS)
    needs = apply_punt_override(needs, strategy)

    recommended = recommend_strategy(
        analyze_roster_categories(roster), roster.remaining_budget
    )

    analysis = RosterAnalysis(
        current_category_totals=totals,
        category_needs=needs,
        recommended_strategy=recommended,
        positional_flexibility=calculate_positional_flexibility(players),
    )
    logger.debug(
        "Roster analysis: %d players, weak=%s, recommended=%s",
        len(players), weak_categories(needs), recommended,
    )
    return analysis
