"""How well a player matches a roster archetype."""

from src.bidding_engine.categories import weak_categories
from src.bidding_engine.config import CHEAP_PLAYER_VALUE, ELITE_TIER
from src.draft_manager.draft_state import MyRoster, Player, RosterAnalysis


def calculate_strategy_fit(
    player: Player, strategy: str, roster_analysis: RosterAnalysis
) -> float:
    """Return a 0-1 fit of *player* for *strategy*.

    Punt archetypes reward players who are bad in the sacrificed category
    and penalize those who excel in it.
    """
    impact = player.category_strengths

    if strategy == "stars_scrubs":
        if player.tier <= ELITE_TIER:
            return 0.9
        return 0.7 if player.projected_value <= CHEAP_PLAYER_VALUE else 0.3

    if strategy == "balanced":
        score = 0.5
        for cat, strength in roster_analysis.category_needs.items():
            if strength == "weak" and impact.get(cat) > 0.5:
                score += 0.1
            if strength == "strong" and impact.get(cat) < -0.5:
                score -= 0.1
        return max(0.0, min(1.0, score))

    if strategy == "punt_ft":
        return _punt_fit(impact.ft_pct, fights_above=0.5)
    if strategy == "punt_fg":
        return _punt_fit(impact.fg_pct, fights_above=0.5)
    if strategy == "punt_assists":
        return _punt_fit(impact.assists, fights_above=1.0)
    if strategy == "punt_to":
        # High-turnover players are the ones a TO punt can absorb
        if impact.turnovers > 0.5:
            return 0.9
        return 0.3 if impact.turnovers < -0.5 else 0.6

    return 0.5


def _punt_fit(value: float, fights_above: float) -> float:
    if value < -0.5:
        return 0.8
    if value > fights_above:
        return 0.2
    return 0.6


def calculate_punt_strategy_score(
    player: Player,
    roster: MyRoster,
    selected_strategy: str,
    roster_analysis: RosterAnalysis,
) -> int:
    """Punt-strategy sub-score (0-15)."""
    impact = player.category_strengths
    fit = calculate_strategy_fit(player, selected_strategy, roster_analysis)

    if roster.filled_count() <= 3:
        # Early: archetype fit plus category breadth
        score = int(fit * 10)
        positive = sum(1 for value in impact.values() if value > 0)
        if positive >= 5:
            score += 5
        elif positive >= 3:
            score += 3
        elif positive >= 2:
            score += 1
        return min(15, score)

    score = 0
    weak = weak_categories(roster_analysis.category_needs)
    if len(weak) >= 2:
        punt_score = 0
        for cat in weak:
            if impact.get(cat) < -0.3:
                punt_score += 2
            elif impact.get(cat) > 0.5:
                punt_score -= 1
        score += max(0, min(8, punt_score))

    score += int(fit * 7)
    return min(15, score)
