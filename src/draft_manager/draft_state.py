"""Draft state data models - immutable snapshot of everything the engine reads.

Every record here is a frozen dataclass. Draft events never mutate a
snapshot; they build a new one (see ``draft_controller``).
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, List, Optional, Tuple

from src.draft_manager.config import (
    EARLY_PHASE_CUTOFF,
    MIDDLE_PHASE_CUTOFF,
    ROSTER_SIZE,
)

CATEGORIES = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "fg_pct",
    "ft_pct",
    "three_pointers",
    "turnovers",
)

PERCENTAGE_CATEGORIES = ("fg_pct", "ft_pct")


def category_keys() -> Tuple[str, ...]:
    """The nine fantasy scoring categories, in display order."""
    return CATEGORIES


@dataclass(frozen=True)
class CategoryImpact:
    """Standardized (z-score like) contribution per scoring category.

    Positive is good for every field except ``turnovers``, where a negative
    value is the desirable direction.
    """

    points: float = 0.0
    rebounds: float = 0.0
    assists: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    fg_pct: float = 0.0
    ft_pct: float = 0.0
    three_pointers: float = 0.0
    turnovers: float = 0.0

    @classmethod
    def zero(cls) -> "CategoryImpact":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "CategoryImpact":
        return cls(**{cat: float(data.get(cat, 0.0)) for cat in CATEGORIES})

    def get(self, category: str) -> float:
        return getattr(self, category)

    def items(self) -> Iterator[Tuple[str, float]]:
        for cat in CATEGORIES:
            yield cat, getattr(self, cat)

    def values(self) -> List[float]:
        return [getattr(self, cat) for cat in CATEGORIES]

    def to_dict(self) -> Dict[str, float]:
        return {cat: getattr(self, cat) for cat in CATEGORIES}


@dataclass(frozen=True)
class PlayerStats:
    """Raw per-game season statistics."""

    points: float = 0.0
    rebounds: float = 0.0
    assists: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    fg_pct: float = 0.0
    ft_pct: float = 0.0
    three_pointers: float = 0.0
    turnovers: float = 0.0
    games: int = 0

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Player:
    """Catalog entity. Created once at catalog load, never mutated."""

    player_id: str
    name: str
    team: str
    positions: Tuple[str, ...]
    projected_value: float
    tier: int
    category_strengths: CategoryImpact = field(default_factory=CategoryImpact)
    stats: PlayerStats = field(default_factory=PlayerStats)

    def has_position(self, position: str) -> bool:
        return position in self.positions

    @property
    def is_multi_positional(self) -> bool:
        return len(self.positions) > 1


@dataclass(frozen=True)
class DraftedPlayer(Player):
    """A catalog player plus the outcome of its auction."""

    drafted_by: str = ""
    actual_cost: int = 0
    draft_order: int = 0

    @classmethod
    def from_player(
        cls, player: Player, drafted_by: str, actual_cost: int, draft_order: int
    ) -> "DraftedPlayer":
        return cls(
            player_id=player.player_id,
            name=player.name,
            team=player.team,
            positions=player.positions,
            projected_value=player.projected_value,
            tier=player.tier,
            category_strengths=player.category_strengths,
            stats=player.stats,
            drafted_by=drafted_by,
            actual_cost=actual_cost,
            draft_order=draft_order,
        )

    def to_player(self) -> Player:
        """Strip the auction outcome (used when a pick is undone)."""
        return Player(
            player_id=self.player_id,
            name=self.name,
            team=self.team,
            positions=self.positions,
            projected_value=self.projected_value,
            tier=self.tier,
            category_strengths=self.category_strengths,
            stats=self.stats,
        )

    @property
    def overbid(self) -> float:
        return self.actual_cost - self.projected_value


@dataclass(frozen=True)
class RosterSlot:
    """A named roster slot holding at most one player."""

    position: str  # PG, SG, G, SF, PF, F, C, UTIL, BENCH
    player: Optional[DraftedPlayer] = None
    required: bool = True

    @property
    def is_filled(self) -> bool:
        return self.player is not None


@dataclass(frozen=True)
class MyRoster:
    """The operator's roster. ``remaining_budget + total_spent`` is constant."""

    slots: Tuple[RosterSlot, ...]
    total_spent: int
    remaining_budget: int

    def filled_count(self) -> int:
        return sum(1 for slot in self.slots if slot.is_filled)

    def empty_count(self) -> int:
        return sum(1 for slot in self.slots if not slot.is_filled)

    def players(self) -> List[DraftedPlayer]:
        return [slot.player for slot in self.slots if slot.player is not None]


@dataclass(frozen=True)
class TeamInfo:
    """Full participant model. Derived fields are rebuilt, never edited."""

    team_name: str
    remaining_budget: int
    total_spent: int
    players_owned: Tuple[DraftedPlayer, ...] = ()
    slots_remaining: int = ROSTER_SIZE
    position_needs: Dict[str, int] = field(default_factory=dict)
    category_strengths: CategoryImpact = field(default_factory=CategoryImpact)
    average_player_value: float = 0.0
    is_my_team: bool = False

    @property
    def budget_per_slot(self) -> float:
        """Remaining budget per open slot (0 when the roster is full)."""
        if self.slots_remaining <= 0:
            return 0.0
        return self.remaining_budget / self.slots_remaining


@dataclass(frozen=True)
class TeamBudgetInfo:
    """Legacy per-team budget summary."""

    team_name: str
    remaining_budget: int
    players_owned: int
    slots_remaining: int


@dataclass(frozen=True)
class RosterAnalysis:
    current_category_totals: CategoryImpact
    category_needs: Dict[str, str]  # category -> strong / weak / neutral
    recommended_strategy: str
    positional_flexibility: float


@dataclass(frozen=True)
class BudgetAllocation:
    early_phase_target: int
    middle_phase_target: int
    late_phase_target: int
    star_player_budget: int
    reasoning: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Nomination:
    player: Player
    current_bid: int
    nominated_by: str


@dataclass(frozen=True)
class DraftState:
    """Complete draft snapshot handed to the engine.

    Core fields: ``players_remaining``, ``players_drafted``, ``my_roster``,
    ``all_teams``, ``selected_strategy``. ``draft_phase``, ``roster_analysis``
    and ``budget_allocation`` are derived and must always be rebuilt from the
    core fields (``draft_controller.rebuild_state``).
    """

    total_budget: int
    players_remaining: Tuple[Player, ...]
    players_drafted: Tuple[DraftedPlayer, ...]
    my_roster: MyRoster
    draft_phase: str
    total_teams: int
    selected_strategy: str
    roster_analysis: RosterAnalysis
    budget_allocation: BudgetAllocation
    all_teams: Tuple[TeamInfo, ...]
    current_nomination: Optional[Nomination] = None
    other_teams_budgets: Tuple[TeamBudgetInfo, ...] = ()

    @property
    def total_picks(self) -> int:
        return self.total_teams * ROSTER_SIZE

    def get_team(self, team_name: str) -> Optional[TeamInfo]:
        """Get a team by name, or None if no such team exists."""
        for team in self.all_teams:
            if team.team_name == team_name:
                return team
        return None

    def get_my_team(self) -> Optional[TeamInfo]:
        for team in self.all_teams:
            if team.is_my_team:
                return team
        return None

    def find_remaining_player(self, player_id: str) -> Optional[Player]:
        for player in self.players_remaining:
            if player.player_id == player_id:
                return player
        return None

    def is_player_available(self, player_id: str) -> bool:
        return self.find_remaining_player(player_id) is not None


def get_draft_phase(drafted_count: int, total_picks: int) -> str:
    """Classify draft progress as early (<30%), middle (<70%) or late."""
    progress = drafted_count / max(1, total_picks)
    if progress < EARLY_PHASE_CUTOFF:
        return "early"
    if progress < MIDDLE_PHASE_CUTOFF:
        return "middle"
    return "late"
