"""Shared fixtures for the test suite."""

import textwrap

import pytest

from src.draft_manager.draft_controller import finalize_draft
from src.draft_manager.draft_initializer import DraftInitializer
from src.draft_manager.draft_state import CategoryImpact, Player

MY_TEAM = "My Team"
TEAM_NAMES = [MY_TEAM] + [f"Team {i}" for i in range(2, 11)]

# Single-position cycle used by the generated pool
POSITION_CYCLE = (("PG",), ("SG",), ("SF",), ("PF",), ("C",))

# Projection export with the usual quirks: quoted numbers, percents,
# multi-position strings, a missing team, an unknown position and a blank row
SAMPLE_CSV = textwrap.dedent("""\
    Player,Team,Pos,Value,GP,PTS,REB,AST,STL,BLK,FG%,FT%,3PM,TOV,FGA,FTA
    "Nikola Jokic",DEN,C,62.5,70,"26.4",12.4,9.0,1.4,0.9,58.3,81.7,1.1,3.0,17.3,6.2
    Shai Gilgeous-Alexander,OKC,PG/SG,55.0,75,30.1,5.5,6.2,2.0,1.0,53.5,90.1,1.3,2.4,20.1,8.8
    Anthony Davis,DAL,"PF,C",38.0,60,24.7,11.6,3.5,1.2,2.2,0.55,0.79,0.6,2.2,18.0,7.0
    Role Player,,SF,4.0,50,8.2,4.1,1.2,0.7,0.4,45.0,70.0,1.0,0.9,7.0,1.5
    Mystery Man,FA,G,1.0,10,2.0,1.0,1.0,0.1,0.1,40.0,60.0,0.2,0.5,2.0,0.5
    ,,,,,,,,,,,,,,,
""")


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

def make_player(
    player_id="p1",
    positions=("PG",),
    projected_value=20.0,
    tier=3,
    name=None,
    team="TST",
    **impacts,
):
    """Build a catalog Player; keyword arguments set category impacts."""
    return Player(
        player_id=player_id,
        name=name or f"Player {player_id}",
        team=team,
        positions=tuple(positions),
        projected_value=float(projected_value),
        tier=tier,
        category_strengths=CategoryImpact(**impacts),
    )


def tier_for_value(value):
    for tier, minimum in ((1, 40), (2, 25), (3, 12), (4, 5)):
        if value >= minimum:
            return tier
    return 5


def make_pool(count=200, top_value=60.0, decay=0.95):
    """Generated pool with geometrically decaying values.

    With the defaults: 8 tier-1, 10 tier-2, 14 tier-3, 17 tier-4 players
    and the rest tier 5. ``p000`` is a $60 tier-1 PG.
    """
    players = []
    for i in range(count):
        value = max(1.0, round(top_value * decay ** i, 1))
        players.append(
            make_player(
                f"p{i:03d}",
                positions=POSITION_CYCLE[i % len(POSITION_CYCLE)],
                projected_value=value,
                tier=tier_for_value(value),
            )
        )
    return players


def make_state(players=None, strategy="balanced", total_budget=200, team_names=None):
    """Fresh draft snapshot for a 10-team league."""
    if players is None:
        players = make_pool()
    return DraftInitializer().create_draft(
        team_names or TEAM_NAMES,
        MY_TEAM,
        total_budget=total_budget,
        strategy=strategy,
        players=players,
    )


def draft_players(state, team_name, picks):
    """Apply ``(player_id, price)`` picks for one team in order."""
    for player_id, price in picks:
        state = finalize_draft(state, player_id, price, team_name)
    return state


@pytest.fixture
def pool():
    return make_pool()


@pytest.fixture
def state(pool):
    return make_state(pool)


@pytest.fixture
def star(state):
    """The $60 tier-1 PG at the top of the generated pool."""
    return state.find_remaining_player("p000")


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "projections.csv"
    path.write_text(SAMPLE_CSV)
    return path
