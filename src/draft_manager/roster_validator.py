"""Roster slot eligibility, slot assignment and positional needs."""

from dataclasses import replace
from typing import Dict, Optional, Sequence

from src.draft_manager.config import (
    DEFAULT_ROSTER_SLOTS,
    FLEX_SLOTS,
    FORWARD_POSITIONS,
    GUARD_POSITIONS,
)
from src.draft_manager.draft_rules import NoEligibleSlotError, ValidationError
from src.draft_manager.draft_state import DraftedPlayer, MyRoster, Player, RosterSlot


def can_fill_slot(player: Player, slot: RosterSlot) -> bool:
    """Whether *player* may occupy *slot* (which must be empty)."""
    if slot.is_filled:
        return False

    if slot.position in FLEX_SLOTS:
        return True
    if slot.position == "G":
        return any(pos in GUARD_POSITIONS for pos in player.positions)
    if slot.position == "F":
        return any(pos in FORWARD_POSITIONS for pos in player.positions)
    return slot.position in player.positions


def get_roster_needs(roster: MyRoster) -> Dict[str, int]:
    """Count open slots per base position.

    A flex guard slot counts toward PG while a PG slot is still open,
    otherwise toward SG (SF/PF likewise for the forward slot).
    UTIL and BENCH count toward ``any``.
    """
    needs = {"PG": 0, "SG": 0, "SF": 0, "PF": 0, "C": 0, "any": 0}

    for slot in roster.slots:
        if slot.is_filled:
            continue
        if slot.position == "G":
            needs["PG" if needs["PG"] > 0 else "SG"] += 1
        elif slot.position == "F":
            needs["SF" if needs["SF"] > 0 else "PF"] += 1
        elif slot.position in needs:
            needs[slot.position] += 1
        else:
            needs["any"] += 1

    return needs


class RosterValidator:
    """Builds the operator's roster and assigns drafted players to slots."""

    def __init__(self, roster_slots: Sequence[str] = DEFAULT_ROSTER_SLOTS):
        self.roster_slots = tuple(roster_slots)

    def initialize_roster(self, total_budget: int) -> MyRoster:
        """Empty roster with the full budget available."""
        return MyRoster(
            slots=tuple(RosterSlot(position=pos) for pos in self.roster_slots),
            total_spent=0,
            remaining_budget=total_budget,
        )

    def determine_roster_slot(self, roster: MyRoster, player: Player) -> int:
        """
        Index of the slot a player should fill.

        Slots are tried in roster order, so dedicated positions win over
        G/F, which win over UTIL, which wins over BENCH.

        Raises:
            NoEligibleSlotError: if no empty slot accepts the player.
        """
        for index, slot in enumerate(roster.slots):
            if can_fill_slot(player, slot):
                return index

        raise NoEligibleSlotError(
            f"No eligible empty slot for {player.name} "
            f"({'/'.join(player.positions)})"
        )

    def add_player(self, roster: MyRoster, drafted: DraftedPlayer) -> MyRoster:
        """Return a new roster with *drafted* placed and its cost charged."""
        if drafted.actual_cost > roster.remaining_budget:
            raise ValidationError(
                f"Cannot pay ${drafted.actual_cost} with "
                f"${roster.remaining_budget} remaining"
            )

        index = self.determine_roster_slot(roster, drafted)
        slots = list(roster.slots)
        slots[index] = replace(slots[index], player=drafted)

        return MyRoster(
            slots=tuple(slots),
            total_spent=roster.total_spent + drafted.actual_cost,
            remaining_budget=roster.remaining_budget - drafted.actual_cost,
        )

    def remove_player(self, roster: MyRoster, player_id: str) -> MyRoster:
        """Return a new roster with the player removed and its cost refunded."""
        index = self._find_player_slot(roster, player_id)
        if index is None:
            raise ValidationError(f"Player {player_id} is not on the roster")

        refund = roster.slots[index].player.actual_cost
        slots = list(roster.slots)
        slots[index] = replace(slots[index], player=None)

        return MyRoster(
            slots=tuple(slots),
            total_spent=roster.total_spent - refund,
            remaining_budget=roster.remaining_budget + refund,
        )

    @staticmethod
    def _find_player_slot(roster: MyRoster, player_id: str) -> Optional[int]:
        for index, slot in enumerate(roster.slots):
            if slot.player is not None and slot.player.player_id == player_id:
                return index
        return None

    def get_roster_summary(self, roster: MyRoster) -> Dict[str, Dict[str, int]]:
        """Filled / required / remaining count per slot type."""
        summary: Dict[str, Dict[str, int]] = {}

        for slot in roster.slots:
            entry = summary.setdefault(
                slot.position, {"filled": 0, "required": 0, "remaining": 0}
            )
            entry["required"] += 1
            if slot.is_filled:
                entry["filled"] += 1
            else:
                entry["remaining"] += 1

        return summary
