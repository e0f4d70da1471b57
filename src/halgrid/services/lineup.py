"""
Greedy optimal lineup for a league's roster slots.

Dedicated position slots are filled first, then FLEX-style slots from
narrowest to widest eligibility, each with the highest-projected player still
available. Out/IR players are never started.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from ..models import Player
from ..utils.constants import FLEX_POSITIONS, NON_STARTING_SLOTS, SUPER_FLEX_POSITIONS

# Multi-position slot spellings across platforms
SLOT_ELIGIBILITY: Dict[str, List[str]] = {
    "FLEX": FLEX_POSITIONS,
    "W/R/T": FLEX_POSITIONS,
    "UTIL": FLEX_POSITIONS,
    "W/R": ["WR", "RB"],
    "W/T": ["WR", "TE"],
    "REC_FLEX": ["WR", "TE"],
    "WRRB_FLEX": ["WR", "RB"],
    "SUPER_FLEX": SUPER_FLEX_POSITIONS,
    "SUPERFLEX": SUPER_FLEX_POSITIONS,
    "Q/W/R/T": SUPER_FLEX_POSITIONS,
    "OP": SUPER_FLEX_POSITIONS,
    "IDP_FLEX": ["LB", "DB", "DL", "DE", "DT", "CB", "S"],
}

DEFAULT_ROSTER_SLOTS = ["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "K", "DEF"]


class LineupSlot(BaseModel):
    slot: str
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    position: Optional[str] = None
    projected_points: float = 0.0


class OptimalLineup(BaseModel):
    starters: List[LineupSlot] = Field(default_factory=list)
    bench: List[str] = Field(default_factory=list)
    projected_total: float = 0.0
    empty_slots: List[str] = Field(default_factory=list)


def eligible_positions(slot: str) -> List[str]:
    slot = slot.upper()
    if slot in SLOT_ELIGIBILITY:
        return SLOT_ELIGIBILITY[slot]
    if slot in ("D/ST", "DST"):
        return ["DEF"]
    return [slot]


def player_projection(player: Player) -> float:
    """Weekly projection, falling back to the season average."""
    if player.projected_points is not None:
        return player.projected_points
    return player.season_average


def optimize_lineup(
    players: Sequence[Player],
    roster_positions: Optional[Sequence[str]] = None,
) -> OptimalLineup:
    """Fill ``roster_positions`` greedily from ``players``."""
    slots = [s for s in (roster_positions or DEFAULT_ROSTER_SLOTS) if s.upper() not in NON_STARTING_SLOTS]
    # narrowest slots first so flex spots do not consume scarce starters
    ordered: List[Tuple[int, str]] = sorted(
        enumerate(slots), key=lambda item: (len(eligible_positions(item[1])), item[0])
    )

    pool = sorted(
        (p for p in players if not p.is_unavailable),
        key=player_projection,
        reverse=True,
    )
    used = set()
    filled: Dict[int, LineupSlot] = {}

    for index, slot in ordered:
        allowed = eligible_positions(slot)
        choice = next(
            (
                p
                for p in pool
                if p.player_id not in used and (p.position in allowed or any(fp in allowed for fp in p.fantasy_positions))
            ),
            None,
        )
        if choice is None:
            filled[index] = LineupSlot(slot=slot)
            continue
        used.add(choice.player_id)
        filled[index] = LineupSlot(
            slot=slot,
            player_id=choice.player_id,
            player_name=choice.name,
            position=choice.position,
            projected_points=round(player_projection(choice), 2),
        )

    starters = [filled[i] for i in range(len(slots))]
    return OptimalLineup(
        starters=starters,
        bench=[p.player_id for p in players if p.player_id not in used],
        projected_total=round(sum(s.projected_points for s in starters), 2),
        empty_slots=[s.slot for s in starters if s.player_id is None],
    )
