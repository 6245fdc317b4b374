# app/services/draft/positions.py
from __future__ import annotations

from typing import Dict, Iterable, Mapping

# ========= Position vocabulary =========

PRIMITIVE_POSITIONS = ("C", "1B", "2B", "SS", "3B", "OF", "SP", "RP", "UTIL")

CORNER_INFIELD = "CI"
MIDDLE_INFIELD = "MI"
BENCH = "BEN"

# composite slot -> primitive positions that can fill it
COMPOSITE_POSITIONS: Dict[str, frozenset[str]] = {
    CORNER_INFIELD: frozenset({"1B", "3B"}),
    MIDDLE_INFIELD: frozenset({"2B", "SS"}),
}

ALL_POSITIONS = PRIMITIVE_POSITIONS + (CORNER_INFIELD, MIDDLE_INFIELD, BENCH)


def player_qualifies(player_positions: Iterable[str], target: str) -> bool:
    """
    True when a player holding `player_positions` can fill a `target` roster slot.

    BEN takes anyone, a direct tag match always counts, CI takes 1B/3B and MI
    takes 2B/SS. There are no other implicit matches: a two-way player has to
    carry both tags to be credited for both.
    """
    if target == BENCH:
        return True
    held = set(player_positions or ())
    if target in held:
        return True
    group = COMPOSITE_POSITIONS.get(target)
    return bool(group and group & held)


def remaining_needs(requirements, team_picks, player_index: Mapping[str, object]) -> Dict[str, int]:
    """
    Remaining need per position for one team.

    requirements: objects with .position and .required
    team_picks:   picks credited to the team (objects with .player_id)
    player_index: player id -> player (objects with .positions)

    Each picked player counts toward every required position it qualifies
    for, so a 1B credits both 1B and CI (and BEN). Positions with nothing
    left to fill are left out. Picks whose player is unknown are skipped.
    """
    required: Dict[str, int] = {}
    for req in requirements:
        required[req.position] = required.get(req.position, 0) + int(req.required or 0)

    filled: Dict[str, int] = {pos: 0 for pos in required}
    for pick in team_picks:
        player = player_index.get(pick.player_id)
        if player is None:
            continue
        for pos in required:
            if player_qualifies(player.positions, pos):
                filled[pos] += 1

    out: Dict[str, int] = {}
    for pos, count in required.items():
        left = max(0, count - filled[pos])
        if left > 0:
            out[pos] = left
    return out
