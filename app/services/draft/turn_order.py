# app/services/draft/turn_order.py
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from app.core.errors import InvalidOrderError


def _require_order(draft_order: Sequence[str]) -> None:
    if not draft_order:
        raise InvalidOrderError("Draft order is empty; set the draft order before picking")


def team_on_clock(draft_order: Sequence[str], picks_made: int) -> str:
    """
    Team id expected to make the next pick in a snake draft.

    Even (0-based) rounds run in draft order, odd rounds run reversed.
    """
    _require_order(draft_order)
    if picks_made < 0:
        raise InvalidOrderError(f"picks_made must be >= 0, got {picks_made}")

    n = len(draft_order)
    pick_number = picks_made + 1
    rnd = (pick_number - 1) // n
    position_in_round = (pick_number - 1) % n
    team_index = n - 1 - position_in_round if rnd % 2 == 1 else position_in_round
    return draft_order[team_index]


def pick_position(pick_number: int, n_teams: int) -> Tuple[int, int]:
    """1-based pick number -> (round, pick within round), both 1-based."""
    if n_teams <= 0:
        raise InvalidOrderError("Draft order is empty")
    if pick_number < 1:
        raise InvalidOrderError(f"pick_number must be >= 1, got {pick_number}")
    return (pick_number - 1) // n_teams + 1, (pick_number - 1) % n_teams + 1


def picks_until_user_turn(draft_order: Sequence[str], current_team_id: str, user_team_id: str) -> int:
    """
    Forward cyclic distance from the team on the clock to the user's team
    within the first-round order (0 when the user is on the clock).

    This mirrors what the board shows; it does not account for the snake
    turn at the end of a round.
    """
    _require_order(draft_order)
    order = list(draft_order)
    try:
        current_index = order.index(current_team_id)
        user_index = order.index(user_team_id)
    except ValueError:
        raise InvalidOrderError("Team is not part of the draft order")
    return (user_index - current_index) % len(order)


def validate_draft_order(draft_order: Sequence[str], team_ids: Iterable[str]) -> List[str]:
    """Order must be a permutation of the draft's teams."""
    order = list(draft_order)
    _require_order(order)

    teams = set(team_ids)
    seen: set[str] = set()
    for tid in order:
        if tid in seen:
            raise InvalidOrderError(f"Team {tid} appears more than once in the draft order")
        if tid not in teams:
            raise InvalidOrderError(f"Team {tid} does not belong to this draft")
        seen.add(tid)

    missing = teams - seen
    if missing:
        raise InvalidOrderError(f"Draft order is missing {len(missing)} team(s)")
    return order


def effective_draft_order(draft, teams) -> List[str]:
    # until an order is saved, teams draft in listing order
    return list(draft.draft_order or []) or [t.id for t in teams]
