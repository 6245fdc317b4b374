from __future__ import annotations
from typing import Dict
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.services.draft import get_state, pick_position, remaining_needs


def get_team_roster(db: Session, draft_id: str, team_id: str) -> dict:
    """
    Players a team has drafted so far (pick order) and what it still needs.
    """
    state = get_state(db, draft_id)
    team = next((t for t in state.teams if t.id == team_id), None)
    if team is None:
        raise NotFoundError("Team", team_id)

    index = state.player_index()
    n_teams = len(state.draft_order) or 1
    team_picks = state.team_picks(team_id)

    players = []
    for pick in team_picks:
        p = index.get(pick.player_id)
        players.append({
            "player_id": pick.player_id,
            "name": p.name if p else None,
            "positions": list(p.positions or []) if p else [],
            "pick_number": pick.pick_number,
            "round": pick_position(pick.pick_number, n_teams)[0],
            "slot": pick.slot,
        })

    return {
        "team_id": team.id,
        "team_name": team.name,
        "players": players,
        "needs": remaining_needs(state.requirements, team_picks, index),
    }


def get_team_needs(db: Session, draft_id: str, team_id: str) -> Dict[str, int]:
    return get_team_roster(db, draft_id, team_id)["needs"]
