from __future__ import annotations
import logging
from typing import List
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.db.models import Keeper, Team
from app.services import repository as repo

logger = logging.getLogger(__name__)


def create_team(db: Session, draft_id: str, name: str, is_user_team: bool = False) -> Team:
    """
    Add a team to a draft while it is still in setup. At most one team per
    draft is the human team. A draft with a saved order gets the new team
    appended to it so the order stays a permutation of the teams.
    """
    draft = repo.drafts.require(db, draft_id)
    if draft.status != "setup":
        raise ConflictError("Teams can only be added while the draft is in setup")
    if repo.count_picks(db, draft_id):
        raise ConflictError("Teams cannot be added once picks have been made; reset the draft first")

    existing = repo.get_teams(db, draft_id)
    if is_user_team and any(t.is_user_team for t in existing):
        raise ConflictError("Draft already has a user team")

    team = repo.teams.create(db, commit=False, draft_id=draft_id, name=name, is_user_team=is_user_team)
    if draft.draft_order:
        repo.drafts.update(db, draft_id, commit=False, draft_order=[*draft.draft_order, team.id])
    with repo.upstream_io(db, "create Team"):
        db.commit()
    logger.info("team %s (%s) added to draft=%s", team.id, name, draft_id)
    return team


def list_keepers(db: Session, draft_id: str) -> List[Keeper]:
    repo.drafts.require(db, draft_id)
    return repo.get_keepers(db, draft_id)


def create_keeper(db: Session, draft_id: str, team_id: str, player_id: str, draft_slot: int) -> Keeper:
    """Keepers are informational; they never occupy a pick in the pick sequence."""
    repo.drafts.require(db, draft_id)
    team = repo.teams.get_by_id(db, team_id)
    if team is None or team.draft_id != draft_id:
        raise NotFoundError("Team", team_id)
    repo.players.require(db, player_id)

    for k in repo.get_keepers(db, draft_id):
        if k.player_id == player_id:
            raise ConflictError(f"Player {player_id} is already a keeper in this draft")
        if k.draft_slot == draft_slot:
            raise ConflictError(f"Pick {draft_slot} already holds a keeper")

    return repo.keepers.create(db, draft_id=draft_id, team_id=team_id, player_id=player_id, draft_slot=draft_slot)


def delete_keeper(db: Session, draft_id: str, keeper_id: str) -> None:
    keeper = repo.keepers.get_by_id(db, keeper_id)
    if keeper is None or keeper.draft_id != draft_id:
        raise NotFoundError("Keeper", keeper_id)
    repo.keepers.delete(db, keeper_id)
