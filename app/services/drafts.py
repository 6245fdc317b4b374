from __future__ import annotations
import logging
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.db.models import Draft
from app.services import repository as repo

logger = logging.getLogger(__name__)


def list_drafts(db: Session, league_id: Optional[str] = None) -> List[Draft]:
    rows = repo.drafts.get_all(db)
    if league_id:
        rows = [d for d in rows if d.league_id == league_id]
    return rows


def create_draft(
    db: Session,
    league_id: str,
    name: str,
    team_names: Sequence[str] = (),
    user_team_index: Optional[int] = None,
) -> Draft:
    """
    New draft in setup. When `team_names` are given the teams are created
    with it and the first-round order follows the list.
    """
    repo.leagues.require(db, league_id)
    if user_team_index is not None and not 0 <= user_team_index < len(team_names):
        raise ConflictError(f"user_team_index {user_team_index} is out of range")

    draft = repo.drafts.create(
        db, commit=False, league_id=league_id, name=name, status="setup", current_pick=0, draft_order=[]
    )
    order = []
    for i, team_name in enumerate(team_names):
        team = repo.teams.create(
            db, commit=False, draft_id=draft.id, name=team_name, is_user_team=(i == user_team_index)
        )
        order.append(team.id)
    if order:
        repo.drafts.update(db, draft.id, commit=False, draft_order=order)
    with repo.upstream_io(db, "create Draft"):
        db.commit()

    logger.info("created draft=%s league=%s with %d teams", draft.id, league_id, len(order))
    return draft
