from __future__ import annotations
from typing import List, Optional
from sqlalchemy.orm import Session

from app.db.models import League
from app.services import repository as repo


def list_leagues(db: Session) -> List[League]:
    return repo.leagues.get_all(db)


def create_league(
    db: Session,
    name: str,
    number_of_teams: int = 12,
    roster_size: int = 23,
    requirements: Optional[List[dict]] = None,
) -> League:
    league = repo.leagues.create(db, name=name, number_of_teams=number_of_teams, roster_size=roster_size)
    if requirements:
        repo.replace_requirements(db, league.id, requirements)
    return league


def update_league(db: Session, league_id: str, updates: dict) -> League:
    # None means "leave as is"
    fields = {k: v for k, v in updates.items() if v is not None}
    return repo.leagues.update(db, league_id, **fields)


def set_requirements(db: Session, league_id: str, requirements: List[dict]) -> List:
    """Replace the league's positional requirements wholesale."""
    return repo.replace_requirements(db, league_id, requirements)
