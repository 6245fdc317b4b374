# app/api/routes_league.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.league import League, LeagueCreate, LeagueUpdate, PositionalRequirement
from app.services import repository as repo
from app.services.leagues import create_league, list_leagues, set_requirements, update_league

router = APIRouter(prefix="/leagues", tags=["leagues"])


@router.get("", response_model=List[League])
def leagues_list(db: Session = Depends(get_db)):
    return list_leagues(db)


@router.post("", response_model=League, status_code=201)
def leagues_create(body: LeagueCreate, db: Session = Depends(get_db)):
    return create_league(
        db,
        body.name,
        number_of_teams=body.number_of_teams,
        roster_size=body.roster_size,
        requirements=[r.model_dump() for r in body.positional_requirements],
    )


@router.get("/{league_id}", response_model=League)
def leagues_get(league_id: str, db: Session = Depends(get_db)):
    return repo.leagues.require(db, league_id)


@router.patch("/{league_id}", response_model=League)
def leagues_update(league_id: str, body: LeagueUpdate, db: Session = Depends(get_db)):
    return update_league(db, league_id, body.model_dump())


@router.delete("/{league_id}", status_code=204)
def leagues_delete(league_id: str, db: Session = Depends(get_db)):
    """Deletes the league with its requirements and drafts."""
    repo.leagues.delete(db, league_id)
    return Response(status_code=204)


# ---------------- POSITIONAL REQUIREMENTS ----------------
@router.get("/{league_id}/requirements", response_model=List[PositionalRequirement])
def requirements_get(league_id: str, db: Session = Depends(get_db)):
    repo.leagues.require(db, league_id)
    return repo.get_requirements(db, league_id)


@router.put("/{league_id}/requirements", response_model=List[PositionalRequirement])
def requirements_replace(
    league_id: str,
    body: List[PositionalRequirement],
    db: Session = Depends(get_db),
):
    """
    Replaces the league's requirements. Composite slots (CI, MI) and the
    bench wildcard (BEN) are allowed here, players only ever hold primitive tags.
    """
    return set_requirements(db, league_id, [r.model_dump() for r in body])
