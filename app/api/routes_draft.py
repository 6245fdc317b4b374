# app/api/routes_draft.py
from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_draft_state
from app.schemas.draft import (
    AutoPickResult,
    Draft,
    DraftCreate,
    DraftOrderUpdate,
    DraftPick,
    DraftStateOut,
    DraftStatusUpdate,
    DuplicateDraftRequest,
    HistoryItem,
    PickCreate,
)
from app.schemas.team import Keeper, KeeperCreate, Roster, Team, TeamCreate
from app.services import repository as repo
from app.services.draft import (
    DraftState,
    auto_draft_current,
    draft_history,
    duplicate_draft,
    make_pick,
    reset_draft,
    set_draft_order,
    set_status,
)
from app.services.drafts import create_draft, list_drafts
from app.services.roster import get_team_needs, get_team_roster
from app.services.teams import create_keeper, create_team, delete_keeper, list_keepers

router = APIRouter(prefix="/drafts", tags=["drafts"])


# ---------------- DRAFTS ----------------
@router.get("", response_model=List[Draft])
def drafts_list(
    league_id: Optional[str] = Query(default=None, description="Only drafts of this league"),
    db: Session = Depends(get_db),
):
    return list_drafts(db, league_id=league_id)


@router.post("", response_model=Draft, status_code=201)
def drafts_create(body: DraftCreate, db: Session = Depends(get_db)):
    return create_draft(db, body.league_id, body.name, body.team_names, body.user_team_index)


@router.get("/{draft_id}", response_model=Draft)
def drafts_get(draft_id: str, db: Session = Depends(get_db)):
    return repo.drafts.require(db, draft_id)


@router.delete("/{draft_id}", status_code=204)
def drafts_delete(draft_id: str, db: Session = Depends(get_db)):
    """Deletes the draft with its teams, picks, keepers and plans."""
    repo.drafts.delete(db, draft_id)
    return Response(status_code=204)


@router.get("/{draft_id}/state", response_model=DraftStateOut)
def drafts_state(state: DraftState = Depends(get_draft_state)):
    """
    Board snapshot: who is on the clock, round / pick, picks until the user
    team is up. Re-read after every command.
    """
    return DraftStateOut.model_validate(
        dict(
            draft=state.draft,
            teams=state.teams,
            picks=state.picks,
            draft_order=state.draft_order,
            pick_number=state.pick_number,
            round=state.round,
            pick_in_round=state.pick_in_round,
            on_clock=state.on_clock,
            user_team_id=state.user_team.id if state.user_team else None,
            picks_until_user=state.picks_until_user,
            is_user_turn=bool(state.on_clock and state.on_clock.is_user_team),
            available_count=len(state.available),
        ),
        from_attributes=True,
    )


@router.put("/{draft_id}/order", response_model=Draft)
def drafts_set_order(draft_id: str, body: DraftOrderUpdate, db: Session = Depends(get_db)):
    return set_draft_order(db, draft_id, body.draft_order)


@router.put("/{draft_id}/status", response_model=Draft)
def drafts_set_status(draft_id: str, body: DraftStatusUpdate, db: Session = Depends(get_db)):
    return set_status(db, draft_id, body.status)


@router.post("/{draft_id}/reset", response_model=Draft)
def drafts_reset(draft_id: str, db: Session = Depends(get_db)):
    """Clears picks; teams, order, keepers and plans stay."""
    reset_draft(db, draft_id)
    return repo.drafts.require(db, draft_id)


@router.post("/{draft_id}/duplicate", response_model=Draft, status_code=201)
def drafts_duplicate(draft_id: str, body: DuplicateDraftRequest, db: Session = Depends(get_db)):
    return duplicate_draft(db, draft_id, body.name)


# ---------------- TEAMS ----------------
@router.get("/{draft_id}/teams", response_model=List[Team])
def teams_list(draft_id: str, db: Session = Depends(get_db)):
    repo.drafts.require(db, draft_id)
    return repo.get_teams(db, draft_id)


@router.post("/{draft_id}/teams", response_model=Team, status_code=201)
def teams_create(draft_id: str, body: TeamCreate, db: Session = Depends(get_db)):
    return create_team(db, draft_id, body.name, body.is_user_team)


@router.get("/{draft_id}/teams/{team_id}/roster", response_model=Roster)
def teams_roster(draft_id: str, team_id: str, db: Session = Depends(get_db)):
    return get_team_roster(db, draft_id, team_id)


@router.get("/{draft_id}/teams/{team_id}/needs", response_model=Dict[str, int])
def teams_needs(draft_id: str, team_id: str, db: Session = Depends(get_db)):
    return get_team_needs(db, draft_id, team_id)


# ---------------- KEEPERS ----------------
@router.get("/{draft_id}/keepers", response_model=List[Keeper])
def keepers_list(draft_id: str, db: Session = Depends(get_db)):
    return list_keepers(db, draft_id)


@router.post("/{draft_id}/keepers", response_model=Keeper, status_code=201)
def keepers_create(draft_id: str, body: KeeperCreate, db: Session = Depends(get_db)):
    return create_keeper(db, draft_id, body.team_id, body.player_id, body.draft_slot)


@router.delete("/{draft_id}/keepers/{keeper_id}", status_code=204)
def keepers_delete(draft_id: str, keeper_id: str, db: Session = Depends(get_db)):
    delete_keeper(db, draft_id, keeper_id)
    return Response(status_code=204)


# ---------------- PICKS ----------------
@router.get("/{draft_id}/picks", response_model=List[DraftPick])
def picks_list(draft_id: str, db: Session = Depends(get_db)):
    repo.drafts.require(db, draft_id)
    return repo.get_picks(db, draft_id)


@router.post("/{draft_id}/picks", response_model=DraftPick, status_code=201)
def picks_create(
    draft_id: str,
    body: PickCreate,
    enforce_turn: Optional[bool] = Query(default=None, description="Override ENFORCE_TURN_ORDER for this pick"),
    db: Session = Depends(get_db),
):
    return make_pick(db, draft_id, body.team_id, body.player_id, body.slot, enforce_turn=enforce_turn)


@router.post("/{draft_id}/auto-pick", response_model=AutoPickResult, status_code=201)
def picks_auto(draft_id: str, db: Session = Depends(get_db)):
    """Auto-drafts for the computer team on the clock."""
    pick = auto_draft_current(db, draft_id)
    player = repo.players.require(db, pick.player_id)
    return AutoPickResult.model_validate({"pick": pick, "player": player}, from_attributes=True)


@router.get("/{draft_id}/history", response_model=List[HistoryItem])
def picks_history(draft_id: str, db: Session = Depends(get_db)):
    return draft_history(db, draft_id)
