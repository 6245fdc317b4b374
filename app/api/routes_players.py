# app/api/routes_players.py
from __future__ import annotations

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.common import PrimitivePosition
from app.schemas.player import Player, PlayerBulkUpdateItem, PlayerCreate, PlayerUpdate, TierAssignment
from app.services import repository as repo
from app.services.players import (
    assign_tier,
    bulk_create_players,
    bulk_update_players,
    bulk_upsert_players,
    create_player,
    search_players,
    update_player,
)

router = APIRouter(prefix="/players", tags=["players"])


@router.get(
    "",
    response_model=List[Player],
    summary="List players",
    description="Ordered by ADP, unranked players last (by tier).",
)
def players_list(
    position: Annotated[Optional[PrimitivePosition], Query(description="e.g. C, 1B, OF, SP")] = None,
    q: Annotated[Optional[str], Query(description="Name search")] = None,
    available_in_draft: Annotated[Optional[str], Query(description="Hide players picked in this draft")] = None,
    db: Session = Depends(get_db),
):
    return search_players(db, position=position, q=q, available_in_draft=available_in_draft)


@router.post("", response_model=Player, status_code=201)
def players_create(body: PlayerCreate, db: Session = Depends(get_db)):
    return create_player(db, body.model_dump())


# ---------------- BULK ----------------
# declared before /{player_id} so the static paths win
@router.post("/bulk", response_model=List[Player], status_code=201)
def players_bulk_create(body: List[PlayerCreate], db: Session = Depends(get_db)):
    return bulk_create_players(db, [p.model_dump() for p in body])


@router.put(
    "/bulk",
    response_model=List[Player],
    summary="Upsert players by name",
    description="Exact, case-insensitive name match updates; anything else is inserted. Inserted rows come first.",
)
def players_bulk_upsert(body: List[PlayerCreate], db: Session = Depends(get_db)):
    return bulk_upsert_players(db, [p.model_dump(exclude_unset=True) for p in body])


@router.patch("/bulk", response_model=List[Player])
def players_bulk_update(body: List[PlayerBulkUpdateItem], db: Session = Depends(get_db)):
    return bulk_update_players(db, [{"id": item.id, "updates": item.updates.model_dump(exclude_unset=True)} for item in body])


@router.patch("/tiers", response_model=List[Player])
def players_assign_tier(body: TierAssignment, db: Session = Depends(get_db)):
    """Tiers every (untiered, by default) player matching the position filter."""
    return assign_tier(db, body.tier, position=body.position, only_untiered=body.only_untiered)


# ---------------- SINGLE ----------------
@router.get("/{player_id}", response_model=Player)
def players_get(player_id: str, db: Session = Depends(get_db)):
    return repo.players.require(db, player_id)


@router.patch("/{player_id}", response_model=Player)
def players_update(player_id: str, body: PlayerUpdate, db: Session = Depends(get_db)):
    return update_player(db, player_id, body.model_dump(exclude_unset=True))


@router.delete("/{player_id}", status_code=204)
def players_delete(player_id: str, db: Session = Depends(get_db)):
    repo.players.delete(db, player_id)
    return Response(status_code=204)
