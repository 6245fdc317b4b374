from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models import Player
from app.services import repository as repo

logger = logging.getLogger(__name__)


def search_players(
    db: Session,
    *,
    position: Optional[str] = None,
    q: Optional[str] = None,
    available_in_draft: Optional[str] = None,
) -> List[Player]:
    """
    Players ordered by ADP (unranked last). `available_in_draft` hides
    everyone already picked in that draft.
    """
    rows = repo.list_players(db, position=position)
    if q:
        needle = q.strip().lower()
        rows = [p for p in rows if needle in p.name.lower()]
    if available_in_draft:
        repo.drafts.require(db, available_in_draft)
        taken = {pk.player_id for pk in repo.get_picks(db, available_in_draft)}
        rows = [p for p in rows if p.id not in taken]
    return rows


def create_player(db: Session, data: dict) -> Player:
    return repo.players.create(db, **data)


def update_player(db: Session, player_id: str, updates: dict) -> Player:
    return repo.players.update(db, player_id, **updates)


# ---------------- bulk ----------------

def _name_key(name: str) -> str:
    return name.strip().lower()


def bulk_create_players(db: Session, rows: Iterable[Mapping]) -> List[Player]:
    """Insert every row or none of them."""
    created = [repo.players.create(db, commit=False, **row) for row in rows]
    with repo.upstream_io(db, "bulk create Player"):
        db.commit()
    logger.info("bulk created %d players", len(created))
    return created


def bulk_update_players(db: Session, updates: Iterable[Mapping]) -> List[Player]:
    """
    Apply `{"id": ..., "updates": {...}}` items in one commit. An unknown id
    aborts the whole batch before anything is written.
    """
    items = list(updates)
    targets = []
    for item in items:
        player = repo.players.get_by_id(db, item["id"])
        if player is None:
            raise NotFoundError("Player", item["id"])
        targets.append((player, item["updates"]))

    with repo.upstream_io(db, "bulk update Player"):
        for player, changes in targets:
            for key, value in changes.items():
                setattr(player, key, value)
        db.commit()
    logger.info("bulk updated %d players", len(targets))
    return [player for player, _ in targets]


def bulk_upsert_players(db: Session, rows: Iterable[Mapping]) -> List[Player]:
    """
    Update players whose name matches an existing one (case-insensitive,
    exact) and insert the rest. Fields absent from a row are left alone on
    update. Returns inserted players first, then updated ones.
    """
    by_name: Dict[str, Player] = {_name_key(p.name): p for p in repo.players.get_all(db)}
    inserted: List[Player] = []
    updated: List[Player] = []

    with repo.upstream_io(db, "bulk upsert Player"):
        for row in rows:
            key = _name_key(row["name"])
            existing = by_name.get(key)
            if existing is None:
                player = Player(**row)
                db.add(player)
                by_name[key] = player
                inserted.append(player)
                continue
            for field, value in row.items():
                setattr(existing, field, value)
            if existing not in updated and existing not in inserted:
                updated.append(existing)
        db.commit()

    logger.info("bulk upsert: %d inserted, %d updated", len(inserted), len(updated))
    return inserted + updated


def assign_tier(
    db: Session,
    tier: Optional[int],
    *,
    position: Optional[str] = None,
    only_untiered: bool = True,
) -> List[Player]:
    """
    Set `tier` (None clears it) on every player in the position filter.
    By default only players without a tier are touched.
    """
    targets = repo.list_players(db, position=position)
    if only_untiered:
        targets = [p for p in targets if p.tier is None]

    with repo.upstream_io(db, "assign tier"):
        for player in targets:
            player.tier = tier
        db.commit()
    logger.info("tier %s assigned to %d players (position=%s)", tier, len(targets), position)
    return targets
