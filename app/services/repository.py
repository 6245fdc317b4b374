# app/services/repository.py
"""
Record store used by the draft engine.

One `Repo` per entity with get_all / get_by_id / create / update / delete,
plus the draft-scoped reads (teams, picks, keepers, plans). Database failures
are rolled back and surfaced as UpstreamIOError; nothing here retries.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, UpstreamIOError
from app.db.models import (
    Base,
    Draft,
    DraftPick,
    DraftPlan,
    Keeper,
    League,
    Player,
    PositionalRequirement,
    Team,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)


@contextmanager
def upstream_io(db: Session, action: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning("constraint violation during %s: %s", action, e.orig)
        raise ConflictError(f"Conflicting write during {action}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("persistence failure during %s: %s", action, e)
        raise UpstreamIOError(f"Persistence failure during {action}")


class Repo(Generic[M]):
    def __init__(self, model: Type[M], label: str, order_by: Any = None):
        self.model = model
        self.label = label
        self.order_by = order_by

    def get_all(self, db: Session) -> List[M]:
        stmt = select(self.model)
        if self.order_by is not None:
            stmt = stmt.order_by(self.order_by)
        with upstream_io(db, f"list {self.label}"):
            return list(db.scalars(stmt))

    def get_by_id(self, db: Session, obj_id: str) -> Optional[M]:
        with upstream_io(db, f"read {self.label}"):
            return db.get(self.model, obj_id)

    def require(self, db: Session, obj_id: str) -> M:
        obj = self.get_by_id(db, obj_id)
        if obj is None:
            raise NotFoundError(self.label, obj_id)
        return obj

    def create(self, db: Session, *, commit: bool = True, **fields) -> M:
        obj = self.model(**fields)
        with upstream_io(db, f"create {self.label}"):
            db.add(obj)
            if commit:
                db.commit()
            else:
                db.flush()
        return obj

    def update(self, db: Session, obj_id: str, *, commit: bool = True, **updates) -> M:
        obj = self.require(db, obj_id)
        with upstream_io(db, f"update {self.label}"):
            for key, value in updates.items():
                setattr(obj, key, value)
            db.add(obj)
            if commit:
                db.commit()
            else:
                db.flush()
        return obj

    def delete(self, db: Session, obj_id: str) -> None:
        obj = self.require(db, obj_id)
        with upstream_io(db, f"delete {self.label}"):
            db.delete(obj)
            db.commit()

    def for_draft(self, db: Session, draft_id: str) -> List[M]:
        stmt = select(self.model).where(self.model.draft_id == draft_id)
        if self.order_by is not None:
            stmt = stmt.order_by(self.order_by)
        with upstream_io(db, f"list {self.label} for draft"):
            return list(db.scalars(stmt))


leagues: Repo[League] = Repo(League, "League", League.created_at.desc())
players: Repo[Player] = Repo(Player, "Player", Player.name)
drafts: Repo[Draft] = Repo(Draft, "Draft", Draft.created_at.desc())
teams: Repo[Team] = Repo(Team, "Team", Team.name)
picks: Repo[DraftPick] = Repo(DraftPick, "DraftPick", DraftPick.pick_number)
keepers: Repo[Keeper] = Repo(Keeper, "Keeper", Keeper.draft_slot)
plans: Repo[DraftPlan] = Repo(DraftPlan, "DraftPlan", DraftPlan.pick_number)


# ---------------- players ----------------

def list_players(db: Session, position: Optional[str] = None) -> List[Player]:
    """All players, ADP ascending with unranked last."""
    stmt = select(Player).order_by(Player.adp.is_(None), Player.adp, Player.tier.is_(None), Player.tier, Player.name)
    with upstream_io(db, "list Player"):
        rows = list(db.scalars(stmt))
    if position:
        rows = [p for p in rows if position in (p.positions or [])]
    return rows


# ---------------- draft-scoped reads ----------------

def get_teams(db: Session, draft_id: str) -> List[Team]:
    return teams.for_draft(db, draft_id)


def get_picks(db: Session, draft_id: str) -> List[DraftPick]:
    return picks.for_draft(db, draft_id)


def get_keepers(db: Session, draft_id: str) -> List[Keeper]:
    return keepers.for_draft(db, draft_id)


def get_plans(db: Session, draft_id: str) -> List[DraftPlan]:
    return plans.for_draft(db, draft_id)


def count_picks(db: Session, draft_id: str) -> int:
    stmt = select(func.count()).select_from(DraftPick).where(DraftPick.draft_id == draft_id)
    with upstream_io(db, "count DraftPick"):
        return int(db.scalar(stmt) or 0)


def pick_for_player(db: Session, draft_id: str, player_id: str) -> Optional[DraftPick]:
    stmt = select(DraftPick).where(DraftPick.draft_id == draft_id, DraftPick.player_id == player_id)
    with upstream_io(db, "read DraftPick"):
        return db.scalars(stmt).first()


def delete_picks(db: Session, draft_id: str, *, commit: bool = True) -> int:
    with upstream_io(db, "delete DraftPick"):
        db.flush()
        result = db.execute(
            delete(DraftPick).where(DraftPick.draft_id == draft_id),
            execution_options={"synchronize_session": "fetch"},
        )
        if commit:
            db.commit()
    return result.rowcount or 0


def delete_plans(db: Session, draft_id: str, *, commit: bool = True) -> None:
    with upstream_io(db, "delete DraftPlan"):
        db.flush()
        db.execute(
            delete(DraftPlan).where(DraftPlan.draft_id == draft_id),
            execution_options={"synchronize_session": "fetch"},
        )
        if commit:
            db.commit()


# ---------------- league requirements ----------------

def get_requirements(db: Session, league_id: str) -> List[PositionalRequirement]:
    stmt = (
        select(PositionalRequirement)
        .where(PositionalRequirement.league_id == league_id)
        .order_by(PositionalRequirement.id)
    )
    with upstream_io(db, "list PositionalRequirement"):
        return list(db.scalars(stmt))


def replace_requirements(db: Session, league_id: str, items: List[dict]) -> List[PositionalRequirement]:
    league = leagues.require(db, league_id)
    with upstream_io(db, "replace PositionalRequirement"):
        league.positional_requirements.clear()
        db.flush()
        for item in items:
            league.positional_requirements.append(
                PositionalRequirement(position=item["position"], required=int(item["required"]))
            )
        db.commit()
    return get_requirements(db, league_id)
