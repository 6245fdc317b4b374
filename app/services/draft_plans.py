from __future__ import annotations
from typing import List
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models import DraftPlan
from app.services import repository as repo


def list_plans(db: Session, draft_id: str) -> List[DraftPlan]:
    repo.drafts.require(db, draft_id)
    return repo.get_plans(db, draft_id)


def _plan_in_draft(db: Session, draft_id: str, plan_id: str) -> DraftPlan:
    plan = repo.plans.get_by_id(db, plan_id)
    if plan is None or plan.draft_id != draft_id:
        raise NotFoundError("DraftPlan", plan_id)
    return plan


def create_plan(db: Session, draft_id: str, data: dict) -> DraftPlan:
    repo.drafts.require(db, draft_id)
    return repo.plans.create(db, draft_id=draft_id, **data)


def update_plan(db: Session, draft_id: str, plan_id: str, updates: dict) -> DraftPlan:
    _plan_in_draft(db, draft_id, plan_id)
    return repo.plans.update(db, plan_id, **updates)


def delete_plan(db: Session, draft_id: str, plan_id: str) -> None:
    _plan_in_draft(db, draft_id, plan_id)
    repo.plans.delete(db, plan_id)


def bulk_upsert_plans(db: Session, draft_id: str, items: List[dict]) -> List[DraftPlan]:
    """Replace every plan of the draft with `items`, in one transaction."""
    repo.drafts.require(db, draft_id)
    repo.delete_plans(db, draft_id, commit=False)
    for item in items:
        repo.plans.create(db, commit=False, draft_id=draft_id, **item)
    with repo.upstream_io(db, "bulk upsert DraftPlan"):
        db.commit()
    return repo.get_plans(db, draft_id)
