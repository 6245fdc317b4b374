# app/api/routes_plans.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.draft import DraftPlan, DraftPlanIn, DraftPlanUpdate
from app.services.draft_plans import bulk_upsert_plans, create_plan, delete_plan, list_plans, update_plan

router = APIRouter(prefix="/drafts/{draft_id}/plans", tags=["draft-plans"])


@router.get("", response_model=List[DraftPlan])
def plans_list(draft_id: str, db: Session = Depends(get_db)):
    return list_plans(db, draft_id)


@router.post("", response_model=DraftPlan, status_code=201)
def plans_create(draft_id: str, body: DraftPlanIn, db: Session = Depends(get_db)):
    return create_plan(db, draft_id, body.model_dump())


@router.put("", response_model=List[DraftPlan])
def plans_bulk_upsert(draft_id: str, body: List[DraftPlanIn], db: Session = Depends(get_db)):
    """Replaces every plan of the draft."""
    return bulk_upsert_plans(db, draft_id, [p.model_dump() for p in body])


@router.patch("/{plan_id}", response_model=DraftPlan)
def plans_update(draft_id: str, plan_id: str, body: DraftPlanUpdate, db: Session = Depends(get_db)):
    return update_plan(db, draft_id, plan_id, body.model_dump(exclude_unset=True))


@router.delete("/{plan_id}", status_code=204)
def plans_delete(draft_id: str, plan_id: str, db: Session = Depends(get_db)):
    delete_plan(db, draft_id, plan_id)
    return Response(status_code=204)
