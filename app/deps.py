from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.draft import DraftState, get_state


def get_draft_state(draft_id: str, db: Session = Depends(get_db)) -> DraftState:
    """Fresh snapshot of a draft for the request (404 if it does not exist)."""
    return get_state(db, draft_id)
