# app/db/session.py
import logging
from typing import Iterator
from sqlalchemy.orm import Session
from sqlalchemy.exc import OperationalError
from app.db.engine import SessionLocal, engine

logger = logging.getLogger(__name__)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
        # services commit their own writes; this flushes anything a route left pending
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
    finally:
        try:
            db.close()
        except OperationalError:
            # underlying socket already dead; dispose pool to force fresh conns next time
            logger.warning("session close failed, disposing engine pool")
            engine.dispose()
