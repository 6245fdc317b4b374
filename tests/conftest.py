"""
Shared fixtures.

- `db`: a Session on a fresh in-memory SQLite database per test
- `client`: FastAPI TestClient whose get_db dependency uses the same database
- `seed_draft`: league + players + a 4-team draft ready to pick
"""
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base
from app.db.session import get_db
from app.main import app
from app.services.drafts import create_draft
from app.services.leagues import create_league
from app.services.players import create_player


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


# ---------------- seeded database ----------------

PLAYER_ROWS = [
    # name, positions, adp, tier
    ("Catcher Cal", ["C"], 30.0, 3),
    ("First Fran", ["1B"], 2.0, 1),
    ("Short Sam", ["SS"], 3.0, 1),
    ("Outfield Olly", ["OF"], 1.0, 1),
    ("Second Sue", ["2B"], 8.0, 2),
    ("Third Theo", ["3B"], 6.0, 2),
    ("Starter Stan", ["SP"], 4.0, 1),
    ("Reliever Rae", ["RP"], 12.0, 2),
    ("Outfield Omar", ["OF"], 5.0, 1),
    ("Two Way Tom", ["UTIL", "SP"], 7.0, 1),
    ("Deep Dan", ["OF"], None, 4),
    ("Deeper Dee", ["C"], None, None),
]


@pytest.fixture
def seed_draft(db):
    league = create_league(
        db,
        "Test League",
        number_of_teams=4,
        roster_size=6,
        requirements=[
            {"position": "C", "required": 1},
            {"position": "OF", "required": 2},
            {"position": "CI", "required": 1},
            {"position": "MI", "required": 1},
            {"position": "SP", "required": 1},
        ],
    )
    players = {
        name: create_player(db, {"name": name, "positions": pos, "adp": adp, "tier": tier})
        for name, pos, adp, tier in PLAYER_ROWS
    }
    draft = create_draft(db, league.id, "Mock 1", ["Alpha", "Bravo", "Charlie", "Delta"], user_team_index=1)
    return SimpleNamespace(league=league, draft=draft, players=players, order=list(draft.draft_order))
