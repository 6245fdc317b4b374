"""HTTP-level checks: status codes, error mapping and the read-after-write flow."""
import pytest


@pytest.fixture
def league(client):
    resp = client.post(
        "/leagues",
        json={
            "name": "API League",
            "number_of_teams": 3,
            "roster_size": 4,
            "positional_requirements": [
                {"position": "C", "required": 1},
                {"position": "MI", "required": 1},
                {"position": "OF", "required": 2},
            ],
        },
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def players(client):
    rows = [
        {"name": "Ace Outfielder", "positions": ["OF"], "adp": 1.5, "tier": 1},
        {"name": "Big Catcher", "positions": ["C"], "adp": 20.0, "tier": 3},
        {"name": "Slick Shortstop", "positions": ["SS"], "adp": 4.0, "tier": 1},
        {"name": "Sleeper", "positions": ["2B"], "tier": 5},
    ]
    out = {}
    for row in rows:
        resp = client.post("/players", json=row)
        assert resp.status_code == 201
        out[row["name"]] = resp.json()
    return out


@pytest.fixture
def draft(client, league):
    resp = client.post(
        "/drafts",
        json={"league_id": league["id"], "name": "API Mock", "team_names": ["North", "South", "East"], "user_team_index": 2},
    )
    assert resp.status_code == 201
    return resp.json()


def test_health(client):
    assert client.get("/health").json()["ok"] is True


def test_league_requirements_round_trip(client, league):
    assert [r["position"] for r in league["positional_requirements"]] == ["C", "MI", "OF"]

    resp = client.put(f"/leagues/{league['id']}/requirements", json=[{"position": "CI", "required": 2}])
    assert resp.status_code == 200
    assert resp.json() == [{"position": "CI", "required": 2}]


def test_unknown_position_is_rejected(client, league):
    resp = client.put(f"/leagues/{league['id']}/requirements", json=[{"position": "QB", "required": 1}])
    assert resp.status_code == 422


def test_players_listed_by_adp_unranked_last(client, players):
    names = [p["name"] for p in client.get("/players").json()]
    assert names == ["Ace Outfielder", "Slick Shortstop", "Big Catcher", "Sleeper"]


def test_missing_draft_is_404(client):
    resp = client.get("/drafts/nope/state")
    assert resp.status_code == 404
    assert resp.json()["error"] == "NotFoundError"


def test_pick_flow_and_state(client, draft, players):
    draft_id = draft["id"]
    north = draft["draft_order"][0]

    state = client.get(f"/drafts/{draft_id}/state").json()
    assert state["on_clock"]["id"] == north
    assert state["picks_until_user"] == 2
    assert state["available_count"] == 4

    resp = client.post(f"/drafts/{draft_id}/picks", json={"team_id": north, "player_id": players["Big Catcher"]["id"], "slot": 1})
    assert resp.status_code == 201
    assert resp.json()["pick_number"] == 1

    state = client.get(f"/drafts/{draft_id}/state").json()
    assert state["draft"]["current_pick"] == 1
    assert state["draft"]["status"] == "in_progress"
    assert state["available_count"] == 3

    available = client.get("/players", params={"available_in_draft": draft_id}).json()
    assert players["Big Catcher"]["id"] not in {p["id"] for p in available}


def test_duplicate_pick_is_409(client, draft, players):
    draft_id = draft["id"]
    body = {"team_id": draft["draft_order"][0], "player_id": players["Sleeper"]["id"], "slot": 1}
    assert client.post(f"/drafts/{draft_id}/picks", json=body).status_code == 201
    body["team_id"] = draft["draft_order"][1]
    resp = client.post(f"/drafts/{draft_id}/picks", json=body)
    assert resp.status_code == 409
    assert resp.json()["error"] == "DuplicatePickError"


def test_enforce_turn_query_flag(client, draft, players):
    draft_id = draft["id"]
    body = {"team_id": draft["draft_order"][1], "player_id": players["Sleeper"]["id"], "slot": 1}
    resp = client.post(f"/drafts/{draft_id}/picks", params={"enforce_turn": "true"}, json=body)
    assert resp.status_code == 409
    assert resp.json()["error"] == "OutOfTurnError"


def test_auto_pick_respects_needs_and_user_turn(client, draft, players):
    draft_id = draft["id"]
    first = client.post(f"/drafts/{draft_id}/auto-pick")
    assert first.status_code == 201
    assert first.json()["player"]["name"] == "Ace Outfielder"

    second = client.post(f"/drafts/{draft_id}/auto-pick").json()
    assert second["pick"]["team_id"] == draft["draft_order"][1]
    assert second["player"]["name"] == "Slick Shortstop"

    resp = client.post(f"/drafts/{draft_id}/auto-pick")
    assert resp.status_code == 409
    assert resp.json()["error"] == "UserTurnError"


def test_auto_pick_with_empty_pool(client, draft):
    resp = client.post(f"/drafts/{draft['id']}/auto-pick")
    assert resp.status_code == 409
    assert resp.json()["error"] == "EmptyPoolError"


def test_roster_and_needs(client, draft, players):
    draft_id = draft["id"]
    north = draft["draft_order"][0]
    client.post(f"/drafts/{draft_id}/picks", json={"team_id": north, "player_id": players["Slick Shortstop"]["id"], "slot": 1})

    roster = client.get(f"/drafts/{draft_id}/teams/{north}/roster").json()
    assert roster["team_name"] == "North"
    assert [p["name"] for p in roster["players"]] == ["Slick Shortstop"]
    assert roster["needs"] == {"C": 1, "OF": 2}
    assert client.get(f"/drafts/{draft_id}/teams/{north}/needs").json() == {"C": 1, "OF": 2}


def test_reset_and_duplicate(client, draft, players):
    draft_id = draft["id"]
    east = draft["draft_order"][2]
    keeper = client.post(
        f"/drafts/{draft_id}/keepers",
        json={"team_id": east, "player_id": players["Sleeper"]["id"], "draft_slot": 3},
    )
    assert keeper.status_code == 201
    client.post(f"/drafts/{draft_id}/auto-pick")

    reset = client.post(f"/drafts/{draft_id}/reset").json()
    assert (reset["status"], reset["current_pick"]) == ("setup", 0)
    assert reset["draft_order"] == draft["draft_order"]
    assert client.get(f"/drafts/{draft_id}/picks").json() == []
    assert len(client.get(f"/drafts/{draft_id}/keepers").json()) == 1

    copy = client.post(f"/drafts/{draft_id}/duplicate", json={"name": "API Mock (Copy)"})
    assert copy.status_code == 201
    copy = copy.json()
    new_teams = client.get(f"/drafts/{copy['id']}/teams").json()
    assert len(new_teams) == 3
    assert sorted(copy["draft_order"]) == sorted(t["id"] for t in new_teams)
    names = {t["id"]: t["name"] for t in new_teams}
    assert [names[t] for t in copy["draft_order"]] == ["North", "South", "East"]
    new_keepers = client.get(f"/drafts/{copy['id']}/keepers").json()
    assert [k["team_id"] for k in new_keepers] == [copy["draft_order"][2]]


def test_second_user_team_is_rejected(client, draft):
    resp = client.post(f"/drafts/{draft['id']}/teams", json={"name": "West", "is_user_team": True})
    assert resp.status_code == 409


def test_new_team_joins_the_order(client, draft):
    resp = client.post(f"/drafts/{draft['id']}/teams", json={"name": "West"})
    assert resp.status_code == 201
    order = client.get(f"/drafts/{draft['id']}").json()["draft_order"]
    assert order == draft["draft_order"] + [resp.json()["id"]]


def test_bad_order_is_400(client, draft):
    resp = client.put(f"/drafts/{draft['id']}/order", json={"draft_order": draft["draft_order"][:1]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "InvalidOrderError"


def test_history(client, draft, players):
    draft_id = draft["id"]
    client.post(f"/drafts/{draft_id}/auto-pick")
    client.post(f"/drafts/{draft_id}/auto-pick")
    history = client.get(f"/drafts/{draft_id}/history").json()
    assert [(h["round"], h["pick_in_round"], h["team_name"]) for h in history] == [(1, 1, "North"), (1, 2, "South")]


def test_draft_plans_bulk_upsert(client, draft):
    draft_id = draft["id"]
    created = client.post(f"/drafts/{draft_id}/plans", json={"pick_number": 3, "planned_position": "SP"})
    assert created.status_code == 201

    resp = client.put(
        f"/drafts/{draft_id}/plans",
        json=[{"pick_number": 6, "planned_position": "C", "notes": "catcher run"}, {"pick_number": 1}],
    )
    assert resp.status_code == 200
    assert [(p["pick_number"], p["planned_position"]) for p in resp.json()] == [(1, None), (6, "C")]

    plan_id = resp.json()[1]["id"]
    patched = client.patch(f"/drafts/{draft_id}/plans/{plan_id}", json={"notes": "wait on C"})
    assert patched.json()["notes"] == "wait on C"
    assert client.delete(f"/drafts/{draft_id}/plans/{plan_id}").status_code == 204
    assert len(client.get(f"/drafts/{draft_id}/plans").json()) == 1


def test_delete_draft_cascades(client, draft):
    draft_id = draft["id"]
    assert client.delete(f"/drafts/{draft_id}").status_code == 204
    assert client.get(f"/drafts/{draft_id}").status_code == 404


def test_status_back_to_setup_after_picks_is_409(client, draft, players):
    draft_id = draft["id"]
    client.post(f"/drafts/{draft_id}/auto-pick")
    resp = client.put(f"/drafts/{draft_id}/status", json={"status": "setup"})
    assert resp.status_code == 409
    assert client.post(f"/drafts/{draft_id}/teams", json={"name": "West"}).status_code == 409


def test_run_serves_app_with_uvicorn(monkeypatch):
    import app.main as main

    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda target, **kw: calls.append((target, kw)))
    main.run()
    target, kw = calls[0]
    assert target == "app.main:app"
    assert (kw["host"], kw["port"]) == (main.settings.HOST, main.settings.PORT)
