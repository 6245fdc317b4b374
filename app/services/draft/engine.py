# app/services/draft/engine.py
"""
Draft state machine: setup -> in_progress -> completed.

Commands (make_pick, auto_draft_pick, reset_draft, duplicate_draft,
set_status, set_draft_order) write through the repository and commit before
returning. Queries (get_state, draft_history) always re-read from the store,
so a caller that issues a command and then reads sees its own write.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    ConflictError,
    DraftCompletedError,
    DuplicatePickError,
    EmptyPoolError,
    InvalidOrderError,
    InvalidStatusError,
    NotFoundError,
    OutOfTurnError,
    UpstreamIOError,
    UserTurnError,
)
from app.db.models import Draft, DraftPick, Player, PositionalRequirement, Team
from app.services import repository as repo
from app.services.draft.positions import remaining_needs
from app.services.draft.selection import select_best
from app.services.draft.turn_order import (
    effective_draft_order,
    pick_position,
    picks_until_user_turn,
    team_on_clock,
    validate_draft_order,
)

logger = logging.getLogger(__name__)

DRAFT_STATUSES = ("setup", "in_progress", "completed")


@dataclass
class DraftState:
    draft: Draft
    teams: List[Team]
    picks: List[DraftPick]
    players: List[Player]
    requirements: List[PositionalRequirement]
    draft_order: List[str]
    user_team: Optional[Team] = None
    on_clock: Optional[Team] = None
    picks_until_user: Optional[int] = None
    available: List[Player] = field(default_factory=list)

    @property
    def pick_number(self) -> int:
        return len(self.picks) + 1

    @property
    def round(self) -> Optional[int]:
        if not self.draft_order:
            return None
        return pick_position(self.pick_number, len(self.draft_order))[0]

    @property
    def pick_in_round(self) -> Optional[int]:
        if not self.draft_order:
            return None
        return pick_position(self.pick_number, len(self.draft_order))[1]

    def player_index(self) -> Dict[str, Player]:
        return {p.id: p for p in self.players}

    def team_picks(self, team_id: str) -> List[DraftPick]:
        return [p for p in self.picks if p.team_id == team_id]


def _draft_team(db: Session, draft_id: str, team_id: str) -> Team:
    team = repo.teams.get_by_id(db, team_id)
    if team is None or team.draft_id != draft_id:
        raise NotFoundError("Team", team_id)
    return team


def _requirements_best_effort(db: Session, league_id: str) -> List[PositionalRequirement]:
    # state snapshots still load when the league lookup fails
    try:
        return repo.get_requirements(db, league_id)
    except UpstreamIOError:
        logger.warning("could not load requirements for league %s; assuming none", league_id)
        return []


# ================= queries =================

def get_state(db: Session, draft_id: str) -> DraftState:
    draft = repo.drafts.require(db, draft_id)
    teams = repo.get_teams(db, draft_id)
    picks = repo.get_picks(db, draft_id)
    players = repo.list_players(db)
    requirements = _requirements_best_effort(db, draft.league_id)

    drafted = {p.player_id for p in picks}
    order = effective_draft_order(draft, teams)
    by_id = {t.id: t for t in teams}
    user_team = next((t for t in teams if t.is_user_team), None)

    state = DraftState(
        draft=draft,
        teams=teams,
        picks=picks,
        players=players,
        requirements=requirements,
        draft_order=order,
        user_team=user_team,
        available=[p for p in players if p.id not in drafted],
    )
    if order and draft.status != "completed":
        state.on_clock = by_id.get(team_on_clock(order, len(picks)))
        if user_team is not None and state.on_clock is not None and user_team.id in order:
            state.picks_until_user = picks_until_user_turn(order, state.on_clock.id, user_team.id)
    return state


def draft_history(db: Session, draft_id: str) -> List[dict]:
    """Picks in pick order with round / pick-in-round."""
    draft = repo.drafts.require(db, draft_id)
    teams = repo.get_teams(db, draft_id)
    n_teams = len(effective_draft_order(draft, teams)) or 1
    names = {t.id: t.name for t in teams}
    players = {p.id: p for p in repo.list_players(db)}

    out: List[dict] = []
    for pick in repo.get_picks(db, draft_id):
        rnd, in_round = pick_position(pick.pick_number, n_teams)
        player = players.get(pick.player_id)
        out.append({
            "pick_number": pick.pick_number,
            "round": rnd,
            "pick_in_round": in_round,
            "team_id": pick.team_id,
            "team_name": names.get(pick.team_id),
            "player_id": pick.player_id,
            "player_name": player.name if player else None,
            "positions": list(player.positions or []) if player else [],
            "slot": pick.slot,
        })
    return out


# ================= commands =================

def make_pick(
    db: Session,
    draft_id: str,
    team_id: str,
    player_id: str,
    slot: int,
    *,
    enforce_turn: Optional[bool] = None,
) -> DraftPick:
    """
    Record the next pick of a draft.

    Turn order is advisory unless `enforce_turn` (default:
    settings.ENFORCE_TURN_ORDER) is set, so keepers and manual corrections can
    be entered for any team.
    """
    draft = repo.drafts.require(db, draft_id)
    if draft.status == "completed":
        raise DraftCompletedError(f"Draft {draft_id} is completed")
    _draft_team(db, draft_id, team_id)
    repo.players.require(db, player_id)

    if repo.pick_for_player(db, draft_id, player_id) is not None:
        logger.warning("rejected duplicate pick draft=%s player=%s", draft_id, player_id)
        raise DuplicatePickError(f"Player {player_id} has already been drafted")

    existing = repo.count_picks(db, draft_id)

    if settings.ENFORCE_TURN_ORDER if enforce_turn is None else enforce_turn:
        order = effective_draft_order(draft, repo.get_teams(db, draft_id))
        expected = team_on_clock(order, existing)
        if expected != team_id:
            logger.warning("rejected out-of-turn pick draft=%s team=%s expected=%s", draft_id, team_id, expected)
            raise OutOfTurnError(f"Team {team_id} is not on the clock")

    pick_number = existing + 1
    pick = repo.picks.create(
        db,
        commit=False,
        draft_id=draft_id,
        team_id=team_id,
        player_id=player_id,
        pick_number=pick_number,
        slot=slot,
    )
    updates = {"current_pick": pick_number}
    if draft.status == "setup":
        updates["status"] = "in_progress"
    repo.drafts.update(db, draft_id, **updates)

    logger.info("pick %d draft=%s team=%s player=%s slot=%d", pick_number, draft_id, team_id, player_id, slot)
    return pick


def auto_draft_pick(
    db: Session,
    draft_id: str,
    team_id: str,
    team_picks: Sequence[DraftPick],
    available_players: Sequence[Player],
    requirements: Sequence[PositionalRequirement],
    player_index: Mapping[str, Player],
    slot: int,
    *,
    enforce_turn: Optional[bool] = None,
) -> Player:
    """Choose a player for `team_id` from its remaining needs and draft them."""
    needs = remaining_needs(requirements, team_picks, player_index)
    best = select_best(available_players, needs)
    if best is None:
        raise EmptyPoolError("No available players")

    logger.info("auto-pick draft=%s team=%s needs=%s -> %s", draft_id, team_id, needs, best.name)
    make_pick(db, draft_id, team_id, best.id, slot, enforce_turn=enforce_turn)
    return best


def auto_draft_current(db: Session, draft_id: str) -> DraftPick:
    """Auto-draft for whichever computer team is on the clock."""
    state = get_state(db, draft_id)
    if state.draft.status == "completed":
        raise DraftCompletedError(f"Draft {draft_id} is completed")
    if not state.draft_order:
        raise InvalidOrderError("Draft has no teams to pick for")
    if state.on_clock is None:
        raise NotFoundError("Team", team_on_clock(state.draft_order, len(state.picks)))
    if state.on_clock.is_user_team:
        raise UserTurnError("The user team is on the clock; make the pick manually")

    team_picks = state.team_picks(state.on_clock.id)
    player = auto_draft_pick(
        db,
        draft_id,
        state.on_clock.id,
        team_picks,
        state.available,
        state.requirements,
        state.player_index(),
        len(team_picks) + 1,
        enforce_turn=False,
    )
    return repo.pick_for_player(db, draft_id, player.id)


def reset_draft(db: Session, draft_id: str) -> None:
    """Clear picks only; teams, order, keepers and plans are kept."""
    repo.drafts.require(db, draft_id)
    removed = repo.delete_picks(db, draft_id, commit=False)
    repo.drafts.update(db, draft_id, status="setup", current_pick=0)
    logger.info("reset draft=%s removed %d picks", draft_id, removed)


def duplicate_draft(db: Session, draft_id: str, new_name: str) -> Draft:
    """
    Clone a draft's setup: teams (name + user flag), draft order and keepers.
    Picks are not copied. Everything is written in one transaction, so a
    failed team clone leaves no partial draft behind.
    """
    source = repo.drafts.require(db, draft_id)
    source_teams = repo.get_teams(db, draft_id)
    source_keepers = repo.get_keepers(db, draft_id)

    new_draft = repo.drafts.create(
        db,
        commit=False,
        league_id=source.league_id,
        name=new_name,
        status="setup",
        current_pick=0,
        draft_order=[],
    )

    team_map: Dict[str, str] = {}
    for team in source_teams:
        clone = repo.teams.create(
            db,
            commit=False,
            draft_id=new_draft.id,
            name=team.name,
            is_user_team=team.is_user_team,
        )
        team_map[team.id] = clone.id

    new_order = [team_map[tid] for tid in (source.draft_order or []) if tid in team_map]
    repo.drafts.update(db, new_draft.id, commit=False, draft_order=new_order)

    for keeper in source_keepers:
        new_team_id = team_map.get(keeper.team_id)
        if new_team_id is None:
            continue
        repo.keepers.create(
            db,
            commit=False,
            draft_id=new_draft.id,
            team_id=new_team_id,
            player_id=keeper.player_id,
            draft_slot=keeper.draft_slot,
        )

    with repo.upstream_io(db, "duplicate Draft"):
        db.commit()

    logger.info("duplicated draft=%s -> %s (%d teams, %d keepers)", draft_id, new_draft.id, len(team_map), len(source_keepers))
    return new_draft


def set_status(db: Session, draft_id: str, status: str) -> Draft:
    # completion is decided by the caller, the engine only records it
    if status not in DRAFT_STATUSES:
        raise InvalidStatusError(f"Unknown draft status {status!r}")
    repo.drafts.require(db, draft_id)
    if status == "setup" and repo.count_picks(db, draft_id):
        raise ConflictError("Draft has picks and cannot go back to setup; reset the draft instead")
    draft = repo.drafts.update(db, draft_id, status=status)
    logger.info("draft=%s status -> %s", draft_id, status)
    return draft


def set_draft_order(db: Session, draft_id: str, draft_order: Sequence[str]) -> Draft:
    repo.drafts.require(db, draft_id)
    if repo.count_picks(db, draft_id):
        raise ConflictError("Draft order cannot change once picks have been made; reset the draft first")
    order = validate_draft_order(draft_order, [t.id for t in repo.get_teams(db, draft_id)])
    return repo.drafts.update(db, draft_id, draft_order=order)

