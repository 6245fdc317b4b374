from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    name: str
    is_user_team: bool = False


class Team(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    draft_id: str
    name: str
    is_user_team: bool = False


class KeeperCreate(BaseModel):
    team_id: str
    player_id: str
    draft_slot: int = Field(ge=1)  # pick number the keeper occupies


class Keeper(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    draft_id: str
    team_id: str
    player_id: str
    draft_slot: int


class RosterPlayer(BaseModel):
    player_id: str
    name: Optional[str] = None
    positions: List[str] = []
    pick_number: int
    round: int
    slot: int


class Roster(BaseModel):
    team_id: str
    team_name: str
    players: List[RosterPlayer]
    needs: Dict[str, int] = {}
