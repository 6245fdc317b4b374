from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import DraftStatus, Position
from app.schemas.player import Player
from app.schemas.team import Team


class DraftCreate(BaseModel):
    league_id: str
    name: str
    team_names: List[str] = []          # first-round order
    user_team_index: Optional[int] = None


class Draft(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    league_id: str
    name: str
    status: DraftStatus
    current_pick: int
    draft_order: List[str] = []


class DraftOrderUpdate(BaseModel):
    draft_order: List[str]


class DraftStatusUpdate(BaseModel):
    status: DraftStatus


class DuplicateDraftRequest(BaseModel):
    name: str = Field(min_length=1)


class PickCreate(BaseModel):
    team_id: str
    player_id: str
    slot: int = Field(ge=1)  # roster slot chosen by the picker


class DraftPick(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    draft_id: str
    team_id: str
    player_id: str
    pick_number: int
    slot: int


class AutoPickResult(BaseModel):
    pick: DraftPick
    player: Player


class HistoryItem(BaseModel):
    pick_number: int
    round: int
    pick_in_round: int
    team_id: str
    team_name: Optional[str] = None
    player_id: str
    player_name: Optional[str] = None
    positions: List[str] = []
    slot: int


class DraftStateOut(BaseModel):
    draft: Draft
    teams: List[Team]
    picks: List[DraftPick]
    draft_order: List[str]
    pick_number: int
    round: Optional[int] = None
    pick_in_round: Optional[int] = None
    on_clock: Optional[Team] = None
    user_team_id: Optional[str] = None
    picks_until_user: Optional[int] = None
    is_user_turn: bool = False
    available_count: int


class DraftPlanIn(BaseModel):
    pick_number: int = Field(ge=1)
    planned_position: Optional[Position] = None
    notes: Optional[str] = None


class DraftPlanUpdate(BaseModel):
    pick_number: Optional[int] = Field(default=None, ge=1)
    planned_position: Optional[Position] = None
    notes: Optional[str] = None

    @field_validator("pick_number")
    @classmethod
    def _pick_number_not_null(cls, v):
        if v is None:
            raise ValueError("pick_number may be omitted but not null")
        return v


class DraftPlan(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    draft_id: str
    pick_number: int
    planned_position: Optional[str] = None
    notes: Optional[str] = None
