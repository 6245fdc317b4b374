from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Position


class PositionalRequirement(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: Position
    required: int = Field(ge=0)


class LeagueCreate(BaseModel):
    name: str
    number_of_teams: int = Field(default=12, ge=1)
    roster_size: int = Field(default=23, ge=1)
    positional_requirements: List[PositionalRequirement] = []


class LeagueUpdate(BaseModel):
    name: Optional[str] = None
    number_of_teams: Optional[int] = Field(default=None, ge=1)
    roster_size: Optional[int] = Field(default=None, ge=1)


class League(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    number_of_teams: int
    roster_size: int
    positional_requirements: List[PositionalRequirement] = []
