from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import PrimitivePosition


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1)
    positions: List[PrimitivePosition] = []
    team: Optional[str] = None
    adp: Optional[float] = Field(default=None, gt=0)      # lower = drafted earlier
    tier: Optional[int] = Field(default=None, ge=1)       # lower = better
    auction_value: Optional[float] = None


class PlayerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    positions: Optional[List[PrimitivePosition]] = None
    team: Optional[str] = None
    adp: Optional[float] = Field(default=None, gt=0)
    tier: Optional[int] = Field(default=None, ge=1)
    auction_value: Optional[float] = None

    # may be omitted, never cleared
    @field_validator("name", "positions")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class PlayerBulkUpdateItem(BaseModel):
    id: str
    updates: PlayerUpdate


class TierAssignment(BaseModel):
    tier: Optional[int] = Field(default=None, ge=1)       # None clears
    position: Optional[PrimitivePosition] = None
    only_untiered: bool = True


class Player(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    positions: List[str] = []
    team: Optional[str] = None
    adp: Optional[float] = None
    tier: Optional[int] = None
    auction_value: Optional[float] = None
