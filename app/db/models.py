from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _uuid() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class League(Base):
    __tablename__ = "leagues"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255))
    number_of_teams: Mapped[int] = mapped_column(Integer, default=12)
    roster_size: Mapped[int] = mapped_column(Integer, default=23)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    positional_requirements: Mapped[List["PositionalRequirement"]] = relationship(
        back_populates="league", cascade="all, delete-orphan", order_by="PositionalRequirement.id"
    )
    drafts: Mapped[List["Draft"]] = relationship(back_populates="league", cascade="all, delete-orphan")


class PositionalRequirement(Base):
    __tablename__ = "positional_requirements"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id", ondelete="CASCADE"), index=True)
    position: Mapped[str] = mapped_column(String(8))
    required: Mapped[int] = mapped_column(Integer, default=0)

    league: Mapped[League] = relationship(back_populates="positional_requirements")


class Player(Base):
    __tablename__ = "players"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), index=True)
    # primitive position tags, order irrelevant
    positions: Mapped[list] = mapped_column(JSON, default=list)
    team: Mapped[str | None] = mapped_column(String(16), nullable=True)
    adp: Mapped[float | None] = mapped_column(Float, nullable=True)
    tier: Mapped[int | None] = mapped_column(Integer, nullable=True)
    auction_value: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)


class Draft(Base):
    __tablename__ = "drafts"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(16), default="setup")  # setup | in_progress | completed
    current_pick: Mapped[int] = mapped_column(Integer, default=0)
    # team ids in first-round order
    draft_order: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    league: Mapped[League] = relationship(back_populates="drafts")
    teams: Mapped[List["Team"]] = relationship(back_populates="draft", cascade="all, delete-orphan")
    picks: Mapped[List["DraftPick"]] = relationship(back_populates="draft", cascade="all, delete-orphan")
    keepers: Mapped[List["Keeper"]] = relationship(back_populates="draft", cascade="all, delete-orphan")
    plans: Mapped[List["DraftPlan"]] = relationship(back_populates="draft", cascade="all, delete-orphan")


class Team(Base):
    __tablename__ = "teams"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    draft_id: Mapped[str] = mapped_column(ForeignKey("drafts.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255))
    is_user_team: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())

    draft: Mapped[Draft] = relationship(back_populates="teams")


class DraftPick(Base):
    __tablename__ = "draft_picks"
    __table_args__ = (
        UniqueConstraint("draft_id", "player_id", name="uq_pick_player"),
        UniqueConstraint("draft_id", "pick_number", name="uq_pick_number"),
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    draft_id: Mapped[str] = mapped_column(ForeignKey("drafts.id", ondelete="CASCADE"), index=True)
    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    player_id: Mapped[str] = mapped_column(ForeignKey("players.id"), index=True)
    pick_number: Mapped[int] = mapped_column(Integer)  # 1-based, global across rounds
    slot: Mapped[int] = mapped_column(Integer)         # roster slot chosen by the picker

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())

    draft: Mapped[Draft] = relationship(back_populates="picks")


class Keeper(Base):
    __tablename__ = "keepers"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    draft_id: Mapped[str] = mapped_column(ForeignKey("drafts.id", ondelete="CASCADE"), index=True)
    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    player_id: Mapped[str] = mapped_column(ForeignKey("players.id"))
    draft_slot: Mapped[int] = mapped_column(Integer)  # pick number the keeper occupies

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())

    draft: Mapped[Draft] = relationship(back_populates="keepers")


class DraftPlan(Base):
    __tablename__ = "draft_plans"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    draft_id: Mapped[str] = mapped_column(ForeignKey("drafts.id", ondelete="CASCADE"), index=True)
    pick_number: Mapped[int] = mapped_column(Integer)
    planned_position: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())

    draft: Mapped[Draft] = relationship(back_populates="plans")
