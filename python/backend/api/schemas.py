"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt

from backend.models.session import SessionStatus


class GenerateRequest(BaseModel):
    """Request schema for adaptive puzzle generation."""
    player_id: str = Field(..., min_length=1, description="Player identity, trusted as given")


class TierSchema(BaseModel):
    size: int
    difficulty: int


class GenerateResponse(BaseModel):
    """A puzzle handed out at session start."""
    session_id: str
    puzzle_id: int
    size: int
    difficulty: int
    board: List[Optional[int]] = Field(..., description="Row-major cells, null for the blank")
    requested: TierSchema = Field(..., description="Tier the player's skill asked for")
    fallback: bool = Field(..., description="True when the puzzle differs from the requested tier")
    skill: float


class EndGameRequest(BaseModel):
    """Request schema for closing a session."""
    session_id: str
    moves: int = Field(default=0, ge=0)
    time: float = Field(default=0.0, ge=0, description="Elapsed seconds")
    status: SessionStatus = SessionStatus.COMPLETED


class EndGameResponse(BaseModel):
    session_id: str
    status: SessionStatus
    old_skill: float
    new_skill: float
    adjustment: float


class BoardRequest(BaseModel):
    """A live board snapshot."""
    board: List[Optional[StrictInt]] = Field(..., description="Row-major cells, null for the blank")
    size: int = Field(..., ge=2, le=32)
    session_id: Optional[str] = None


class HintResponse(BaseModel):
    next_tile: Optional[int]


class CheckResponse(BaseModel):
    solvable: bool
    solved: bool


class SessionSchema(BaseModel):
    session_id: str
    puzzle_id: int
    size: int
    difficulty: int
    status: SessionStatus
    moves: int
    time_seconds: float
    hints_used: int
    started_at: str
    completed_at: Optional[str] = None


class PlayerStatsSchema(BaseModel):
    """Play-behaviour aggregates; averages cover completed sessions."""
    total_puzzles: int
    completed_count: int
    completion_rate: float = Field(..., description="Percentage of sessions completed")
    average_time: float
    average_moves: float
    favorite_size: Optional[int] = None
    hint_usage_count: int


class PlayerResponse(BaseModel):
    player_id: str
    skill: float
    tier: TierSchema
    stats: PlayerStatsSchema
    sessions: List[SessionSchema] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
