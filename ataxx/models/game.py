# ataxx/models/game.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from ataxx.ai.constants import JUMP_LIMIT


class PositionRequest(BaseModel):
    # Seven rows of "red" / "blue" / "block" / "empty" (or r/b/x/- or null), top row first
    board: List[List[Optional[str]]]
    current_player: Literal["red", "blue"]
    num_jumps: int = Field(0, ge=0, le=JUMP_LIMIT)
    depth: Optional[int] = Field(None, ge=0, le=8)
    seed: Optional[int] = None


class ApplyMoveRequest(PositionRequest):
    move: str


class MoveResponse(BaseModel):
    move: str
    kind: Literal["pass", "extend", "jump"]
    from_pos: Optional[str] = None
    to_pos: Optional[str] = None
    execution_time: float


class LegalMovesResponse(BaseModel):
    legal_moves: List[str]


class PositionResponse(BaseModel):
    board: List[List[str]]
    current_player: str
    num_jumps: int
    red_pieces: int
    blue_pieces: int
    game_over: bool
    winner: Optional[str] = None
