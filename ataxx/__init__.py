"""Ataxx board engine, alpha-beta search and position-analysis service."""
from ataxx.ai.board import Board
from ataxx.ai.game import Game, State
from ataxx.ai.minimax import SearchEngine
from ataxx.ai.move import Move, MoveKind, PieceColor
from ataxx.exceptions import (
    GameError, IllegalBlockError, IllegalMoveError, InvalidStateError, UndoUnderflowError,
)

__all__ = [
    "Board", "Game", "State", "SearchEngine", "Move", "MoveKind", "PieceColor",
    "GameError", "IllegalBlockError", "IllegalMoveError", "InvalidStateError",
    "UndoUnderflowError",
]
