import logging
import random
import time

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from ataxx.ai.board import Board
from ataxx.ai.minimax import SearchEngine
from ataxx.ai.move import Move
from ataxx.config import get_settings
from ataxx.exceptions import GameError
from ataxx.models.game import (
    ApplyMoveRequest, LegalMovesResponse, MoveResponse, PositionRequest, PositionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_position(request: PositionRequest) -> Board:
    try:
        return Board.from_rows(request.board, request.current_player, request.num_jumps)
    except GameError as e:
        logger.warning("Rejected position: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


def _describe(board: Board) -> PositionResponse:
    game_over = board.game_over()
    winner = board.winner() if game_over else None
    return PositionResponse(
        board=board.to_rows(),
        current_player=board.whose_move.token,
        num_jumps=board.num_jumps,
        red_pieces=board.red_pieces,
        blue_pieces=board.blue_pieces,
        game_over=game_over,
        winner=winner.token if winner else ("draw" if game_over else None),
    )


@router.post("/bot-move/", response_model=MoveResponse)
async def get_bot_move(request: PositionRequest):
    settings = get_settings()
    board = _load_position(request)
    depth = request.depth if request.depth is not None else settings.search_depth
    seed = request.seed if request.seed is not None else settings.seed
    engine = SearchEngine(max_depth=depth, rng=random.Random(seed))

    start_time = time.time()
    try:
        # Search is CPU-bound; keep it off the event loop
        move = await run_in_threadpool(engine.choose_move, board, board.whose_move)
    except GameError as e:
        logger.warning("No bot move: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    execution_time = time.time() - start_time

    return MoveResponse(
        move=str(move),
        kind=move.kind.value,
        from_pos=move.from_square,
        to_pos=move.to_square,
        execution_time=execution_time,
    )


@router.post("/legal-moves/", response_model=LegalMovesResponse)
async def get_legal_moves(request: PositionRequest):
    board = _load_position(request)
    moves = [str(move) for move in board.legal_moves()]
    if not moves and not board.game_over():
        moves = [str(Move.PASS)]
    return LegalMovesResponse(legal_moves=moves)


@router.post("/apply-move/", response_model=PositionResponse)
async def apply_move(request: ApplyMoveRequest):
    board = _load_position(request)
    try:
        board.make_move(Move.parse(request.move))
    except GameError as e:
        logger.warning("Rejected move %r: %s", request.move, e)
        raise HTTPException(status_code=400, detail=str(e))
    return _describe(board)


@router.post("/evaluate/", response_model=PositionResponse)
async def evaluate_state(request: PositionRequest):
    return _describe(_load_position(request))
