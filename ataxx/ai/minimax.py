#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Alpha-beta minimax search for Ataxx.

The engine walks the game tree on a single board with make_move/undo, so no
position is copied below the root.  Search only goes deeper than one ply in
the narrow endgame window where few squares are open but the game is not
about to end; everywhere else a node is decided by a greedy one-ply scan that
maximizes the mover's piece count.
"""
import logging
import random
from typing import List, Tuple

import numpy as np

from ataxx.ai.board import Board
from ataxx.ai.constants import (
    BOARD_TOTAL_CELLS, DEFAULT_MINIMAX_DEPTH, INFTY, JUMP_LIMIT,
    OPEN_CELLS_SEARCH_LIMIT, WINNING_VALUE,
)
from ataxx.ai.move import Move, MoveKind, PieceColor
from ataxx.exceptions import InvalidStateError

logger = logging.getLogger(__name__)


class SearchEngine:
    """Depth- and phase-adaptive negamax with alpha-beta pruning.

    Position values are integers from the point of view of the side to move:
    the piece differential for an unfinished game, +/-WINNING_VALUE (or 0 for
    a draw) for a finished one.
    """

    def __init__(self, max_depth=DEFAULT_MINIMAX_DEPTH, rng=None):
        """
        Args:
            max_depth: Maximum search depth in plies (default: 4)
            rng: Source of randomness for breaking ties between equally good
                moves; anything with a ``choice`` method (default: a fresh
                random.Random)
        """
        if max_depth < 0:
            raise ValueError("Depth must be non-negative")
        self.max_depth = max_depth
        self.rng = rng if rng is not None else random.Random()

    def choose_move(self, board: Board, color: PieceColor) -> Move:
        """Return a legal move (or PASS) for COLOR, the side to move on BOARD.

        BOARD itself is left untouched; the search runs on a private copy so
        that the board's observers do not see the explored positions.

        Raises:
            InvalidStateError: If the game is over or it is not COLOR's move.
        """
        if board.game_over():
            raise InvalidStateError("Game is already over")
        if color != board.whose_move:
            raise InvalidStateError(f"It is not {color}'s move")
        if not board.can_move(color):
            return Move.PASS

        value, candidates = self.best_moves(board.copy())
        move = self.rng.choice(candidates)
        logger.debug("%s chose %s from %d candidate(s), value %d",
                     color, move, len(candidates), value)
        return move

    def best_moves(self, board: Board, depth=None) -> Tuple[int, List[Move]]:
        """Search BOARD for the side to move.

        BOARD is searched in place and restored before returning.

        Args:
            board: Position to search
            depth: Plies to search (default: max_depth)

        Returns:
            tuple: The value of the position and the moves achieving it.  A
                game-winning move is returned alone as soon as it is found.
                The list is empty if the side to move has no moves.
        """
        if depth is None:
            depth = self.max_depth
        if self._cutoff(board, depth):
            return self._scan(board)
        return self._search_root(board, depth)

    def _cutoff(self, board, depth):
        """True if the node at DEPTH is decided by the one-ply scan."""
        empty_remaining = BOARD_TOTAL_CELLS - (board.red_pieces + board.blue_pieces)
        open_cells = empty_remaining - board.num_blocks
        return (depth <= 0
                or empty_remaining <= self.max_depth
                or open_cells > OPEN_CELLS_SEARCH_LIMIT)

    @staticmethod
    def _candidates(board):
        """Legal moves for the side to move as (sources, targets, is_jump)
        arrays; extends to the same square are interchangeable, so only the
        first one is kept."""
        sources, targets, jumps = board.move_arrays()
        extends = np.flatnonzero(~jumps)
        _, first = np.unique(targets[extends], return_index=True)
        keep = jumps.copy()
        keep[extends[first]] = True
        return sources[keep], targets[keep], jumps[keep]

    @staticmethod
    def _moves(sources, targets, jumps, picks):
        extend, jump = MoveKind.EXTEND, MoveKind.JUMP
        return [Move(jump if jumps[i] else extend, int(sources[i]), int(targets[i]))
                for i in picks]

    def _ordered(self, board):
        """Candidates sorted by pieces gained, most first, for better pruning."""
        sources, targets, jumps = self._candidates(board)
        gained = board.conversions(targets) + ~jumps
        order = np.argsort(-gained, kind="stable")
        return self._moves(sources, targets, jumps, order)

    @staticmethod
    def _static_value(board, player):
        return board.num_pieces(player) - board.num_pieces(player.opposite())

    @staticmethod
    def _terminal_value(board, player):
        own = board.num_pieces(player)
        opp = board.num_pieces(player.opposite())
        if own > opp:
            return WINNING_VALUE
        if own < opp:
            return -WINNING_VALUE
        return 0

    def _scan(self, board, with_moves=True):
        """One-ply greedy evaluation.

        Candidates are ranked by the mover's resulting piece count; moves that
        finish the game with a loss rank below everything else.  The value of
        the node is the best static value among the top-ranked moves.  The
        outcome of every candidate is computed from the piece counts without
        playing it, except for the one extend that could leave neither side
        able to move.
        """
        mover = board.whose_move
        own = board.num_pieces(mover)
        opp = board.num_pieces(mover.opposite())
        sources, targets, jumps = self._candidates(board)
        if not targets.size:
            return own - opp, []

        captured = board.conversions(targets)
        own_after = own + captured + ~jumps
        opp_after = opp - captured
        finished = ((opp_after == 0)
                    | (own_after + opp_after == BOARD_TOTAL_CELLS)
                    | (jumps & (board.num_jumps + 1 >= JUMP_LIMIT)))

        # A jump leaves its source square reachable.  An extend can strand
        # both sides only when it fills the last reachable empty square.
        frontier = board.frontier()
        if frontier.size == 1:
            for i in np.flatnonzero(~jumps & ~finished & (targets == frontier[0])):
                move = self._moves(sources, targets, jumps, [i])[0]
                board.make_move(move)
                finished[i] = board.game_over()
                board.undo()

        margin = own_after - opp_after
        wins = finished & (margin > 0)
        if wins.any():
            return WINNING_VALUE, self._moves(sources, targets, jumps, [int(np.argmax(wins))])

        values = np.where(finished, np.sign(margin) * WINNING_VALUE, margin)
        scores = np.where(finished & (margin < 0), -INFTY, own_after)
        tied = np.flatnonzero(scores == scores.max())
        best_value = int(values[tied].max())
        if not with_moves:
            return best_value, []
        return best_value, self._moves(sources, targets, jumps, tied)

    def _negamax(self, board, depth, alpha, beta):
        """Return the value of BOARD for the side to move (fail-soft)."""
        if self._cutoff(board, depth):
            value, _ = self._scan(board, with_moves=False)
            return value

        mover = board.whose_move
        moves = self._ordered(board)
        if not moves:
            # Game is not over, so the opponent can move
            board.make_move(Move.PASS)
            value = -self._negamax(board, depth - 1, -beta, -alpha)
            board.undo()
            return value

        best = -INFTY
        for move in moves:
            board.make_move(move)
            if board.game_over():
                value = self._terminal_value(board, mover)
            else:
                value = -self._negamax(board, depth - 1, -beta, -alpha)
            board.undo()

            if value > best:
                best = value
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break
        return best

    def _search_root(self, board, depth):
        mover = board.whose_move
        best = -INFTY
        tied = []
        for move in self._ordered(board):
            board.make_move(move)
            if board.game_over():
                value = self._terminal_value(board, mover)
            else:
                # Window (best - 1, INFTY) keeps values exact for every move
                # that ties the best one found so far
                value = -self._negamax(board, depth - 1, -INFTY, -(best - 1))
            board.undo()

            if value == WINNING_VALUE:
                return value, [move]
            if value > best:
                best, tied = value, [move]
            elif value == best:
                tied.append(move)
        return best, tied
