#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Board module for Ataxx.

The 7x7 playing area is stored in a flat numpy vector of 11x11 squares: the
outer two rows and columns on every side are permanently blocked.  Any extend
or jump offset applied to an interior square therefore lands inside the
vector, and squares off the edge look blocked, so move generation never needs
to test for edges.

Every mutation is recorded in a history that holds enough to invert it
exactly, which lets search code walk the game tree with make_move/undo
instead of copying boards.
"""
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from ataxx.ai.constants import (
    ALL_OFFSETS, BOARD_TOTAL_CELLS, EXTENDED_TOTAL_CELLS, EXTEND_OFFSETS,
    JUMP_LIMIT, JUMP_OFFSETS, SIDE, SQUARES, index,
)
from ataxx.ai.move import Move, MoveKind, PieceColor
from ataxx.exceptions import IllegalBlockError, IllegalMoveError, UndoUnderflowError

EMPTY = PieceColor.EMPTY
RED = PieceColor.RED
BLUE = PieceColor.BLUE
BLOCKED = PieceColor.BLOCKED

_INTERIOR = np.array(SQUARES, dtype=np.intp)
_EXTEND = np.array(EXTEND_OFFSETS, dtype=np.intp)
_ALL = np.array(ALL_OFFSETS, dtype=np.intp)
_NUM_EXTENDS = len(EXTEND_OFFSETS)
_EXTEND_SET = frozenset(EXTEND_OFFSETS)
_JUMP_SET = frozenset(JUMP_OFFSETS)


class HistoryEntry(NamedTuple):
    """What undo needs to reverse one move or pass."""
    move: Move
    flipped: Tuple[int, ...]
    prior_jumps: int


class Board:
    """An Ataxx position plus the history of moves that produced it.

    RED moves first.  The start position has RED on a7 and g1 and BLUE on a1
    and g7.  Observers registered with ``add_observer`` are called with the
    board after each successful clear, move, pass, undo and block placement.
    """

    def __init__(self):
        """Initialize a board in the starting position."""
        self._cells = np.full(EXTENDED_TOTAL_CELLS, BLOCKED, dtype=np.int8)
        self._observers: List[Callable[["Board"], None]] = []
        self.clear()

    def clear(self):
        """Reset to the starting position with no blocks and no history."""
        self._cells.fill(BLOCKED)
        self._cells[_INTERIOR] = EMPTY
        for col, row, color in ((0, 6, RED), (6, 0, RED), (0, 0, BLUE), (6, 6, BLUE)):
            self._cells[index(col, row)] = color
        self._num_red = 2
        self._num_blue = 2
        self._num_blocks = 0
        self._num_jumps = 0
        self._whose_move = RED
        self._history: List[HistoryEntry] = []
        self._notify()

    def copy(self) -> "Board":
        """Return an independent copy of this board, history included.

        Observers are not copied.
        """
        other = Board.__new__(Board)
        other._cells = self._cells.copy()
        other._observers = []
        other._num_red = self._num_red
        other._num_blue = self._num_blue
        other._num_blocks = self._num_blocks
        other._num_jumps = self._num_jumps
        other._whose_move = self._whose_move
        other._history = list(self._history)
        return other

    @classmethod
    def from_rows(cls, rows, whose_move=RED, num_jumps=0) -> "Board":
        """Build a position from rows of cell tokens.

        Args:
            rows: Seven rows of seven tokens (see PieceColor.from_token), top
                row ('7') first.  A row may be a string such as "r-----b".
            whose_move: Side to move, a PieceColor or a token.
            num_jumps: Consecutive jumps already made in this position.

        Returns:
            Board: The position, with an empty history.
        """
        rows = list(rows)
        if len(rows) != SIDE or any(len(row) != SIDE for row in rows):
            raise IllegalMoveError(f"Board must be {SIDE}x{SIDE}")
        whose_move = PieceColor.from_token(whose_move)
        if whose_move not in (RED, BLUE):
            raise IllegalMoveError(f"Side to move must be red or blue, not {whose_move.token}")
        if not 0 <= num_jumps <= JUMP_LIMIT:
            raise IllegalMoveError(f"Jump count must be between 0 and {JUMP_LIMIT}")

        board = cls()
        for r, row in enumerate(rows):
            for col, token in enumerate(row):
                board._cells[index(col, SIDE - 1 - r)] = PieceColor.from_token(token)
        interior = board._cells[_INTERIOR]
        board._num_red = int(np.count_nonzero(interior == RED))
        board._num_blue = int(np.count_nonzero(interior == BLUE))
        board._num_blocks = int(np.count_nonzero(interior == BLOCKED))
        board._whose_move = whose_move
        board._num_jumps = num_jumps
        return board

    def to_rows(self) -> List[List[str]]:
        """Return the cell tokens row by row, top row ('7') first."""
        return [
            [self.get_square(col, row).token for col in range(SIDE)]
            for row in reversed(range(SIDE))
        ]

    # Observers

    def add_observer(self, callback: Callable[["Board"], None]):
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[["Board"], None]):
        self._observers.remove(callback)

    def _notify(self):
        for callback in list(self._observers):
            callback(self)

    # Queries

    def get(self, sq: int) -> PieceColor:
        """Return the contents of the square with linearized index SQ."""
        return PieceColor(int(self._cells[sq]))

    def get_square(self, col: int, row: int) -> PieceColor:
        """Return the contents of the 0-based square COL, ROW."""
        return self.get(index(col, row))

    @property
    def whose_move(self) -> PieceColor:
        return self._whose_move

    @property
    def num_moves(self) -> int:
        """Moves and passes made since the last clear."""
        return len(self._history)

    @property
    def num_jumps(self) -> int:
        """Jumps made since the last extend (or the start of the game)."""
        return self._num_jumps

    @property
    def red_pieces(self) -> int:
        return self._num_red

    @property
    def blue_pieces(self) -> int:
        return self._num_blue

    @property
    def num_blocks(self) -> int:
        return self._num_blocks

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    def all_moves(self) -> List[Move]:
        """Return every move and pass made since the last clear, in order."""
        return [entry.move for entry in self._history]

    def num_pieces(self, color: PieceColor) -> int:
        """Return the number of interior squares holding COLOR."""
        if color == RED:
            return self._num_red
        if color == BLUE:
            return self._num_blue
        if color == BLOCKED:
            return self._num_blocks
        return BOARD_TOTAL_CELLS - self._num_red - self._num_blue - self._num_blocks

    def _add_pieces(self, color, k):
        if color == RED:
            self._num_red += k
        else:
            self._num_blue += k

    def legal_move(self, move: Optional[Move]) -> bool:
        """Return True iff MOVE is legal for the side to move."""
        if move is None:
            return False
        if move.is_pass:
            return not self.can_move(self._whose_move)
        from_index, to_index = move.from_index, move.to_index
        if from_index is None or to_index is None:
            return False
        offsets = _EXTEND_SET if move.is_extend else _JUMP_SET
        if to_index - from_index not in offsets:
            return False
        if not (0 <= from_index < EXTENDED_TOTAL_CELLS
                and 0 <= to_index < EXTENDED_TOTAL_CELLS):
            return False
        return (self._cells[from_index] == self._whose_move
                and self._cells[to_index] == EMPTY)

    def _squares_of(self, color):
        return _INTERIOR[self._cells[_INTERIOR] == color]

    def can_move(self, color: PieceColor) -> bool:
        """Return True iff COLOR has an extend or jump, whoever is to move."""
        cells = self._cells
        # Both offset tables are symmetric, so search from whichever side is smaller
        if self.num_pieces(EMPTY) < self.num_pieces(color):
            empties = self._squares_of(EMPTY)
            return bool((cells[empties[:, None] + _ALL] == color).any())
        pieces = self._squares_of(color)
        return bool((cells[pieces[:, None] + _ALL] == EMPTY).any())

    def move_arrays(self, color: Optional[PieceColor] = None):
        """Return the moves available to COLOR as parallel numpy arrays.

        Args:
            color: Player to generate moves for (default: side to move)

        Returns:
            tuple: (sources, targets, is_jump), in the order legal_moves
                yields the same moves.
        """
        if color is None:
            color = self._whose_move
        pieces = self._squares_of(color)
        targets = pieces[:, None] + _ALL
        rows, cols = np.nonzero(self._cells[targets] == EMPTY)
        return pieces[rows], targets[rows, cols], cols >= _NUM_EXTENDS

    def legal_moves(self, color: Optional[PieceColor] = None) -> Iterator[Move]:
        """Yield every extend and jump available to COLOR.

        Args:
            color: Player to generate moves for (default: side to move)

        Yields:
            Move: Extends and jumps in square order, extends before jumps
                for each source square.
        """
        sources, targets, jumps = self.move_arrays(color)
        extend, jump = MoveKind.EXTEND, MoveKind.JUMP
        for sq, to, is_jump in zip(sources.tolist(), targets.tolist(), jumps.tolist()):
            yield Move(jump if is_jump else extend, sq, to)

    def conversions(self, targets, color: Optional[PieceColor] = None) -> np.ndarray:
        """Return how many opposing pieces a move by COLOR to each of TARGETS
        would convert."""
        if color is None:
            color = self._whose_move
        targets = np.asarray(targets, dtype=np.intp)
        neighbors = self._cells[targets[:, None] + _EXTEND]
        return np.count_nonzero(neighbors == color.opposite(), axis=1)

    def frontier(self) -> np.ndarray:
        """Return the empty squares that a piece of either color can reach."""
        cells = self._cells
        empties = self._squares_of(EMPTY)
        near = cells[empties[:, None] + _ALL]
        return empties[((near == RED) | (near == BLUE)).any(axis=1)]

    def game_over(self) -> bool:
        """Return True iff the game has ended.

        That is: JUMP_LIMIT consecutive jumps have been made, one side has no
        pieces, the board is full, or neither side can move.
        """
        if self._num_jumps >= JUMP_LIMIT:
            return True
        if self._num_red == 0 or self._num_blue == 0:
            return True
        if self._num_red + self._num_blue == BOARD_TOTAL_CELLS:
            return True
        return self.frontier().size == 0

    def winner(self) -> Optional[PieceColor]:
        """Return the side with more pieces, or None for a draw."""
        if self._num_red > self._num_blue:
            return RED
        if self._num_blue > self._num_red:
            return BLUE
        return None

    # Mutators

    def make_move(self, move: Move):
        """Apply MOVE for the side to move.

        Raises:
            IllegalMoveError: If MOVE is not legal; the board is unchanged.
        """
        if not self.legal_move(move):
            raise IllegalMoveError(f"Illegal move: {move}")
        mover = self._whose_move
        opponent = mover.opposite()
        if move.is_pass:
            self._history.append(HistoryEntry(move, (), self._num_jumps))
            self._whose_move = opponent
            self._notify()
            return

        cells = self._cells
        to = move.to_index
        neighbors = to + _EXTEND
        flipped = neighbors[cells[neighbors] == opponent]
        cells[flipped] = mover
        cells[to] = mover
        conversions = flipped.size

        prior_jumps = self._num_jumps
        if move.is_jump:
            cells[move.from_index] = EMPTY
            self._num_jumps += 1
            self._add_pieces(mover, conversions)
        else:
            self._num_jumps = 0
            self._add_pieces(mover, conversions + 1)
        self._add_pieces(opponent, -conversions)

        self._history.append(HistoryEntry(move, tuple(flipped.tolist()), prior_jumps))
        self._whose_move = opponent
        self._notify()

    def pass_turn(self):
        """Pass for the side to move, which must have no moves."""
        self.make_move(Move.PASS)

    def undo(self):
        """Take back the most recent move or pass.

        Raises:
            UndoUnderflowError: If there is nothing to undo.
        """
        if not self._history:
            raise UndoUnderflowError("No moves to undo")
        move, flipped, prior_jumps = self._history.pop()
        mover = self._whose_move.opposite()
        self._whose_move = mover
        self._num_jumps = prior_jumps
        if not move.is_pass:
            opponent = mover.opposite()
            cells = self._cells
            cells[move.to_index] = EMPTY
            for sq in flipped:
                cells[sq] = opponent
            if move.is_jump:
                cells[move.from_index] = mover
                self._add_pieces(mover, -len(flipped))
            else:
                self._add_pieces(mover, -len(flipped) - 1)
            self._add_pieces(opponent, len(flipped))
        self._notify()

    @staticmethod
    def _reflections(col, row):
        """Indices of COL, ROW and its reflections across the middle row and column."""
        return {
            index(c, r)
            for c in (col, SIDE - 1 - col)
            for r in (row, SIDE - 1 - row)
        }

    def legal_block(self, col: int, row: int) -> bool:
        """Return True iff a block may be placed at the 0-based square COL, ROW."""
        if not (0 <= col < SIDE and 0 <= row < SIDE):
            return False
        return all(self._cells[sq] == EMPTY for sq in self._reflections(col, row))

    def set_block(self, col: int, row: int):
        """Block COL, ROW together with its reflections.

        Raises:
            IllegalBlockError: If any of those squares is not empty.
        """
        if not self.legal_block(col, row):
            raise IllegalBlockError("illegal block placement")
        squares = self._reflections(col, row)
        for sq in squares:
            self._cells[sq] = BLOCKED
        self._num_blocks += len(squares)
        self._notify()

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (np.array_equal(self._cells, other._cells)
                and self._whose_move == other._whose_move
                and self._num_jumps == other._num_jumps
                and self._num_red == other._num_red
                and self._num_blue == other._num_blue
                and self._num_blocks == other._num_blocks)

    def __hash__(self):
        return hash((self._cells.tobytes(), self._whose_move, self._num_jumps))

    def __str__(self):
        symbols = {EMPTY: "-", RED: "r", BLUE: "b", BLOCKED: "X"}
        lines = ["==="]
        for row in reversed(range(SIDE)):
            lines.append(" " + "".join(" " + symbols[self.get_square(col, row)]
                                       for col in range(SIDE)))
        lines.append("===")
        return "\n".join(lines)
