#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Piece colors, square names and the Move value type.

Squares are addressed by their linearized index on the bordered grid (see
``constants.index``).  Square names use columns 'a'..'g' and rows '1'..'7',
and a move is written as two square names joined by a dash, e.g. ``a7-b7``.
A pass is written as a single dash.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, Optional, Tuple

from ataxx.ai.constants import (
    BORDER, COLUMNS, EXTENDED_SIDE, EXTEND_OFFSETS, JUMP_OFFSETS, ROWS, index,
)
from ataxx.exceptions import IllegalMoveError


class PieceColor(IntEnum):
    EMPTY = 0
    RED = 1
    BLUE = 2
    BLOCKED = 3

    def opposite(self) -> "PieceColor":
        """Return the opposing player color."""
        if self is PieceColor.RED:
            return PieceColor.BLUE
        if self is PieceColor.BLUE:
            return PieceColor.RED
        raise ValueError(f"{self.name} has no opposite")

    @property
    def token(self) -> str:
        """Lowercase word used for this color on the wire."""
        return _TOKEN_NAMES[self]

    @classmethod
    def from_token(cls, token) -> "PieceColor":
        """Parse a cell token such as 'r', 'blue', 'x' or '-'."""
        if token is None:
            return cls.EMPTY
        if isinstance(token, PieceColor):
            return token
        try:
            return _TOKENS[str(token).strip().lower()]
        except KeyError:
            raise IllegalMoveError(f"Invalid cell token: {token!r}") from None

    def __str__(self):
        return self.name


_TOKEN_NAMES = {
    PieceColor.EMPTY: "empty",
    PieceColor.RED: "red",
    PieceColor.BLUE: "blue",
    PieceColor.BLOCKED: "block",
}

_TOKENS = {
    "r": PieceColor.RED, "red": PieceColor.RED,
    "b": PieceColor.BLUE, "blue": PieceColor.BLUE,
    "x": PieceColor.BLOCKED, "block": PieceColor.BLOCKED, "blocked": PieceColor.BLOCKED,
    "-": PieceColor.EMPTY, ".": PieceColor.EMPTY, "empty": PieceColor.EMPTY, "": PieceColor.EMPTY,
}


def square_name(sq: int) -> str:
    """Return the name ('a1'..'g7') of the interior square with index SQ."""
    row, col = divmod(sq, EXTENDED_SIDE)
    return COLUMNS[col - BORDER] + ROWS[row - BORDER]


def parse_square(name: str) -> Tuple[int, int]:
    """Return the 0-based (col, row) of the square called NAME."""
    if not isinstance(name, str) or len(name) != 2:
        raise IllegalMoveError(f"Invalid square: {name!r}")
    col, row = COLUMNS.find(name[0].lower()), ROWS.find(name[1])
    if col < 0 or row < 0:
        raise IllegalMoveError(f"Invalid square: {name!r}")
    return col, row


class MoveKind(Enum):
    PASS = "pass"
    EXTEND = "extend"
    JUMP = "jump"


@dataclass(frozen=True)
class Move:
    """A pass, or an extend/jump between two squares of the bordered grid.

    Build moves with ``Move.between``, ``Move.move`` or ``Move.parse``; they
    check that the two squares are an extend or jump distance apart, so a
    Move never needs to revalidate its own geometry.
    """

    kind: MoveKind
    from_index: Optional[int] = None
    to_index: Optional[int] = None

    PASS: ClassVar["Move"]

    @classmethod
    def between(cls, from_index: int, to_index: int) -> Optional["Move"]:
        """Return the move FROM_INDEX-TO_INDEX, or None if the squares are
        neither an extend nor a jump apart."""
        delta = to_index - from_index
        if delta in EXTEND_OFFSETS:
            return cls(MoveKind.EXTEND, from_index, to_index)
        if delta in JUMP_OFFSETS:
            return cls(MoveKind.JUMP, from_index, to_index)
        return None

    @classmethod
    def move(cls, c0: str, r0: str, c1: str, r1: str) -> Optional["Move"]:
        """Return the move C0R0-C1R1, or PASS if C0 is '-'."""
        if c0 == "-":
            return cls.PASS
        from_col, from_row = parse_square(c0 + r0)
        to_col, to_row = parse_square(c1 + r1)
        return cls.between(index(from_col, from_row), index(to_col, to_row))

    @classmethod
    def parse(cls, text: str) -> "Move":
        """Parse move notation such as 'a7-b7', or '-' for a pass."""
        text = text.strip()
        if text == "-":
            return cls.PASS
        if len(text) != 5 or text[2] != "-":
            raise IllegalMoveError(f"Invalid move notation: {text!r}")
        result = cls.move(text[0], text[1], text[3], text[4])
        if result is None:
            raise IllegalMoveError(f"Squares are not a move apart: {text!r}")
        return result

    @property
    def is_pass(self) -> bool:
        return self.kind is MoveKind.PASS

    @property
    def is_extend(self) -> bool:
        return self.kind is MoveKind.EXTEND

    @property
    def is_jump(self) -> bool:
        return self.kind is MoveKind.JUMP

    @property
    def from_square(self) -> Optional[str]:
        return None if self.from_index is None else square_name(self.from_index)

    @property
    def to_square(self) -> Optional[str]:
        return None if self.to_index is None else square_name(self.to_index)

    def __str__(self):
        if self.is_pass:
            return "-"
        return f"{self.from_square}-{self.to_square}"


Move.PASS = Move(MoveKind.PASS)
