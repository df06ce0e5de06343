#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Game controller for Ataxx.

A Game owns a Board and moves through three phases: blocks may be placed
during SETUP, moves are made during PLAYING, and the game is FINISHED once
the board reports game over.  Clearing the game returns it to SETUP.
"""
import logging
from enum import Enum
from typing import Optional

from ataxx.ai.board import Board
from ataxx.ai.move import Move, PieceColor, parse_square
from ataxx.exceptions import InvalidStateError

logger = logging.getLogger(__name__)


class State(Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class Game:
    """Drives turn order between two players on one board."""

    def __init__(self, board=None, red=None, blue=None):
        """
        Args:
            board: Board to play on (default: a new board)
            red: Player for RED, or None to supply RED's moves via play_move
            blue: Player for BLUE, or None to supply BLUE's moves via play_move
        """
        self._board = board if board is not None else Board()
        self._state = State.SETUP
        self._players = {PieceColor.RED: red, PieceColor.BLUE: blue}

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> State:
        return self._state

    def set_player(self, color, player):
        self._players[color] = player

    def clear(self):
        """Reset the board to the starting position and return to SETUP."""
        self._board.clear()
        self._state = State.SETUP

    def block(self, name):
        """Place a block at square NAME (and its reflections)."""
        self._check_state("block", State.SETUP)
        col, row = parse_square(name)
        self._board.set_block(col, row)

    def start(self):
        self._check_state("start", State.SETUP)
        self._state = State.PLAYING
        self._update_state()

    def play_move(self, move) -> Move:
        """Apply MOVE (a Move or move notation) for the side to move."""
        self._check_state("move", State.PLAYING)
        if isinstance(move, str):
            move = Move.parse(move)
        color = self._board.whose_move
        if move.is_pass:
            self._board.pass_turn()
            logger.info("%s passes.", color)
        else:
            self._board.make_move(move)
            logger.info("%s moves %s.", color, move)
        self._update_state()
        return move

    def step(self) -> Optional[Move]:
        """Ask the player on move for a move and apply it.

        Returns:
            Move: The move played, or None if the player had nothing to play.
        """
        self._check_state("step", State.PLAYING)
        color = self._board.whose_move
        player = self._players.get(color)
        if player is None:
            raise InvalidStateError(f"No player for {color}")
        move = player.my_move(self)
        if move is None:
            return None
        return self.play_move(move)

    def play(self, max_moves=None) -> Optional[str]:
        """Play until the game finishes, a player runs out of moves to offer,
        or MAX_MOVES moves have been made.

        Returns:
            str: The outcome if the game finished, otherwise None.
        """
        made = 0
        while self._state is State.PLAYING:
            if max_moves is not None and made >= max_moves:
                break
            if self.step() is None:
                break
            made += 1
        return self.outcome() if self._state is State.FINISHED else None

    def undo(self):
        self._check_state("undo", State.PLAYING)
        self._board.undo()

    def outcome(self) -> str:
        winner = self._board.winner()
        if winner is PieceColor.RED:
            return "Red wins."
        if winner is PieceColor.BLUE:
            return "Blue wins."
        return "Draw."

    def _update_state(self):
        if self._state is State.PLAYING and self._board.game_over():
            self._state = State.FINISHED
            logger.info(self.outcome())

    def _check_state(self, command, *states):
        if self._state not in states:
            raise InvalidStateError(f"'{command}' command is not allowed now.")
