#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Players for the Ataxx game controller.

A player is asked for one move at a time by ``Game.step``.  ``AIPlayer``
wraps the alpha-beta SearchEngine; ``ScriptedPlayer`` replays moves given in
advance, standing in for a human typing moves.
"""
from collections import deque

from ataxx.ai.minimax import SearchEngine
from ataxx.ai.move import Move


class Player:
    """A source of moves for one color."""

    def __init__(self, color):
        self.color = color

    def my_move(self, game):
        """Return the next move for GAME, or None if no move is available."""
        raise NotImplementedError


class AIPlayer(Player):
    """
    Minimax player with Alpha-Beta pruning.

    This class asks a SearchEngine for the move to play in the game's
    current position.
    """
    def __init__(self, color, engine=None):
        """
        Initialize the AI player.

        Args:
            color: Color this player moves for
            engine: SearchEngine to use (default: a new SearchEngine)
        """
        super().__init__(color)
        self.engine = engine if engine is not None else SearchEngine()

    def my_move(self, game):
        return self.engine.choose_move(game.board, self.color)


class ScriptedPlayer(Player):
    """Plays a fixed sequence of moves written in move notation."""

    def __init__(self, color, moves=()):
        super().__init__(color)
        self._moves = deque(moves)

    def add(self, move):
        self._moves.append(move)

    def my_move(self, game):
        if not self._moves:
            return None
        move = self._moves.popleft()
        return move if isinstance(move, Move) else Move.parse(move)
