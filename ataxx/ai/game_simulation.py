#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
AI-vs-AI simulation for Ataxx.

Plays a number of games between two SearchEngine players and reports the
standings.  Each game's moves are logged at INFO level.
"""
import argparse
import logging
import random
import time

from ataxx.ai.constants import DEFAULT_MINIMAX_DEPTH
from ataxx.ai.game import Game, State
from ataxx.ai.minimax import SearchEngine
from ataxx.ai.minimax_player import AIPlayer
from ataxx.ai.move import PieceColor
from ataxx.config import get_settings

logger = logging.getLogger(__name__)


def play_game(depth_red=DEFAULT_MINIMAX_DEPTH, depth_blue=DEFAULT_MINIMAX_DEPTH,
              max_moves=None, rng=None):
    """Play one game between two AI players.

    Args:
        depth_red: Search depth for RED
        depth_blue: Search depth for BLUE
        max_moves: Stop after this many moves (default: play to the end)
        rng: Random source shared by both engines

    Returns:
        Game: The game, FINISHED unless max_moves cut it short.
    """
    rng = rng if rng is not None else random.Random()
    game = Game(
        red=AIPlayer(PieceColor.RED, SearchEngine(depth_red, rng)),
        blue=AIPlayer(PieceColor.BLUE, SearchEngine(depth_blue, rng)),
    )
    game.start()
    game.play(max_moves=max_moves)
    return game


def main(number_games=10, depth_red=DEFAULT_MINIMAX_DEPTH, depth_blue=DEFAULT_MINIMAX_DEPTH,
         max_moves=None, seed=None):
    """Run a series of games and return the standings.

    Returns:
        dict: Number of games won by "red" and "blue", drawn ("draw") and
            left unfinished ("unfinished").
    """
    rng = random.Random(seed)
    results = {"red": 0, "blue": 0, "draw": 0, "unfinished": 0}

    for i in range(number_games):
        logger.info("Game %d/%d (red depth %d, blue depth %d)",
                    i + 1, number_games, depth_red, depth_blue)
        begin = time.time()
        game = play_game(depth_red, depth_blue, max_moves, rng)
        board = game.board
        if game.state is not State.FINISHED:
            results["unfinished"] += 1
        else:
            winner = board.winner()
            results[winner.token if winner else "draw"] += 1
        logger.info("Game %d finished in %d moves (%.2fs): %s\n%s",
                    i + 1, board.num_moves, time.time() - begin,
                    game.outcome() if game.state is State.FINISHED else "unfinished",
                    board)

    logger.info("Final results: red %d, blue %d, draws %d, unfinished %d",
                results["red"], results["blue"], results["draw"], results["unfinished"])
    return results


def cli(argv=None):
    settings = get_settings()
    parser = argparse.ArgumentParser(description='Run Ataxx AI-vs-AI simulation')
    parser.add_argument('--number-games', type=int, default=10,
                        help='Number of games to play')
    parser.add_argument('--depth-red', type=int, default=settings.search_depth,
                        help='Search depth for red')
    parser.add_argument('--depth-blue', type=int, default=settings.search_depth,
                        help='Search depth for blue')
    parser.add_argument('--max-moves', type=int, default=None,
                        help='Maximum number of moves per game')
    parser.add_argument('--seed', type=int, default=settings.seed,
                        help='Random seed for tie-breaking')
    parser.add_argument('--log-file', default=None,
                        help='Write the log here instead of to stderr')
    args = parser.parse_args(argv)

    logging.basicConfig(
        filename=args.log_file,
        filemode='w',
        level=settings.log_level,
        format='%(asctime)s %(message)s'
    )
    results = main(args.number_games, args.depth_red, args.depth_blue,
                   args.max_moves, args.seed)
    print(f"Red wins: {results['red']}")
    print(f"Blue wins: {results['blue']}")
    print(f"Draws: {results['draw']}")
    print(f"Unfinished: {results['unfinished']}")
    return results


if __name__ == "__main__":
    cli()
