"""Tests of the bordered Ataxx board: moves, undo, blocks and game end."""
import pytest

from ataxx.ai.board import Board
from ataxx.ai.constants import BOARD_TOTAL_CELLS, EXTENDED_TOTAL_CELLS, SQUARES, index
from ataxx.ai.move import Move, MoveKind, PieceColor, parse_square
from ataxx.exceptions import IllegalBlockError, IllegalMoveError, UndoUnderflowError

RED, BLUE, EMPTY, BLOCKED = PieceColor.RED, PieceColor.BLUE, PieceColor.EMPTY, PieceColor.BLOCKED

GAME1 = ["a7-b7", "a1-a2",
         "a7-a6", "a2-a3",
         "a6-a5", "a3-a4"]

GAME2 = ["a7-a6", "a1-a2",
         "a7-a5", "a2-a3",
         "a5-b3", "a1-b2"]

# Red on a1 is walled in; blue on g7 is free
STUCK_RED = [
    "------b",
    "-------",
    "-------",
    "-------",
    "xxx----",
    "xxx----",
    "rxx----",
]


def make_moves(board, moves):
    for text in moves:
        board.make_move(Move.parse(text))


def at(board, name):
    return board.get(index(*parse_square(name)))


def assert_counts_consistent(board):
    interior = set(SQUARES)
    counts = {color: 0 for color in PieceColor}
    for sq in range(EXTENDED_TOTAL_CELLS):
        if sq in interior:
            counts[board.get(sq)] += 1
        else:
            assert board.get(sq) is BLOCKED
    for color in PieceColor:
        assert board.num_pieces(color) == counts[color]
    assert sum(counts.values()) == BOARD_TOTAL_CELLS


class TestStartPosition:
    def test_corners(self):
        board = Board()
        assert at(board, "a7") is RED
        assert at(board, "g1") is RED
        assert at(board, "a1") is BLUE
        assert at(board, "g7") is BLUE
        assert board.whose_move is RED
        assert board.num_moves == 0
        assert board.num_jumps == 0
        assert board.num_blocks == 0
        assert_counts_consistent(board)

    def test_not_over(self):
        assert not Board().game_over()

    def test_text_depiction(self):
        lines = str(Board()).splitlines()
        assert lines[0] == "==="
        assert lines[1] == "  r - - - - - b"
        assert lines[7] == "  b - - - - - r"
        assert lines[8] == "==="


class TestMoves:
    def test_extend(self):
        board = Board()
        make_moves(board, GAME1)
        for name in ("a1", "a2", "a3", "a4", "a5", "g7"):
            assert at(board, name) is BLUE
        for name in ("a6", "a7", "b7", "g1"):
            assert at(board, name) is RED
        assert board.get(68) is BLUE
        assert board.blue_pieces == 6
        assert board.red_pieces == 4
        assert board.num_moves == 6
        assert_counts_consistent(board)

    def test_jump(self):
        board = Board()
        make_moves(board, GAME2)
        assert at(board, "a6") is RED
        for name in ("a1", "a2", "a3", "b2", "b3"):
            assert at(board, name) is BLUE
        assert at(board, "a7") is EMPTY
        assert at(board, "a5") is EMPTY
        assert board.blue_pieces == 6
        assert board.red_pieces == 2
        assert_counts_consistent(board)

    def test_jump_counter(self):
        board = Board()
        make_moves(board, ["a7-a5"])
        assert board.num_jumps == 1
        make_moves(board, ["a1-a3"])
        assert board.num_jumps == 2
        make_moves(board, ["g1-g2"])
        assert board.num_jumps == 0

    def test_side_to_move_alternates(self):
        board = Board()
        make_moves(board, ["a7-b7"])
        assert board.whose_move is BLUE
        make_moves(board, ["a1-a2"])
        assert board.whose_move is RED

    def test_wrong_side_is_illegal(self):
        board = Board()
        before = board.copy()
        with pytest.raises(IllegalMoveError):
            board.make_move(Move.parse("a1-a2"))
        assert board == before
        assert board.num_moves == 0

    def test_occupied_destination_is_illegal(self):
        board = Board()
        make_moves(board, GAME1)
        before = board.copy()
        assert not board.legal_move(Move.parse("b7-a6"))
        with pytest.raises(IllegalMoveError):
            board.make_move(Move.parse("b7-a6"))
        assert board == before

    def test_none_is_not_legal(self):
        assert not Board().legal_move(None)

    def test_offset_must_match_kind(self):
        board = Board()
        a7, b7, d4 = (index(*parse_square(name)) for name in ("a7", "b7", "d4"))
        far_extend = Move(MoveKind.EXTEND, a7, d4)
        short_jump = Move(MoveKind.JUMP, a7, b7)
        long_extend = Move(MoveKind.EXTEND, a7, index(*parse_square("a5")))
        for move in (far_extend, short_jump, long_extend):
            assert not board.legal_move(move)
        before = board.copy()
        with pytest.raises(IllegalMoveError):
            board.make_move(far_extend)
        assert board == before
        assert at(board, "d4") is EMPTY

    def test_incomplete_move_is_not_legal(self):
        board = Board()
        a7 = index(*parse_square("a7"))
        assert not board.legal_move(Move(MoveKind.EXTEND, None, a7))
        assert not board.legal_move(Move(MoveKind.JUMP, a7, None))
        with pytest.raises(IllegalMoveError):
            board.make_move(Move(MoveKind.EXTEND))

    def test_move_arrays_match_legal_moves(self):
        board = Board()
        make_moves(board, GAME2)
        sources, targets, jumps = board.move_arrays()
        moves = list(board.legal_moves())
        assert [m.from_index for m in moves] == sources.tolist()
        assert [m.to_index for m in moves] == targets.tolist()
        assert [m.is_jump for m in moves] == jumps.tolist()
        assert all(board.legal_move(m) for m in moves)

    def test_conversions(self):
        board = Board()
        make_moves(board, GAME1)
        targets = [index(*parse_square(name)) for name in ("b6", "b5", "c7")]
        assert board.conversions(targets).tolist() == [1, 2, 0]
        assert board.conversions(targets, BLUE).tolist() == [3, 1, 1]

    def test_legal_moves_from_start(self):
        moves = list(Board().legal_moves())
        assert len(moves) == 16
        assert sum(1 for m in moves if m.is_extend) == 6
        assert all(m.from_square in ("a7", "g1") for m in moves)
        assert list(Board().legal_moves(BLUE))[0].from_square == "a1"

    def test_all_moves(self):
        board = Board()
        make_moves(board, GAME2)
        assert [str(m) for m in board.all_moves()] == GAME2


class TestUndo:
    def test_undo_returns_to_start(self):
        b0 = Board()
        b1 = b0.copy()
        make_moves(b0, GAME1)
        b2 = b0.copy()
        for _ in GAME1:
            b0.undo()
        assert b0 == b1, "failed to return to start"
        assert b0.num_moves == 0
        make_moves(b0, GAME1)
        assert b0 == b2, "second pass failed to reach same position"

    def test_undo_jumps(self):
        board = Board()
        snapshots = [board.copy()]
        for text in GAME2:
            board.make_move(Move.parse(text))
            snapshots.append(board.copy())
        for expected in reversed(snapshots[:-1]):
            board.undo()
            assert board == expected
            assert board.num_jumps == expected.num_jumps
            assert_counts_consistent(board)

    def test_undo_restores_jump_counter_after_extend(self):
        board = Board()
        make_moves(board, ["a7-a5", "a1-a3", "a5-a7"])
        assert board.num_jumps == 3
        make_moves(board, ["a3-a2"])
        assert board.num_jumps == 0
        board.undo()
        assert board.num_jumps == 3

    def test_undo_empty_history(self):
        board = Board()
        with pytest.raises(UndoUnderflowError):
            board.undo()
        assert board == Board()


class TestPass:
    def test_cannot_pass_with_moves(self):
        board = Board()
        assert not board.legal_move(Move.PASS)
        with pytest.raises(IllegalMoveError):
            board.pass_turn()
        assert board.whose_move is RED

    def test_pass_when_stuck(self):
        board = Board.from_rows(STUCK_RED, RED)
        assert not board.can_move(RED)
        assert board.can_move(BLUE)
        assert not board.game_over()
        assert board.legal_move(Move.PASS)
        board.pass_turn()
        assert board.whose_move is BLUE
        assert board.num_moves == 1
        assert board.num_jumps == 0
        board.undo()
        assert board.whose_move is RED
        assert board.num_moves == 0


class TestBlocks:
    def test_legal_block(self):
        board = Board()
        make_moves(board, GAME1)
        assert not board.legal_block(*parse_square("a4"))
        assert board.legal_block(*parse_square("d4"))
        assert not board.legal_block(*parse_square("a1"))
        assert board.legal_block(*parse_square("b2"))
        assert not board.legal_block(*parse_square("b7"))
        assert not board.legal_block(7, 0)

    def test_block_reflections(self):
        board = Board()
        board.set_block(*parse_square("b2"))
        for name in ("b2", "f2", "b6", "f6"):
            assert at(board, name) is BLOCKED
        assert board.num_blocks == 4
        board.set_block(*parse_square("d4"))
        assert board.num_blocks == 5
        board.set_block(*parse_square("d2"))
        assert at(board, "d6") is BLOCKED
        assert board.num_blocks == 7
        assert_counts_consistent(board)

    def test_block_after_moves(self):
        board = Board()
        make_moves(board, GAME1)
        board.set_block(*parse_square("b2"))
        assert at(board, "f6") is BLOCKED
        assert_counts_consistent(board)

    def test_illegal_blocks_change_nothing(self):
        board = Board()
        make_moves(board, GAME1)
        board.set_block(*parse_square("b2"))
        before = board.copy()
        for name in ("a1", "a4", "b2", "f6"):
            with pytest.raises(IllegalBlockError):
                board.set_block(*parse_square(name))
        assert board == before
        assert board.num_blocks == 4

    def test_clear_removes_blocks(self):
        board = Board()
        board.set_block(*parse_square("c3"))
        board.clear()
        assert board == Board()
        assert board.num_blocks == 0


class TestGameOver:
    def test_jump_limit(self):
        board = Board()
        cycle = ["a7-a5", "a1-a3", "a5-a7", "a3-a1"]
        make_moves(board, cycle * 6)
        assert board.num_jumps == 24
        assert not board.game_over()
        make_moves(board, ["a7-a5"])
        assert board.num_jumps == 25
        assert board.game_over()
        board.undo()
        assert not board.game_over()

    def test_no_pieces(self):
        rows = ["-------"] * 6 + ["r------"]
        board = Board.from_rows(rows)
        assert board.blue_pieces == 0
        assert board.game_over()
        assert board.winner() is RED

    def test_full_board(self):
        rows = ["rrrrrrr"] * 6 + ["bbbbbbb"]
        board = Board.from_rows(rows)
        assert board.game_over()
        assert board.winner() is RED

    def test_nobody_can_move(self):
        rows = ["xxxxxxb"] + ["xxxxxxx"] * 5 + ["rxxxxxx"]
        board = Board.from_rows(rows)
        assert not board.can_move(RED)
        assert not board.can_move(BLUE)
        assert board.game_over()
        assert board.winner() is None

    def test_full_game_by_capture(self):
        board = Board.from_rows(["-------", "---b---", "-------", "---r---",
                                 "-------", "-------", "-------"])
        assert not board.game_over()
        board.make_move(Move.parse("d4-d5"))
        assert board.blue_pieces == 0
        assert board.red_pieces == 3
        assert board.game_over()


class TestRowsAndObservers:
    def test_round_trip_rows(self):
        board = Board()
        make_moves(board, GAME2)
        rows = board.to_rows()
        assert rows[0][0] == "empty"
        assert rows[0][6] == "blue"
        copy = Board.from_rows(rows, board.whose_move, board.num_jumps)
        assert copy == board
        assert copy.num_moves == 0

    def test_bad_rows(self):
        with pytest.raises(IllegalMoveError):
            Board.from_rows(["-------"] * 6)
        with pytest.raises(IllegalMoveError):
            Board.from_rows(["-------"] * 6 + ["--q----"])
        with pytest.raises(IllegalMoveError):
            Board.from_rows(["-------"] * 7, whose_move="block")

    def test_observers(self):
        board = Board()
        seen = []
        board.add_observer(lambda b: seen.append(b.num_moves))
        make_moves(board, ["a7-b7"])
        board.undo()
        board.set_block(*parse_square("c3"))
        with pytest.raises(IllegalMoveError):
            board.make_move(Move.parse("a1-a2"))
        board.clear()
        assert seen == [1, 0, 0, 0]

    def test_copy_is_independent(self):
        board = Board()
        copy = board.copy()
        copy.make_move(Move.parse("a7-b7"))
        assert board.num_moves == 0
        assert at(board, "b7") is EMPTY
