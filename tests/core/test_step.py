"""Tests for the condition-group evaluation and rollback protocol."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import PieceKind, Side
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.step import Step, StepResult

sq = Position.parse


class TestEvaluate:
    def test_no_condition(self, initial_board: Board) -> None:
        result = Step(True).evaluate(initial_board)
        assert result.valid
        assert result.group == 0

    def test_invalid(self, initial_board: Board) -> None:
        step = Step(False)
        step.add_cond_empty(sq("H2"))
        result = step.evaluate(initial_board)
        assert not result.valid
        assert result.group is None

    def test_base_invalid_ignores_later_groups(self, initial_board: Board) -> None:
        step = Step(False)
        step.add_cond_empty(sq("H2"))
        step.next_group()
        step.add_cond_empty(sq("D4"))
        assert step.evaluate(initial_board) == StepResult.invalid()

    def test_first_group_valid(self, initial_board: Board) -> None:
        step = Step(True)
        step.add_cond_empty(sq("D4"))
        step.next_group()
        step.add_cond_empty(sq("H2"))
        step.next_group()
        step.add_cond_empty(sq("D8"))
        assert step.evaluate(initial_board).group == 0

    def test_no_group_valid(self, initial_board: Board) -> None:
        step = Step(True)
        step.add_cond_empty(sq("H2"))
        step.next_group()
        step.add_cond_empty(sq("E1"))
        step.next_group()
        step.add_cond_empty(sq("D8"))
        result = step.evaluate(initial_board)
        assert not result.valid
        assert result.group is None

    def test_and_within_group(self, initial_board: Board) -> None:
        step = Step(True)
        # [Group 0:] H2 -> Pawn | A2 -> Pawn
        step.add_cond_empty(sq("H2"))
        step.add_cond_empty(sq("A2"))
        # [Group 1:] all empty
        step.next_group()
        step.add_cond_empty(sq("D4"))
        step.add_cond_empty(sq("H4"))
        step.add_cond_empty(sq("D4"))
        # [Group 2:] A2 -> Pawn
        step.next_group()
        step.add_cond_empty(sq("D4"))
        step.add_cond_empty(sq("H4"))
        step.add_cond_empty(sq("A2"))
        assert step.evaluate(initial_board).group == 1

    def test_leading_next_group_is_noop(self, initial_board: Board) -> None:
        step = Step(True)
        step.next_group()
        assert step.group == 0
        step.add_cond_empty(sq("D4"))
        step.add_cond_empty(sq("H2"))
        step.add_cond_empty(sq("E4"))
        step.next_group()
        assert step.group == 1
        step.add_cond_empty(sq("D4"))
        step.add_cond_empty(sq("H4"))
        step.add_cond_empty(sq("A4"))
        assert step.evaluate(initial_board).group == 1

    def test_trailing_empty_group_never_validates(self, initial_board: Board) -> None:
        step = Step(True)
        step.next_group()
        step.add_cond_empty(sq("D4"))
        step.add_cond_empty(sq("H2"))
        step.next_group()
        step.add_cond_empty(sq("D4"))
        step.add_cond_empty(sq("E2"))
        step.next_group()
        assert not step.evaluate(initial_board).valid

    def test_last_condition_valid(self, initial_board: Board) -> None:
        step = Step(True)
        # [Group 0:] B8 -> Black Knight, not an enemy of black
        step.add_cond_enemy(sq("B8"), Side.BLACK)
        # [Group 1:] B1 -> White Knight, own piece
        step.next_group()
        step.add_cond_enemy_or_empty(sq("B1"), Side.WHITE)
        # [Group 2:] F7 -> Pawn
        step.next_group()
        step.add_cond_empty(sq("F7"))
        # [Group 3:] E8 -> King
        step.next_group()
        step.add_cond_not_king(sq("E8"))
        # [Group 4:] H8 -> Rook, not moved
        step.next_group()
        step.add_cond_not_moved(sq("H8"))
        assert step.evaluate(initial_board).group == 4

    def test_first_match_wins_even_if_later_valid(self, initial_board: Board) -> None:
        step = Step(True)
        step.add_cond_enemy(sq("E7"), Side.WHITE)
        step.next_group()
        step.add_cond_empty(sq("E4"))
        assert step.evaluate(initial_board).group == 0

    def test_not_moved_passes_for_untracked_kind(self, initial_board: Board) -> None:
        step = Step(True)
        step.add_cond_not_moved(sq("B1"))
        assert step.evaluate(initial_board).valid

    def test_not_moved_fails_on_empty_square(self, initial_board: Board) -> None:
        step = Step(True)
        step.add_cond_not_moved(sq("E4"))
        assert not step.evaluate(initial_board).valid

    def test_own_rook(self, initial_board: Board) -> None:
        for name, side, expected in (
            ("H1", Side.WHITE, True),
            ("H8", Side.WHITE, False),
            ("G1", Side.WHITE, False),
            ("H4", Side.WHITE, False),
        ):
            step = Step(True)
            step.add_cond_own_rook(sq(name), side)
            assert step.evaluate(initial_board).valid is expected, name


class TestExecuteAndRollback:
    def test_only_winning_group_actions_run(self, board: Board) -> None:
        rook = Piece(PieceKind.ROOK, Side.WHITE)
        board[sq("A1")] = rook
        before = board.copy()

        step = Step(True)
        step.add_cond_enemy(sq("A1"), Side.WHITE)
        step.add_action_remove(sq("A1"))
        step.next_group()
        step.add_cond_empty(sq("A2"))
        step.add_action_move(sq("A1"), sq("A3"))

        result = step.evaluate(board)
        assert result.group == 1
        applied = result.execute(board)

        assert board[sq("A1")] is None
        assert board[sq("A3")] == Piece(PieceKind.ROOK, Side.WHITE, True)

        applied.rollback(board)
        assert board == before
        assert board[sq("A1")] == rook

    def test_execute_invalid_raises(self, board: Board) -> None:
        with pytest.raises(ValueError, match="invalid step"):
            StepResult.invalid().execute(board)

    def test_move_from_empty_square_is_noop(self, board: Board) -> None:
        step = Step(True)
        step.add_action_move(sq("C3"), sq("C4"))
        applied = step.evaluate(board).execute(board)
        assert applied.images == ()
        assert board == Board()

    def test_promote_records_pawn(self, board: Board) -> None:
        pawn = Piece(PieceKind.PAWN, Side.WHITE, True)
        board[sq("D8")] = pawn
        step = Step(True)
        step.add_action_promote(sq("D8"))
        applied = step.evaluate(board).execute(board)
        assert board[sq("D8")] == Piece(PieceKind.QUEEN, Side.WHITE)

        applied.rollback(board)
        assert board[sq("D8")] == pawn

    def test_promote_off_last_row_is_noop(self, board: Board) -> None:
        pawn = Piece(PieceKind.PAWN, Side.WHITE, True)
        board[sq("D7")] = pawn
        step = Step(True)
        step.add_action_promote(sq("D7"))
        applied = step.evaluate(board).execute(board)
        assert applied.images == ()
        assert board[sq("D7")] == pawn

    def test_rollback_restores_removed_piece(self, board: Board) -> None:
        victim = Piece(PieceKind.PAWN, Side.BLACK, True)
        board[sq("D5")] = victim
        step = Step(True)
        step.add_action_remove(sq("D5"))
        applied = step.evaluate(board).execute(board)
        assert board.is_empty(sq("D5"))
        applied.rollback(board)
        assert board[sq("D5")] == victim
