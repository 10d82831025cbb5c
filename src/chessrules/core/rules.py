"""Per-kind step construction and attack geometry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import PieceKind, Side
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.step import Step

if TYPE_CHECKING:
    from chessrules.core.board import Board


def _is_diagonal(delta: Position) -> bool:
    return delta.x == delta.y and delta.sum() != 0


def _is_orthogonal(delta: Position) -> bool:
    return (delta.x == 0 or delta.y == 0) and delta.sum() != 0


def _is_knight_jump(delta: Position) -> bool:
    return (delta.x, delta.y) in ((1, 2), (2, 1))


class Rules:
    """Static rule set turning a proposed move into a candidate :class:`Step`.

    All deltas below are ``target - source``; the ``abs()`` of a delta is
    what the geometry tests look at, except where direction matters (pawns,
    castling).
    """

    @staticmethod
    def candidate_step(board: Board, source: Position, target: Position) -> Step:
        """Build the candidate step for the piece standing on *source*."""
        piece = board[source]
        if piece is None:
            raise ValueError(f"No piece on {source}")

        kind = piece.kind
        if kind == PieceKind.PAWN:
            return Rules._step_pawn(piece, source, target)
        if kind == PieceKind.KNIGHT:
            return Rules._step_knight(piece, source, target)
        if kind == PieceKind.BISHOP:
            return Rules._step_slider(piece, source, target, diagonal=True)
        if kind == PieceKind.ROOK:
            return Rules._step_slider(piece, source, target, orthogonal=True)
        if kind == PieceKind.QUEEN:
            return Rules._step_slider(
                piece, source, target, diagonal=True, orthogonal=True
            )
        return Rules._step_king(piece, source, target)

    @staticmethod
    def threatens(piece: Piece, at: Position, target: Position) -> bool:
        """Could *piece* standing on *at* capture on *target*?

        Geometry only; callers are responsible for the path being clear.
        Pawns threaten one square diagonally forward for their own side.
        """
        delta = (target - at).abs()
        kind = piece.kind

        if kind == PieceKind.PAWN:
            forward = 1 if piece.side == Side.BLACK else -1
            return delta.x == 1 and target.y - at.y == forward
        if kind == PieceKind.KNIGHT:
            return _is_knight_jump(delta)
        if kind == PieceKind.BISHOP:
            return _is_diagonal(delta)
        if kind == PieceKind.ROOK:
            return _is_orthogonal(delta)
        if kind == PieceKind.QUEEN:
            return _is_diagonal(delta) or _is_orthogonal(delta)
        return delta.x <= 1 and delta.y <= 1 and delta.sum() != 0

    # ── Per-kind steps ───────────────────────────────────────────────────

    @staticmethod
    def _step_pawn(piece: Piece, source: Position, target: Position) -> Step:
        step = Step()
        side = piece.side
        delta = target - source

        # Black advances down the grid, white up; "behind" is the square
        # between the target and the pawn's start, seen from the mover.
        if side == Side.BLACK and delta.y > 0:
            behind = target.bounded_up()
        elif side == Side.WHITE and delta.y < 0:
            behind = target.bounded_down()
        else:
            return step

        delta = delta.abs()
        if delta.x == 0:
            if delta.y == 1:
                step.set_valid()
                step.add_cond_empty(target)
                Rules._add_pawn_move(step, source, target)
            elif delta.y == 2 and not piece.moved:
                step.set_valid()
                step.add_cond_empty(behind)
                step.add_cond_empty(target)
                Rules._add_pawn_move(step, source, target)
        elif delta.x == 1 and delta.y == 1:
            step.set_valid()

            # Capture
            step.add_cond_enemy(target, side)
            step.add_cond_not_king(target)
            Rules._add_pawn_move(step, source, target)

            # En passant
            step.next_group()
            step.add_cond_enemy(behind, side)
            step.add_cond_not_king(behind)
            step.add_cond_empty(target)
            step.add_action_remove(behind)
            Rules._add_pawn_move(step, source, target)

        return step

    @staticmethod
    def _add_pawn_move(step: Step, source: Position, target: Position) -> None:
        step.add_action_move(source, target)
        step.add_action_promote(target)

    @staticmethod
    def _step_knight(piece: Piece, source: Position, target: Position) -> Step:
        step = Step()
        if _is_knight_jump((target - source).abs()):
            step.set_valid()
            step.add_cond_not_king(target)
            step.add_cond_enemy_or_empty(target, piece.side)
            step.add_action_move(source, target)
        return step

    @staticmethod
    def _step_slider(
        piece: Piece,
        source: Position,
        target: Position,
        *,
        diagonal: bool = False,
        orthogonal: bool = False,
    ) -> Step:
        step = Step()
        delta = (target - source).abs()
        if not (
            (diagonal and _is_diagonal(delta)) or (orthogonal and _is_orthogonal(delta))
        ):
            return step

        step.set_valid()
        for pos in source.to(target):
            step.add_cond_empty(pos)
        step.add_cond_not_king(target)
        step.add_cond_enemy_or_empty(target, piece.side)
        step.add_action_move(source, target)
        return step

    @staticmethod
    def _step_king(piece: Piece, source: Position, target: Position) -> Step:
        step = Step()
        side = piece.side
        delta = target - source

        if abs(delta.x) <= 1 and abs(delta.y) <= 1:
            step.set_valid()
            step.add_cond_enemy_or_empty(target, side)
            step.add_cond_not_king(target)
            step.add_action_move(source, target)
        elif delta.y == 0 and abs(delta.x) == 2 and not piece.moved:
            # Castling, e.g. E1 -> C1 or E1 -> G1
            if delta.x < 0:
                rook_home = target.row_start()
                rook_target = target.bounded_right()
            else:
                rook_home = target.row_end()
                rook_target = target.bounded_left()

            step.set_valid()
            for pos in source.to(rook_home):
                step.add_cond_empty(pos)
            step.add_cond_own_rook(rook_home, side)
            step.add_cond_not_moved(rook_home)

            step.add_action_move(source, target)
            step.add_action_move(rook_home, rook_target)

        return step
