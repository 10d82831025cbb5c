"""Game state — board, turn, pending selection and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import Side
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.game.interfaces import SelectionPhase


@dataclass(frozen=True)
class MoveRecord:
    """A single committed step in the move history."""

    side: Side
    piece: Piece
    source: Position
    target: Position
    captured: Piece | None = None


@dataclass
class GameState:
    """Board plus turn and selection bookkeeping.

    This is a pure data/logic class: no callbacks, no logging.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Side = field(default=Side.WHITE, init=False)
    selected_source: Position | None = field(default=None, init=False)
    selected_target: Position | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, starting_side: Side = Side.WHITE) -> None:
        """Initialise (or reset) the game with a fresh board."""
        self.board = Board.initial()
        self.side_to_move = starting_side
        self.clear_selection()
        self.move_history.clear()

    # ── Selection ────────────────────────────────────────────────────────

    @property
    def phase(self) -> SelectionPhase:
        if self.selected_target is not None:
            return SelectionPhase.TARGET_SELECTED
        if self.selected_source is not None:
            return SelectionPhase.UNIT_SELECTED
        return SelectionPhase.NO_SELECTION

    def clear_selection(self) -> None:
        self.selected_source = None
        self.selected_target = None

    # ── Move application ─────────────────────────────────────────────────

    def apply_step(self, source: Position, target: Position) -> MoveRecord | None:
        """Attempt a step for the side to move.

        On success the turn passes to the other side and the history record
        is returned; otherwise nothing changes and ``None`` is returned.
        """
        piece = self.board[source]
        if piece is None or piece.side != self.side_to_move:
            return None

        enemies_before = dict(self.board.pieces(piece.side.opposite))
        if not self.board.attempt_step(source, target):
            return None
        enemies_after = dict(self.board.pieces(piece.side.opposite))

        captured = next(
            (p for pos, p in enemies_before.items() if pos not in enemies_after),
            None,
        )
        record = MoveRecord(piece.side, piece, source, target, captured)
        self.move_history.append(record)
        self.side_to_move = self.side_to_move.opposite
        return record

    @property
    def ply_count(self) -> int:
        return len(self.move_history)
