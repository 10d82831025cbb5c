"""Board - piece placement on an 8x8 grid and the step engine."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from chessrules.core.enums import PieceKind, Side, StepOutcome
from chessrules.core.piece import Piece
from chessrules.core.position import BOARD_SIZE, DIRECTIONS, KNIGHT_OFFSETS, Position
from chessrules.core.rules import Rules
from chessrules.core.step import AppliedStep

_LOGGER = logging.getLogger(__name__)

_SQUARE_COUNT = BOARD_SIZE * BOARD_SIZE

_BACK_ROW: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _checked(pos: Position) -> Position:
    if not pos.is_onboard():
        raise ValueError(f"Position not on board: {pos}")
    return pos


class Board:
    """Mutable 64-square board with a king-position cache.

    Squares are stored row-major with rank 8 first, matching
    :attr:`Position.index`.  Every write goes through ``__setitem__``,
    which keeps the king cache equal to the grid.
    """

    __slots__ = ("_squares", "_king_positions")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * _SQUARE_COUNT
        # [side] -> king position cache (None if king missing).
        self._king_positions: list[Position | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._squares[_checked(pos).index]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        idx = _checked(pos).index
        old_piece = self._squares[idx]
        if (
            old_piece is not None
            and old_piece.kind == PieceKind.KING
            and self._king_positions[int(old_piece.side)] == pos
        ):
            self._king_positions[int(old_piece.side)] = None

        self._squares[idx] = piece

        if piece is not None and piece.kind == PieceKind.KING:
            self._king_positions[int(piece.side)] = pos

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    def promote(self, pos: Position) -> bool:
        """Turn a pawn on the first or last row into a queen.

        Returns whether a promotion happened.
        """
        piece = self[pos]
        if pos.y not in (0, BOARD_SIZE - 1):
            return False
        if piece is None or piece.kind != PieceKind.PAWN:
            return False
        self[pos] = piece.retype(PieceKind.QUEEN)
        return True

    # -- Query helpers ------------------------------------------------------

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Read-only grid, row-major, rank 8 first."""
        return tuple(
            tuple(self._squares[row * BOARD_SIZE : (row + 1) * BOARD_SIZE])
            for row in range(BOARD_SIZE)
        )

    def __iter__(self) -> Iterator[tuple[Position, Piece | None]]:
        for idx, piece in enumerate(self._squares):
            yield Position(idx % BOARD_SIZE, idx // BOARD_SIZE), piece

    def pieces(self, side: Side) -> list[tuple[Position, Piece]]:
        """All ``(position, piece)`` pairs owned by *side*."""
        return [
            (pos, piece) for pos, piece in self if piece is not None and piece.side == side
        ]

    def has_king(self, side: Side) -> bool:
        return self._king_positions[int(side)] is not None

    def king_position(self, side: Side) -> Position:
        """Return the cached king position for *side*."""
        pos = self._king_positions[int(side)]
        if pos is None:
            raise ValueError(f"No {side.name} king on board")
        return pos

    # -- Attack detection ---------------------------------------------------

    def is_attacked(self, pos: Position, by_side: Side) -> bool:
        """Could any piece of *by_side* capture on *pos* next ply?

        Rays are walked outward to the first occupied square; knights are
        probed at their eight offsets.  Each enemy candidate is then checked
        against its own attack geometry.
        """
        candidates: list[Position] = []

        for dx, dy in DIRECTIONS:
            probe = pos.step(dx, dy)
            while probe.is_onboard():
                if self._squares[probe.index] is not None:
                    candidates.append(probe)
                    break
                probe = probe.step(dx, dy)

        for dx, dy in KNIGHT_OFFSETS:
            probe = pos.step(dx, dy)
            if not probe.is_onboard():
                continue
            piece = self._squares[probe.index]
            if piece is not None and piece.kind == PieceKind.KNIGHT:
                candidates.append(probe)

        for at in candidates:
            piece = self._squares[at.index]
            assert piece is not None
            if piece.side == by_side and Rules.threatens(piece, at, pos):
                return True
        return False

    def is_in_check(self, side: Side) -> bool:
        """Is *side*'s king attacked?  ``False`` when *side* has no king."""
        if not self.has_king(side):
            return False
        return self.is_attacked(self.king_position(side), side.opposite)

    # -- Step engine --------------------------------------------------------

    def try_step(self, source: Position, target: Position) -> StepOutcome:
        """Attempt to move the piece on *source* to *target*.

        The board is only changed when the outcome is
        :attr:`StepOutcome.COMMITTED`; illegal steps and steps that leave the
        mover in check leave every square as it was.
        """
        applied, outcome = self._apply(source, target)
        if outcome == StepOutcome.SELF_CHECK:
            assert applied is not None
            applied.rollback(self)
            _LOGGER.debug("Can't move into check: %s -> %s", source, target)
        return outcome

    def attempt_step(self, source: Position, target: Position) -> bool:
        """``True`` and board mutated iff the step is fully legal."""
        return self.try_step(source, target) == StepOutcome.COMMITTED

    def legal_targets(self, source: Position) -> list[Position]:
        """Every target the piece on *source* may legally step to."""
        targets: list[Position] = []
        for idx in range(_SQUARE_COUNT):
            target = Position(idx % BOARD_SIZE, idx // BOARD_SIZE)
            applied, outcome = self._apply(source, target)
            if applied is not None:
                applied.rollback(self)
            if outcome == StepOutcome.COMMITTED:
                targets.append(target)
        return targets

    def _apply(
        self, source: Position, target: Position
    ) -> tuple[AppliedStep | None, StepOutcome]:
        """Evaluate and execute a step, without rolling it back.

        The caller owns the returned :class:`AppliedStep` and must roll it
        back unless the outcome is ``COMMITTED``.
        """
        _checked(target)
        piece = self[source]
        if piece is None:
            raise ValueError(f"No piece on {source}")

        result = Rules.candidate_step(self, source, target).evaluate(self)
        if not result.valid:
            _LOGGER.debug("Can't move %s %s -> %s", piece.name, source, target)
            return None, StepOutcome.ILLEGAL

        applied = result.execute(self)
        if self.is_in_check(piece.side):
            return applied, StepOutcome.SELF_CHECK
        return applied, StepOutcome.COMMITTED

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_positions = self._king_positions.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * _SQUARE_COUNT
        self._king_positions = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        last = BOARD_SIZE - 1
        for x, kind in enumerate(_BACK_ROW):
            b[Position(x, 0)] = Piece(kind, Side.BLACK)
            b[Position(x, 1)] = Piece(PieceKind.PAWN, Side.BLACK)
            b[Position(x, last - 1)] = Piece(PieceKind.PAWN, Side.WHITE)
            b[Position(x, last)] = Piece(kind, Side.WHITE)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        lines: list[str] = []
        for row_idx, row in enumerate(self.rows()):
            cells = [str(p) if p else "." for p in row]
            lines.append(f"{BOARD_SIZE - row_idx} {' '.join(cells)}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
