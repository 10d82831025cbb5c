"""Core enumerations for the chess rules domain."""

from __future__ import annotations

from enum import IntEnum


class Side(IntEnum):
    """Side owning a piece."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    @property
    def label(self) -> str:
        """Display label, e.g. ``"White"``."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label


class PieceKind(IntEnum):
    """Piece kinds, in rendering-id order."""

    PAWN = 0
    BISHOP = 1
    KNIGHT = 2
    ROOK = 3
    QUEEN = 4
    KING = 5

    @property
    def tracks_moved(self) -> bool:
        """Whether pieces of this kind carry a has-moved flag."""
        return self in (PieceKind.PAWN, PieceKind.ROOK, PieceKind.KING)


class ConditionTest(IntEnum):
    """Test applied to the occupant of one square during evaluation."""

    EMPTY = 0
    ENEMY = 1
    ENEMY_OR_EMPTY = 2
    NOT_KING = 3
    NOT_MOVED = 4
    OWN_ROOK = 5


class ActionKind(IntEnum):
    """Board mutation licensed by a condition group."""

    MOVE = 0
    REMOVE = 1
    PROMOTE = 2


class StepOutcome(IntEnum):
    """Result of a single step attempt."""

    ILLEGAL = 0
    SELF_CHECK = 1
    COMMITTED = 2
