"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Position

    board = Board.initial()
    board.attempt_step(Position.parse("E2"), Position.parse("E4"))
    print(board)
"""

from chessrules.core.board import Board
from chessrules.core.enums import ActionKind, ConditionTest, PieceKind, Side, StepOutcome
from chessrules.core.piece import Piece
from chessrules.core.position import BOARD_SIZE, DIRECTIONS, KNIGHT_OFFSETS, Position
from chessrules.core.rules import Rules
from chessrules.core.step import (
    Action,
    AppliedStep,
    Condition,
    Step,
    StepImage,
    StepResult,
)

__all__ = [
    # Enums
    "ActionKind",
    "ConditionTest",
    "PieceKind",
    "Side",
    "StepOutcome",
    # Coordinates
    "BOARD_SIZE",
    "DIRECTIONS",
    "KNIGHT_OFFSETS",
    "Position",
    # Domain objects
    "Board",
    "Piece",
    "Rules",
    # Evaluation protocol
    "Action",
    "AppliedStep",
    "Condition",
    "Step",
    "StepImage",
    "StepResult",
]
