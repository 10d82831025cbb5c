"""Abstract interfaces and state enums for the game layer.

UI front-ends depend on :class:`IGameController`, not on the concrete
controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.enums import Side
    from chessrules.core.position import Position


# ── Selection FSM states ─────────────────────────────────────────────────────


class SelectionPhase(IntEnum):
    """Finite-state-machine states of the square selection."""

    NO_SELECTION = auto()
    UNIT_SELECTED = auto()
    TARGET_SELECTED = auto()  # transient, while the step is evaluated


class SelectResult(IntEnum):
    """Outcome of a single :meth:`IGameController.select` call."""

    SOURCE_SELECTED = auto()
    EMPTY_SQUARE = auto()
    NOT_YOUR_TURN = auto()
    MOVED = auto()
    ILLEGAL_MOVE = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @property
    @abstractmethod
    def board(self) -> Board: ...

    @property
    @abstractmethod
    def current_turn(self) -> Side: ...

    @property
    @abstractmethod
    def phase(self) -> SelectionPhase: ...

    @abstractmethod
    def new_game(self) -> None:
        """Start over from the standard layout."""

    @abstractmethod
    def select(self, square: Position) -> SelectResult:
        """Select a source square, or a target square when a source is pending."""

    @abstractmethod
    def deselect(self) -> None:
        """Drop a pending source square without moving."""
