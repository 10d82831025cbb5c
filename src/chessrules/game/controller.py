"""GameController — turn order and square selection on top of the board.

Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import Side
from chessrules.core.position import Position
from chessrules.game.interfaces import IGameController, SelectionPhase, SelectResult
from chessrules.game.settings import GameSettings
from chessrules.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
TurnCallback = Callable[[Side], None]
SelectionCallback = Callable[[SelectionPhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_turn_changed: list[TurnCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Two-click move entry: first a piece of the side to move, then a target.

    Thread-safety: one controller owns one board; calls must come from a
    single thread (the UI thread).
    """

    __slots__ = ("_state", "_settings", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = GameState()
        self._state.setup(self._settings.starting_side)
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def current_turn(self) -> Side:
        return self._state.side_to_move

    @property
    def phase(self) -> SelectionPhase:
        return self._state.phase

    @property
    def selected_source(self) -> Position | None:
        return self._state.selected_source

    @property
    def selected_target(self) -> Position | None:
        return self._state.selected_target

    @property
    def move_history(self) -> list[MoveRecord]:
        return self._state.move_history

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self) -> None:
        self._state = GameState()
        self._state.setup(self._settings.starting_side)
        self._emit_selection()
        self._emit_turn()

    def select(self, square: Position) -> SelectResult:
        state = self._state

        if state.selected_source is None:
            piece = state.board[square]
            if piece is None:
                self._reject("Can't move with an empty square: %s", square)
                return SelectResult.EMPTY_SQUARE
            if piece.side != state.side_to_move:
                self._reject("Not your turn: %s belongs to %s", square, piece.side)
                return SelectResult.NOT_YOUR_TURN
            state.selected_source = square
            self._emit_selection()
            return SelectResult.SOURCE_SELECTED

        source = state.selected_source
        state.selected_target = square
        self._emit_selection()

        record = state.apply_step(source, square)
        state.clear_selection()
        self._emit_selection()

        if record is None:
            self._reject("Can't move %s -> %s", source, square)
            return SelectResult.ILLEGAL_MOVE

        _LOGGER.info("%s moves next", state.side_to_move)
        self._emit_move(record)
        self._emit_turn()
        return SelectResult.MOVED

    def deselect(self) -> None:
        if self._state.phase == SelectionPhase.NO_SELECTION:
            return
        self._state.clear_selection()
        self._emit_selection()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _reject(self, msg: str, *args: object) -> None:
        level = logging.INFO if self._settings.log_rejections else logging.DEBUG
        _LOGGER.log(level, msg, *args)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_turn(self) -> None:
        for cb in self.events.on_turn_changed:
            cb(self._state.side_to_move)

    def _emit_selection(self) -> None:
        phase = self._state.phase
        for cb in self.events.on_selection_changed:
            cb(phase)
