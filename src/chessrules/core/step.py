"""Move evaluation protocol: conditions, actions and rollback images.

A step moves through three phases, each produced by an explicit call:

    Step          -- conditions and actions are declared      (build)
    StepResult    -- conditions checked against a board       (evaluate)
    AppliedStep   -- winning group's actions ran; pre-images  (execute)

Conditions sharing a group id are combined with AND, groups with OR.  The
first fully satisfied group, in declaration order, wins and only the actions
tagged with that group are executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import ActionKind, ConditionTest, PieceKind, Side
from chessrules.core.piece import Piece
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board


@dataclass(frozen=True, slots=True)
class Condition:
    """Test on the occupant of one square.

    ``side`` is the moving side; required by the enemy and own-rook tests.
    """

    group: int
    position: Position
    test: ConditionTest
    side: Side | None = None

    def holds(self, board: Board) -> bool:
        piece = board[self.position]
        test = self.test

        if test == ConditionTest.EMPTY:
            return piece is None
        if test == ConditionTest.NOT_KING:
            return piece is None or piece.kind != PieceKind.KING
        if test == ConditionTest.NOT_MOVED:
            return piece is not None and not piece.moved

        side = self._mover()
        if test == ConditionTest.ENEMY:
            return piece is not None and piece.side != side
        if test == ConditionTest.ENEMY_OR_EMPTY:
            return piece is None or piece.side != side
        if test == ConditionTest.OWN_ROOK:
            return (
                piece is not None
                and piece.kind == PieceKind.ROOK
                and piece.side == side
            )
        raise ValueError(f"Unknown condition test: {test!r}")

    def _mover(self) -> Side:
        if self.side is None:
            raise ValueError(f"{self.test.name} condition needs a side")
        return self.side


@dataclass(frozen=True, slots=True)
class StepImage:
    """Pre-image of one square, recorded before it is overwritten."""

    position: Position
    piece: Piece | None


@dataclass(frozen=True, slots=True)
class Action:
    """Board mutation, executed only when its group validates."""

    group: int
    kind: ActionKind
    target: Position
    source: Position | None = None

    def execute(self, board: Board) -> list[StepImage]:
        """Mutate *board* and return the pre-images of touched squares."""
        if self.kind == ActionKind.MOVE:
            assert self.source is not None
            piece = board[self.source]
            if piece is None:
                return []
            images = [
                StepImage(self.source, piece),
                StepImage(self.target, board[self.target]),
            ]
            board[self.source] = None
            board[self.target] = piece.mark_moved()
            return images

        if self.kind == ActionKind.REMOVE:
            image = StepImage(self.target, board[self.target])
            board[self.target] = None
            return [image]

        previous = board[self.target]
        if not board.promote(self.target):
            return []
        return [StepImage(self.target, previous)]


class Step:
    """Candidate step under construction (condition phase)."""

    __slots__ = ("valid", "_group", "_conditions", "_actions")

    def __init__(self, valid: bool = False) -> None:
        self.valid = valid
        self._group = 0
        self._conditions: list[Condition] = []
        self._actions: list[Action] = []

    @property
    def group(self) -> int:
        """Id of the group currently receiving conditions and actions."""
        return self._group

    @property
    def conditions(self) -> tuple[Condition, ...]:
        return tuple(self._conditions)

    @property
    def actions(self) -> tuple[Action, ...]:
        return tuple(self._actions)

    def set_valid(self, valid: bool = True) -> None:
        self.valid = valid

    def next_group(self) -> None:
        """Open a new OR-group; no-op while the current group is empty."""
        if self._conditions and self._conditions[-1].group == self._group:
            self._group += 1

    # ── Conditions ───────────────────────────────────────────────────────

    def _add_condition(
        self, pos: Position, test: ConditionTest, side: Side | None = None
    ) -> None:
        self._conditions.append(Condition(self._group, pos, test, side))

    def add_cond_empty(self, pos: Position) -> None:
        self._add_condition(pos, ConditionTest.EMPTY)

    def add_cond_enemy(self, pos: Position, side: Side) -> None:
        self._add_condition(pos, ConditionTest.ENEMY, side)

    def add_cond_enemy_or_empty(self, pos: Position, side: Side) -> None:
        self._add_condition(pos, ConditionTest.ENEMY_OR_EMPTY, side)

    def add_cond_not_king(self, pos: Position) -> None:
        self._add_condition(pos, ConditionTest.NOT_KING)

    def add_cond_not_moved(self, pos: Position) -> None:
        self._add_condition(pos, ConditionTest.NOT_MOVED)

    def add_cond_own_rook(self, pos: Position, side: Side) -> None:
        """*pos* must hold a rook belonging to *side*."""
        self._add_condition(pos, ConditionTest.OWN_ROOK, side)

    # ── Actions ──────────────────────────────────────────────────────────

    def add_action_move(self, source: Position, target: Position) -> None:
        self._actions.append(Action(self._group, ActionKind.MOVE, target, source))

    def add_action_remove(self, pos: Position) -> None:
        self._actions.append(Action(self._group, ActionKind.REMOVE, pos))

    def add_action_promote(self, pos: Position) -> None:
        self._actions.append(Action(self._group, ActionKind.PROMOTE, pos))

    # ── Evaluation ───────────────────────────────────────────────────────

    def evaluate(self, board: Board) -> StepResult:
        """Check the condition groups against *board*."""
        if not self.valid:
            return StepResult.invalid()
        if not self._conditions:
            return StepResult(True, 0, self._actions_for(0))

        groups: dict[int, list[Condition]] = {}
        for condition in self._conditions:
            groups.setdefault(condition.group, []).append(condition)

        for group_id, conditions in groups.items():
            if all(condition.holds(board) for condition in conditions):
                return StepResult(True, group_id, self._actions_for(group_id))
        return StepResult.invalid()

    def _actions_for(self, group_id: int) -> tuple[Action, ...]:
        return tuple(a for a in self._actions if a.group == group_id)


@dataclass(frozen=True, slots=True)
class StepResult:
    """Evaluated step: which group (if any) validated."""

    valid: bool
    group: int | None = None
    actions: tuple[Action, ...] = ()

    @classmethod
    def invalid(cls) -> StepResult:
        return cls(False)

    def execute(self, board: Board) -> AppliedStep:
        """Run the winning group's actions, in declaration order."""
        if not self.valid:
            raise ValueError("Cannot execute an invalid step")
        images: list[StepImage] = []
        for action in self.actions:
            images.extend(action.execute(board))
        return AppliedStep(tuple(images))


@dataclass(frozen=True, slots=True)
class AppliedStep:
    """Executed step holding the pre-images needed to undo it."""

    images: tuple[StepImage, ...] = ()

    def rollback(self, board: Board) -> None:
        """Restore every touched square, replaying pre-images in reverse."""
        for image in reversed(self.images):
            board[image.position] = image.piece
