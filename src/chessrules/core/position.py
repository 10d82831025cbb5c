"""Board coordinates and directional stepping helpers.

Grid layout (row-major, rank 8 first, as the board is drawn on screen):
    x: file index 0–7 (A–H)
    y: row index 0–7, row 0 is rank 8 and row 7 is rank 1

"Up" points toward rank 8, i.e. toward decreasing ``y``.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8

# (dx, dy) unit vectors in the eight ray directions
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, -1),
    (0, 1),
    (-1, 0),
    (1, 0),
    (-1, -1),
    (1, -1),
    (-1, 1),
    (1, 1),
)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, 1),
    (-1, 2),
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _clamp(value: int) -> int:
    return max(0, min(BOARD_SIZE - 1, value))


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate.

    The raw constructor accepts any integers so that displacements and
    unclamped steps can leave the board; use :meth:`of` or :meth:`parse`
    when the result must be a real square.
    """

    x: int
    y: int

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def of(cls, x: int, y: int) -> Position:
        """On-board position from grid coordinates."""
        pos = cls(x, y)
        if not pos.is_onboard():
            raise ValueError(f"Position not on board: ({x}, {y})")
        return pos

    @classmethod
    def parse(cls, name: str) -> Position:
        """Parse algebraic square text, e.g. ``"D5"`` or ``"d5"``."""
        if len(name) != 2 or not name.isascii() or not name.isprintable():
            raise ValueError(f"Invalid square name: {name!r}")
        x = ord(name[0].upper()) - ord("A")
        y = BOARD_SIZE - (ord(name[1]) - ord("0"))
        pos = cls(x, y)
        if not pos.is_onboard():
            raise ValueError(f"Invalid square name: {name!r}")
        return pos

    # ── Queries ──────────────────────────────────────────────────────────

    def is_onboard(self) -> bool:
        return 0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE

    @property
    def index(self) -> int:
        """Flat square index, row-major with rank 8 first (A8=0, H1=63)."""
        return self.y * BOARD_SIZE + self.x

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``"D5"``."""
        return f"{chr(ord('A') + self.x)}{BOARD_SIZE - self.y}"

    # ── Vector arithmetic ────────────────────────────────────────────────

    def __add__(self, other: object) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x - other.x, self.y - other.y)

    def abs(self) -> Position:
        """Component-wise absolute value."""
        return Position(abs(self.x), abs(self.y))

    __abs__ = abs

    def sum(self) -> int:
        """``x + y``; zero for the null displacement of an absolute offset."""
        return self.x + self.y

    # ── Stepping ─────────────────────────────────────────────────────────

    def step(self, dx: int, dy: int) -> Position:
        """Shift by ``(dx, dy)``; the result may be off the board."""
        return Position(self.x + dx, self.y + dy)

    def bounded_step(self, dx: int, dy: int) -> Position:
        """Shift by ``(dx, dy)``, saturating at the board edge."""
        return Position(_clamp(self.x + dx), _clamp(self.y + dy))

    def up(self) -> Position:
        """E.g. D4 -> D5"""
        return self.step(0, -1)

    def down(self) -> Position:
        """E.g. D4 -> D3"""
        return self.step(0, 1)

    def left(self) -> Position:
        """E.g. D4 -> C4"""
        return self.step(-1, 0)

    def right(self) -> Position:
        """E.g. D4 -> E4"""
        return self.step(1, 0)

    def up_left(self) -> Position:
        """E.g. D4 -> C5"""
        return self.step(-1, -1)

    def up_right(self) -> Position:
        """E.g. D4 -> E5"""
        return self.step(1, -1)

    def down_left(self) -> Position:
        """E.g. D4 -> C3"""
        return self.step(-1, 1)

    def down_right(self) -> Position:
        """E.g. D4 -> E3"""
        return self.step(1, 1)

    def bounded_up(self) -> Position:
        return self.bounded_step(0, -1)

    def bounded_down(self) -> Position:
        return self.bounded_step(0, 1)

    def bounded_left(self) -> Position:
        return self.bounded_step(-1, 0)

    def bounded_right(self) -> Position:
        return self.bounded_step(1, 0)

    def bounded_up_left(self) -> Position:
        return self.bounded_step(-1, -1)

    def bounded_up_right(self) -> Position:
        return self.bounded_step(1, -1)

    def bounded_down_left(self) -> Position:
        return self.bounded_step(-1, 1)

    def bounded_down_right(self) -> Position:
        return self.bounded_step(1, 1)

    def row_start(self) -> Position:
        """Same row, file A."""
        return Position(0, self.y)

    def row_end(self) -> Position:
        """Same row, file H."""
        return Position(BOARD_SIZE - 1, self.y)

    # ── Paths ────────────────────────────────────────────────────────────

    def to(self, other: Position) -> list[Position]:
        """Squares strictly between ``self`` and *other*.

        Empty unless the two lie on a common row, column or diagonal.
        """
        dx = other.x - self.x
        dy = other.y - self.y
        if dx == 0 and dy == 0:
            return []
        if dx != 0 and dy != 0 and abs(dx) != abs(dy):
            return []

        sx, sy = _sign(dx), _sign(dy)
        distance = max(abs(dx), abs(dy))
        return [Position(self.x + sx * i, self.y + sy * i) for i in range(1, distance)]

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.is_onboard():
            return self.name
        return f"({self.x}, {self.y})"
