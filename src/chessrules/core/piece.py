"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import PieceKind, Side

_FEN_CHARS: dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.BISHOP: "b",
    PieceKind.KNIGHT: "n",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}

_UNICODE: dict[tuple[Side, PieceKind], str] = {
    (Side.WHITE, PieceKind.PAWN): "♙",
    (Side.WHITE, PieceKind.BISHOP): "♗",
    (Side.WHITE, PieceKind.KNIGHT): "♘",
    (Side.WHITE, PieceKind.ROOK): "♖",
    (Side.WHITE, PieceKind.QUEEN): "♕",
    (Side.WHITE, PieceKind.KING): "♔",
    (Side.BLACK, PieceKind.PAWN): "♟",
    (Side.BLACK, PieceKind.BISHOP): "♝",
    (Side.BLACK, PieceKind.KNIGHT): "♞",
    (Side.BLACK, PieceKind.ROOK): "♜",
    (Side.BLACK, PieceKind.QUEEN): "♛",
    (Side.BLACK, PieceKind.KING): "♚",
}

_SIDE_SUFFIX: dict[Side, str] = {Side.BLACK: "b", Side.WHITE: "w"}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``moved`` is only meaningful for pawns, rooks and kings; the other kinds
    always report ``False``.
    """

    kind: PieceKind
    side: Side
    moved: bool = False

    def __post_init__(self) -> None:
        if self.moved and not self.kind.tracks_moved:
            object.__setattr__(self, "moved", False)

    # ── Identity ─────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        """Human-readable kind name, e.g. ``"Knight"``."""
        return self.kind.name.capitalize()

    @property
    def id(self) -> int:
        """Rendering id: 0–5 for black pieces, 6–11 for white pieces."""
        return int(self.side) * len(PieceKind) + int(self.kind)

    @property
    def id_str(self) -> str:
        """Rendering key, e.g. ``"knight_w"``."""
        return f"{self.kind.name.lower()}_{_SIDE_SUFFIX[self.side]}"

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.side, self.kind)]

    def same_kind(self, other: Piece) -> bool:
        """Kind equality, ignoring side and moved flag."""
        return self.kind == other.kind

    @property
    def tracks_moved(self) -> bool:
        return self.kind.tracks_moved

    # ── Derived values ───────────────────────────────────────────────────

    def mark_moved(self) -> Piece:
        """Copy with the moved flag set (unchanged for untracked kinds)."""
        if not self.tracks_moved or self.moved:
            return self
        return replace(self, moved=True)

    def retype(self, kind: PieceKind) -> Piece:
        """Copy with a different kind, keeping side and moved flag."""
        return Piece(kind, self.side, self.moved)

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        char = _FEN_CHARS[self.kind]
        return char.upper() if self.side == Side.WHITE else char
