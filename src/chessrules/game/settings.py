"""User-configurable game settings."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Side


@dataclass
class GameSettings:
    """Settings applied by :meth:`GameController.new_game`."""

    # Side that moves first
    starting_side: Side = Side.WHITE

    # Rejected selections and moves are logged at INFO instead of DEBUG
    log_rejections: bool = True
