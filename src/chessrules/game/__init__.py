"""Game management layer — controller, selection state machine, settings.

Quick start::

    from chessrules.core import Position
    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.select(Position.parse("E2"))
    ctrl.select(Position.parse("E4"))
"""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import IGameController, SelectionPhase, SelectResult
from chessrules.game.settings import GameSettings
from chessrules.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "IGameController",
    "SelectionPhase",
    "SelectResult",
    # Concrete
    "GameController",
    "GameEvents",
    "GameSettings",
    "GameState",
    "MoveRecord",
]
