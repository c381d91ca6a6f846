"""tttloop package.

A two-player turn loop that only knows the Board and Player protocols,
plus an N x N tic-tac-toe board, a handful of players, a 3x3 solver and a
simple CLI.

Only the abstractions and the loop are exported here; concrete boards and
players live in ``tttloop.board`` and ``tttloop.players``.
"""

from .game import GameLoop, GameResult, InvalidMovePolicy, Phase
from .protocols import (
    PLAYER_ONE,
    PLAYER_TWO,
    Board,
    InvalidMove,
    Outcome,
    Player,
    TooManyInvalidMoves,
)

__all__ = [
    "Board",
    "Player",
    "Outcome",
    "InvalidMove",
    "TooManyInvalidMoves",
    "PLAYER_ONE",
    "PLAYER_TWO",
    "GameLoop",
    "GameResult",
    "InvalidMovePolicy",
    "Phase",
]
