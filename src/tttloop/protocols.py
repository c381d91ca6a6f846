"""
Abstractions shared by the game loop and the concrete boards and players.

Nothing here knows about grids, marks or input devices: a board is anything
that can apply a move and report an outcome, a player is anything that can
choose a move. Player identities are plain ints; PLAYER_ONE moves first.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, runtime_checkable

PLAYER_ONE = 1
PLAYER_TWO = 2
PLAYERS = (PLAYER_ONE, PLAYER_TWO)

IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"


class InvalidMove(ValueError):
    """Raised by a board when a move cannot be applied."""

    def __init__(self, move, player: Optional[int], reason: str):
        super().__init__(f"invalid move {move!r} for player {player}: {reason}")
        self.move = move
        self.player = player
        self.reason = reason


class TooManyInvalidMoves(InvalidMove):
    pass


@dataclass(frozen=True)
class Outcome:
    status: str = IN_PROGRESS
    winner: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != IN_PROGRESS

    def __str__(self) -> str:
        if self.status == WIN:
            return f"win({self.winner})"
        return self.status


def other_player(player: int) -> int:
    return PLAYER_TWO if player == PLAYER_ONE else PLAYER_ONE


@runtime_checkable
class Board(Protocol):
    def initial_state(self) -> Any:
        ...

    def apply(self, state: Any, move: Any, player: int) -> Any:
        """Return the state after ``player`` plays ``move``; raise InvalidMove if illegal."""
        ...

    def outcome(self, state: Any) -> Outcome:
        ...

    def legal_moves(self, state: Any) -> List[Any]:
        ...


@runtime_checkable
class Player(Protocol):
    def choose_move(self, state: Any, player: int) -> Any:
        ...
