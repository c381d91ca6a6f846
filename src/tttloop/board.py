"""
N x N grid board implementing the ``Board`` protocol.

States are immutable tuples, so ``apply`` returns a new state and never
touches the one it was given.
"""
from __future__ import annotations

import numbers
from typing import List, Tuple

from .game_basics import EMPTY, SYMBOLS, Move, get_winner, index_to_move, move_to_index
from .protocols import DRAW, IN_PROGRESS, PLAYERS, WIN, InvalidMove, Outcome

State = Tuple[int, ...]


def _is_int(v) -> bool:
    return isinstance(v, numbers.Integral) and not isinstance(v, bool)


class GridBoard:
    """Tic-tac-toe on a size x size grid; a full row, column or diagonal wins."""

    def __init__(self, size: int = 3):
        if size < 3:
            raise ValueError(f"Board size must be at least 3, got {size}")
        self.size = size

    def __repr__(self) -> str:
        return f"GridBoard(size={self.size})"

    def initial_state(self) -> State:
        return tuple([EMPTY] * (self.size * self.size))

    def _check_state(self, state: State) -> None:
        if len(state) != self.size * self.size:
            raise ValueError(f"State has {len(state)} cells, expected {self.size * self.size}")

    def _validate(self, state: State, move: Move, player: int) -> int:
        if not _is_int(player) or player not in PLAYERS:
            raise InvalidMove(move, player, "unknown player")
        if not isinstance(move, tuple) or len(move) != 2 or not all(_is_int(v) for v in move):
            raise InvalidMove(move, player, "move must be a (row, col) pair")
        r, c = move
        if not (0 <= r < self.size and 0 <= c < self.size):
            raise InvalidMove(move, player, "out of range")
        idx = move_to_index((r, c), self.size)
        if state[idx] != EMPTY:
            raise InvalidMove(move, player, "cell is occupied")
        if self.outcome(state).is_terminal:
            raise InvalidMove(move, player, "game is already over")
        return idx

    def apply(self, state: State, move: Move, player: int) -> State:
        self._check_state(state)
        idx = self._validate(state, move, player)
        lst = list(state)
        lst[idx] = player
        return tuple(lst)

    def outcome(self, state: State) -> Outcome:
        self._check_state(state)
        w = get_winner(state)
        if w != EMPTY:
            return Outcome(WIN, w)
        if EMPTY not in state:
            return Outcome(DRAW)
        return Outcome(IN_PROGRESS)

    def legal_moves(self, state: State) -> List[Move]:
        if self.outcome(state).is_terminal:
            return []
        return [index_to_move(i, self.size) for i, v in enumerate(state) if v == EMPTY]

    def render(self, state: State) -> str:
        self._check_state(state)
        rows = []
        for r in range(self.size):
            cells = state[r * self.size:(r + 1) * self.size]
            rows.append(" ".join(SYMBOLS[v] for v in cells))
        return "\n".join(rows)
