"""
Player capability and the concrete players shipped with the package.

- Players satisfy the Player protocol; the loop may also call an optional
  notify_invalid(move, error) when it re-prompts.
- ScriptedPlayer: replays a fixed list of moves (tests, CLI --x-moves).
- RandomPlayer: uniform over legal moves, numpy Generator for reproducibility.
- TacticalPlayer: win, else block, else fork, else random.
- SolverPlayer: perfect play on 3x3 via the minimax solver.
- ConsolePlayer: human input over a text prompt.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, List, Optional

import numpy as np

from .game_basics import SYMBOLS, Move, board_size, index_to_move, serialize_board
from .protocols import Board, InvalidMove, other_player
from .solver import solve_state
from .tactics import fork_moves, immediate_winning_moves


class ScriptExhausted(RuntimeError):
    pass


class ScriptedPlayer:
    """Plays the given moves in order, ignoring the state."""

    name = "Scripted"

    def __init__(self, moves: Iterable[Move]):
        self.moves: List[Move] = [tuple(m) for m in moves]
        self.position = 0
        self.rejections: List[InvalidMove] = []

    def choose_move(self, state, player: int) -> Move:
        if self.position >= len(self.moves):
            raise ScriptExhausted(f"scripted player {SYMBOLS.get(player, player)} has no moves left")
        mv = self.moves[self.position]
        self.position += 1
        return mv

    def notify_invalid(self, move, error: InvalidMove) -> None:
        self.rejections.append(error)


class RandomPlayer:
    """Picks a uniformly random legal move."""

    name = "Random"

    def __init__(self, board: Board, seed: Optional[int] = None):
        self.board = board
        self.rng = np.random.default_rng(seed)

    def _pick(self, options: List[Any]) -> Any:
        return options[int(self.rng.integers(len(options)))]

    def choose_move(self, state, player: int):
        legal = self.board.legal_moves(state)
        if not legal:
            raise RuntimeError("No legal moves available")
        return self._pick(legal)


class TacticalPlayer(RandomPlayer):
    """One-ply tactics on grid states: take a win, block a loss, play a fork."""

    name = "Tactics"

    def choose_move(self, state, player: int) -> Move:
        size = board_size(state)
        for candidates in (
            immediate_winning_moves(state, player),
            immediate_winning_moves(state, other_player(player)),
            fork_moves(state, player),
        ):
            if candidates:
                return index_to_move(self._pick(candidates), size)
        return super().choose_move(state, player)


class SolverPlayer:
    """Perfect play on the 3x3 board; smallest optimal index breaks ties."""

    name = "Solver"

    def __init__(self, board: Board):
        if getattr(board, "size", 3) != 3:
            raise ValueError("SolverPlayer only supports the 3x3 board")
        self.board = board

    def choose_move(self, state, player: int) -> Move:
        res = solve_state(tuple(state))
        if not res.optimal_moves:
            raise RuntimeError("No legal moves available")
        logging.debug("solver value=%s plies=%s optimal=%s",
                      res.value, res.plies_to_end, list(res.optimal_moves))
        return index_to_move(res.optimal_moves[0], 3)


_MOVE_RE = re.compile(r"^\s*(-?\d+)\s*[,\s]\s*(-?\d+)\s*$")


def parse_move(raw: str) -> Optional[Move]:
    """Parse "row col" or "row,col"; None if unparsable."""
    m = _MOVE_RE.match(raw)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


class ConsolePlayer:
    """Human player over a text prompt; legality is left to the board."""

    name = "Human"

    def __init__(
        self,
        board: Board,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], Any] = print,
    ):
        self.board = board
        self.input_fn = input_fn
        self.output_fn = output_fn

    def _show(self, state) -> None:
        render = getattr(self.board, "render", None)
        self.output_fn(render(state) if render else serialize_board(state))

    def choose_move(self, state, player: int) -> Move:
        self._show(state)
        while True:
            raw = self.input_fn(f"{SYMBOLS.get(player, player)} to move (row col): ")
            mv = parse_move(raw)
            if mv is not None:
                return mv
            self.output_fn("Could not read a move. Enter row and column, e.g. 1 2")

    def notify_invalid(self, move, error: InvalidMove) -> None:
        self.output_fn(f"Illegal move {move}: {error.reason}. Try again.")
