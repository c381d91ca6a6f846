from __future__ import annotations

import argparse
import logging
from typing import Optional

from .board import GridBoard
from .config import load_settings
from .game import GameLoop, InvalidMovePolicy
from .game_basics import SYMBOLS, current_player, describe_outcome, deserialize_board, is_valid_state
from .players import (
    ConsolePlayer,
    RandomPlayer,
    ScriptedPlayer,
    ScriptExhausted,
    SolverPlayer,
    TacticalPlayer,
    parse_move,
)
from .protocols import InvalidMove
from .solver import solve_state
from .tactics import fork_moves, immediate_winning_moves

PLAYER_KINDS = ["human", "random", "tactics", "solver", "scripted"]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tttloop", description="Tic-tac-toe game loop CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Global seed for reproducibility")

    p_play = sub.add_parser("play", help="Play one game between two players")
    p_play.add_argument("--x", choices=PLAYER_KINDS, default="human", help="Player one (X, moves first)")
    p_play.add_argument("--o", choices=PLAYER_KINDS, default="tactics", help="Player two (O)")
    p_play.add_argument("--x-moves", default="", help='Moves for a scripted X, e.g. "0,0 1,1 2,2"')
    p_play.add_argument("--o-moves", default="", help="Moves for a scripted O")
    p_play.add_argument("--size", type=int, default=None, help="Board size N for an N x N grid (default: 3)")
    p_play.add_argument(
        "--on-invalid",
        choices=[pol.value for pol in InvalidMovePolicy],
        default=None,
        help="What to do with an illegal move: raise (end the game) or reprompt the same player",
    )
    p_play.add_argument(
        "--max-invalid", type=int, default=None, help="Consecutive illegal moves allowed with reprompt"
    )

    p_sol = sub.add_parser("solve", help="Solve a 3x3 board via perfect play from side-to-move")
    p_sol.add_argument("--board", required=True, help="Board string, e.g., 100020200 (0=empty,1=X,2=O)")

    p_tac = sub.add_parser("tactics", help="List immediate wins and forks for side-to-move")
    p_tac.add_argument("--board", required=True, help="Board string of N*N digits, e.g., 100020200")

    return p


def _set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    import random

    import numpy as np

    random.seed(seed)
    np.random.seed(seed)


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def parse_moves(raw: str) -> list:
    """Parse space-separated "row,col" pairs."""
    moves = []
    for token in raw.split():
        mv = parse_move(token)
        if mv is None:
            raise ValueError(f"Cannot parse move {token!r}; expected row,col")
        moves.append(mv)
    return moves


def make_player(kind: str, board: GridBoard, moves: str = "", seed: Optional[int] = None):
    if kind == "human":
        return ConsolePlayer(board)
    if kind == "random":
        return RandomPlayer(board, seed=seed)
    if kind == "tactics":
        return TacticalPlayer(board, seed=seed)
    if kind == "solver":
        return SolverPlayer(board)
    if kind == "scripted":
        return ScriptedPlayer(parse_moves(moves))
    raise ValueError(f"Unknown player kind: {kind}")


def _read_board(raw: str) -> Optional[list]:
    try:
        b = deserialize_board(raw)
    except ValueError as e:
        logging.error("Invalid board string: %s", e)
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _play(ns: argparse.Namespace, settings) -> int:
    seed = ns.seed if ns.seed is not None else settings.seed
    try:
        board = GridBoard(ns.size if ns.size is not None else settings.board_size)
        x_player = make_player(ns.x, board, ns.x_moves, seed)
        o_player = make_player(ns.o, board, ns.o_moves, None if seed is None else seed + 1)
        loop = GameLoop(
            board,
            x_player,
            o_player,
            on_invalid=ns.on_invalid or settings.on_invalid,
            max_invalid_attempts=ns.max_invalid if ns.max_invalid is not None else settings.max_invalid_attempts,
        )
    except ValueError as e:
        logging.error("%s", e)
        return 2
    logging.info("X=%s O=%s size=%d policy=%s", ns.x, ns.o, board.size, loop.on_invalid.value)
    try:
        result = loop.run()
    except InvalidMove as e:
        logging.error("Game aborted: %s", e)
        print(board.render(loop.state))
        return 2
    except ScriptExhausted as e:
        logging.error("Game aborted: %s", e)
        print(board.render(loop.state))
        return 2
    except EOFError:
        logging.error("Input closed before the game finished")
        return 2
    print(board.render(result.final_state))
    print(f"Result: {describe_outcome(result.outcome)} after {result.plies} plies")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tttloop"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        settings = load_settings()
    except ValueError as e:
        logging.error("%s", e)
        return 2
    _set_global_seed(ns.seed if ns.seed is not None else settings.seed)

    if ns.cmd == "play":
        return _play(ns, settings)

    if ns.cmd == "solve":
        b = _read_board(ns.board)
        if b is None:
            return 2
        if len(b) != 9:
            logging.error("Solver only handles 3x3 boards (9 digits).")
            return 2
        res = solve_state(tuple(b))
        print(f"value={res.value} plies={res.plies_to_end} optimal={list(res.optimal_moves)}")
        return 0

    if ns.cmd == "tactics":
        b = _read_board(ns.board)
        if b is None:
            return 2
        p = current_player(b)
        print(f"to_move={SYMBOLS[p]} wins={immediate_winning_moves(b, p)} forks={fork_moves(b, p)}")
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
