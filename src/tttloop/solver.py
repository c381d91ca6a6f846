"""
Exact game-theoretic solver (minimax with memoization), from the side-to-move perspective.
Only the classic 3x3 board is solved; larger grids are far too big to enumerate.
Tie-break policy:
- Prefer win over draw over loss.
- Among wins/draws, prefer shorter distance (plies) to termination.
- Among losses, prefer longer distance (delay the loss).
"""
from functools import lru_cache
from typing import List, NamedTuple, Optional, Tuple

from .game_basics import EMPTY, current_player, get_winner, is_draw


class Solution(NamedTuple):
    value: int
    plies_to_end: int
    optimal_moves: Tuple[int, ...]


def legal_moves(board_t: tuple) -> List[int]:
    return [i for i, v in enumerate(board_t) if v == EMPTY]


def apply_move_t(board_t: tuple, idx: int, player: int) -> tuple:
    lst = list(board_t)
    lst[idx] = player
    return tuple(lst)


def better_of(a: int, b: int) -> int:
    order = {+1: 2, 0: 1, -1: 0}
    return a if order[a] > order[b] else b


def solve_state(board_t: tuple) -> Solution:
    board_t = tuple(board_t)
    if len(board_t) != 9:
        raise ValueError(f"Solver only handles 3x3 boards, got {len(board_t)} cells")
    return _solve(board_t)


@lru_cache(maxsize=None)
def _solve(board_t: tuple) -> Solution:
    if get_winner(board_t) != EMPTY:
        # the side to move has just been beaten
        return Solution(-1, 0, ())
    if is_draw(board_t):
        return Solution(0, 0, ())
    p = current_player(board_t)
    best_val: Optional[int] = None
    best_dtt: Optional[int] = None
    best_moves: List[int] = []
    for mv in legal_moves(board_t):
        child = _solve(apply_move_t(board_t, mv, p))
        q = -child.value
        dtt = 1 + child.plies_to_end
        if best_val is None or (better_of(q, best_val) == q and q != best_val):
            best_val = q
            best_dtt = dtt
            best_moves = [mv]
        elif q == best_val:
            # losses are delayed, wins and draws hurried
            if (q == -1 and dtt > best_dtt) or (q != -1 and dtt < best_dtt):
                best_dtt = dtt
                best_moves = [mv]
            elif dtt == best_dtt:
                best_moves.append(mv)
    return Solution(best_val, best_dtt, tuple(sorted(best_moves)))
