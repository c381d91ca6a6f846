"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Teaching notes:
- State is a tuple of size*size cells, row-major: 0=empty, 1=X, 2=O. X always starts.
- A move is a (row, col) pair; the board decides whether it is legal.
- A "ply" is a half-move (one player's turn).
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

from .protocols import PLAYER_ONE, PLAYER_TWO, WIN, Outcome

EMPTY = 0
X = PLAYER_ONE
O = PLAYER_TWO
SYMBOLS = {EMPTY: ".", X: "X", O: "O"}

Move = Tuple[int, int]


def describe_outcome(outcome: Outcome) -> str:
    if outcome.status == WIN:
        return f"win({SYMBOLS[outcome.winner]})"
    return outcome.status


@lru_cache(maxsize=None)
def win_patterns(size: int = 3) -> Tuple[Tuple[int, ...], ...]:
    """Rows, columns, then both diagonals as flat cell indices."""
    rows = [tuple(r * size + c for c in range(size)) for r in range(size)]
    cols = [tuple(r * size + c for r in range(size)) for c in range(size)]
    diag = tuple(i * size + i for i in range(size))
    anti = tuple(i * size + (size - 1 - i) for i in range(size))
    return tuple(rows + cols + [diag, anti])


def board_size(board: Sequence[int]) -> int:
    size = int(round(len(board) ** 0.5))
    if size * size != len(board):
        raise ValueError(f"Board of length {len(board)} is not square")
    return size


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> List[int]:
    raw = board_str.strip()
    if any(c not in "012" for c in raw):
        raise ValueError(f"Board string may only contain 0/1/2: {board_str!r}")
    board = [int(cell) for cell in raw]
    board_size(board)
    return board


def move_to_index(move: Move, size: int) -> int:
    r, c = move
    return r * size + c


def index_to_move(idx: int, size: int) -> Move:
    return divmod(idx, size)


def get_winner(board: Sequence[int]) -> int:
    for pattern in win_patterns(board_size(board)):
        v = board[pattern[0]]
        if v != EMPTY and all(board[i] == v for i in pattern):
            return v
    return EMPTY


def is_draw(board: Sequence[int]) -> bool:
    return EMPTY not in board and get_winner(board) == EMPTY


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def is_valid_state(board: Sequence[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False
    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in win_patterns(board_size(board)) if all(board[i] == p for i in pat))
    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O
