"""
Tactics and simple motifs: immediate wins/blocks and forks.
Teaching notes:
- Local motifs provide strong signals before any deep search.
- Works on flat boards of any square size; results are cell indices.
"""
from typing import List, Sequence

from .game_basics import EMPTY, get_winner


def immediate_winning_moves(board: Sequence[int], player: int) -> List[int]:
    wins: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if get_winner(b) == player:
            wins.append(i)
    return wins


def fork_moves(board: Sequence[int], player: int) -> List[int]:
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        b = list(board)
        b[i] = player
        if len(immediate_winning_moves(b, player)) >= 2:
            forks.append(i)
    return forks
