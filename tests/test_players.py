import pytest

from tttloop.board import GridBoard
from tttloop.game_basics import O, X
from tttloop.players import (
    ConsolePlayer,
    RandomPlayer,
    ScriptedPlayer,
    ScriptExhausted,
    SolverPlayer,
    TacticalPlayer,
    parse_move,
)
from tttloop.protocols import InvalidMove, Player


@pytest.fixture
def board():
    return GridBoard()


def test_all_players_satisfy_protocol(board):
    for p in (
        ScriptedPlayer([]),
        RandomPlayer(board),
        TacticalPlayer(board),
        SolverPlayer(board),
        ConsolePlayer(board, input_fn=lambda _: "0 0", output_fn=lambda _: None),
    ):
        assert isinstance(p, Player)


def test_scripted_player_replays_then_exhausts():
    p = ScriptedPlayer([[0, 0], (1, 1)])
    assert p.choose_move(None, X) == (0, 0)
    assert p.choose_move(None, X) == (1, 1)
    with pytest.raises(ScriptExhausted):
        p.choose_move(None, X)


def test_random_player_is_reproducible_and_legal(board):
    s = board.apply(board.initial_state(), (1, 1), X)
    a = [RandomPlayer(board, seed=7).choose_move(s, O) for _ in range(3)]
    b = [RandomPlayer(board, seed=7).choose_move(s, O) for _ in range(3)]
    assert a == b
    assert all(mv in board.legal_moves(s) for mv in a)


def test_random_player_without_moves_raises(board):
    full = (1, 1, 2, 2, 2, 1, 1, 2, 1)
    with pytest.raises(RuntimeError):
        RandomPlayer(board).choose_move(full, X)


def test_tactical_player_takes_win(board):
    s = (1, 1, 0, 2, 2, 0, 0, 0, 0)
    assert TacticalPlayer(board, seed=0).choose_move(s, X) == (0, 2)


def test_tactical_player_blocks(board):
    s = (1, 1, 0, 0, 2, 0, 0, 0, 0)
    assert TacticalPlayer(board, seed=0).choose_move(s, O) == (0, 2)


def test_tactical_player_on_bigger_board():
    board = GridBoard(4)
    s = tuple([1, 1, 1, 0] + [2, 2, 2, 0] + [0] * 8)
    assert TacticalPlayer(board, seed=3).choose_move(s, X) == (0, 3)


def test_solver_player_finds_win(board):
    s = (1, 1, 0, 0, 2, 0, 0, 2, 0)
    assert SolverPlayer(board).choose_move(s, X) == (0, 2)


def test_solver_player_rejects_large_board():
    with pytest.raises(ValueError):
        SolverPlayer(GridBoard(4))


@pytest.mark.parametrize("raw,expected", [("1 2", (1, 2)), ("1,2", (1, 2)), (" 0 , 0 ", (0, 0)), ("x", None), ("1", None)])
def test_parse_move(raw, expected):
    assert parse_move(raw) == expected


def test_console_player_reprompts_on_garbage(board):
    answers = iter(["nonsense", "2,1"])
    out = []
    p = ConsolePlayer(board, input_fn=lambda _: next(answers), output_fn=out.append)
    assert p.choose_move(board.initial_state(), X) == (2, 1)
    assert out[0] == ". . .\n. . .\n. . ."
    assert any("Could not read" in line for line in out)


def test_console_player_reports_rejection(board):
    out = []
    p = ConsolePlayer(board, input_fn=lambda _: "0 0", output_fn=out.append)
    p.notify_invalid((0, 0), InvalidMove((0, 0), X, "cell is occupied"))
    assert "cell is occupied" in out[-1]
