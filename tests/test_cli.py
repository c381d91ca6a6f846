import subprocess
import sys
from pathlib import Path

import pytest

from tttloop.cli import main, parse_moves


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TTT_BOARD_SIZE", "TTT_INVALID_MOVE_POLICY", "TTT_MAX_INVALID_ATTEMPTS", "TTT_SEED"):
        monkeypatch.delenv(name, raising=False)


def test_parse_moves():
    assert parse_moves("0,0 1,1  2,2") == [(0, 0), (1, 1), (2, 2)]
    with pytest.raises(ValueError):
        parse_moves("0,0 bad")


def test_play_scripted_top_row(capsys):
    rc = main([
        "play", "--x", "scripted", "--o", "scripted",
        "--x-moves", "0,0 0,1 0,2", "--o-moves", "1,1 2,2",
    ])
    out = capsys.readouterr().out
    assert rc == 0
    assert "X X X\n. O .\n. . O" in out
    assert "Result: win(X) after 5 plies" in out


def test_play_invalid_move_raise_policy(capsys):
    rc = main([
        "play", "--x", "scripted", "--o", "scripted",
        "--x-moves", "0,0 0,1", "--o-moves", "0,0",
    ])
    assert rc == 2


def test_play_reprompt_policy_recovers(capsys):
    rc = main([
        "play", "--x", "scripted", "--o", "scripted", "--on-invalid", "reprompt",
        "--x-moves", "0,0 0,1 0,2", "--o-moves", "0,0 1,1 2,2",
    ])
    assert rc == 0
    assert "win(X)" in capsys.readouterr().out


def test_play_script_runs_out(capsys):
    rc = main(["play", "--x", "scripted", "--o", "scripted", "--x-moves", "0,0", "--o-moves", "1,1"])
    assert rc == 2


def test_play_solver_vs_solver_draws(capsys):
    rc = main(["play", "--x", "solver", "--o", "solver"])
    assert rc == 0
    assert "Result: draw after 9 plies" in capsys.readouterr().out


def test_play_random_on_bigger_board_with_seed(capsys):
    rc = main(["--seed", "3", "play", "--x", "random", "--o", "tactics", "--size", "4"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Result:" in out
    assert len(out.splitlines()[0].split()) == 4


def test_play_solver_rejects_big_board():
    assert main(["play", "--x", "solver", "--o", "random", "--size", "5"]) == 2


def test_play_uses_env_size(monkeypatch, capsys):
    monkeypatch.setenv("TTT_BOARD_SIZE", "4")
    rc = main(["--seed", "0", "play", "--x", "tactics", "--o", "tactics"])
    assert rc == 0
    assert len(capsys.readouterr().out.splitlines()[0].split()) == 4


def test_bad_env_is_reported(monkeypatch):
    monkeypatch.setenv("TTT_INVALID_MOVE_POLICY", "ignore")
    assert main(["play", "--x", "random", "--o", "random"]) == 2


def test_solve_and_tactics_commands(capsys):
    assert main(["solve", "--board", "110020000"]) == 0
    assert "value=1 plies=1 optimal=[2]" in capsys.readouterr().out
    assert main(["tactics", "--board", "100020001"]) == 0
    assert "to_move=O wins=[] forks=[]" in capsys.readouterr().out


@pytest.mark.parametrize("board", ["12", "111111111", "1200000000000000"])
def test_solve_rejects_bad_boards(board):
    assert main(["solve", "--board", board]) == 2


def test_cli_help_smoke(tmp_path: Path):
    exe = [sys.executable, "-m", "tttloop.cli"]
    for args in (["--help"], ["play", "--help"], ["solve", "--help"], ["tactics", "--help"]):
        r = subprocess.run(exe + args, cwd=tmp_path, capture_output=True, text=True)
        assert r.returncode == 0
        assert r.stdout or r.stderr
