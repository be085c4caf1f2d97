import io
import json

import pytest

from rh.board import Board
from rh.cli import build_parser, main
from rh.path import validate_solution
from rh.rh_exceptions import InvariantViolation

from conftest import BOXED_IN, EXIT_BLOCKER, ONE_BLOCKER


@pytest.fixture
def board_file(tmp_path):
    def write(rows, name="board.txt"):
        path = tmp_path / name
        path.write_text("\n".join(rows) + "\n")
        return str(path)
    return write


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.board == "-"
    assert args.verbose is None
    assert args.size is None and args.exit_row is None


def test_solves_board_file(board_file, capsys):
    assert main([board_file(ONE_BLOCKER)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Initial board state:\n")
    assert "Solution step 3" in out


def test_prints_moves(board_file, capsys):
    assert main([board_file(ONE_BLOCKER), "--moves"]) == 0
    out = capsys.readouterr().out
    moves = json.loads(out[out.index("["):])
    assert moves == [
        {"name": "A", "direction": "up", "distance": 1},
        {"name": "X", "direction": "right", "distance": 1},
    ]


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("\n".join(ONE_BLOCKER)))
    assert main([]) == 0
    assert "Solution step 1" in capsys.readouterr().out


def test_unsolvable_exit_status(board_file, capsys):
    assert main([board_file(BOXED_IN)]) == 1
    assert capsys.readouterr().out.rstrip().endswith("Cannot find solution!")


def test_bad_input(board_file, tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert "Error:" in capsys.readouterr().err

    # Z is a single loose cell
    bad = board_file(["Z     ", "      ", "XX    ", "      ", "      ", "      "], name="bad.txt")
    assert main([bad]) == 2
    assert "at least 2" in capsys.readouterr().err

    assert main([bad, "--no-validate"]) == 0


def test_bad_config(board_file, capsys):
    assert main([board_file(ONE_BLOCKER), "--exit-row", "9"]) == 2
    assert "exit_row" in capsys.readouterr().err


def test_env_config(board_file, monkeypatch, capsys):
    monkeypatch.setenv("RH_PROGRESS_EVERY", "1")
    main([board_file(ONE_BLOCKER)])
    assert "...explored 1 board states" in capsys.readouterr().out


def test_options_for_other_boards(board_file, capsys):
    rows = ["    ", "RR A", "   A", "    "]
    assert main([board_file(rows), "--size", "4", "--exit-row", "1", "--target", "R", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "Exploring state 0" in out
    assert "Solution step 4" in out


def test_dataset_mode(tmp_path, capsys):
    grid = [[None if c == " " else c for c in row] for row in ONE_BLOCKER]
    boxed = [[None if c == " " else c for c in row] for row in BOXED_IN]
    src = tmp_path / "puzzles.json"
    src.write_text(json.dumps([
        {"name": 1, "exit": [3, 6], "min_num_moves": None, "board": grid},
        {"name": 2, "exit": [3, 6], "min_num_moves": None, "board": boxed},
    ]))
    out = tmp_path / "solved.json"

    assert main(["--dataset", str(src), "--output", str(out)]) == 1
    assert "Solved 1/2 puzzles" in capsys.readouterr().out

    saved = {p["name"]: p for p in json.loads(out.read_text())}
    assert saved[1]["min_num_moves"] == 2
    assert saved[1]["solution_moves"] == [
        {"name": "A", "direction": "up", "distance": 1},
        {"name": "X", "direction": "right", "distance": 1},
    ]
    assert saved[2]["min_num_moves"] is None
    assert saved[2]["solution_moves"] == []


def test_printed_moves_replay_on_the_board(board_file, capsys):
    assert main([board_file(EXIT_BLOCKER), "--moves"]) == 0
    out = capsys.readouterr().out
    moves = json.loads(out[out.index("["):])
    assert {"name": "B", "direction": "exit", "distance": 1} in moves
    assert moves[-1]["name"] == "X"


def test_moves_that_do_not_replay_are_an_error(board_file, monkeypatch):
    monkeypatch.setattr("rh.cli.validate_solution", lambda *a, **kw: (False, "INVALID_MOVE"))
    with pytest.raises(InvariantViolation, match="INVALID_MOVE"):
        main([board_file(ONE_BLOCKER), "--moves"])


def test_dataset_skips_solutions_that_do_not_replay(tmp_path, monkeypatch, capsys):
    grid = [[None if c == " " else c for c in row] for row in ONE_BLOCKER]
    src = tmp_path / "puzzles.json"
    src.write_text(json.dumps([{"name": 1, "exit": [3, 6], "board": grid}]))
    out = tmp_path / "solved.json"

    monkeypatch.setattr("rh.cli.validate_solution", lambda *a, **kw: (False, "UNSOLVED"))
    assert main(["--dataset", str(src), "--output", str(out)]) == 1
    captured = capsys.readouterr()
    assert "Puzzle 1 skipped" in captured.out and "UNSOLVED" in captured.out
    assert json.loads(out.read_text())[0]["solution_moves"] == []


def test_dataset_warns_about_missing_target(tmp_path, capsys):
    # Cars named the way generated datasets name them: R is the one to free.
    rows = [row.replace("X", "R") for row in ONE_BLOCKER]
    grid = [[None if c == " " else c for c in row] for row in rows]
    src = tmp_path / "puzzles.json"
    src.write_text(json.dumps([{"name": 7, "exit": [3, 6], "board": grid}]))
    out = tmp_path / "solved.json"

    assert main(["--dataset", str(src), "--output", str(out)]) == 1
    assert "Puzzle 7: target car X is not on the board (use --target)" in capsys.readouterr().out

    assert main(["--dataset", str(src), "--output", str(out), "--target", "R"]) == 0
    captured = capsys.readouterr()
    assert "not on the board" not in captured.out
    assert "Solved 1/1 puzzles" in captured.out
    saved = json.loads(out.read_text())[0]
    assert validate_solution(Board(rows), saved["solution_moves"], target="R") == (True, "SOLVED")
    assert "--target" in build_parser().format_help()
