import logging

from flow_search.cli import main


def test_solve_builtin_problem(capsys):
    assert main(["solve", "--problem", "0"]) == 0
    out = capsys.readouterr().out
    assert "Solved!" in out
    assert "colors=3" in out


def test_unsolvable_file_exits_one(tmp_path, capsys):
    path = tmp_path / "crossed.flow"
    path.write_text("A B\nB A\n", encoding="utf-8")
    assert main(["solve", str(path)]) == 1
    assert "Has no solution." in capsys.readouterr().out


def test_malformed_file_exits_two(tmp_path, capsys):
    path = tmp_path / "bad.flow"
    path.write_text("A . .\n. . .\n. . .\n", encoding="utf-8")
    assert main(["solve", str(path)]) == 2
    assert "exactly twice" in capsys.readouterr().out


def test_missing_puzzle_argument(capsys):
    assert main(["solve"]) == 2
    assert "--problem" in capsys.readouterr().out


def test_trace_logs_claims(tmp_path, caplog):
    path = tmp_path / "corner.flow"
    path.write_text("A . .\n. . .\n. . A\n", encoding="utf-8")
    with caplog.at_level(logging.DEBUG, logger="flow_search"):
        assert main(["solve", str(path), "--trace"]) == 0
    assert any("cell (1, 0) -> A" in r.getMessage() for r in caplog.records)


def test_list_problems(capsys):
    assert main(["problems"]) == 0
    out = capsys.readouterr().out
    assert "[0] 5x5, colors=3" in out
    assert "[7] 9x9" in out


def test_solve_writes_html(tmp_path, capsys):
    out_path = tmp_path / "solution.html"
    assert main(["solve", "--problem", "0", "--out", str(out_path)]) == 0
    assert out_path.exists()
    assert "Wrote solution visualization" in capsys.readouterr().out


def test_malformed_json_exits_two(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text('{"size": 3, "endpoints": {"A": [["x", 0], [2, 2]]}}', encoding="utf-8")
    assert main(["solve", str(path)]) == 2
    assert "non-integer" in capsys.readouterr().out
