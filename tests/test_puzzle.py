import json

import pytest

from flow_search.errors import InvalidPuzzle
from flow_search.problems import PROBLEMS, load_problem, problem_puzzle
from flow_search.puzzle import Puzzle, load_puzzle, parse_board


def test_parse_board_claims_endpoints():
    grid = parse_board(" A . . . . \n C . . . . \n . . B . . \n . . C . . \n . . B . A \n")
    assert grid.is_ready()
    assert [(ep.color, ep.start, ep.end) for ep in grid.endpoints] == [
        ("A", 0, 24),
        ("C", 5, 17),
        ("B", 12, 22),
    ]


def test_rows_without_spaces_split_per_character():
    puzzle = Puzzle.from_flow_text("A.A\n...\nB.B")
    assert puzzle.size == 3
    assert puzzle.endpoints == {"A": ((0, 0), (0, 2)), "B": ((2, 0), (2, 2))}


def test_metadata_lines_are_kept_out_of_the_grid():
    puzzle = Puzzle.from_flow_text("# name: tiny\nA .\n. A\n")
    assert puzzle.meta["name"] == "tiny"
    assert puzzle.size == 2


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "No grid"),
        ("A . A\n. .\n. . .", "uniform row lengths"),
        ("A . A\n. . .", "square"),
        ("A . .\n. . .\n. . .", "exactly twice"),
        ("A A A\n. . .\n. . .", "exactly twice"),
        (". .\n. .", "at least one pair"),
        ("AB . AB\n. . .\n. . .", "unparseable"),
    ],
)
def test_malformed_boards_rejected(text, message):
    with pytest.raises(InvalidPuzzle, match=message):
        Puzzle.from_flow_text(text)


def test_from_endpoints_validates_coordinates():
    puzzle = Puzzle.from_endpoints(3, {"A": [[0, 0], [2, 2]]})
    assert puzzle.to_grid().endpoints[0].end == 8
    with pytest.raises(InvalidPuzzle, match="outside"):
        Puzzle.from_endpoints(3, {"A": [[0, 0], [3, 0]]})
    with pytest.raises(InvalidPuzzle, match="exactly two"):
        Puzzle.from_endpoints(3, {"A": [[0, 0]]})
    with pytest.raises(InvalidPuzzle, match="used by both"):
        Puzzle.from_endpoints(3, {"A": [[0, 0], [1, 1]], "B": [[1, 1], [2, 2]]})
    with pytest.raises(InvalidPuzzle, match="positive integer"):
        Puzzle.from_endpoints(0, {"A": [[0, 0], [1, 1]]})


def test_to_text_round_trips():
    puzzle = problem_puzzle(1)
    assert Puzzle.from_flow_text(puzzle.to_text()).endpoints == puzzle.endpoints


def test_load_json_and_text_files(tmp_path):
    text_path = tmp_path / "tiny.flow"
    text_path.write_text("A . .\n. . .\n. . A\n", encoding="utf-8")
    json_path = tmp_path / "tiny.json"
    json_path.write_text(json.dumps({"size": 3, "endpoints": {"A": [[0, 0], [2, 2]]}}), encoding="utf-8")
    board_path = tmp_path / "board.json"
    board_path.write_text(json.dumps({"board": ["A . .", ". . .", ". . A"]}), encoding="utf-8")

    assert str(load_puzzle(text_path)) == str(load_puzzle(json_path)) == str(load_puzzle(board_path))
    assert Puzzle.from_file(text_path).meta["source"] == str(text_path)


def test_bad_json_is_invalid_puzzle():
    with pytest.raises(InvalidPuzzle):
        Puzzle.from_json("{not json")
    with pytest.raises(InvalidPuzzle, match="board"):
        Puzzle.from_json(json.dumps({"size": 3}))


@pytest.mark.parametrize(
    "obj, message",
    [
        ({"size": 3, "endpoints": {"A": [["x", 0], [2, 2]]}}, "non-integer"),
        ({"size": 3, "endpoints": {"A": [[0.5, 0], [2, 2]]}}, "non-integer"),
        ({"size": 3, "endpoints": {"A": [[True, 0], [2, 2]]}}, "non-integer"),
        ({"size": 3, "endpoints": {"A": [[None, 0], [2, 2]]}}, "non-integer"),
        ({"size": 3, "endpoints": {"A": 5}}, "list of cells"),
        ({"size": 3, "endpoints": [[0, 0], [2, 2]]}, "map each label"),
        ({"size": "3", "endpoints": {"A": [[0, 0], [2, 2]]}}, "positive integer"),
        ({"board": 7}, "string or a list of rows"),
        ({"board": ["A . .", 3, ". . A"]}, "Board row"),
        ({"board": ["A .", ". A"], "meta": "tiny"}, "meta"),
    ],
)
def test_malformed_json_fields_are_invalid_puzzle(obj, message):
    with pytest.raises(InvalidPuzzle, match=message):
        Puzzle.from_json(json.dumps(obj))


def test_integral_float_coordinates_accepted():
    puzzle = Puzzle.from_json(json.dumps({"size": 3, "endpoints": {"A": [[0.0, 0], [2, 2.0]]}}))
    assert puzzle.endpoints == {"A": ((0, 0), (2, 2))}


def test_all_sample_problems_load():
    sizes = [load_problem(i).n for i in range(len(PROBLEMS))]
    assert sizes == [5, 6, 8, 9, 10, 9, 9, 9]
    with pytest.raises(IndexError):
        problem_puzzle(len(PROBLEMS))
