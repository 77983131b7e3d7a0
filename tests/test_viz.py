from flow_search.problems import load_problem
from flow_search.solver import solve
from flow_search.viz import build_plotly_figure, color_set, palette_for, write_plotly_html


def test_palette():
    assert len(color_set()) == 125
    assert color_set()[0] == "#000000" and color_set()[-1] == "#cccccc"
    colors = palette_for(["A", "J", "x", "y"])
    assert colors["A"] == "red" and colors["J"] == "indigo"
    assert colors["x"].startswith("#") and colors["x"] != colors["y"]


def test_figure_draws_cells_and_path_segments():
    grid = load_problem(0)
    before = build_plotly_figure(grid)
    assert len(before.data) == 1
    assert len(before.data[0].x) == 25

    assert solve(grid)
    after = build_plotly_figure(grid, title="solved")
    # one segment per same-colored adjacent pair, plus the cell markers
    segments = sum(len(path) - 1 for path in _paths(grid))
    assert len(after.data) == segments + 1


def test_write_html(tmp_path):
    out = write_plotly_html(load_problem(1), out_path=tmp_path / "nested" / "p1.html")
    assert out.exists()
    assert "plotly" in out.read_text(encoding="utf-8").lower()


def _paths(grid):
    for ep in grid.endpoints:
        yield [n for n, c in grid.claims().items() if c == ep.color]
