from __future__ import annotations

from itertools import product
from pathlib import Path
from typing import Dict, List

from ..graph import Color, Grid

EMPTY_COLOR = "#f0f0f0"

_NAMED_COLORS: Dict[str, str] = {
    "A": "red",
    "B": "blue",
    "C": "green",
    "D": "pink",
    "E": "purple",
    "F": "gold",
    "G": "aqua",
    "H": "orange",
    "I": "magenta",
    "J": "indigo",
}


def color_set(steps: int = 5) -> List[str]:
    """`steps`**3 hex colors, evenly spaced per channel."""
    levels = [f"{(256 * i) // steps:02x}" for i in range(steps)]
    return [f"#{r}{g}{b}" for r, g, b in product(levels, repeat=3)]


def palette_for(colors: List[Color]) -> Dict[Color, str]:
    """Map labels to CSS colors: A-J get fixed names, everything else the spaced set."""
    spare = [c for c in color_set() if c not in {"#000000", "#cccccc"}]
    out: Dict[Color, str] = {}
    i = 0
    for color in colors:
        if color in _NAMED_COLORS:
            out[color] = _NAMED_COLORS[color]
        else:
            out[color] = spare[(i * 37) % len(spare)]
            i += 1
    return out


def build_plotly_figure(grid: Grid, *, title: str = "Flow Solver"):
    import plotly.graph_objects as go

    color_to_css = palette_for([ep.color for ep in grid.endpoints] or sorted({c.color for c in grid if c.color}))

    # Use a y-up coordinate system for nicer plots.
    def pos(node_id: int):
        cell = grid.cell(node_id)
        return float(cell.col), float(-cell.row)

    traces = []

    # Same-color adjacent cells are drawn as path segments.
    for cell in grid:
        if cell.color is None:
            continue
        for nb in cell.neighbors:
            if nb > cell.id and grid.color_of(nb) == cell.color:
                (x0, y0), (x1, y1) = pos(cell.id), pos(nb)
                traces.append(
                    go.Scatter(
                        x=[x0, x1],
                        y=[y0, y1],
                        mode="lines",
                        line=dict(width=10, color=color_to_css[cell.color]),
                        hoverinfo="none",
                        showlegend=False,
                    )
                )

    xs, ys, text, fill, size = [], [], [], [], []
    endpoints = grid.endpoint_nodes
    for cell in grid:
        x, y = pos(cell.id)
        xs.append(x)
        ys.append(y)
        bits = [f"id={cell.id}", f"row={cell.row}", f"col={cell.col}"]
        if cell.color is not None:
            bits.append(f"color={cell.color}")
        if cell.id in endpoints:
            bits.append("endpoint")
        text.append("<br>".join(bits))
        fill.append(color_to_css[cell.color] if cell.color is not None else EMPTY_COLOR)
        size.append(26 if cell.id in endpoints else 14)

    traces.append(
        go.Scatter(
            x=xs,
            y=ys,
            mode="markers",
            marker=dict(size=size, color=fill, symbol="square", line=dict(width=1, color="#999999")),
            text=text,
            hoverinfo="text",
            name="cells",
        )
    )

    fig = go.Figure(data=traces)
    fig.update_layout(
        title=title,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=40, b=0),
        showlegend=False,
    )
    return fig


def write_plotly_html(grid: Grid, *, out_path: str | Path, title: str = "Flow Solver") -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig = build_plotly_figure(grid, title=title)
    fig.write_html(str(out_path), include_plotlyjs="cdn", full_html=True)
    return out_path
