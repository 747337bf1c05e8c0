"""Human-readable views of a cost matrix and warp path."""

from __future__ import annotations

import numpy as np

from dtwengine.models import WarpPath


def format_cost_matrix(matrix: np.ndarray) -> str:
    """Render the cost matrix as a table, one line per row."""
    matrix = np.asarray(matrix, dtype=np.float64)
    lines = ["------------------ Distances Table ------------------"]
    for i, row in enumerate(matrix):
        cells = " ".join(repr(float(v)) for v in row)
        lines.append(f"Row ={i} = {cells}")
    lines.append("------------------ End ------------------")
    return "\n".join(lines)


def format_path(path: WarpPath) -> str:
    """Render the warp path as ``(i,j) = cost`` lines, final cell first."""
    return "".join(f"({s.i},{s.j}) = {s.cost!r}\n" for s in path)


def diagonal_route(matrix: np.ndarray) -> np.ndarray:
    """Cumulative costs along the unwarped diagonal, last cell first.

    For non-square matrices the diagonal stops at the shorter dimension.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    return np.diagonal(matrix)[::-1].copy()


def plot_cost_matrix(
    matrix: np.ndarray,
    path: WarpPath | None = None,
    ax: "matplotlib.axes.Axes | None" = None,
) -> "matplotlib.figure.Figure":
    """Plot the cost matrix as a heat map with an optional path overlay.

    Pruned cells (holding the infeasible sentinel) are masked out so they do
    not swamp the colour scale.

    Args:
        matrix: 2-D cost matrix, e.g. from ``DTW.get_cost_matrix()``.
        path: Warp path to draw on top of the matrix.
        ax: Axes to draw on. A new figure is created if None.

    Returns:
        The figure containing the plot.
    """
    import matplotlib.pyplot as plt

    matrix = np.asarray(matrix, dtype=np.float64)
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 5))
    else:
        fig = ax.figure

    masked = np.ma.masked_where(matrix >= np.finfo(np.float64).max, matrix)
    im = ax.imshow(masked, origin="lower", aspect="auto", cmap="viridis",
                   interpolation="nearest")
    fig.colorbar(im, ax=ax, label="Cumulative cost")

    if path is not None and len(path) > 0:
        idx = path.indices
        ax.plot(idx[:, 1], idx[:, 0], "w.-", linewidth=1.0, markersize=3,
                label=f"Warp path ({len(path)} steps)")
        ax.legend(loc="upper left")

    ax.set_xlabel("second (j)")
    ax.set_ylabel("first (i)")
    ax.set_title("DTW cost matrix")
    fig.tight_layout()
    return fig
