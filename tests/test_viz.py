"""Tests for dtwengine.viz.

Plots use the non-interactive 'Agg' backend so no windows appear.
"""

import numpy as np
import pytest

from dtwengine.core.dtw import DTW, INFEASIBLE
from dtwengine.viz import diagonal_route, format_cost_matrix, format_path, plot_cost_matrix


@pytest.fixture
def solved_engine():
    engine = DTW()
    engine.compute_distance([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    return engine


class TestFormatting:
    def test_format_cost_matrix(self, solved_engine):
        text = format_cost_matrix(solved_engine.get_cost_matrix())
        lines = text.splitlines()
        assert lines[0].startswith("---")
        assert lines[1] == "Row =0 = 1.0 2.0 3.0"
        assert lines[3] == "Row =2 = 3.0 3.0 3.0"
        assert lines[-1].startswith("---")

    def test_format_path(self, solved_engine):
        text = format_path(solved_engine.reconstruct_path())
        assert text == "(2,2) = 3.0\n(1,1) = 2.0\n(0,0) = 1.0\n"

    def test_diagonal_route(self, solved_engine):
        route = diagonal_route(solved_engine.get_cost_matrix())
        np.testing.assert_array_equal(route, [3.0, 2.0, 1.0])

    def test_diagonal_route_non_square(self):
        engine = DTW()
        engine.compute_distance([5.0], [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(
            diagonal_route(engine.get_cost_matrix()), [16.0]
        )


class TestPlotCostMatrix:
    @pytest.fixture(autouse=True)
    def _agg_backend(self):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        yield
        plt.close("all")

    def test_plot_with_path(self, solved_engine):
        fig = plot_cost_matrix(
            solved_engine.get_cost_matrix(),
            path=solved_engine.reconstruct_path(),
        )
        ax = fig.axes[0]
        assert ax.get_title() == "DTW cost matrix"
        assert len(ax.lines) == 1

    def test_plot_masks_pruned_cells(self):
        engine = DTW()
        engine.compute_distance([0.0, 0.0, 0.0], [1.0, 1.0, 1.0], cutoff=1.2)
        matrix = engine.get_cost_matrix()
        assert matrix[1, 2] == INFEASIBLE
        fig = plot_cost_matrix(matrix)
        image = fig.axes[0].images[0]
        assert np.ma.is_masked(image.get_array())

    def test_alignment_result_plot(self):
        result = DTW().align([1.0, 2.0, 3.0], [1.0, 3.0])
        fig = result.plot()
        assert len(fig.axes[0].lines) == 1
