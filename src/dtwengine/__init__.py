"""Dynamic Time Warping distance with early abandoning and path recovery.

Computes unconstrained single-channel DTW with squared-Euclidean local
cost. With early abandoning enabled, a comparison stops as soon as it cannot
finish under a caller-supplied cutoff, which makes the engine cheap to call
inside a branch-and-bound nearest-neighbour search.

Quick start
-----------
>>> import dtwengine as dt
>>> dtw = dt.DTW()
>>> dtw.compute_distance([0, 0, 0], [1, 1, 1])
1.7320508075688772
>>> path = dtw.reconstruct_path()
>>> print(dt.format_path(path))
>>> dtw.compute_distance([0, 0, 0, 0], [10, 10, 10, 10], cutoff=1.0) == dt.INFEASIBLE
True

To see when comparisons are abandoned, enable logging::

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""

from dtwengine.core.dtw import DTW, INFEASIBLE, InvalidStateError, is_infeasible
from dtwengine.core.measure import DistanceMeasure
from dtwengine.io import load_alignment, load_params, save_alignment, save_params
from dtwengine.models import (
    AlignmentResult,
    DTWParams,
    LabeledSeries,
    WarpPath,
    WarpStep,
)
from dtwengine.viz import diagonal_route, format_cost_matrix, format_path, plot_cost_matrix

__all__ = [
    "DTW",
    "INFEASIBLE",
    "InvalidStateError",
    "is_infeasible",
    "DistanceMeasure",
    "AlignmentResult",
    "DTWParams",
    "LabeledSeries",
    "WarpPath",
    "WarpStep",
    "load_alignment",
    "load_params",
    "save_alignment",
    "save_params",
    "diagonal_route",
    "format_cost_matrix",
    "format_path",
    "plot_cost_matrix",
]

__version__ = "0.1.0"
