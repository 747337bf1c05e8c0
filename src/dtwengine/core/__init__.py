"""DTW engine and the distance-measure interface it implements."""

from dtwengine.core.dtw import DTW, INFEASIBLE, InvalidStateError, is_infeasible
from dtwengine.core.measure import DistanceMeasure

__all__ = [
    "DTW",
    "INFEASIBLE",
    "InvalidStateError",
    "is_infeasible",
    "DistanceMeasure",
]
