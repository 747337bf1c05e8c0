"""Capability interface for distance measures.

Any object with a ``compute_distance(first, second, cutoff)`` method can be
handed to code that searches for nearest neighbours with a shrinking cutoff;
:class:`~dtwengine.core.dtw.DTW` satisfies it structurally.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable


@runtime_checkable
class DistanceMeasure(Protocol):
    """A distance between two 1-D sequences, bounded by a cutoff."""

    def compute_distance(self, first, second, cutoff: float = math.inf) -> float:
        """Return the distance, or a sentinel larger than any distance if it
        exceeds *cutoff*."""
        ...
