"""Dynamic Time Warping with squared-Euclidean local cost and early abandoning.

The cumulative cost of aligning ``first[:i+1]`` with ``second[:j+1]`` is kept
in a cost matrix that the engine owns between calls, so the optimal warp path
can be reconstructed (or the matrix inspected) after a distance computation.

With early abandoning enabled, cells whose cheapest predecessor already lies
above the cutoff are not filled, and the computation stops as soon as a whole
row is out of budget. The caller is then handed :data:`INFEASIBLE` instead of
a distance, which a nearest-neighbour search reads as "worse than the current
best".
"""

from __future__ import annotations

import logging
import math
import sys

import numpy as np
from numba import njit

from dtwengine.models import AlignmentResult, DTWParams, LabeledSeries, WarpPath, WarpStep

logger = logging.getLogger(__name__)

INFEASIBLE: float = sys.float_info.max
"""Returned instead of a distance when no warp path fits within the cutoff."""

_COMPLETED = -1


class InvalidStateError(RuntimeError):
    """The engine holds no completed cost matrix for the requested operation."""


def is_infeasible(distance: float) -> bool:
    """Return True if *distance* is the :data:`INFEASIBLE` sentinel."""
    return distance == INFEASIBLE


@njit(cache=True)
def _fill_cost_matrix(first, second, cutoff, early_abandon, D):
    """Fill ``D`` in place and return ``(distance, abandoned_row)``.

    ``abandoned_row`` is ``-1`` when the fill completed, otherwise the row at
    which the computation was abandoned (``len(first)`` when only the final
    cell exceeded the cutoff). Cells left unfilled by an abandon hold
    ``INFEASIBLE``.
    """
    M = first.shape[0]
    N = second.shape[0]

    seed = (first[0] - second[0]) ** 2
    if early_abandon and math.sqrt(seed) > cutoff:
        D[:, :] = INFEASIBLE
        D[0, 0] = seed
        return INFEASIBLE, 0
    D[0, 0] = seed

    for n in range(1, N):
        D[0, n] = D[0, n - 1] + (first[0] - second[n]) ** 2
    for m in range(1, M):
        D[m, 0] = D[m - 1, 0] + (first[m] - second[0]) ** 2

    for m in range(1, M):
        overflow = True
        for n in range(1, N):
            min_prev = min(D[m, n - 1], min(D[m - 1, n], D[m - 1, n - 1]))
            if early_abandon and math.sqrt(min_prev) > cutoff:
                D[m, n] = INFEASIBLE
            else:
                D[m, n] = min_prev + (first[m] - second[n]) ** 2
                overflow = False
        # a single-column matrix has no interior cells to prune
        if early_abandon and overflow and N > 1:
            D[m + 1:, 1:] = INFEASIBLE
            return INFEASIBLE, m

    distance = math.sqrt(D[M - 1, N - 1])
    if early_abandon and distance > cutoff:
        return INFEASIBLE, M
    return distance, _COMPLETED


def _as_sequence(values, name: str) -> np.ndarray:
    """Coerce *values* to a contiguous 1-D float64 array."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim == 0:
        raise ValueError(
            f"{name} must be a 1-D sequence of numbers, got a scalar. "
            f"Wrap single values in a list, e.g. [{float(arr)}]."
        )
    if arr.size == 0:
        raise ValueError(
            f"{name} is empty. DTW needs at least one value in each sequence."
        )
    if arr.ndim > 1:
        if arr.size != max(arr.shape):
            raise ValueError(
                f"{name} must be a single-channel (1-D) sequence, got shape "
                f"{arr.shape}. Compare each channel separately."
            )
        arr = arr.ravel()
    return np.ascontiguousarray(arr)


class DTW:
    """Unconstrained single-channel DTW engine with optional early abandoning.

    The engine keeps the cost matrix of its last computation. It is a
    single-writer object: every call to :meth:`compute_distance` rewrites the
    matrix, so an instance must not be shared between threads without
    external locking. Use :meth:`align` to get an independent snapshot.

    Parameters
    ----------
    early_abandon : bool
        Whether cells and rows above the cutoff are pruned (default True).
    cutoff : float
        Cutoff used by calls that do not pass one (default ``inf``).

    Examples
    --------
    >>> dtw = DTW()
    >>> dtw.compute_distance([1, 2, 3], [1, 2, 2, 3])
    0.0
    >>> [(s.i, s.j) for s in dtw.reconstruct_path()]
    [(2, 3), (1, 2), (1, 1), (0, 0)]
    """

    def __init__(self, early_abandon: bool = True, cutoff: float = math.inf) -> None:
        self._early_abandon = bool(early_abandon)
        self._cutoff = float(cutoff)
        self._cost_matrix: np.ndarray | None = None
        self._completed = False

    @classmethod
    def from_params(cls, params: DTWParams) -> DTW:
        """Create an engine configured from validated *params*."""
        params = params.validate()
        return cls(early_abandon=params.early_abandon, cutoff=params.cutoff)

    @property
    def cutoff(self) -> float:
        """Cutoff applied when a call does not pass one."""
        return self._cutoff

    @cutoff.setter
    def cutoff(self, value: float) -> None:
        self._cutoff = float(value)

    @property
    def early_abandon(self) -> bool:
        """Whether pruning against the cutoff is applied."""
        return self._early_abandon

    @early_abandon.setter
    def early_abandon(self, value: bool) -> None:
        self._early_abandon = bool(value)

    def compute_distance(self, first, second, cutoff: float | None = None) -> float:
        """Compute the DTW distance between two sequences.

        Parameters
        ----------
        first, second : array-like
            Non-empty 1-D numeric sequences; lengths may differ.
        cutoff : float or None
            Largest acceptable distance. None uses the engine's
            :attr:`cutoff` (``inf`` unless configured). Only used when
            early abandoning is enabled. A distance exactly equal to the
            cutoff is kept.

        Returns
        -------
        float
            ``sqrt`` of the minimum cumulative squared-difference cost, or
            :data:`INFEASIBLE` if the computation was abandoned.

        Raises
        ------
        ValueError
            If either sequence is empty or multi-channel.
        """
        first = _as_sequence(first, "first")
        second = _as_sequence(second, "second")
        cutoff = self._cutoff if cutoff is None else float(cutoff)

        shape = (first.shape[0], second.shape[0])
        if self._cost_matrix is None or self._cost_matrix.shape != shape:
            self._cost_matrix = np.empty(shape, dtype=np.float64)

        distance, abandoned_row = _fill_cost_matrix(
            first, second, cutoff, self._early_abandon, self._cost_matrix
        )
        self._completed = abandoned_row == _COMPLETED
        if not self._completed:
            logger.debug(
                "Abandoned %dx%d DTW at row %d (cutoff=%g)",
                shape[0], shape[1], abandoned_row, cutoff,
            )
        return float(distance)

    def distance_between(
        self,
        first: LabeledSeries,
        second: LabeledSeries,
        cutoff: float | None = None,
    ) -> float:
        """DTW distance between two labelled records, ignoring their labels."""
        return self.compute_distance(
            first.to_sequence(), second.to_sequence(), cutoff
        )

    def _require_completed(self, what: str) -> np.ndarray:
        if self._cost_matrix is None:
            raise InvalidStateError(
                f"Cannot {what}: no distance has been computed yet. "
                "Call compute_distance() first."
            )
        if not self._completed:
            raise InvalidStateError(
                f"Cannot {what}: the last computation was abandoned early and "
                "the cost matrix is only partially filled. Recompute with "
                "early_abandon=False or a larger cutoff."
            )
        return self._cost_matrix

    def reconstruct_path(self) -> WarpPath:
        """Trace the minimum-cost warp path back from the final cell.

        Predecessor ties are broken diagonal first, then up ``(i-1, j)``,
        then left ``(i, j-1)``. Steps are ordered from the final cell to
        ``(0, 0)``.

        Raises
        ------
        InvalidStateError
            If no computation has completed since the engine was created, or
            the last one was abandoned.
        """
        D = self._require_completed("reconstruct the warp path")
        i = D.shape[0] - 1
        j = D.shape[1] - 1
        steps = [WarpStep(i, j, float(D[i, j]))]

        while i > 0 or j > 0:
            if i > 0 and j > 0:
                diagonal = D[i - 1, j - 1]
                up = D[i - 1, j]
                left = D[i, j - 1]
                best = min(up, diagonal, left)
                if diagonal == best:
                    i -= 1
                    j -= 1
                elif up == best:
                    i -= 1
                else:
                    j -= 1
            elif j > 0:
                j -= 1
            else:
                i -= 1
            steps.append(WarpStep(i, j, float(D[i, j])))

        return WarpPath(steps)

    def get_cost_matrix(self) -> np.ndarray:
        """Return a read-only view of the last cost matrix.

        The view shares memory with the engine and changes on the next call
        to :meth:`compute_distance`. After an abandoned computation, cells
        that were never filled hold :data:`INFEASIBLE`.

        Raises
        ------
        InvalidStateError
            If no distance has been computed yet.
        """
        if self._cost_matrix is None:
            raise InvalidStateError(
                "No cost matrix available: call compute_distance() first."
            )
        view = self._cost_matrix.view()
        view.flags.writeable = False
        return view

    def align(self, first, second, cutoff: float | None = None) -> AlignmentResult:
        """Compute the distance and return an independent snapshot of it.

        The snapshot owns a copy of the cost matrix and, unless the
        computation was abandoned, the reconstructed warp path.
        """
        cutoff = self._cutoff if cutoff is None else float(cutoff)
        distance = self.compute_distance(first, second, cutoff)
        path = self.reconstruct_path() if self._completed else None
        return AlignmentResult(
            distance=distance,
            cost_matrix=self._cost_matrix.copy(),
            path=path,
            params=DTWParams(early_abandon=self._early_abandon, cutoff=cutoff),
        )

    def __repr__(self) -> str:
        return f"DTW(early_abandon={self._early_abandon}, cutoff={self._cutoff:g})"
