"""Data models for DTW computations.

``DTWParams`` holds persistent engine settings, ``WarpStep``/``WarpPath``
describe a reconstructed alignment, ``AlignmentResult`` is an owned snapshot
of one computation, and ``LabeledSeries`` adapts a labelled record (values
plus a class attribute) into a plain sequence.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class DTWParams:
    """Persistent DTW engine settings.

    Attributes:
        early_abandon: Prune cells and rows whose cost exceeds the cutoff.
        cutoff: Default cutoff, in distance units. ``inf`` disables pruning
            even when ``early_abandon`` is set.
    """

    early_abandon: bool = True
    cutoff: float = math.inf

    def __post_init__(self) -> None:
        self.early_abandon = bool(self.early_abandon)
        self.cutoff = float(self.cutoff)

    def validate(self) -> DTWParams:
        """Check the settings and return self for chaining."""
        if math.isnan(self.cutoff):
            raise ValueError(
                "cutoff must be a number, got NaN. Use math.inf to disable "
                "early abandoning."
            )
        if self.cutoff < 0:
            raise ValueError(
                f"cutoff must be non-negative, got {self.cutoff}. DTW "
                "distances are never negative, so every comparison would "
                "be abandoned."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (``inf`` cutoff -> None)."""
        return {
            "early_abandon": self.early_abandon,
            "cutoff": None if math.isinf(self.cutoff) else self.cutoff,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DTWParams:
        """Deserialize from a dict (e.g., loaded from JSON)."""
        cutoff = d.get("cutoff")
        return cls(
            early_abandon=d.get("early_abandon", True),
            cutoff=math.inf if cutoff is None else cutoff,
        )


class WarpStep(NamedTuple):
    """One cell of a warp path and the cumulative cost stored there."""

    i: int
    j: int
    cost: float


@dataclass
class WarpPath:
    """Minimum-cost warp path, ordered from the final cell back to (0, 0)."""

    steps: list[WarpStep]

    def __post_init__(self) -> None:
        self.steps = [WarpStep(int(i), int(j), float(c)) for i, j, c in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[WarpStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> WarpStep:
        return self.steps[index]

    @property
    def indices(self) -> np.ndarray:
        """Path coordinates as an ``(n_steps, 2)`` integer array."""
        if not self.steps:
            return np.empty((0, 2), dtype=np.intp)
        return np.array([(s.i, s.j) for s in self.steps], dtype=np.intp)

    @property
    def costs(self) -> np.ndarray:
        """Cumulative cost at each step."""
        return np.array([s.cost for s in self.steps], dtype=np.float64)

    def warp(self, first, second) -> tuple[np.ndarray, np.ndarray]:
        """Return both sequences resampled along the path, start to end.

        Args:
            first: The sequence indexed by ``i``.
            second: The sequence indexed by ``j``.

        Returns:
            ``(warped_first, warped_second)``, equal-length arrays.
        """
        idx = self.indices[::-1]
        first = np.asarray(first, dtype=np.float64).ravel()
        second = np.asarray(second, dtype=np.float64).ravel()
        return first[idx[:, 0]], second[idx[:, 1]]

    def to_dataframe(self) -> "pandas.DataFrame":
        """Convert the path to a pandas DataFrame.

        Returns:
            DataFrame with columns: i, j, cost.

        Raises:
            ImportError: If pandas is not installed.
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for to_dataframe(). "
                "Install it with: pip install pandas"
            )
        idx = self.indices
        return pd.DataFrame({
            "i": idx[:, 0],
            "j": idx[:, 1],
            "cost": self.costs,
        })


@dataclass
class AlignmentResult:
    """Snapshot of a single DTW computation.

    Unlike the engine's internal matrix, ``cost_matrix`` here is a private
    copy and stays valid after the engine is reused.
    """

    distance: float
    cost_matrix: np.ndarray
    params: DTWParams
    path: WarpPath | None = None

    def __post_init__(self) -> None:
        self.distance = float(self.distance)
        self.cost_matrix = np.asarray(self.cost_matrix, dtype=np.float64)
        if self.cost_matrix.ndim != 2:
            raise ValueError(
                f"cost_matrix must be 2-D, got shape {self.cost_matrix.shape}."
            )

    @property
    def abandoned(self) -> bool:
        """True if the computation was abandoned against its cutoff."""
        return self.distance == sys.float_info.max

    @property
    def shape(self) -> tuple[int, int]:
        """``(len(first), len(second))``."""
        return self.cost_matrix.shape

    def summary(self) -> str:
        """Return a human-readable summary of the alignment."""
        n, m = self.shape
        lines = [
            "DTW Alignment",
            f"  Sequence lengths: {n} x {m}",
        ]
        if self.abandoned:
            cutoff = self.params.cutoff
            lines.append(f"  Distance: abandoned (exceeds cutoff {cutoff:g})")
        else:
            lines.append(f"  Distance: {self.distance:.6g}")
        if self.path is not None:
            lines.append(f"  Path length: {len(self.path)} steps")
        lines.append(
            f"  Early abandon: {'on' if self.params.early_abandon else 'off'}"
        )
        return "\n".join(lines)

    def plot(self, show_path: bool = True) -> "matplotlib.figure.Figure":
        """Plot the cost matrix as a heat map.

        Args:
            show_path: Overlay the warp path when one is available.

        Returns:
            The figure object. Call ``plt.show()`` to display interactively.
        """
        from dtwengine.viz import plot_cost_matrix

        path = self.path if show_path else None
        return plot_cost_matrix(self.cost_matrix, path=path)


@dataclass
class LabeledSeries:
    """A labelled record: numeric attributes with an optional class attribute.

    Attributes:
        values: All attribute values of the record, class attribute included.
        class_index: Position of the class attribute in ``values``, or None
            if the record is unlabelled.
        name: Optional identifier.
    """

    values: np.ndarray
    class_index: int | None = None
    name: str = ""

    def __post_init__(self) -> None:
        self.values = np.asarray(self.values, dtype=np.float64).ravel()
        if self.class_index is not None:
            n = len(self.values)
            if not -n <= self.class_index < n:
                raise ValueError(
                    f"class_index {self.class_index} is out of range for a "
                    f"record with {n} attributes."
                )
            self.class_index = self.class_index % n

    @property
    def label(self) -> float | None:
        """Value of the class attribute, or None if unlabelled."""
        if self.class_index is None:
            return None
        return float(self.values[self.class_index])

    def to_sequence(self) -> np.ndarray:
        """Return the attribute values with the class attribute removed."""
        if self.class_index is None:
            return self.values.copy()
        return np.delete(self.values, self.class_index)
