"""HDF5 storage for alignment results.

Keeps the cost matrix as a compressed dataset, the warp path as index and
cost datasets, and the engine parameters as a JSON attribute.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np

from dtwengine.models import AlignmentResult, DTWParams, WarpPath, WarpStep

logger = logging.getLogger(__name__)


def save_alignment(path: str | Path, result: AlignmentResult) -> None:
    """Save an alignment result to HDF5.

    Parameters
    ----------
    path : str or Path
        Output file path (typically with ``.h5`` extension).
    result : AlignmentResult
        The alignment to save, with or without a warp path.
    """
    import h5py

    path = Path(path)

    with h5py.File(path, "w") as f:
        f.attrs["distance"] = result.distance
        f.attrs["params"] = json.dumps(result.params.to_dict())

        f.create_dataset(
            "cost_matrix",
            data=result.cost_matrix,
            compression="gzip",
            compression_opts=4,
        )

        if result.path is not None:
            pg = f.create_group("path")
            pg.create_dataset("indices", data=result.path.indices.astype(np.int64))
            pg.create_dataset("costs", data=result.path.costs)

    logger.info("Saved %dx%d alignment to %s", *result.shape, path)


def load_alignment(path: str | Path) -> AlignmentResult:
    """Load an alignment result from HDF5.

    Parameters
    ----------
    path : str or Path
        Path to the ``.h5`` file.

    Returns
    -------
    AlignmentResult
        The stored alignment, including its warp path if one was saved.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    import h5py

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Alignment file not found: {path}")

    with h5py.File(path, "r") as f:
        distance = float(f.attrs["distance"])
        params = DTWParams.from_dict(json.loads(f.attrs["params"]))
        cost_matrix = np.asarray(f["cost_matrix"], dtype=np.float64)

        warp_path = None
        if "path" in f:
            indices = np.asarray(f["path"]["indices"], dtype=np.int64)
            costs = np.asarray(f["path"]["costs"], dtype=np.float64)
            warp_path = WarpPath([
                WarpStep(int(i), int(j), float(c))
                for (i, j), c in zip(indices, costs)
            ])

    return AlignmentResult(
        distance=distance,
        cost_matrix=cost_matrix,
        params=params,
        path=warp_path,
    )
