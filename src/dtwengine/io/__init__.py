"""I/O modules for persisting DTW parameters and alignments."""

from dtwengine.io.config import list_saved_params, load_params, save_params
from dtwengine.io.native import load_alignment, save_alignment

__all__ = [
    "save_params",
    "load_params",
    "list_saved_params",
    "save_alignment",
    "load_alignment",
]
