"""JSON-based parameter persistence.

Engine settings are stored as JSON files under ``~/.dtwengine/``, one file
per named profile.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dtwengine.models import DTWParams

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".dtwengine"


def _config_dir() -> Path:
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return _CONFIG_DIR


def _param_path(name: str) -> Path:
    """Build the config file path for profile *name*."""
    return _config_dir() / f"DTW_params_{name}.json"


def save_params(params: DTWParams, name: str = "default") -> Path:
    """Save engine parameters to JSON.

    Args:
        params: Parameters to persist. Validated before writing.
        name: Profile name (e.g., ``'nn_search'``).

    Returns:
        Path to the saved JSON file.
    """
    params.validate()
    path = _param_path(name)
    path.write_text(
        json.dumps(params.to_dict(), indent=2)
    )
    logger.info("Saved DTW parameters '%s' to %s", name, path)
    return path


def load_params(name: str = "default") -> DTWParams | None:
    """Load engine parameters from JSON.

    Args:
        name: Profile name used when saving.

    Returns:
        Loaded parameters, or ``None`` if no config file exists.
    """
    path = _param_path(name)
    if not path.exists():
        return None
    d = json.loads(path.read_text())
    return DTWParams.from_dict(d).validate()


def list_saved_params() -> list[Path]:
    """List all saved parameter files."""
    config_dir = _config_dir()
    return sorted(
        config_dir.glob("DTW_params_*.json")
    )
