"""Resource resolver for waveparser packaged data.

Priority for data root:
  1. ``WAVEPARSER_DATA_ROOT`` env var (power-user override).
  2. Packaged data shipped inside the wheel (``waveparser/data/``).
"""

from __future__ import annotations

import os
from importlib.resources import files
from pathlib import Path
from typing import Optional

from waveparser.core.errors import ResourceError

_REQUIRED_SUBDIRS = ("schemas",)


def _has_required_subdirs(root: Path) -> bool:
    return all((root / d).is_dir() for d in _REQUIRED_SUBDIRS)


def _packaged_data_path() -> Optional[Path]:
    candidate = Path(str(files("waveparser") / "data"))
    if candidate.is_dir() and _has_required_subdirs(candidate):
        return candidate
    return None


def data_root() -> Path:
    """Return the directory containing schemas/.

    Raises ``ResourceError`` if no valid data root can be found.
    """
    env = os.environ.get("WAVEPARSER_DATA_ROOT")
    if env:
        p = Path(env).expanduser().resolve()
        if _has_required_subdirs(p):
            return p
        raise ResourceError(
            f"WAVEPARSER_DATA_ROOT={env!r} does not contain the required "
            f"subdirectories: {', '.join(_REQUIRED_SUBDIRS)}"
        )

    pkg = _packaged_data_path()
    if pkg is not None:
        return pkg

    raise ResourceError(
        "Cannot locate waveparser data files.  Set WAVEPARSER_DATA_ROOT or "
        "reinstall the package."
    )


def schemas_dir() -> Path:
    """Return the directory containing JSON schema files."""
    return data_root() / "schemas"
