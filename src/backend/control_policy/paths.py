from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

from .config import default_module_paths
from .errors import PathNotFoundError

logger = logging.getLogger("control_policy.paths")


def resolve_path(filename: str, search_paths: Optional[Sequence[str]] = None) -> str:
    """
    Return the absolute path of the first ``<search_path>/<filename>`` that exists.

    An empty or missing ``search_paths`` falls back to the configured module
    paths. Absolute filenames are only checked for existence.
    """
    if not search_paths:
        search_paths = default_module_paths()

    if os.path.isabs(filename):
        logger.debug("Searching path %s", filename)
        if os.path.exists(filename):
            return filename
        raise PathNotFoundError(filename, [])

    for search_path in search_paths:
        candidate = os.path.join(search_path, filename)
        logger.debug("Searching path %s", candidate)
        if os.path.exists(candidate):
            return os.path.abspath(candidate)

    raise PathNotFoundError(filename, [str(p) for p in search_paths])
